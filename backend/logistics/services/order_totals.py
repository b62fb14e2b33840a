"""
订单汇总 - 每次明细变动后按明细全量重算

运费合计   = Σ total_transport_cost
已付       = Σ paid_amount
未付       = 运费合计 − 已付
总件数     = Σ quantity
总重量     = Σ weight（仅 kg 明细）
总体积     = Σ volume（仅 m³ 明细）
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.numbers import ZERO, to_decimal, to_int
from logistics.models.enums import VolumeType
from logistics.models.order import Order
from logistics.models.order_item import OrderItem

logger = logging.getLogger(__name__)


@dataclass
class OrderTotals:
    total_amount: Decimal = ZERO
    paid_amount: Decimal = ZERO
    unpaid_amount: Decimal = ZERO
    total_quantity: int = 0
    total_weight: Decimal = ZERO
    total_volume: Decimal = ZERO


def compute_order_totals(items: Iterable[OrderItem]) -> OrderTotals:
    """纯计算，不碰数据库"""
    totals = OrderTotals()
    for item in items:
        totals.total_amount += to_decimal(item.total_transport_cost)
        totals.paid_amount += to_decimal(item.paid_amount)
        totals.total_quantity += to_int(item.quantity)
        if item.volume_type == VolumeType.KG.value:
            totals.total_weight += to_decimal(item.weight)
        elif item.volume_type == VolumeType.CUBIC_METER.value:
            totals.total_volume += to_decimal(item.volume)
    totals.unpaid_amount = totals.total_amount - totals.paid_amount
    return totals


async def recompute_order_totals(db: AsyncSession, order_id: Optional[int]) -> Optional[Order]:
    """重算订单汇总，订单不存在时什么都不做"""
    if not order_id:
        return None
    order = await db.get(Order, order_id)
    if not order:
        return None

    result = await db.execute(select(OrderItem).where(OrderItem.order_id == order_id))
    totals = compute_order_totals(result.scalars().all())

    order.total_amount = totals.total_amount
    order.paid_amount = totals.paid_amount
    order.unpaid_amount = totals.unpaid_amount
    order.total_quantity = totals.total_quantity
    order.total_weight = totals.total_weight
    order.total_volume = totals.total_volume
    await db.flush()

    logger.debug(
        f"订单 {order_id} 汇总: 运费={totals.total_amount}, 已付={totals.paid_amount}, "
        f"未付={totals.unpaid_amount}, 件数={totals.total_quantity}"
    )
    return order
