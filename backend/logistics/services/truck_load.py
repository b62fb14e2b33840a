"""
货车装载 - 按车上明细全量重算

current_volume = Σ volume（cubic / m³ 明细）
current_weight = Σ volume（kg 明细，volume 栏里记的是重量）+ Σ weight（全部明细）
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.numbers import ZERO, to_decimal
from logistics.models.enums import VolumeType
from logistics.models.order_item import OrderItem
from logistics.models.truck import Truck

logger = logging.getLogger(__name__)

VOLUME_TYPES = (VolumeType.CUBIC.value, VolumeType.CUBIC_METER.value)


def compute_truck_load(items: Iterable[OrderItem]) -> Tuple[Decimal, Decimal]:
    """返回 (weight, volume)"""
    weight = ZERO
    volume = ZERO
    for item in items:
        item_volume = to_decimal(item.volume)
        if item.volume_type in VOLUME_TYPES:
            volume += item_volume
        elif item.volume_type == VolumeType.KG.value:
            weight += item_volume
        weight += to_decimal(item.weight)
    return weight, volume


async def recompute_truck_load(db: AsyncSession, truck_id: Optional[int]) -> Optional[Truck]:
    """重算货车当前载重/体积，货车不存在时什么都不做"""
    if not truck_id:
        return None
    truck = await db.get(Truck, truck_id)
    if not truck:
        return None

    result = await db.execute(select(OrderItem).where(OrderItem.truck_id == truck_id))
    weight, volume = compute_truck_load(result.scalars().all())

    truck.current_weight = weight
    truck.current_volume = volume
    await db.flush()

    logger.debug(f"货车 {truck.number} 装载: 重量={weight}, 体积={volume}")
    return truck
