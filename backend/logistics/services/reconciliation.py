"""
全量对账 - 把所有订单、货车、启用中的仓库汇总从源数据重算一遍

汇总本身都是幂等的全量重算，这里只是批量调用，用于修复中途失败留下的偏差。
"""

import logging
from typing import Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.order import Order
from logistics.models.truck import Truck
from logistics.models.warehouse import Warehouse
from logistics.services.inventory_ledger import recompute_warehouse_stats
from logistics.services.order_totals import recompute_order_totals
from logistics.services.truck_load import recompute_truck_load

logger = logging.getLogger(__name__)


async def reconcile_all(db: AsyncSession) -> Dict[str, int]:
    """重算全部汇总并提交，返回各类处理数量"""
    order_ids = (await db.execute(select(Order.id))).scalars().all()
    truck_ids = (await db.execute(select(Truck.id))).scalars().all()
    warehouse_ids = (await db.execute(
        select(Warehouse.id).where(Warehouse.is_active == True)  # noqa: E712
    )).scalars().all()

    for order_id in order_ids:
        await recompute_order_totals(db, order_id)
    for truck_id in truck_ids:
        await recompute_truck_load(db, truck_id)
    for warehouse_id in warehouse_ids:
        await recompute_warehouse_stats(db, warehouse_id)
    await db.commit()

    result = {"orders": len(order_ids), "trucks": len(truck_ids), "warehouses": len(warehouse_ids)}
    logger.info(f"✅ 全量对账完成: 订单 {result['orders']}，货车 {result['trucks']}，仓库 {result['warehouses']}")
    return result
