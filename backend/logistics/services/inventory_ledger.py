"""
库存台账服务

- materialize: 明细落到仓库时建立对应库存行（失败只记日志，不影响明细本身）
- reduce: 出库，可用数量扣到 0 为止
- replenish: 退回入库，可用数量不设上限
- recompute_warehouse_stats: 仓库汇总全量重算
"""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.numbers import to_decimal, to_int
from logistics.models.enums import ItemStatus
from logistics.models.order_item import OrderItem
from logistics.models.warehouse import Warehouse
from logistics.models.warehouse_inventory import WarehouseInventory

logger = logging.getLogger(__name__)


def build_inventory_row(item: OrderItem) -> WarehouseInventory:
    """按明细复制出一条库存行，可用数量等于明细数量"""
    quantity = to_int(item.quantity)
    return WarehouseInventory(
        warehouse_id=item.warehouse_id,
        code=item.code,
        name=item.name,
        description=item.characteristics,
        characteristics=item.characteristics,
        quantity=quantity,
        available_quantity=quantity,
        volume_type=item.volume_type,
        price_per_unit=item.price_per_unit,
        volume=item.volume,
        weight=item.weight,
        delivery_period=item.delivery_period,
        transport=item.transport,
        photos=list(item.photos or []),
        created_by=item.created_by,
    )


async def materialize(db: AsyncSession, item: OrderItem) -> Optional[WarehouseInventory]:
    """
    为 На складе 状态、已指定仓库、尚未关联库存行的明细建立库存行

    已关联时直接返回现有库存行，不重复建立。
    写库失败时回滚到保存点并返回 None，调用方照常继续。
    """
    if item.inventory_item_id:
        return await db.get(WarehouseInventory, item.inventory_item_id)
    if item.item_status != ItemStatus.ON_WAREHOUSE or not item.warehouse_id:
        return None

    try:
        async with db.begin_nested():
            row = build_inventory_row(item)
            db.add(row)
            await db.flush()
            item.inventory_item_id = row.id
            await db.flush()
    except SQLAlchemyError:
        logger.exception(f"❌ 明细 {item.id} 建立库存行失败，跳过")
        # 保存点回滚后明细已过期，重新加载
        await db.refresh(item)
        return None

    logger.info(f"📦 明细 {item.id} 入库: 仓库 {item.warehouse_id}, 库存行 {row.id}, 数量 {row.quantity}")
    await recompute_warehouse_stats(db, item.warehouse_id)
    return row


async def reduce(db: AsyncSession, row_id: int, used_quantity) -> Optional[WarehouseInventory]:
    """出库：available_quantity 减去 used_quantity，最低为 0"""
    row = await db.get(WarehouseInventory, row_id)
    if not row:
        logger.warning(f"库存行 {row_id} 不存在，跳过出库")
        return None

    old_available = row.available_quantity or 0
    row.available_quantity = max(0, old_available - to_int(used_quantity))
    await db.flush()
    logger.info(f"📤 库存行 {row_id} 出库 {used_quantity}: {old_available} → {row.available_quantity}")

    await recompute_warehouse_stats(db, row.warehouse_id)
    return row


async def replenish(db: AsyncSession, row_id: int, quantity) -> Optional[WarehouseInventory]:
    """退回入库：available_quantity 加上 quantity"""
    row = await db.get(WarehouseInventory, row_id)
    if not row:
        logger.warning(f"库存行 {row_id} 不存在，跳过退回")
        return None

    old_available = row.available_quantity or 0
    row.available_quantity = old_available + to_int(quantity)
    await db.flush()
    logger.info(f"📥 库存行 {row_id} 退回 {quantity}: {old_available} → {row.available_quantity}")

    await recompute_warehouse_stats(db, row.warehouse_id)
    return row


async def recompute_warehouse_stats(db: AsyncSession, warehouse_id: Optional[int]) -> Optional[Warehouse]:
    """
    按库存行全量重算仓库汇总

    total_items = Σ quantity
    total_volume = Σ volume
    total_value = Σ price_per_unit × quantity
    """
    if not warehouse_id:
        return None
    warehouse = await db.get(Warehouse, warehouse_id)
    if not warehouse:
        return None

    result = await db.execute(
        select(
            func.coalesce(func.sum(WarehouseInventory.quantity), 0),
            func.coalesce(func.sum(WarehouseInventory.volume), 0),
            func.coalesce(func.sum(
                func.coalesce(WarehouseInventory.price_per_unit, 0) * WarehouseInventory.quantity
            ), 0),
        ).where(WarehouseInventory.warehouse_id == warehouse_id)
    )
    total_items, total_volume, total_value = result.one()

    warehouse.total_items = to_int(total_items)
    warehouse.total_volume = to_decimal(total_volume).quantize(Decimal("0.001"))
    warehouse.total_value = to_decimal(total_value).quantize(Decimal("0.01"))
    await db.flush()

    logger.debug(
        f"仓库 {warehouse_id} 汇总: 件数={warehouse.total_items}, "
        f"体积={warehouse.total_volume}, 价值={warehouse.total_value}"
    )
    return warehouse
