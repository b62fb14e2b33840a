"""
库存行服务 - 手工维护的库存增删改和出库

库存行变动后都要重算所属仓库汇总（仓库换了则新旧两个都重算）。
"""

import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import select, update, or_
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.order_item import OrderItem
from logistics.models.warehouse import Warehouse
from logistics.models.warehouse_inventory import WarehouseInventory
from logistics.schemas.inventory import InventoryCreate, InventoryUpdate
from logistics.services import inventory_ledger
from logistics.services.change_history import ENTITY_INVENTORY, record_created
from logistics.services.item_lifecycle import refresh_aggregates

logger = logging.getLogger(__name__)


async def _ensure_warehouse(db: AsyncSession, warehouse_id: Optional[int]) -> Warehouse:
    warehouse = await db.get(Warehouse, warehouse_id) if warehouse_id else None
    if not warehouse:
        raise HTTPException(status_code=400, detail="仓库不存在")
    return warehouse


async def list_inventory(
    db: AsyncSession,
    warehouse_id: Optional[int] = None,
    keyword: Optional[str] = None,
    in_stock_only: bool = False) -> List[WarehouseInventory]:
    """库存列表，可按仓库、关键字筛选"""
    query = select(WarehouseInventory)
    if warehouse_id:
        query = query.where(WarehouseInventory.warehouse_id == warehouse_id)
    if keyword:
        pattern = f"%{keyword}%"
        query = query.where(or_(
            WarehouseInventory.code.ilike(pattern),
            WarehouseInventory.name.ilike(pattern),
            WarehouseInventory.description.ilike(pattern),
        ))
    if in_stock_only:
        query = query.where(WarehouseInventory.available_quantity > 0)
    result = await db.execute(query.order_by(WarehouseInventory.created_at.desc(), WarehouseInventory.id.desc()))
    return list(result.scalars().all())


async def create_inventory_item(
    db: AsyncSession,
    data: InventoryCreate,
    user_id: int) -> WarehouseInventory:
    """手工建库存行，available_quantity 未给时等于 quantity"""
    await _ensure_warehouse(db, data.warehouse_id)

    payload = data.model_dump(exclude_none=True)
    payload.setdefault("available_quantity", payload.get("quantity", 0))
    row = WarehouseInventory(**payload, created_by=user_id)
    db.add(row)
    await db.flush()

    await inventory_ledger.recompute_warehouse_stats(db, row.warehouse_id)
    await record_created(
        db, ENTITY_INVENTORY, row.id, user_id,
        f"Добавлен складской остаток: {row.name} ({row.code}), количество {row.quantity}",
    )
    await db.commit()
    logger.info(f"📦 新建库存行 {row.id}: 仓库 {row.warehouse_id}, {row.code} x {row.quantity}")
    return row


async def update_inventory_item(
    db: AsyncSession,
    row_id: int,
    data: InventoryUpdate) -> Optional[WarehouseInventory]:
    """更新库存行；不存在时返回 None"""
    row = await db.get(WarehouseInventory, row_id)
    if not row:
        return None

    payload = data.model_dump(exclude_unset=True)
    for field in ("warehouse_id", "code", "name", "quantity", "available_quantity"):
        if field in payload and payload[field] is None:
            payload.pop(field)
    if "warehouse_id" in payload and payload["warehouse_id"] != row.warehouse_id:
        await _ensure_warehouse(db, payload["warehouse_id"])
    # 只在改动数量时校验，退回入库造成的超出不在此拦截
    if "quantity" in payload or "available_quantity" in payload:
        quantity = payload.get("quantity", row.quantity or 0)
        available = payload.get("available_quantity", row.available_quantity or 0)
        if available > quantity:
            raise HTTPException(status_code=400, detail="可用数量不能大于库存数量")

    old_warehouse_id = row.warehouse_id
    for field, value in payload.items():
        setattr(row, field, value)
    await db.flush()

    await refresh_aggregates(db, warehouse_ids=[old_warehouse_id, row.warehouse_id])
    await db.commit()
    return row


async def delete_inventory_item(db: AsyncSession, row_id: int) -> bool:
    """删除库存行：先解除明细上的关联，再删除，最后重算仓库"""
    row = await db.get(WarehouseInventory, row_id)
    if not row:
        return False

    warehouse_id = row.warehouse_id
    await db.execute(
        update(OrderItem)
        .where(OrderItem.inventory_item_id == row_id)
        .values(inventory_item_id=None)
    )
    await db.delete(row)
    await db.flush()

    await refresh_aggregates(db, warehouse_ids=[warehouse_id])
    await db.commit()
    logger.info(f"🗑️ 删除库存行 {row_id}（仓库 {warehouse_id}）")
    return True


async def reduce_inventory(db: AsyncSession, row_id: int, quantity: int) -> Optional[WarehouseInventory]:
    """手工出库（可用数量最低扣到 0）；库存行不存在时返回 None"""
    row = await inventory_ledger.reduce(db, row_id, quantity)
    if row is None:
        return None
    await db.commit()
    return row
