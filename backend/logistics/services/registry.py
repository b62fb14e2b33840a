"""
登记表服务 - 客商、仓库、货车、档案

新建时各写一条 created 历史；仓库删除为软删除（is_active=False）。
"""

import logging
from typing import Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.archive import ArchiveFolder, ArchiveMaterial
from logistics.models.counterparty import Counterparty
from logistics.models.order import Order
from logistics.models.order_item import OrderItem
from logistics.models.truck import Truck
from logistics.models.warehouse import Warehouse
from logistics.models.warehouse_inventory import WarehouseInventory
from logistics.schemas.archive import (
    ArchiveFolderCreate, ArchiveFolderUpdate, ArchiveMaterialCreate, ArchiveMaterialUpdate,
)
from logistics.schemas.registry import (
    CounterpartyCreate, CounterpartyUpdate, WarehouseCreate, WarehouseUpdate, TruckCreate, TruckUpdate,
)
from logistics.services.change_history import (
    ENTITY_ARCHIVE_FOLDER, ENTITY_ARCHIVE_MATERIAL, ENTITY_COUNTERPARTY, ENTITY_TRUCK, ENTITY_WAREHOUSE,
    record_created,
)
from logistics.services.truck_load import recompute_truck_load

logger = logging.getLogger(__name__)


def _apply(obj, payload: dict, required=()) -> None:
    for field, value in payload.items():
        if value is None and field in required:
            continue
        setattr(obj, field, value)


# ===== 客商 =====

async def list_counterparties(db: AsyncSession, type: Optional[str] = None) -> List[Counterparty]:
    query = select(Counterparty)
    if type:
        query = query.where(Counterparty.type.in_([type, "both"]))
    result = await db.execute(query.order_by(Counterparty.name))
    return list(result.scalars().all())


async def create_counterparty(db: AsyncSession, data: CounterpartyCreate, user_id: int) -> Counterparty:
    counterparty = Counterparty(**data.model_dump(exclude_none=True), created_by=user_id)
    db.add(counterparty)
    await db.flush()
    await record_created(
        db, ENTITY_COUNTERPARTY, counterparty.id, user_id, f"Создан контрагент: {counterparty.name}"
    )
    await db.commit()
    return counterparty


async def update_counterparty(
    db: AsyncSession, counterparty_id: int, data: CounterpartyUpdate) -> Optional[Counterparty]:
    counterparty = await db.get(Counterparty, counterparty_id)
    if not counterparty:
        return None
    _apply(counterparty, data.model_dump(exclude_unset=True), required=("name", "type"))
    await db.commit()
    return counterparty


async def delete_counterparty(db: AsyncSession, counterparty_id: int) -> bool:
    """删除客商；还有订单引用时拒绝"""
    counterparty = await db.get(Counterparty, counterparty_id)
    if not counterparty:
        return False
    order_count = (await db.execute(
        select(func.count(Order.id)).where(Order.counterparty_id == counterparty_id)
    )).scalar() or 0
    if order_count:
        raise HTTPException(status_code=400, detail=f"该客商下还有 {order_count} 个订单，不能删除")
    await db.delete(counterparty)
    await db.commit()
    return True


# ===== 仓库 =====

async def list_warehouses(db: AsyncSession, include_inactive: bool = False) -> List[Warehouse]:
    query = select(Warehouse)
    if not include_inactive:
        query = query.where(Warehouse.is_active == True)  # noqa: E712
    result = await db.execute(query.order_by(Warehouse.name))
    return list(result.scalars().all())


async def create_warehouse(db: AsyncSession, data: WarehouseCreate, user_id: int) -> Warehouse:
    warehouse = Warehouse(**data.model_dump(exclude_none=True), created_by=user_id)
    db.add(warehouse)
    await db.flush()
    await record_created(db, ENTITY_WAREHOUSE, warehouse.id, user_id, f"Создан склад: {warehouse.name}")
    await db.commit()
    return warehouse


async def update_warehouse(db: AsyncSession, warehouse_id: int, data: WarehouseUpdate) -> Optional[Warehouse]:
    warehouse = await db.get(Warehouse, warehouse_id)
    if not warehouse:
        return None
    _apply(warehouse, data.model_dump(exclude_unset=True), required=("name", "is_active"))
    await db.commit()
    return warehouse


async def deactivate_warehouse(db: AsyncSession, warehouse_id: int) -> bool:
    """软删除：库存行和历史明细保留"""
    warehouse = await db.get(Warehouse, warehouse_id)
    if not warehouse:
        return False
    warehouse.is_active = False
    await db.commit()
    logger.info(f"仓库 {warehouse.name} 已停用")
    return True


async def get_inventory_counts(db: AsyncSession) -> Dict[int, int]:
    """每个仓库的库存行数"""
    result = await db.execute(
        select(WarehouseInventory.warehouse_id, func.count(WarehouseInventory.id))
        .group_by(WarehouseInventory.warehouse_id)
    )
    return {warehouse_id: count for warehouse_id, count in result.all() if warehouse_id}


# ===== 货车 =====

async def list_trucks(db: AsyncSession, status: Optional[str] = None) -> List[Truck]:
    query = select(Truck)
    if status:
        query = query.where(Truck.status == status)
    result = await db.execute(query.order_by(Truck.created_at.desc(), Truck.id.desc()))
    return list(result.scalars().all())


async def _ensure_unique_number(db: AsyncSession, number: str) -> None:
    existing = await db.execute(select(Truck).where(Truck.number == number))
    if existing.scalar():
        raise HTTPException(status_code=400, detail="该车号已存在")


async def create_truck(db: AsyncSession, data: TruckCreate, user_id: int) -> Truck:
    await _ensure_unique_number(db, data.number)
    truck = Truck(**data.model_dump(exclude_none=True), created_by=user_id)
    db.add(truck)
    await db.flush()
    await record_created(db, ENTITY_TRUCK, truck.id, user_id, f"Создан грузовой трак: {truck.number}")
    await db.commit()
    return truck


async def update_truck(db: AsyncSession, truck_id: int, data: TruckUpdate) -> Optional[Truck]:
    """更新货车，随后按车上明细重算装载"""
    truck = await db.get(Truck, truck_id)
    if not truck:
        return None
    payload = data.model_dump(exclude_unset=True)
    if payload.get("number") and payload["number"] != truck.number:
        await _ensure_unique_number(db, payload["number"])
    _apply(truck, payload, required=("number", "status"))
    await db.flush()
    await recompute_truck_load(db, truck.id)
    await db.commit()
    return truck


async def delete_truck(db: AsyncSession, truck_id: int) -> bool:
    """删除货车，车上明细的 truck_id 置空"""
    truck = await db.get(Truck, truck_id)
    if not truck:
        return False
    await db.execute(update(OrderItem).where(OrderItem.truck_id == truck_id).values(truck_id=None))
    await db.delete(truck)
    await db.commit()
    return True


async def get_truck_items(db: AsyncSession, truck_id: int) -> List[OrderItem]:
    """车上的全部明细"""
    result = await db.execute(
        select(OrderItem).where(OrderItem.truck_id == truck_id).order_by(OrderItem.created_at.desc(), OrderItem.id.desc())
    )
    return list(result.scalars().all())


# ===== 档案 =====

async def list_archive_folders(db: AsyncSession, parent_id: Optional[int] = None) -> List[ArchiveFolder]:
    """parent_id 为空时列根目录"""
    query = select(ArchiveFolder)
    if parent_id:
        query = query.where(ArchiveFolder.parent_id == parent_id)
    else:
        query = query.where(ArchiveFolder.parent_id.is_(None))
    result = await db.execute(query.order_by(ArchiveFolder.name))
    return list(result.scalars().all())


async def list_archive_materials(db: AsyncSession, folder_id: Optional[int] = None) -> List[ArchiveMaterial]:
    query = select(ArchiveMaterial)
    if folder_id:
        query = query.where(ArchiveMaterial.folder_id == folder_id)
    else:
        query = query.where(ArchiveMaterial.folder_id.is_(None))
    result = await db.execute(query.order_by(ArchiveMaterial.created_at.desc(), ArchiveMaterial.id.desc()))
    return list(result.scalars().all())


async def create_archive_folder(db: AsyncSession, data: ArchiveFolderCreate, user_id: int) -> ArchiveFolder:
    if data.parent_id and not await db.get(ArchiveFolder, data.parent_id):
        raise HTTPException(status_code=400, detail="上级文件夹不存在")
    folder = ArchiveFolder(**data.model_dump(exclude_none=True), created_by=user_id)
    db.add(folder)
    await db.flush()
    await record_created(db, ENTITY_ARCHIVE_FOLDER, folder.id, user_id, f"Создана папка архива: {folder.name}")
    await db.commit()
    return folder


async def update_archive_folder(
    db: AsyncSession, folder_id: int, data: ArchiveFolderUpdate) -> Optional[ArchiveFolder]:
    folder = await db.get(ArchiveFolder, folder_id)
    if not folder:
        return None
    payload = data.model_dump(exclude_unset=True)
    if payload.get("parent_id") == folder_id:
        raise HTTPException(status_code=400, detail="文件夹不能作为自己的上级")
    _apply(folder, payload, required=("name",))
    await db.commit()
    return folder


async def delete_archive_folder(db: AsyncSession, folder_id: int) -> bool:
    """删除文件夹；非空时拒绝"""
    folder = await db.get(ArchiveFolder, folder_id)
    if not folder:
        return False
    if await list_archive_folders(db, folder_id) or await list_archive_materials(db, folder_id):
        raise HTTPException(status_code=400, detail="文件夹不为空，不能删除")
    await db.delete(folder)
    await db.commit()
    return True


async def create_archive_material(db: AsyncSession, data: ArchiveMaterialCreate, user_id: int) -> ArchiveMaterial:
    if data.folder_id and not await db.get(ArchiveFolder, data.folder_id):
        raise HTTPException(status_code=400, detail="文件夹不存在")
    material = ArchiveMaterial(**data.model_dump(exclude_none=True), created_by=user_id)
    db.add(material)
    await db.flush()
    await record_created(db, ENTITY_ARCHIVE_MATERIAL, material.id, user_id, f"Добавлен материал: {material.title}")
    await db.commit()
    return material


async def update_archive_material(
    db: AsyncSession, material_id: int, data: ArchiveMaterialUpdate) -> Optional[ArchiveMaterial]:
    material = await db.get(ArchiveMaterial, material_id)
    if not material:
        return None
    _apply(material, data.model_dump(exclude_unset=True), required=("title",))
    await db.commit()
    return material


async def delete_archive_material(db: AsyncSession, material_id: int) -> bool:
    material = await db.get(ArchiveMaterial, material_id)
    if not material:
        return False
    await db.delete(material)
    await db.commit()
    return True
