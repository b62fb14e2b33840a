"""
库存管理API
"""
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db, get_current_user_id
from logistics.models.warehouse import Warehouse
from logistics.models.warehouse_inventory import WarehouseInventory
from logistics.schemas.inventory import (
    InventoryCreate,
    InventoryUpdate,
    InventoryReduce,
    InventoryResponse,
    InventoryListResponse)
from logistics.services import inventory as inventory_service

router = APIRouter()


def build_inventory_response(row: WarehouseInventory, warehouse_name: str = "") -> InventoryResponse:
    """构建库存行响应"""
    response = InventoryResponse.model_validate(row)
    response.warehouse_name = warehouse_name
    return response


async def warehouse_names(db: AsyncSession) -> Dict[int, str]:
    result = await db.execute(select(Warehouse.id, Warehouse.name))
    return {warehouse_id: name for warehouse_id, name in result.all()}


@router.get("/", response_model=InventoryListResponse)
async def list_inventory(
    *,
    db: AsyncSession = Depends(get_db),
    warehouse_id: Optional[int] = Query(None, description="按仓库筛选"),
    q: Optional[str] = Query(None, description="编码/名称/描述关键字"),
    in_stock: bool = Query(False, description="只看有可用数量的")) -> Any:
    """获取库存列表"""
    rows = await inventory_service.list_inventory(db, warehouse_id, q, in_stock)
    names = await warehouse_names(db)
    return InventoryListResponse(
        data=[build_inventory_response(r, names.get(r.warehouse_id, "")) for r in rows],
        total=len(rows)
    )


@router.post("/", response_model=InventoryResponse)
async def create_inventory_item(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    row_in: InventoryCreate) -> Any:
    """新建库存行"""
    row = await inventory_service.create_inventory_item(db, row_in, user_id)
    warehouse = await db.get(Warehouse, row.warehouse_id)
    return build_inventory_response(row, warehouse.name if warehouse else "")


@router.get("/{row_id}", response_model=InventoryResponse)
async def get_inventory_item(
    *,
    db: AsyncSession = Depends(get_db),
    row_id: int) -> Any:
    """获取库存行"""
    row = await db.get(WarehouseInventory, row_id)
    if not row:
        raise HTTPException(status_code=404, detail="库存行不存在")
    warehouse = await db.get(Warehouse, row.warehouse_id)
    return build_inventory_response(row, warehouse.name if warehouse else "")


@router.put("/{row_id}", response_model=InventoryResponse)
async def update_inventory_item(
    *,
    db: AsyncSession = Depends(get_db),
    row_id: int,
    row_in: InventoryUpdate) -> Any:
    """更新库存行"""
    row = await inventory_service.update_inventory_item(db, row_id, row_in)
    if not row:
        raise HTTPException(status_code=404, detail="库存行不存在")
    warehouse = await db.get(Warehouse, row.warehouse_id)
    return build_inventory_response(row, warehouse.name if warehouse else "")


@router.patch("/{row_id}/reduce", response_model=InventoryResponse)
async def reduce_inventory_item(
    *,
    db: AsyncSession = Depends(get_db),
    row_id: int,
    reduce_in: InventoryReduce) -> Any:
    """出库（可用数量最低扣到 0）"""
    row = await inventory_service.reduce_inventory(db, row_id, reduce_in.quantity)
    if not row:
        raise HTTPException(status_code=404, detail="库存行不存在")
    warehouse = await db.get(Warehouse, row.warehouse_id)
    return build_inventory_response(row, warehouse.name if warehouse else "")


@router.delete("/{row_id}")
async def delete_inventory_item(
    *,
    db: AsyncSession = Depends(get_db),
    row_id: int) -> Any:
    """删除库存行"""
    if not await inventory_service.delete_inventory_item(db, row_id):
        raise HTTPException(status_code=404, detail="库存行不存在")
    return {"message": "库存行已删除"}
