"""
仓库管理API
"""
from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db, get_current_user_id
from logistics.models.warehouse import Warehouse
from logistics.schemas.inventory import InventoryListResponse
from logistics.schemas.registry import (
    WarehouseCreate,
    WarehouseUpdate,
    WarehouseResponse,
    WarehouseListResponse)
from logistics.services import inventory as inventory_service
from logistics.services import registry

from .inventory import build_inventory_response

router = APIRouter()


@router.get("/", response_model=WarehouseListResponse)
async def list_warehouses(
    *,
    db: AsyncSession = Depends(get_db),
    include_inactive: bool = Query(False, description="包含已停用仓库")) -> Any:
    """获取仓库列表"""
    warehouses = await registry.list_warehouses(db, include_inactive)
    return WarehouseListResponse(
        data=[WarehouseResponse.model_validate(w) for w in warehouses],
        total=len(warehouses)
    )


@router.get("/inventory-counts")
async def get_inventory_counts(
    *,
    db: AsyncSession = Depends(get_db)) -> Dict[int, int]:
    """每个仓库的库存行数"""
    return await registry.get_inventory_counts(db)


@router.post("/", response_model=WarehouseResponse)
async def create_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    warehouse_in: WarehouseCreate) -> Any:
    """创建仓库"""
    warehouse = await registry.create_warehouse(db, warehouse_in, user_id)
    return WarehouseResponse.model_validate(warehouse)


@router.get("/{warehouse_id}", response_model=WarehouseResponse)
async def get_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    warehouse_id: int) -> Any:
    """获取仓库详情"""
    warehouse = await db.get(Warehouse, warehouse_id)
    if not warehouse:
        raise HTTPException(status_code=404, detail="仓库不存在")
    return WarehouseResponse.model_validate(warehouse)


@router.get("/{warehouse_id}/inventory", response_model=InventoryListResponse)
async def get_warehouse_inventory(
    *,
    db: AsyncSession = Depends(get_db),
    warehouse_id: int) -> Any:
    """获取仓库库存"""
    warehouse = await db.get(Warehouse, warehouse_id)
    if not warehouse:
        raise HTTPException(status_code=404, detail="仓库不存在")
    rows = await inventory_service.list_inventory(db, warehouse_id=warehouse_id)
    return InventoryListResponse(
        data=[build_inventory_response(r, warehouse.name) for r in rows],
        total=len(rows)
    )


@router.put("/{warehouse_id}", response_model=WarehouseResponse)
async def update_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    warehouse_id: int,
    warehouse_in: WarehouseUpdate) -> Any:
    """更新仓库"""
    warehouse = await registry.update_warehouse(db, warehouse_id, warehouse_in)
    if not warehouse:
        raise HTTPException(status_code=404, detail="仓库不存在")
    return WarehouseResponse.model_validate(warehouse)


@router.delete("/{warehouse_id}")
async def delete_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    warehouse_id: int) -> Any:
    """删除仓库（软删除，设置为不启用）"""
    if not await registry.deactivate_warehouse(db, warehouse_id):
        raise HTTPException(status_code=404, detail="仓库不存在")
    return {"message": "仓库已停用"}
