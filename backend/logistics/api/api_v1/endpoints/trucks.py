"""
货车管理API
"""
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db, get_current_user_id
from logistics.models.truck import Truck
from logistics.schemas.order_item import OrderItemListResponse, OrderItemResponse
from logistics.schemas.registry import (
    TruckCreate,
    TruckUpdate,
    TruckResponse,
    TruckListResponse)
from logistics.services import registry

router = APIRouter()


@router.get("/", response_model=TruckListResponse)
async def list_trucks(
    *,
    db: AsyncSession = Depends(get_db),
    status: Optional[str] = Query(None, description="Свободен / В пути")) -> Any:
    """获取货车列表"""
    trucks = await registry.list_trucks(db, status)
    return TruckListResponse(
        data=[TruckResponse.model_validate(t) for t in trucks],
        total=len(trucks)
    )


@router.post("/", response_model=TruckResponse)
async def create_truck(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    truck_in: TruckCreate) -> Any:
    """创建货车"""
    truck = await registry.create_truck(db, truck_in, user_id)
    return TruckResponse.model_validate(truck)


@router.get("/{truck_id}", response_model=TruckResponse)
async def get_truck(
    *,
    db: AsyncSession = Depends(get_db),
    truck_id: int) -> Any:
    """获取货车详情"""
    truck = await db.get(Truck, truck_id)
    if not truck:
        raise HTTPException(status_code=404, detail="货车不存在")
    return TruckResponse.model_validate(truck)


@router.get("/{truck_id}/items", response_model=OrderItemListResponse)
async def get_truck_items(
    *,
    db: AsyncSession = Depends(get_db),
    truck_id: int) -> Any:
    """获取货车上的明细"""
    if not await db.get(Truck, truck_id):
        raise HTTPException(status_code=404, detail="货车不存在")
    items = await registry.get_truck_items(db, truck_id)
    return OrderItemListResponse(
        data=[OrderItemResponse.model_validate(i) for i in items],
        total=len(items)
    )


@router.put("/{truck_id}", response_model=TruckResponse)
async def update_truck(
    *,
    db: AsyncSession = Depends(get_db),
    truck_id: int,
    truck_in: TruckUpdate) -> Any:
    """更新货车"""
    truck = await registry.update_truck(db, truck_id, truck_in)
    if not truck:
        raise HTTPException(status_code=404, detail="货车不存在")
    return TruckResponse.model_validate(truck)


@router.delete("/{truck_id}")
async def delete_truck(
    *,
    db: AsyncSession = Depends(get_db),
    truck_id: int) -> Any:
    """删除货车（车上明细解除装车）"""
    if not await registry.delete_truck(db, truck_id):
        raise HTTPException(status_code=404, detail="货车不存在")
    return {"message": "货车已删除"}
