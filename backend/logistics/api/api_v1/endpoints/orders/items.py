"""
订单明细操作模块（挂在订单下）
- 明细列表、添加明细
- 从库存添加
- 客户查询码
"""

from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db, get_current_user_id
from logistics.models.order import Order
from logistics.schemas.order_item import (
    OrderItemCreate, AddFromInventory, OrderItemResponse, OrderItemListResponse
)
from logistics.schemas.tracking import TrackingCreate, TrackingResponse
from logistics.services import orders as order_service
from logistics.services import tracking as tracking_service

from .core import build_item_response

router = APIRouter()


async def _get_order_or_404(db: AsyncSession, order_id: int) -> Order:
    order = await db.get(Order, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="订单不存在")
    return order


@router.get("/{order_id}/items", response_model=OrderItemListResponse)
async def list_order_items(
    *,
    db: AsyncSession = Depends(get_db),
    order_id: int) -> Any:
    """获取订单明细"""
    await _get_order_or_404(db, order_id)
    items = await order_service.list_order_items(db, order_id)
    return OrderItemListResponse(
        data=[build_item_response(i) for i in items],
        total=len(items)
    )


@router.post("/{order_id}/items", response_model=OrderItemResponse)
async def create_order_item(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    order_id: int,
    item_in: OrderItemCreate) -> Any:
    """添加明细"""
    await _get_order_or_404(db, order_id)
    item = await order_service.create_order_item(db, order_id, item_in, user_id)
    return build_item_response(item)


@router.post("/{order_id}/items/from-inventory", response_model=OrderItemResponse)
async def add_item_from_inventory(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    order_id: int,
    data: AddFromInventory) -> Any:
    """从库存添加明细（同时扣减库存）"""
    await _get_order_or_404(db, order_id)
    item = await order_service.add_item_from_inventory(db, order_id, data, user_id)
    return build_item_response(item)


@router.get("/{order_id}/tracking", response_model=List[TrackingResponse])
async def list_tracking_codes(
    *,
    db: AsyncSession = Depends(get_db),
    order_id: int) -> Any:
    """订单的客户查询码"""
    await _get_order_or_404(db, order_id)
    return await tracking_service.list_tracking_codes(db, order_id)


@router.post("/{order_id}/tracking", response_model=TrackingResponse)
async def create_tracking_code(
    *,
    db: AsyncSession = Depends(get_db),
    order_id: int,
    tracking_in: TrackingCreate) -> Any:
    """为订单生成客户查询码"""
    await _get_order_or_404(db, order_id)
    return await tracking_service.create_tracking_code(
        db, order_id,
        customer_name=tracking_in.customer_name,
        customer_email=tracking_in.customer_email)
