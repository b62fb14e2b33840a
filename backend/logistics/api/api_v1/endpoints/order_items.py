"""
订单明细API - 单条明细的查看、修改、删除
"""
from typing import Any
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db, get_current_user_id
from logistics.models.order_item import OrderItem
from logistics.schemas.order_item import OrderItemUpdate, OrderItemResponse
from logistics.services import orders as order_service

router = APIRouter()


@router.get("/{item_id}", response_model=OrderItemResponse)
async def get_order_item(
    *,
    db: AsyncSession = Depends(get_db),
    item_id: int) -> Any:
    """获取明细"""
    item = await db.get(OrderItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="明细不存在")
    return OrderItemResponse.model_validate(item)


@router.put("/{item_id}", response_model=OrderItemResponse)
async def update_order_item(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    item_id: int,
    item_in: OrderItemUpdate) -> Any:
    """更新明细（状态变化会联动库存）"""
    item = await order_service.update_order_item(db, item_id, item_in, user_id)
    if not item:
        raise HTTPException(status_code=404, detail="明细不存在")
    return OrderItemResponse.model_validate(item)


@router.delete("/{item_id}")
async def delete_order_item(
    *,
    db: AsyncSession = Depends(get_db),
    item_id: int) -> Any:
    """删除明细"""
    if not await order_service.delete_order_item(db, item_id):
        raise HTTPException(status_code=404, detail="明细不存在")
    return {"message": "明细已删除"}
