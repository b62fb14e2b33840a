"""
订单 CRUD 操作模块
- 列表查询
- 创建
- 更新
- 删除
- 全量重算
"""

from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db, get_current_user_id
from logistics.schemas.order import (
    OrderCreate, OrderUpdate, OrderResponse, OrderListResponse, RecalculateResult
)
from logistics.services import orders as order_service
from logistics.services.reconciliation import reconcile_all

from .core import build_order_response

router = APIRouter()


@router.get("/", response_model=OrderListResponse)
async def list_orders(
    *,
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = Query(None, description="active / completed / cancelled"),
    counterparty_id: Optional[int] = Query(None)) -> Any:
    """获取订单列表"""
    orders, total = await order_service.list_orders(
        db, status=status, counterparty_id=counterparty_id,
        skip=(page - 1) * limit, limit=limit)
    return OrderListResponse(
        data=[build_order_response(o, with_items=False) for o in orders],
        total=total,
        page=page,
        limit=limit
    )


@router.post("/", response_model=OrderResponse)
async def create_order(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    order_in: OrderCreate) -> Any:
    """创建订单"""
    order = await order_service.create_order(db, order_in, user_id)
    return build_order_response(await order_service.load_order(db, order.id))


@router.post("/recalculate", response_model=RecalculateResult)
async def recalculate_all(
    *,
    db: AsyncSession = Depends(get_db)) -> Any:
    """全量重算所有订单、货车、仓库汇总"""
    return RecalculateResult(**await reconcile_all(db))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    *,
    db: AsyncSession = Depends(get_db),
    order_id: int) -> Any:
    """获取订单详情（含明细）"""
    order = await order_service.load_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="订单不存在")
    return build_order_response(order)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    order_id: int,
    order_in: OrderUpdate) -> Any:
    """更新订单"""
    order = await order_service.update_order(db, order_id, order_in, user_id)
    if not order:
        raise HTTPException(status_code=404, detail="订单不存在")
    return build_order_response(await order_service.load_order(db, order_id))


@router.delete("/{order_id}")
async def delete_order(
    *,
    db: AsyncSession = Depends(get_db),
    order_id: int) -> Any:
    """删除订单（连同明细和客户查询码）"""
    if not await order_service.delete_order(db, order_id):
        raise HTTPException(status_code=404, detail="订单不存在")
    return {"message": "订单已删除"}
