"""
客商管理API
"""
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db, get_current_user_id
from logistics.models.counterparty import Counterparty
from logistics.schemas.order import OrderListResponse
from logistics.schemas.registry import (
    CounterpartyCreate,
    CounterpartyUpdate,
    CounterpartyResponse,
    CounterpartyListResponse)
from logistics.services import orders as order_service
from logistics.services import registry

from .orders.core import build_order_response

router = APIRouter()


@router.get("/", response_model=CounterpartyListResponse)
async def list_counterparties(
    *,
    db: AsyncSession = Depends(get_db),
    type: Optional[str] = Query(None, description="client / supplier")) -> Any:
    """获取客商列表"""
    counterparties = await registry.list_counterparties(db, type)
    return CounterpartyListResponse(
        data=[CounterpartyResponse.model_validate(c) for c in counterparties],
        total=len(counterparties)
    )


@router.post("/", response_model=CounterpartyResponse)
async def create_counterparty(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    counterparty_in: CounterpartyCreate) -> Any:
    """创建客商"""
    counterparty = await registry.create_counterparty(db, counterparty_in, user_id)
    return CounterpartyResponse.model_validate(counterparty)


@router.get("/{counterparty_id}", response_model=CounterpartyResponse)
async def get_counterparty(
    *,
    db: AsyncSession = Depends(get_db),
    counterparty_id: int) -> Any:
    """获取客商详情"""
    counterparty = await db.get(Counterparty, counterparty_id)
    if not counterparty:
        raise HTTPException(status_code=404, detail="客商不存在")
    return CounterpartyResponse.model_validate(counterparty)


@router.get("/{counterparty_id}/orders", response_model=OrderListResponse)
async def get_counterparty_orders(
    *,
    db: AsyncSession = Depends(get_db),
    counterparty_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200)) -> Any:
    """客商的订单（含明细）"""
    if not await db.get(Counterparty, counterparty_id):
        raise HTTPException(status_code=404, detail="客商不存在")
    orders, total = await order_service.list_orders(
        db, counterparty_id=counterparty_id, skip=(page - 1) * limit, limit=limit)
    return OrderListResponse(
        data=[build_order_response(o) for o in orders],
        total=total,
        page=page,
        limit=limit
    )


@router.put("/{counterparty_id}", response_model=CounterpartyResponse)
async def update_counterparty(
    *,
    db: AsyncSession = Depends(get_db),
    counterparty_id: int,
    counterparty_in: CounterpartyUpdate) -> Any:
    """更新客商"""
    counterparty = await registry.update_counterparty(db, counterparty_id, counterparty_in)
    if not counterparty:
        raise HTTPException(status_code=404, detail="客商不存在")
    return CounterpartyResponse.model_validate(counterparty)


@router.delete("/{counterparty_id}")
async def delete_counterparty(
    *,
    db: AsyncSession = Depends(get_db),
    counterparty_id: int) -> Any:
    """删除客商"""
    if not await registry.delete_counterparty(db, counterparty_id):
        raise HTTPException(status_code=404, detail="客商不存在")
    return {"message": "客商已删除"}
