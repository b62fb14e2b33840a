"""
客户查询API - 凭查询码查看订单进度
"""
from typing import Any
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db
from logistics.schemas.order import OrderResponse
from logistics.services import orders as order_service
from logistics.services.tracking import get_order_by_tracking_code

from .orders.core import build_order_response

router = APIRouter()


@router.get("/{tracking_code}", response_model=OrderResponse)
async def track_order(
    *,
    db: AsyncSession = Depends(get_db),
    tracking_code: str) -> Any:
    """按查询码获取订单"""
    order = await get_order_by_tracking_code(db, tracking_code)
    if not order:
        raise HTTPException(status_code=404, detail="查询码不存在")
    return build_order_response(await order_service.load_order(db, order.id))
