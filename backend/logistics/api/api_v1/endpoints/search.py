"""
全局搜索API
"""
from typing import Any
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db
from logistics.schemas.inventory import InventoryResponse
from logistics.schemas.order_item import OrderItemResponse
from logistics.schemas.registry import CounterpartyResponse
from logistics.schemas.tracking import SearchResponse
from logistics.services.search import search_all

from .orders.core import build_order_response

router = APIRouter()


@router.get("/", response_model=SearchResponse)
async def search(
    *,
    db: AsyncSession = Depends(get_db),
    q: str = Query(..., min_length=1, description="关键字")) -> Any:
    """在订单、明细、客商、库存中搜索"""
    found = await search_all(db, q)
    return SearchResponse(
        query=q,
        orders=[build_order_response(o, with_items=False) for o in found["orders"]],
        items=[OrderItemResponse.model_validate(i) for i in found["items"]],
        counterparties=[CounterpartyResponse.model_validate(c) for c in found["counterparties"]],
        inventory=[InventoryResponse.model_validate(r) for r in found["inventory"]]
    )
