"""客户查询码 / 搜索 Schema"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from logistics.schemas.inventory import InventoryResponse
from logistics.schemas.order import OrderResponse
from logistics.schemas.order_item import OrderItemResponse
from logistics.schemas.registry import CounterpartyResponse


class TrackingCreate(BaseModel):
    customer_name: Optional[str] = Field(None, max_length=100)
    customer_email: Optional[str] = Field(None, max_length=100)


class TrackingResponse(BaseModel):
    id: int
    tracking_code: str
    order_id: int
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SearchResponse(BaseModel):
    """全局搜索结果"""
    query: str
    orders: List[OrderResponse] = []
    items: List[OrderItemResponse] = []
    counterparties: List[CounterpartyResponse] = []
    inventory: List[InventoryResponse] = []
