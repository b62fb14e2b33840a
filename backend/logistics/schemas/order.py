"""订单Schema"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from logistics.models.enums import OrderStatus
from logistics.schemas.order_item import OrderItemResponse


class OrderBase(BaseModel):
    """订单基础字段"""
    name: str = Field(..., min_length=1, max_length=100, description="订单名称")
    code: Optional[str] = Field(None, max_length=50, description="订单编号")
    counterparty_id: Optional[int] = Field(None, description="客商ID")
    status: OrderStatus = Field(default=OrderStatus.ACTIVE.value, description="active / completed / cancelled")
    warehouse: Optional[str] = Field(None, max_length=100, description="仓库名称")
    destination: Optional[str] = Field(None, max_length=200, description="目的地")
    expected_delivery: Optional[date] = None
    comments: Optional[str] = None

    class Config:
        use_enum_values = True


class OrderCreate(OrderBase):
    """创建订单"""
    pass


class OrderUpdate(BaseModel):
    """更新订单"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    code: Optional[str] = Field(None, max_length=50)
    counterparty_id: Optional[int] = None
    status: Optional[OrderStatus] = None
    warehouse: Optional[str] = Field(None, max_length=100)
    destination: Optional[str] = Field(None, max_length=200)
    expected_delivery: Optional[date] = None
    comments: Optional[str] = None

    class Config:
        use_enum_values = True


class OrderResponse(BaseModel):
    """订单响应"""
    id: int
    name: str
    code: Optional[str] = None
    counterparty_id: Optional[int] = None
    counterparty_name: str = Field(default="", description="客商名称")
    status: str
    status_display: str = ""
    warehouse: Optional[str] = None
    destination: Optional[str] = None
    expected_delivery: Optional[date] = None
    comments: Optional[str] = None

    total_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    unpaid_amount: Decimal = Decimal("0")
    total_quantity: int = 0
    total_weight: Decimal = Decimal("0")
    total_volume: Decimal = Decimal("0")

    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    items: List[OrderItemResponse] = []

    @field_validator(
        "total_amount", "paid_amount", "unpaid_amount", "total_weight", "total_volume",
        mode="before")
    @classmethod
    def fix_null_decimal(cls, v: Any) -> Any:
        """数据库中的 NULL 值转换为 0"""
        return v if v is not None else Decimal("0")

    @field_validator("total_quantity", mode="before")
    @classmethod
    def fix_null_quantity(cls, v: Any) -> int:
        return v or 0

    class Config:
        from_attributes = True


class OrderListResponse(BaseModel):
    """订单列表响应"""
    data: List[OrderResponse]
    total: int
    page: int
    limit: int


class RecalculateResult(BaseModel):
    """全量重算结果"""
    orders: int
    trucks: int
    warehouses: int
