"""订单明细Schema"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from logistics.models.enums import ItemStatus, VolumeType

DECIMAL_FIELDS = (
    "weight", "volume", "price_per_unit", "total_price", "transport_price",
    "total_transport_cost", "paid_amount", "unpaid_amount", "total_amount", "remaining_amount",
)


def _blank_to_none(v: Any) -> Any:
    """前端空输入框传 "" 时按未填处理"""
    if isinstance(v, str) and not v.strip():
        return None
    return v


class OrderItemBase(BaseModel):
    """明细基础字段"""
    code: str = Field(..., min_length=1, max_length=50, description="货物编码")
    name: str = Field(..., min_length=1, max_length=200, description="货物名称")
    quantity: int = Field(default=1, ge=0, description="件数")
    characteristics: Optional[str] = Field(None, description="规格/特征")
    comments: Optional[str] = Field(None, description="备注")
    raw_text: Optional[str] = Field(None, description="原始文本")
    photos: List[str] = Field(default_factory=list, description="照片地址")

    warehouse_id: Optional[int] = Field(None, description="仓库ID")
    truck_id: Optional[int] = Field(None, description="货车ID")

    delivery_period: Optional[str] = Field(None, max_length=50, description="运输时效")
    destination: Optional[str] = Field(None, max_length=200, description="目的地")
    shipment_date: Optional[date] = None
    expected_delivery_date: Optional[date] = None
    transport: Optional[str] = Field("Авто", max_length=50, description="运输方式")

    volume_type: VolumeType = Field(default=VolumeType.KG.value, description="计量方式: kg / m³ / cubic")
    weight: Optional[Decimal] = Field(None, ge=0, description="重量")
    volume: Optional[Decimal] = Field(None, ge=0, description="体积（kg 模式下记重量）")

    price_per_unit: Optional[Decimal] = Field(None, ge=0, description="单价")
    total_price: Optional[Decimal] = Field(None, ge=0, description="货值")
    transport_price: Optional[Decimal] = Field(None, ge=0, description="运价")
    total_transport_cost: Optional[Decimal] = Field(None, ge=0, description="运费")
    paid_amount: Optional[Decimal] = Field(None, ge=0, description="已付")
    unpaid_amount: Optional[Decimal] = Field(None, description="未付")
    payment_type: Optional[str] = Field("postpaid", description="prepaid / postpaid")
    payment_status: Optional[str] = Field("unpaid", description="paid / unpaid / prepaid")
    total_amount: Optional[Decimal] = Field(None, description="总金额")
    remaining_amount: Optional[Decimal] = Field(None, description="余额")

    status: ItemStatus = Field(default=ItemStatus.ON_WAREHOUSE.value, description="状态")

    @field_validator(*DECIMAL_FIELDS, mode="before")
    @classmethod
    def blank_decimal(cls, v: Any) -> Any:
        return _blank_to_none(v)

    class Config:
        use_enum_values = True


class OrderItemCreate(OrderItemBase):
    """创建明细"""
    pass


class OrderItemUpdate(BaseModel):
    """更新明细（只提交要改的字段）"""
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[int] = Field(None, ge=0)
    characteristics: Optional[str] = None
    comments: Optional[str] = None
    raw_text: Optional[str] = None
    photos: Optional[List[str]] = None
    order_id: Optional[int] = None
    warehouse_id: Optional[int] = None
    truck_id: Optional[int] = None
    delivery_period: Optional[str] = Field(None, max_length=50)
    destination: Optional[str] = Field(None, max_length=200)
    shipment_date: Optional[date] = None
    expected_delivery_date: Optional[date] = None
    transport: Optional[str] = Field(None, max_length=50)
    volume_type: Optional[VolumeType] = None
    weight: Optional[Decimal] = Field(None, ge=0)
    volume: Optional[Decimal] = Field(None, ge=0)
    price_per_unit: Optional[Decimal] = Field(None, ge=0)
    total_price: Optional[Decimal] = Field(None, ge=0)
    transport_price: Optional[Decimal] = Field(None, ge=0)
    total_transport_cost: Optional[Decimal] = Field(None, ge=0)
    paid_amount: Optional[Decimal] = Field(None, ge=0)
    unpaid_amount: Optional[Decimal] = None
    payment_type: Optional[str] = None
    payment_status: Optional[str] = None
    total_amount: Optional[Decimal] = None
    remaining_amount: Optional[Decimal] = None
    status: Optional[ItemStatus] = None

    @field_validator(*DECIMAL_FIELDS, mode="before")
    @classmethod
    def blank_decimal(cls, v: Any) -> Any:
        return _blank_to_none(v)

    class Config:
        use_enum_values = True


class AddFromInventory(BaseModel):
    """从库存添加到订单"""
    inventory_item_id: int = Field(..., description="库存行ID")
    quantity: int = Field(..., gt=0, description="取用件数")
    truck_id: Optional[int] = None
    destination: Optional[str] = Field(None, max_length=200)
    transport_price: Optional[Decimal] = Field(None, ge=0)
    total_transport_cost: Optional[Decimal] = Field(None, ge=0)


class OrderItemResponse(BaseModel):
    """明细响应"""
    id: int
    order_id: int
    warehouse_id: Optional[int] = None
    truck_id: Optional[int] = None
    inventory_item_id: Optional[int] = None
    code: str
    name: str
    quantity: int
    characteristics: Optional[str] = None
    comments: Optional[str] = None
    raw_text: Optional[str] = None
    photos: List[str] = []
    delivery_period: Optional[str] = None
    destination: Optional[str] = None
    shipment_date: Optional[date] = None
    expected_delivery_date: Optional[date] = None
    transport: Optional[str] = None
    volume_type: Optional[str] = None
    weight: Decimal = Decimal("0")
    volume: Decimal = Decimal("0")
    price_per_unit: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")
    transport_price: Decimal = Decimal("0")
    total_transport_cost: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    unpaid_amount: Decimal = Decimal("0")
    payment_type: Optional[str] = None
    payment_status: Optional[str] = None
    total_amount: Decimal = Decimal("0")
    remaining_amount: Decimal = Decimal("0")
    status: Optional[str] = None
    from_inventory: bool = False
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator(
        "weight", "volume", "price_per_unit", "total_price", "transport_price",
        "total_transport_cost", "paid_amount", "unpaid_amount", "total_amount",
        "remaining_amount", mode="before")
    @classmethod
    def fix_null_decimal(cls, v: Any) -> Any:
        """数据库中的 NULL 值转换为 0"""
        return v if v is not None else Decimal("0")

    @field_validator("photos", mode="before")
    @classmethod
    def fix_null_photos(cls, v: Any) -> Any:
        return v or []

    @field_validator("from_inventory", mode="before")
    @classmethod
    def fix_null_flag(cls, v: Any) -> Any:
        return bool(v)

    class Config:
        from_attributes = True


class OrderItemListResponse(BaseModel):
    """明细列表响应"""
    data: List[OrderItemResponse]
    total: int
