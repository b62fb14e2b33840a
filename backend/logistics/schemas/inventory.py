"""库存Schema"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class InventoryBase(BaseModel):
    """库存行基础字段"""
    warehouse_id: int = Field(..., description="仓库ID")
    code: str = Field(..., min_length=1, max_length=50, description="货物编码")
    name: str = Field(..., min_length=1, max_length=200, description="货物名称")
    description: Optional[str] = None
    characteristics: Optional[str] = None
    quantity: int = Field(default=0, ge=0, description="名义库存")
    volume_type: Optional[str] = Field(None, max_length=10)
    price_per_unit: Optional[Decimal] = Field(None, ge=0)
    volume: Optional[Decimal] = Field(None, ge=0)
    weight: Optional[Decimal] = Field(None, ge=0)
    delivery_period: Optional[str] = Field(None, max_length=50)
    transport: Optional[str] = Field(None, max_length=50)
    photos: List[str] = Field(default_factory=list)


class InventoryCreate(InventoryBase):
    """创建库存行（available_quantity 缺省等于 quantity）"""
    available_quantity: Optional[int] = Field(None, ge=0, description="可用数量")

    @model_validator(mode="after")
    def check_available(self) -> "InventoryCreate":
        if self.available_quantity is not None and self.available_quantity > self.quantity:
            raise ValueError("可用数量不能大于库存数量")
        return self


class InventoryUpdate(BaseModel):
    """更新库存行"""
    warehouse_id: Optional[int] = None
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    characteristics: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    available_quantity: Optional[int] = Field(None, ge=0)
    volume_type: Optional[str] = Field(None, max_length=10)
    price_per_unit: Optional[Decimal] = Field(None, ge=0)
    volume: Optional[Decimal] = Field(None, ge=0)
    weight: Optional[Decimal] = Field(None, ge=0)
    delivery_period: Optional[str] = Field(None, max_length=50)
    transport: Optional[str] = Field(None, max_length=50)
    photos: Optional[List[str]] = None


class InventoryReduce(BaseModel):
    """出库"""
    quantity: int = Field(..., gt=0, description="出库件数")


class InventoryResponse(BaseModel):
    """库存行响应"""
    id: int
    warehouse_id: int
    warehouse_name: str = ""
    code: str
    name: str
    description: Optional[str] = None
    characteristics: Optional[str] = None
    quantity: int
    available_quantity: int
    used_quantity: int = 0
    volume_type: Optional[str] = None
    price_per_unit: Optional[Decimal] = None
    volume: Optional[Decimal] = None
    weight: Optional[Decimal] = None
    delivery_period: Optional[str] = None
    transport: Optional[str] = None
    photos: List[str] = []
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("photos", mode="before")
    @classmethod
    def fix_null_photos(cls, v: Any) -> Any:
        return v or []

    class Config:
        from_attributes = True


class InventoryListResponse(BaseModel):
    """库存列表响应"""
    data: List[InventoryResponse]
    total: int
