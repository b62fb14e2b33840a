"""
登记表Schema - 客商、仓库、货车
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from logistics.models.enums import TruckStatus


# ===== 客商 =====
class CounterpartyBase(BaseModel):
    """客商基础字段"""
    name: str = Field(..., min_length=1, max_length=100, description="名称")
    company: Optional[str] = Field(None, max_length=200, description="公司")
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    tax_id: Optional[str] = Field(None, max_length=30, description="税号")
    type: str = Field(default="client", description="client / supplier / both")
    credit_limit: Optional[Decimal] = Field(None, ge=0, description="信用额度")
    comments: Optional[str] = None


class CounterpartyCreate(CounterpartyBase):
    """创建客商"""
    pass


class CounterpartyUpdate(BaseModel):
    """更新客商"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    company: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    tax_id: Optional[str] = Field(None, max_length=30)
    type: Optional[str] = None
    credit_limit: Optional[Decimal] = Field(None, ge=0)
    comments: Optional[str] = None


class CounterpartyResponse(CounterpartyBase):
    """客商响应"""
    id: int
    type_display: str = ""
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CounterpartyListResponse(BaseModel):
    """客商列表响应"""
    data: List[CounterpartyResponse]
    total: int


# ===== 仓库 =====
class WarehouseBase(BaseModel):
    """仓库基础字段"""
    name: str = Field(..., min_length=1, max_length=100, description="名称")
    location: Optional[str] = Field(None, max_length=100, description="所在城市")
    address: Optional[str] = None
    capacity: Optional[Decimal] = Field(None, ge=0, description="容量（m³）")


class WarehouseCreate(WarehouseBase):
    """创建仓库"""
    pass


class WarehouseUpdate(BaseModel):
    """更新仓库"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = None
    capacity: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None


class WarehouseResponse(WarehouseBase):
    """仓库响应"""
    id: int
    is_active: bool = True
    total_items: int = 0
    total_volume: Decimal = Decimal("0")
    total_value: Decimal = Decimal("0")
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("total_items", mode="before")
    @classmethod
    def fix_null_items(cls, v: Any) -> int:
        return v or 0

    @field_validator("total_volume", "total_value", mode="before")
    @classmethod
    def fix_null_decimal(cls, v: Any) -> Any:
        """数据库中的 NULL 值转换为 0"""
        return v if v is not None else Decimal("0")

    class Config:
        from_attributes = True


class WarehouseListResponse(BaseModel):
    """仓库列表响应"""
    data: List[WarehouseResponse]
    total: int


# ===== 货车 =====
class TruckBase(BaseModel):
    """货车基础字段"""
    number: str = Field(..., min_length=1, max_length=30, description="车号")
    capacity: Optional[Decimal] = Field(None, ge=0, description="载重")
    status: TruckStatus = Field(default=TruckStatus.FREE.value, description="Свободен / В пути")
    driver_name: Optional[str] = Field(None, max_length=100)
    driver_phone: Optional[str] = Field(None, max_length=30)
    comments: Optional[str] = None

    class Config:
        use_enum_values = True


class TruckCreate(TruckBase):
    """创建货车"""
    pass


class TruckUpdate(BaseModel):
    """更新货车"""
    number: Optional[str] = Field(None, min_length=1, max_length=30)
    capacity: Optional[Decimal] = Field(None, ge=0)
    status: Optional[TruckStatus] = None
    driver_name: Optional[str] = Field(None, max_length=100)
    driver_phone: Optional[str] = Field(None, max_length=30)
    comments: Optional[str] = None

    class Config:
        use_enum_values = True


class TruckResponse(BaseModel):
    """货车响应"""
    id: int
    number: str
    capacity: Decimal = Decimal("0")
    current_weight: Decimal = Decimal("0")
    current_volume: Decimal = Decimal("0")
    load_percent: float = 0.0
    status: str
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    comments: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("capacity", "current_weight", "current_volume", mode="before")
    @classmethod
    def fix_null_decimal(cls, v: Any) -> Any:
        """数据库中的 NULL 值转换为 0"""
        return v if v is not None else Decimal("0")

    class Config:
        from_attributes = True


class TruckListResponse(BaseModel):
    """货车列表响应"""
    data: List[TruckResponse]
    total: int
