"""
状态与计量方式枚举

存储值保持与前端一致（俄文状态），枚举只做类型约束和比较用。
"""

import enum
from typing import Optional


class ItemStatus(str, enum.Enum):
    """订单明细状态"""
    ON_WAREHOUSE = "На складе"
    SHIPPED = "Отправлено"
    DELIVERED = "Доставлено"

    @classmethod
    def parse(cls, value) -> Optional["ItemStatus"]:
        """把库里的字符串转成枚举，未知值返回 None"""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def left_warehouse(self) -> bool:
        return self in (ItemStatus.SHIPPED, ItemStatus.DELIVERED)


class VolumeType(str, enum.Enum):
    """计量方式：kg 按重量，m³/cubic 按体积"""
    KG = "kg"
    CUBIC_METER = "m³"
    CUBIC = "cubic"


class OrderStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TruckStatus(str, enum.Enum):
    FREE = "Свободен"
    IN_TRANSIT = "В пути"
