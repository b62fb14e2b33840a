"""
货车模型

current_weight / current_volume 为当前装载明细的汇总，
由 truck_load.recompute_truck_load 全量重算。
"""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, DECIMAL

from logistics.db.base import Base
from logistics.models.enums import TruckStatus


class Truck(Base):
    """货车（Фура）"""
    __tablename__ = "trucks"

    id = Column(Integer, primary_key=True, index=True)
    number = Column(String(30), nullable=False, unique=True, comment="车号（唯一）")
    capacity = Column(DECIMAL(12, 3), default=Decimal("0"), comment="载重/容量")

    current_weight = Column(DECIMAL(12, 3), default=Decimal("0"), comment="当前重量")
    current_volume = Column(DECIMAL(12, 3), default=Decimal("0"), comment="当前体积")

    # Свободен / В пути
    status = Column(String(20), nullable=False, default=TruckStatus.FREE.value)
    driver_name = Column(String(100))
    driver_phone = Column(String(30))
    comments = Column(Text)

    created_by = Column(Integer, ForeignKey("admin_users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Truck {self.number} ({self.status})>"

    @property
    def load_percent(self) -> float:
        """按重量计算的装载率"""
        capacity = self.capacity or Decimal("0")
        if capacity <= 0:
            return 0.0
        return float((self.current_weight or Decimal("0")) / capacity * 100)
