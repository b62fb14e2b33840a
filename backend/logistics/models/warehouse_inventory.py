"""
仓库库存行

quantity 为名义库存，available_quantity 为尚未被发出/送达明细占用的数量，
保持 0 <= available_quantity。库存行不会被明细流转自动删除，只能手动删除。
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, DECIMAL, JSON
from sqlalchemy.orm import relationship

from logistics.db.base import Base


class WarehouseInventory(Base):
    """仓库库存（Складской остаток）"""
    __tablename__ = "warehouse_inventory"

    id = Column(Integer, primary_key=True, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)

    code = Column(String(50), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    characteristics = Column(Text)

    quantity = Column(Integer, nullable=False, default=0, comment="名义库存")
    available_quantity = Column(Integer, nullable=False, default=0, comment="可用数量")

    volume_type = Column(String(10))
    price_per_unit = Column(DECIMAL(12, 2))
    volume = Column(DECIMAL(12, 3))
    weight = Column(DECIMAL(12, 3))
    delivery_period = Column(String(50))
    transport = Column(String(50))
    photos = Column(JSON, default=list)

    created_by = Column(Integer, ForeignKey("admin_users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    warehouse = relationship("Warehouse", foreign_keys=[warehouse_id])

    def __repr__(self):
        return f"<WarehouseInventory {self.warehouse_id}:{self.code} {self.available_quantity}/{self.quantity}>"

    @property
    def used_quantity(self) -> int:
        """已被占用的数量"""
        return (self.quantity or 0) - (self.available_quantity or 0)
