"""
仓库模型

total_items / total_volume / total_value 是库存行的汇总缓存，
每次库存变动后由 inventory_ledger.recompute_warehouse_stats 全量重算。
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, DECIMAL

from logistics.db.base import Base


class Warehouse(Base):
    """仓库"""
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True, comment="名称")
    location = Column(String(100), comment="所在城市")
    address = Column(Text)
    capacity = Column(DECIMAL(10, 3), default=Decimal("0"), comment="容量（m³）")
    is_active = Column(Boolean, default=True, comment="是否启用（删除为软删除）")

    # 汇总缓存
    total_items = Column(Integer, default=0, comment="库存总件数")
    total_volume = Column(DECIMAL(10, 3), default=Decimal("0"), comment="库存总体积")
    total_value = Column(DECIMAL(12, 2), default=Decimal("0"), comment="库存总价值")

    created_by = Column(Integer, ForeignKey("admin_users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Warehouse {self.id}: {self.name}>"
