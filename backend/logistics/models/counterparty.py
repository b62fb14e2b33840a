"""
客商模型 - 客户/供应商
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, DECIMAL

from logistics.db.base import Base


class Counterparty(Base):
    """客商（Контрагент）"""
    __tablename__ = "counterparties"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True, comment="名称")
    company = Column(String(200), comment="公司")
    email = Column(String(100))
    phone = Column(String(30))
    address = Column(Text)
    tax_id = Column(String(30), comment="税号")

    # client(客户), supplier(供应商), both(两者)
    type = Column(String(20), nullable=False, default="client", comment="类型")
    credit_limit = Column(DECIMAL(10, 2), default=Decimal("0"), comment="信用额度")
    comments = Column(Text)

    created_by = Column(Integer, ForeignKey("admin_users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Counterparty {self.id}: {self.name} ({self.type})>"

    @property
    def type_display(self) -> str:
        type_map = {
            "client": "Клиент",
            "supplier": "Поставщик",
            "both": "Клиент/Поставщик",
        }
        return type_map.get(self.type, self.type)
