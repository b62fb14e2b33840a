"""
订单模型

汇总字段（total_*、paid_amount、unpaid_amount）是明细的派生缓存，
不是数据来源；每次明细增删改后由 order_totals.recompute_order_totals 全量重算。
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, DECIMAL
from sqlalchemy.orm import relationship

from logistics.db.base import Base


class Order(Base):
    """订单 - 一批货的发运/采购单"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True, comment="订单名称，如 Юсуф-77")
    code = Column(String(50), index=True, comment="订单编号")
    counterparty_id = Column(Integer, ForeignKey("counterparties.id"), index=True, comment="客商ID")

    # active: 进行中, completed: 已完成, cancelled: 已取消
    status = Column(String(20), nullable=False, default="active", index=True, comment="状态")

    warehouse = Column(String(100), comment="订单所属仓库名称")
    destination = Column(String(200), comment="目的地")
    expected_delivery = Column(Date, comment="预计送达日期")

    # 汇总缓存（从明细计算得出）
    total_amount = Column(DECIMAL(12, 2), default=Decimal("0"), comment="运费合计")
    paid_amount = Column(DECIMAL(12, 2), default=Decimal("0"), comment="已付")
    unpaid_amount = Column(DECIMAL(12, 2), default=Decimal("0"), comment="未付")
    total_quantity = Column(Integer, default=0, comment="总件数")
    total_weight = Column(DECIMAL(12, 3), default=Decimal("0"), comment="总重量（kg 明细）")
    total_volume = Column(DECIMAL(12, 3), default=Decimal("0"), comment="总体积（m³ 明细）")

    comments = Column(Text, comment="备注")

    created_by = Column(Integer, ForeignKey("admin_users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 关系（删除由 services.orders.delete_order 显式级联）
    counterparty = relationship("Counterparty", foreign_keys=[counterparty_id])
    items = relationship("OrderItem", back_populates="order", passive_deletes=True)

    def __repr__(self):
        return f"<Order {self.id}: {self.name} ({self.status})>"

    @property
    def status_display(self) -> str:
        status_map = {
            "active": "Активный",
            "completed": "Завершён",
            "cancelled": "Отменён",
        }
        return status_map.get(self.status, self.status)


class CustomerTracking(Base):
    """客户查询码 - 客户凭码查看订单进度"""
    __tablename__ = "customer_tracking"

    id = Column(Integer, primary_key=True, index=True)
    tracking_code = Column(String(32), unique=True, nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    customer_name = Column(String(100))
    customer_email = Column(String(100))
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<CustomerTracking {self.tracking_code} -> {self.order_id}>"
