"""
订单明细模型 - 订单中的每一行货物

状态流转（На складе → Отправлено → Доставлено，以及退回 На складе）
会联动仓库库存，见 services/item_lifecycle.py。

inventory_item_id 指向为该明细建立的库存行，同一时刻最多一条；
明细在 На складе 状态下第一次落到仓库时建立。
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, DECIMAL, Boolean, JSON
from sqlalchemy.orm import relationship

from logistics.db.base import Base
from logistics.models.enums import ItemStatus


class OrderItem(Base):
    """订单明细"""
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)

    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), index=True, comment="所在仓库")
    truck_id = Column(Integer, ForeignKey("trucks.id"), index=True, comment="装载货车")
    inventory_item_id = Column(Integer, ForeignKey("warehouse_inventory.id"), index=True, comment="关联库存行")

    # === 货物信息 ===
    code = Column(String(50), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    characteristics = Column(Text)
    comments = Column(Text)
    raw_text = Column(Text, comment="自动填充用的原始文本")
    photos = Column(JSON, default=list)

    # === 运输信息 ===
    delivery_period = Column(String(50))
    destination = Column(String(200))
    shipment_date = Column(Date)
    expected_delivery_date = Column(Date)
    transport = Column(String(50), default="Авто")

    # === 计量 ===
    # kg: 按重量（volume 字段此时也可能记重量，见货车载重计算）
    # m³ / cubic: 按体积
    volume_type = Column(String(10), default="kg")
    weight = Column(DECIMAL(12, 3), default=Decimal("0"))
    volume = Column(DECIMAL(12, 3), default=Decimal("0"))

    # === 价格与付款 ===
    price_per_unit = Column(DECIMAL(12, 2), default=Decimal("0"))
    total_price = Column(DECIMAL(12, 2), default=Decimal("0"))
    transport_price = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0"))
    total_transport_cost = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0"))
    paid_amount = Column(DECIMAL(12, 2), default=Decimal("0"))
    unpaid_amount = Column(DECIMAL(12, 2), default=Decimal("0"))
    # prepaid, postpaid
    payment_type = Column(String(20), default="postpaid")
    # paid, unpaid, prepaid
    payment_status = Column(String(20), default="unpaid")
    total_amount = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0"), comment="总金额")
    remaining_amount = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0"), comment="余额")

    # === 状态 ===
    status = Column(String(20), default=ItemStatus.ON_WAREHOUSE.value, index=True)
    from_inventory = Column(Boolean, default=False, comment="是否从库存添加")

    created_by = Column(Integer, ForeignKey("admin_users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 关系
    order = relationship("Order", back_populates="items")
    warehouse = relationship("Warehouse", foreign_keys=[warehouse_id])
    truck = relationship("Truck", foreign_keys=[truck_id])
    inventory_item = relationship("WarehouseInventory", foreign_keys=[inventory_item_id])

    def __repr__(self):
        return f"<OrderItem {self.code} x {self.quantity} ({self.status})>"

    @property
    def item_status(self):
        return ItemStatus.parse(self.status)
