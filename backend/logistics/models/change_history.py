"""
变更历史模型 - 订单、明细及各登记表的审计追踪

只追加，不修改、不删除。
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from logistics.db.base import Base


class ChangeHistory(Base):
    """变更历史

    entity_type:
    - order: 订单
    - orderItem: 订单明细
    - inventory: 库存行
    - counterparty: 客商
    - warehouse: 仓库
    - truck: 货车
    - archiveFolder / archiveMaterial: 档案
    """
    __tablename__ = "change_history"

    id = Column(Integer, primary_key=True, index=True)
    entity_type = Column(String(30), nullable=False, index=True, comment="实体类型")
    entity_id = Column(Integer, nullable=False, index=True, comment="实体ID")

    # created / updated
    action = Column(String(20), nullable=False, comment="操作类型")

    # 字段级变更（action=updated 时）
    field_changed = Column(String(50), comment="变更字段")
    old_value = Column(Text, comment="修改前")
    new_value = Column(Text, comment="修改后")

    description = Column(Text, comment="描述")

    user_id = Column(Integer, ForeignKey("admin_users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    user = relationship("AdminUser", foreign_keys=[user_id])

    def __repr__(self):
        return f"<ChangeHistory {self.action} {self.entity_type}:{self.entity_id} {self.field_changed or ''}>"

    @property
    def action_display(self) -> str:
        action_map = {
            "created": "Создано",
            "updated": "Изменено",
        }
        return action_map.get(self.action, self.action)
