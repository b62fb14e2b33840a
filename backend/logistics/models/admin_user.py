from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime

from logistics.db.base import Base


class AdminUser(Base):
    """后台操作员

    认证由外部负责，这里只作为操作日志和 created_by 的外键目标。
    """
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(200), comment="密码哈希（认证不在本系统内）")
    full_name = Column(String(100), nullable=False, default="")
    # admin, manager, viewer
    role = Column(String(20), nullable=False, default="admin")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<AdminUser {self.username} ({self.role})>"

    @property
    def display_name(self) -> str:
        return self.full_name or self.username
