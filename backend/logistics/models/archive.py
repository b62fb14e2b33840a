"""
档案模型 - 文件夹树 + 资料
文件本身的存储不在本系统内，这里只保存地址和元数据。
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey

from logistics.db.base import Base


class ArchiveFolder(Base):
    """档案文件夹（parent_id 为空表示根目录）"""
    __tablename__ = "archive_folders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    parent_id = Column(Integer, ForeignKey("archive_folders.id"), index=True)

    created_by = Column(Integer, ForeignKey("admin_users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<ArchiveFolder {self.id}: {self.name}>"


class ArchiveMaterial(Base):
    """档案资料"""
    __tablename__ = "archive_materials"

    id = Column(Integer, primary_key=True, index=True)
    folder_id = Column(Integer, ForeignKey("archive_folders.id"), index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    file_url = Column(String(500))
    file_name = Column(String(200))
    file_type = Column(String(50))

    created_by = Column(Integer, ForeignKey("admin_users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<ArchiveMaterial {self.id}: {self.title}>"
