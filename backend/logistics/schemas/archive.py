"""档案Schema"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ArchiveFolderCreate(BaseModel):
    """创建文件夹"""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    parent_id: Optional[int] = Field(None, description="上级文件夹，空为根目录")


class ArchiveFolderUpdate(BaseModel):
    """更新文件夹"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    parent_id: Optional[int] = None


class ArchiveFolderResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    parent_id: Optional[int] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ArchiveMaterialCreate(BaseModel):
    """创建资料（文件已由外部存储，这里只登记地址）"""
    folder_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    file_url: Optional[str] = Field(None, max_length=500)
    file_name: Optional[str] = Field(None, max_length=200)
    file_type: Optional[str] = Field(None, max_length=50)


class ArchiveMaterialUpdate(BaseModel):
    """更新资料"""
    folder_id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    file_url: Optional[str] = Field(None, max_length=500)
    file_name: Optional[str] = Field(None, max_length=200)
    file_type: Optional[str] = Field(None, max_length=50)


class ArchiveMaterialResponse(BaseModel):
    id: int
    folder_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ArchiveFolderContents(BaseModel):
    """文件夹内容：子文件夹 + 资料"""
    folder: Optional[ArchiveFolderResponse] = None
    folders: List[ArchiveFolderResponse]
    materials: List[ArchiveMaterialResponse]
