"""变更历史 Schema"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class ChangeHistoryResponse(BaseModel):
    """历史记录响应"""
    id: int
    entity_type: str
    entity_id: int
    action: str
    field_changed: Optional[str]
    old_value: Optional[str]
    new_value: Optional[str]
    description: Optional[str]
    user_id: int
    created_at: datetime

    # 显示字段
    action_display: str
    username: str = ""
    full_name: str = ""

    class Config:
        from_attributes = True


class ChangeHistoryListResponse(BaseModel):
    """历史记录列表响应"""
    data: List[ChangeHistoryResponse]
    total: int
