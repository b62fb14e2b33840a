"""依赖注入 - 无认证模式，操作人由请求头传入"""
from typing import AsyncGenerator, Optional

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.config import settings
from logistics.db.session import SessionLocal


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    获取数据库会话依赖
    """
    async with SessionLocal() as session:
        yield session


async def get_current_user_id(
    x_user_id: Optional[int] = Header(None, alias="X-User-Id")) -> int:
    """
    当前操作人ID

    认证由上游负责，这里只读取 X-User-Id，缺省为默认操作员。
    """
    return x_user_id or settings.DEFAULT_USER_ID
