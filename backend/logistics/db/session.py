from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from logistics.core.config import settings

# 创建异步引擎
# 仅在开发环境打印SQL（通过 SQL_DEBUG 控制）
engine = create_async_engine(
    settings.async_database_uri,
    echo=settings.SQL_DEBUG,
    future=True,
)

# 创建异步会话
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
