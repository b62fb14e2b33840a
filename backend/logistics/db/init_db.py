import asyncio
import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.config import settings
from logistics.db.session import engine, SessionLocal
from logistics.db.base import Base

# 导入所有模型，确保表能被创建
from logistics.models import (  # noqa: F401
    AdminUser, Counterparty, Warehouse, WarehouseInventory, Truck,
    Order, CustomerTracking, OrderItem, ChangeHistory, ArchiveFolder, ArchiveMaterial
)

logger = logging.getLogger(__name__)


async def ensure_tables_exist(bind=None) -> None:
    """
    确保数据库表存在（应用启动时调用）
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ensure_default_admin(db: AsyncSession) -> AdminUser:
    """
    确保默认操作员存在

    无认证模式下所有未带 X-User-Id 的请求都记到这个账号上。
    """
    admin = await db.get(AdminUser, settings.DEFAULT_USER_ID)
    if admin:
        return admin

    result = await db.execute(
        select(AdminUser).where(AdminUser.username == settings.DEFAULT_ADMIN_USERNAME)
    )
    admin = result.scalar_one_or_none()
    if admin:
        return admin

    logger.info("创建默认操作员...")
    admin = AdminUser(
        id=settings.DEFAULT_USER_ID,
        username=settings.DEFAULT_ADMIN_USERNAME,
        full_name=settings.DEFAULT_ADMIN_FULL_NAME,
        role="admin",
        is_active=True,
    )
    db.add(admin)
    await db.commit()
    return admin


async def init_db() -> None:
    """
    初始化数据库 - 创建所有表和默认操作员
    """
    await ensure_tables_exist()
    async with SessionLocal() as db:
        await ensure_default_admin(db)
    logger.info("数据库初始化完成")


if __name__ == "__main__":
    asyncio.run(init_db())
