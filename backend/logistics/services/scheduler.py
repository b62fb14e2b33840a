"""
定时任务调度器服务
使用 APScheduler 每晚执行一次全量对账
"""

import logging
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from logistics.core.config import settings
from logistics.db.session import SessionLocal
from logistics.services.reconciliation import reconcile_all

logger = logging.getLogger(__name__)

# 全局调度器实例
scheduler: Optional[AsyncIOScheduler] = None


async def nightly_reconcile():
    """执行夜间对账任务"""
    try:
        async with SessionLocal() as db:
            await reconcile_all(db)
    except Exception as e:
        logger.error(f"❌ 夜间对账失败: {str(e)}")


def init_scheduler():
    """初始化并启动调度器"""
    global scheduler

    if not settings.RECONCILE_ENABLED:
        logger.info("🔁 夜间对账已禁用")
        return

    scheduler = AsyncIOScheduler()

    # 默认每天凌晨 2:30 执行
    scheduler.add_job(
        nightly_reconcile,
        trigger=CronTrigger(
            hour=settings.RECONCILE_HOUR,
            minute=settings.RECONCILE_MINUTE
        ),
        id="nightly_reconcile",
        name="夜间全量对账",
        replace_existing=True
    )

    scheduler.start()
    logger.info(f"⏰ 定时任务调度器已启动 - 对账时间: 每天 {settings.RECONCILE_HOUR:02d}:{settings.RECONCILE_MINUTE:02d}")


def shutdown_scheduler():
    """关闭调度器"""
    global scheduler
    if scheduler:
        scheduler.shutdown()
        scheduler = None
        logger.info("⏰ 定时任务调度器已关闭")


def get_scheduler_status() -> dict:
    """获取调度器状态"""
    if not scheduler:
        return {
            "enabled": settings.RECONCILE_ENABLED,
            "running": False,
            "jobs": []
        }

    jobs = []
    for job in scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None
        })

    return {
        "enabled": settings.RECONCILE_ENABLED,
        "running": scheduler.running,
        "jobs": jobs
    }
