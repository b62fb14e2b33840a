"""
客户查询码服务

查询码格式：TRK + 日期 + 8 位随机十六进制，如 TRK20240501A3F09C1D
"""

import secrets
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.order import Order, CustomerTracking


async def generate_tracking_code(db: AsyncSession) -> str:
    """生成不重复的查询码"""
    date_str = datetime.now().strftime("%Y%m%d")
    while True:
        code = f"TRK{date_str}{secrets.token_hex(4).upper()}"
        existing = await db.execute(
            select(CustomerTracking.id).where(CustomerTracking.tracking_code == code)
        )
        if existing.scalar() is None:
            return code


async def create_tracking_code(
    db: AsyncSession,
    order_id: int,
    customer_name: Optional[str] = None,
    customer_email: Optional[str] = None) -> CustomerTracking:
    """为订单发一个客户查询码"""
    if not await db.get(Order, order_id):
        raise HTTPException(status_code=400, detail="订单不存在")

    tracking = CustomerTracking(
        tracking_code=await generate_tracking_code(db),
        order_id=order_id,
        customer_name=customer_name,
        customer_email=customer_email,
    )
    db.add(tracking)
    await db.commit()
    return tracking


async def list_tracking_codes(db: AsyncSession, order_id: int) -> List[CustomerTracking]:
    result = await db.execute(
        select(CustomerTracking).where(CustomerTracking.order_id == order_id).order_by(CustomerTracking.id)
    )
    return list(result.scalars().all())


async def get_order_by_tracking_code(db: AsyncSession, tracking_code: str) -> Optional[Order]:
    """凭查询码找订单，码不存在返回 None"""
    result = await db.execute(
        select(Order)
        .join(CustomerTracking, CustomerTracking.order_id == Order.id)
        .where(CustomerTracking.tracking_code == tracking_code.strip().upper())
    )
    return result.scalars().first()
