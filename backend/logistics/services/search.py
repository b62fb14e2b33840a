"""全局搜索 - 订单、明细、客商、库存，按关键字模糊匹配（不区分大小写）"""

from typing import Dict, List

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.counterparty import Counterparty
from logistics.models.order import Order
from logistics.models.order_item import OrderItem
from logistics.models.warehouse_inventory import WarehouseInventory
from logistics.services.orders import base_order_query

SEARCH_LIMIT = 50


async def search_orders(db: AsyncSession, keyword: str) -> List[Order]:
    pattern = f"%{keyword}%"
    result = await db.execute(
        base_order_query()
        .where(or_(Order.name.ilike(pattern), Order.code.ilike(pattern)))
        .order_by(Order.created_at.desc())
        .limit(SEARCH_LIMIT)
    )
    return list(result.scalars().all())


async def search_order_items(db: AsyncSession, keyword: str) -> List[OrderItem]:
    pattern = f"%{keyword}%"
    result = await db.execute(
        select(OrderItem)
        .where(or_(OrderItem.code.ilike(pattern), OrderItem.name.ilike(pattern)))
        .order_by(OrderItem.created_at.desc())
        .limit(SEARCH_LIMIT)
    )
    return list(result.scalars().all())


async def search_counterparties(db: AsyncSession, keyword: str) -> List[Counterparty]:
    pattern = f"%{keyword}%"
    result = await db.execute(
        select(Counterparty)
        .where(or_(Counterparty.name.ilike(pattern), Counterparty.company.ilike(pattern)))
        .order_by(Counterparty.name)
        .limit(SEARCH_LIMIT)
    )
    return list(result.scalars().all())


async def search_inventory(db: AsyncSession, keyword: str) -> List[WarehouseInventory]:
    pattern = f"%{keyword}%"
    result = await db.execute(
        select(WarehouseInventory)
        .where(or_(
            WarehouseInventory.code.ilike(pattern),
            WarehouseInventory.name.ilike(pattern),
            WarehouseInventory.description.ilike(pattern),
        ))
        .order_by(WarehouseInventory.created_at.desc())
        .limit(SEARCH_LIMIT)
    )
    return list(result.scalars().all())


async def search_all(db: AsyncSession, keyword: str) -> Dict[str, list]:
    keyword = keyword.strip()
    if not keyword:
        return {"orders": [], "items": [], "counterparties": [], "inventory": []}
    return {
        "orders": await search_orders(db, keyword),
        "items": await search_order_items(db, keyword),
        "counterparties": await search_counterparties(db, keyword),
        "inventory": await search_inventory(db, keyword),
    }
