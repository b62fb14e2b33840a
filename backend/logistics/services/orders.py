"""
订单 / 订单明细服务

每个操作：读取 → 比较差异 → 写入 → 状态联动 → 汇总重算 → 写历史 → 一次提交。
中间步骤只 flush，任何一步抛错都不会留下半截数据。
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from logistics.models.counterparty import Counterparty
from logistics.models.enums import ItemStatus, VolumeType
from logistics.models.order import Order, CustomerTracking
from logistics.models.order_item import OrderItem
from logistics.models.warehouse_inventory import WarehouseInventory
from logistics.schemas.order import OrderCreate, OrderUpdate
from logistics.schemas.order_item import OrderItemCreate, OrderItemUpdate, AddFromInventory
from logistics.services import inventory_ledger
from logistics.services.change_history import (
    ENTITY_ORDER, ENTITY_ORDER_ITEM, ORDER_ITEM_TRACKED_FIELDS,
    diff_fields, record_created, record_field_changes,
)
from logistics.services.item_lifecycle import (
    apply_status_transition, on_item_created, refresh_aggregates,
)
from logistics.services.order_totals import recompute_order_totals

logger = logging.getLogger(__name__)

# 明细上不允许为空的金额字段，提交空值时按 0 存
ITEM_REQUIRED_DECIMALS = ("transport_price", "total_transport_cost", "total_amount", "remaining_amount")
# 明细上不允许清空的字段，提交空值时忽略
ITEM_REQUIRED_FIELDS = ("code", "name", "quantity", "order_id", "volume_type", "status")


def _clean_item_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {}
    for field, value in payload.items():
        if value is None and field in ITEM_REQUIRED_FIELDS:
            continue
        if value is None and field in ITEM_REQUIRED_DECIMALS:
            value = Decimal("0")
        cleaned[field] = value
    return cleaned


async def _ensure_order(db: AsyncSession, order_id: int) -> Order:
    order = await db.get(Order, order_id)
    if not order:
        raise HTTPException(status_code=400, detail="订单不存在")
    return order


async def _ensure_counterparty(db: AsyncSession, counterparty_id: Optional[int]) -> None:
    if counterparty_id and not await db.get(Counterparty, counterparty_id):
        raise HTTPException(status_code=400, detail="客商不存在")


# ===== 订单 =====

def base_order_query():
    """构建包含客商和明细的基础查询"""
    return select(Order).options(
        selectinload(Order.counterparty),
        selectinload(Order.items))


async def load_order(db: AsyncSession, order_id: int) -> Optional[Order]:
    """加载包含关联的订单（刷新会话里已有的对象）"""
    result = await db.execute(
        base_order_query()
        .where(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_orders(
    db: AsyncSession,
    status: Optional[str] = None,
    counterparty_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100) -> tuple:
    """订单列表（最新在前），返回 (orders, total)"""
    query = base_order_query()
    count_query = select(func.count(Order.id))
    if status:
        query = query.where(Order.status == status)
        count_query = count_query.where(Order.status == status)
    if counterparty_id:
        query = query.where(Order.counterparty_id == counterparty_id)
        count_query = count_query.where(Order.counterparty_id == counterparty_id)

    result = await db.execute(query.order_by(Order.created_at.desc(), Order.id.desc()).offset(skip).limit(limit))
    total = (await db.execute(count_query)).scalar() or 0
    return list(result.scalars().all()), total


async def list_order_items(db: AsyncSession, order_id: int) -> List[OrderItem]:
    result = await db.execute(
        select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
    )
    return list(result.scalars().all())


async def create_order(db: AsyncSession, data: OrderCreate, user_id: int) -> Order:
    """创建订单"""
    await _ensure_counterparty(db, data.counterparty_id)

    order = Order(**data.model_dump(exclude_none=True), created_by=user_id)
    db.add(order)
    await db.flush()

    await record_created(db, ENTITY_ORDER, order.id, user_id, f"Создан заказ: {order.name}")
    await db.commit()
    logger.info(f"✅ 创建订单 {order.id}: {order.name}")
    return order


async def update_order(
    db: AsyncSession,
    order_id: int,
    data: OrderUpdate,
    user_id: int) -> Optional[Order]:
    """
    更新订单，提交的每个字段有变化就记一条历史

    订单不存在时什么都不做，返回 None。
    """
    order = await db.get(Order, order_id)
    if not order:
        return None

    payload = data.model_dump(exclude_unset=True)
    if payload.get("name", "") is None:
        payload.pop("name")
    if payload.get("status", "") is None:
        payload.pop("status")
    if "counterparty_id" in payload:
        await _ensure_counterparty(db, payload["counterparty_id"])

    changes = diff_fields(order, payload)
    for field, value in payload.items():
        setattr(order, field, value)
    await db.flush()

    await recompute_order_totals(db, order.id)
    await record_field_changes(db, ENTITY_ORDER, order.id, changes, user_id)
    await db.commit()
    return order


async def delete_order(db: AsyncSession, order_id: int) -> bool:
    """
    删除订单：先删查询码和明细，再删订单，最后重算明细涉及的仓库和货车

    明细关联的库存行保留。
    """
    order = await db.get(Order, order_id)
    if not order:
        return False

    result = await db.execute(
        select(OrderItem.warehouse_id, OrderItem.truck_id).where(OrderItem.order_id == order_id)
    )
    rows = result.all()
    warehouse_ids = [row.warehouse_id for row in rows]
    truck_ids = [row.truck_id for row in rows]

    await db.execute(delete(CustomerTracking).where(CustomerTracking.order_id == order_id))
    await db.execute(delete(OrderItem).where(OrderItem.order_id == order_id))
    await db.delete(order)
    await db.flush()

    await refresh_aggregates(db, warehouse_ids=warehouse_ids, truck_ids=truck_ids)
    await db.commit()
    logger.info(f"🗑️ 删除订单 {order_id}，明细 {len(rows)} 条")
    return True


# ===== 订单明细 =====

async def create_order_item(
    db: AsyncSession,
    order_id: int,
    data: OrderItemCreate,
    user_id: int) -> OrderItem:
    """
    添加明细

    直接以 На складе 状态落到仓库的明细会同时建立库存行。
    """
    await _ensure_order(db, order_id)

    payload = _clean_item_payload(data.model_dump(exclude_none=True))
    item = OrderItem(order_id=order_id, **payload, created_by=user_id)
    db.add(item)
    await db.flush()

    await on_item_created(db, item)
    await refresh_aggregates(db, [order_id], [item.warehouse_id], [item.truck_id])
    await record_created(
        db, ENTITY_ORDER_ITEM, item.id, user_id,
        f"Добавлен товар: {item.name} ({item.code}), количество {item.quantity}",
    )
    await db.commit()
    return item


async def update_order_item(
    db: AsyncSession,
    item_id: int,
    data: OrderItemUpdate,
    user_id: int) -> Optional[OrderItem]:
    """
    更新明细

    - 追踪字段逐个比较，变化的各记一条历史
    - 提交了 status 时按流转表联动库存
    - 变动前后涉及的订单、仓库、货车全部重算
    明细不存在时什么都不做，返回 None。
    """
    item = await db.get(OrderItem, item_id)
    if not item:
        return None

    payload = _clean_item_payload(data.model_dump(exclude_unset=True))
    if "order_id" in payload and payload["order_id"] != item.order_id:
        await _ensure_order(db, payload["order_id"])

    old_status = item.status
    old_order_id, old_warehouse_id, old_truck_id = item.order_id, item.warehouse_id, item.truck_id

    changes = diff_fields(item, payload, ORDER_ITEM_TRACKED_FIELDS)
    for field, value in payload.items():
        setattr(item, field, value)
    await db.flush()

    if "status" in payload:
        await apply_status_transition(db, item, old_status, payload["status"])

    await refresh_aggregates(
        db,
        [old_order_id, item.order_id],
        [old_warehouse_id, item.warehouse_id],
        [old_truck_id, item.truck_id],
    )
    await record_field_changes(db, ENTITY_ORDER_ITEM, item.id, changes, user_id)
    await db.commit()
    return item


async def delete_order_item(db: AsyncSession, item_id: int) -> bool:
    """删除明细，按删除前的订单/仓库/货车重算"""
    item = await db.get(OrderItem, item_id)
    if not item:
        return False

    order_id, warehouse_id, truck_id = item.order_id, item.warehouse_id, item.truck_id
    await db.delete(item)
    await db.flush()

    await refresh_aggregates(db, [order_id], [warehouse_id], [truck_id])
    await db.commit()
    logger.info(f"🗑️ 删除明细 {item_id}（订单 {order_id}）")
    return True


async def add_item_from_inventory(
    db: AsyncSession,
    order_id: int,
    data: AddFromInventory,
    user_id: int) -> OrderItem:
    """
    从库存行取货加入订单

    新明细复制库存行信息，状态 На складе 并关联该库存行，随后按取用件数出库。
    """
    await _ensure_order(db, order_id)
    row = await db.get(WarehouseInventory, data.inventory_item_id)
    if not row:
        raise HTTPException(status_code=400, detail="库存行不存在")
    if (row.available_quantity or 0) < data.quantity:
        raise HTTPException(
            status_code=400,
            detail=f"库存不足：可用库存 {row.available_quantity}，需要 {data.quantity}"
        )

    price = row.price_per_unit or Decimal("0")
    item = OrderItem(
        order_id=order_id,
        warehouse_id=row.warehouse_id,
        truck_id=data.truck_id,
        inventory_item_id=row.id,
        code=row.code,
        name=row.name,
        quantity=data.quantity,
        characteristics=row.characteristics,
        delivery_period=row.delivery_period,
        transport=row.transport or "Авто",
        destination=data.destination,
        volume_type=row.volume_type or VolumeType.KG.value,
        price_per_unit=price,
        volume=row.volume or Decimal("0"),
        weight=row.weight or Decimal("0"),
        total_price=price * data.quantity,
        transport_price=data.transport_price or Decimal("0"),
        total_transport_cost=data.total_transport_cost or Decimal("0"),
        status=ItemStatus.ON_WAREHOUSE.value,
        payment_status="unpaid",
        photos=list(row.photos or []),
        from_inventory=True,
        created_by=user_id,
    )
    db.add(item)
    await db.flush()

    await inventory_ledger.reduce(db, row.id, data.quantity)
    await refresh_aggregates(db, [order_id], [row.warehouse_id], [item.truck_id])
    await record_created(
        db, ENTITY_ORDER_ITEM, item.id, user_id,
        f"Добавлен товар со склада: {item.name} ({item.code}), количество {item.quantity}",
    )
    await db.commit()
    return item
