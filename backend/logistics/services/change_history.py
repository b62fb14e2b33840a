"""
变更历史服务 - 审计追踪

- record_change: 追加一条历史（只追加，不提供修改/删除）
- diff_fields: 比较现有值和提交值，只保留真正变化的字段
- record_field_changes: 每个变化字段写一条 updated 记录
- get_change_history: 按实体查询，最新在前，带操作人名称
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.numbers import format_value, to_decimal
from logistics.models.admin_user import AdminUser
from logistics.models.change_history import ChangeHistory

# 实体类型
ENTITY_ORDER = "order"
ENTITY_ORDER_ITEM = "orderItem"
ENTITY_INVENTORY = "inventory"
ENTITY_COUNTERPARTY = "counterparty"
ENTITY_WAREHOUSE = "warehouse"
ENTITY_TRUCK = "truck"
ENTITY_ARCHIVE_FOLDER = "archiveFolder"
ENTITY_ARCHIVE_MATERIAL = "archiveMaterial"

ACTION_CREATED = "created"
ACTION_UPDATED = "updated"

# 订单明细需要记录历史的字段
ORDER_ITEM_TRACKED_FIELDS = (
    "name",
    "quantity",
    "price_per_unit",
    "total_price",
    "status",
    "destination",
    "transport",
    "characteristics",
    "volume",
    "weight",
    "payment_status",
    "comments",
    "delivery_period",
    "transport_price",
    "total_transport_cost",
    "volume_type",
    "total_amount",
    "remaining_amount",
    "paid_amount",
    "unpaid_amount",
    "warehouse_id",
    "truck_id",
)


@dataclass(frozen=True)
class FieldChange:
    field: str
    old_value: Any
    new_value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (Decimal, int, float)) and not isinstance(value, bool)


def _values_equal(old: Any, new: Any) -> bool:
    """比较新旧值；数值按 Decimal 比较（50.000 == 50），空串与 None 视为相同"""
    if old is None and new == "" or old == "" and new is None:
        return True
    if _is_number(old) or _is_number(new):
        if old is None or new is None:
            return False
        return to_decimal(old) == to_decimal(new)
    if isinstance(old, (date, datetime)) and isinstance(new, str):
        return old.isoformat() == new
    return old == new


def diff_fields(
    current: Any,
    payload: Dict[str, Any],
    fields: Optional[Iterable[str]] = None) -> List[FieldChange]:
    """
    找出 payload 中真正变化的字段

    Args:
        current: 当前 ORM 对象
        payload: 提交的字段（只比较其中出现的字段）
        fields: 需要追踪的字段；None 表示 payload 中全部字段
    """
    tracked = list(fields) if fields is not None else list(payload.keys())
    changes = []
    for field in tracked:
        if field not in payload:
            continue
        old_value = getattr(current, field, None)
        new_value = payload[field]
        if not _values_equal(old_value, new_value):
            changes.append(FieldChange(field=field, old_value=old_value, new_value=new_value))
    return changes


async def record_change(
    db: AsyncSession,
    entity_type: str,
    entity_id: int,
    action: str,
    user_id: int,
    description: Optional[str] = None,
    field_changed: Optional[str] = None,
    old_value: Any = None,
    new_value: Any = None) -> ChangeHistory:
    """追加一条变更历史"""
    entry = ChangeHistory(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        field_changed=field_changed,
        old_value=format_value(old_value) if field_changed else None,
        new_value=format_value(new_value) if field_changed else None,
        description=description,
        user_id=user_id,
        created_at=datetime.utcnow(),
    )
    db.add(entry)
    return entry


async def record_created(
    db: AsyncSession,
    entity_type: str,
    entity_id: int,
    user_id: int,
    description: str) -> ChangeHistory:
    return await record_change(
        db, entity_type, entity_id, ACTION_CREATED, user_id, description=description
    )


async def record_field_changes(
    db: AsyncSession,
    entity_type: str,
    entity_id: int,
    changes: List[FieldChange],
    user_id: int) -> List[ChangeHistory]:
    """每个变化字段写一条 updated 记录"""
    entries = []
    for change in changes:
        old_text = format_value(change.old_value)
        new_text = format_value(change.new_value)
        entries.append(await record_change(
            db,
            entity_type,
            entity_id,
            ACTION_UPDATED,
            user_id,
            description=f"Изменено поле {change.field}: {old_text} → {new_text}",
            field_changed=change.field,
            old_value=change.old_value,
            new_value=change.new_value,
        ))
    return entries


async def get_change_history(
    db: AsyncSession,
    entity_type: str,
    entity_id: int) -> List[dict]:
    """查询实体的变更历史（最新在前），附带操作人名称"""
    result = await db.execute(
        select(ChangeHistory, AdminUser.username, AdminUser.full_name)
        .outerjoin(AdminUser, ChangeHistory.user_id == AdminUser.id)
        .where(
            ChangeHistory.entity_type == entity_type,
            ChangeHistory.entity_id == entity_id,
        )
        .order_by(ChangeHistory.created_at.desc(), ChangeHistory.id.desc())
    )
    history = []
    for entry, username, full_name in result.all():
        history.append({
            "id": entry.id,
            "entity_type": entry.entity_type,
            "entity_id": entry.entity_id,
            "action": entry.action,
            "action_display": entry.action_display,
            "field_changed": entry.field_changed,
            "old_value": entry.old_value,
            "new_value": entry.new_value,
            "description": entry.description,
            "user_id": entry.user_id,
            "username": username or "",
            "full_name": full_name or "",
            "created_at": entry.created_at,
        })
    return history
