"""
订单明细生命周期 - 状态流转与库存联动

状态：На складе → Отправлено → Доставлено，以及 Отправлено/Доставлено → На складе

| 旧状态 → 新状态                         | 库存动作                                   |
|-----------------------------------------|--------------------------------------------|
| На складе → Отправлено/Доставлено        | REDUCE：已关联库存行时按明细数量出库        |
| Отправлено/Доставлено → На складе        | RETURN：已关联则退回，否则有仓库时建库存行  |
| 其他（含空/未知）→ На складе             | MATERIALIZE：有仓库且未关联时建库存行       |
| 其余组合                                 | 无                                         |

只有更新数据里明确带了 status 才会触发流转，不做推断。
"""

import enum
import logging
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.enums import ItemStatus
from logistics.models.order_item import OrderItem
from logistics.services import inventory_ledger
from logistics.services.order_totals import recompute_order_totals
from logistics.services.truck_load import recompute_truck_load

logger = logging.getLogger(__name__)


class InventoryEffect(str, enum.Enum):
    NONE = "none"
    REDUCE = "reduce"
    RETURN = "return"
    MATERIALIZE = "materialize"


def resolve_effect(old_status, new_status) -> InventoryEffect:
    """按新旧状态查表得到库存动作"""
    if new_status is None or new_status == old_status:
        return InventoryEffect.NONE

    old = ItemStatus.parse(old_status)
    new = ItemStatus.parse(new_status)
    if new is None or old == new:
        return InventoryEffect.NONE

    if old == ItemStatus.ON_WAREHOUSE and new.left_warehouse:
        return InventoryEffect.REDUCE
    if new == ItemStatus.ON_WAREHOUSE:
        if old is not None and old.left_warehouse:
            return InventoryEffect.RETURN
        return InventoryEffect.MATERIALIZE
    return InventoryEffect.NONE


async def apply_status_transition(
    db: AsyncSession,
    item: OrderItem,
    old_status,
    new_status) -> InventoryEffect:
    """
    执行状态流转对应的库存动作

    item 为更新后的明细（数量、仓库等取新值）。
    """
    effect = resolve_effect(old_status, new_status)
    if effect == InventoryEffect.NONE:
        return effect

    logger.info(f"🔄 明细 {item.id} 状态 {old_status} → {new_status}: {effect.value}")

    if effect == InventoryEffect.REDUCE:
        if item.inventory_item_id:
            await inventory_ledger.reduce(db, item.inventory_item_id, item.quantity)
    elif effect == InventoryEffect.RETURN:
        if item.inventory_item_id:
            await inventory_ledger.replenish(db, item.inventory_item_id, item.quantity)
        elif item.warehouse_id:
            await inventory_ledger.materialize(db, item)
    elif effect == InventoryEffect.MATERIALIZE:
        if item.warehouse_id and not item.inventory_item_id:
            await inventory_ledger.materialize(db, item)
    return effect


async def on_item_created(db: AsyncSession, item: OrderItem) -> None:
    """新建明细直接处于 На складе 且有仓库时，建立库存行"""
    if (
        item.item_status == ItemStatus.ON_WAREHOUSE
        and item.warehouse_id
        and not item.inventory_item_id
    ):
        await inventory_ledger.materialize(db, item)


def _ids(values: Iterable[Optional[int]]) -> list:
    return sorted({v for v in values if v})


async def refresh_aggregates(
    db: AsyncSession,
    order_ids: Iterable[Optional[int]] = (),
    warehouse_ids: Iterable[Optional[int]] = (),
    truck_ids: Iterable[Optional[int]] = ()) -> None:
    """
    明细增删改后无条件重算相关汇总

    调用方传入变动前后涉及的全部 id（空值自动忽略）。
    """
    for order_id in _ids(order_ids):
        await recompute_order_totals(db, order_id)
    for warehouse_id in _ids(warehouse_ids):
        await inventory_ledger.recompute_warehouse_stats(db, warehouse_id)
    for truck_id in _ids(truck_ids):
        await recompute_truck_load(db, truck_id)
