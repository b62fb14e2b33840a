from decimal import Decimal

import pytest
from sqlalchemy import select

from logistics.core.config import settings
from logistics.models import ChangeHistory, WarehouseInventory
from logistics.schemas.order_item import OrderItemUpdate
from logistics.services import orders as order_service
from logistics.services.item_lifecycle import InventoryEffect, resolve_effect

ON_WAREHOUSE = "На складе"
SHIPPED = "Отправлено"
DELIVERED = "Доставлено"


@pytest.mark.parametrize("old, new, effect", [
    (ON_WAREHOUSE, SHIPPED, InventoryEffect.REDUCE),
    (ON_WAREHOUSE, DELIVERED, InventoryEffect.REDUCE),
    (SHIPPED, ON_WAREHOUSE, InventoryEffect.RETURN),
    (DELIVERED, ON_WAREHOUSE, InventoryEffect.RETURN),
    (None, ON_WAREHOUSE, InventoryEffect.MATERIALIZE),
    ("архив", ON_WAREHOUSE, InventoryEffect.MATERIALIZE),
    (SHIPPED, DELIVERED, InventoryEffect.NONE),
    (DELIVERED, SHIPPED, InventoryEffect.NONE),
    (ON_WAREHOUSE, ON_WAREHOUSE, InventoryEffect.NONE),
    (ON_WAREHOUSE, None, InventoryEffect.NONE),
    (ON_WAREHOUSE, "потерян", InventoryEffect.NONE),
])
def test_resolve_effect(old, new, effect):
    assert resolve_effect(old, new) == effect


async def _update(db, item, **fields):
    return await order_service.update_order_item(
        db, item.id, OrderItemUpdate(**fields), settings.DEFAULT_USER_ID)


async def _item_history(db, item_id):
    result = await db.execute(
        select(ChangeHistory)
        .where(ChangeHistory.entity_type == "orderItem", ChangeHistory.entity_id == item_id)
        .order_by(ChangeHistory.id)
    )
    return result.scalars().all()


async def test_shipping_reduces_linked_row(db, make_warehouse, make_order, make_item):
    warehouse = await make_warehouse()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=10, weight=Decimal("50"))

    row = await db.get(WarehouseInventory, item.inventory_item_id)
    assert (row.quantity, row.available_quantity) == (10, 10)
    assert order.total_weight == Decimal("50")

    await _update(db, item, status=SHIPPED)

    assert row.available_quantity == 0
    assert row.quantity == 10
    updates = [h for h in await _item_history(db, item.id) if h.action == "updated"]
    assert len(updates) == 1
    assert updates[0].field_changed == "status"
    assert updates[0].old_value == ON_WAREHOUSE
    assert updates[0].new_value == SHIPPED


async def test_return_to_warehouse_restores_availability(db, make_warehouse, make_order, make_item):
    warehouse = await make_warehouse()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=4)
    row = await db.get(WarehouseInventory, item.inventory_item_id)

    await _update(db, item, status=DELIVERED)
    assert row.available_quantity == 0

    await _update(db, item, status=ON_WAREHOUSE)
    assert row.available_quantity == 4
    assert item.inventory_item_id == row.id


async def test_shipped_to_delivered_leaves_inventory_alone(db, make_warehouse, make_order, make_item):
    warehouse = await make_warehouse()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=4)
    row = await db.get(WarehouseInventory, item.inventory_item_id)

    await _update(db, item, status=SHIPPED)
    await _update(db, item, status=DELIVERED)

    assert row.available_quantity == 0


async def test_returned_item_without_row_is_materialized(db, make_warehouse, make_order, make_item):
    warehouse = await make_warehouse()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=6, status=SHIPPED)

    assert item.inventory_item_id is None

    await _update(db, item, status=ON_WAREHOUSE)

    assert item.inventory_item_id is not None
    row = await db.get(WarehouseInventory, item.inventory_item_id)
    assert (row.quantity, row.available_quantity) == (6, 6)
    assert warehouse.total_items == 6


async def test_shipping_unlinked_item_changes_nothing(db, make_order, make_item):
    order = await make_order()
    item = await make_item(order.id)

    updated = await _update(db, item, status=SHIPPED)

    assert updated.status == SHIPPED
    assert (await db.execute(select(WarehouseInventory))).scalars().all() == []


async def test_update_without_status_skips_transition(db, make_warehouse, make_order, make_item):
    warehouse = await make_warehouse()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=5)
    row = await db.get(WarehouseInventory, item.inventory_item_id)

    await _update(db, item, destination="Ташкент")

    assert row.available_quantity == 5
    assert item.destination == "Ташкент"
