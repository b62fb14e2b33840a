from decimal import Decimal

import pytest
from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy import select

from logistics.core.config import settings
from logistics.models import CustomerTracking, Order, OrderItem, WarehouseInventory
from logistics.schemas.inventory import InventoryCreate, InventoryUpdate
from logistics.schemas.order import OrderCreate, OrderUpdate
from logistics.schemas.order_item import AddFromInventory, OrderItemCreate, OrderItemUpdate
from logistics.services import inventory as inventory_service
from logistics.services import inventory_ledger
from logistics.services import orders as order_service
from logistics.services import tracking as tracking_service
from logistics.services.reconciliation import reconcile_all

USER_ID = settings.DEFAULT_USER_ID


async def _stock(db, warehouse_id, quantity=10, price=Decimal("5")):
    return await inventory_service.create_inventory_item(
        db,
        InventoryCreate(warehouse_id=warehouse_id, code="S-1", name="Пряжа",
                        quantity=quantity, price_per_unit=price, volume_type="kg"),
        USER_ID)


async def test_delete_order_removes_items_and_tracking(db, make_warehouse, make_truck, make_order, make_item):
    warehouse = await make_warehouse()
    truck = await make_truck()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, truck_id=truck.id, weight=Decimal("8"))
    await tracking_service.create_tracking_code(db, order.id, customer_name="Юсуф")
    row_id = item.inventory_item_id

    assert await order_service.delete_order(db, order.id) is True

    assert await db.get(Order, order.id) is None
    assert (await db.execute(select(OrderItem))).scalars().all() == []
    assert (await db.execute(select(CustomerTracking))).scalars().all() == []
    # 库存行保留
    assert await db.get(WarehouseInventory, row_id) is not None
    assert truck.current_weight == Decimal("0")


async def test_delete_missing_order_returns_false(db):
    assert await order_service.delete_order(db, 999) is False


async def test_update_missing_rows_return_none(db):
    assert await order_service.update_order(db, 999, OrderUpdate(name="x"), USER_ID) is None
    assert await order_service.update_order_item(db, 999, OrderItemUpdate(quantity=1), USER_ID) is None
    assert await order_service.delete_order_item(db, 999) is False


async def test_create_item_for_missing_order_is_rejected(db):
    with pytest.raises(HTTPException) as exc_info:
        await order_service.create_order_item(
            db, 999, OrderItemCreate(code="X", name="Нет заказа"), USER_ID)
    assert exc_info.value.status_code == 400


async def test_create_order_with_unknown_counterparty_is_rejected(db):
    with pytest.raises(HTTPException) as exc_info:
        await order_service.create_order(db, OrderCreate(name="Z-1", counterparty_id=42), USER_ID)
    assert exc_info.value.status_code == 400


async def test_add_from_inventory_links_and_reduces(db, make_warehouse, make_order):
    warehouse = await make_warehouse()
    order = await make_order()
    row = await _stock(db, warehouse.id, quantity=10)

    item = await order_service.add_item_from_inventory(
        db, order.id, AddFromInventory(inventory_item_id=row.id, quantity=4), USER_ID)

    assert item.inventory_item_id == row.id
    assert item.from_inventory is True
    assert item.warehouse_id == warehouse.id
    assert item.status == "На складе"
    assert item.total_price == Decimal("20")
    assert row.available_quantity == 6
    assert row.quantity == 10
    assert order.total_quantity == 4


async def test_add_from_inventory_checks_availability(db, make_warehouse, make_order):
    warehouse = await make_warehouse()
    order = await make_order()
    row = await _stock(db, warehouse.id, quantity=3)

    with pytest.raises(HTTPException) as exc_info:
        await order_service.add_item_from_inventory(
            db, order.id, AddFromInventory(inventory_item_id=row.id, quantity=5), USER_ID)
    assert exc_info.value.status_code == 400
    assert row.available_quantity == 3


async def test_delete_item_recomputes_warehouse_and_order(db, make_warehouse, make_order, make_item):
    warehouse = await make_warehouse()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=3)

    assert order.total_quantity == 3
    assert await order_service.delete_order_item(db, item.id) is True

    assert order.total_quantity == 0
    # 库存行留在仓库里
    assert warehouse.total_items == 3


async def test_moving_item_to_another_order_recomputes_both(db, make_order, make_item):
    first = await make_order("A-1")
    second = await make_order("B-2")
    item = await make_item(first.id, quantity=5)

    await order_service.update_order_item(db, item.id, OrderItemUpdate(order_id=second.id), USER_ID)

    assert first.total_quantity == 0
    assert second.total_quantity == 5


async def test_blank_required_amounts_are_stored_as_zero(db, make_order, make_item):
    order = await make_order()
    item = await make_item(order.id, total_transport_cost=Decimal("40"))

    await order_service.update_order_item(
        db, item.id, OrderItemUpdate(total_transport_cost=""), USER_ID)

    assert item.total_transport_cost == Decimal("0")
    assert order.total_amount == Decimal("0")


async def test_delete_inventory_row_unlinks_items(db, make_warehouse, make_order, make_item):
    warehouse = await make_warehouse()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=2)
    row_id = item.inventory_item_id

    assert await inventory_service.delete_inventory_item(db, row_id) is True

    await db.refresh(item)
    assert item.inventory_item_id is None
    assert await db.get(WarehouseInventory, row_id) is None
    assert warehouse.total_items == 0


async def test_reconcile_repairs_drift(db, make_warehouse, make_truck, make_order, make_item):
    warehouse = await make_warehouse()
    truck = await make_truck()
    order = await make_order()
    await make_item(order.id, warehouse_id=warehouse.id, truck_id=truck.id,
                    quantity=3, weight=Decimal("12"), total_transport_cost=Decimal("90"))

    order.total_quantity = 99
    order.total_amount = Decimal("1")
    truck.current_weight = Decimal("0")
    warehouse.total_items = 0
    await db.commit()

    result = await reconcile_all(db)

    assert result == {"orders": 1, "trucks": 1, "warehouses": 1}
    assert order.total_quantity == 3
    assert order.total_amount == Decimal("90")
    assert truck.current_weight == Decimal("12")
    assert warehouse.total_items == 3


async def test_tracking_code_lookup(db, make_order):
    order = await make_order()
    tracking = await tracking_service.create_tracking_code(db, order.id)

    assert tracking.tracking_code.startswith("TRK")
    found = await tracking_service.get_order_by_tracking_code(db, f" {tracking.tracking_code.lower()} ")
    assert found.id == order.id
    assert await tracking_service.get_order_by_tracking_code(db, "TRK-NOPE") is None


def test_inventory_create_rejects_available_above_quantity():
    with pytest.raises(ValidationError):
        InventoryCreate(warehouse_id=1, code="S-1", name="Пряжа", quantity=5, available_quantity=20)


async def test_inventory_update_keeps_available_within_quantity(db, make_warehouse):
    warehouse = await make_warehouse()
    row = await _stock(db, warehouse.id, quantity=5)

    with pytest.raises(HTTPException) as exc_info:
        await inventory_service.update_inventory_item(db, row.id, InventoryUpdate(quantity=1))
    assert exc_info.value.status_code == 400

    with pytest.raises(HTTPException):
        await inventory_service.update_inventory_item(db, row.id, InventoryUpdate(available_quantity=6))

    await db.refresh(row)
    assert (row.quantity, row.available_quantity) == (5, 5)

    updated = await inventory_service.update_inventory_item(
        db, row.id, InventoryUpdate(quantity=8, available_quantity=8))
    assert (updated.quantity, updated.available_quantity) == (8, 8)


async def test_inventory_update_of_other_fields_ignores_replenished_surplus(db, make_warehouse):
    warehouse = await make_warehouse()
    row = await _stock(db, warehouse.id, quantity=2)
    await inventory_ledger.replenish(db, row.id, 3)
    await db.commit()

    updated = await inventory_service.update_inventory_item(db, row.id, InventoryUpdate(name="Пряжа шерсть"))

    assert updated.name == "Пряжа шерсть"
    assert updated.available_quantity == 5
