from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from logistics.core.config import settings
from logistics.models import ChangeHistory, OrderItem, WarehouseInventory
from logistics.services import inventory_ledger


@pytest.fixture
def make_row(db):
    async def _make(warehouse_id, quantity=10, available=None, price=Decimal("0"), volume=Decimal("0")):
        row = WarehouseInventory(
            warehouse_id=warehouse_id,
            code="R-1",
            name="Ткань",
            quantity=quantity,
            available_quantity=quantity if available is None else available,
            price_per_unit=price,
            volume=volume,
            created_by=settings.DEFAULT_USER_ID,
        )
        db.add(row)
        await db.commit()
        return row
    return _make


async def test_reduce_clamps_at_zero(db, make_warehouse, make_row):
    warehouse = await make_warehouse()
    row = await make_row(warehouse.id, quantity=5)

    await inventory_ledger.reduce(db, row.id, 3)
    assert row.available_quantity == 2

    await inventory_ledger.reduce(db, row.id, 10)
    assert row.available_quantity == 0
    assert row.quantity == 5


async def test_replenish_has_no_upper_bound(db, make_warehouse, make_row):
    warehouse = await make_warehouse()
    row = await make_row(warehouse.id, quantity=5, available=4)

    await inventory_ledger.replenish(db, row.id, 3)

    assert row.available_quantity == 7
    assert row.quantity == 5


async def test_missing_row_is_skipped(db):
    assert await inventory_ledger.reduce(db, 404, 1) is None
    assert await inventory_ledger.replenish(db, 404, 1) is None


async def test_warehouse_stats_follow_rows(db, make_warehouse, make_row):
    warehouse = await make_warehouse()
    await make_row(warehouse.id, quantity=4, price=Decimal("2.50"), volume=Decimal("1.2"))
    await make_row(warehouse.id, quantity=6, price=Decimal("10"), volume=Decimal("0.8"))

    await inventory_ledger.recompute_warehouse_stats(db, warehouse.id)

    assert warehouse.total_items == 10
    assert warehouse.total_volume == Decimal("2.000")
    assert warehouse.total_value == Decimal("70.00")


async def test_empty_warehouse_stats_are_zero(db, make_warehouse):
    warehouse = await make_warehouse()

    await inventory_ledger.recompute_warehouse_stats(db, warehouse.id)

    assert warehouse.total_items == 0
    assert warehouse.total_value == Decimal("0")


async def test_item_on_warehouse_gets_one_row(db, make_warehouse, make_order, make_item):
    warehouse = await make_warehouse()
    order = await make_order()
    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=7, price_per_unit=Decimal("3"))

    assert item.inventory_item_id is not None
    row = await db.get(WarehouseInventory, item.inventory_item_id)
    assert row.quantity == 7
    assert row.available_quantity == 7
    assert row.code == item.code

    # 已关联时不再建第二条
    again = await inventory_ledger.materialize(db, item)
    assert again.id == row.id
    rows = (await db.execute(select(WarehouseInventory))).scalars().all()
    assert len(rows) == 1
    assert warehouse.total_items == 7
    assert warehouse.total_value == Decimal("21.00")


async def test_item_without_warehouse_is_not_materialized(db, make_order, make_item):
    order = await make_order()
    item = await make_item(order.id)

    assert item.inventory_item_id is None
    assert (await db.execute(select(WarehouseInventory))).scalars().all() == []


async def test_materialize_failure_keeps_item(db, monkeypatch, make_warehouse, make_order, make_item):
    def broken_row(item):
        raise SQLAlchemyError("boom")

    monkeypatch.setattr(inventory_ledger, "build_inventory_row", broken_row)
    warehouse = await make_warehouse()
    order = await make_order()

    item = await make_item(order.id, warehouse_id=warehouse.id)

    assert item.id is not None
    assert item.inventory_item_id is None
    assert (await db.execute(select(WarehouseInventory))).scalars().all() == []
    assert order.total_quantity == 10

    created = (await db.execute(
        select(ChangeHistory).where(
            ChangeHistory.entity_type == "orderItem",
            ChangeHistory.entity_id == item.id,
        )
    )).scalars().all()
    assert [entry.action for entry in created] == ["created"]


async def test_materialize_flush_failure_rolls_back_savepoint(db, monkeypatch, make_warehouse, make_order, make_item):
    build_row = inventory_ledger.build_inventory_row

    def row_without_code(item):
        row = build_row(item)
        row.code = None
        return row

    monkeypatch.setattr(inventory_ledger, "build_inventory_row", row_without_code)
    warehouse = await make_warehouse()
    order = await make_order()

    item = await make_item(order.id, warehouse_id=warehouse.id, quantity=3)

    assert item.inventory_item_id is None
    assert item.warehouse_id == warehouse.id
    assert order.total_quantity == 3
    assert (await db.execute(select(WarehouseInventory))).scalars().all() == []
    assert warehouse.total_items == 0

    # 明细本身照常提交
    stored = (await db.execute(select(OrderItem.id).where(OrderItem.order_id == order.id))).scalars().all()
    assert stored == [item.id]
