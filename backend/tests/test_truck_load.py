from decimal import Decimal
from types import SimpleNamespace

from logistics.core.config import settings
from logistics.schemas.order_item import OrderItemUpdate
from logistics.services import orders as order_service
from logistics.services.truck_load import compute_truck_load


def _item(volume_type, volume=None, weight=None):
    return SimpleNamespace(volume_type=volume_type, volume=volume, weight=weight)


def test_kg_items_count_volume_column_as_weight():
    weight, volume = compute_truck_load([_item("kg", volume=Decimal("100"), weight=Decimal("5"))])

    assert weight == Decimal("105")
    assert volume == Decimal("0")


def test_cubic_items_add_volume_and_weight():
    weight, volume = compute_truck_load([
        _item("m³", volume=Decimal("2"), weight=Decimal("3")),
        _item("cubic", volume=Decimal("1.5"), weight=None),
    ])

    assert volume == Decimal("3.5")
    assert weight == Decimal("3")


def test_empty_truck_is_zero():
    assert compute_truck_load([]) == (Decimal("0"), Decimal("0"))


async def test_moving_item_between_trucks_recomputes_both(db, make_order, make_item, make_truck):
    truck_a = await make_truck("A-001")
    truck_b = await make_truck("B-002")
    order = await make_order()
    item = await make_item(order.id, truck_id=truck_a.id, volume=Decimal("100"), weight=Decimal("5"))

    assert truck_a.current_weight == Decimal("105")

    await order_service.update_order_item(
        db, item.id, OrderItemUpdate(truck_id=truck_b.id), settings.DEFAULT_USER_ID)

    assert truck_a.current_weight == Decimal("0")
    assert truck_b.current_weight == Decimal("105")


async def test_deleting_item_unloads_truck(db, make_order, make_item, make_truck):
    truck = await make_truck()
    order = await make_order()
    item = await make_item(order.id, truck_id=truck.id, volume_type="m³", volume=Decimal("2"))

    assert truck.current_volume == Decimal("2")

    assert await order_service.delete_order_item(db, item.id) is True
    assert truck.current_volume == Decimal("0")
