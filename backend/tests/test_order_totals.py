from decimal import Decimal
from types import SimpleNamespace

from logistics.services.order_totals import compute_order_totals, recompute_order_totals


def _item(**fields):
    base = {
        "quantity": 1,
        "volume_type": "kg",
        "weight": None,
        "volume": None,
        "total_transport_cost": None,
        "paid_amount": None,
    }
    base.update(fields)
    return SimpleNamespace(**base)


def test_totals_split_weight_and_volume_by_volume_type():
    totals = compute_order_totals([
        _item(quantity=3, volume_type="kg", weight=Decimal("40"), volume=Decimal("7")),
        _item(quantity=2, volume_type="m³", weight=Decimal("9"), volume=Decimal("1.5")),
        _item(quantity=1, volume_type="cubic", weight=Decimal("4"), volume=Decimal("2")),
    ])

    assert totals.total_quantity == 6
    assert totals.total_weight == Decimal("40")
    assert totals.total_volume == Decimal("1.5")


def test_unpaid_is_transport_cost_minus_paid():
    totals = compute_order_totals([
        _item(total_transport_cost=Decimal("100"), paid_amount=Decimal("30")),
        _item(total_transport_cost="50", paid_amount="50"),
    ])

    assert totals.total_amount == Decimal("150")
    assert totals.paid_amount == Decimal("80")
    assert totals.unpaid_amount == Decimal("70")


def test_missing_and_blank_values_count_as_zero():
    totals = compute_order_totals([
        _item(quantity=None, weight="", total_transport_cost=None, paid_amount="0"),
        _item(quantity="", weight=None, total_transport_cost="", paid_amount=None),
    ])

    assert totals.total_quantity == 0
    assert totals.total_weight == Decimal("0")
    assert totals.total_amount == Decimal("0")
    assert totals.unpaid_amount == Decimal("0")


def test_empty_order_has_zero_totals():
    totals = compute_order_totals([])
    assert totals.total_amount == Decimal("0")
    assert totals.total_quantity == 0


async def test_item_changes_update_order_totals(db, make_order, make_item):
    order = await make_order()
    await make_item(order.id, quantity=4, weight=Decimal("20"), total_transport_cost=Decimal("100"),
                    paid_amount=Decimal("40"))
    await make_item(order.id, code="K-2", quantity=1, volume_type="m³", volume=Decimal("2.5"),
                    total_transport_cost=Decimal("60"))

    assert order.total_quantity == 5
    assert order.total_weight == Decimal("20")
    assert order.total_volume == Decimal("2.5")
    assert order.total_amount == Decimal("160")
    assert order.paid_amount == Decimal("40")
    assert order.unpaid_amount == Decimal("120")


async def test_recompute_missing_order_is_noop(db):
    assert await recompute_order_totals(db, 999) is None
    assert await recompute_order_totals(db, None) is None
