from decimal import Decimal

import pytest
from fastapi import HTTPException

from logistics.core.config import settings
from logistics.schemas.archive import ArchiveFolderCreate, ArchiveMaterialCreate
from logistics.schemas.order import OrderCreate
from logistics.schemas.registry import CounterpartyCreate, TruckCreate, TruckUpdate
from logistics.services import orders as order_service
from logistics.services import registry
from logistics.services.change_history import get_change_history

USER_ID = settings.DEFAULT_USER_ID


async def test_counterparty_with_orders_cannot_be_deleted(db):
    counterparty = await registry.create_counterparty(db, CounterpartyCreate(name="ООО Караван"), USER_ID)
    await order_service.create_order(
        db, OrderCreate(name="K-1", counterparty_id=counterparty.id), USER_ID)

    with pytest.raises(HTTPException) as exc_info:
        await registry.delete_counterparty(db, counterparty.id)
    assert exc_info.value.status_code == 400

    history = await get_change_history(db, "counterparty", counterparty.id)
    assert history[0]["description"] == "Создан контрагент: ООО Караван"


async def test_truck_number_is_unique(db):
    await registry.create_truck(db, TruckCreate(number="01A777AA"), USER_ID)

    with pytest.raises(HTTPException) as exc_info:
        await registry.create_truck(db, TruckCreate(number="01A777AA"), USER_ID)
    assert exc_info.value.status_code == 400


async def test_deleting_truck_unloads_its_items(db, make_order, make_item):
    truck = await registry.create_truck(db, TruckCreate(number="02B111BB"), USER_ID)
    order = await make_order()
    item = await make_item(order.id, truck_id=truck.id, weight=Decimal("3"))

    assert await registry.delete_truck(db, truck.id) is True

    await db.refresh(item)
    assert item.truck_id is None


async def test_truck_update_recomputes_load(db, make_order, make_item):
    truck = await registry.create_truck(db, TruckCreate(number="03C222CC"), USER_ID)
    order = await make_order()
    await make_item(order.id, truck_id=truck.id, weight=Decimal("7"))
    truck.current_weight = Decimal("0")
    await db.commit()

    await registry.update_truck(db, truck.id, TruckUpdate(status="В пути"))

    assert truck.status == "В пути"
    assert truck.current_weight == Decimal("7")


async def test_warehouse_delete_is_soft(db, make_warehouse):
    warehouse = await make_warehouse()

    assert await registry.deactivate_warehouse(db, warehouse.id) is True

    assert warehouse.is_active is False
    assert await registry.list_warehouses(db) == []
    assert [w.id for w in await registry.list_warehouses(db, include_inactive=True)] == [warehouse.id]


async def test_non_empty_folder_cannot_be_deleted(db):
    root = await registry.create_archive_folder(db, ArchiveFolderCreate(name="Договоры"), USER_ID)
    await registry.create_archive_material(
        db, ArchiveMaterialCreate(folder_id=root.id, title="Договор 2024"), USER_ID)

    with pytest.raises(HTTPException) as exc_info:
        await registry.delete_archive_folder(db, root.id)
    assert exc_info.value.status_code == 400

    empty = await registry.create_archive_folder(
        db, ArchiveFolderCreate(name="Пусто", parent_id=root.id), USER_ID)
    assert [f.id for f in await registry.list_archive_folders(db, root.id)] == [empty.id]
    assert await registry.delete_archive_folder(db, empty.id) is True
