from decimal import Decimal

API = "/api/v1"
HEADERS = {"X-User-Id": "1"}


async def _create_order(client, name="Юсуф-77"):
    response = await client.post(f"{API}/orders/", json={"name": name, "code": "ORD-1"}, headers=HEADERS)
    assert response.status_code == 200
    return response.json()


async def _create_warehouse(client, name="Склад Кашгар"):
    response = await client.post(f"{API}/warehouses/", json={"name": name, "location": "Кашгар"}, headers=HEADERS)
    assert response.status_code == 200
    return response.json()


async def test_root_and_health(client):
    response = await client.get("/")
    assert response.status_code == 200

    response = await client.get("/health")
    body = response.json()
    assert body["status"] == "ok"
    assert body["scheduler"]["running"] is False


async def test_order_item_flow(client):
    order = await _create_order(client)
    warehouse = await _create_warehouse(client)
    truck = (await client.post(f"{API}/trucks/", json={"number": "01A123BC", "capacity": "20000"},
                               headers=HEADERS)).json()

    response = await client.post(f"{API}/orders/{order['id']}/items", json={
        "code": "K-7",
        "name": "Ковер",
        "quantity": 10,
        "volume_type": "kg",
        "weight": "50",
        "volume": "",
        "total_transport_cost": "300",
        "paid_amount": "100",
        "warehouse_id": warehouse["id"],
        "truck_id": truck["id"],
    }, headers=HEADERS)
    assert response.status_code == 200
    item = response.json()
    assert item["inventory_item_id"] is not None

    detail = (await client.get(f"{API}/orders/{order['id']}")).json()
    assert detail["total_quantity"] == 10
    assert Decimal(detail["total_weight"]) == Decimal("50")
    assert Decimal(detail["unpaid_amount"]) == Decimal("200")
    assert [i["id"] for i in detail["items"]] == [item["id"]]

    row = (await client.get(f"{API}/inventory/{item['inventory_item_id']}")).json()
    assert row["available_quantity"] == 10
    assert row["warehouse_name"] == "Склад Кашгар"

    response = await client.put(f"{API}/order-items/{item['id']}", json={"status": "Отправлено"}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["status"] == "Отправлено"

    row = (await client.get(f"{API}/inventory/{item['inventory_item_id']}")).json()
    assert row["available_quantity"] == 0

    truck = (await client.get(f"{API}/trucks/{truck['id']}")).json()
    assert Decimal(truck["current_weight"]) == Decimal("50")

    history = (await client.get(f"{API}/history/orderItem/{item['id']}")).json()
    assert history["total"] == 2
    assert history["data"][0]["field_changed"] == "status"
    assert history["data"][0]["username"] == "admin"
    assert history["data"][1]["action"] == "created"


async def test_invalid_status_is_rejected(client):
    order = await _create_order(client)
    item = (await client.post(f"{API}/orders/{order['id']}/items",
                              json={"code": "K-1", "name": "Плед"}, headers=HEADERS)).json()

    response = await client.put(f"{API}/order-items/{item['id']}", json={"status": "Потерян"}, headers=HEADERS)
    assert response.status_code == 422


async def test_missing_entities_return_404(client):
    assert (await client.get(f"{API}/orders/999")).status_code == 404
    assert (await client.put(f"{API}/orders/999", json={"name": "x"})).status_code == 404
    assert (await client.delete(f"{API}/orders/999")).status_code == 404
    assert (await client.put(f"{API}/order-items/999", json={"quantity": 1})).status_code == 404
    assert (await client.delete(f"{API}/order-items/999")).status_code == 404
    assert (await client.post(f"{API}/orders/999/items", json={"code": "A", "name": "B"})).status_code == 404
    assert (await client.get(f"{API}/tracking/TRK0000")).status_code == 404


async def test_add_from_inventory_endpoint(client):
    order = await _create_order(client)
    warehouse = await _create_warehouse(client)
    row = (await client.post(f"{API}/inventory/", json={
        "warehouse_id": warehouse["id"], "code": "S-1", "name": "Пряжа", "quantity": 5,
    }, headers=HEADERS)).json()

    response = await client.post(f"{API}/orders/{order['id']}/items/from-inventory",
                                 json={"inventory_item_id": row["id"], "quantity": 2}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["from_inventory"] is True

    row = (await client.get(f"{API}/inventory/{row['id']}")).json()
    assert row["available_quantity"] == 3

    response = await client.post(f"{API}/orders/{order['id']}/items/from-inventory",
                                 json={"inventory_item_id": row["id"], "quantity": 4}, headers=HEADERS)
    assert response.status_code == 400


async def test_delete_order_endpoint(client):
    order = await _create_order(client)
    await client.post(f"{API}/orders/{order['id']}/items", json={"code": "K-1", "name": "Плед"}, headers=HEADERS)

    response = await client.delete(f"{API}/orders/{order['id']}")
    assert response.status_code == 200
    assert (await client.get(f"{API}/orders/{order['id']}")).status_code == 404


async def test_tracking_lookup(client):
    order = await _create_order(client)
    tracking = (await client.post(f"{API}/orders/{order['id']}/tracking",
                                  json={"customer_name": "Юсуф"})).json()

    response = await client.get(f"{API}/tracking/{tracking['tracking_code']}")
    assert response.status_code == 200
    assert response.json()["id"] == order["id"]


async def test_search(client):
    await _create_order(client, name="Karim-12")
    await _create_order(client, name="Юсуф-77")

    body = (await client.get(f"{API}/search/", params={"q": "karim"})).json()
    assert [o["name"] for o in body["orders"]] == ["Karim-12"]
    assert body["items"] == []


async def test_recalculate(client):
    await _create_order(client)
    await _create_warehouse(client)

    response = await client.post(f"{API}/orders/recalculate")
    assert response.status_code == 200
    assert response.json() == {"orders": 1, "trucks": 0, "warehouses": 1}


async def test_inventory_quantities_are_validated(client):
    warehouse = await _create_warehouse(client)

    response = await client.post(f"{API}/inventory/", json={
        "warehouse_id": warehouse["id"], "code": "S-2", "name": "Шелк", "quantity": 5, "available_quantity": 20,
    }, headers=HEADERS)
    assert response.status_code == 422

    row = (await client.post(f"{API}/inventory/", json={
        "warehouse_id": warehouse["id"], "code": "S-2", "name": "Шелк", "quantity": 5,
    }, headers=HEADERS)).json()
    response = await client.put(f"{API}/inventory/{row['id']}", json={"quantity": 1})
    assert response.status_code == 400
    assert response.json()["detail"] == "可用数量不能大于库存数量"
