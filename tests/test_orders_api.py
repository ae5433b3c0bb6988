"""Order endpoints through the full application."""

from conftest import create_order


def test_agent_order_defaults_to_pending_and_cannot_skip_ahead(client, world):
    response = create_order(client, world)
    assert response.status_code == 201, response.text
    order = response.json()
    assert order["status"] == "pending"
    assert order["agent_id"] == world.agent["id"]
    assert order["customer"]["name"] == "Anand"
    assert order["item"]["name"] == "Water can 20L"
    assert order["delivery_guy"]["name"] == "Suresh"

    response = client.put(f"/orders/{order['id']}", json={"status": "order_placed"}, headers=world.agent_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Cannot change status from pending to order_placed. Status must progress sequentially."
    assert body["current_status"] == "pending"
    assert body["requested_status"] == "order_placed"


def test_full_lifecycle_then_cancel_is_rejected(client, world):
    order_id = create_order(client, world).json()["id"]
    headers = world.agent_headers

    assert client.put(f"/orders/{order_id}", json={"status": "called"}, headers=headers).json()["status"] == "called"

    response = client.put(f"/orders/{order_id}", json={"status": "order_placed"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Item and pieces are required when placing an order"

    response = client.put(
        f"/orders/{order_id}",
        json={"status": "order_placed", "item_id": world.item["id"], "pieces": 5},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    assert response.json()["status"] == "order_placed"
    assert response.json()["pieces"] == 5

    response = client.put(f"/orders/{order_id}", json={"status": "delivered"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["version"] == 4

    response = client.put(f"/orders/{order_id}", json={"status": "cancelled"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot cancel an order that is already delivered."


def test_cancel_from_non_terminal_state(client, world):
    order_id = create_order(client, world, status="called").json()["id"]

    response = client.put(f"/orders/{order_id}", json={"status": "cancelled"}, headers=world.agent_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"

    response = client.put(f"/orders/{order_id}", json={"status": "called"}, headers=world.agent_headers)
    assert response.status_code == 400


def test_repeating_the_current_status_is_rejected(client, world):
    order_id = create_order(client, world).json()["id"]

    response = client.put(f"/orders/{order_id}", json={"status": "pending"}, headers=world.agent_headers)

    assert response.status_code == 400
    assert response.json()["requested_status"] == "pending"


def test_agent_cannot_create_beyond_called(client, world):
    response = create_order(client, world, status="order_placed")

    assert response.status_code == 400
    assert response.json()["detail"] == "New orders can only be created with pending or called status"


def test_admin_is_trusted_with_any_status(client, world):
    response = create_order(client, world, headers=world.admin_headers, status="order_placed")
    assert response.status_code == 201
    order_id = response.json()["id"]

    response = client.put(f"/orders/{order_id}", json={"status": "pending"}, headers=world.admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "pending"

    response = client.put(f"/orders/{order_id}", json={"status": "delivered"}, headers=world.admin_headers)
    assert response.json()["status"] == "delivered"


def test_pieces_must_be_positive(client, world):
    assert create_order(client, world, pieces=0).status_code == 422

    order_id = create_order(client, world).json()["id"]
    response = client.put(f"/orders/{order_id}", json={"pieces": 0}, headers=world.agent_headers)
    assert response.status_code == 422


def test_unknown_customer_or_item(client, world):
    response = create_order(client, world, customer_id=9999)
    assert response.status_code == 404
    assert response.json()["detail"] == "Customer not found"

    response = create_order(client, world, item_id=9999)
    assert response.status_code == 404
    assert response.json()["detail"] == "Item not found"


def test_agent_cannot_order_for_someone_elses_customer(client, world):
    response = create_order(client, world, customer_id=world.other_customer["id"])

    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized to create order for this customer"


def test_only_admin_sets_order_date(client, world):
    response = create_order(client, world, order_date="2024-03-15T06:00:00Z")
    assert response.status_code == 403

    response = create_order(client, world, headers=world.admin_headers, order_date="2024-03-15T06:00:00Z")
    assert response.status_code == 201
    assert response.json()["order_date"].startswith("2024-03-15T06:00:00")


def test_orders_of_other_agents_are_forbidden(client, world):
    order_id = create_order(client, world).json()["id"]

    assert client.get(f"/orders/{order_id}", headers=world.agent_headers).status_code == 200
    assert client.get(f"/orders/{order_id}", headers=world.other_headers).status_code == 403
    assert client.get(f"/orders/{order_id}", headers=world.admin_headers).status_code == 200

    response = client.put(f"/orders/{order_id}", json={"status": "called"}, headers=world.other_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized to update this order"

    assert client.get("/orders/9999", headers=world.agent_headers).status_code == 404
    assert client.put("/orders/9999", json={"status": "called"}, headers=world.agent_headers).status_code == 404


def test_delivery_guy_is_a_snapshot(client, world):
    order_id = create_order(client, world).json()["id"]

    new_delivery_guy = client.post(
        "/delivery-guys/", json={"name": "Kiran", "phone": "9222222222"}, headers=world.admin_headers
    ).json()
    response = client.put(
        f"/customers/{world.customer['id']}",
        json={"assigned_delivery_guy_id": new_delivery_guy["id"]},
        headers=world.admin_headers,
    )
    assert response.json()["assigned_delivery_guy"]["name"] == "Kiran"

    old_order = client.get(f"/orders/{order_id}", headers=world.agent_headers).json()
    assert old_order["delivery_guy_id"] == world.delivery_guy["id"]
    assert old_order["delivery_guy"]["name"] == "Suresh"

    new_order = create_order(client, world).json()
    assert new_order["delivery_guy"]["name"] == "Kiran"


def test_list_is_scoped_to_the_agent(client, world, make_customer):
    create_order(client, world)
    create_order(client, world)
    create_order(
        client, world, headers=world.other_headers, customer_id=world.other_customer["id"]
    )

    mine = client.get("/orders/", headers=world.agent_headers).json()
    assert len(mine) == 2
    assert {o["agent_id"] for o in mine} == {world.agent["id"]}

    assert len(client.get("/orders/", headers=world.admin_headers).json()) == 3

    by_customer = client.get(
        "/orders/", params={"customer_id": world.other_customer["id"]}, headers=world.admin_headers
    ).json()
    assert len(by_customer) == 1


def test_list_filters_by_business_day(client, world):
    # 2024-03-14 19:00 UTC уже 15 марта по рабочему календарю
    create_order(client, world, headers=world.admin_headers, order_date="2024-03-14T19:00:00Z")
    create_order(client, world, headers=world.admin_headers, order_date="2024-03-14T18:00:00Z")

    day = client.get("/orders/", params={"date": "2024-03-15"}, headers=world.admin_headers).json()
    assert [o["order_date"][:16] for o in day] == ["2024-03-14T19:00"]

    previous = client.get("/orders/", params={"date": "2024-03-14"}, headers=world.admin_headers).json()
    assert [o["order_date"][:16] for o in previous] == ["2024-03-14T18:00"]

    response = client.get("/orders/", params={"date": "15/03/2024"}, headers=world.admin_headers)
    assert response.status_code == 400


def test_history(client, world):
    first = create_order(client, world, headers=world.admin_headers, order_date="2024-03-10T06:00:00Z").json()
    second = create_order(client, world).json()

    history = client.get(f"/orders/history/{world.customer['id']}", headers=world.agent_headers)
    assert history.status_code == 200
    assert [o["id"] for o in history.json()] == [second["id"], first["id"]]

    assert client.get(f"/orders/history/{world.customer['id']}", headers=world.other_headers).status_code == 403
    # агенту отказ и для несуществующего клиента
    assert client.get("/orders/history/9999", headers=world.agent_headers).status_code == 403
    assert client.get(f"/orders/history/{world.customer['id']}", headers=world.admin_headers).status_code == 200


def test_notes_can_be_edited_without_status_change(client, world):
    order_id = create_order(client, world, notes="call after 5").json()["id"]

    response = client.put(f"/orders/{order_id}", json={"notes": "leave at gate"}, headers=world.agent_headers)

    assert response.status_code == 200
    assert response.json()["notes"] == "leave at gate"
    assert response.json()["status"] == "pending"
