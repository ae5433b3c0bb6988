"""Today / by-date customer status views."""

from datetime import timedelta

from conftest import create_order
from orderdesk.utils.calendar import business_today, day_bounds


def _by_customer(statuses):
    return {s["customer"]["id"]: s for s in statuses}


def test_today_status_lists_every_assigned_customer(client, world, make_customer):
    second = make_customer("Chitra", world.agent["id"])
    create_order(client, world)

    response = client.get("/orders/today-status", headers=world.agent_headers)

    assert response.status_code == 200
    statuses = response.json()
    assert [s["customer"]["id"] for s in statuses] == [world.customer["id"], second["id"]]
    assert [s["has_order"] for s in statuses] == [True, False]
    assert statuses[1]["order"] is None
    assert statuses[0]["customer"]["assigned_delivery_guy"]["name"] == "Suresh"


def test_follow_up_order_after_cancellation_wins(client, world):
    first = create_order(client, world).json()
    client.put(f"/orders/{first['id']}", json={"status": "cancelled"}, headers=world.agent_headers)
    follow_up = create_order(client, world, status="called").json()

    statuses = client.get("/orders/today-status", headers=world.agent_headers).json()

    assert _by_customer(statuses)[world.customer["id"]]["order"]["id"] == follow_up["id"]
    assert _by_customer(statuses)[world.customer["id"]]["order"]["status"] == "called"


def test_orders_from_another_day_do_not_count_today(client, world):
    yesterday = business_today() - timedelta(days=1)
    create_order(
        client,
        world,
        headers=world.admin_headers,
        order_date=(day_bounds(yesterday).start + timedelta(hours=3)).isoformat(),
    )

    statuses = client.get("/orders/today-status", headers=world.agent_headers).json()

    assert _by_customer(statuses)[world.customer["id"]]["has_order"] is False


def test_admin_sees_all_active_customers(client, world):
    statuses = client.get("/orders/today-status", headers=world.admin_headers).json()

    assert {s["customer"]["id"] for s in statuses} == {world.customer["id"], world.other_customer["id"]}


def test_status_by_date_for_today(client, world):
    order = create_order(client, world).json()

    response = client.get(
        "/orders/status-by-date", params={"date": business_today().isoformat()}, headers=world.agent_headers
    )

    assert response.status_code == 200
    assert [s["order"]["id"] for s in response.json()] == [order["id"]]


def test_status_by_date_skips_customers_created_later(client, world):
    # заказ задним числом для клиента, созданного сегодня
    yesterday = business_today() - timedelta(days=1)
    create_order(
        client,
        world,
        headers=world.admin_headers,
        order_date=(day_bounds(yesterday).start + timedelta(hours=3)).isoformat(),
    )

    history = client.get(
        "/orders/status-by-date", params={"date": yesterday.isoformat()}, headers=world.agent_headers
    ).json()
    today = client.get("/orders/today-status", headers=world.agent_headers).json()

    assert history == []
    assert [s["customer"]["id"] for s in today] == [world.customer["id"]]


def test_status_by_date_requires_a_valid_date(client, world):
    response = client.get("/orders/status-by-date", headers=world.agent_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Date parameter is required"

    response = client.get("/orders/status-by-date", params={"date": "2024-13-01"}, headers=world.agent_headers)
    assert response.status_code == 400


def test_deactivated_customers_leave_the_view(client, world):
    client.delete(f"/customers/{world.customer['id']}", headers=world.admin_headers)

    assert client.get("/orders/today-status", headers=world.agent_headers).json() == []
