import asyncio
import os
import tempfile
from types import SimpleNamespace

import pytest

# Окружение задаётся до первого импорта orderdesk: Settings() читается при импорте
_TMP_DIR = tempfile.mkdtemp(prefix="orderdesk-tests-")
DB_PATH = os.path.join(_TMP_DIR, "orderdesk.db")
ADMIN_LOGIN = "admin"
ADMIN_PASSWORD = "admin-pass"

os.environ.update(
    {
        "AUTH_SECRET_KEY": "test-secret-key",
        "AUTH_LOGIN": ADMIN_LOGIN,
        "AUTH_PASSWORD": ADMIN_PASSWORD,
        "AUTH_HASH_ROUNDS": "1000",
        "DATABASE_URL": f"sqlite+aiosqlite:///{DB_PATH}",
        "LOG_DIR": os.path.join(_TMP_DIR, "log"),
        "LOG_PRINT": "0",
    }
)

from fastapi.testclient import TestClient  # noqa: E402


@pytest.fixture()
def client():
    """Приложение целиком на чистой базе SQLite."""
    from orderdesk.main import app
    from orderdesk.utils.database import drop_db

    asyncio.run(drop_db())
    with TestClient(app) as test_client:
        yield test_client


def login(client, username, password):
    response = client.post("/auth/token", data={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def admin_headers(client):
    return login(client, ADMIN_LOGIN, ADMIN_PASSWORD)


@pytest.fixture()
def make_agent(client, admin_headers):
    def _make(login_name):
        response = client.post(
            "/agents/",
            json={"name": login_name.title(), "phone": "9000000000", "login": login_name, "password": "secret"},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json(), login(client, login_name, "secret")

    return _make


@pytest.fixture()
def make_customer(client, admin_headers):
    def _make(name, agent_id, delivery_guy_id=None):
        response = client.post(
            "/customers/",
            json={
                "name": name,
                "phone": "9800000000",
                "address": f"{name} street 1",
                "assigned_agent_id": agent_id,
                "assigned_delivery_guy_id": delivery_guy_id,
            },
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture()
def world(client, admin_headers, make_agent, make_customer):
    """Два агента, курьер, товар и по клиенту на каждого агента."""
    agent, agent_headers = make_agent("ravi")
    other_agent, other_headers = make_agent("meena")

    delivery_guy = client.post(
        "/delivery-guys/", json={"name": "Suresh", "phone": "9111111111"}, headers=admin_headers
    ).json()
    item = client.post("/items/", json={"name": "Water can 20L"}, headers=admin_headers).json()

    customer = make_customer("Anand", agent["id"], delivery_guy["id"])
    other_customer = make_customer("Bhavna", other_agent["id"])

    return SimpleNamespace(
        admin_headers=admin_headers,
        agent=agent,
        agent_headers=agent_headers,
        other_agent=other_agent,
        other_headers=other_headers,
        delivery_guy=delivery_guy,
        item=item,
        customer=customer,
        other_customer=other_customer,
    )


def create_order(client, world, headers=None, **fields):
    body = {"customer_id": world.customer["id"], "item_id": world.item["id"], "pieces": 2}
    body.update(fields)
    return client.post("/orders/", json=body, headers=headers or world.agent_headers)
