"""Compare-and-swap write of the order update service, with a stubbed session."""

import asyncio
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from orderdesk.schemas.order import OrderUpdate
from orderdesk.services.order import update_order_service
from orderdesk.utils.errors import ConflictError


class FakeLog:
    def __init__(self):
        self.records = []

    async def log_info(self, target="", message="", data=None, is_console=None):
        self.records.append(("info", target, message))

    async def log_warning(self, target="", message="", data=None, is_console=None):
        self.records.append(("warning", target, message))

    async def log_error(self, target="", message="", data=None, is_console=True):
        self.records.append(("error", target, message))


class FakeResult:
    def __init__(self, row=None, rowcount=0):
        self.row = row
        self.rowcount = rowcount

    def scalar_one_or_none(self):
        return self.row


class FakeSession:
    """Первый execute — чтение заказа, второй — условный UPDATE."""

    def __init__(self, order, updated_rows):
        self.order = order
        self.updated_rows = updated_rows
        self.statements = []
        self.committed = False
        self.rolled_back = False

    async def execute(self, statement):
        self.statements.append(statement)
        if len(self.statements) == 2:
            return FakeResult(rowcount=self.updated_rows)
        return FakeResult(row=self.order)

    async def commit(self):
        self.committed = True

    async def rollback(self):
        self.rolled_back = True


def _request(session, log):
    return SimpleNamespace(state=SimpleNamespace(db=session), app=SimpleNamespace(state=SimpleNamespace(log=log)))


def _order():
    now = datetime(2024, 3, 15, 4, 0, tzinfo=timezone.utc)
    return SimpleNamespace(
        id=5, agent_id=7, status="pending", version=3, pieces=2, item_id=1,
        order_date=now, created_at=now, updated_at=now,
    )


def test_update_is_conditional_on_read_status_and_version():
    session = FakeSession(_order(), updated_rows=1)
    agent = SimpleNamespace(id=7, role="agent")

    asyncio.run(update_order_service(5, OrderUpdate(status="called"), agent, _request(session, FakeLog())))

    update_sql = str(session.statements[1])
    assert update_sql.startswith("UPDATE orders")
    assert "orders.status = " in update_sql
    assert "orders.version = " in update_sql
    params = session.statements[1].compile().params
    assert params["status_1"] == "pending"
    assert params["version_1"] == 3
    assert params["version"] == 4
    assert session.committed


def test_lost_update_is_reported_as_conflict():
    session = FakeSession(_order(), updated_rows=0)
    log = FakeLog()
    agent = SimpleNamespace(id=7, role="agent")

    with pytest.raises(ConflictError) as exc_info:
        asyncio.run(update_order_service(5, OrderUpdate(status="called"), agent, _request(session, log)))

    assert exc_info.value.status_code == 409
    assert session.rolled_back
    assert not session.committed
    assert ("warning", "order") == log.records[-1][:2]


def test_nothing_to_change_skips_the_write():
    session = FakeSession(_order(), updated_rows=1)
    agent = SimpleNamespace(id=7, role="agent")

    result = asyncio.run(update_order_service(5, OrderUpdate(), agent, _request(session, FakeLog())))

    assert result.id == 5
    assert len(session.statements) == 1
    assert not session.committed
