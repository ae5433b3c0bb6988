# orderdesk/services/status.py

"""
Статусы клиентов за рабочий день.

Для каждого клиента берётся один "текущий" заказ — самый поздний по
order_date, при равных order_date — самый поздний по created_at (после
отмены в тот же день может появиться новый заказ, и он должен победить).
Порядок клиентов на выходе совпадает с входным, запись есть для каждого
клиента, даже без заказа.
"""

from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Request
from sqlalchemy.future import select

from orderdesk.models.customer import Customer as CustomerModel
from orderdesk.models.order import Order as OrderModel
from orderdesk.services.policy import is_admin
from orderdesk.utils.calendar import DayBounds, as_utc, day_bounds
from orderdesk.utils.errors import ValidationError


@dataclass
class CustomerStatus:
    customer: Any
    order: Optional[Any]
    has_order: bool


def _newest_first_key(order):
    return (as_utc(order.order_date), as_utc(order.created_at))


def pick_latest_orders(customers, orders) -> list[CustomerStatus]:
    latest = {}
    for order in sorted(orders, key=_newest_first_key, reverse=True):
        latest.setdefault(order.customer_id, order)

    return [
        CustomerStatus(
            customer=customer,
            order=latest.get(customer.id),
            has_order=customer.id in latest,
        )
        for customer in customers
    ]


def customers_existing_by(customers, bounds: DayBounds) -> list:
    """Клиенты, созданные не позже конца дня: более поздние не могли иметь заказ в этот день."""
    return [c for c in customers if as_utc(c.created_at) <= bounds.end]


async def latest_status_for_day(db, customers, bounds: DayBounds) -> list[CustomerStatus]:
    customer_ids = [c.id for c in customers]
    if not customer_ids:
        return []

    result = await db.execute(
        select(OrderModel).where(
            OrderModel.customer_id.in_(customer_ids),
            OrderModel.order_date >= bounds.start,
            OrderModel.order_date <= bounds.end,
        )
    )
    orders = result.scalars().all()
    return pick_latest_orders(customers, orders)


async def _active_customers_for(db, principal) -> list[CustomerModel]:
    """Активные клиенты агента; администратору — все активные."""
    query = select(CustomerModel).where(CustomerModel.is_active.is_(True))
    if not is_admin(principal):
        query = query.where(CustomerModel.assigned_agent_id == principal.id)
    result = await db.execute(query.order_by(CustomerModel.id))
    return list(result.scalars().all())


async def today_status_service(request: Request, principal) -> list[CustomerStatus]:
    """
    Статусы клиентов за сегодняшний рабочий день.
    Фильтр по дате создания клиента здесь не нужен.
    """
    db = request.state.db
    log = request.app.state.log

    bounds = day_bounds()
    customers = await _active_customers_for(db, principal)
    statuses = await latest_status_for_day(db, customers, bounds)

    await log.log_info("status", "Статусы за сегодня", {
        "user_id": principal.id,
        "start": bounds.start,
        "customers": len(statuses),
    })
    return statuses


async def status_by_date_service(request: Request, principal, date: Optional[str]) -> list[CustomerStatus]:
    """
    Статусы клиентов за прошедший (или любой) рабочий день.
    Клиенты, созданные после конца дня, в выборку не попадают.
    """
    db = request.state.db
    log = request.app.state.log

    if not date:
        raise ValidationError("Date parameter is required")

    bounds = day_bounds(date)
    customers = customers_existing_by(await _active_customers_for(db, principal), bounds)
    statuses = await latest_status_for_day(db, customers, bounds)

    await log.log_info("status", "Статусы за дату", {
        "user_id": principal.id,
        "date": date,
        "customers": len(statuses),
    })
    return statuses
