# orderdesk/services/order.py

from typing import Optional

from sqlalchemy import update
from sqlalchemy.future import select
from fastapi import Request

from orderdesk.models.customer import Customer as CustomerModel
from orderdesk.models.item import Item as ItemModel
from orderdesk.models.order import Order as OrderModel
from orderdesk.schemas.order import OrderCreate, OrderUpdate
from orderdesk.services.policy import ensure_access, is_admin
from orderdesk.services.transitions import attempt_transition, initial_status
from orderdesk.utils.calendar import day_bounds, utcnow
from orderdesk.utils.errors import ConflictError, ForbiddenError, NotFoundError


async def _get_order(db, id: int, refresh: bool = False) -> OrderModel:
    query = select(OrderModel).where(OrderModel.id == id)
    if refresh:
        query = query.execution_options(populate_existing=True)
    result = await db.execute(query)
    db_order = result.scalar_one_or_none()
    if db_order is None:
        raise NotFoundError("Order not found")
    return db_order


async def _get_active_item(db, item_id: int) -> ItemModel:
    item = await db.get(ItemModel, item_id)
    if item is None or not item.is_active:
        raise NotFoundError("Item not found")
    return item


async def read_orders_service(
    request: Request,
    principal,
    date: Optional[str] = None,
    customer_id: Optional[int] = None,
) -> list[OrderModel]:
    """
    Список заказов, новые (по order_date) первыми.
    Агент видит только свои заказы; date — рабочий день YYYY-MM-DD.
    """
    db = request.state.db
    log = request.app.state.log

    query = select(OrderModel)
    if not is_admin(principal):
        query = query.where(OrderModel.agent_id == principal.id)
    if date:
        bounds = day_bounds(date)
        query = query.where(OrderModel.order_date >= bounds.start, OrderModel.order_date <= bounds.end)
    if customer_id is not None:
        query = query.where(OrderModel.customer_id == customer_id)

    result = await db.execute(query.order_by(OrderModel.order_date.desc(), OrderModel.created_at.desc()))
    orders = result.scalars().all()

    await log.log_info("order", f"{len(orders)} заказов загружено", {"date": date, "customer_id": customer_id})
    return orders


async def create_order_service(order: OrderCreate, principal, request: Request) -> OrderModel:
    """
    Создание заказа.

    Курьер копируется из текущего назначения клиента и дальше не меняется.
    Агент создаёт заказы только для своих клиентов и только в статусе
    pending или called; дату заказа может задать только администратор.
    """
    db = request.state.db
    log = request.app.state.log

    customer = await db.get(CustomerModel, order.customer_id)
    if customer is None or not customer.is_active:
        await log.log_error("order", "Клиент не найден", {"customer_id": order.customer_id})
        raise NotFoundError("Customer not found")

    ensure_access(principal, customer.assigned_agent_id, "Not authorized to create order for this customer")
    status = initial_status(order.status, principal)

    if order.order_date is not None and not is_admin(principal):
        raise ForbiddenError("Only administrators can set the order date")

    await _get_active_item(db, order.item_id)

    now = utcnow()
    db_order = OrderModel(
        customer_id=customer.id,
        agent_id=principal.id,
        delivery_guy_id=customer.assigned_delivery_guy_id,
        item_id=order.item_id,
        pieces=order.pieces,
        status=status.value,
        order_date=order.order_date or now,
        notes=order.notes,
        version=1,
        created_at=now,
        updated_at=now,
    )
    db.add(db_order)
    await db.commit()

    await log.log_info("order", "Заказ создан", {"id": db_order.id, "status": status, "agent_id": principal.id})
    return await _get_order(db, db_order.id, refresh=True)


async def read_order_service(id: int, principal, request: Request) -> OrderModel:
    """
    Чтение заказа по ID: 404 если нет, 403 если заказ чужого агента.
    """
    db = request.state.db
    log = request.app.state.log

    db_order = await _get_order(db, id)
    ensure_access(principal, db_order.agent_id, "Access denied")

    await log.log_info("order", "Заказ загружен", {"id": id})
    return db_order


async def update_order_service(id: int, order_update: OrderUpdate, principal, request: Request) -> OrderModel:
    """
    Смена статуса и полей заказа.

    Изменения проверяются attempt_transition и записываются одним UPDATE
    с условием на прочитанные status и version. Если заказ успел
    измениться параллельно, UPDATE не затронет строк и вернётся
    ConflictError; повтора нет.
    """
    db = request.state.db
    log = request.app.state.log

    db_order = await _get_order(db, id)

    payload = order_update.model_dump(exclude_unset=True)
    requested = payload.pop("status", None)
    changes = attempt_transition(db_order, requested, principal, payload)

    if "item_id" in changes:
        await _get_active_item(db, changes["item_id"])

    if not changes:
        return db_order

    result = await db.execute(
        update(OrderModel)
        .where(
            OrderModel.id == db_order.id,
            OrderModel.status == db_order.status,
            OrderModel.version == db_order.version,
        )
        .values(**changes, version=db_order.version + 1, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        await db.rollback()
        await log.log_warning("order", "Параллельное изменение заказа", {"id": id, "version": db_order.version})
        raise ConflictError("Order was modified by another request, reload it and try again")

    await db.commit()
    await log.log_info("order", "Заказ обновлён", {"id": id, "changes": changes})
    return await _get_order(db, id, refresh=True)


async def order_history_service(customer_id: int, principal, request: Request) -> list[OrderModel]:
    """
    Все заказы клиента, новые первыми.
    Агенту отказ (403) и для чужого, и для несуществующего клиента.
    """
    db = request.state.db
    log = request.app.state.log

    if not is_admin(principal):
        customer = await db.get(CustomerModel, customer_id)
        if customer is None or customer.assigned_agent_id != principal.id:
            await log.log_warning("order", "Отказ в истории заказов", {"customer_id": customer_id, "user_id": principal.id})
            raise ForbiddenError("Access denied")

    result = await db.execute(
        select(OrderModel)
        .where(OrderModel.customer_id == customer_id)
        .order_by(OrderModel.order_date.desc(), OrderModel.created_at.desc())
    )
    orders = result.scalars().all()

    await log.log_info("order", "История заказов загружена", {"customer_id": customer_id, "count": len(orders)})
    return orders
