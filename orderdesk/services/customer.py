# orderdesk/services/customer.py

from sqlalchemy.future import select
from fastapi import Request

from orderdesk.models.customer import Customer as CustomerModel
from orderdesk.models.delivery_guy import DeliveryGuy as DeliveryGuyModel
from orderdesk.models.user import Role, User as UserModel
from orderdesk.schemas.customer import CustomerCreate, CustomerUpdate
from orderdesk.services.policy import ensure_access, is_admin
from orderdesk.utils.errors import NotFoundError, ValidationError


async def _check_assignments(db, data: dict) -> None:
    """Назначаемые агент и курьер должны существовать."""
    agent_id = data.get("assigned_agent_id")
    if agent_id is not None:
        agent = await db.get(UserModel, agent_id)
        if agent is None or agent.role != Role.AGENT.value:
            raise ValidationError("Assigned agent not found")

    delivery_guy_id = data.get("assigned_delivery_guy_id")
    if delivery_guy_id is not None:
        delivery_guy = await db.get(DeliveryGuyModel, delivery_guy_id)
        if delivery_guy is None or not delivery_guy.is_active:
            raise ValidationError("Assigned delivery guy not found")


async def _get_customer(db, id: int, refresh: bool = False) -> CustomerModel:
    query = select(CustomerModel).where(CustomerModel.id == id)
    if refresh:
        query = query.execution_options(populate_existing=True)
    result = await db.execute(query)
    db_customer = result.scalar_one_or_none()
    if db_customer is None:
        raise NotFoundError("Customer not found")
    return db_customer


async def read_customers_service(request: Request, principal) -> list[CustomerModel]:
    """
    Активные клиенты; агенту — только назначенные ему.
    """
    db = request.state.db
    log = request.app.state.log

    query = select(CustomerModel).where(CustomerModel.is_active.is_(True))
    if not is_admin(principal):
        query = query.where(CustomerModel.assigned_agent_id == principal.id)

    result = await db.execute(query.order_by(CustomerModel.id))
    customers = result.scalars().all()

    await log.log_info("customer", f"{len(customers)} клиентов загружено")
    return customers


async def read_customer_service(id: int, principal, request: Request) -> CustomerModel:
    db = request.state.db
    log = request.app.state.log

    db_customer = await _get_customer(db, id)
    ensure_access(principal, db_customer.assigned_agent_id, "Access denied")

    await log.log_info("customer", "Клиент загружен", {"id": id})
    return db_customer


async def create_customer_service(customer: CustomerCreate, request: Request) -> CustomerModel:
    db = request.state.db
    log = request.app.state.log

    data = customer.model_dump()
    await _check_assignments(db, data)

    db_customer = CustomerModel(**data)
    db.add(db_customer)
    await db.commit()

    await log.log_info("customer", "Клиент создан", {"id": db_customer.id})
    return await _get_customer(db, db_customer.id, refresh=True)


async def update_customer_service(id: int, customer_update: CustomerUpdate, request: Request) -> CustomerModel:
    """
    Обновление клиента. Смена курьера не затрагивает уже созданные заказы.
    """
    db = request.state.db
    log = request.app.state.log

    db_customer = await _get_customer(db, id)
    data = customer_update.model_dump(exclude_unset=True)
    # обязательные поля нельзя обнулить, назначения — можно
    data = {k: v for k, v in data.items() if v is not None or k.startswith("assigned_")}
    await _check_assignments(db, data)

    for key, value in data.items():
        setattr(db_customer, key, value)

    await db.commit()
    await log.log_info("customer", "Клиент обновлён", {"id": id, "fields": list(data)})
    return await _get_customer(db, id, refresh=True)


async def deactivate_customer_service(id: int, request: Request) -> None:
    """Мягкое удаление: is_active=False, заказы остаются."""
    db = request.state.db
    log = request.app.state.log

    db_customer = await _get_customer(db, id)
    db_customer.is_active = False
    await db.commit()
    await log.log_info("customer", "Клиент деактивирован", {"id": id})
