# orderdesk/services/profile.py
# Пользователи: агенты и администраторы

from sqlalchemy.exc import IntegrityError
from sqlalchemy.future import select
from fastapi import Request

from orderdesk.models.user import Role, User as UserModel
from orderdesk.schemas.user import AgentCreate, AgentUpdate
from orderdesk.utils.errors import ConflictError, NotFoundError
from orderdesk.utils.security import hash_password


async def read_user_by_login(login: str, request: Request) -> UserModel | None:
    """Активный пользователь по логину или None."""
    db = request.state.db
    result = await db.execute(
        select(UserModel).where(UserModel.login == login, UserModel.is_active.is_(True))
    )
    return result.scalar_one_or_none()


async def read_agents_service(request: Request) -> list[UserModel]:
    db = request.state.db
    log = request.app.state.log

    result = await db.execute(select(UserModel).where(UserModel.role == Role.AGENT.value).order_by(UserModel.id))
    agents = result.scalars().all()

    await log.log_info("agent", f"{len(agents)} агентов загружено")
    return agents


async def create_agent_service(agent: AgentCreate, request: Request) -> UserModel:
    """
    Создание агента. Пароль хэшируется, роль всегда agent.
    """
    db = request.state.db
    log = request.app.state.log

    db_agent = UserModel(
        name=agent.name,
        phone=agent.phone,
        login=agent.login,
        password=hash_password(agent.password),
        role=Role.AGENT.value,
    )
    db.add(db_agent)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        await log.log_warning("agent", "Логин уже занят", {"login": agent.login})
        raise ConflictError(f"Username '{agent.login}' already exists")

    await db.refresh(db_agent)
    await log.log_info("agent", "Агент создан", {"id": db_agent.id})
    return db_agent


async def update_agent_service(id: int, agent_update: AgentUpdate, request: Request) -> UserModel:
    db = request.state.db
    log = request.app.state.log

    db_agent = await db.get(UserModel, id)
    if db_agent is None or db_agent.role != Role.AGENT.value:
        raise NotFoundError("Agent not found")

    data = agent_update.model_dump(exclude_unset=True, exclude_none=True)
    if data.get("password"):
        data["password"] = hash_password(data["password"])
    else:
        data.pop("password", None)

    for key, value in data.items():
        setattr(db_agent, key, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Username '{agent_update.login}' already exists")

    await db.refresh(db_agent)
    await log.log_info("agent", "Агент обновлён", {"id": id, "fields": [k for k in data if k != "password"]})
    return db_agent
