# orderdesk/services/policy.py

"""
Проверка доступа к записям.

Администратор видит и меняет всё. Агент работает только со своими
клиентами и заказами: владелец записи (assigned_agent_id у клиента,
agent_id у заказа) должен совпадать с id агента.
"""

from orderdesk.models.user import Role
from orderdesk.utils.errors import ForbiddenError


def is_admin(principal) -> bool:
    return principal.role == Role.ADMIN.value


def can_access(principal, owner_agent_id) -> bool:
    if is_admin(principal):
        return True
    return owner_agent_id is not None and owner_agent_id == principal.id


def ensure_access(principal, owner_agent_id, message: str = "Access denied") -> None:
    if not can_access(principal, owner_agent_id):
        raise ForbiddenError(message)


def require_admin(principal, message: str = "Admin access required") -> None:
    if not is_admin(principal):
        raise ForbiddenError(message)
