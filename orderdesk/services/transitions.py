# orderdesk/services/transitions.py

"""
Правила смены статуса заказа.

    pending      -> called
    called       -> order_placed   (в запросе обязательны item_id и pieces)
    order_placed -> delivered
    delivered, cancelled — конечные

Из любого неконечного статуса агент может отменить заказ (cancelled).

Для каждой роли своя политика (TransitionPolicy):
  - агент — SequentialTransitionPolicy, строгая последовательность;
  - администратор — TrustedTransitionPolicy, любые статусы без проверки
    последовательности (администратор — доверенный оператор).

attempt_transition ничего не пишет в базу: возвращает словарь изменений,
который сервис применяет условным UPDATE (см. services/order.py).
"""

from abc import ABC, abstractmethod

from orderdesk.models.order import OrderStatus
from orderdesk.models.user import Role
from orderdesk.services.policy import ensure_access
from orderdesk.utils.errors import StateTransitionError, ValidationError

ALLOWED_TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
    OrderStatus.PENDING: (OrderStatus.CALLED,),
    OrderStatus.CALLED: (OrderStatus.ORDER_PLACED,),
    OrderStatus.ORDER_PLACED: (OrderStatus.DELIVERED,),
    OrderStatus.DELIVERED: (),
    OrderStatus.CANCELLED: (),
}

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

AGENT_INITIAL_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CALLED})


class TransitionPolicy(ABC):
    role: Role

    @abstractmethod
    def check_initial(self, status: OrderStatus) -> None:
        """Статус, с которым разрешено создать заказ."""

    @abstractmethod
    def check_transition(self, current: OrderStatus, requested: OrderStatus) -> None:
        """Поднимает StateTransitionError, если переход запрещён."""


class SequentialTransitionPolicy(TransitionPolicy):
    role = Role.AGENT

    def check_initial(self, status: OrderStatus) -> None:
        if status not in AGENT_INITIAL_STATUSES:
            raise ValidationError("New orders can only be created with pending or called status")

    def check_transition(self, current: OrderStatus, requested: OrderStatus) -> None:
        # отмена проверяется раньше таблицы
        if requested is OrderStatus.CANCELLED:
            if current in TERMINAL_STATUSES:
                raise StateTransitionError(
                    current, requested, f"Cannot cancel an order that is already {current.value}."
                )
            return

        if requested not in ALLOWED_TRANSITIONS[current]:
            raise StateTransitionError(current, requested)


class TrustedTransitionPolicy(TransitionPolicy):
    role = Role.ADMIN

    def check_initial(self, status: OrderStatus) -> None:
        return None

    def check_transition(self, current: OrderStatus, requested: OrderStatus) -> None:
        if requested is current:
            raise StateTransitionError(current, requested, f"Order is already {current.value}.")


POLICIES: dict[Role, TransitionPolicy] = {
    Role.AGENT: SequentialTransitionPolicy(),
    Role.ADMIN: TrustedTransitionPolicy(),
}


def policy_for(principal) -> TransitionPolicy:
    """Политика по роли; неизвестная роль получает самую строгую."""
    try:
        return POLICIES[Role(principal.role)]
    except ValueError:
        return POLICIES[Role.AGENT]


def initial_status(requested, principal) -> OrderStatus:
    """Статус нового заказа: pending по умолчанию, иначе проверенный политикой."""
    status = OrderStatus(requested) if requested is not None else OrderStatus.PENDING
    policy_for(principal).check_initial(status)
    return status


def attempt_transition(order, requested_status, principal, payload: dict) -> dict:
    """
    Проверяет изменение заказа и возвращает словарь изменений колонок.

    Порядок проверок:
      1. доступ агента к заказу (ForbiddenError);
      2. допустимость перехода по политике роли (StateTransitionError);
      3. called -> order_placed требует item_id и pieces (ValidationError);
      4. pieces >= 1 (ValidationError).

    payload — поля запроса, которые клиент действительно передал
    (pieces, item_id, notes).
    """
    ensure_access(principal, order.agent_id, "Not authorized to update this order")

    current = OrderStatus(order.status)
    changes = {}

    if requested_status is not None:
        requested = OrderStatus(requested_status)
        policy_for(principal).check_transition(current, requested)

        if current is OrderStatus.CALLED and requested is OrderStatus.ORDER_PLACED:
            if not payload.get("item_id") or not payload.get("pieces"):
                raise ValidationError("Item and pieces are required when placing an order")

        changes["status"] = requested.value

    pieces = payload.get("pieces")
    if pieces is not None:
        if pieces < 1:
            raise ValidationError("Pieces must be at least 1")
        changes["pieces"] = pieces

    if payload.get("item_id") is not None:
        changes["item_id"] = payload["item_id"]

    if "notes" in payload:
        changes["notes"] = payload["notes"]

    return changes
