# orderdesk/utils/errors.py

"""
Типизированные ошибки предметной области.

Сервисы поднимают их, а обработчик в main.py превращает в JSON-ответ
{"detail": "..."} с соответствующим HTTP-кодом. Повторов нет: любая
ошибка завершает запрос.
"""

from fastapi import status


class OrderDeskError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_content(self) -> dict:
        return {"detail": self.message}


class ValidationError(OrderDeskError):
    """Отсутствующее или некорректное поле."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(OrderDeskError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(OrderDeskError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(OrderDeskError):
    """Нарушена уникальность или запись изменена параллельным запросом."""
    status_code = status.HTTP_409_CONFLICT


class StateTransitionError(OrderDeskError):
    """Недопустимая смена статуса; пара current/requested уходит клиенту."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, current, requested, message: str | None = None):
        self.current = getattr(current, "value", current)
        self.requested = getattr(requested, "value", requested)
        super().__init__(
            message
            or f"Cannot change status from {self.current} to {self.requested}. "
               f"Status must progress sequentially."
        )

    def to_content(self) -> dict:
        return {
            "detail": self.message,
            "current_status": self.current,
            "requested_status": self.requested,
        }
