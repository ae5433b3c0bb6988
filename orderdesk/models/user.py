# orderdesk/models/user.py

import enum

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from orderdesk.utils.calendar import utcnow
from orderdesk.utils.database import Base


class Role(str, enum.Enum):
    ADMIN = "admin"
    AGENT = "agent"


class User(Base):
    """Администраторы и агенты по продажам (одна таблица, различаются role)."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)  # автоинкремент
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    login = Column(String, unique=True, nullable=False)          # логин
    password = Column(String, nullable=False)                    # хэш пароля
    role = Column(String(16), nullable=False, default=Role.AGENT.value)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
