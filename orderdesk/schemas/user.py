# orderdesk/schemas/user.py

from pydantic import BaseModel, Field
from typing import Optional

from orderdesk.schemas.common import UtcDatetime

class AgentBase(BaseModel):
    """
    Базовая схема агента.
    """
    name: Optional[str] = None
    phone: Optional[str] = None
    login: Optional[str] = None

class AgentCreate(AgentBase):
    """
    Создание агента администратором: все поля обязательны.
    """
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    login: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class AgentUpdate(AgentBase):
    """
    Обновление агента: передаются только изменяемые поля.
    Пароль хэшируется перед сохранением.
    """
    password: Optional[str] = None
    is_active: Optional[bool] = None

class UserResponse(AgentBase):
    """
    Ответ API: пароль никогда не возвращается.
    """
    id: int
    role: str
    is_active: bool
    created_at: UtcDatetime

    model_config = {
        "from_attributes": True
    }

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
