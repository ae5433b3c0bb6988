# orderdesk/schemas/customer.py

from pydantic import BaseModel, Field
from typing import Optional

from orderdesk.schemas.common import DeliveryGuyRef, UserRef, UtcDatetime

# ────────────── Базовая схема ──────────────
class CustomerBase(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = Field(None, min_length=1)
    assigned_agent_id: Optional[int] = None
    assigned_delivery_guy_id: Optional[int] = None

# ────────────── Схема для CREATE ──────────────
class CustomerCreate(CustomerBase):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)

# ────────────── Схема для UPDATE ──────────────
class CustomerUpdate(CustomerBase):
    pass  # передаются только изменяемые поля

# ────────────── Схема для RESPONSE ──────────────
class CustomerResponse(BaseModel):
    id: int
    name: str
    phone: str
    address: str
    assigned_agent_id: Optional[int] = None
    assigned_delivery_guy_id: Optional[int] = None
    assigned_agent: Optional[UserRef] = None
    assigned_delivery_guy: Optional[DeliveryGuyRef] = None
    is_active: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = {
        "from_attributes": True
    }
