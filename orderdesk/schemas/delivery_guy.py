# orderdesk/schemas/delivery_guy.py

from pydantic import BaseModel, Field
from typing import Optional

from orderdesk.schemas.common import UtcDatetime

class DeliveryGuyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)

class DeliveryGuyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None

class DeliveryGuyResponse(BaseModel):
    id: int
    name: str
    phone: str
    is_active: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = {"from_attributes": True}
