# orderdesk/schemas/item.py

from pydantic import BaseModel, Field
from typing import Optional

from orderdesk.schemas.common import UtcDatetime

class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1)

class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None

class ItemResponse(BaseModel):
    id: int
    name: str
    is_active: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = {"from_attributes": True}
