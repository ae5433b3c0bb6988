# orderdesk/schemas/common.py

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel

from orderdesk.utils.calendar import as_utc

# SQLite возвращает наивные datetime; в ответах всегда UTC с зоной
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


# ────────────── Краткие ссылки на связанные записи ──────────────
class UserRef(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class DeliveryGuyRef(BaseModel):
    id: int
    name: str
    phone: str

    model_config = {"from_attributes": True}


class ItemRef(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class CustomerRef(BaseModel):
    id: int
    name: str
    phone: str
    address: str

    model_config = {"from_attributes": True}


class IdResponse(BaseModel):
    id: int
