# orderdesk/schemas/order.py

from pydantic import BaseModel, Field
from typing import Optional

from orderdesk.models.order import OrderStatus
from orderdesk.schemas.common import CustomerRef, DeliveryGuyRef, ItemRef, UserRef, UtcDatetime
from orderdesk.schemas.customer import CustomerResponse

class OrderCreate(BaseModel):
    customer_id: int
    item_id: int
    pieces: int = Field(..., ge=1)
    status: Optional[OrderStatus] = None       # по умолчанию pending
    notes: Optional[str] = None
    order_date: Optional[UtcDatetime] = None   # только для администратора

class OrderUpdate(BaseModel):
    """
    Смена статуса и/или полей заказа. Учитываются только переданные поля.
    """
    status: Optional[OrderStatus] = None
    pieces: Optional[int] = Field(None, ge=1)
    item_id: Optional[int] = None
    notes: Optional[str] = None

class OrderResponse(BaseModel):
    id: int
    customer_id: int
    agent_id: int
    item_id: int
    delivery_guy_id: Optional[int] = None
    pieces: int
    status: OrderStatus
    order_date: UtcDatetime
    notes: Optional[str] = None
    version: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    customer: Optional[CustomerRef] = None
    agent: Optional[UserRef] = None
    delivery_guy: Optional[DeliveryGuyRef] = None
    item: Optional[ItemRef] = None

    model_config = {
        "from_attributes": True
    }

class CustomerStatusResponse(BaseModel):
    """Клиент и его последний заказ за рабочий день."""
    customer: CustomerResponse
    order: Optional[OrderResponse] = None
    has_order: bool

    model_config = {
        "from_attributes": True
    }
