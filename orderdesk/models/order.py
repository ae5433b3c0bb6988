# orderdesk/models/order.py

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from orderdesk.utils.calendar import utcnow
from orderdesk.utils.database import Base

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CALLED = "called"
    ORDER_PLACED = "order_placed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)  # автоинкремент

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    agent_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)

    # Снимок курьера клиента на момент создания заказа.
    # Не синхронизируется с Customer.assigned_delivery_guy_id
    delivery_guy_id = Column(Integer, ForeignKey("delivery_guys.id"), nullable=True)

    pieces = Column(Integer, nullable=False)                       # количество, >= 1
    status = Column(String(16), nullable=False, default=OrderStatus.PENDING.value)
    order_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    notes = Column(Text, nullable=True)

    version = Column(Integer, nullable=False, default=1)           # растёт при каждом изменении
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    customer = relationship("Customer", lazy="selectin")
    agent = relationship("User", lazy="selectin")
    delivery_guy = relationship("DeliveryGuy", lazy="selectin")
    item = relationship("Item", lazy="selectin")

    __table_args__ = (
        CheckConstraint("pieces >= 1", name="ck_orders_pieces_positive"),
        Index("ix_orders_order_date_agent", "order_date", "agent_id"),
        Index("ix_orders_customer_order_date", "customer_id", "order_date"),
    )
