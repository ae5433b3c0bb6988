# orderdesk/models/customer.py

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from orderdesk.utils.calendar import utcnow
from orderdesk.utils.database import Base

class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(Text, nullable=False)

    # Текущие назначения; администратор может их менять.
    # Заказы хранят собственный снимок курьера, см. Order.delivery_guy_id
    assigned_agent_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    assigned_delivery_guy_id = Column(Integer, ForeignKey("delivery_guys.id"), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)   # мягкое удаление
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    assigned_agent = relationship("User", lazy="selectin")
    assigned_delivery_guy = relationship("DeliveryGuy", lazy="selectin")
