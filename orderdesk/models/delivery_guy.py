# orderdesk/models/delivery_guy.py

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from orderdesk.utils.calendar import utcnow
from orderdesk.utils.database import Base

class DeliveryGuy(Base):
    __tablename__ = "delivery_guys"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
