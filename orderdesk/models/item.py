# orderdesk/models/item.py

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from orderdesk.utils.calendar import utcnow
from orderdesk.utils.database import Base

class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)   # название уникально
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
