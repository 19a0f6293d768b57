# backend/app/db/models/restaurant_model.py
"""
Se encarga de definir el modelo de restaurante para la aplicación.
"""

import uuid

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from app.db.database import Base

class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=False)

    orders = relationship("Order", back_populates="restaurant", passive_deletes="all")

    def __repr__(self):
        return f"<Restaurant(id={self.id}, name='{self.name}')>"
