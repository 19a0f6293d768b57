# backend/app/db/models/client_model.py
"""
Se encarga de definir los modelos de cliente para la aplicación.
"""

import uuid

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from app.db.database import Base

class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(255), nullable=False, index=True)
    last_name = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=False)

    # Relación con las órdenes. Sin cascada ORM: el borrado lo orquesta cascade_service
    orders = relationship("Order", back_populates="client", passive_deletes="all")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.full_name}')>"
