# app/db/models/users.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base, utcnow


class User(Base):
    """Local record of a customer or admin known to the identity gateway.

    Credentials live with the gateway; the store only keeps what it needs to
    own addresses and orders.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # empty for users first seen through the gateway headers
    name = Column(String, nullable=True)
    email = Column(String, nullable=True, unique=True)
    phone = Column(String, nullable=True)
    role = Column(String, nullable=False, default="customer")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    addresses = relationship("Address", back_populates="user", cascade="all, delete-orphan")


class Address(Base):
    """Shipping address owned by a user; at most one is flagged default."""

    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    label = Column(String, nullable=True)
    recipient = Column(String, nullable=False)
    department = Column(String, nullable=False)
    city = Column(String, nullable=False)
    street = Column(String, nullable=False)
    country = Column(String, nullable=False, default="Colombia")
    is_default = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    user = relationship("User", back_populates="addresses")
