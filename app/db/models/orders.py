# app/db/models/orders.py
import enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base, utcnow


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class Order(Base):
    """A customer order (receipt header).

    The monetary breakdown is fixed when the order is created and never
    recomputed; only ``status`` may change afterwards.
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)

    status = Column(String, nullable=False, default=OrderStatus.PENDING.value)

    subtotal_cent = Column(Integer, nullable=False, default=0)
    discount_cent = Column(Integer, nullable=False, default=0)
    tax_cent = Column(Integer, nullable=False, default=0)
    shipping_cent = Column(Integer, nullable=False, default=0)
    total_cent = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")

    __table_args__ = (
        Index("ix_orders_user_created", "user_id", "created_at"),
        Index("ix_orders_created", "created_at"),
    )


class OrderItem(Base):
    """A single product line within an order.

    Name, color, size and unit cost are copied at the time of sale so that
    reporting never depends on the mutable catalog state.
    """

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False)

    name_snapshot = Column(String, nullable=False)
    color_snapshot = Column(String, nullable=True)
    size_snapshot = Column(String, nullable=True)
    cost_snapshot_cent = Column(Integer, nullable=False, default=0)

    qty = Column(Integer, nullable=False)
    unit_price_cent = Column(Integer, nullable=False)
    line_total_cent = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")

    __table_args__ = (
        CheckConstraint("qty > 0", name="ck_order_items_qty_positive"),
        Index("ix_order_items_order", "order_id"),
    )
