# app/db/models/purchases.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base, utcnow


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    tax_id = Column(String, nullable=True, unique=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())


class Purchase(Base):
    """An inbound supplier invoice.

    Totals start at zero and are written once every line has been received,
    inside the same transaction as the items and the variant updates.
    """

    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)

    invoice_number = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    subtotal_cent = Column(Integer, nullable=False, default=0)
    iva_cent = Column(Integer, nullable=False, default=0)
    retefuente_cent = Column(Integer, nullable=False, default=0)
    total_cent = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    supplier = relationship("Supplier")
    items = relationship("PurchaseItem", back_populates="purchase", order_by="PurchaseItem.id")


class PurchaseItem(Base):
    __tablename__ = "purchase_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    purchase_id = Column(Integer, ForeignKey("purchases.id"), nullable=False)
    variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False)

    qty = Column(Integer, nullable=False)
    unit_cost_cent = Column(Integer, nullable=False)
    iva_unit_cent = Column(Integer, nullable=False, default=0)
    line_subtotal_cent = Column(Integer, nullable=False)

    purchase = relationship("Purchase", back_populates="items")

    __table_args__ = (
        CheckConstraint("qty > 0", name="ck_purchase_items_qty_positive"),
        CheckConstraint("unit_cost_cent > 0", name="ck_purchase_items_cost_positive"),
        Index("ix_purchase_items_purchase", "purchase_id"),
    )
