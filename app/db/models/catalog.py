# app/db/models/catalog.py
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base, utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)

    products = relationship("Product", back_populates="category")


class Product(Base):
    """A catalog entry grouping sellable variants.

    ``discount_percent`` applies uniformly to every variant of the product at
    the moment of sale. ``slug`` is globally unique and URL safe.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    short_description = Column(Text, nullable=True)
    discount_percent = Column(Numeric(5, 2), nullable=True)
    active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    category = relationship("Category", back_populates="products")
    variants = relationship("Variant", back_populates="product", order_by="Variant.id")
    images = relationship(
        "ProductImage",
        back_populates="product",
        order_by="ProductImage.sort_order",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint(
            "discount_percent IS NULL OR (discount_percent >= 0 AND discount_percent <= 100)",
            name="ck_products_discount_range",
        ),
    )


class Variant(Base):
    """A purchasable SKU-level unit of a product.

    Carries its own sale price, weighted-average acquisition cost and on-hand
    stock. Checkout decrements ``stock``; purchase receiving increments it and
    re-blends ``cost_cent``.
    """

    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    sku = Column(String, nullable=True, unique=True)
    color = Column(String, nullable=True)
    size = Column(String, nullable=True)

    price_cent = Column(Integer, nullable=False)
    cost_cent = Column(Integer, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)

    product = relationship("Product", back_populates="variants")

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_variants_stock_non_negative"),
        CheckConstraint("price_cent > 0", name="ck_variants_price_positive"),
        CheckConstraint("cost_cent >= 0", name="ck_variants_cost_non_negative"),
        Index("ix_product_variants_product", "product_id"),
    )


class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    url = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="images")
