"""Product and product image model definitions."""

import uuid

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront.database import Base, utcnow


GENDERS = ("male", "female")


class Product(Base):
    """Catalog product. Owns its image collection."""
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, unique=True, nullable=False)
    price = Column(Float, default=0, nullable=False)
    description = Column(Text)
    slug = Column(String, unique=True, nullable=False, index=True)
    stock = Column(Integer, default=0, nullable=False)
    sizes = Column(JSON, default=list, nullable=False)
    gender = Column(String, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    images = relationship(
        "ProductImage",
        back_populates="product",
        order_by="ProductImage.id",
        passive_deletes=True,
    )


class ProductImage(Base):
    """Image URL attached to a product."""
    __tablename__ = "product_images"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(String, nullable=False)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)

    product = relationship("Product", back_populates="images")
