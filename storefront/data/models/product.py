# storefront/data/models/product.py
from datetime import datetime, timezone
from sqlalchemy import JSON, Column, DateTime, Integer, Numeric, String, Text

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)

    price = Column(Numeric(10, 2), nullable=False)
    discount_price = Column(Numeric(10, 2))

    category = Column(String, nullable=False, index=True)
    tags = Column(JSON)
    images = Column(JSON, nullable=False)  # ordered, at least one
    stock = Column(Integer, nullable=False, default=0)
    colors = Column(JSON)
    sizes = Column(JSON)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
