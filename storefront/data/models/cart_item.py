# storefront/data/models/cart_item.py
from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    # brak wariantu = pusty string, inaczej unique constraint nie zadziala na NULL
    size = Column(String, nullable=False, default="")
    color = Column(String, nullable=False, default="")

    product = relationship("ProductModel")

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", "size", "color", name="u_cart_variant"),
    )
