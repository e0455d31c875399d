# storefront/data/models/order.py
from sqlalchemy import JSON, Column, ForeignKey, Integer, String, DateTime, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from storefront.data.database import Base

ORDER_PENDING = "pending"
ORDER_SHIPPED = "shipped"
ORDER_DELIVERED = "delivered"


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    status = Column(String, nullable=False, default=ORDER_PENDING)  # pending, shipped, delivered
    total = Column(Numeric(10, 2), nullable=False)
    address = Column(JSON, nullable=False)
    idempotency_key = Column(String(128))
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "idempotency_key", name="u_order_idempotency"),
    )
