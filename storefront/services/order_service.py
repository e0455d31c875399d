# storefront/services/order_service.py
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.order import (
    ORDER_DELIVERED,
    ORDER_PENDING,
    ORDER_SHIPPED,
    OrderModel,
)
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.schemas import OrderCreate
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import MAX_ORDER_TOTAL, PRICE_TOLERANCE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")

# dozwolone przejscia statusu
STATUS_TRANSITIONS = {
    ORDER_PENDING: ORDER_SHIPPED,
    ORDER_SHIPPED: ORDER_DELIVERED,
}


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamowienie, jego pozycje i czyszczenie koszyka to jedna transakcja.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.notification_service = notification_service or NotificationService()

    def place_order(
        self,
        user_id: int,
        payload: OrderCreate,
        idempotency_key: str | None = None,
    ) -> Tuple[OrderModel, bool]:
        """
        Use Case: zlozenie zamowienia.

        1. Powtorka z tym samym idempotency key zwraca istniejace zamowienie
        2. Ceny i total liczone po stronie serwera z katalogu
        3. Order + OrderItems + czyszczenie koszyka w jednej transakcji
        4. Powiadomienie (async) po commicie

        Returns (order, created). created is False for a replayed key.
        """
        if idempotency_key:
            existing = self.repo.get_order_by_idempotency_key(user_id, idempotency_key)
            if existing:
                logger.info(f"Replaying order {existing.id} for idempotency key {idempotency_key}")
                return existing, False

        items, total = self._price_items(payload)

        try:
            order = self.repo.add_order(
                OrderModel(
                    user_id=user_id,
                    status=ORDER_PENDING,
                    total=total,
                    address=payload.address.model_dump(),
                    idempotency_key=idempotency_key,
                )
            )

            for item in items:
                item.order_id = order.id
            self.repo.add_order_items(items)

            cleared = self.carts.clear_cart(user_id)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            # rownolegly request z tym samym kluczem wygral
            if idempotency_key:
                existing = self.repo.get_order_by_idempotency_key(user_id, idempotency_key)
                if existing:
                    return existing, False
            logger.exception(f"Order for user {user_id} rolled back")
            raise
        except Exception:
            self.repo.rollback()
            logger.exception(f"Order for user {user_id} rolled back")
            raise

        self.db.refresh(order, attribute_names=["items"])
        logger.info(
            f"Order {order.id} placed by user {user_id}: {len(items)} items, "
            f"total {order.total}, {cleared} cart rows cleared"
        )

        try:
            self.notification_service.send_order_placed(user_id, order.id, order.total)
        except Exception as e:
            # zamowienie jest poprawne, nie zwracamy bledu
            logger.warning(f"Order {order.id} notification not queued: {e}")

        return order, True

    def _price_items(self, payload: OrderCreate) -> Tuple[List[OrderItemModel], Decimal]:
        products = self.products.get_products([line.product_id for line in payload.items])

        items = []
        total = Decimal("0.00")

        for line in payload.items:
            product = products.get(line.product_id)
            if not product:
                raise ValueError(f"Product {line.product_id} no longer exists")

            price = Decimal(product.price)
            if abs(Decimal(line.price) - price) > PRICE_TOLERANCE:
                raise ValueError(
                    f"Price of product {product.id} changed to {price}, refresh the cart"
                )

            items.append(
                OrderItemModel(
                    product_id=product.id,
                    quantity=line.quantity,
                    price=price,
                    size=line.size or "",
                    color=line.color or "",
                )
            )
            total += price * line.quantity

        total = total.quantize(CENT, rounding=ROUND_HALF_UP)
        if total > MAX_ORDER_TOTAL:
            raise ValueError(f"Order total cannot exceed {MAX_ORDER_TOTAL}")

        return items, total

    def list_orders(self, user_id: int) -> List[OrderModel]:
        return self.repo.list_orders(user_id)

    def get_order(self, order_id: int, user_id: int, is_admin: bool = False) -> OrderModel:
        """
        Use Case: pobranie zamowienia (Query).
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise LookupError("Order not found")

        if order.user_id != user_id and not is_admin:
            raise PermissionError("Order belongs to another user")

        return order

    def update_status(self, order_id: int, status: str) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise LookupError("Order not found")

        if STATUS_TRANSITIONS.get(order.status) != status:
            raise ValueError(f"Cannot change order status from {order.status} to {status}")

        updated = self.repo.update_order_status(order, status)
        logger.info(f"Order {order_id} status {updated.status}")
        return updated
