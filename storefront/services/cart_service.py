# storefront/services/cart_service.py
from decimal import Decimal
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.schemas import CartItemIn, CartLineOut, CartSummaryOut, ProductOut
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.lock_service import LockService
from storefront.utils.settings import FREE_SHIPPING_THRESHOLD, MAX_QUANTITY, SHIPPING_FEE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def cart_line(item: CartItemModel, product) -> CartLineOut:
    return CartLineOut(
        id=item.id,
        user_id=item.user_id,
        product_id=item.product_id,
        quantity=item.quantity,
        size=item.size,
        color=item.color,
        product=ProductOut.model_validate(product),
    )


def shipping_for(subtotal: Decimal) -> Decimal:
    # darmowa wysylka powyzej progu
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return Decimal("0.00")
    return SHIPPING_FEE


class CartService:
    """
    Use case'y dla koszyka
    query (list, summary) tylko odczyt
    commands (add, update, remove) modyfikuja stan
    czyszczenie koszyka (CartRepo.clear_cart) robi OrderService w transakcji zamowienia
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.lock_service = lock_service

    #query
    def list_cart(self, user_id: int) -> List[CartLineOut]:
        return [cart_line(item, product) for item, product in self.repo.get_cart_lines(user_id)]

    def summary(self, user_id: int) -> CartSummaryOut:
        lines = self.repo.get_cart_lines(user_id)
        subtotal = sum((p.price * i.quantity for i, p in lines), Decimal("0.00"))
        shipping = shipping_for(subtotal) if lines else Decimal("0.00")

        return CartSummaryOut(
            items=sum(i.quantity for i, _ in lines),
            subtotal=subtotal,
            shipping=shipping,
            total=subtotal + shipping,
        )

    #commands
    def add_item(self, user_id: int, payload: CartItemIn) -> CartItemModel:
        product = self.products.get_product(payload.product_id)
        if not product:
            raise LookupError("Product not found")

        size = payload.size or ""
        color = payload.color or ""

        # check-then-act pod lockiem na wariant, unique constraint jako druga linia
        with self.lock_service.locked(f"cart:{user_id}:{product.id}:{size}:{color}"):
            existing = self.repo.get_matching_item(user_id, product.id, size, color)

            if existing and existing.quantity + payload.quantity > MAX_QUANTITY:
                raise ValueError(f"Quantity cannot exceed {MAX_QUANTITY}")

            try:
                if existing:
                    logger.info(
                        f"Product {product.id} already in cart of user {user_id}, quantity "
                        f"{existing.quantity} -> {existing.quantity + payload.quantity}"
                    )
                    existing.quantity += payload.quantity
                    item = existing
                else:
                    logger.info(f"Adding product {product.id} to cart of user {user_id}")
                    item = self.repo.add_cart_item(
                        CartItemModel(
                            user_id=user_id,
                            product_id=product.id,
                            quantity=payload.quantity,
                            size=size,
                            color=color,
                        )
                    )
                self.repo.commit()
            except IntegrityError:
                self.repo.rollback()
                raise RuntimeError("Cart was modified concurrently, retry the request")

        self.repo.refresh(item)
        return item

    def update_item(self, user_id: int, item_id: int, quantity: int) -> CartItemModel:
        if quantity < 1 or quantity > MAX_QUANTITY:
            raise ValueError(f"Quantity must be between 1 and {MAX_QUANTITY}")

        item = self.repo.get_cart_item(item_id)

        if not item:
            raise LookupError("Cart item not found")

        if item.user_id != user_id:
            raise PermissionError("Cart item belongs to another user")

        item.quantity = quantity
        self.repo.commit()
        self.repo.refresh(item)

        logger.info(f"Cart item {item_id} of user {user_id} set to quantity {quantity}")
        return item

    def remove_item(self, user_id: int, item_id: int) -> None:
        item = self.repo.get_cart_item(item_id)

        # brak wiersza = no-op
        if not item:
            return

        if item.user_id != user_id:
            raise PermissionError("Cart item belongs to another user")

        self.repo.delete_cart_item(item)
        self.repo.commit()
        logger.info(f"Cart item {item_id} removed for user {user_id}")
