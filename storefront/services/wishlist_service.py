# storefront/services/wishlist_service.py
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.domain.schemas import ProductOut, WishlistLineOut
from storefront.repos.product_repo import ProductRepo
from storefront.repos.wishlist_repo import WishlistRepo
from storefront.services.lock_service import LockService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session, lock_service: LockService):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)
        self.lock_service = lock_service

    def list_wishlist(self, user_id: int) -> List[WishlistLineOut]:
        return [
            WishlistLineOut(
                id=item.id,
                user_id=item.user_id,
                product_id=item.product_id,
                product=ProductOut.model_validate(product),
            )
            for item, product in self.repo.get_wishlist_lines(user_id)
        ]

    def toggle(self, user_id: int, product_id: int) -> bool:
        """
        Usuwa pozycje jesli istnieje, w przeciwnym razie dodaje.
        Zwraca True gdy dodano, False gdy usunieto.
        """
        if not self.products.get_product(product_id):
            raise LookupError("Product not found")

        with self.lock_service.locked(f"wishlist:{user_id}:{product_id}"):
            existing = self.repo.get_item(user_id, product_id)

            if existing:
                self.repo.delete_item(existing)
                logger.info(f"Product {product_id} removed from wishlist of user {user_id}")
                return False

            try:
                self.repo.add_item(WishlistItemModel(user_id=user_id, product_id=product_id))
            except IntegrityError:
                self.repo.rollback()
                raise RuntimeError("Wishlist was modified concurrently, retry the request")

            logger.info(f"Product {product_id} added to wishlist of user {user_id}")
            return True
