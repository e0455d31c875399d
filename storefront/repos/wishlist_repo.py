# storefront/repos/wishlist_repo.py
from typing import List, Tuple
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_wishlist_lines(self, user_id: int) -> List[Tuple[WishlistItemModel, ProductModel]]:
        rows = self.db.execute(
            select(WishlistItemModel, ProductModel)
            .join(ProductModel, WishlistItemModel.product_id == ProductModel.id)
            .where(WishlistItemModel.user_id == user_id)
            .order_by(WishlistItemModel.id)
        ).all()
        return [(item, product) for item, product in rows]

    def get_item(self, user_id: int, product_id: int) -> WishlistItemModel | None:
        return self.db.execute(
            select(WishlistItemModel).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_item(self, item: WishlistItemModel) -> WishlistItemModel:
        self.db.add(item)
        self.db.commit()
        return item

    def delete_item(self, item: WishlistItemModel) -> None:
        self.db.delete(item)
        self.db.commit()

    def rollback(self):
        self.db.rollback()
