# storefront/repos/product_repo.py
from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session
from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(
        self,
        category: str | None = None,
        sort: str | None = None,
        search: str | None = None,
    ) -> List[ProductModel]:
        query = select(ProductModel)

        if category:
            query = query.where(ProductModel.category == category)

        if search:
            pattern = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            query = query.where(ProductModel.name.ilike(f"%{pattern}%", escape="\\"))

        if sort == "price_asc":
            query = query.order_by(ProductModel.price.asc(), ProductModel.id.asc())
        elif sort == "price_desc":
            query = query.order_by(ProductModel.price.desc(), ProductModel.id.desc())
        else:
            # domyslnie najnowsze
            query = query.order_by(ProductModel.created_at.desc(), ProductModel.id.desc())

        return list(self.db.execute(query).scalars().all())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids: List[int]) -> dict[int, ProductModel]:
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(product_ids))
        ).scalars().all()
        return {p.id: p for p in rows}

    def has_products(self) -> bool:
        return self.db.execute(select(ProductModel.id).limit(1)).first() is not None

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product
