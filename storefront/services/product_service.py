# storefront/services/product_service.py
from typing import List
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.schemas import ProductCreate
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(
        self,
        category: str | None = None,
        sort: str | None = None,
        search: str | None = None,
    ) -> List[ProductModel]:
        return self.repo.list_products(category=category, sort=sort, search=search)

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.repo.get_product(product_id)

    def create_product(self, payload: ProductCreate) -> ProductModel:
        created = self.repo.create_product(ProductModel(**payload.model_dump()))
        logger.info(f"Created product {created.id} ({created.name})")
        return created
