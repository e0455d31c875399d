# storefront/data/seed.py
from decimal import Decimal
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.auth_service import hash_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Street Oversized Tee",
        "description": "Premium cotton oversized t-shirt with urban graphic print. Heavyweight fabric for structured drape.",
        "price": Decimal("35.00"),
        "category": "T-Shirts",
        "images": ["https://images.unsplash.com/photo-1576566588028-4147f3842f27?w=800&q=80"],
        "stock": 100,
        "colors": ["Black", "White", "Olive"],
        "sizes": ["S", "M", "L", "XL", "XXL"],
        "tags": ["oversized", "graphic", "cotton"],
    },
    {
        "name": "Cargo Tech Joggers",
        "description": "Functional cargo joggers with multiple pockets and tapered fit. Water-resistant material.",
        "price": Decimal("65.00"),
        "category": "Joggers",
        "images": ["https://images.unsplash.com/photo-1552374196-1ab2a1c593e8?w=800&q=80"],
        "stock": 50,
        "colors": ["Black", "Khaki"],
        "sizes": ["S", "M", "L", "XL"],
        "tags": ["techwear", "cargo", "pants"],
    },
    {
        "name": "Urban Hoodie",
        "description": "Essential streetwear hoodie with drop shoulders and kangaroo pocket. Soft fleece lining.",
        "price": Decimal("55.00"),
        "category": "Hoodies",
        "images": ["https://images.unsplash.com/photo-1556905055-8f358a7a47b2?w=800&q=80"],
        "stock": 75,
        "colors": ["Black", "Grey", "Navy"],
        "sizes": ["S", "M", "L", "XL"],
        "tags": ["essential", "hoodie", "fleece"],
    },
    {
        "name": "Boxy Fit Shirt",
        "description": "Short sleeve button-up shirt with boxy silhouette. Abstract pattern print.",
        "price": Decimal("45.00"),
        "category": "Shirts",
        "images": ["https://images.unsplash.com/photo-1596755094514-f87e34085b2c?w=800&q=80"],
        "stock": 40,
        "colors": ["Multi"],
        "sizes": ["M", "L", "XL"],
        "tags": ["pattern", "summer", "boxy"],
    },
    {
        "name": "Distressed Denim Jacket",
        "description": "Vintage wash denim jacket with distressed details and custom hardware.",
        "price": Decimal("85.00"),
        "category": "Jackets",
        "images": ["https://images.unsplash.com/photo-1576871337632-b9aef4c17ab9?w=800&q=80"],
        "stock": 30,
        "colors": ["Blue Wash"],
        "sizes": ["S", "M", "L", "XL"],
        "tags": ["denim", "vintage", "outerwear"],
    },
]


def seed_catalog(db: Session) -> int:
    # tylko gdy katalog jest pusty
    repo = ProductRepo(db)
    if repo.has_products():
        return 0

    for fields in SAMPLE_PRODUCTS:
        repo.create_product(ProductModel(**fields))

    logger.info(f"Seeded catalog with {len(SAMPLE_PRODUCTS)} products")
    return len(SAMPLE_PRODUCTS)


def ensure_admin(db: Session, username: str | None, password: str | None) -> UserModel | None:
    if not username or not password:
        return None

    repo = UserRepo(db)
    existing = repo.get_user_by_username(username)
    if existing:
        return existing

    admin = repo.create_user(
        UserModel(username=username, password=hash_password(password), is_admin=True)
    )
    logger.info(f"Created admin account {admin.username}")
    return admin
