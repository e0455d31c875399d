# storefront/api/__init__.py
from fastapi import APIRouter
from storefront.api.routers import auth, carts, orders, products, wishlist

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(products.router)
api_router.include_router(carts.router)
api_router.include_router(orders.router)
api_router.include_router(wishlist.router)
