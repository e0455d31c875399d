# storefront/domain/schemas.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime

from storefront.utils.settings import MAX_QUANTITY


ProductSort = Literal["price_asc", "price_desc", "newest"]
OrderStatus = Literal["pending", "shipped", "delivered"]


# ---------------------------
# Users / auth
# ---------------------------
class UserCreate(BaseModel):
    """Schema dla rejestracji uzytkownika."""

    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, max_length=200)


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """Schema dla uzytkownika (response), bez hasha hasla."""

    id: int
    username: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    is_admin: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------
# Catalog
# ---------------------------
class ProductCreate(BaseModel):
    """Schema dla tworzenia produktu (admin)."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=10, decimal_places=2, description="Cena przekreslona, tylko do wyswietlania"
    )
    category: str = Field(..., min_length=1)
    tags: Optional[List[str]] = None
    images: List[str] = Field(..., min_length=1, description="URL-e zdjec, pierwsze to okladka")
    stock: int = Field(0, ge=0)
    colors: Optional[List[str]] = None
    sizes: Optional[List[str]] = None


class ProductOut(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    discount_price: Optional[Decimal] = None
    category: str
    tags: Optional[List[str]] = None
    images: List[str]
    stock: int
    colors: Optional[List[str]] = None
    sizes: Optional[List[str]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------
# Cart
# ---------------------------
class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY)
    size: Optional[str] = None
    color: Optional[str] = None


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY)


class CartItemOut(BaseModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    size: str
    color: str

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(CartItemOut):
    """Pozycja koszyka razem z produktem."""

    product: ProductOut


class CartSummaryOut(BaseModel):
    items: int
    subtotal: Decimal
    shipping: Decimal
    total: Decimal


# ---------------------------
# Wishlist
# ---------------------------
class WishlistToggleIn(BaseModel):
    product_id: int = Field(..., gt=0)


class WishlistToggleOut(BaseModel):
    added: bool


class WishlistLineOut(BaseModel):
    """Pozycja wishlisty razem z produktem."""

    id: int
    user_id: int
    product_id: int
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


# ---------------------------
# Orders
# ---------------------------
class ShippingAddress(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    country: Optional[str] = None


class OrderItemIn(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    price: Decimal = Field(..., ge=0, description="Cena jednostkowa z klienta, weryfikowana po stronie serwera")
    size: Optional[str] = None
    color: Optional[str] = None


class OrderCreate(BaseModel):
    """Schema dla skladania zamowienia."""

    address: ShippingAddress
    items: List[OrderItemIn] = Field(..., min_length=1)


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    price: Decimal
    size: str
    color: str

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    status: str
    total: Decimal
    address: ShippingAddress
    items: List[OrderItemOut]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
