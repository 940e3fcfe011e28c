"""
Record Schemas for the Furniture Storefront

Each Pydantic model below is one kind of record held by the in-memory stores.
Cart lines, wishlist entries and order items are value snapshots: they copy
the product fields they display and never point back at the catalog.
"""
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

Category = Literal["Sofas", "Beds", "Chairs", "Tables", "Storage", "Decor"]
Role = Literal["customer", "admin"]
OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
NoticeKind = Literal["success", "error", "info"]

CATEGORIES: List[str] = ["Sofas", "Beds", "Chairs", "Tables", "Storage", "Decor"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(BaseModel):
    id: str = Field(..., description="Unique product identifier")
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field("", description="Product description")
    price: float = Field(..., ge=0, description="Unit price in dollars")
    original_price: Optional[float] = Field(None, ge=0, description="Original price for discount display")
    category: Category = Field(..., description="Catalog category")
    tags: List[str] = Field(default_factory=list, description="Search tags")
    rating: float = Field(4.5, ge=0, le=5, description="Average rating")
    reviews: int = Field(0, ge=0, description="Number of reviews")
    image: str = Field("", description="Primary image URL")
    images: List[str] = Field(default_factory=list, description="Image URLs")
    in_stock: bool = Field(True, description="Whether product is in stock")
    colors: Optional[List[str]] = Field(None, description="Selectable colors")
    sizes: Optional[List[str]] = Field(None, description="Selectable sizes")

    @model_validator(mode="after")
    def _original_not_below_price(self):
        if self.original_price is not None and self.original_price < self.price:
            raise ValueError("original_price must be >= price")
        return self

    @property
    def discount_percent(self) -> int:
        if not self.original_price:
            return 0
        return round((self.original_price - self.price) / self.original_price * 100)


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    description: str = ""
    category: Category = "Sofas"
    image: str = "https://images.pexels.com/photos/1350789/pexels-photo-1350789.jpeg"
    original_price: Optional[float] = Field(None, ge=0)
    tags: List[str] = Field(default_factory=list)


class ProductSnapshot(BaseModel):
    """Fields copied from a product when it is put in the cart."""
    id: str
    name: str
    price: float = Field(..., ge=0)
    image: str = ""


class CartLine(BaseModel):
    id: str = Field(..., description="Line identifier (product + variant)")
    product_id: str
    name: str
    price: float = Field(..., ge=0)
    image: str = ""
    quantity: int = Field(1, ge=1)
    color: Optional[str] = None
    size: Optional[str] = None


class WishlistEntry(BaseModel):
    id: str = Field(..., description="Product identifier")
    name: str
    price: float = Field(..., ge=0)
    image: str = ""
    rating: float = Field(0, ge=0, le=5)


class Address(BaseModel):
    id: str
    type: Literal["home", "work", "other"] = "home"
    name: str
    address: str
    city: str
    zip_code: str
    country: str
    phone: Optional[str] = None
    is_default: bool = False


class AddressCreate(BaseModel):
    type: Literal["home", "work", "other"] = "home"
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    phone: Optional[str] = None


# Payment methods are tagged on ``type``; each kind carries its own fields.

class WalletMethod(BaseModel):
    type: Literal["wallet"] = "wallet"
    id: str = ""
    name: str = "Wallet"
    is_default: bool = False


class CardMethod(BaseModel):
    type: Literal["card"] = "card"
    id: str = ""
    name: str = "Credit/Debit Card"
    card_number: str = Field(..., description="Masked card number")
    holder_name: str
    expiry: str = Field(..., pattern=r"^\d{2}/\d{2}$")
    is_default: bool = False


class JazzCashMethod(BaseModel):
    type: Literal["jazzcash"] = "jazzcash"
    id: str = ""
    name: str = "JazzCash"
    phone: str
    is_default: bool = False


class BankMethod(BaseModel):
    type: Literal["bank"] = "bank"
    id: str = ""
    name: str = "Bank Transfer"
    account_title: str
    account_number: str
    is_default: bool = False


PaymentMethod = Annotated[
    Union[WalletMethod, CardMethod, JazzCashMethod, BankMethod],
    Field(discriminator="type"),
]


class OrderItem(BaseModel):
    id: str
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: str = ""


class Order(BaseModel):
    id: str
    user_id: str
    items: List[OrderItem]
    subtotal: float = Field(..., ge=0)
    discount: float = Field(0, ge=0)
    shipping: float = Field(0, ge=0)
    total: float = Field(..., ge=0)
    coupon_code: Optional[str] = None
    shipping_address: Address
    payment_method: str = Field(..., description="Payment method label")
    status: OrderStatus = "pending"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class User(BaseModel):
    id: str
    email: str
    name: str
    role: Role = "customer"


class WalletTransaction(BaseModel):
    id: str
    type: Literal["credit", "debit"]
    amount: float = Field(..., gt=0)
    description: str
    method: str
    date: datetime = Field(default_factory=utcnow)


class Notice(BaseModel):
    kind: NoticeKind
    title: str
    detail: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
