import os
from typing import List, Optional, Union

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from cart import format_money
from catalog import filter_products
from config import configure_logging, load_settings
from errors import Forbidden, NotAuthenticated, OrderNotFound, ProductNotFound, StorefrontError
from schemas import (
    AddressCreate,
    BankMethod,
    CardMethod,
    JazzCashMethod,
    OrderStatus,
    Product,
    ProductCreate,
    User,
    WalletMethod,
)
from state import AppState

settings = load_settings()
state = AppState(settings)

app = FastAPI(title="Furniture Storefront API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_state() -> AppState:
    return state


def get_current_user(st: AppState = Depends(get_state)) -> User:
    user = st.auth.current_user()
    if user is None:
        raise NotAuthenticated()
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise Forbidden("Admin access required")
    return user


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
    )


@app.on_event("startup")
async def restore_session():
    configure_logging(settings.log_level)
    state.auth.restore()


# Request models
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)
    color: Optional[str] = None
    size: Optional[str] = None


class QuantityRequest(BaseModel):
    quantity: int


class SearchCriteria(BaseModel):
    query: str = ""
    category: str = ""
    tags: List[str] = Field(default_factory=list)


class CouponRequest(BaseModel):
    code: str


class CheckoutRequest(BaseModel):
    address_id: Optional[str] = None
    payment_method_id: str = "wallet"


class TopUpRequest(BaseModel):
    amount: float = Field(..., allow_inf_nan=False)
    method: str = "Credit/Debit Card"


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str


class StatusRequest(BaseModel):
    status: OrderStatus


def cart_view(st: AppState) -> dict:
    pricing = st.quote()
    return {
        "items": st.cart.lines,
        "item_count": st.cart.item_count,
        "subtotal": pricing.subtotal,
        "discount": pricing.discount,
        "shipping": pricing.shipping,
        "total": pricing.total,
        "display_total": format_money(pricing.total),
        "coupon": st.checkout.coupon,
    }


@app.get("/")
def root():
    return {"message": "Furniture Storefront is running"}


@app.get("/test")
def test_state(st: AppState = Depends(get_state)):
    return {
        "backend": "✅ Running",
        "products": len(st.catalog.products),
        "cart_lines": len(st.cart.lines),
        "orders": len(st.orders),
        "signed_in": st.auth.current_user() is not None,
    }


# Catalog endpoints
@app.get("/api/categories", response_model=List[str])
def list_categories(st: AppState = Depends(get_state)):
    return st.catalog.categories


@app.get("/api/tags", response_model=List[str])
def list_tags(st: AppState = Depends(get_state)):
    return st.catalog.all_tags()


@app.get("/api/products", response_model=List[Product])
def list_products(
    q: str = "",
    category: str = "",
    tags: List[str] = Query(default=[]),
    st: AppState = Depends(get_state),
):
    return filter_products(st.catalog.products, q, category, tags)


@app.get("/api/products/featured", response_model=List[Product])
def featured_products(st: AppState = Depends(get_state)):
    return st.catalog.featured()


@app.get("/api/products/{product_id}", response_model=Product)
def get_product(product_id: str, st: AppState = Depends(get_state)):
    product = st.catalog.get(product_id)
    if product is None:
        raise ProductNotFound(f"Product {product_id} not found")
    return product


@app.get("/api/search")
def run_search(st: AppState = Depends(get_state)):
    c = st.catalog
    return {
        "criteria": SearchCriteria(query=c.search_query, category=c.selected_category, tags=c.selected_tags),
        "results": c.search(),
    }


@app.put("/api/search")
def set_search(criteria: SearchCriteria, st: AppState = Depends(get_state)):
    st.catalog.set_search_query(criteria.query)
    st.catalog.set_selected_category(criteria.category)
    st.catalog.set_selected_tags(criteria.tags)
    return run_search(st)


@app.delete("/api/search")
def clear_search(st: AppState = Depends(get_state)):
    st.catalog.clear_filters()
    return run_search(st)


# Cart endpoints
@app.get("/api/cart")
def get_cart(st: AppState = Depends(get_state)):
    return cart_view(st)


@app.post("/api/cart/add")
def add_to_cart(item: AddToCartRequest, st: AppState = Depends(get_state)):
    st.add_to_cart(item.product_id, item.quantity, item.color, item.size)
    return cart_view(st)


@app.put("/api/cart/{line_id}")
def update_cart_line(line_id: str, payload: QuantityRequest, st: AppState = Depends(get_state)):
    st.cart.update_quantity(line_id, payload.quantity)
    return cart_view(st)


@app.delete("/api/cart/{line_id}")
def remove_cart_line(line_id: str, st: AppState = Depends(get_state)):
    st.remove_from_cart(line_id)
    return cart_view(st)


# Wishlist endpoints
@app.get("/api/wishlist")
def get_wishlist(st: AppState = Depends(get_state)):
    return {"items": st.wishlist.items}


@app.post("/api/wishlist/{product_id}/toggle")
def toggle_wishlist(product_id: str, st: AppState = Depends(get_state)):
    saved = st.toggle_wishlist(product_id)
    return {"saved": saved, "items": st.wishlist.items}


@app.delete("/api/wishlist/{product_id}")
def remove_from_wishlist(product_id: str, st: AppState = Depends(get_state)):
    st.wishlist.remove(product_id)
    st.events.emit("info", "Removed from wishlist")
    return {"items": st.wishlist.items}


@app.post("/api/wishlist/{product_id}/move-to-cart")
def wishlist_to_cart(product_id: str, st: AppState = Depends(get_state)):
    st.move_to_cart(product_id)
    return cart_view(st)


# Checkout endpoints
@app.get("/api/checkout")
def checkout_summary(st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    return {
        **cart_view(st),
        "addresses": st.addresses.items,
        "payment_methods": st.payment_methods.items,
        "wallet_balance": st.wallet.balance,
    }


@app.post("/api/checkout/coupon")
def apply_coupon(payload: CouponRequest, st: AppState = Depends(get_state)):
    st.apply_coupon(payload.code)
    return cart_view(st)


@app.delete("/api/checkout/coupon")
def remove_coupon(st: AppState = Depends(get_state)):
    st.remove_coupon()
    return cart_view(st)


@app.post("/api/checkout")
async def place_order(payload: CheckoutRequest, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    return await st.place_order(payload.address_id, payload.payment_method_id)


# Orders endpoints
@app.get("/api/orders")
def list_orders(status: Optional[OrderStatus] = None, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    if user.role == "admin":
        return st.orders.list(status)
    return st.orders.for_user(user.id, status)


@app.get("/api/orders/{order_id}")
def get_order(order_id: str, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    order = st.orders.get(order_id)
    if order is None or (user.role != "admin" and order.user_id != user.id):
        raise OrderNotFound(f"Order {order_id} not found")
    return order


# Wallet endpoints
@app.get("/api/wallet")
def get_wallet(st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    return {"balance": st.wallet.balance, "transactions": st.wallet.transactions}


@app.post("/api/wallet/top-up")
async def top_up(payload: TopUpRequest, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    await st.top_up(payload.amount, payload.method)
    return {"balance": st.wallet.balance, "transactions": st.wallet.transactions}


# Address book endpoints
@app.get("/api/addresses")
def list_addresses(st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    return st.addresses.items


@app.post("/api/addresses")
def add_address(payload: AddressCreate, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    address = st.addresses.add(payload)
    st.events.emit("success", "Address added successfully")
    return address


@app.put("/api/addresses/{address_id}")
def update_address(address_id: str, payload: AddressCreate, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    return st.addresses.update(address_id, payload)


@app.delete("/api/addresses/{address_id}")
def delete_address(address_id: str, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    st.addresses.delete(address_id)
    return st.addresses.items


@app.post("/api/addresses/{address_id}/default")
def default_address(address_id: str, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    return st.addresses.set_default(address_id)


# Payment method endpoints
@app.get("/api/payment-methods")
def list_payment_methods(st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    return st.payment_methods.items


@app.post("/api/payment-methods")
def add_payment_method(
    payload: Union[WalletMethod, CardMethod, JazzCashMethod, BankMethod],
    st: AppState = Depends(get_state),
    user: User = Depends(get_current_user),
):
    method = st.payment_methods.add(payload)
    st.events.emit("success", "Payment method added")
    return method


@app.delete("/api/payment-methods/{method_id}")
def delete_payment_method(method_id: str, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    st.payment_methods.delete(method_id)
    return st.payment_methods.items


@app.post("/api/payment-methods/{method_id}/default")
def default_payment_method(method_id: str, st: AppState = Depends(get_state), user: User = Depends(get_current_user)):
    return st.payment_methods.set_default(method_id)


# Auth endpoints
@app.post("/api/auth/login", response_model=User)
def login(payload: LoginRequest, st: AppState = Depends(get_state)):
    return st.auth.login(payload.email, payload.password)


@app.post("/api/auth/register", response_model=User)
def register(payload: RegisterRequest, st: AppState = Depends(get_state)):
    return st.auth.register(payload.email, payload.password, payload.name)


@app.post("/api/auth/logout")
def logout(st: AppState = Depends(get_state)):
    st.auth.logout()
    return {"signed_in": False}


@app.get("/api/auth/me", response_model=User)
def me(user: User = Depends(get_current_user)):
    return user


# Admin endpoints
@app.get("/api/admin/dashboard")
def admin_dashboard(st: AppState = Depends(get_state), admin: User = Depends(require_admin)):
    return st.dashboard()


@app.get("/api/admin/products", response_model=List[Product])
def admin_list_products(q: str = "", st: AppState = Depends(get_state), admin: User = Depends(require_admin)):
    return st.catalog.search_by_name(q)


@app.post("/api/admin/products", response_model=Product)
def admin_create_product(payload: ProductCreate, st: AppState = Depends(get_state), admin: User = Depends(require_admin)):
    product = st.catalog.create(payload)
    st.events.emit("success", "Product added successfully")
    return product


@app.put("/api/admin/products/{product_id}")
def admin_update_product(product_id: str, payload: Product, st: AppState = Depends(get_state), admin: User = Depends(require_admin)):
    updated = st.catalog.update(payload.model_copy(update={"id": product_id}))
    if updated:
        st.events.emit("success", "Product updated successfully")
    return {"updated": updated}


@app.delete("/api/admin/products/{product_id}")
def admin_delete_product(product_id: str, st: AppState = Depends(get_state), admin: User = Depends(require_admin)):
    deleted = st.catalog.delete(product_id)
    if deleted:
        st.events.emit("success", "Product deleted successfully")
    return {"deleted": deleted}


@app.patch("/api/admin/orders/{order_id}")
def admin_update_order(order_id: str, payload: StatusRequest, st: AppState = Depends(get_state), admin: User = Depends(require_admin)):
    return st.orders.update_status(order_id, payload.status)


# Notices
@app.get("/api/notices")
def drain_notices(st: AppState = Depends(get_state)):
    return st.events.drain()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", settings.port))
    uvicorn.run(app, host="0.0.0.0", port=port)
