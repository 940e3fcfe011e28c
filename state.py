"""
Application state: one object owning every store, passed to whatever needs it.

Single-store operations live on the stores themselves. The methods here are
the ones that touch more than one store (order placement, wishlist to cart)
and the ones that report a notice to the user.
"""
import asyncio
import time
from typing import Optional

import structlog

import seed
from account import AddressBook, PaymentMethodBook
from auth import AuthProvider
from cart import Cart, format_money
from catalog import Catalog
from checkout import CheckoutSession, check_can_place
from config import Settings
from errors import AddressNotFound, InvalidCoupon, NotAuthenticated, ProductNotFound, StorefrontError
from events import EventLog
from orders import OrderBook
from schemas import Order, OrderItem, ProductSnapshot, WalletMethod, WishlistEntry
from secure_store import SecureStore
from wallet import Wallet
from wishlist import Wishlist

logger = structlog.get_logger(__name__)


class AppState:
    def __init__(self, settings: Settings, with_demo_data: bool = True):
        self.settings = settings
        self.catalog = Catalog(seed.demo_products() if with_demo_data else [])
        self.cart = Cart()
        self.wishlist = Wishlist()
        self.orders = OrderBook()
        self.checkout = CheckoutSession()
        self.wallet = Wallet(balance=settings.wallet_balance, delay=settings.topup_delay)
        self.addresses = AddressBook(seed.demo_addresses() if with_demo_data else [])
        self.payment_methods = PaymentMethodBook(seed.demo_payment_methods() if with_demo_data else [])
        self.auth = AuthProvider(SecureStore(settings.session_path))
        self.events = EventLog()
        self._placing = asyncio.Lock()

    # Cart and wishlist

    def add_to_cart(self, product_id: str, quantity: int = 1, color: Optional[str] = None, size: Optional[str] = None):
        product = self.catalog.get(product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found")
        snapshot = ProductSnapshot(id=product.id, name=product.name, price=product.price, image=product.image)
        line = self.cart.add(snapshot, quantity, color, size)
        self.events.emit("success", "Added to cart", product.name)
        return line

    def remove_from_cart(self, line_id: str) -> None:
        self.cart.remove(line_id)
        self.events.emit("info", "Item removed from cart")

    def toggle_wishlist(self, product_id: str) -> bool:
        product = self.catalog.get(product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found")
        entry = WishlistEntry(
            id=product.id,
            name=product.name,
            price=product.price,
            image=product.image,
            rating=product.rating,
        )
        saved = self.wishlist.toggle(entry)
        if saved:
            self.events.emit("success", "Added to wishlist")
        else:
            self.events.emit("info", "Removed from wishlist")
        return saved

    def move_to_cart(self, product_id: str):
        """Copy a wishlist entry into the cart; the entry stays saved."""
        entry = self.wishlist.get(product_id)
        if entry is None:
            raise ProductNotFound(f"Product {product_id} is not in the wishlist")
        snapshot = ProductSnapshot(id=entry.id, name=entry.name, price=entry.price, image=entry.image)
        line = self.cart.add(snapshot)
        self.events.emit("success", "Added to cart", entry.name)
        return line

    # Checkout

    def apply_coupon(self, code: str):
        try:
            applied = self.checkout.apply_coupon(code)
        except InvalidCoupon:
            self.events.emit("error", "Invalid coupon code")
            raise
        self.events.emit("success", "Coupon applied!", f"You saved {format_money(applied.discount)}")
        return applied

    def remove_coupon(self) -> None:
        self.checkout.remove_coupon()
        self.events.emit("info", "Coupon removed")

    def quote(self):
        return self.checkout.quote(self.cart.lines)

    async def place_order(self, address_id: Optional[str] = None, payment_method_id: str = "wallet") -> Order:
        """Validate, wait out the payment delay, then commit in one step.

        The order is appended, the wallet debited (when it paid), and the cart
        and coupon cleared without any await in between.
        """
        async with self._placing:
            try:
                user = self.auth.current_user()
                if user is None:
                    raise NotAuthenticated("Please sign in to place an order")
                lines = self.cart.lines
                pricing = self.checkout.quote(lines)
                coupon_code = self.checkout.coupon.code if self.checkout.coupon else None
                method = self.payment_methods.get(payment_method_id)
                paid_by_wallet = isinstance(method, WalletMethod)
                check_can_place(lines, pricing.total, self.wallet.balance if paid_by_wallet else None)
                address = self.addresses.get(address_id) if address_id else self.addresses.default()
                if address is None:
                    raise AddressNotFound("Please add a shipping address")
            except StorefrontError as e:
                self.events.emit("error", e.title, e.detail)
                raise

            await asyncio.sleep(self.settings.checkout_delay)

            now_id = str(int(time.time() * 1000))
            while self.orders.get(now_id) is not None:
                now_id = str(int(now_id) + 1)
            order = Order(
                id=now_id,
                user_id=user.id,
                items=[
                    OrderItem(id=l.product_id, name=l.name, price=l.price, quantity=l.quantity, image=l.image)
                    for l in lines
                ],
                subtotal=pricing.subtotal,
                discount=pricing.discount,
                shipping=pricing.shipping,
                total=pricing.total,
                coupon_code=coupon_code,
                shipping_address=address.model_copy(),
                payment_method=method.name,
                status="pending",
            )
            if paid_by_wallet and pricing.total > 0:
                self.wallet.debit(pricing.total, f"Order #{order.id}")
            self.orders.add(order)
            self.cart.clear()
            self.checkout.remove_coupon()

        logger.info("order_placed", order_id=order.id, total=order.total, items=len(order.items))
        self.events.emit("success", "Order placed successfully!", f"Order #{order.id}")
        return order

    async def top_up(self, amount: float, method: str = "Credit/Debit Card"):
        try:
            tx = await self.wallet.top_up(amount, method)
        except StorefrontError as e:
            self.events.emit("error", e.title, e.detail)
            raise
        self.events.emit("success", "Top-up successful!", f"{format_money(amount)} added to your wallet")
        return tx

    # Admin

    def dashboard(self) -> dict:
        return {
            "total_revenue": self.orders.total_revenue(),
            "total_orders": len(self.orders),
            "total_products": len(self.catalog.products),
        }
