"""
Checkout pricing.

``final = max(subtotal - discount, 0) + shipping``. Coupons are flat amounts
looked up by case-insensitive exact code; at most one is applied at a time.
"""
from typing import Dict, Iterable, Optional

from pydantic import BaseModel

from errors import EmptyCart, InsufficientFunds, InvalidCoupon
from schemas import CartLine

COUPONS: Dict[str, float] = {
    "SAVE10": 10.0,
    "WELCOME20": 20.0,
    "FIRST50": 50.0,
}

SHIPPING_COST = 0.0


class AppliedCoupon(BaseModel):
    code: str
    discount: float


class Quote(BaseModel):
    subtotal: float
    discount: float
    shipping: float
    total: float


def lookup_coupon(code: str, table: Optional[Dict[str, float]] = None) -> AppliedCoupon:
    table = COUPONS if table is None else table
    normalized = (code or "").upper()
    if normalized not in table:
        raise InvalidCoupon(f"Unknown coupon code {code!r}")
    return AppliedCoupon(code=normalized, discount=table[normalized])


def quote(lines: Iterable[CartLine], coupon: Optional[AppliedCoupon] = None, shipping: float = SHIPPING_COST) -> Quote:
    subtotal = sum(line.price * line.quantity for line in lines)
    discount = min(coupon.discount, subtotal) if coupon else 0.0
    return Quote(
        subtotal=subtotal,
        discount=discount,
        shipping=shipping,
        total=subtotal - discount + shipping,
    )


def check_can_place(lines, total: float, wallet_balance: Optional[float] = None) -> None:
    """Raise if an order cannot be placed.

    ``wallet_balance`` is only passed when the wallet is the selected method.
    """
    if not lines:
        raise EmptyCart("Add some items to your cart first")
    if wallet_balance is not None and wallet_balance < total:
        raise InsufficientFunds("Please select another payment method")


class CheckoutSession:
    """Coupon selection for the current cart."""

    def __init__(self, coupons: Optional[Dict[str, float]] = None):
        self.coupons = dict(COUPONS if coupons is None else coupons)
        self.coupon: Optional[AppliedCoupon] = None

    def apply_coupon(self, code: str) -> AppliedCoupon:
        applied = lookup_coupon(code, self.coupons)
        self.coupon = applied
        return applied

    def remove_coupon(self) -> None:
        self.coupon = None

    def quote(self, lines) -> Quote:
        return quote(lines, self.coupon)
