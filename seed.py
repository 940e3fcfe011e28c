"""Demo data loaded into a fresh AppState."""
from typing import List

from schemas import Address, BankMethod, CardMethod, JazzCashMethod, Product, WalletMethod

PEXELS = "https://images.pexels.com/photos"


def demo_products() -> List[Product]:
    return [
        Product(
            id="1",
            name="Modern Sectional Sofa",
            price=1299.99,
            original_price=1599.99,
            image=f"{PEXELS}/1350789/pexels-photo-1350789.jpeg",
            images=[
                f"{PEXELS}/1350789/pexels-photo-1350789.jpeg",
                f"{PEXELS}/1571460/pexels-photo-1571460.jpeg",
            ],
            description="Luxurious sectional sofa with premium fabric upholstery and ergonomic design. "
                        "Perfect for modern living rooms.",
            rating=4.8,
            reviews=1250,
            category="Sofas",
            tags=["modern", "sectional", "luxury"],
            colors=["Charcoal", "Beige", "Navy"],
        ),
        Product(
            id="2",
            name="King Size Platform Bed",
            price=899.99,
            image=f"{PEXELS}/164595/pexels-photo-164595.jpeg",
            images=[
                f"{PEXELS}/164595/pexels-photo-164595.jpeg",
                f"{PEXELS}/271816/pexels-photo-271816.jpeg",
            ],
            description="Minimalist platform bed with solid wood construction and built-in nightstands.",
            rating=4.6,
            reviews=890,
            category="Beds",
            tags=["platform", "wood", "minimalist"],
            colors=["Walnut", "Oak", "Espresso"],
        ),
        Product(
            id="3",
            name="Ergonomic Office Chair",
            price=449.99,
            original_price=599.99,
            image=f"{PEXELS}/4050315/pexels-photo-4050315.jpeg",
            images=[
                f"{PEXELS}/4050315/pexels-photo-4050315.jpeg",
                f"{PEXELS}/4050302/pexels-photo-4050302.jpeg",
            ],
            description="Premium ergonomic office chair with lumbar support and adjustable height.",
            rating=4.7,
            reviews=456,
            category="Chairs",
            tags=["ergonomic", "office", "adjustable"],
            colors=["Black", "Grey", "White"],
        ),
        Product(
            id="4",
            name="Dining Table Set",
            price=799.99,
            image=f"{PEXELS}/1395967/pexels-photo-1395967.jpeg",
            images=[f"{PEXELS}/1395967/pexels-photo-1395967.jpeg"],
            description="Elegant dining table set with 6 chairs, perfect for family gatherings.",
            rating=4.5,
            reviews=723,
            category="Tables",
            tags=["dining", "family", "elegant"],
            colors=["Natural Wood", "Dark Walnut", "White"],
        ),
    ]


def demo_addresses() -> List[Address]:
    return [
        Address(
            id="1",
            type="home",
            name="John Doe",
            address="123 Main Street, Apt 4B",
            city="New York",
            zip_code="10001",
            country="United States",
            is_default=True,
        ),
        Address(
            id="2",
            type="work",
            name="John Doe",
            address="456 Oak Avenue",
            city="Brooklyn",
            zip_code="11201",
            country="United States",
        ),
    ]


def demo_payment_methods():
    return [
        WalletMethod(id="wallet", is_default=True),
        JazzCashMethod(id="jazzcash", phone="+92 300 1234567"),
        CardMethod(id="card", card_number="**** **** **** 4242", holder_name="John Doe", expiry="12/27"),
        BankMethod(id="bank", account_title="John Doe", account_number="****6789"),
    ]
