"""
Cart store. Lines are keyed by product + color + size; totals are always
recomputed from the lines and never cached.
"""
from typing import List, Optional

import structlog

from schemas import CartLine, ProductSnapshot

logger = structlog.get_logger(__name__)


def line_id(product_id: str, color: Optional[str] = None, size: Optional[str] = None) -> str:
    if color is None and size is None:
        return product_id
    return f"{product_id}~{color or ''}~{size or ''}"


def format_money(amount: float) -> str:
    return f"${amount:,.2f}"


class Cart:
    def __init__(self) -> None:
        self._lines: List[CartLine] = []

    @property
    def lines(self) -> List[CartLine]:
        return [line.model_copy() for line in self._lines]

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def subtotal(self) -> float:
        return sum(line.price * line.quantity for line in self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def get(self, lid: str) -> Optional[CartLine]:
        return next((line for line in self._lines if line.id == lid), None)

    def add(
        self,
        product: ProductSnapshot,
        quantity: int = 1,
        color: Optional[str] = None,
        size: Optional[str] = None,
    ) -> CartLine:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        lid = line_id(product.id, color, size)
        existing = self.get(lid)
        if existing is not None:
            existing.quantity += quantity
            logger.debug("cart_line_incremented", line_id=lid, quantity=existing.quantity)
            return existing.model_copy()
        line = CartLine(
            id=lid,
            product_id=product.id,
            name=product.name,
            price=product.price,
            image=product.image,
            quantity=quantity,
            color=color,
            size=size,
        )
        self._lines.append(line)
        logger.debug("cart_line_added", line_id=lid, quantity=quantity)
        return line.model_copy()

    def update_quantity(self, lid: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove(lid)
            return
        line = self.get(lid)
        if line is not None:
            line.quantity = quantity

    def remove(self, lid: str) -> None:
        self._lines = [line for line in self._lines if line.id != lid]

    def clear(self) -> None:
        self._lines = []
