"""
Orders store: append-only history of placed orders. Only ``status`` and
``updated_at`` change after an order is recorded.
"""
from typing import Dict, List, Optional, Set

import structlog

from errors import InvalidStatusTransition, OrderNotFound
from schemas import Order, OrderStatus, utcnow

logger = structlog.get_logger(__name__)

TRANSITIONS: Dict[str, Set[str]] = {
    "pending": {"processing", "cancelled"},
    "processing": {"shipped", "cancelled"},
    "shipped": {"delivered"},
    "delivered": set(),
    "cancelled": set(),
}


class OrderBook:
    def __init__(self) -> None:
        self._orders: List[Order] = []

    def __len__(self) -> int:
        return len(self._orders)

    def add(self, order: Order) -> None:
        self._orders.append(order)

    def get(self, order_id: str) -> Optional[Order]:
        return next((o for o in self._orders if o.id == order_id), None)

    def list(self, status: Optional[OrderStatus] = None) -> List[Order]:
        """Newest first, optionally narrowed to one status."""
        found = [o for o in self._orders if status is None or o.status == status]
        return list(reversed(found))

    def for_user(self, user_id: str, status: Optional[OrderStatus] = None) -> List[Order]:
        return [o for o in self.list(status) if o.user_id == user_id]

    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        order = self.get(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found")
        if status not in TRANSITIONS[order.status]:
            raise InvalidStatusTransition(f"Cannot move order {order_id} from {order.status} to {status}")
        order.status = status
        order.updated_at = utcnow()
        logger.info("order_status_changed", order_id=order_id, status=status)
        return order

    def total_revenue(self) -> float:
        return sum(o.total for o in self._orders)
