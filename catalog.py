"""
Catalog store: the product list, its featured subset, and the active search
criteria. Admin mutations replace records wholesale and never cascade into
the cart or the wishlist, which hold their own copies.
"""
import time
from typing import Iterable, List, Optional, Sequence

import structlog

from schemas import CATEGORIES, Product, ProductCreate

logger = structlog.get_logger(__name__)

FEATURED_COUNT = 3


def filter_products(
    products: Sequence[Product],
    query: str = "",
    category: str = "",
    tags: Iterable[str] = (),
) -> List[Product]:
    """Stable filter over ``products``.

    A product matches when the query is a case-insensitive substring of its
    name or description, its category equals ``category`` (if given), and it
    carries at least one of ``tags`` (if any).
    """
    needle = (query or "").lower()
    wanted = set(tags)

    def matches(p: Product) -> bool:
        if needle and needle not in p.name.lower() and needle not in p.description.lower():
            return False
        if category and p.category != category:
            return False
        if wanted and wanted.isdisjoint(p.tags):
            return False
        return True

    return [p for p in products if matches(p)]


class Catalog:
    def __init__(self, products: Optional[Iterable[Product]] = None, categories: Optional[List[str]] = None):
        self.products: List[Product] = list(products or [])
        self.categories: List[str] = list(categories or CATEGORIES)
        self._featured_ids = [p.id for p in self.products[:FEATURED_COUNT]]
        self.search_query = ""
        self.selected_category = ""
        self.selected_tags: List[str] = []
        self._last_id = 0

    # Reads

    def get(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def featured(self) -> List[Product]:
        return [p for p in self.products if p.id in self._featured_ids]

    def all_tags(self) -> List[str]:
        seen: List[str] = []
        for p in self.products:
            for tag in p.tags:
                if tag not in seen:
                    seen.append(tag)
        return seen

    def search(self) -> List[Product]:
        return filter_products(self.products, self.search_query, self.selected_category, self.selected_tags)

    def search_by_name(self, query: str) -> List[Product]:
        q = query.lower()
        return [p for p in self.products if q in p.name.lower()]

    # Search criteria

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    def set_selected_category(self, category: str) -> None:
        self.selected_category = category

    def toggle_category(self, category: str) -> None:
        self.selected_category = "" if self.selected_category == category else category

    def set_selected_tags(self, tags: Iterable[str]) -> None:
        self.selected_tags = list(tags)

    def toggle_tag(self, tag: str) -> None:
        if tag in self.selected_tags:
            self.selected_tags = [t for t in self.selected_tags if t != tag]
        else:
            self.selected_tags = self.selected_tags + [tag]

    def clear_filters(self) -> None:
        self.search_query = ""
        self.selected_category = ""
        self.selected_tags = []

    # Admin mutations

    def _new_id(self) -> str:
        # Millisecond timestamp, bumped past the last id handed out.
        candidate = max(int(time.time() * 1000), self._last_id + 1)
        while self.get(str(candidate)) is not None:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    def create(self, payload: ProductCreate) -> Product:
        product = Product(
            id=self._new_id(),
            name=payload.name,
            price=payload.price,
            original_price=payload.original_price,
            description=payload.description,
            category=payload.category,
            image=payload.image,
            images=[payload.image],
            rating=4.5,
            reviews=0,
            tags=list(payload.tags),
            in_stock=True,
        )
        self.products.append(product)
        logger.info("product_created", product_id=product.id, name=product.name)
        return product

    def update(self, product: Product) -> bool:
        for index, existing in enumerate(self.products):
            if existing.id == product.id:
                self.products[index] = product
                logger.info("product_updated", product_id=product.id)
                return True
        logger.debug("product_update_skipped", product_id=product.id)
        return False

    def delete(self, product_id: str) -> bool:
        before = len(self.products)
        self.products = [p for p in self.products if p.id != product_id]
        deleted = len(self.products) != before
        if deleted:
            logger.info("product_deleted", product_id=product_id)
        return deleted
