from typing import List

from schemas import WishlistEntry


class Wishlist:
    """Saved product summaries; a product appears at most once."""

    def __init__(self) -> None:
        self._entries: List[WishlistEntry] = []

    @property
    def items(self) -> List[WishlistEntry]:
        return list(self._entries)

    def contains(self, product_id: str) -> bool:
        return any(e.id == product_id for e in self._entries)

    def get(self, product_id: str):
        return next((e for e in self._entries if e.id == product_id), None)

    def add(self, entry: WishlistEntry) -> bool:
        if self.contains(entry.id):
            return False
        self._entries.append(entry)
        return True

    def remove(self, product_id: str) -> None:
        self._entries = [e for e in self._entries if e.id != product_id]

    def toggle(self, entry: WishlistEntry) -> bool:
        if self.contains(entry.id):
            self.remove(entry.id)
            return False
        self._entries.append(entry)
        return True

    def __len__(self) -> int:
        return len(self._entries)
