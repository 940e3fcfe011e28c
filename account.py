"""
Saved shipping addresses and payment methods for the signed-in user.
"""
import uuid
from typing import Iterable, List, Optional

from errors import AddressNotFound, PaymentMethodNotFound
from schemas import Address, AddressCreate, CardMethod, PaymentMethod


def mask_card_number(number: str) -> str:
    digits = "".join(ch for ch in number if ch.isdigit())
    return "**** **** **** " + digits[-4:]


def _new_id() -> str:
    return uuid.uuid4().hex


class AddressBook:
    def __init__(self, addresses: Optional[Iterable[Address]] = None):
        self._addresses: List[Address] = list(addresses or [])

    @property
    def items(self) -> List[Address]:
        return list(self._addresses)

    def get(self, address_id: str) -> Address:
        for a in self._addresses:
            if a.id == address_id:
                return a
        raise AddressNotFound(f"Address {address_id} not found")

    def default(self) -> Optional[Address]:
        return next((a for a in self._addresses if a.is_default), None)

    def add(self, payload: AddressCreate) -> Address:
        address = Address(id=_new_id(), is_default=not self._addresses, **payload.model_dump())
        self._addresses.append(address)
        return address

    def update(self, address_id: str, payload: AddressCreate) -> Address:
        current = self.get(address_id)
        updated = current.model_copy(update=payload.model_dump())
        self._addresses = [updated if a.id == address_id else a for a in self._addresses]
        return updated

    def delete(self, address_id: str) -> None:
        removed = self.get(address_id)
        self._addresses = [a for a in self._addresses if a.id != address_id]
        if removed.is_default and self._addresses:
            self.set_default(self._addresses[0].id)

    def set_default(self, address_id: str) -> Address:
        self.get(address_id)
        self._addresses = [a.model_copy(update={"is_default": a.id == address_id}) for a in self._addresses]
        return self.get(address_id)


class PaymentMethodBook:
    def __init__(self, methods: Optional[Iterable[PaymentMethod]] = None):
        self._methods: List[PaymentMethod] = list(methods or [])

    @property
    def items(self):
        return list(self._methods)

    def get(self, method_id: str) -> PaymentMethod:
        for m in self._methods:
            if m.id == method_id:
                return m
        raise PaymentMethodNotFound(f"Payment method {method_id} not found")

    def add(self, method: PaymentMethod) -> PaymentMethod:
        """Store ``method`` under a fresh id; card numbers keep only the last four digits."""
        update = {"id": _new_id(), "is_default": not self._methods}
        if isinstance(method, CardMethod):
            update["card_number"] = mask_card_number(method.card_number)
        stored = method.model_copy(update=update)
        self._methods.append(stored)
        return stored

    def delete(self, method_id: str) -> None:
        removed = self.get(method_id)
        self._methods = [m for m in self._methods if m.id != method_id]
        if removed.is_default and self._methods:
            self.set_default(self._methods[0].id)

    def set_default(self, method_id: str):
        self.get(method_id)
        self._methods = [m.model_copy(update={"is_default": m.id == method_id}) for m in self._methods]
        return self.get(method_id)
