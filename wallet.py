"""
Wallet: the one balance-backed payment method.
"""
import asyncio
import math
import uuid
from typing import List

import structlog

from errors import InsufficientFunds, InvalidTopUp
from schemas import WalletTransaction

logger = structlog.get_logger(__name__)

MAX_TOPUP = 1000.0


def validate_top_up(amount: float) -> None:
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidTopUp("Please enter a valid amount")
    if amount > MAX_TOPUP:
        raise InvalidTopUp(f"Maximum top-up amount is ${MAX_TOPUP:.0f}")


class Wallet:
    def __init__(self, balance: float = 250.0, delay: float = 1.0):
        self.balance = balance
        self.delay = delay
        self.transactions: List[WalletTransaction] = []

    def credit(self, amount: float, description: str, method: str) -> WalletTransaction:
        tx = self._record("credit", amount, description, method)
        self.balance += amount
        return tx

    def debit(self, amount: float, description: str) -> WalletTransaction:
        if amount > self.balance:
            raise InsufficientFunds()
        tx = self._record("debit", amount, description, "Wallet")
        self.balance -= amount
        return tx

    async def top_up(self, amount: float, method: str = "Credit/Debit Card") -> WalletTransaction:
        validate_top_up(amount)
        await asyncio.sleep(self.delay)
        tx = self.credit(amount, "Wallet top-up", method)
        logger.info("wallet_topped_up", amount=amount, balance=self.balance)
        return tx

    def _record(self, kind, amount, description, method) -> WalletTransaction:
        tx = WalletTransaction(
            id=uuid.uuid4().hex,
            type=kind,
            amount=amount,
            description=description,
            method=method,
        )
        self.transactions.insert(0, tx)
        return tx
