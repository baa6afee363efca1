"""
Coins and balances.

Amounts are Python ints (arbitrary precision). A coin set is a tuple of
Coin sorted by denom with unique denoms and no zero entries, the same
shape the ledger framework expects for a bank balance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

from .errors import PolicyDefectError


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise PolicyDefectError(f"negative coin amount: {self.amount}{self.denom}")

    def add(self, other: "Coin") -> "Coin":
        self._check_denom(other)
        return Coin(self.denom, self.amount + other.amount)

    def sub(self, other: "Coin") -> "Coin":
        self._check_denom(other)
        return Coin(self.denom, self.amount - other.amount)

    def is_zero(self) -> bool:
        return self.amount == 0

    def _check_denom(self, other: "Coin") -> None:
        if other.denom != self.denom:
            raise PolicyDefectError(
                f"coin denoms differ: {self.denom} vs {other.denom}",
                expected=self.denom,
                computed=other.denom,
            )

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


Coins = Tuple[Coin, ...]


def new_coins(*coins: Coin) -> Coins:
    return normalize_coins(coins)


def normalize_coins(coins: Iterable[Coin]) -> Coins:
    """Merge same-denom coins, drop zeros, sort by denom."""
    totals: Dict[str, int] = {}
    for coin in coins:
        totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
    return tuple(Coin(denom, amt) for denom, amt in sorted(totals.items()) if amt != 0)


def add_coins(a: Iterable[Coin], b: Iterable[Coin]) -> Coins:
    return normalize_coins(list(a) + list(b))


def amount_of(coins: Iterable[Coin], denom: str) -> int:
    return sum(c.amount for c in coins if c.denom == denom)


def coins_str(coins: Iterable[Coin]) -> str:
    return ",".join(str(c) for c in coins)


@dataclass(frozen=True)
class Balance:
    address: str
    coins: Coins = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "coins", normalize_coins(self.coins))

    def amount_of(self, denom: str) -> int:
        return amount_of(self.coins, denom)

    def add(self, coins: Iterable[Coin]) -> "Balance":
        return Balance(self.address, add_coins(self.coins, coins))
