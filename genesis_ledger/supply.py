"""
Supply Reconciler

Last-line conservation check before a genesis is handed off:

    sum(final balances) == airdrop pool + boost pool + foundation residual
                           + validator bonuses + vesting grants

Also checks that every outstanding claim is backed by the airdrop source
balance. Any mismatch is a ConservationViolationError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable

from .airdrop import ClaimGrant
from .coins import Balance, Coin
from .errors import ConservationViolationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SupplyComponents:
    denom: str
    airdrop_pool: int
    boost_pool: int
    foundation: int
    validator_bonuses: int
    vesting: int

    def total(self) -> int:
        return (
            self.airdrop_pool
            + self.boost_pool
            + self.foundation
            + self.validator_bonuses
            + self.vesting
        )

    def as_dict(self) -> Dict[str, int]:
        return {
            "airdrop_pool": self.airdrop_pool,
            "boost_pool": self.boost_pool,
            "foundation": self.foundation,
            "validator_bonuses": self.validator_bonuses,
            "vesting": self.vesting,
        }


def reconcile_supply(balances: Iterable[Balance], components: SupplyComponents) -> Coin:
    denom = components.denom
    computed = 0
    for balance in balances:
        for coin in balance.coins:
            if coin.denom != denom:
                raise ConservationViolationError(
                    f"balance of {balance.address} holds undeclared denom {coin.denom}",
                    expected=denom,
                    computed=coin.denom,
                )
            computed += coin.amount

    expected = components.total()
    if computed != expected:
        raise ConservationViolationError(
            "sum of genesis balances does not match declared supply",
            expected=expected,
            computed=computed,
        )

    supply = Coin(denom, computed)
    logger.info("total supply reconciled: %s", supply)
    return supply


def check_claim_coverage(claim_grants: Iterable[ClaimGrant], source_balance: Balance, denom: str) -> None:
    claimable = sum(g.claimable.amount for g in claim_grants)
    held = source_balance.amount_of(denom)
    if claimable > held:
        raise ConservationViolationError(
            f"claim grants exceed the airdrop source balance of {source_balance.address}",
            expected=held,
            computed=claimable,
        )
