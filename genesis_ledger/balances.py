"""
Balance Ledger Merger

Consolidates every balance source into one account list with unique
addresses:
- airdrop recipient balances (20% share)
- the airdrop source balance
- fixed validator bonus balances
- the foundation balance (residual after bonuses and vesting)
- vesting grants, folded onto an existing balance or added as new ones

Collisions between the first four sources are policy defects; only vesting
grants are additive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .addresses import AddressError, verify_account_address
from .coins import Balance, Coin, coins_str, new_coins
from .errors import DuplicateAddressError, PolicyDefectError
from .policy import GenesisPolicy
from .vesting import VestingAccount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenesisAccount:
    address: str
    vesting: Optional[VestingAccount] = None

    @property
    def is_vesting(self) -> bool:
        return self.vesting is not None

    def validate(self, prefix: str) -> None:
        try:
            verify_account_address(self.address, prefix)
        except AddressError as e:
            raise PolicyDefectError(f"failed to validate genesis account {self.address!r}: {e}")
        if self.vesting is not None:
            self.vesting.validate()


@dataclass(frozen=True)
class MergedLedger:
    balances: Tuple[Balance, ...]
    accounts: Tuple[GenesisAccount, ...]
    vesting_backed: Tuple[str, ...]

    def balance_of(self, address: str) -> Optional[Balance]:
        for b in self.balances:
            if b.address == address:
                return b
        return None


def validator_balances(policy: GenesisPolicy) -> Tuple[Tuple[Balance, ...], int]:
    denom = policy.bond_denom
    balances = tuple(
        Balance(bonus.address, new_coins(Coin(denom, bonus.amount)))
        for bonus in policy.validator_bonuses
    )
    total = sum(b.amount_of(denom) for b in balances)
    return balances, total


def foundation_balance(policy: GenesisPolicy, validator_total: int, vesting_total: int) -> Balance:
    residual = policy.foundation.supply - validator_total - vesting_total
    if residual < 0:
        raise PolicyDefectError(
            "foundation supply does not cover validator bonuses and vesting grants",
            expected=policy.foundation.supply,
            computed=validator_total + vesting_total,
        )
    logger.info(
        "foundation: %d - validators %d - vesting %d = %d%s",
        policy.foundation.supply, validator_total, vesting_total, residual, policy.bond_denom,
    )
    return Balance(policy.foundation.address, new_coins(Coin(policy.bond_denom, residual)))


def _collect(sources: Sequence[Tuple[str, Iterable[Balance]]]) -> List[Tuple[str, Balance]]:
    ordered: List[Tuple[str, Balance]] = []
    origin: Dict[str, str] = {}
    for name, balances in sources:
        for balance in balances:
            if balance.address in origin:
                raise DuplicateAddressError(balance.address, [origin[balance.address], name])
            origin[balance.address] = name
            ordered.append((name, balance))
    return ordered


def merge_balances(
    recipient_balances: Iterable[Balance],
    source_balance: Balance,
    validator_balances: Iterable[Balance],
    foundation_balance: Balance,
    vesting_accounts: Iterable[VestingAccount],
    policy: GenesisPolicy,
) -> MergedLedger:
    collected = _collect(
        [
            ("airdrop recipients", recipient_balances),
            ("airdrop source", [source_balance]),
            ("validator bonuses", validator_balances),
            ("foundation", [foundation_balance]),
        ]
    )
    vesting_accounts = tuple(vesting_accounts)
    vesting_map = {acc.address: acc for acc in vesting_accounts}
    if len(vesting_map) != len(vesting_accounts):
        raise PolicyDefectError("duplicate vesting account addresses")

    foundation_address = foundation_balance.address
    balances: List[Balance] = []
    accounts: List[GenesisAccount] = [
        GenesisAccount(foundation_address, vesting_map.get(foundation_address))
    ]
    existing = set()

    for _, balance in collected:
        existing.add(balance.address)
        vesting_acc = vesting_map.get(balance.address)
        if vesting_acc is not None:
            merged = balance.add([vesting_acc.total])
            logger.info(
                "added vesting balance on existing account %s %s -> %s",
                balance.address, coins_str(balance.coins), coins_str(merged.coins),
            )
            balances.append(merged)
        else:
            balances.append(balance)
            if balance.address != foundation_address:
                accounts.append(GenesisAccount(balance.address))

    vesting_backed: List[str] = []
    for acc in vesting_accounts:
        if acc.address not in existing:
            balances.append(Balance(acc.address, new_coins(acc.total)))
            vesting_backed.append(acc.address)
        if acc.address != foundation_address:
            accounts.append(GenesisAccount(acc.address, acc))

    for account in accounts:
        account.validate(policy.account_prefix)

    seen = set()
    for account in accounts:
        if account.address in seen:
            raise DuplicateAddressError(account.address, ["genesis accounts"])
        seen.add(account.address)

    logger.info(
        "merged ledger: %d balances, %d accounts (%d vesting)",
        len(balances), len(accounts), len(vesting_accounts),
    )
    return MergedLedger(
        balances=tuple(balances),
        accounts=tuple(accounts),
        vesting_backed=tuple(vesting_backed),
    )
