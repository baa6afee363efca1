"""
Airdrop Splitter

Each recipient's entitlement is split in two:
- the immediate share (floor(amount * ratio), 20% on mainnet) is credited
  as a genesis balance
- the deferred share (the rest, remainder included) becomes a claim grant

The source address holds what is left of the airdrop pool plus the boost pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Tuple

from .coins import Balance, Coin, new_coins
from .errors import PolicyDefectError
from .policy import GenesisPolicy, apply_ratio
from .recipients import RecipientRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Airdrop:
    id: int
    source_address: str
    conditions: Tuple[str, ...]
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class ClaimGrant:
    airdrop_id: int
    recipient: str
    initial_claimable: Coin
    claimable: Coin
    claimed_conditions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AirdropSplit:
    balances: Tuple[Balance, ...]
    claim_grants: Tuple[ClaimGrant, ...]
    total_initial: Coin
    total_claimable: Coin
    total_entitled: Coin


def add_months(t: datetime, months: int) -> datetime:
    """Calendar month addition; overflowing days roll into the next month."""
    month_index = t.month - 1 + months
    year = t.year + month_index // 12
    month = month_index % 12 + 1
    first = t.replace(year=year, month=month, day=1)
    return first + timedelta(days=t.day - 1)


def build_airdrop(policy: GenesisPolicy) -> Airdrop:
    start = policy.genesis_time
    return Airdrop(
        id=policy.airdrop.id,
        source_address=policy.airdrop.source_address,
        conditions=tuple(policy.airdrop.conditions),
        start_time=start,
        end_time=add_months(start, policy.airdrop.duration_months),
    )


def split_recipient(record: RecipientRecord, policy: GenesisPolicy) -> Tuple[Balance, ClaimGrant]:
    denom = policy.bond_denom
    initial = apply_ratio(record.amount, policy.airdrop.immediate_release_ratio)
    deferred = record.amount - initial

    balance = Balance(record.address, new_coins(Coin(denom, initial)))
    grant = ClaimGrant(
        airdrop_id=policy.airdrop.id,
        recipient=record.address,
        initial_claimable=Coin(denom, deferred),
        claimable=Coin(denom, deferred),
    )
    return balance, grant


def split_airdrop(records: Iterable[RecipientRecord], policy: GenesisPolicy) -> AirdropSplit:
    denom = policy.bond_denom
    balances: List[Balance] = []
    grants: List[ClaimGrant] = []
    total_initial = 0
    total_claimable = 0

    for record in records:
        if record.amount == 0:
            continue
        balance, grant = split_recipient(record, policy)
        balances.append(balance)
        grants.append(grant)
        total_initial += balance.amount_of(denom)
        total_claimable += grant.claimable.amount

    total_entitled = total_initial + total_claimable
    if total_entitled > policy.airdrop.supply:
        raise PolicyDefectError(
            "airdrop entitlements exceed the airdrop supply",
            expected=policy.airdrop.supply,
            computed=total_entitled,
        )

    logger.info(
        "airdrop split: %d recipients, initial %d%s, claimable %d%s",
        len(balances), total_initial, denom, total_claimable, denom,
    )
    return AirdropSplit(
        balances=tuple(balances),
        claim_grants=tuple(grants),
        total_initial=Coin(denom, total_initial),
        total_claimable=Coin(denom, total_claimable),
        total_entitled=Coin(denom, total_entitled),
    )


def source_balance(split: AirdropSplit, policy: GenesisPolicy) -> Balance:
    """Airdrop pool minus the immediate shares, plus the boost pool."""
    denom = policy.bond_denom
    pool = Coin(denom, policy.airdrop.supply).sub(split.total_initial)
    boost = Coin(denom, policy.airdrop.boost_supply)
    logger.info("airdrop pool after initial release: %s, boost pool: %s", pool, boost)
    return Balance(policy.airdrop.source_address, new_coins(pool.add(boost)))
