"""
Vesting Synthesizer

Turns a vesting grant into a periodic schedule of 25 periods:
- one first-year cliff period
- 12 monthly periods for year two
- 12 monthly periods for year three

Each share is floored; the truncation remainder (the crumb) is always
added to the first-year period so the periods sum to the grant exactly.
Lock/vest evaluation follows periodic vesting: a period unlocks once the
elapsed time reaches its cumulative end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .coins import Coin, Coins, new_coins
from .errors import DuplicateAddressError, PolicyDefectError
from .policy import GenesisPolicy, apply_ratio
from .recipients import RecipientRecord

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
MONTHLY_PERIODS = 2 * MONTHS_PER_YEAR
TOTAL_PERIODS = 1 + MONTHLY_PERIODS


@dataclass(frozen=True)
class Period:
    length_seconds: int
    amount: Coin


@dataclass(frozen=True)
class VestingAccount:
    address: str
    total: Coin
    start_time: int
    periods: Tuple[Period, ...]

    @property
    def end_time(self) -> int:
        return self.start_time + sum(p.length_seconds for p in self.periods)

    def unlock_times(self) -> List[int]:
        times: List[int] = []
        t = self.start_time
        for p in self.periods:
            t += p.length_seconds
            times.append(t)
        return times

    def vested_coins(self, t: int) -> Coins:
        if t <= self.start_time:
            return ()
        if t >= self.end_time:
            return new_coins(self.total)

        vested = 0
        elapsed = t - self.start_time
        for p in self.periods:
            if elapsed < p.length_seconds:
                break
            vested += p.amount.amount
            elapsed -= p.length_seconds
        return new_coins(Coin(self.total.denom, vested))

    def vesting_coins(self, t: int) -> Coins:
        vested = sum(c.amount for c in self.vested_coins(t))
        return new_coins(Coin(self.total.denom, self.total.amount - vested))

    def locked_coins(self, t: int) -> Coins:
        # no delegations exist at genesis, so locked == still vesting
        return self.vesting_coins(t)

    def validate(self) -> None:
        if any(p.length_seconds <= 0 for p in self.periods):
            raise PolicyDefectError(f"vesting account {self.address} has a non-positive period length")
        total = sum(p.amount.amount for p in self.periods)
        if total != self.total.amount:
            raise PolicyDefectError(
                f"vesting account {self.address}: periods do not sum to original vesting",
                expected=self.total.amount,
                computed=total,
            )


@dataclass(frozen=True)
class VestingSet:
    accounts: Tuple[VestingAccount, ...]
    total: Coin

    def by_address(self) -> Dict[str, VestingAccount]:
        return {acc.address: acc for acc in self.accounts}


def calc_vesting_periods(total_amount: int, policy: GenesisPolicy) -> Tuple[Period, ...]:
    v = policy.vesting
    denom = policy.bond_denom
    r1, r2, r3 = v.year_ratios

    first_year = apply_ratio(total_amount, r1)
    second_monthly = apply_ratio(total_amount, r2, MONTHS_PER_YEAR)
    third_monthly = apply_ratio(total_amount, r3, MONTHS_PER_YEAR)
    crumb = (
        total_amount
        - first_year
        - second_monthly * MONTHS_PER_YEAR
        - third_monthly * MONTHS_PER_YEAR
    )
    first_year += crumb

    periods: List[Period] = [Period(v.first_year_cliff, Coin(denom, first_year))]
    periods += [Period(v.monthly_cliff, Coin(denom, second_monthly))] * MONTHS_PER_YEAR
    periods += [Period(v.monthly_cliff, Coin(denom, third_monthly))] * MONTHS_PER_YEAR

    check_periods(periods, total_amount, policy)
    return tuple(periods)


def check_periods(periods: List[Period], total_amount: int, policy: GenesisPolicy) -> None:
    if len(periods) != TOTAL_PERIODS:
        raise PolicyDefectError(
            "error vesting periods number", expected=TOTAL_PERIODS, computed=len(periods)
        )

    total_length = sum(p.length_seconds for p in periods)
    if total_length != policy.vesting.total_length:
        raise PolicyDefectError(
            "error total vesting length",
            expected=policy.vesting.total_length,
            computed=total_length,
        )

    amount = sum(p.amount.amount for p in periods)
    if amount != total_amount:
        raise PolicyDefectError("error total vesting amount", expected=total_amount, computed=amount)


def synthesize_vesting(records: Iterable[RecipientRecord], policy: GenesisPolicy) -> VestingSet:
    denom = policy.bond_denom
    start = policy.genesis_time_unix
    accounts: List[VestingAccount] = []
    seen: Dict[str, int] = {}
    total = 0

    for record in records:
        if record.amount == 0:
            continue
        if record.address in seen:
            raise DuplicateAddressError(
                record.address,
                [f"vesting row {seen[record.address]}", f"vesting row {record.row_index}"],
            )
        seen[record.address] = record.row_index

        accounts.append(
            VestingAccount(
                address=record.address,
                total=Coin(denom, record.amount),
                start_time=start,
                periods=calc_vesting_periods(record.amount, policy),
            )
        )
        total += record.amount

    logger.info("vesting: %d accounts, total %d%s", len(accounts), total, denom)
    return VestingSet(accounts=tuple(accounts), total=Coin(denom, total))
