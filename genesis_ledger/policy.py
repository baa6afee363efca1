"""
Genesis Policy

The immutable configuration of one preparation run:
- network time origin, account prefix, bond denom
- foundation allocation and validator bonuses
- airdrop pool, boost pool and immediate-release ratio
- vesting cliffs and year ratios

Policies are loaded from YAML and validated into frozen pydantic models.
Ratios are decimals parsed from strings so that every split is exact.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .addresses import AddressError, verify_account_address
from .errors import PolicyDefectError

POLICY_DIR = Path(__file__).resolve().parent / "policies"
MAINNET_POLICY_PATH = POLICY_DIR / "mainnet.yaml"


def parse_ratio(raw: Any) -> Decimal:
    if isinstance(raw, float):
        raise ValueError(f"ratio {raw!r} must be written as a string, not a float")
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation as e:
        raise ValueError(f"invalid ratio {raw!r}: {e}")
    if not value.is_finite() or value < 0 or value > 1:
        raise ValueError(f"ratio {raw!r} must be within [0, 1]")
    return value


def apply_ratio(amount: int, ratio: Decimal, divisor: int = 1) -> int:
    """floor(amount * ratio / divisor) with exact integer arithmetic."""
    num, den = ratio.as_integer_ratio()
    return (amount * num) // (den * divisor)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ValidatorBonus(_Frozen):
    address: str
    amount: int = Field(ge=0)


class FoundationPolicy(_Frozen):
    address: str
    supply: int = Field(ge=0)


class AirdropPolicy(_Frozen):
    id: int = 1
    source_address: str
    supply: int = Field(ge=0)
    boost_supply: int = Field(ge=0)
    immediate_release_ratio: Decimal = Decimal("0.2")
    conditions: Tuple[str, ...] = ("deposit", "swap", "liquidstake", "vote")
    duration_months: int = Field(default=6, ge=0)

    @field_validator("immediate_release_ratio", mode="before")
    @classmethod
    def check_ratio(cls, v: Any) -> Decimal:
        return parse_ratio(v)


class VestingPolicy(_Frozen):
    first_year_cliff: int = Field(gt=0)
    monthly_cliff: int = Field(gt=0)
    year_ratios: Tuple[Decimal, Decimal, Decimal]

    @field_validator("year_ratios", mode="before")
    @classmethod
    def check_year_ratios(cls, v: Any) -> Tuple[Decimal, ...]:
        if not isinstance(v, (list, tuple)):
            raise ValueError("year_ratios must be a list of three ratios")
        return tuple(parse_ratio(r) for r in v)

    @model_validator(mode="after")
    def check_ratios_sum_to_one(self) -> "VestingPolicy":
        total = sum(self.year_ratios, Decimal(0))
        if total != 1:
            raise ValueError(f"year_ratios must sum to exactly 1, got {total}")
        return self

    @property
    def total_length(self) -> int:
        return self.first_year_cliff + self.monthly_cliff * 24


class GenesisPolicy(_Frozen):
    genesis_time: datetime
    account_prefix: str
    bond_denom: str
    foundation: FoundationPolicy
    validator_bonuses: Tuple[ValidatorBonus, ...] = ()
    airdrop: AirdropPolicy
    vesting: VestingPolicy

    @field_validator("genesis_time")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @property
    def genesis_time_unix(self) -> int:
        return int(self.genesis_time.timestamp())

    def fixed_addresses(self) -> Dict[str, str]:
        """Every address the policy names, keyed by its role."""
        out = {
            "foundation": self.foundation.address,
            "airdrop_source": self.airdrop.source_address,
        }
        for i, bonus in enumerate(self.validator_bonuses):
            out[f"validator_bonus[{i}]"] = bonus.address
        return out

    def validate_addresses(self) -> None:
        seen: Dict[str, str] = {}
        for role, address in self.fixed_addresses().items():
            try:
                verify_account_address(address, self.account_prefix)
            except AddressError as e:
                raise PolicyDefectError(f"{role} address {address!r}: {e}")
            if address in seen:
                raise PolicyDefectError(
                    f"{role} address {address} is already used by {seen[address]}"
                )
            seen[address] = role


def policy_from_dict(data: Dict[str, Any]) -> GenesisPolicy:
    try:
        policy = GenesisPolicy.model_validate(data)
    except ValidationError as e:
        raise PolicyDefectError(f"invalid genesis policy: {e}")
    policy.validate_addresses()
    return policy


def load_policy(path: Path) -> GenesisPolicy:
    path = Path(path)
    if not path.exists():
        raise PolicyDefectError(f"policy file not found at {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return policy_from_dict(data)


def mainnet_policy() -> GenesisPolicy:
    return load_policy(MAINNET_POLICY_PATH)
