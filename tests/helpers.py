from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, Iterable, Sequence

from genesis_ledger.addresses import encode_address
from genesis_ledger.policy import GenesisPolicy, policy_from_dict

PREFIX = "cre"
DENOM = "ucre"
GENESIS_TIME = "2022-04-13T00:00:00Z"
GENESIS_UNIX = 1649808000
DAY = 24 * 60 * 60


def make_address(seed: int, prefix: str = PREFIX, length: int = 20) -> str:
    return encode_address(prefix, bytes([seed]) * length)


FOUNDATION = make_address(1)
SOURCE = make_address(2)
VALIDATORS = [make_address(3), make_address(4)]


def policy_dict(**overrides: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "genesis_time": GENESIS_TIME,
        "account_prefix": PREFIX,
        "bond_denom": DENOM,
        "foundation": {"address": FOUNDATION, "supply": 100_000_000_000_000},
        "validator_bonuses": [{"address": a, "amount": 1_000_000} for a in VALIDATORS],
        "airdrop": {
            "id": 1,
            "source_address": SOURCE,
            "supply": 50_000_000_000_000,
            "boost_supply": 50_000_000_000_000,
            "immediate_release_ratio": "0.2",
            "conditions": ["deposit", "swap", "liquidstake", "vote"],
            "duration_months": 6,
        },
        "vesting": {
            "first_year_cliff": 31_536_000,
            "monthly_cliff": 2_628_000,
            "year_ratios": ["0.34", "0.34", "0.32"],
        },
    }
    data.update(overrides)
    return data


def build_policy(**overrides: Any) -> GenesisPolicy:
    return policy_from_dict(policy_dict(**overrides))


def write_csv(path: Path, rows: Iterable[Sequence[Any]], header: Sequence[str] = ("address", "amount")) -> Path:
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(header)
        for row in rows:
            w.writerow(row)
    return path
