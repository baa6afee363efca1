"""
Genesis Preparation Pipeline

One strictly sequential pass:

    recipients csv -> ingest -> airdrop split --+
                                                +-> merge -> reconcile
    vesting csv    -> ingest -> vesting synth --+

Returns a GenesisOutput holding the final balances, claim grants, vesting
accounts, genesis accounts and reconciled supply. Nothing is serialised
or written here; the genesis document assembler consumes the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .airdrop import Airdrop, ClaimGrant, build_airdrop, source_balance, split_airdrop
from .balances import GenesisAccount, foundation_balance, merge_balances, validator_balances
from .coins import Balance, Coin
from .policy import GenesisPolicy
from .recipients import read_recipients
from .supply import SupplyComponents, check_claim_coverage, reconcile_supply
from .vesting import VestingAccount, synthesize_vesting

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenesisOutput:
    airdrop: Airdrop
    balances: Tuple[Balance, ...]
    claim_grants: Tuple[ClaimGrant, ...]
    vesting_accounts: Tuple[VestingAccount, ...]
    accounts: Tuple[GenesisAccount, ...]
    components: SupplyComponents
    supply: Coin


def prepare_genesis(policy: GenesisPolicy, recipients_path: Path, vesting_path: Path) -> GenesisOutput:
    denom = policy.bond_denom
    airdrop = build_airdrop(policy)

    recipients = read_recipients(recipients_path, policy.account_prefix)
    split = split_airdrop(recipients, policy)
    source = source_balance(split, policy)

    validators, validator_total = validator_balances(policy)

    grants = read_recipients(vesting_path, policy.account_prefix)
    vesting = synthesize_vesting(grants, policy)

    foundation = foundation_balance(policy, validator_total, vesting.total.amount)

    merged = merge_balances(
        split.balances,
        source,
        validators,
        foundation,
        vesting.accounts,
        policy,
    )

    components = SupplyComponents(
        denom=denom,
        airdrop_pool=policy.airdrop.supply,
        boost_pool=policy.airdrop.boost_supply,
        foundation=foundation.amount_of(denom),
        validator_bonuses=validator_total,
        vesting=vesting.total.amount,
    )
    check_claim_coverage(split.claim_grants, source, denom)
    supply = reconcile_supply(merged.balances, components)

    for name, amount in components.as_dict().items():
        logger.info("%s: %d%s", name, amount, denom)
    logger.info("vesting accounts: %d", len(vesting.accounts))
    logger.info("total supply: %s", supply)

    return GenesisOutput(
        airdrop=airdrop,
        balances=merged.balances,
        claim_grants=split.claim_grants,
        vesting_accounts=vesting.accounts,
        accounts=merged.accounts,
        components=components,
        supply=supply,
    )
