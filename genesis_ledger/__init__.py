"""
Genesis Ledger Package

Prepares the initial ledger state of a new network:
- recipients:  CSV snapshot ingestion
- airdrop:     immediate / deferred airdrop split and claim grants
- vesting:     periodic vesting schedules
- balances:    validator, foundation and vesting balance merging
- supply:      total supply reconciliation
- pipeline:    prepare_genesis(), the end-to-end run
"""

from .errors import (
    ConservationViolationError,
    DuplicateAddressError,
    ErrorKind,
    GenesisError,
    InputMalformationError,
    PolicyDefectError,
)
from .pipeline import GenesisOutput, prepare_genesis
from .policy import GenesisPolicy, load_policy, mainnet_policy

__all__ = [
    "ConservationViolationError",
    "DuplicateAddressError",
    "ErrorKind",
    "GenesisError",
    "GenesisOutput",
    "GenesisPolicy",
    "InputMalformationError",
    "PolicyDefectError",
    "load_policy",
    "mainnet_policy",
    "prepare_genesis",
]
