from __future__ import annotations

import pytest

from genesis_ledger.balances import foundation_balance, merge_balances, validator_balances
from genesis_ledger.coins import Balance, Coin
from genesis_ledger.errors import DuplicateAddressError, PolicyDefectError
from genesis_ledger.recipients import RecipientRecord
from genesis_ledger.vesting import synthesize_vesting

from helpers import DENOM, FOUNDATION, SOURCE, VALIDATORS, build_policy, make_address

POLICY = build_policy()
GRANT = 100_000_000


def _bal(address: str, amount: int) -> Balance:
    return Balance(address, (Coin(DENOM, amount),))


def _vesting(*pairs):
    records = [RecipientRecord(addr, amt, i + 1) for i, (addr, amt) in enumerate(pairs)]
    return synthesize_vesting(records, POLICY)


def _merge(recipients, vesting, foundation_amount=1_000):
    validators, _ = validator_balances(POLICY)
    return merge_balances(
        recipients,
        _bal(SOURCE, 5_000),
        validators,
        _bal(FOUNDATION, foundation_amount),
        vesting.accounts,
        POLICY,
    )


def test_validator_balances_total():
    balances, total = validator_balances(POLICY)
    assert [b.address for b in balances] == VALIDATORS
    assert total == 2_000_000


def test_foundation_is_residual():
    bal = foundation_balance(POLICY, 2_000_000, 200_000_000)
    assert bal.address == FOUNDATION
    assert bal.amount_of(DENOM) == 100_000_000_000_000 - 2_000_000 - 200_000_000


def test_negative_foundation_residual_is_a_policy_defect():
    with pytest.raises(PolicyDefectError):
        foundation_balance(POLICY, 2_000_000, 100_000_000_000_000)


def test_vesting_onto_existing_balance_is_additive():
    holder = make_address(100)
    ledger = _merge([_bal(holder, 20)], _vesting((holder, GRANT)))

    matching = [b for b in ledger.balances if b.address == holder]
    assert len(matching) == 1
    assert matching[0].amount_of(DENOM) == 20 + GRANT
    assert holder not in ledger.vesting_backed

    accounts = [a for a in ledger.accounts if a.address == holder]
    assert len(accounts) == 1
    assert accounts[0].is_vesting


def test_vesting_for_new_address_creates_balance():
    newcomer = make_address(200)
    ledger = _merge([_bal(make_address(100), 20)], _vesting((newcomer, GRANT)))

    assert ledger.balance_of(newcomer).amount_of(DENOM) == GRANT
    assert ledger.vesting_backed == (newcomer,)
    assert ledger.balances[-1].address == newcomer


def test_account_order_and_uniqueness():
    r1, r2, v = make_address(100), make_address(101), make_address(200)
    ledger = _merge([_bal(r1, 1), _bal(r2, 2)], _vesting((r2, GRANT), (v, GRANT)))

    addresses = [a.address for a in ledger.accounts]
    assert addresses[0] == FOUNDATION
    assert len(addresses) == len(set(addresses))
    assert addresses == [FOUNDATION, r1, SOURCE] + VALIDATORS + [r2, v]
    assert len({b.address for b in ledger.balances}) == len(ledger.balances)


def test_foundation_with_vesting_stays_first():
    ledger = _merge([], _vesting((FOUNDATION, GRANT)))
    assert ledger.accounts[0].address == FOUNDATION
    assert ledger.accounts[0].is_vesting
    assert ledger.balance_of(FOUNDATION).amount_of(DENOM) == 1_000 + GRANT
    assert [a.address for a in ledger.accounts].count(FOUNDATION) == 1


def test_recipient_colliding_with_validator_is_rejected():
    with pytest.raises(DuplicateAddressError) as exc:
        _merge([_bal(VALIDATORS[0], 10)], _vesting())
    assert exc.value.address == VALIDATORS[0]
    assert exc.value.sources == ("airdrop recipients", "validator bonuses")


def test_duplicate_recipients_are_rejected():
    holder = make_address(100)
    with pytest.raises(DuplicateAddressError):
        _merge([_bal(holder, 1), _bal(holder, 2)], _vesting())


def test_foreign_prefix_fails_account_validation():
    with pytest.raises(PolicyDefectError):
        _merge([_bal(make_address(100, prefix="cosmos"), 1)], _vesting())


def test_bad_address_length_fails_account_validation():
    with pytest.raises(PolicyDefectError):
        _merge([_bal(make_address(100, length=16), 1)], _vesting())
