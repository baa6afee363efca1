from __future__ import annotations

import pytest

from genesis_ledger.addresses import decode_address
from genesis_ledger.errors import ErrorKind, InputMalformationError
from genesis_ledger.recipients import parse_amount, parse_recipients, read_recipients

from helpers import PREFIX, make_address, write_csv


def test_header_is_skipped_and_prefix_converted():
    src = make_address(100, prefix="cosmos")
    records = parse_recipients([["address", "amount"], [src, "1000"]], PREFIX)

    assert len(records) == 1
    rec = records[0]
    assert rec.address.startswith("cre1")
    assert rec.amount == 1000
    assert rec.row_index == 1
    assert decode_address(rec.address)[1] == decode_address(src)[1]


def test_zero_and_empty_amounts_are_dropped():
    rows = [
        ["address", "amount"],
        [make_address(100, "cosmos"), "0"],
        [make_address(101, "cosmos"), ""],
        [make_address(102, "cosmos"), "5"],
    ]
    records = parse_recipients(rows, PREFIX)
    assert [r.row_index for r in records] == [3]


def test_order_is_preserved():
    rows = [["address", "amount"]] + [[make_address(150 - i, "osmo"), str(i + 1)] for i in range(5)]
    records = parse_recipients(rows, PREFIX)
    assert [r.amount for r in records] == [1, 2, 3, 4, 5]


def test_arbitrary_precision_amount():
    assert parse_amount("123456789012345678901234567890") == 123456789012345678901234567890


@pytest.mark.parametrize("raw", ["abc", "-5", "1.5", "1e6", "1_000", "+3"])
def test_malformed_amount_aborts(raw):
    rows = [["address", "amount"], [make_address(100, "cosmos"), raw]]
    with pytest.raises(InputMalformationError) as exc:
        parse_recipients(rows, PREFIX, source="snapshot.csv")
    assert exc.value.kind is ErrorKind.INPUT_MALFORMATION
    assert exc.value.row_index == 1
    assert exc.value.source == "snapshot.csv"


def test_bad_address_aborts_even_for_zero_amount():
    rows = [["address", "amount"], ["cosmos1notanaddress", "0"]]
    with pytest.raises(InputMalformationError):
        parse_recipients(rows, PREFIX)


def test_wrong_column_count_aborts():
    rows = [["address", "amount"], [make_address(100, "cosmos"), "1", "extra"]]
    with pytest.raises(InputMalformationError):
        parse_recipients(rows, PREFIX)


def test_read_recipients_from_file(tmp_path):
    path = write_csv(
        tmp_path / "result.csv",
        [(make_address(100, "cosmos"), 10), (make_address(101, "cosmos"), 0)],
    )
    records = read_recipients(path, PREFIX)
    assert len(records) == 1
    assert records[0].amount == 10


def test_missing_file_is_input_malformation(tmp_path):
    with pytest.raises(InputMalformationError):
        read_recipients(tmp_path / "missing.csv", PREFIX)


def test_amount_at_256_bit_bound_is_accepted():
    assert parse_amount(str(2**256 - 1)) == 2**256 - 1
    assert parse_amount("000" + str(2**256 - 1)) == 2**256 - 1


@pytest.mark.parametrize("raw", [str(2**256), "9" * 79, "9" * 5000])
def test_oversized_amount_is_input_malformation(raw):
    rows = [["address", "amount"], [make_address(100, "cosmos"), raw]]
    with pytest.raises(InputMalformationError) as exc:
        parse_recipients(rows, PREFIX, source="snapshot.csv")
    assert exc.value.kind is ErrorKind.INPUT_MALFORMATION
    assert exc.value.row_index == 1


def test_padded_zero_amount_is_dropped():
    rows = [["address", "amount"], [make_address(100, "cosmos"), "0" * 5000]]
    assert parse_recipients(rows, PREFIX) == ()


@pytest.mark.parametrize("length", [16, 21])
def test_wrong_payload_length_aborts_at_ingestion(length):
    rows = [["address", "amount"], [make_address(100, "cosmos", length=length), "10"]]
    with pytest.raises(InputMalformationError) as exc:
        parse_recipients(rows, PREFIX, source="snapshot.csv")
    assert exc.value.row_index == 1
    assert "incorrect address length" in str(exc.value)


def test_32_byte_address_is_accepted():
    records = parse_recipients([["address", "amount"], [make_address(100, "cosmos", length=32), "10"]], PREFIX)
    assert len(decode_address(records[0].address)[1]) == 32
