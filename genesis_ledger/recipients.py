"""
Recipient Ingestor

Reads an `address,amount` CSV snapshot (first row is a header) into
RecipientRecord values:
- amounts are base-10 integer literals of at most 256 bits
- addresses are re-encoded from their source prefix to the network prefix
  and must carry a 20 or 32 byte payload
- zero-amount rows are dropped

The same reader serves the airdrop snapshot and the vesting grant list.
Any malformed row aborts the whole run.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .addresses import AddressError, convert_prefix, verify_account_address
from .errors import InputMalformationError

logger = logging.getLogger(__name__)

_AMOUNT_RE = re.compile(r"[0-9]+")

MAX_AMOUNT_BITS = 256
# 2**256 - 1 has 78 decimal digits
_MAX_AMOUNT_DIGITS = 78


@dataclass(frozen=True)
class RecipientRecord:
    address: str
    amount: int
    row_index: int


def parse_amount(raw: str, *, source: str = "", row_index: int = 0) -> int:
    text = raw.strip()
    if text == "":
        return 0
    if not _AMOUNT_RE.fullmatch(text):
        raise InputMalformationError(
            "amount is not a non-negative integer literal",
            source=source,
            row_index=row_index,
            value=raw,
        )
    # digit bound first; int() refuses very long literals on its own terms
    digits = text.lstrip("0")
    if len(digits) > _MAX_AMOUNT_DIGITS or int(digits or "0").bit_length() > MAX_AMOUNT_BITS:
        raise InputMalformationError(
            f"amount exceeds {MAX_AMOUNT_BITS} bits",
            source=source,
            row_index=row_index,
            value=raw,
        )
    return int(digits or "0")


def parse_recipients(
    rows: Iterable[Sequence[str]],
    account_prefix: str,
    source: str = "<rows>",
) -> Tuple[RecipientRecord, ...]:
    records: List[RecipientRecord] = []
    skipped = 0

    for i, row in enumerate(rows):
        if i == 0:
            continue  # header
        if not row:
            continue
        if len(row) != 2:
            raise InputMalformationError(
                f"expected 2 columns (address,amount), got {len(row)}",
                source=source,
                row_index=i,
                value=list(row),
            )

        raw_address, raw_amount = row
        amount = parse_amount(raw_amount, source=source, row_index=i)

        try:
            address = convert_prefix(raw_address.strip(), account_prefix)
            verify_account_address(address, account_prefix)
        except AddressError as e:
            raise InputMalformationError(str(e), source=source, row_index=i)

        if amount == 0:
            skipped += 1
            continue

        records.append(RecipientRecord(address=address, amount=amount, row_index=i))

    logger.info("%s: %d records ingested, %d zero-amount rows skipped", source, len(records), skipped)
    return tuple(records)


def read_recipients(path: Path, account_prefix: str) -> Tuple[RecipientRecord, ...]:
    path = Path(path)
    try:
        with path.open(newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        raise InputMalformationError(f"failed to read csv file: {e}", source=str(path))
    return parse_recipients(rows, account_prefix, source=str(path))
