"""
Bech32 account addresses.

Encoding primitives come from the `bech32` package; this module only
re-prefixes addresses and enforces the account-address shape
(20 or 32 byte payload, canonical prefix).
"""

from __future__ import annotations

from typing import Tuple

import bech32

VALID_ADDRESS_LENGTHS = (20, 32)


class AddressError(ValueError):
    pass


def decode_address(address: str) -> Tuple[str, bytes]:
    """Return (prefix, raw bytes) of a bech32 address."""
    hrp, data = bech32.bech32_decode(address)
    if hrp is None or data is None:
        raise AddressError(f"invalid bech32 address {address!r}")
    raw = bech32.convertbits(data, 5, 8, False)
    if raw is None:
        raise AddressError(f"invalid bech32 payload padding in {address!r}")
    return hrp, bytes(raw)


def encode_address(prefix: str, raw: bytes) -> str:
    data = bech32.convertbits(list(raw), 8, 5, True)
    address = bech32.bech32_encode(prefix, data) if data is not None else None
    if not address:
        raise AddressError(f"cannot encode {len(raw)} bytes with prefix {prefix!r}")
    return address


def convert_prefix(address: str, prefix: str) -> str:
    """Re-encode an address under another prefix, keeping its raw bytes."""
    _, raw = decode_address(address)
    return encode_address(prefix, raw)


def verify_account_address(address: str, prefix: str) -> bytes:
    hrp, raw = decode_address(address)
    if hrp != prefix:
        raise AddressError(f"invalid Bech32 prefix; expected {prefix}, got {hrp}")
    if len(raw) not in VALID_ADDRESS_LENGTHS:
        raise AddressError(f"incorrect address length {len(raw)}")
    return raw
