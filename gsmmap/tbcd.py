"""TBCD (Telephony Binary Coded Decimal) digit strings.

Each octet holds two digits with the nibbles swapped. An odd number of
digits is padded with the filler ``f``. See 3GPP TS 29.002, TBCD-STRING.
"""

from __future__ import annotations

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _swap_nibbles(data: bytes) -> bytes:
    return bytes(((b & 0x0F) << 4) | (b >> 4) for b in data)


def encode_tbcd_digits(s: str) -> bytes:
    """Encode a string of hexadecimal digits as TBCD octets.

    Raises ValueError if ``s`` holds anything other than hex digits.
    """
    for char in s:
        if char not in _HEX_DIGITS:
            raise ValueError(f"invalid character in input: {char}")
    hex_string = s if len(s) % 2 == 0 else s + "f"
    return _swap_nibbles(bytes.fromhex(hex_string))


def decode_tbcd_digits(raw: bytes | None) -> str:
    """Decode TBCD octets into a lower-case digit string.

    A single trailing filler ``f`` is removed. Raises ValueError for None.
    """
    if raw is None:
        raise ValueError("input is nil")
    digits = _swap_nibbles(bytes(raw)).hex()
    if digits.endswith("f"):
        digits = digits[:-1]
    return digits