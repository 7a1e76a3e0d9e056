"""MAP AddressString: a type-of-address octet followed by TBCD digits."""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

EXTENSION_NO = 0b1000_0000
"""Extension bit set: no extension follows."""


class AddressNature(IntEnum):
    """Nature of address indicator (bits 7..5 of the first octet)."""

    UNKNOWN = 0b000 << 4
    INTERNATIONAL = 0b001 << 4
    NATIONAL = 0b010 << 4
    NETWORK_SPECIFIC = 0b011 << 4
    SUBSCRIBER = 0b100 << 4
    RESERVED = 0b101 << 4
    ABBREVIATED = 0b110 << 4
    RESERVED_EXTENSION = 0b111 << 4


class NumberingPlan(IntEnum):
    """Numbering plan indicator (bits 4..1 of the first octet)."""

    UNKNOWN = 0b0000
    ISDN = 0b0001
    SPARE_1 = 0b0010
    DATA = 0b0011
    TELEX = 0b0100
    SPARE_2 = 0b0101
    LAND_MOBILE = 0b0110
    SPARE_3 = 0b0111
    NATIONAL = 0b1000
    PRIVATE = 0b1001
    RESERVED_EXTENSION = 0b1111


class DecodedAddress(NamedTuple):
    """Components of an AddressString, each masked in place."""

    extension: int
    nature_of_address: int
    numbering_plan: int
    digits: bytes | None


def encode_address_string(
    extension: int, nature_of_address: int, numbering_plan: int, digits: bytes
) -> bytes:
    """Build an AddressString from its indicator fields and TBCD digits."""
    first_octet = (extension | nature_of_address | (numbering_plan & 0x0F)) & 0xFF
    return bytes([first_octet]) + bytes(digits)


def decode_address_string(encoded: bytes) -> DecodedAddress:
    """Split an AddressString into its components.

    Empty input yields zero fields and ``None`` digits.
    """
    if not encoded:
        return DecodedAddress(0, 0, 0, None)
    first_octet = encoded[0]
    return DecodedAddress(
        extension=first_octet & 0b1000_0000,
        nature_of_address=first_octet & 0b0111_0000,
        numbering_plan=first_octet & 0x0F,
        digits=bytes(encoded[1:]),
    )