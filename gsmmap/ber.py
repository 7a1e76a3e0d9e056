"""Minimal DER tag-length-value encoding and decoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

TAG_BOOLEAN = 1
TAG_OCTET_STRING = 4
TAG_NULL = 5
TAG_SEQUENCE = 16

_CONSTRUCTED_BIT = 0x20
_HIGH_TAG_MARKER = 0x1F
_MAX_TAG_OCTETS = 4


class BerError(ValueError):
    """Raised for malformed or non-DER encodings."""


class TagClass(IntEnum):
    """ASN.1 tag class, as held in the top two bits of the identifier octet."""

    UNIVERSAL = 0
    APPLICATION = 1
    CONTEXT_SPECIFIC = 2
    PRIVATE = 3


@dataclass(frozen=True)
class Tlv:
    """One decoded element: its tag and its content octets."""

    tag_class: TagClass
    constructed: bool
    tag: int
    value: bytes

    def encode(self) -> bytes:
        """Return the full DER encoding of this element."""
        return encode_tlv(self.tag_class, self.constructed, self.tag, self.value)


def _encode_base128(number: int) -> bytes:
    groups = [number & 0x7F]
    number >>= 7
    while number:
        groups.append((number & 0x7F) | 0x80)
        number >>= 7
    return bytes(reversed(groups))


def _encode_length(length: int) -> bytes:
    if length < 0x80:
        return bytes([length])
    body = length.to_bytes((length.bit_length() + 7) // 8, "big")
    if len(body) > 0x7E:
        raise BerError("length too large")
    return bytes([0x80 | len(body)]) + body


def encode_tlv(tag_class: int, constructed: bool, tag: int, value: bytes) -> bytes:
    """Encode a tag, a constructed flag and content octets as DER."""
    cls = TagClass(tag_class)
    if tag < 0:
        raise BerError(f"negative tag: {tag}")
    first = (cls << 6) | (_CONSTRUCTED_BIT if constructed else 0)
    if tag < _HIGH_TAG_MARKER:
        identifier = bytes([first | tag])
    else:
        identifier = bytes([first | _HIGH_TAG_MARKER]) + _encode_base128(tag)
    content = bytes(value)
    return identifier + _encode_length(len(content)) + content


def _decode_high_tag(data: bytes, offset: int) -> tuple[int, int]:
    tag = 0
    for count in range(_MAX_TAG_OCTETS + 1):
        if offset >= len(data):
            raise BerError("data truncated in tag")
        if count == _MAX_TAG_OCTETS:
            raise BerError("base 128 integer too large")
        octet = data[offset]
        offset += 1
        if count == 0 and octet == 0x80:
            raise BerError("integer is not minimally encoded")
        tag = (tag << 7) | (octet & 0x7F)
        if not octet & 0x80:
            break
    if tag < _HIGH_TAG_MARKER:
        raise BerError("non-minimal tag")
    return tag, offset


def _decode_length(data: bytes, offset: int) -> tuple[int, int]:
    if offset >= len(data):
        raise BerError("data truncated in length")
    octet = data[offset]
    offset += 1
    if octet < 0x80:
        return octet, offset
    count = octet & 0x7F
    if count == 0:
        raise BerError("indefinite length found (not DER)")
    if offset + count > len(data):
        raise BerError("data truncated in length")
    body = data[offset : offset + count]
    offset += count
    if body[0] == 0:
        raise BerError("superfluous leading zeros in length")
    length = int.from_bytes(body, "big")
    if length < 0x80:
        raise BerError("non-minimal length")
    return length, offset


def decode_tlv(data: bytes) -> tuple[Tlv, bytes]:
    """Decode the first element of ``data``.

    Returns the element and the octets that follow it.
    """
    data = bytes(data)
    if not data:
        raise BerError("data truncated: empty input")
    first = data[0]
    tag_class = TagClass(first >> 6)
    constructed = bool(first & _CONSTRUCTED_BIT)
    tag = first & _HIGH_TAG_MARKER
    offset = 1
    if tag == _HIGH_TAG_MARKER:
        tag, offset = _decode_high_tag(data, offset)
    length, offset = _decode_length(data, offset)
    end = offset + length
    if end > len(data):
        raise BerError("data truncated")
    return Tlv(tag_class, constructed, tag, data[offset:end]), data[end:]