"""MAP short-message data types and their DER encodings."""

from __future__ import annotations

from dataclasses import dataclass, field

from .address import decode_address_string
from .ber import (
    TAG_BOOLEAN,
    TAG_NULL,
    TAG_OCTET_STRING,
    TAG_SEQUENCE,
    BerError,
    TagClass,
    Tlv,
    decode_tlv,
    encode_tlv,
)
from .tbcd import decode_tbcd_digits

_CTX = TagClass.CONTEXT_SPECIFIC


def _address_digits(encoded: bytes | None) -> str:
    return decode_tbcd_digits(decode_address_string(encoded or b"").digits)


def _sequence(content: bytes) -> bytes:
    return encode_tlv(TagClass.UNIVERSAL, True, TAG_SEQUENCE, content)


def _open_sequence(data: bytes) -> tuple[bytes, bytes]:
    tlv, rest = decode_tlv(data)
    _expect(tlv, TagClass.UNIVERSAL, TAG_SEQUENCE, True, "SEQUENCE")
    return tlv.value, rest


def _expect(tlv: Tlv, tag_class: TagClass, tag: int, constructed: bool, what: str) -> None:
    if tlv.tag_class != tag_class or tlv.tag != tag or tlv.constructed != constructed:
        raise BerError(f"tags don't match for {what}")


def _next(content: bytes, tag_class: TagClass, tag: int, constructed: bool, what: str):
    if not content:
        raise BerError(f"sequence truncated before {what}")
    tlv, rest = decode_tlv(content)
    _expect(tlv, tag_class, tag, constructed, what)
    return tlv.value, rest


def _boolean(value: bytes) -> bool:
    if len(value) != 1 or value[0] not in (0x00, 0xFF):
        raise BerError("invalid boolean")
    return value[0] == 0xFF


@dataclass
class RoutingInfoForSMArg:
    """SendRoutingInfoForSM argument."""

    msisdn: bytes = b""
    sm_rp_pri: bool = False
    service_centre_address: bytes = b""

    def encode(self) -> bytes:
        """Return the DER encoding."""
        return _sequence(
            encode_tlv(_CTX, False, 0, self.msisdn)
            + encode_tlv(_CTX, False, 1, b"\xff" if self.sm_rp_pri else b"\x00")
            + encode_tlv(_CTX, False, 2, self.service_centre_address)
        )

    @classmethod
    def decode(cls, data: bytes) -> tuple["RoutingInfoForSMArg", bytes]:
        """Decode from DER; return the value and the octets that follow."""
        content, rest = _open_sequence(data)
        msisdn, content = _next(content, _CTX, 0, False, "msisdn")
        pri, content = _next(content, _CTX, 1, False, "sm-RP-PRI")
        sca, content = _next(content, _CTX, 2, False, "serviceCentreAddress")
        return cls(msisdn, _boolean(pri), sca), rest

    def msisdn_string(self) -> str:
        """Return the MSISDN digits."""
        return _address_digits(self.msisdn)

    def service_centre_address_string(self) -> str:
        """Return the service centre address digits."""
        return _address_digits(self.service_centre_address)


@dataclass
class LocationInfoWithLMSI:
    """Location of the serving node: its ISDN address string."""

    network_node_number: bytes = b""


@dataclass
class RoutingInfoForSMRes:
    """SendRoutingInfoForSM result."""

    imsi: bytes = b""
    location_info_with_lmsi: LocationInfoWithLMSI = field(default_factory=LocationInfoWithLMSI)

    def encode(self) -> bytes:
        """Return the DER encoding."""
        location = encode_tlv(_CTX, False, 1, self.location_info_with_lmsi.network_node_number)
        return _sequence(
            encode_tlv(TagClass.UNIVERSAL, False, TAG_OCTET_STRING, self.imsi)
            + encode_tlv(_CTX, True, 0, location)
        )

    @classmethod
    def decode(cls, data: bytes) -> tuple["RoutingInfoForSMRes", bytes]:
        """Decode from DER; return the value and the octets that follow."""
        content, rest = _open_sequence(data)
        imsi, content = _next(content, TagClass.UNIVERSAL, TAG_OCTET_STRING, False, "imsi")
        location, content = _next(content, _CTX, 0, True, "locationInfoWithLMSI")
        node, _ = _next(location, _CTX, 1, False, "networkNode-Number")
        return cls(imsi, LocationInfoWithLMSI(node)), rest

    def imsi_string(self) -> str:
        """Return the IMSI digits."""
        return decode_tbcd_digits(self.imsi)

    def network_node_number_string(self) -> str:
        """Return the network node number digits."""
        return _address_digits(self.location_info_with_lmsi.network_node_number)


def _decode_choice(data: bytes, tags: tuple[int, ...]) -> dict[int, bytes]:
    """Match context-tagged elements to optional fields in field order."""
    found: dict[int, bytes] = {}
    remaining = list(tags)
    while data and remaining:
        tlv, rest = decode_tlv(data)
        if tlv.tag_class == _CTX and not tlv.constructed and tlv.tag in remaining:
            found[tlv.tag] = tlv.value
            remaining = remaining[remaining.index(tlv.tag) + 1 :]
            data = rest
        else:
            break
    return found


@dataclass
class SMRPDA:
    """SM-RP-DA choice: IMSI, LMSI, service centre address or none."""

    imsi: bytes | None = None
    lmsi: bytes | None = None
    service_centre_address_da: bytes | None = None
    no_sm_rp_da: bool = False

    def encode_content(self) -> bytes:
        """Return the encodings of the fields present, concatenated."""
        out = b""
        if self.imsi:
            out += encode_tlv(_CTX, False, 0, self.imsi)
        if self.lmsi:
            out += encode_tlv(_CTX, False, 1, self.lmsi)
        if self.service_centre_address_da:
            out += encode_tlv(_CTX, False, 4, self.service_centre_address_da)
        if self.no_sm_rp_da:
            out += encode_tlv(_CTX, False, 5, b"")
        return out

    @classmethod
    def decode_content(cls, data: bytes) -> "SMRPDA":
        """Decode the choice element(s) produced by ``encode_content``."""
        found = _decode_choice(bytes(data), (0, 1, 4, 5))
        return cls(found.get(0), found.get(1), found.get(4), 5 in found)

    def imsi_string(self) -> str:
        """Return the IMSI digits; ValueError if absent."""
        return decode_tbcd_digits(self.imsi)

    def service_centre_address_da_string(self) -> str:
        """Return the service centre address digits; ValueError if absent."""
        return _address_digits(self.service_centre_address_da)


@dataclass
class SMRPOA:
    """SM-RP-OA choice: MSISDN, service centre address or none."""

    msisdn: bytes | None = None
    service_centre_address_oa: bytes | None = None
    no_sm_rp_oa: bool = False

    def encode_content(self) -> bytes:
        """Return the encodings of the fields present, concatenated."""
        out = b""
        if self.msisdn:
            out += encode_tlv(_CTX, False, 2, self.msisdn)
        if self.service_centre_address_oa:
            out += encode_tlv(_CTX, False, 4, self.service_centre_address_oa)
        if self.no_sm_rp_oa:
            out += encode_tlv(_CTX, False, 5, b"")
        return out

    @classmethod
    def decode_content(cls, data: bytes) -> "SMRPOA":
        """Decode the choice element(s) produced by ``encode_content``."""
        found = _decode_choice(bytes(data), (2, 4, 5))
        return cls(found.get(2), found.get(4), 5 in found)

    def msisdn_string(self) -> str:
        """Return the MSISDN digits; ValueError if absent."""
        return _address_digits(self.msisdn)

    def service_centre_address_oa_string(self) -> str:
        """Return the service centre address digits; ValueError if absent."""
        return _address_digits(self.service_centre_address_oa)


def _decode_forward_sm(data: bytes) -> tuple[SMRPDA, SMRPOA, bytes, bytes, bytes]:
    content, rest = _open_sequence(data)
    if not content:
        raise BerError("sequence truncated before sm-RP-DA")
    da_tlv, content = decode_tlv(content)
    if not content:
        raise BerError("sequence truncated before sm-RP-OA")
    oa_tlv, content = decode_tlv(content)
    ui, content = _next(content, TagClass.UNIVERSAL, TAG_OCTET_STRING, False, "sm-RP-UI")
    da = SMRPDA.decode_content(da_tlv.encode())
    oa = SMRPOA.decode_content(oa_tlv.encode())
    return da, oa, ui, content, rest


@dataclass
class MTForwardSMArg:
    """MT-ForwardSM argument."""

    sm_rp_da: SMRPDA = field(default_factory=SMRPDA)
    sm_rp_oa: SMRPOA = field(default_factory=SMRPOA)
    sm_rp_ui: bytes = b""
    more_messages_to_send: bool = False

    def encode(self) -> bytes:
        """Return the DER encoding."""
        content = (
            self.sm_rp_da.encode_content()
            + self.sm_rp_oa.encode_content()
            + encode_tlv(TagClass.UNIVERSAL, False, TAG_OCTET_STRING, self.sm_rp_ui)
        )
        if self.more_messages_to_send:
            content += encode_tlv(TagClass.UNIVERSAL, False, TAG_NULL, b"")
        return _sequence(content)

    @classmethod
    def decode(cls, data: bytes) -> tuple["MTForwardSMArg", bytes]:
        """Decode from DER; return the value and the octets that follow."""
        da, oa, ui, content, rest = _decode_forward_sm(data)
        more = False
        if content:
            tlv, _ = decode_tlv(content)
            more = tlv.tag == TAG_NULL
        return cls(da, oa, ui, more), rest


@dataclass
class MOForwardSMArg:
    """MO-ForwardSM argument."""

    sm_rp_da: SMRPDA = field(default_factory=SMRPDA)
    sm_rp_oa: SMRPOA = field(default_factory=SMRPOA)
    sm_rp_ui: bytes = b""

    def encode(self) -> bytes:
        """Return the DER encoding."""
        return _sequence(
            self.sm_rp_da.encode_content()
            + self.sm_rp_oa.encode_content()
            + encode_tlv(TagClass.UNIVERSAL, False, TAG_OCTET_STRING, self.sm_rp_ui)
        )

    @classmethod
    def decode(cls, data: bytes) -> tuple["MOForwardSMArg", bytes]:
        """Decode from DER; return the value and the octets that follow."""
        da, oa, ui, _, rest = _decode_forward_sm(data)
        return cls(da, oa, ui), rest


__all__ = [
    "TAG_BOOLEAN",
    "RoutingInfoForSMArg",
    "LocationInfoWithLMSI",
    "RoutingInfoForSMRes",
    "SMRPDA",
    "SMRPOA",
    "MTForwardSMArg",
    "MOForwardSMArg",
]