"""SMS transfer-layer PDUs (3GPP TS 23.040): SMS-DELIVER and SMS-SUBMIT.

User data is held as the octets carried on the wire together with the
user data length field, so decoding and re-encoding is exact.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum, IntEnum

from .tbcd import decode_tbcd_digits, encode_tbcd_digits

_TIMESTAMP_LENGTH = 7
_VALIDITY_PERIOD_LENGTHS = {0: 0, 1: 7, 2: 1, 3: 7}


class TpduError(ValueError):
    """Raised for malformed or unsupported TPDUs."""


class Direction(Enum):
    """Direction a TPDU travels in, which decides how its type is read."""

    MT = "mobile-terminated"
    MO = "mobile-originated"


class TypeOfNumber(IntEnum):
    """Type of number held in an address's type-of-address octet."""

    UNKNOWN = 0
    INTERNATIONAL = 1
    NATIONAL = 2
    NETWORK_SPECIFIC = 3
    SUBSCRIBER = 4
    ALPHANUMERIC = 5
    ABBREVIATED = 6
    EXTENSION = 7


class NumberingPlanIdentification(IntEnum):
    """Numbering plan held in an address's type-of-address octet."""

    UNKNOWN = 0
    ISDN = 1
    DATA = 3
    TELEX = 4
    SC_SPECIFIC_1 = 5
    SC_SPECIFIC_2 = 6
    NATIONAL = 8
    PRIVATE = 9
    ERMES = 10
    EXTENSION = 15


def _enum_or_int(enum_cls: type[IntEnum], value: int) -> int:
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _need(data: bytes, count: int, what: str) -> None:
    if len(data) < count:
        raise TpduError(f"data truncated in {what}")


@dataclass
class TpAddress:
    """An originating or destination address.

    Numeric addresses keep their digits in ``digits``. Alphanumeric
    addresses keep their packed octets in ``packed`` and the number of
    useful semi-octets in ``semi_octets``.
    """

    digits: str = ""
    ton: int = TypeOfNumber.UNKNOWN
    npi: int = NumberingPlanIdentification.UNKNOWN
    packed: bytes = b""
    semi_octets: int | None = None

    def to_bytes(self) -> bytes:
        """Return the wire encoding: length, type of address, value."""
        toa = 0x80 | ((int(self.ton) & 0x07) << 4) | (int(self.npi) & 0x0F)
        if self.ton == TypeOfNumber.ALPHANUMERIC:
            count = self.semi_octets if self.semi_octets is not None else 2 * len(self.packed)
            if (count + 1) // 2 != len(self.packed) or count > 0xFF:
                raise TpduError("alphanumeric address length does not match its octets")
            return bytes([count, toa]) + bytes(self.packed)
        if len(self.digits) > 0xFF:
            raise TpduError("address too long")
        try:
            value = encode_tbcd_digits(self.digits)
        except ValueError as exc:
            raise TpduError(f"invalid address digits: {exc}") from exc
        return bytes([len(self.digits), toa]) + value


def decode_address(data: bytes) -> tuple[TpAddress, bytes]:
    """Decode an address at the start of ``data``; return it and the rest."""
    data = bytes(data)
    _need(data, 2, "address")
    count, toa = data[0], data[1]
    octets = (count + 1) // 2
    _need(data, 2 + octets, "address")
    value, rest = data[2 : 2 + octets], data[2 + octets :]
    ton = _enum_or_int(TypeOfNumber, (toa >> 4) & 0x07)
    npi = _enum_or_int(NumberingPlanIdentification, toa & 0x0F)
    if ton == TypeOfNumber.ALPHANUMERIC:
        return TpAddress(ton=ton, npi=npi, packed=value, semi_octets=count), rest
    digits = decode_tbcd_digits(value)
    if len(digits) < count:
        raise TpduError("address digits shorter than announced length")
    return TpAddress(digits=digits[:count], ton=ton, npi=npi), rest


def _swapped(number: int) -> int:
    return ((number % 10) << 4) | (number // 10)


def _unswapped(octet: int) -> int:
    tens, units = octet & 0x0F, octet >> 4
    if tens > 9 or units > 9:
        raise TpduError(f"invalid semi-octet value: {octet:#04x}")
    return tens * 10 + units


@dataclass
class Timestamp:
    """A service centre time stamp, second resolution, quarter-hour zone."""

    time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_bytes(self) -> bytes:
        """Return the seven semi-octet encoded octets."""
        t = self.time
        offset = t.utcoffset() or timedelta(0)
        quarters = int(offset.total_seconds()) // 900
        negative = quarters < 0
        quarters = abs(quarters)
        if quarters > 79:
            raise TpduError("time zone offset out of range")
        zone = ((quarters % 10) << 4) | (quarters // 10) | (0x08 if negative else 0)
        fields = (t.year % 100, t.month, t.day, t.hour, t.minute, t.second)
        return bytes(_swapped(value) for value in fields) + bytes([zone])


def decode_timestamp(data: bytes) -> Timestamp:
    """Decode exactly seven octets as a time stamp."""
    data = bytes(data)
    if len(data) != _TIMESTAMP_LENGTH:
        raise TpduError(f"time stamp must be {_TIMESTAMP_LENGTH} octets, got {len(data)}")
    year, month, day, hour, minute, second = (_unswapped(b) for b in data[:6])
    zone = data[6]
    quarters = (zone & 0x07) * 10 + (zone >> 4)
    if zone >> 4 > 9:
        raise TpduError(f"invalid time zone octet: {zone:#04x}")
    if zone & 0x08:
        quarters = -quarters
    try:
        tz = timezone(timedelta(minutes=15 * quarters))
        return Timestamp(datetime(2000 + year, month, day, hour, minute, second, tzinfo=tz))
    except ValueError as exc:
        raise TpduError(f"invalid time stamp: {exc}") from exc


def _is_septet_alphabet(dcs: int) -> bool:
    group = dcs >> 4
    if group <= 0x7:
        if dcs & 0x20:
            return False
        return ((dcs >> 2) & 0x03) not in (1, 2)
    if group in (0xC, 0xD):
        return True
    if group == 0xE:
        return False
    if group == 0xF:
        return not dcs & 0x04
    return True


def _ud_octets(dcs: int, udl: int) -> int:
    return (udl * 7 + 7) // 8 if _is_septet_alphabet(dcs) else udl


def _user_data_field(dcs: int, ud: bytes, udl: int | None) -> bytes:
    ud = bytes(ud)
    if udl is None:
        udl = len(ud) * 8 // 7 if _is_septet_alphabet(dcs) else len(ud)
    if not 0 <= udl <= 0xFF:
        raise TpduError(f"user data length out of range: {udl}")
    if _ud_octets(dcs, udl) != len(ud):
        raise TpduError("user data does not match user data length")
    return bytes([udl]) + ud


def _read_user_data(dcs: int, data: bytes) -> tuple[int, bytes]:
    _need(data, 1, "user data length")
    udl = data[0]
    octets = _ud_octets(dcs, udl)
    _need(data, 1 + octets, "user data")
    if len(data) > 1 + octets:
        raise TpduError("trailing data after user data")
    return udl, data[1 : 1 + octets]


@dataclass
class Deliver:
    """SMS-DELIVER. ``mms`` set means no more messages are waiting."""

    oa: TpAddress = field(default_factory=TpAddress)
    pid: int = 0
    dcs: int = 0
    scts: Timestamp = field(default_factory=Timestamp)
    ud: bytes = b""
    udl: int | None = None
    mms: bool = False
    loop_prevention: bool = False
    status_report_indication: bool = False
    udhi: bool = False
    reply_path: bool = False

    def marshal(self) -> bytes:
        """Return the TPDU octets."""
        first = (
            (self.mms << 2)
            | (self.loop_prevention << 3)
            | (self.status_report_indication << 5)
            | (self.udhi << 6)
            | (self.reply_path << 7)
        )
        return (
            bytes([first])
            + self.oa.to_bytes()
            + bytes([self.pid & 0xFF, self.dcs & 0xFF])
            + self.scts.to_bytes()
            + _user_data_field(self.dcs, self.ud, self.udl)
        )


@dataclass
class Submit:
    """SMS-SUBMIT. ``vp`` holds the validity period octets named by ``vpf``."""

    da: TpAddress = field(default_factory=TpAddress)
    mr: int = 0
    pid: int = 0
    dcs: int = 0
    vpf: int = 0
    vp: bytes = b""
    ud: bytes = b""
    udl: int | None = None
    reject_duplicates: bool = False
    status_report_request: bool = False
    udhi: bool = False
    reply_path: bool = False

    def marshal(self) -> bytes:
        """Return the TPDU octets."""
        if self.vpf not in _VALIDITY_PERIOD_LENGTHS:
            raise TpduError(f"invalid validity period format: {self.vpf}")
        if len(self.vp) != _VALIDITY_PERIOD_LENGTHS[self.vpf]:
            raise TpduError("validity period does not match its format")
        first = (
            0x01
            | (self.reject_duplicates << 2)
            | (self.vpf << 3)
            | (self.status_report_request << 5)
            | (self.udhi << 6)
            | (self.reply_path << 7)
        )
        return (
            bytes([first, self.mr & 0xFF])
            + self.da.to_bytes()
            + bytes([self.pid & 0xFF, self.dcs & 0xFF])
            + bytes(self.vp)
            + _user_data_field(self.dcs, self.ud, self.udl)
        )


def _unmarshal_deliver(data: bytes) -> Deliver:
    first = data[0]
    oa, rest = decode_address(data[1:])
    _need(rest, 2 + _TIMESTAMP_LENGTH, "deliver header")
    pid, dcs = rest[0], rest[1]
    scts = decode_timestamp(rest[2 : 2 + _TIMESTAMP_LENGTH])
    udl, ud = _read_user_data(dcs, rest[2 + _TIMESTAMP_LENGTH :])
    return Deliver(
        oa=oa,
        pid=pid,
        dcs=dcs,
        scts=scts,
        ud=ud,
        udl=udl,
        mms=bool(first & 0x04),
        loop_prevention=bool(first & 0x08),
        status_report_indication=bool(first & 0x20),
        udhi=bool(first & 0x40),
        reply_path=bool(first & 0x80),
    )


def _unmarshal_submit(data: bytes) -> Submit:
    first = data[0]
    _need(data, 2, "message reference")
    mr = data[1]
    da, rest = decode_address(data[2:])
    _need(rest, 2, "submit header")
    pid, dcs = rest[0], rest[1]
    vpf = (first >> 3) & 0x03
    vp_len = _VALIDITY_PERIOD_LENGTHS[vpf]
    _need(rest, 2 + vp_len, "validity period")
    vp = rest[2 : 2 + vp_len]
    udl, ud = _read_user_data(dcs, rest[2 + vp_len :])
    return Submit(
        da=da,
        mr=mr,
        pid=pid,
        dcs=dcs,
        vpf=vpf,
        vp=vp,
        ud=ud,
        udl=udl,
        reject_duplicates=bool(first & 0x04),
        status_report_request=bool(first & 0x20),
        udhi=bool(first & 0x40),
        reply_path=bool(first & 0x80),
    )


def unmarshal(data: bytes, direction: Direction) -> Deliver | Submit:
    """Decode a TPDU; MT yields a Deliver and MO a Submit."""
    data = bytes(data)
    _need(data, 1, "first octet")
    mti = data[0] & 0x03
    if direction is Direction.MT:
        if mti != 0:
            raise TpduError(f"unsupported mobile-terminated message type: {mti}")
        return _unmarshal_deliver(data)
    if direction is Direction.MO:
        if mti != 1:
            raise TpduError(f"unsupported mobile-originated message type: {mti}")
        return _unmarshal_submit(data)
    raise TpduError(f"unknown direction: {direction!r}")