"""MAP short-message operations: SRI-for-SM, MT-ForwardSM and MO-ForwardSM.

Each message marshals to a complete DER information element and can be
parsed back from one. Addresses are held as plain digit strings; on the
wire they are international ISDN address strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .address import EXTENSION_NO, AddressNature, NumberingPlan, encode_address_string
from .model import (
    SMRPDA,
    SMRPOA,
    MOForwardSMArg,
    MTForwardSMArg,
    RoutingInfoForSMArg,
    RoutingInfoForSMRes,
)
from .model import LocationInfoWithLMSI as _WireLocationInfo
from .tbcd import encode_tbcd_digits
from .tpdu import Deliver, Direction, Submit, unmarshal


class GsmMapError(ValueError):
    """Raised when a MAP message cannot be marshalled or parsed."""


def _tbcd(digits: str, what: str) -> bytes:
    try:
        return encode_tbcd_digits(digits)
    except ValueError as exc:
        raise GsmMapError(f"failed to encode {what}: {exc}") from exc


def _isdn_address(digits: str, what: str) -> bytes:
    return encode_address_string(
        EXTENSION_NO,
        AddressNature.INTERNATIONAL,
        NumberingPlan.ISDN,
        _tbcd(digits, what),
    )


def _marshal_tpdu(tpdu: Deliver | Submit, what: str) -> bytes:
    try:
        return tpdu.marshal()
    except ValueError as exc:
        raise GsmMapError(f"failed to marshal {what} TPDU: {exc}") from exc


def _digits(getter, what: str) -> str:
    try:
        return getter()
    except ValueError as exc:
        raise GsmMapError(f"failed to decode {what}: {exc}") from exc


@dataclass
class SriSm:
    """SendRoutingInfoForSM request."""

    msisdn: str = ""
    sm_rp_pri: bool = False
    service_centre_address: str = ""

    def marshal(self) -> bytes:
        """Return the DER-encoded RoutingInfoForSM-Arg."""
        arg = RoutingInfoForSMArg(
            msisdn=_isdn_address(self.msisdn, "MSISDN"),
            sm_rp_pri=self.sm_rp_pri,
            service_centre_address=_isdn_address(
                self.service_centre_address, "ServiceCentreAddress"
            ),
        )
        return arg.encode()


@dataclass
class LocationInfoWithLMSI:
    """Serving node location: the network node number digits."""

    network_node_number: str = ""


@dataclass
class SriSmResp:
    """SendRoutingInfoForSM response."""

    imsi: str = ""
    location_info_with_lmsi: LocationInfoWithLMSI = field(default_factory=LocationInfoWithLMSI)

    def marshal(self) -> bytes:
        """Return the DER-encoded RoutingInfoForSM-Res."""
        res = RoutingInfoForSMRes(
            imsi=_tbcd(self.imsi, "IMSI"),
            location_info_with_lmsi=_WireLocationInfo(
                _isdn_address(
                    self.location_info_with_lmsi.network_node_number, "NetworkNodeNumber"
                )
            ),
        )
        return res.encode()


@dataclass
class MtFsm:
    """MT-ForwardSM request carrying an SMS-DELIVER."""

    imsi: str = ""
    service_centre_address_oa: str = ""
    tpdu: Deliver = field(default_factory=Deliver)
    more_messages_to_send: bool = False

    def marshal(self) -> bytes:
        """Return the DER-encoded MT-ForwardSM-Arg."""
        imsi = _tbcd(self.imsi, "IMSI")
        sca = _isdn_address(self.service_centre_address_oa, "ServiceCentreAddressOA")
        arg = MTForwardSMArg(
            sm_rp_da=SMRPDA(imsi=imsi),
            sm_rp_oa=SMRPOA(service_centre_address_oa=sca),
            sm_rp_ui=_marshal_tpdu(self.tpdu, "MtFsm"),
            more_messages_to_send=self.more_messages_to_send,
        )
        return arg.encode()


@dataclass
class MoFsm:
    """MO-ForwardSM request carrying an SMS-SUBMIT."""

    service_centre_address_da: str = ""
    msisdn: str = ""
    tpdu: Submit = field(default_factory=Submit)

    def marshal(self) -> bytes:
        """Return the DER-encoded MO-ForwardSM-Arg."""
        sca = _isdn_address(self.service_centre_address_da, "ServiceCentreAddressDA")
        msisdn = _isdn_address(self.msisdn, "MSISDN")
        arg = MOForwardSMArg(
            sm_rp_da=SMRPDA(service_centre_address_da=sca),
            sm_rp_oa=SMRPOA(msisdn=msisdn),
            sm_rp_ui=_marshal_tpdu(self.tpdu, "MoFsm"),
        )
        return arg.encode()


def parse_sri_sm(data_ie: bytes) -> tuple[SriSm, bytes]:
    """Parse a RoutingInfoForSM-Arg; return it and the octets that follow."""
    try:
        arg, rest = RoutingInfoForSMArg.decode(data_ie)
    except ValueError as exc:
        raise GsmMapError(f"failed to decode ASN.1 RoutingInfoForSM-Arg: {exc}") from exc
    sri_sm = SriSm(
        msisdn=_digits(arg.msisdn_string, "MSISDN"),
        sm_rp_pri=arg.sm_rp_pri,
        service_centre_address=_digits(
            arg.service_centre_address_string, "ServiceCentreAddress"
        ),
    )
    return sri_sm, rest


def parse_sri_sm_resp(data_ie: bytes) -> tuple[SriSmResp, bytes]:
    """Parse a RoutingInfoForSM-Res; return it and the octets that follow."""
    try:
        res, rest = RoutingInfoForSMRes.decode(data_ie)
    except ValueError as exc:
        raise GsmMapError(f"failed to decode ASN.1 RoutingInfoForSM-Res: {exc}") from exc
    resp = SriSmResp(
        imsi=_digits(res.imsi_string, "IMSI"),
        location_info_with_lmsi=LocationInfoWithLMSI(
            _digits(res.network_node_number_string, "NetworkNodeNumber")
        ),
    )
    return resp, rest


def parse_mt_fsm(data_ie: bytes) -> tuple[MtFsm, bytes]:
    """Parse an MT-ForwardSM-Arg; return it and the octets that follow."""
    try:
        arg, rest = MTForwardSMArg.decode(data_ie)
    except ValueError as exc:
        raise GsmMapError(f"failed to decode ASN.1 MT-ForwardSM-Arg: {exc}") from exc
    imsi = _digits(arg.sm_rp_da.imsi_string, "IMSI")
    sca = _digits(arg.sm_rp_oa.service_centre_address_oa_string, "ServiceCentreAddressOA")
    try:
        deliver = unmarshal(arg.sm_rp_ui, Direction.MT)
    except ValueError as exc:
        raise GsmMapError(f"failed to unmarshal TPDU: {exc}") from exc
    mt_fsm = MtFsm(
        imsi=imsi,
        service_centre_address_oa=sca,
        tpdu=deliver,
        more_messages_to_send=arg.more_messages_to_send,
    )
    return mt_fsm, rest


def parse_mo_fsm(data_ie: bytes) -> tuple[MoFsm, bytes]:
    """Parse an MO-ForwardSM-Arg; return it and the octets that follow."""
    try:
        arg, rest = MOForwardSMArg.decode(data_ie)
    except ValueError as exc:
        raise GsmMapError(f"failed to decode ASN.1 MO-ForwardSM-Arg: {exc}") from exc
    sca = _digits(arg.sm_rp_da.service_centre_address_da_string, "ServiceCentreAddressDA")
    msisdn = _digits(arg.sm_rp_oa.msisdn_string, "MSISDN")
    try:
        submit = unmarshal(arg.sm_rp_ui, Direction.MO)
    except ValueError as exc:
        raise GsmMapError(f"failed to unmarshal TPDU: {exc}") from exc
    return MoFsm(service_centre_address_da=sca, msisdn=msisdn, tpdu=submit), rest