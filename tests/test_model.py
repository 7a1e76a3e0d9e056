import pytest

from gsmmap.address import EXTENSION_NO, AddressNature, NumberingPlan, encode_address_string
from gsmmap.ber import BerError, TagClass, encode_tlv
from gsmmap.model import (
    SMRPDA,
    LocationInfoWithLMSI,
    MOForwardSMArg,
    MTForwardSMArg,
    RoutingInfoForSMArg,
    RoutingInfoForSMRes,
    SMRPOA,
)
from gsmmap.tbcd import encode_tbcd_digits

SRI_SM = bytes.fromhex("301380069122608538188101ff8206912260909899")
SRI_SM_RESP = bytes.fromhex("3015040882131068584836f3a0098107917394950862f6")
MT_FSM = bytes.fromhex(
    "3077800832140080803138f684069169318488880463040b916971101174f40000422182612464805bd2e2"
    "b1252d467ff6de6c47efd96eb6a1d056cb0d69b49a10269c098537586e96931965b260d15613da72c29b91"
    "261bde72c6a1ad2623d682b5996d58331271375a0d1733eee4bd98ec768bd966b41c0d"
)
MO_FSM = bytes.fromhex(
    "302d84069122609098998206912260539128041b01510a912260716622000011d972180d4a82eee13928cc7ebbcb20"
)


def _address(digits):
    return encode_address_string(
        EXTENSION_NO, AddressNature.INTERNATIONAL, NumberingPlan.ISDN, encode_tbcd_digits(digits)
    )


def test_routing_info_arg_round_trip():
    arg, rest = RoutingInfoForSMArg.decode(SRI_SM + b"\x01")
    assert rest == b"\x01"
    assert arg.sm_rp_pri is True
    assert arg.encode() == SRI_SM


def test_routing_info_arg_strings():
    arg = RoutingInfoForSMArg(_address("9613488888"), False, _address("96170111474"))
    decoded, _ = RoutingInfoForSMArg.decode(arg.encode())
    assert decoded.msisdn_string() == "9613488888"
    assert decoded.service_centre_address_string() == "96170111474"
    assert decoded.sm_rp_pri is False


def test_routing_info_res_round_trip():
    res, rest = RoutingInfoForSMRes.decode(SRI_SM_RESP)
    assert rest == b""
    assert res.encode() == SRI_SM_RESP


def test_routing_info_res_strings():
    res = RoutingInfoForSMRes(
        encode_tbcd_digits("234100080813836"), LocationInfoWithLMSI(_address("9613488888"))
    )
    decoded, _ = RoutingInfoForSMRes.decode(res.encode())
    assert decoded.imsi_string() == "234100080813836"
    assert decoded.network_node_number_string() == "9613488888"


def test_mt_forward_sm_decode():
    arg, rest = MTForwardSMArg.decode(MT_FSM)
    assert rest == b""
    assert arg.sm_rp_da.imsi_string() == "234100080813836"
    assert arg.sm_rp_oa.service_centre_address_oa_string() == "9613488888"
    assert arg.more_messages_to_send is False
    assert arg.encode() == MT_FSM


def test_mt_forward_sm_more_messages_round_trip():
    arg = MTForwardSMArg(
        SMRPDA(imsi=encode_tbcd_digits("234100080813836")),
        SMRPOA(service_centre_address_oa=_address("9613488888")),
        b"\x04",
        True,
    )
    encoded = arg.encode()
    assert encoded.endswith(b"\x05\x00")
    decoded, _ = MTForwardSMArg.decode(encoded)
    assert decoded == arg


def test_mo_forward_sm_round_trip():
    arg, rest = MOForwardSMArg.decode(MO_FSM)
    assert rest == b""
    assert arg.sm_rp_da.service_centre_address_da is not None
    assert arg.sm_rp_oa.msisdn is not None
    assert arg.encode() == MO_FSM


def test_mo_forward_sm_rejects_sri_bytes():
    with pytest.raises(BerError):
        MOForwardSMArg.decode(SRI_SM)


def test_absent_choice_fields_raise():
    with pytest.raises(ValueError):
        SMRPDA().imsi_string()
    with pytest.raises(ValueError):
        SMRPOA().msisdn_string()


def test_invalid_boolean_raises():
    content = (
        encode_tlv(TagClass.CONTEXT_SPECIFIC, False, 0, b"")
        + encode_tlv(TagClass.CONTEXT_SPECIFIC, False, 1, b"\x01")
        + encode_tlv(TagClass.CONTEXT_SPECIFIC, False, 2, b"")
    )
    with pytest.raises(BerError):
        RoutingInfoForSMArg.decode(encode_tlv(TagClass.UNIVERSAL, True, 16, content))


def test_wrong_outer_tag_raises():
    with pytest.raises(BerError):
        RoutingInfoForSMArg.decode(b"\x04\x00")