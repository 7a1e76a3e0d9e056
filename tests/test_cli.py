from gsmmap.cli import DEFAULT_SRI_RESPONSE, main
from gsmmap.messages import (
    LocationInfoWithLMSI,
    SriSmResp,
    parse_mt_fsm,
    parse_sri_sm,
    parse_sri_sm_resp,
)

FIXED_TIME = "2024-03-01T12:30:45+00:00"


def _lines(capsys):
    return capsys.readouterr().out.strip().splitlines()


def test_sri_sm_default_round_trips(capsys):
    assert main(["sri-sm"]) == 0
    lines = _lines(capsys)
    assert lines[0].startswith("SRI-for-SM: ")
    request, rest = parse_sri_sm(bytes.fromhex(lines[0].split(": ")[1]))
    assert request.msisdn == "123456789"
    assert request.service_centre_address == "987654321"
    assert request.sm_rp_pri is True
    assert rest == b""


def test_sri_sm_default_response_fields(capsys):
    assert main(["sri-sm"]) == 0
    lines = _lines(capsys)
    expected, _ = parse_sri_sm_resp(bytes.fromhex(DEFAULT_SRI_RESPONSE))
    assert lines[1] == f"IMSI: {expected.imsi}"
    assert lines[2] == f"MSC: {expected.location_info_with_lmsi.network_node_number}"


def test_sri_sm_custom_response(capsys):
    response = SriSmResp("123456789012345", LocationInfoWithLMSI("12345")).marshal()
    assert main(["sri-sm", "--response", response.hex(), "--no-priority"]) == 0
    lines = _lines(capsys)
    assert lines[1:] == ["IMSI: 123456789012345", "MSC: 12345"]
    request, _ = parse_sri_sm(bytes.fromhex(lines[0].split(": ")[1]))
    assert request.sm_rp_pri is False


def test_sri_sm_invalid_msisdn_fails(capsys):
    assert main(["sri-sm", "--msisdn", "12x4"]) == 1
    assert "MSISDN" in capsys.readouterr().err


def test_sri_sm_invalid_response_hex_fails(capsys):
    assert main(["sri-sm", "--response", "zz"]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_mt_fsm_default_round_trips(capsys):
    assert main(["mt-fsm", "--timestamp", FIXED_TIME]) == 0
    data = bytes.fromhex(_lines(capsys)[0])
    mt_fsm, rest = parse_mt_fsm(data)
    assert rest == b""
    assert mt_fsm.imsi == "234100080813836"
    assert mt_fsm.service_centre_address_oa == "9613488888"
    assert mt_fsm.more_messages_to_send is False
    assert mt_fsm.tpdu.oa.digits == "96170111474"
    assert mt_fsm.tpdu.mms is True
    assert mt_fsm.tpdu.udl == len("Hello! This is a message")
    assert mt_fsm.marshal() == data


def test_mt_fsm_timestamp_is_kept(capsys):
    assert main(["mt-fsm", "--timestamp", FIXED_TIME, "--more-messages"]) == 0
    mt_fsm, _ = parse_mt_fsm(bytes.fromhex(_lines(capsys)[0]))
    assert mt_fsm.tpdu.scts.time.isoformat() == FIXED_TIME
    assert mt_fsm.more_messages_to_send is True


def test_mt_fsm_is_deterministic_with_fixed_time(capsys):
    assert main(["mt-fsm", "--timestamp", FIXED_TIME, "--text", "Hi @ $5_x"]) == 0
    first = _lines(capsys)[0]
    assert main(["mt-fsm", "--timestamp", FIXED_TIME, "--text", "Hi @ $5_x"]) == 0
    assert _lines(capsys)[0] == first


def test_mt_fsm_unsupported_character_fails(capsys):
    assert main(["mt-fsm", "--text", "caf\u00e9"]) == 1
    assert "not supported" in capsys.readouterr().err


def test_mt_fsm_invalid_imsi_fails(capsys):
    assert main(["mt-fsm", "--imsi", "23410x"]) == 1
    assert "IMSI" in capsys.readouterr().err