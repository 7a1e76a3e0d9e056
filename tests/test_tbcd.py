import pytest

from gsmmap.tbcd import decode_tbcd_digits, encode_tbcd_digits

IMSI_STR = "123451234567890"
IMSI_BYTES = bytes([0x21, 0x43, 0x15, 0x32, 0x54, 0x76, 0x98, 0xF0])


def test_encode_imsi():
    assert encode_tbcd_digits(IMSI_STR) == IMSI_BYTES


def test_decode_imsi():
    assert decode_tbcd_digits(IMSI_BYTES) == IMSI_STR


@pytest.mark.parametrize(
    "digits", ["", "1", "12", "123456789", "96170111474", "234100080813836"]
)
def test_round_trip(digits):
    assert decode_tbcd_digits(encode_tbcd_digits(digits)) == digits


def test_odd_length_pads_with_filler():
    encoded = encode_tbcd_digits("123")
    assert len(encoded) == 2
    assert encoded[-1] >> 4 == 0xF


def test_even_length_has_no_filler():
    encoded = encode_tbcd_digits("1234")
    assert len(encoded) == 2
    assert decode_tbcd_digits(encoded) == "1234"


def test_uppercase_hex_accepted_and_decoded_lowercase():
    assert decode_tbcd_digits(encode_tbcd_digits("AB12")) == "ab12"


def test_empty_bytes_decode_to_empty_string():
    assert decode_tbcd_digits(b"") == ""


@pytest.mark.parametrize("bad", ["12x4", "+123", "12 34", "é1"])
def test_invalid_character_rejected(bad):
    with pytest.raises(ValueError, match="invalid character"):
        encode_tbcd_digits(bad)


def test_decode_none_rejected():
    with pytest.raises(ValueError, match="nil"):
        decode_tbcd_digits(None)