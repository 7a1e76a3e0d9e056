# gsmmap

Encode and decode the GSM MAP operations used to deliver short messages:

- **SRI-for-SM** request and response (`RoutingInfoForSM-Arg` / `-Res`)
- **MT-ForwardSM**, which carries an SMS-DELIVER TPDU
- **MO-ForwardSM**, which carries an SMS-SUBMIT TPDU

Each message is written as one ASN.1 DER element, ready to go into a TCAP
component, and such elements are parsed back into plain dataclasses.
Addresses are handled as digit strings. On the wire they are international
ISDN address strings in TBCD.

The package has no runtime dependencies and needs Python 3.10 or later.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

### SRI-for-SM

```python
from gsmmap.messages import SriSm, parse_sri_sm_resp

request = SriSm(
    msisdn="123456789",
    sm_rp_pri=True,
    service_centre_address="987654321",
)
print(request.marshal().hex())

response, rest = parse_sri_sm_resp(
    bytes.fromhex("3015040882131068584836f3a0098107917394950862f6")
)
print(response.imsi)                                        # 2831018685846334
print(response.location_info_with_lmsi.network_node_number)  # 37495980266
```

### MT-ForwardSM

```python
from datetime import datetime, timezone

from gsmmap.messages import MtFsm, parse_mt_fsm
from gsmmap.tpdu import (
    Deliver,
    NumberingPlanIdentification,
    Timestamp,
    TpAddress,
    TypeOfNumber,
)

deliver = Deliver(
    oa=TpAddress(
        digits="15550100",
        ton=TypeOfNumber.INTERNATIONAL,
        npi=NumberingPlanIdentification.ISDN,
    ),
    dcs=0x04,                      # 8-bit data: udl counts octets
    scts=Timestamp(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)),
    ud=b"hello",
    mms=True,
)
mt = MtFsm(
    imsi="001010123456789",
    service_centre_address_oa="15550199",
    tpdu=deliver,
)
data = mt.marshal()
parsed, rest = parse_mt_fsm(data)
assert parsed.marshal() == data
```

`MoFsm` works the same way with a `Submit` TPDU, a
`service_centre_address_da` and an `msisdn`. `parse_mo_fsm` reads it back.

### Parsing and errors

`parse_sri_sm`, `parse_sri_sm_resp`, `parse_mt_fsm` and `parse_mo_fsm` each
return a pair: the parsed message and the bytes that follow the element.
Malformed input raises `GsmMapError`. An address holding something other than
hex digits also raises `GsmMapError` when it is marshalled. `GsmMapError` is a
subclass of `ValueError`.

A parsed TPDU keeps the exact user data octets and the user data length.
Decoding a message and encoding it again therefore gives back the original
bytes.

### Building blocks

- `gsmmap.tbcd`: `encode_tbcd_digits` and `decode_tbcd_digits`. These handle
  nibble-swapped digits with an `f` filler for odd lengths. Decoding gives
  lower-case digits.
- `gsmmap.address`: `encode_address_string` and `decode_address_string`
  (which returns a `DecodedAddress`). The header octet is built from
  `EXTENSION_NO`, `AddressNature` and `NumberingPlan`.
- `gsmmap.ber`: a minimal DER tag-length-value layer. It provides `Tlv`,
  `TagClass`, `encode_tlv`, `decode_tlv` and `BerError`. Lengths must be
  definite and minimal.
- `gsmmap.tpdu`: SMS-DELIVER (`Deliver`) and SMS-SUBMIT (`Submit`), with
  `TpAddress`, `Timestamp` and `unmarshal(data, Direction.MT | Direction.MO)`.
  Malformed TPDUs raise `TpduError`.
- `gsmmap.model`: the ASN.1 structures themselves. These are
  `RoutingInfoForSMArg`, `RoutingInfoForSMRes`, `LocationInfoWithLMSI`,
  `SMRPDA`, `SMRPOA`, `MTForwardSMArg` and `MOForwardSMArg`, each with
  `encode`/`decode` or `encode_content`/`decode_content`.

## Command line

The `gsmmap` command has two subcommands.

```
gsmmap sri-sm [--msisdn DIGITS] [--service-centre DIGITS] [--no-priority] [--response HEX]
```

This command encodes an SRI-for-SM request and prints it in hex. It then
decodes the SRI-for-SM response given in hex and prints its IMSI and MSC
number. `sm-RP-PRI` is set unless `--no-priority` is given. If no response is
given, a built-in sample is used.

```
gsmmap mt-fsm [--imsi DIGITS] [--service-centre DIGITS] [--originator DIGITS]
              [--text TEXT] [--timestamp ISO8601] [--more-messages]
```

This command encodes an MT-ForwardSM and prints it in hex. The message is an
SMS-DELIVER in the GSM 7-bit alphabet from an international ISDN originator.
`--text` accepts letters, digits, space, newline and common punctuation.
Without `--timestamp` the current local time is used. A time stamp without a
zone is taken as UTC.

Both commands exit with status 1 and print `error: ...` to standard error
when the input cannot be encoded or decoded.

## What it does not do

- The package only builds and parses the operation parameters. It does not
  wrap them in TCAP, SCCP or any transport, and it opens no connections.
- It does not provide MAP operation codes, MAP error code names, or error
  diagnostic values.
- Only the mandatory fields of each operation are modelled. Extension
  containers, LMSI in the SRI-for-SM response and other optional elements
  are not carried.