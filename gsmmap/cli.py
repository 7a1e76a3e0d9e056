"""Command line front end: build MAP short-message operations and print them."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone

from .messages import MtFsm, SriSm, parse_sri_sm_resp
from .tpdu import (
    Deliver,
    NumberingPlanIdentification,
    Timestamp,
    TpAddress,
    TypeOfNumber,
)

DEFAULT_SRI_RESPONSE = "3015040882131068584836f3a0098107917394950862f6"

# Characters whose code in the GSM 7-bit default alphabet is known here.
_GSM7: dict[str, int] = {
    "@": 0x00,
    "$": 0x02,
    "\n": 0x0A,
    "\r": 0x0D,
    "_": 0x11,
    **{c: ord(c) for c in " !\"#%&'()*+,-./:;<=>?"},
    **{c: ord(c) for c in "0123456789"},
    **{c: ord(c) for c in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"},
    **{c: ord(c) for c in "abcdefghijklmnopqrstuvwxyz"},
}


def _pack_gsm7(text: str) -> bytes:
    """Pack text as GSM default-alphabet septets, least significant bit first."""
    packed = 0
    for position, char in enumerate(text):
        code = _GSM7.get(char)
        if code is None:
            raise ValueError(f"character not supported in GSM 7-bit text: {char!r}")
        packed |= code << (7 * position)
    return packed.to_bytes((len(text) * 7 + 7) // 8, "little")


def _parse_timestamp(value: str | None) -> datetime:
    if value is None:
        return datetime.now().astimezone()
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _run_sri_sm(args: argparse.Namespace) -> None:
    request = SriSm(
        msisdn=args.msisdn,
        sm_rp_pri=not args.no_priority,
        service_centre_address=args.service_centre,
    )
    print(f"SRI-for-SM: {request.marshal().hex()}")

    response, _ = parse_sri_sm_resp(bytes.fromhex(args.response))
    print(f"IMSI: {response.imsi}")
    print(f"MSC: {response.location_info_with_lmsi.network_node_number}")


def _run_mt_fsm(args: argparse.Namespace) -> None:
    deliver = Deliver(
        oa=TpAddress(
            digits=args.originator,
            ton=TypeOfNumber.INTERNATIONAL,
            npi=NumberingPlanIdentification.ISDN,
        ),
        pid=0x00,
        dcs=0x00,
        scts=Timestamp(_parse_timestamp(args.timestamp)),
        ud=_pack_gsm7(args.text),
        udl=len(args.text),
        mms=True,
    )
    request = MtFsm(
        imsi=args.imsi,
        service_centre_address_oa=args.service_centre,
        tpdu=deliver,
        more_messages_to_send=args.more_messages,
    )
    print(request.marshal().hex())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsmmap", description="Encode GSM MAP short-message operations."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    sri = commands.add_parser("sri-sm", help="encode an SRI-for-SM and decode a response")
    sri.add_argument("--msisdn", default="123456789")
    sri.add_argument("--service-centre", default="987654321")
    sri.add_argument("--no-priority", action="store_true", help="clear sm-RP-PRI")
    sri.add_argument(
        "--response", default=DEFAULT_SRI_RESPONSE, help="SRI-for-SM response as hex"
    )
    sri.set_defaults(run=_run_sri_sm)

    mt = commands.add_parser("mt-fsm", help="encode an MT-ForwardSM")
    mt.add_argument("--imsi", default="234100080813836")
    mt.add_argument("--service-centre", default="9613488888")
    mt.add_argument("--originator", default="96170111474")
    mt.add_argument("--text", default="Hello! This is a message")
    mt.add_argument("--timestamp", help="ISO 8601 service centre time stamp")
    mt.add_argument("--more-messages", action="store_true")
    mt.set_defaults(run=_run_mt_fsm)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = _build_parser().parse_args(argv)
    try:
        args.run(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())