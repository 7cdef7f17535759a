"""Command line entry point: ``gpsfix parse|rmc|xor|serve``."""

import argparse
import logging
import sys

from gpsfix.fix.state import FixState
from gpsfix.nmea.checksum import calc_xor_checksum, format_checksum
from gpsfix.nmea.rmc import format_rmc

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _with_marker(sentence: str) -> str:
    sentence = sentence.strip()
    return sentence if sentence.startswith("$") else "$" + sentence


def _decode(sentences: list[str], ignore_checksum: bool) -> tuple[FixState, bool]:
    fix = FixState()
    ok = fix.parse([_with_marker(sentence) for sentence in sentences], ignore_checksum)
    return fix, ok


def _run_parse(args: argparse.Namespace) -> int:
    fix, ok = _decode(args.sentences, args.ignore_checksum)
    print(fix.describe())
    return 0 if ok else 1


def _run_rmc(args: argparse.Namespace) -> int:
    fix, ok = _decode(args.sentences, args.ignore_checksum)
    print(format_rmc(fix))
    return 0 if ok else 1


def _run_xor(args: argparse.Namespace) -> int:
    print(format_checksum(calc_xor_checksum(args.text, include_all=True)))
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    logger.info("Serving on %s:%d", args.host, args.port)
    uvicorn.run("server.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gpsfix", description="NMEA 0183 GPS sentence decoder")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log decoding details")
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="Decode sentences and print the merged fix")
    parse_cmd.add_argument("sentences", nargs="+", help="Sentence, '$' optional (repeatable)")
    parse_cmd.add_argument("--ignore-checksum", action="store_true", help="Accept bad checksums")
    parse_cmd.set_defaults(handler=_run_parse)

    rmc_cmd = commands.add_parser("rmc", help="Decode sentences and print the fix as $GPRMC")
    rmc_cmd.add_argument("sentences", nargs="+", help="Sentence, '$' optional (repeatable)")
    rmc_cmd.add_argument("--ignore-checksum", action="store_true", help="Accept bad checksums")
    rmc_cmd.set_defaults(handler=_run_rmc)

    xor_cmd = commands.add_parser("xor", help="Print the XOR checksum of every byte of TEXT")
    xor_cmd.add_argument("text")
    xor_cmd.set_defaults(handler=_run_xor)

    serve_cmd = commands.add_parser("serve", help="Run the HTTP/WebSocket decode service")
    serve_cmd.add_argument("--host", default=DEFAULT_HOST, help="Bind address")
    serve_cmd.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port")
    serve_cmd.set_defaults(handler=_run_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
