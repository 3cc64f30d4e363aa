"""
Receipt signer command line.

Usage::

    python -m receipt_signer address
    python -m receipt_signer --signing-key 0x4c08... sign "hello world"
    python -m receipt_signer verify "hello world" 1b2c... --address 0x2c75...

Options:
    --signing-key   Hex private key (default: $SIGNING_KEY, else a random key)
    -v, --verbose   Enable debug logging
    --no-color      Disable colored logging output
"""

from __future__ import annotations

import argparse
import logging
import sys

from receipt_signer.api.errors import error_status_and_body
from receipt_signer.config import SIGNING_KEY_ENV, SignerConfig
from receipt_signer.exceptions import KeyFormatError, VerificationError
from receipt_signer.keystore import KeyStore
from receipt_signer.signing import SigningService
from receipt_signer.verification import VerificationService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VERIFICATION_FAILED = 1
EXIT_BAD_KEY = 2


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure stderr logging with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter: logging.Formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="receipt_signer",
        description="Sign and verify messages with the service signing key",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--signing-key",
        default=None,
        help=f"Hex private key, with or without 0x (default: ${SIGNING_KEY_ENV})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("address", help="Print the checksum address of the signing key")

    sign = commands.add_parser("sign", help="Sign a message")
    sign.add_argument("message", help="Message text, signed as UTF-8")

    verify = commands.add_parser("verify", help="Verify a signature")
    verify.add_argument("message", help="Message text, as it was signed")
    verify.add_argument("signature", help="130 hex digits (r || s || v)")
    verify.add_argument(
        "--address",
        default=None,
        help="Expected signer address (default: the signing key's own address)",
    )

    return parser


def run(args: argparse.Namespace, config: SignerConfig) -> int:
    """Execute a parsed command. Returns the process exit code."""
    try:
        keystore = KeyStore.from_config(config.with_signing_key(args.signing_key))
    except KeyFormatError as e:
        logger.error("Refusing to start: %s", e)
        return EXIT_BAD_KEY

    if args.command == "address":
        print(keystore.address())
        return EXIT_OK

    if args.command == "sign":
        print(SigningService(keystore).sign_hex(args.message))
        return EXIT_OK

    verifier = VerificationService(keystore)
    try:
        verifier.verify(args.message, args.signature, args.address)
    except VerificationError as e:
        logger.debug("Verification failed: %s", e)
        _, body = error_status_and_body(e)
        print(body["error"], file=sys.stderr)
        return EXIT_VERIFICATION_FAILED
    except ValueError as e:
        # Malformed --address.
        print(f"invalid address: {e}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    print("valid")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.no_color)
    return run(args, SignerConfig.from_env())


if __name__ == "__main__":
    sys.exit(main())
