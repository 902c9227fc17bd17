"""
ArtLink command-line interface.

Usage:
    artlink list [--json]
    artlink certificate <artwork-id>
    artlink pair <artwork-id> [--simulate-tag SERIAL] [--timeout SECONDS]
"""

import argparse
import asyncio
import json
import logging
import os
import sys

from artlink.config import ArtLinkConfig
from artlink.device import SimulatedNFCDevice
from artlink.exceptions import ArtLinkError, CapabilityError
from artlink.pairing import PairingPhase, PairingSession


class Colors:
    """ANSI color codes for terminal output."""

    OKBLUE = "\033[94m"
    OKGREEN = "\033[92m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"


def log_info(msg):
    print(f"{Colors.OKBLUE}ℹ {msg}{Colors.ENDC}", file=sys.stderr)


def log_success(msg):
    print(f"{Colors.OKGREEN}✓ {msg}{Colors.ENDC}", file=sys.stderr)


def log_error(msg):
    print(f"{Colors.FAIL}✗ {msg}{Colors.ENDC}", file=sys.stderr)


async def run_list(session: PairingSession, as_json: bool = False) -> int:
    """Print the catalog."""
    records = await session.load_catalog()
    if as_json:
        print(json.dumps([record.to_dict() for record in records], indent=2))
        return 0

    for record in records:
        print(f"{record.id}\t{record.title}\t{record.artist}\t{record.year}\t{record.status.value}")
    log_info(f"{len(records)} artworks")
    return 0


async def run_certificate(session: PairingSession, artwork_id: str) -> int:
    """Print the certificate URL for one artwork."""
    await session.load_catalog()
    state = await session.select(artwork_id)
    if state.phase is PairingPhase.ERROR:
        log_error(state.error_message)
        return 1
    print(state.certificate_url)
    return 0


async def run_pair(
    session: PairingSession,
    artwork_id: str,
    simulate_tag: str | None = None,
    timeout: float | None = None,
) -> int:
    """Run one pairing attempt; exit code 0 on Success, 1 on Error."""
    await session.load_catalog()
    state = await session.select(artwork_id)
    if state.phase is PairingPhase.ERROR:
        log_error(state.error_message)
        return 1
    log_info(f"Certificate: {state.certificate_url}")

    try:
        await session.start_scan()
    except CapabilityError as e:
        log_error(f"Cannot scan: {e}")
        return 1

    if simulate_tag and isinstance(session.device, SimulatedNFCDevice):
        session.device.present_tag(simulate_tag)
    else:
        log_info("Hold a tag to the reader...")

    try:
        state = await session.wait_until_settled(timeout)
    except TimeoutError:
        await session.reset()
        log_error(f"No tag written within {timeout}s")
        return 1

    if state.phase is PairingPhase.SUCCESS:
        log_success(f"Tag paired with {artwork_id}")
        return 0

    log_error(state.error_message)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="artlink",
        description="Browse the certificate catalog and pair NFC tags with artworks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  artlink list --json
  artlink certificate study-no-4-2019
  artlink pair study-no-4-2019 --simulate-tag 04a224b2c3
        """,
    )
    parser.add_argument(
        "--base-url",
        help="Upstream base URL (default: ARTLINK_BASE_URL or the storefront proxy)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List catalog artworks")
    list_parser.add_argument("--json", action="store_true", help="Print records as JSON")

    cert_parser = subparsers.add_parser("certificate", help="Print an artwork's certificate URL")
    cert_parser.add_argument("artwork_id")

    pair_parser = subparsers.add_parser("pair", help="Write an artwork's certificate URL to a tag")
    pair_parser.add_argument("artwork_id")
    pair_parser.add_argument(
        "--simulate-tag",
        metavar="SERIAL",
        help="Use the simulated device and present a tag with this serial",
    )
    pair_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for a tag (default: wait until interrupted)",
    )

    return parser


async def run(args: argparse.Namespace, config: ArtLinkConfig) -> int:
    device = None
    if getattr(args, "simulate_tag", None):
        device = SimulatedNFCDevice()

    async with PairingSession.from_config(config, device=device) as session:
        if args.command == "list":
            return await run_list(session, as_json=args.json)
        if args.command == "certificate":
            return await run_certificate(session, args.artwork_id)
        return await run_pair(session, args.artwork_id, args.simulate_tag, args.timeout)


def main(argv: list[str] | None = None) -> int:
    """Main execution function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    overrides = {} if args.base_url is None else {"ARTLINK_BASE_URL": args.base_url}
    try:
        config = ArtLinkConfig.from_env({**os.environ, **overrides})
    except ValueError as e:
        log_error(f"Invalid configuration: {e}")
        return 2

    try:
        return asyncio.run(run(args, config))
    except ArtLinkError as e:
        log_error(str(e))
        return 1
    except KeyboardInterrupt:
        log_error("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
