#!/usr/bin/env python3
"""
Send money through the Dwolla API (UAT host by default)
"""
import sys
import asyncio
import argparse
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dwift import DestinationType, DwollaApiV2, SendRequest, load_client_config
from dwift.integrations.clients.mocks import MockDwollaServer
from dwift.integrations.contracts.keys import ErrorMessages

HINTS = {
    ErrorMessages.INVALID_ACCESS_TOKEN: "Check DWOLLA_TOKEN (or token in the config file).",
    ErrorMessages.INVALID_ACCOUNT_PIN: "Check DWOLLA_PIN or pass --pin.",
    ErrorMessages.INSUFFICIENT_BALANCE: "Fund the account or send a smaller amount.",
}


def parse_amount(raw: str) -> Decimal:
    """argparse type for amounts; bad input exits with code 2"""
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {raw!r}")


def setup_logging(verbose: bool = False):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


async def run(args: argparse.Namespace) -> int:
    if args.mock:
        server = MockDwollaServer()
        api = DwollaApiV2(token=server.token, client=server.json_client())
        pin: Optional[str] = args.pin or server.pin
    else:
        config = load_client_config(args.config)
        api = DwollaApiV2.from_config(config)
        pin = args.pin or config.pin

    if not pin:
        print("A PIN is required (--pin, DWOLLA_PIN or config file).", file=sys.stderr)
        return 2

    request = SendRequest(
        destination_id=args.destination_id,
        pin=pin,
        amount=args.amount,
        destination_type=DestinationType(args.destination_type) if args.destination_type else None,
        notes=args.notes,
    )
    response = await api.send(request)

    if response.success:
        print(f"Sent {response.payload} to {args.destination_id}: {response.message}")
        return 0

    print(f"Send failed: {response.message}", file=sys.stderr)
    hint = HINTS.get(response.message)
    if hint:
        print(hint, file=sys.stderr)
    return 1


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Send money with the Dwolla v1 REST API',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Send one cent on UAT using DWOLLA_TOKEN / DWOLLA_PIN from the environment
  python scripts/run_send.py 812-741-6790 0.01

  # Try the flow against the in-process mock server
  python scripts/run_send.py 812-741-6790 0.01 --mock
        """
    )
    parser.add_argument('destination_id', help='Dwolla ID, email or phone of the recipient')
    parser.add_argument('amount', type=parse_amount, help='Amount to send, e.g. 0.01')
    parser.add_argument('--pin', default=None, help='Account PIN (overrides config)')
    parser.add_argument(
        '--destination-type',
        choices=[t.value for t in DestinationType],
        default=None,
        help='Kind of destination id'
    )
    parser.add_argument('--notes', default=None, help='Transaction notes')
    parser.add_argument('--config', type=Path, default=None, help='Path to client config YAML file')
    parser.add_argument('--mock', action='store_true', help='Use the in-process mock server')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args()
    setup_logging(args.verbose)
    sys.exit(asyncio.run(run(args)))


if __name__ == '__main__':
    main()
