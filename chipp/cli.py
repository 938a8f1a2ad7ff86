#!/usr/bin/env python3
"""
Chipp command line

Inspect and manage a user's credits from a shell, using CHIPP_API_KEY.

Usage:
    chipp-credits balance user123
    chipp-credits deduct user123 10
    chipp-credits payment-url user123 --return-url https://app.example.com
    chipp-credits health
"""

import argparse
import asyncio
import os
import sys
from dataclasses import replace
from typing import List, Optional

from .config import get_settings
from .factory import create_chipp_client
from .logger import setup_logger
from .protocols import ChippClientProtocol, ChippError, InsufficientCreditsError

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INSUFFICIENT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipp-credits",
        description="Manage Chipp user credits"
    )
    parser.add_argument("--api-url", help="Credit service URL (default: CHIPP_API_URL)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL, else WARNING)")

    sub = parser.add_subparsers(dest="command", required=True)

    balance = sub.add_parser("balance", help="Show a user's credit balance")
    balance.add_argument("user_id")

    deduct = sub.add_parser("deduct", help="Deduct credits from a user")
    deduct.add_argument("user_id")
    deduct.add_argument("amount", type=int)
    deduct.add_argument("--return-url", default=None, help="Checkout redirect if the balance is short")

    payment = sub.add_parser("payment-url", help="Get a checkout link for a user")
    payment.add_argument("user_id")
    payment.add_argument("--return-url", default=None)

    sub.add_parser("health", help="Check the credit service is reachable")
    return parser


async def run_command(args: argparse.Namespace, client: ChippClientProtocol) -> int:
    """Execute a parsed command against client, printing results"""
    if args.command == "balance":
        balance = await client.get_balance(args.user_id)
        print(f"{args.user_id}: {balance} credits")
        return EXIT_OK

    if args.command == "deduct":
        try:
            remaining = await client.deduct_credits(args.user_id, args.amount)
        except InsufficientCreditsError as e:
            url = await client.get_payment_url(args.user_id, args.return_url)
            print(f"Insufficient credits (available: {e.available}). Buy more: {url}")
            return EXIT_INSUFFICIENT
        print(f"Deducted {args.amount}; {remaining} credits remaining")
        return EXIT_OK

    if args.command == "payment-url":
        print(await client.get_payment_url(args.user_id, args.return_url))
        return EXIT_OK

    if args.command == "health":
        healthy = await client.health_check()
        print("healthy" if healthy else "unreachable")
        return EXIT_OK if healthy else EXIT_ERROR

    raise ValueError(f"Unknown command: {args.command}")


async def _main(args: argparse.Namespace) -> int:
    config = get_settings()
    if args.api_url:
        config = replace(config, api_url=args.api_url.rstrip("/"))

    async with create_chipp_client(config) as client:
        return await run_command(args, client)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger("chipp", level=args.log_level or os.getenv("LOG_LEVEL") or "WARNING")

    try:
        return asyncio.run(_main(args))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ChippError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
