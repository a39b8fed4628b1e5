#!/usr/bin/env python3
"""
Command line access to the Quandl API.

Usage:
    quandl-client symbol WIKI/AAPL -o trim_start=2014-01-06 -o column=4
    quandl-client symbol WIKI/AAPL --format csv
    quandl-client symbols WIKI/AAPL.4 WIKI/CSCO.4 -o sort_order=asc
    quandl-client list WIKI --page 2 --per-page 5
    quandl-client search "google stock"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .client import DEFAULT_PER_PAGE, QuandlClient
from .config import ClientConfig
from .errors import QuandlError
from .fetcher import RawPayload
from .params import Options
from .urls import Format


def parse_option(text: str) -> tuple[str, str]:
    """Parse a key=value option."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected key=value, got {text!r}")
    return key, value


def print_payload(payload: RawPayload) -> None:
    """Pretty print JSON, pass other formats through unchanged."""
    if payload.format is Format.JSON:
        try:
            document = json.loads(payload.content)
        except json.JSONDecodeError:
            document = None
        if document is not None:
            print(json.dumps(document, indent=2))
            return
    sys.stdout.write(payload.text)
    if not payload.text.endswith("\n"):
        sys.stdout.write("\n")


def cmd_symbol(client: QuandlClient, args) -> RawPayload:
    return client.get_symbol_raw(args.code, args.format, Options(args.options))


def cmd_symbols(client: QuandlClient, args) -> RawPayload:
    return client.get_symbols_raw(args.codes, args.format, Options(args.options))


def cmd_list(client: QuandlClient, args) -> RawPayload:
    return client.get_list_raw(args.source, args.format, args.page, args.per_page)


def cmd_search(client: QuandlClient, args) -> RawPayload:
    return client.get_search_raw(args.query, args.format, args.page, args.per_page)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quandl-client",
        description="Fetch data from the Quandl API",
    )
    parser.add_argument("--api-key", help="API key (default: $QUANDL_API_KEY)")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--cache", help="Cache backend: none, memory, file or redis")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    formats = [f.value for f in Format]
    subparsers = parser.add_subparsers(dest="command", required=True)

    symbol = subparsers.add_parser("symbol", help="Data for one symbol")
    symbol.add_argument("code", help="Symbol code, e.g. WIKI/AAPL")
    symbol.set_defaults(func=cmd_symbol)

    symbols = subparsers.add_parser("symbols", help="Data for several symbols")
    symbols.add_argument("codes", nargs="+", help="Symbol codes, e.g. WIKI/AAPL.4")
    symbols.set_defaults(func=cmd_symbols)

    for sub in (symbol, symbols):
        sub.add_argument("--format", "-f", choices=formats, default="json")
        sub.add_argument(
            "--option", "-o",
            dest="options",
            type=parse_option,
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Extra request parameter (repeatable)",
        )

    listing = subparsers.add_parser("list", help="Datasets of a source")
    listing.add_argument("source", help="Source code, e.g. WIKI")
    listing.set_defaults(func=cmd_list)

    search = subparsers.add_parser("search", help="Search datasets")
    search.add_argument("query")
    search.set_defaults(func=cmd_search)

    for sub in (listing, search):
        sub.add_argument("--format", "-f", choices=formats, default="json")
        sub.add_argument("--page", type=int, default=1)
        sub.add_argument("--per-page", type=int, default=DEFAULT_PER_PAGE)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ClientConfig.from_yaml(args.config) if args.config else ClientConfig()
    if args.api_key:
        config.api_key = args.api_key
    if args.cache:
        config.cache_backend = args.cache

    try:
        with QuandlClient(config=config) as client:
            payload = args.func(client, args)
    except (QuandlError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if payload.status_code is not None and not 200 <= payload.status_code < 300:
        print(f"Error: HTTP {payload.status_code}\n{payload.text}", file=sys.stderr)
        return 1

    print_payload(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
