#!/usr/bin/env python3
"""Demo script showing Quandl client capabilities.

Demonstrates:
1. Single symbol - close prices reshaped into typed columns
2. Multiple symbols - close prices joined on date
3. Raw CSV - provider output passed through unchanged
4. Listing and search - paged dataset metadata
5. Caching - the second identical request never reaches the network

Set your key first:
    export QUANDL_API_KEY=...

Then run this demo:
    python examples/api_demo.py
"""

import logging
import tempfile

from quandl_client import (
    ClientConfig,
    QuandlClient,
    float_column,
    new_options,
    time_column,
)


def print_section(title: str):
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


def demo_symbol(client: QuandlClient):
    print_section("1. SINGLE SYMBOL - WIKI/AAPL close prices")

    opts = new_options("trim_start", "2014-01-06", "trim_end", "2014-01-08", "column", "4")
    data = client.get_symbol("WIKI/AAPL", opts)

    dates, closes = data.to_columns()
    for day, close in zip(time_column(dates), float_column(closes)):
        print(f"{day:%a %d %b %Y}  {close:>10.2f}")
    print(f"\nFetched from: {data.source_url}")


def demo_symbols(client: QuandlClient):
    print_section("2. MULTIPLE SYMBOLS - AAPL and CSCO close")

    opts = new_options("sort_order", "asc", "trim_start", "2014-01-01", "trim_end", "2014-01-06")
    data = client.get_symbols(["WIKI/AAPL.4", "WIKI/CSCO.4"], opts)

    print(" | ".join(data.column_names))
    for row in data.data:
        print(" | ".join(str(cell) for cell in row))


def demo_raw(client: QuandlClient):
    print_section("3. RAW CSV")

    opts = new_options("trim_start", "2014-01-01", "trim_end", "2014-01-06", "column", "4")
    print(client.get_symbol_raw("WIKI/AAPL", "csv", opts).text)


def demo_list_and_search(client: QuandlClient):
    print_section("4. LISTING AND SEARCH")

    listing = client.get_list("WIKI", page=1, per_page=3)
    print(f"WIKI has {listing.meta.total_count} datasets, first page:")
    for dataset in listing.datasets:
        print(f"  {dataset.database_code}/{dataset.dataset_code}: {dataset.name}")

    results = client.get_search("google stock", page=1, per_page=3)
    print(f"\nSearch found {len(results.datasets)} results on this page")
    for source in results.sources:
        print(f"  source {source.code}: {source.name}")


def demo_cache(client: QuandlClient):
    print_section("5. CACHING")

    first = client.get_symbol_raw("WIKI/AAPL", "csv")
    second = client.get_symbol_raw("WIKI/AAPL", "csv")
    print(f"First request from cache:  {first.from_cache}")
    print(f"Second request from cache: {second.from_cache}")


def main():
    logging.basicConfig(level=logging.INFO)

    config = ClientConfig(cache_backend="file", cache_dir=tempfile.mkdtemp(prefix="quandl-"))
    with QuandlClient(config=config) as client:
        demo_symbol(client)
        demo_symbols(client)
        demo_raw(client)
        demo_list_and_search(client)
        demo_cache(client)


if __name__ == "__main__":
    main()
