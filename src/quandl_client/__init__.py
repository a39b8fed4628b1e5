"""
Quandl Client Library

Fetches datasets from the Quandl API, optionally through a cache, and
reshapes the returned rows into columns.

Usage:
    # Object-oriented API (recommended)
    from quandl_client import QuandlClient, ClientConfig, new_options, float_column

    client = QuandlClient(config=ClientConfig(api_key="...", cache_backend="file"))

    opts = new_options("trim_start", "2014-01-06", "trim_end", "2014-01-08", "column", "4")
    data = client.get_symbol("WIKI/AAPL", opts)
    dates, closes = data.to_columns()
    closes = float_column(closes)

    # Raw CSV, JSON or XML
    csv = client.get_symbol_raw("WIKI/AAPL", "csv", opts).text

    # Functional API (default client configured from QUANDL_* variables)
    from quandl_client import get_symbol, get_search

    data = get_symbol("WIKI/AAPL")
    results = get_search("google stock", page=1, per_page=3)
"""

from .cache import Cacher, FileCache, MemoryCache, RedisCache, build_cache
from .client import (
    # Core class
    QuandlClient,
    # Convenience functions
    get_symbol,
    get_symbols,
    get_list,
    get_search,
    get_symbol_raw,
    get_symbols_raw,
    get_list_raw,
    get_search_raw,
)
from .columns import (
    to_columns,
    to_named_columns,
    float_column,
    time_column,
    string_column,
)
from .config import ClientConfig
from .errors import (
    QuandlError,
    NetworkError,
    CacheWriteError,
    DecodeError,
    TypeMismatchError,
)
from .fetcher import Fetcher, RawPayload
from .models import (
    Dataset,
    SymbolResponse,
    SymbolsResponse,
    ResponseMeta,
    ListResponse,
    Source,
    SearchResponse,
    decode,
)
from .params import Options, new_options
from .urls import Format, Operation, PreparedRequest, RequestBuilder, build_url

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "QuandlClient",
    "ClientConfig",
    "RequestBuilder",
    "PreparedRequest",
    "Fetcher",
    "RawPayload",
    "Options",
    "new_options",
    "Operation",
    "Format",
    "build_url",
    # Convenience functions
    "get_symbol",
    "get_symbols",
    "get_list",
    "get_search",
    "get_symbol_raw",
    "get_symbols_raw",
    "get_list_raw",
    "get_search_raw",
    # Reshaping
    "to_columns",
    "to_named_columns",
    "float_column",
    "time_column",
    "string_column",
    # Response types
    "Dataset",
    "SymbolResponse",
    "SymbolsResponse",
    "ResponseMeta",
    "ListResponse",
    "Source",
    "SearchResponse",
    "decode",
    # Caches
    "Cacher",
    "MemoryCache",
    "FileCache",
    "RedisCache",
    "build_cache",
    # Exceptions
    "QuandlError",
    "NetworkError",
    "CacheWriteError",
    "DecodeError",
    "TypeMismatchError",
]
