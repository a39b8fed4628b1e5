"""Main client class and convenience functions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import httpx

from .cache import Cacher, build_cache
from .config import ClientConfig
from .fetcher import Fetcher, RawPayload
from .models import ListResponse, SearchResponse, SymbolResponse, SymbolsResponse, decode
from .params import Options
from .urls import Format, RequestBuilder


logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 300


@dataclass
class QuandlClient:
    """
    Client for the Quandl API.

    Holds the API key, cache and HTTP transport for its own requests;
    separate clients never share them.

    Usage:
        client = QuandlClient()
        data = client.get_symbol("WIKI/AAPL", new_options("trim_start", "2014-01-01"))

        # Or with custom config
        client = QuandlClient(
            config=ClientConfig(api_key="...", cache_backend="file"),
        )
    """
    config: ClientConfig = field(default_factory=ClientConfig)

    # Overrides the cache selected by config.cache_backend
    cache: Cacher | None = None

    # Custom httpx transport (mainly for tests)
    transport: httpx.BaseTransport | None = None

    _http: httpx.Client = field(init=False, repr=False)
    _builder: RequestBuilder = field(init=False, repr=False)
    _fetcher: Fetcher = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.cache is None:
            self.cache = build_cache(self.config)
        self._http = httpx.Client(
            timeout=self.config.timeout,
            transport=self.transport,
            follow_redirects=True,
        )
        self._builder = RequestBuilder(self.config.base_url, self.config.api_key)
        self._fetcher = Fetcher(self._http, self.cache)
        logger.debug(
            f"Quandl client for {self.config.base_url} (cache: {type(self.cache).__name__ if self.cache else 'none'})"
        )

    def __enter__(self) -> QuandlClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    @property
    def request_builder(self) -> RequestBuilder:
        """The request builder used by this client."""
        return self._builder

    # -- typed responses ----------------------------------------------------

    def get_symbol(self, symbol: str, params: Options | None = None) -> SymbolResponse:
        """Data for a single symbol, e.g. "WIKI/AAPL"."""
        raw = self.get_symbol_raw(symbol, Format.JSON, params)
        return decode(raw.content, SymbolResponse, url=raw.url)

    def get_symbols(self, symbols: Sequence[str], params: Options | None = None) -> SymbolsResponse:
        """Data for several symbols joined on date, e.g. ["WIKI/AAPL.4", "WIKI/CSCO.4"]."""
        raw = self.get_symbols_raw(symbols, Format.JSON, params)
        return decode(raw.content, SymbolsResponse, url=raw.url)

    def get_list(self, source: str, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> ListResponse:
        """One page of the datasets available from a source."""
        raw = self.get_list_raw(source, Format.JSON, page, per_page)
        return decode(raw.content, ListResponse, url=raw.url)

    def get_search(self, query: str, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> SearchResponse:
        """One page of search results."""
        raw = self.get_search_raw(query, Format.JSON, page, per_page)
        return decode(raw.content, SearchResponse, url=raw.url)

    # -- raw responses ------------------------------------------------------

    def get_symbol_raw(
        self,
        symbol: str,
        format: Format | str,
        params: Options | None = None,
    ) -> RawPayload:
        """CSV, JSON or XML data for a single symbol."""
        return self._fetcher.fetch(self._builder.symbol(symbol, format, params))

    def get_symbols_raw(
        self,
        symbols: Sequence[str],
        format: Format | str,
        params: Options | None = None,
    ) -> RawPayload:
        """CSV, JSON or XML data for several symbols."""
        return self._fetcher.fetch(self._builder.symbols(symbols, format, params))

    def get_list_raw(
        self,
        source: str,
        format: Format | str,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> RawPayload:
        """A source's dataset list as CSV, JSON or XML."""
        return self._fetcher.fetch(self._builder.list(source, format, page, per_page))

    def get_search_raw(
        self,
        query: str,
        format: Format | str,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> RawPayload:
        """Search results as JSON or XML (CSV requests are served as JSON)."""
        return self._fetcher.fetch(self._builder.search(query, format, page, per_page))


# Module-level default client
_default_client: QuandlClient | None = None


def _get_client() -> QuandlClient:
    """Get or create the default client (configured from the environment)."""
    global _default_client
    if _default_client is None:
        _default_client = QuandlClient()
    return _default_client


def get_symbol(symbol: str, params: Options | None = None) -> SymbolResponse:
    """
    Data for a symbol using the default client.

    Usage:
        from quandl_client import get_symbol
        data = get_symbol("WIKI/AAPL")
    """
    return _get_client().get_symbol(symbol, params)


def get_symbols(symbols: Sequence[str], params: Options | None = None) -> SymbolsResponse:
    return _get_client().get_symbols(symbols, params)


def get_list(source: str, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> ListResponse:
    return _get_client().get_list(source, page, per_page)


def get_search(query: str, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> SearchResponse:
    return _get_client().get_search(query, page, per_page)


def get_symbol_raw(symbol: str, format: Format | str, params: Options | None = None) -> RawPayload:
    return _get_client().get_symbol_raw(symbol, format, params)


def get_symbols_raw(symbols: Sequence[str], format: Format | str, params: Options | None = None) -> RawPayload:
    return _get_client().get_symbols_raw(symbols, format, params)


def get_list_raw(source: str, format: Format | str, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> RawPayload:
    return _get_client().get_list_raw(source, format, page, per_page)


def get_search_raw(query: str, format: Format | str, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> RawPayload:
    return _get_client().get_search_raw(query, format, page, per_page)
