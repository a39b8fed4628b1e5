"""URL templates and request building for the Quandl API."""

from __future__ import annotations

import hashlib
import json
import logging
import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .params import AUTH_PARAM, Options


logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Named Quandl operations."""
    SYMBOL = "symbol"
    SYMBOLS = "symbols"
    LIST = "list"
    SEARCH = "search"


class Format(str, Enum):
    """Response formats the provider can return."""
    JSON = "json"
    CSV = "csv"
    XML = "xml"


# Positional fields are filled in order; {base} is the configured API root.
URL_TEMPLATES: dict[Operation, str] = {
    Operation.SYMBOL: "{base}/v1/datasets/{}.{}?{}",
    Operation.SYMBOLS: "{base}/v1/multisets.{}?columns={}&{}",
    Operation.SEARCH: "{base}/v1/datasets.{}?{}",
    Operation.LIST: "{base}/v2/datasets.{}?{}",
}

_TOKEN_RE = re.compile(rf"({AUTH_PARAM}=)[^&]+")


def template_arity(operation: Operation) -> int:
    """Number of positional substitutions the operation's template takes."""
    return sum(
        1 for _, name, _, _ in string.Formatter().parse(URL_TEMPLATES[operation])
        if name == ""
    )


def build_url(base_url: str, operation: Operation, *args: str) -> str:
    """
    Fill an operation's URL template.

    Stray '&' and '?' left by empty substitutions are trimmed from both ends.
    """
    arity = template_arity(operation)
    if len(args) != arity:
        raise ValueError(
            f"{operation.value} takes {arity} arguments, got {len(args)}"
        )
    url = URL_TEMPLATES[operation].format(*args, base=base_url.rstrip("/"))
    return url.strip("&?")


def symbols_to_string(symbols: Sequence[str]) -> str:
    """Convert symbol codes to the multiset column list ("WIKI/AAPL.4" -> "WIKI.AAPL.4")."""
    return ",".join(symbol.replace("/", ".") for symbol in symbols)


def mask_token(url: str) -> str:
    """Hide the auth token value in a URL for logging."""
    return _TOKEN_RE.sub(r"\1***", url)


@dataclass(frozen=True)
class PreparedRequest:
    """A fully built request: where to fetch and how to cache it."""
    operation: Operation
    format: Format
    url: str
    cache_key: str


class RequestBuilder:
    """
    Builds requests for each Quandl operation.

    The API key, when set, is sent as the ``auth_token`` query parameter.
    """

    def __init__(self, base_url: str, api_key: str | None = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    def symbol(
        self,
        symbol: str,
        fmt: Format | str = Format.JSON,
        params: Options | None = None,
    ) -> PreparedRequest:
        fmt = Format(fmt)
        return self._prepare(Operation.SYMBOL, fmt, [symbol], params)

    def symbols(
        self,
        symbols: Sequence[str],
        fmt: Format | str = Format.JSON,
        params: Options | None = None,
    ) -> PreparedRequest:
        fmt = Format(fmt)
        return self._prepare(Operation.SYMBOLS, fmt, [symbols_to_string(symbols)], params)

    def list(
        self,
        source: str,
        fmt: Format | str = Format.JSON,
        page: int = 1,
        per_page: int = 300,
    ) -> PreparedRequest:
        fmt = Format(fmt)
        params = Options()
        params.set("query", "*")
        params.set("source_code", source)
        params.set("per_page", str(per_page))
        params.set("page", str(page))
        return self._prepare(Operation.LIST, fmt, [], params)

    def search(
        self,
        query: str,
        fmt: Format | str = Format.JSON,
        page: int = 1,
        per_page: int = 300,
    ) -> PreparedRequest:
        fmt = Format(fmt)
        # The search endpoint does not serve CSV
        if fmt is Format.CSV:
            logger.debug("Search does not support csv, requesting json instead")
            fmt = Format.JSON
        params = Options()
        params.set("query", query)
        params.set("per_page", str(per_page))
        params.set("page", str(page))
        return self._prepare(Operation.SEARCH, fmt, [], params)

    def _prepare(
        self,
        operation: Operation,
        fmt: Format,
        args: Sequence[str],
        params: Options | None,
    ) -> PreparedRequest:
        params = params if params is not None else Options()
        query = params.encode(self.api_key)

        # Argument order follows the template
        if operation is Operation.SYMBOL:
            positional = [args[0], fmt.value, query]
        else:
            positional = [fmt.value, *args, query]

        url = build_url(self.base_url, operation, *positional)
        key = self.cache_key(operation, fmt, args, params)
        logger.debug(f"Built {operation.value} request: {mask_token(url)}")
        return PreparedRequest(operation=operation, format=fmt, url=url, cache_key=key)

    def cache_key(
        self,
        operation: Operation,
        fmt: Format,
        args: Sequence[str],
        params: Options,
    ) -> str:
        """
        Content hash of the normalized request.

        Independent of parameter order and of URL formatting.
        """
        normalized = json.dumps(
            [
                self.base_url,
                operation.value,
                fmt.value,
                list(args),
                sorted(params.merged(self.api_key).items()),
            ],
            separators=(",", ":"),
        )
        return hashlib.sha256(normalized.encode("utf-8")).hexdigest()
