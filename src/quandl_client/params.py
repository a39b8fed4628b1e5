"""Query parameters sent with a Quandl request."""

from __future__ import annotations

from urllib.parse import urlencode


AUTH_PARAM = "auth_token"


class Options(dict[str, str]):
    """
    Additional parameters for a Quandl request.

    Keys are unique; the last ``set`` wins. Encoding sorts by key so that the
    same parameters always produce the same query string, whatever order they
    were set in.

    Usage:
        opts = Options()
        opts.set("trim_start", "2014-01-01")
        opts.set("trim_end", "2014-02-02")
    """

    def set(self, key: str, value: str) -> None:
        """Register a key=value pair, replacing any previous value."""
        self[key] = value

    def merged(self, auth_token: str | None = None) -> dict[str, str]:
        """Copy of the parameters with the token added unless already set."""
        result = dict(self)
        if auth_token and AUTH_PARAM not in result:
            result[AUTH_PARAM] = auth_token
        return result

    def encode(self, auth_token: str | None = None) -> str:
        """Percent-encoded query string, keys sorted."""
        return urlencode(sorted(self.merged(auth_token).items()))


def new_options(*pairs: str) -> Options:
    """
    Build Options from alternating keys and values.

        new_options("start_date", "2014-01-01", "column_index", "4")
    """
    if len(pairs) % 2:
        raise ValueError(f"Expected an even number of arguments, got {len(pairs)}")
    opts = Options()
    for i in range(0, len(pairs), 2):
        opts.set(pairs[i], pairs[i + 1])
    return opts
