"""End-to-end tests for QuandlClient against a fake provider."""

import httpx
import pytest

from quandl_client import client as client_module
from quandl_client.cache import MemoryCache
from quandl_client.client import QuandlClient
from quandl_client.columns import float_column, time_column
from quandl_client.config import ClientConfig
from quandl_client.errors import DecodeError, NetworkError
from quandl_client.params import Options, new_options
from quandl_client.urls import Format

from tests.samples import AAPL_CSV, BASE_URL


class TestSymbol:
    def test_close_prices_scenario(self, client, fake_quandl):
        params = Options()
        params.set("trim_start", "2014-01-06")
        params.set("trim_end", "2014-01-08")
        params.set("column", "4")

        data = client.get_symbol("WIKI/AAPL", params)

        assert data.to_columns() == [
            ["2014-01-08", "2014-01-07", "2014-01-06"],
            [543.46, 540.04, 543.93],
        ]
        sent = fake_quandl.last_request.url
        assert sent.path == "/api/v1/datasets/WIKI/AAPL.json"
        assert dict(sent.params) == {
            "trim_start": "2014-01-06",
            "trim_end": "2014-01-08",
            "column": "4",
        }

    def test_source_url(self, client):
        data = client.get_symbol("WIKI/AAPL", new_options("column", "4"))
        assert data.source_url == f"{BASE_URL}/v1/datasets/WIKI/AAPL.json?column=4"

    def test_typed_columns(self, client):
        dates, closes = client.get_symbol("WIKI/AAPL").to_columns()
        assert float_column(closes) == [543.46, 540.04, 543.93]
        assert [d.isoformat() for d in time_column(dates)] == [
            "2014-01-08", "2014-01-07", "2014-01-06",
        ]

    def test_raw_csv_verbatim(self, client):
        payload = client.get_symbol_raw("WIKI/AAPL", "csv")
        assert payload.content == AAPL_CSV
        assert payload.format is Format.CSV

    def test_unknown_symbol_decode_error(self, client):
        with pytest.raises(DecodeError) as exc_info:
            client.get_symbol("WIKI/NOPE")
        assert b"does not exist" in exc_info.value.raw
        assert exc_info.value.url.endswith("/v1/datasets/WIKI/NOPE.json")

    def test_network_error(self, client, fake_quandl):
        fake_quandl.error = httpx.ConnectError("connection refused")
        with pytest.raises(NetworkError):
            client.get_symbol("WIKI/AAPL")


class TestSymbols:
    def test_two_symbols_scenario(self, client, fake_quandl):
        params = new_options(
            "sort_order", "asc",
            "trim_start", "2014-01-01",
            "trim_end", "2014-01-06",
        )

        data = client.get_symbols(["WIKI/AAPL.4", "WIKI/CSCO.4"], params)

        assert len(data.data) == 3
        dates = [row[0] for row in data.data]
        assert dates == sorted(dates)
        assert all(len(row) == 3 for row in data.data)
        assert data.column_names[0] == "Date"

        sent = fake_quandl.last_request.url
        assert sent.path == "/api/v1/multisets.json"
        assert sent.params["columns"] == "WIKI.AAPL.4,WIKI.CSCO.4"
        assert sent.params["sort_order"] == "asc"

    def test_named_columns(self, client):
        named = client.get_symbols(["WIKI/AAPL.4", "WIKI/CSCO.4"]).to_named_columns()
        assert named["WIKI.CSCO - Close"] == [22.0, 21.98, 22.01]


class TestListAndSearch:
    def test_list(self, client, fake_quandl):
        data = client.get_list("WIKI", page=1, per_page=2)
        assert [d.database_code for d in data.datasets] == ["WIKI", "WIKI"]
        assert data.meta.per_page == 2

        params = fake_quandl.last_request.url.params
        assert params["source_code"] == "WIKI"
        assert params["query"] == "*"
        assert params["page"] == "1"
        assert params["per_page"] == "2"

    def test_search(self, client, fake_quandl):
        data = client.get_search("twitter", page=2, per_page=5)
        assert data.sources[0].host == "twitter.com"
        assert fake_quandl.last_request.url.params["query"] == "twitter"

    def test_search_raw_csv_served_as_json(self, client, fake_quandl):
        payload = client.get_search_raw("twitter", "csv")
        assert payload.format is Format.JSON
        assert fake_quandl.last_request.url.path == "/api/v1/datasets.json"


class TestCaching:
    def test_second_call_served_from_cache(self, cached_client, fake_quandl):
        params = new_options("column", "4")
        first = cached_client.get_symbol("WIKI/AAPL", params)
        second = cached_client.get_symbol("WIKI/AAPL", new_options("column", "4"))

        assert first == second
        assert len(fake_quandl.requests) == 1

    def test_different_page_not_shared(self, cached_client, fake_quandl):
        cached_client.get_list("WIKI", page=1)
        cached_client.get_list("WIKI", page=2)
        assert len(fake_quandl.requests) == 2

    def test_cache_from_config(self, fake_quandl):
        config = ClientConfig(api_key=None, base_url=BASE_URL, cache_backend="memory")
        with QuandlClient(config=config, transport=fake_quandl.transport) as c:
            assert isinstance(c.cache, MemoryCache)
            c.get_symbol_raw("WIKI/AAPL", "csv")
            c.get_symbol_raw("WIKI/AAPL", "csv")
        assert len(fake_quandl.requests) == 1


class TestIsolation:
    def test_token_per_client(self, fake_quandl):
        one = QuandlClient(
            config=ClientConfig(api_key="one", base_url=BASE_URL, cache_backend="none"),
            transport=fake_quandl.transport,
        )
        two = QuandlClient(
            config=ClientConfig(api_key="two", base_url=BASE_URL, cache_backend="none"),
            transport=fake_quandl.transport,
        )
        with one, two:
            one.get_symbol("WIKI/AAPL")
            two.get_symbol("WIKI/AAPL")

        assert fake_quandl.requests[0].url.params["auth_token"] == "one"
        assert fake_quandl.requests[1].url.params["auth_token"] == "two"

    def test_caller_params_untouched(self, fake_quandl):
        config = ClientConfig(api_key="secret", base_url=BASE_URL, cache_backend="none")
        params = new_options("column", "4")
        with QuandlClient(config=config, transport=fake_quandl.transport) as c:
            c.get_symbol("WIKI/AAPL", params)
        assert params == {"column": "4"}


class TestDefaultClient:
    def test_module_functions_use_default_client(self, monkeypatch, config, fake_quandl):
        default = QuandlClient(config=config, transport=fake_quandl.transport)
        monkeypatch.setattr(client_module, "_default_client", default)

        data = client_module.get_symbol("WIKI/AAPL")
        raw = client_module.get_symbol_raw("WIKI/AAPL", "csv")

        assert data.dataset_code == "AAPL"
        assert raw.content == AAPL_CSV
        assert len(fake_quandl.requests) == 2
        default.close()

    def test_default_client_created_once(self, monkeypatch):
        monkeypatch.setattr(client_module, "_default_client", None)
        monkeypatch.setenv("QUANDL_CACHE", "none")
        first = client_module._get_client()
        assert client_module._get_client() is first
        first.close()


class TestRedirects:
    def test_redirect_followed_and_cached(self, cache, fake_quandl):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "old.quandl.test":
                target = request.url.copy_with(host="quandl.test")
                return httpx.Response(301, headers={"Location": str(target)})
            return fake_quandl(request)

        config = ClientConfig(api_key=None, base_url="https://old.quandl.test/api", cache_backend="none")
        with QuandlClient(config=config, cache=cache, transport=httpx.MockTransport(handler)) as c:
            data = c.get_symbol("WIKI/AAPL")
            again = c.get_symbol("WIKI/AAPL")

        assert data.dataset_code == "AAPL"
        assert again == data
        assert fake_quandl.last_request.url.host == "quandl.test"
        assert len(fake_quandl.requests) == 1
