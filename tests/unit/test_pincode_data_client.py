import json

import httpx
import pytest

from pincode_api.clients.pincode_data_client import PincodeDataClient
from pincode_api.contracts.errors import DataUnavailableError
from pincode_api.contracts.pincode import LocationRecord

_PAYLOAD = {
    "110001": {"district": "Central Delhi", "state": "Delhi"},
    "403001": {"state": "Goa"},
    "000000": None,
}


class _StaticAsyncClient:
    calls = 0
    response = httpx.Response(200, json=_PAYLOAD, request=httpx.Request("GET", "http://test"))

    def __init__(self, timeout: float, follow_redirects: bool = False):
        _ = timeout, follow_redirects

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url):
        _ = url
        _StaticAsyncClient.calls += 1
        return _StaticAsyncClient.response


class _NetworkErrorAsyncClient:
    def __init__(self, timeout: float, follow_redirects: bool = False):
        _ = timeout, follow_redirects

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url):
        _ = url
        raise httpx.ConnectError("refused")


@pytest.mark.asyncio
async def test_fetch_table_reads_local_file(tmp_path):
    path = tmp_path / "pincode-lookup.json"
    path.write_text(json.dumps(_PAYLOAD), encoding="utf-8")

    table = await PincodeDataClient(source=str(path), timeout_seconds=1.0).fetch_table()

    assert table["110001"] == LocationRecord(district="Central Delhi", state="Delhi")
    assert table["403001"] == LocationRecord(district="", state="Goa")
    assert "000000" in table
    assert table["000000"] is None


@pytest.mark.asyncio
async def test_fetched_table_is_read_only(tmp_path):
    path = tmp_path / "pincode-lookup.json"
    path.write_text(json.dumps(_PAYLOAD), encoding="utf-8")

    table = await PincodeDataClient(source=str(path), timeout_seconds=1.0).fetch_table()

    with pytest.raises(TypeError):
        table["999999"] = LocationRecord()  # type: ignore[index]


@pytest.mark.asyncio
async def test_missing_file_raises_data_unavailable(tmp_path):
    client = PincodeDataClient(source=str(tmp_path / "absent.json"), timeout_seconds=1.0)

    with pytest.raises(DataUnavailableError) as exc_info:
        await client.fetch_table()

    assert exc_info.value.reason == "FileNotFoundError"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[]",
        '{"110001": "Central Delhi"}',
        '{"110001": {"district": 42}}',
    ],
)
async def test_malformed_payload_raises_data_unavailable(tmp_path, content):
    path = tmp_path / "pincode-lookup.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(DataUnavailableError):
        await PincodeDataClient(source=str(path), timeout_seconds=1.0).fetch_table()


@pytest.mark.asyncio
async def test_fetch_table_over_http(monkeypatch):
    _StaticAsyncClient.calls = 0
    _StaticAsyncClient.response = httpx.Response(
        200, json=_PAYLOAD, request=httpx.Request("GET", "http://test")
    )
    monkeypatch.setattr("httpx.AsyncClient", _StaticAsyncClient)
    client = PincodeDataClient(source="https://cdn.example/pincode-lookup.json", timeout_seconds=1.0)

    table = await client.fetch_table()

    assert client.is_remote is True
    assert table["110001"].district == "Central Delhi"
    assert _StaticAsyncClient.calls == 1


@pytest.mark.asyncio
async def test_http_error_status_raises_data_unavailable(monkeypatch):
    _StaticAsyncClient.response = httpx.Response(
        404, text="Not Found", request=httpx.Request("GET", "http://test")
    )
    monkeypatch.setattr("httpx.AsyncClient", _StaticAsyncClient)
    client = PincodeDataClient(source="http://cdn.example/pincode-lookup.json", timeout_seconds=1.0)

    with pytest.raises(DataUnavailableError) as exc_info:
        await client.fetch_table()

    assert exc_info.value.reason == "HTTP status 404"


@pytest.mark.asyncio
async def test_http_transport_error_raises_data_unavailable(monkeypatch):
    monkeypatch.setattr("httpx.AsyncClient", _NetworkErrorAsyncClient)
    client = PincodeDataClient(source="http://cdn.example/pincode-lookup.json", timeout_seconds=1.0)

    with pytest.raises(DataUnavailableError) as exc_info:
        await client.fetch_table()

    assert exc_info.value.reason == "ConnectError"
