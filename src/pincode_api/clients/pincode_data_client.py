import asyncio
from pathlib import Path
from types import MappingProxyType

import httpx
from pydantic import TypeAdapter, ValidationError

from pincode_api.contracts.errors import DataUnavailableError
from pincode_api.contracts.pincode import LocationRecord, PincodeTable

_TABLE_ADAPTER = TypeAdapter(dict[str, LocationRecord | None])


class PincodeDataClient:
    """Reads the pincode dataset from a local file or an http(s) URL."""

    def __init__(self, source: str, timeout_seconds: float):
        self._source = source
        self._timeout = timeout_seconds

    @property
    def source(self) -> str:
        return self._source

    @property
    def is_remote(self) -> bool:
        return self._source.startswith(("http://", "https://"))

    async def fetch_table(self) -> PincodeTable:
        raw = await self._fetch_bytes()
        try:
            table = _TABLE_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            raise DataUnavailableError(
                self._source, f"invalid payload ({exc.error_count()} errors)"
            ) from exc
        return MappingProxyType(table)

    async def _fetch_bytes(self) -> bytes:
        if self.is_remote:
            return await self._fetch_remote()
        try:
            return await asyncio.to_thread(Path(self._source).read_bytes)
        except OSError as exc:
            raise DataUnavailableError(self._source, exc.__class__.__name__) from exc

    async def _fetch_remote(self) -> bytes:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.get(self._source)
        except httpx.HTTPError as exc:
            raise DataUnavailableError(self._source, exc.__class__.__name__) from exc
        if not response.is_success:
            raise DataUnavailableError(self._source, f"HTTP status {response.status_code}")
        return response.content
