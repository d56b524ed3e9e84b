import asyncio
import logging
from typing import Protocol

from pincode_api.contracts.pincode import PincodeTable

logger = logging.getLogger(__name__)


class PincodeTableSource(Protocol):
    @property
    def source(self) -> str: ...

    async def fetch_table(self) -> PincodeTable: ...


class PincodeDataProvider:
    """Loads the pincode table on first use and keeps it for the life of the process.

    Callers that arrive while the first load is still running await the same
    in-flight task, so the backing resource is fetched at most once per
    successful load. The task settles the cache itself on completion: a failed
    load is dropped and the next call fetches again, even if its callers were
    cancelled while it ran.
    """

    def __init__(self, data_client: PincodeTableSource):
        self._data_client = data_client
        self._table: PincodeTable | None = None
        self._inflight: asyncio.Task[PincodeTable] | None = None

    @property
    def loaded(self) -> bool:
        return self._table is not None

    async def ensure_loaded(self) -> PincodeTable:
        if self._table is not None:
            return self._table

        if self._inflight is None:
            inflight = asyncio.ensure_future(self._load())
            inflight.add_done_callback(self._settle)
            self._inflight = inflight
        return await asyncio.shield(self._inflight)

    def _settle(self, task: asyncio.Task[PincodeTable]) -> None:
        # Runs even when every awaiting caller was cancelled.
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled() and task.exception() is None:
            self._table = task.result()

    async def _load(self) -> PincodeTable:
        logger.info("Loading pincode data from %s", self._data_client.source)
        table = await self._data_client.fetch_table()
        logger.info("Loaded %d pincode entries", len(table))
        return table
