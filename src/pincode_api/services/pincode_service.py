import logging
from collections.abc import Mapping
from typing import Any

from pincode_api.contracts.errors import DataUnavailableError, PincodeErrorKind
from pincode_api.contracts.pincode import LookupFailed, LookupFound, LookupResult, PincodeEnvelope
from pincode_api.services.data_provider import PincodeDataProvider
from pincode_api.services.lookup import lookup
from pincode_api.services.response_formatter import envelope_for
from pincode_api.services.validation import extract_pincode, is_valid_pincode

logger = logging.getLogger(__name__)


class PincodeLookupService:
    def __init__(self, data_provider: PincodeDataProvider):
        self._data_provider = data_provider

    @property
    def data_provider(self) -> PincodeDataProvider:
        return self._data_provider

    async def resolve(self, params: Mapping[str, Any]) -> LookupResult:
        pincode = extract_pincode(params)
        # An empty value is reported the same way as a missing one.
        if not pincode:
            return LookupFailed(kind=PincodeErrorKind.MISSING_PARAMETER)
        if not is_valid_pincode(pincode):
            return LookupFailed(kind=PincodeErrorKind.INVALID_FORMAT, pincode=pincode)

        try:
            table = await self._data_provider.ensure_loaded()
        except DataUnavailableError as exc:
            logger.error("Pincode lookup for %s failed: %s", pincode, exc)
            return LookupFailed(kind=PincodeErrorKind.DATA_UNAVAILABLE, pincode=pincode)

        record = lookup(table, pincode)
        if record is None:
            return LookupFailed(kind=PincodeErrorKind.NOT_FOUND, pincode=pincode)
        return LookupFound(pincode=pincode, record=record)

    async def handle(self, params: Mapping[str, Any]) -> PincodeEnvelope:
        try:
            result = await self.resolve(params)
        except Exception:
            logger.exception("Unexpected error while resolving pincode request")
            result = LookupFailed(kind=PincodeErrorKind.INTERNAL)
        return envelope_for(result)
