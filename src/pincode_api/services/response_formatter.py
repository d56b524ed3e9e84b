from datetime import UTC, datetime

from pincode_api.contracts.errors import PincodeErrorKind
from pincode_api.contracts.pincode import LookupFound, LookupResult, PincodeEnvelope

FOUND_MESSAGE = "Pincode found successfully"

FAILURE_MESSAGES: dict[PincodeErrorKind, str] = {
    PincodeErrorKind.MISSING_PARAMETER: "Missing pincode parameter. Usage: ?pincode=XXXXXX",
    PincodeErrorKind.INVALID_FORMAT: "Invalid pincode format. Must be exactly 6 digits.",
    PincodeErrorKind.DATA_UNAVAILABLE: "Service temporarily unavailable. Please try again later.",
    PincodeErrorKind.NOT_FOUND: "Pincode not found in database",
    PincodeErrorKind.INTERNAL: "Internal server error",
}


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_envelope(
    success: bool,
    pincode: str,
    city: str = "",
    state: str = "",
    message: str = "",
) -> PincodeEnvelope:
    return PincodeEnvelope(
        success=success,
        pincode=pincode,
        city=city,
        state=state,
        message=message,
        timestamp=utc_timestamp(),
    )


def envelope_for(result: LookupResult) -> PincodeEnvelope:
    if isinstance(result, LookupFound):
        return build_envelope(
            True,
            result.pincode,
            city=result.record.district,
            state=result.record.state,
            message=FOUND_MESSAGE,
        )
    return build_envelope(False, result.pincode, message=FAILURE_MESSAGES[result.kind])
