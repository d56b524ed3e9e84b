from enum import Enum

from pydantic import BaseModel


class ProblemDetails(BaseModel):
    type: str = "about:blank"
    title: str
    status: int
    detail: str
    instance: str
    correlation_id: str
    error_code: str


class PincodeErrorKind(str, Enum):
    MISSING_PARAMETER = "MISSING_PARAMETER"
    INVALID_FORMAT = "INVALID_FORMAT"
    DATA_UNAVAILABLE = "DATA_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"


class DataUnavailableError(Exception):
    """Raised when the pincode dataset cannot be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"pincode data unavailable from {source}: {reason}")
        self.source = source
        self.reason = reason
