from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from pincode_api.contracts.errors import PincodeErrorKind


class LocationRecord(BaseModel):
    district: str = ""
    state: str = ""

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("district", "state", mode="before")
    @classmethod
    def _absent_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


# Keys are whatever the dataset ships; a null value is kept and looks up as not found.
PincodeTable = Mapping[str, LocationRecord | None]


class PincodeEnvelope(BaseModel):
    success: bool
    pincode: str = Field(default="", examples=["110001"])
    city: str = Field(default="", examples=["Central Delhi"])
    state: str = Field(default="", examples=["Delhi"])
    message: str = Field(default="", examples=["Pincode found successfully"])
    timestamp: str = Field(
        ...,
        description="ISO-8601 UTC instant at which the envelope was created.",
        examples=["2024-01-01T00:00:00.000Z"],
    )


class LookupFound(BaseModel):
    pincode: str
    record: LocationRecord

    model_config = {"frozen": True}


class LookupFailed(BaseModel):
    kind: PincodeErrorKind
    pincode: str = ""

    model_config = {"frozen": True}


LookupResult = LookupFound | LookupFailed
