from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pincode_api.contracts.pincode import PincodeEnvelope
from pincode_api.services.pincode_service import PincodeLookupService

router = APIRouter(prefix="/api/v1", tags=["pincode"])


def _pincode_service(request: Request) -> PincodeLookupService:
    return request.app.state.pincode_service


@router.get(
    "/pincode",
    response_model=PincodeEnvelope,
    summary="Look up a pincode",
    description=(
        "Resolves a 6-digit pincode to its city and state. Every outcome, "
        "including validation and data failures, is returned as the same envelope "
        "with `success` set accordingly. Usage: `?pincode=XXXXXX`."
    ),
)
async def get_pincode(
    request: Request,
    service: Annotated[PincodeLookupService, Depends(_pincode_service)],
) -> PincodeEnvelope:
    return await service.handle(request.query_params)
