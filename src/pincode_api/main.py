import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from pincode_api.clients.pincode_data_client import PincodeDataClient
from pincode_api.config import settings
from pincode_api.contracts.errors import DataUnavailableError, ProblemDetails
from pincode_api.middleware.correlation import correlation_id_var, correlation_middleware, setup_logging
from pincode_api.routers.pincode import router as pincode_router
from pincode_api.services.data_provider import PincodeDataProvider
from pincode_api.services.pincode_service import PincodeLookupService

logger = logging.getLogger(__name__)


def build_pincode_service() -> PincodeLookupService:
    return PincodeLookupService(
        data_provider=PincodeDataProvider(
            data_client=PincodeDataClient(
                source=settings.pincode_data_source,
                timeout_seconds=settings.upstream_timeout_seconds,
            )
        )
    )


@asynccontextmanager
async def _app_lifespan(application: FastAPI):
    application.state.is_draining = False
    if settings.preload_on_startup:
        try:
            await application.state.pincode_service.data_provider.ensure_loaded()
        except DataUnavailableError as exc:
            logger.warning("Pincode data preload failed, loading lazily instead: %s", exc)
    yield
    application.state.is_draining = True


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=_app_lifespan)
app.state.pincode_service = build_pincode_service()
setup_logging()
app.middleware("http")(correlation_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-Id"],
)
Instrumentator().instrument(app).expose(app)
app.include_router(pincode_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health/live")
async def health_live() -> dict[str, str]:
    return {"status": "live"}


@app.get("/health/ready")
async def health_ready(response: Response) -> dict[str, str]:
    if bool(getattr(app.state, "is_draining", False)):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "draining"}
    return {"status": "ready"}


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    problem = ProblemDetails(
        title="Internal Server Error",
        status=500,
        detail="An unexpected error occurred.",
        instance=str(request.url.path),
        correlation_id=correlation_id_var.get() or "",
        error_code="INTERNAL_ERROR",
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        media_type="application/problem+json",
        content=problem.model_dump(),
    )
