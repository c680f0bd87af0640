"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.database import dispose_engine
from app.core.errors import AppError, FieldError, ValidationFailed
from app.schemas.envelope import error_body

logger = logging.getLogger(__name__)

# Request-location prefixes FastAPI puts in front of field paths.
_LOCATION_SEGMENTS = frozenset({"body", "path", "query", "header", "cookie"})

_STATUS_TO_TYPE = {
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
    422: "validation",
}


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    # Drain pooled connections on shutdown.
    dispose_engine()


app = FastAPI(
    title="Kanban API",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


def _format_path(loc: tuple | list) -> str | None:
    """("body", "items", 0, "name") -> "items[0].name"; location prefix dropped."""
    segments = list(loc)
    if segments and segments[0] in _LOCATION_SEGMENTS:
        segments = segments[1:]
    path = ""
    for seg in segments:
        if isinstance(seg, int):
            path += f"[{seg}]"
        else:
            path += f".{seg}" if path else str(seg)
    return path or None


def request_validation_details(exc: RequestValidationError) -> list[FieldError]:
    return [
        FieldError(
            message=str(err.get("msg", "")),
            path=_format_path(err.get("loc", ())),
            type=err.get("type"),
        )
        for err in exc.errors()
    ]


@app.exception_handler(AppError)
async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    message = exc.message
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message)
        message = "Internal server error"
    details = exc.details if isinstance(exc, ValidationFailed) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, exc.error_type, details),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=error_body(
            ValidationFailed.default_message,
            "validation",
            request_validation_details(exc),
        ),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    status_code = exc.status_code
    # Other 4xx (wrong method, bad body encoding) are malformed requests.
    error_type = _STATUS_TO_TYPE.get(
        status_code, "internal" if status_code >= 500 else "validation"
    )
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if status_code >= 500:
        message = "Internal server error"
    return JSONResponse(
        status_code=status_code,
        content=error_body(message, error_type),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content=error_body("Internal server error", "internal"),
    )


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Kanban API"}
