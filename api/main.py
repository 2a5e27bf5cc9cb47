"""FastAPI surface for the JusticeAlly document service."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.completion import router as completion_router
from api.config import AppConfig, get_config
from api.logging_config import configure_logging
from api.middleware import (
    MULTIPART_ALLOWANCE,
    AuditLoggingMiddleware,
    PayloadSizeLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from api.rate_limit import limiter
from document_factory.enhancer import CompletionBackend, EnhancementClient
from document_factory.registry import CAPABILITIES
from orchestrator.exceptions import (
    EnhancementError,
    ExtractionError,
    JusticeAllyError,
    LLMError,
    RequestInFlightError,
    SessionNotFoundError,
    StateTransitionError,
    UnknownDocumentTypeError,
    UnsupportedMediaTypeError,
    UploadTooLargeError,
    ValidationError,
)
from orchestrator.retry import RetryPolicy
from orchestrator.router import configure_service
from orchestrator.router import router as orchestrator_router
from orchestrator.service import DocumentService
from orchestrator.sessions import SessionStore
from tools.completion_client import CHAT_STYLE, DOCUMENT_STYLE, HttpCompletionClient
from tools.llm_client import LLMClient, set_llm_client

config = get_config()

# Configure logging first
configure_logging(config.log_level)

logger = logging.getLogger("justiceally.api")


def build_llm_client(config: AppConfig) -> LLMClient:
    return LLMClient(
        api_key=config.anthropic_api_key or None,
        model=config.model,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        timeout_seconds=config.enhancement_timeout_seconds,
    )


def build_service(config: AppConfig, llm_client: LLMClient) -> DocumentService:
    """Wire the document service from configuration.

    Enhancement goes to ``COMPLETION_ENDPOINT_URL`` when it is set, otherwise
    straight to the Anthropic API. ``SIMPLIFY_ENDPOINT_URL`` routes
    simplification to a document-style endpoint such as ``/api/simplify-document``.
    """
    backend: CompletionBackend
    if config.completion_endpoint_url:
        backend = HttpCompletionClient(
            config.completion_endpoint_url,
            style=CHAT_STYLE,
            timeout_seconds=config.enhancement_timeout_seconds,
        )
        logger.info(f"Enhancement backend: {config.completion_endpoint_url}")
    else:
        backend = llm_client
        if not llm_client.configured:
            logger.warning(
                "ANTHROPIC_API_KEY is not set; generated documents will use the basic template"
            )

    simplify_backend: CompletionBackend | None = None
    if config.simplify_endpoint_url:
        simplify_backend = HttpCompletionClient(
            config.simplify_endpoint_url,
            style=DOCUMENT_STYLE,
            timeout_seconds=config.enhancement_timeout_seconds,
        )
        logger.info(f"Simplification backend: {config.simplify_endpoint_url}")

    return DocumentService(
        enhancer=EnhancementClient(backend, simplify_backend=simplify_backend),
        sessions=SessionStore(
            ttl_minutes=config.session_ttl_minutes,
            max_sessions=config.max_sessions,
        ),
        enhancement_timeout=config.enhancement_timeout_seconds,
        extraction_timeout=config.extraction_timeout_seconds,
        retry_policy=RetryPolicy(max_attempts=config.enhancement_max_attempts),
        max_upload_bytes=config.max_upload_bytes,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the document service on startup and drop it on shutdown."""
    logger.info("Starting JusticeAlly API")
    llm_client = build_llm_client(config)
    set_llm_client(llm_client)
    service = build_service(config, llm_client)
    configure_service(service)
    app.state.document_service = service
    logger.info("Document service initialized successfully")

    yield

    logger.info("Shutting down JusticeAlly API")
    configure_service(None)
    app.state.document_service = None


app = FastAPI(
    title="JusticeAlly API",
    description="Legal document generation and plain-language simplification.",
    version="0.1.0",
    lifespan=lifespan,
)

# Store startup time for health checks
app.state.startup_time = time.time()

# Attach rate limiter to app state and add exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

if config.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time-Ms", "Content-Disposition"],
    )

# Add GZip compression for responses > 1KB
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Add middleware (order matters - last added is executed first)
app.add_middleware(SecurityHeadersMiddleware, enable_hsts=config.production_mode)
app.add_middleware(AuditLoggingMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    PayloadSizeLimitMiddleware,
    max_size=config.max_upload_bytes + MULTIPART_ALLOWANCE,
)  # Check payload size first


def _error_response(request: Request, status_code: int, message: str, **extra: object) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": status_code,
                "message": message,
                **extra,
                "request_id": request_id,
            }
        },
    )


# Most specific first; the first match wins.
_STATUS_BY_ERROR: tuple[tuple[type[JusticeAllyError], int], ...] = (
    (SessionNotFoundError, status.HTTP_404_NOT_FOUND),
    (UnknownDocumentTypeError, status.HTTP_404_NOT_FOUND),
    (RequestInFlightError, status.HTTP_409_CONFLICT),
    (StateTransitionError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (UnsupportedMediaTypeError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (UploadTooLargeError, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
    (ExtractionError, status.HTTP_400_BAD_REQUEST),
    (EnhancementError, status.HTTP_502_BAD_GATEWAY),
    (LLMError, status.HTTP_502_BAD_GATEWAY),
)


def status_for_error(exc: JusticeAllyError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


# Standardized error response handlers
@app.exception_handler(JusticeAllyError)
async def domain_exception_handler(request: Request, exc: JusticeAllyError) -> JSONResponse:
    """Map domain errors to HTTP status codes."""
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message}")
    return _error_response(
        request,
        status_code,
        exc.message,
        type=exc.__class__.__name__,
        details=exc.details,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return standardized JSON error responses."""
    return _error_response(request, exc.status_code, exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return standardized validation error responses."""
    errors = []
    for error in exc.errors():
        location = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({"field": location, "message": error["msg"]})

    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        details=errors[:10],  # Limit to first 10 errors
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors gracefully."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.exception(f"Unhandled exception: {exc} | request_id={request_id}")
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


app.include_router(orchestrator_router, tags=["documents"])
app.include_router(completion_router, prefix="/api", tags=["completion"])


@app.get("/", response_class=HTMLResponse, tags=["system"])
async def root() -> HTMLResponse:
    return HTMLResponse(
        content="""
        <html>
            <body>
                <h1>JusticeAlly API</h1>
                <p>Legal document generation and plain-language simplification.</p>
                <p><a href="/docs">API Documentation</a></p>
            </body>
        </html>
        """
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Basic health check for load balancers and monitoring."""
    return {"status": "healthy"}


@app.get("/health/live", tags=["system"])
async def liveness_probe() -> dict[str, str]:
    """Liveness probe - is the process alive?"""
    return {"status": "alive"}


@app.get("/health/ready", tags=["system"])
async def readiness_probe(request: Request) -> dict:
    """Readiness probe - is the service ready to accept traffic?

    Checks:
    - Document service is initialized
    - A completion backend is configured (enhancement degrades without one)
    """
    service = getattr(request.app.state, "document_service", None)
    checks: dict[str, bool] = {"document_service": service is not None}

    backend = getattr(getattr(service, "enhancer", None), "backend", None)
    checks["completion_backend"] = bool(getattr(backend, "configured", backend is not None))

    startup_time = getattr(request.app.state, "startup_time", time.time())
    uptime_seconds = time.time() - startup_time

    return {
        "status": "ready" if checks["document_service"] else "not_ready",
        "uptime_seconds": round(uptime_seconds, 2),
        "checks": checks,
    }


@app.get("/capabilities", tags=["system"])
async def capabilities() -> dict[str, bool]:
    """Feature flags; voice input is announced but not implemented."""
    return dict(CAPABILITIES)


@app.post("/assistant/voice", tags=["completion"], status_code=status.HTTP_501_NOT_IMPLEMENTED)
async def voice_input(request: Request) -> JSONResponse:
    return _error_response(
        request,
        status.HTTP_501_NOT_IMPLEMENTED,
        "Voice input is not available yet. Please type your question instead.",
    )
