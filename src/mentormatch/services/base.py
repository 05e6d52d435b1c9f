"""Common helpers for FastAPI-based services."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from structlog import get_logger

from mentormatch.config import get_settings
from mentormatch.errors import MatchingError
from mentormatch.logging import configure_logging

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Map engine errors, request validation failures and crashes to JSON responses."""

    @app.exception_handler(MatchingError)
    async def matching_error_handler(request: Request, exc: MatchingError) -> JSONResponse:
        logger.info(
            "request_rejected",
            path=request.url.path,
            error=type(exc).__name__,
            status_code=exc.status_code,
            message=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        logger.info("request_invalid", path=request.url.path, details=details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "details": details},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(service_name: str, **kwargs) -> FastAPI:
    """Create a FastAPI app configured for the given service."""

    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=f"Mentor Match {service_name.title()} Service",
        description="Mentor/mentee matching, swiping and discovery.",
        **kwargs,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        """Basic health endpoint."""

        return {"status": "ok", "service": service_name}

    return app
