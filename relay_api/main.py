import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay_api.api.routers import chat
from relay_api.api.schemas import HealthResponse
from relay_api.config.logging import configure_logging
from relay_api.config.settings import Settings, get_settings
from relay_api.middlewares.access_log_middleware import AccessLogMiddleware
from relay_api.middlewares.cors_middleware import CORSHeadersMiddleware
from relay_api.services.relay_client import RelayClient, RelayError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager. Sets up logging and reports where messages
    will be relayed to.
    """
    configure_logging(app.state.settings.LOG_LEVEL)
    relay_client: RelayClient = app.state.relay_client
    logger.info("Relaying chat messages to Ollama at %s", relay_client.base_url)
    logger.info("Using model: %s", relay_client.model_name)
    yield


# ==============================================================================
# Global Exception Handlers
# ==============================================================================


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Renders framework and handler HTTP errors (404, 405, 400) as an error body.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handles request bodies that are not JSON or do not match the chat schema.
    Reported as 400 rather than FastAPI's default 422.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


async def relay_exception_handler(request: Request, exc: RelayError):
    """
    Handles failures talking to the Ollama server. The message includes the
    upstream status and body verbatim when one was received.
    """
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handles all unhandled exceptions, returning a 500 Internal Server Error.
    This prevents sensitive server information from being exposed to clients.
    """
    logger.exception("Unhandled error while serving %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


async def health_check() -> HealthResponse:
    """
    Simple health check endpoint to confirm the API is running.
    Never contacts the Ollama server.
    """
    return HealthResponse(status="ok")


def create_app(
    settings: Optional[Settings] = None,
    relay_client: Optional[RelayClient] = None,
) -> FastAPI:
    """
    Builds the application around an immutable settings value.

    Args:
        settings: Process configuration. Loaded from the environment if omitted.
        relay_client: Pre-built client, mainly for tests. Built from
            `settings` if omitted.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Ollama Chat Relay",
        version="0.1.0",
        description="Relays chat messages to a locally hosted Ollama model.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.relay_client = relay_client or RelayClient(settings)

    # Middleware added last runs first: CORS wraps the access log so that
    # preflight requests are answered before anything else.
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(CORSHeadersMiddleware)

    app.include_router(chat.router)
    app.add_api_route(
        "/health",
        health_check,
        methods=["GET"],
        response_model=HealthResponse,
        tags=["Health Check"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RelayError, relay_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app


app = create_app()
