import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request.

    Client errors are ordinary traffic and go to INFO. Server errors are
    logged at ERROR together with the response body, which carries the
    upstream status and text for relay failures.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self._logger = logging.getLogger(__name__)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        if response.status_code >= 500:
            # Reading the body consumes the stream, so the response has to be
            # re-created before it is returned to the client.
            body_chunks = [chunk async for chunk in response.body_iterator]
            response_body = b"".join(body_chunks)
            self._logger.error(
                "%s %s -> %d (%.1f ms): %s",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                response_body.decode("utf-8", errors="replace"),
            )
            return Response(
                content=response_body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )

        self._logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
