from typing import Dict

from fastapi import Request, Response
from starlette import status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

ALLOWED_METHODS = ("GET", "POST")
ALLOWED_HEADERS = ("Content-Type",)


def cors_headers(request: Request) -> Dict[str, str]:
    """
    Returns the cross-origin headers attached to every response.

    The result does not depend on the request; any origin is allowed.
    """
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        headers = cors_headers(request)

        # Preflight requests never reach a route.
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
