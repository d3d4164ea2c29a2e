"""
Cross-origin headers for the browser client.

Every response carries the permissive header set, including the 500 produced
for an unhandled exception, and a pre-flight OPTIONS request is answered here
without reaching any router.
"""
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from core.exceptions import GENERIC_DETAILS

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Adds CORS_HEADERS to all responses and short-circuits pre-flight requests."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception: {exc}",
                exc_info=True,
                extra={
                    "extra_fields": {
                        "method": request.method,
                        "path": request.url.path,
                    }
                }
            )
            response = JSONResponse(
                status_code=500,
                content={"error": "An unexpected error occurred", "details": GENERIC_DETAILS},
            )

        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
