"""API middleware for the Comfy catalog API.

Provides:
- Request ID correlation and request logging
- Admin API key authentication for mutating requests
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from comfy.infrastructure.config import settings

logger = structlog.get_logger()


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID for correlation.

    Generates or extracts a request ID and adds it to:
    - Request state for access in handlers
    - Response headers for client correlation
    - Log context for tracing
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request with correlation ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        response = None

        try:
            response = await call_next(request)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=getattr(response, "status_code", 500),
                duration_ms=round(duration_ms, 2),
            )

            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id

        return response


# ============================================================================
# Admin API Key Middleware
# ============================================================================


# Methods that never change data
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


class AdminKeyMiddleware(BaseHTTPMiddleware):
    """Middleware restricting mutating requests to admins.

    Reads are public. Any other method needs the admin API key as a
    Bearer token: "Authorization: Bearer <admin_api_key>".
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Validate the admin key for mutating requests.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response, or a 401/403 error.
        """
        if request.method in SAFE_METHODS:
            return await call_next(request)

        path = request.url.path
        auth_header = request.headers.get("Authorization")

        if not auth_header:
            logger.warning("Missing authorization header", path=path, method=request.method)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"msg": "Missing Authorization header"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        parts = auth_header.split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer":
            logger.warning("Invalid authorization format", path=path, method=request.method)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "msg": "Invalid Authorization header format. Use 'Bearer <api_key>'"
                },
                headers={"WWW-Authenticate": "Bearer"},
            )

        if parts[1] != settings.admin_api_key:
            logger.warning("Non-admin mutation rejected", path=path, method=request.method)
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"msg": "not Authorized"},
            )

        request.state.is_admin = True

        return await call_next(request)


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed).

    Args:
        app: FastAPI application instance.
    """
    # Admin key authentication
    app.add_middleware(AdminKeyMiddleware)

    # Request ID correlation (outermost, so rejected requests are logged too)
    app.add_middleware(RequestIdMiddleware)
