"""JWT Bearer authentication middleware."""

import logging

from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from signoff.config import settings

logger = logging.getLogger(__name__)

_ANONYMOUS = {"sub": "anonymous", "roles": []}

# Paths that do not require authentication
_PUBLIC_PATHS = {
    "/api/v1/health",
    "/api/v1/health/live",
    "/api/v1/health/ready",
    "/docs",
    "/openapi.json",
    "/redoc",
}


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        raise ValueError(f"Invalid token: {exc}") from exc


class AuthMiddleware(BaseHTTPMiddleware):
    """Validate a Bearer token and attach user info to request.state."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path

        if path in _PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc"):
            request.state.user = dict(_ANONYMOUS)
            return await call_next(request)

        auth_header = request.headers.get("authorization", "")
        if auth_header.startswith("Bearer "):
            request.state.user = self._validate_jwt(auth_header[7:])
        else:
            # Routes enforce authentication through the get_current_user dependency
            request.state.user = dict(_ANONYMOUS)
        return await call_next(request)

    def _validate_jwt(self, token: str) -> dict:
        try:
            payload = decode_token(token)
        except ValueError:
            return {**_ANONYMOUS, "_auth_error": "invalid_token"}

        return {
            "sub": payload.get("sub", ""),
            "roles": payload.get("roles", []),
            "email": payload.get("email", ""),
        }
