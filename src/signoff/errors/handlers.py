"""FastAPI exception handlers producing the standard ErrorResponse."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from signoff.errors.exceptions import AuthorizationError, SignoffError, StorageError
from signoff.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(SignoffError)
    async def signoff_error_handler(request: Request, exc: SignoffError):
        trace_id = getattr(request.state, "trace_id", "unknown")
        if isinstance(exc, AuthorizationError):
            user = getattr(request.state, "user", {}) or {}
            logger.warning(
                "approval_access_denied",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "trace_id": trace_id,
                    "user_sub": user.get("sub", "anonymous"),
                    "user_roles": user.get("roles", []),
                    "reason": str(exc),
                },
            )
        elif isinstance(exc, StorageError):
            logger.error(
                "storage_error",
                extra={"path": request.url.path, "trace_id": trace_id, "reason": exc.message},
            )
        error_response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
                trace_id=trace_id,
                timestamp=datetime.now(timezone.utc),
            ),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response.model_dump(mode="json", exclude_none=True),
        )
