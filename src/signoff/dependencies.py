"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from signoff.config import settings
from signoff.errors.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from signoff.events.activity import ActivityNotifier
from signoff.logging_config import bind_request_context
from signoff.models.caller import Caller
from signoff.repositories.org_repo import UserRepository


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


def get_trace_id(request: Request) -> str:
    """Extract trace_id from request state (set by middleware)."""
    return getattr(request.state, "trace_id", "unknown")


def get_activity_notifier(request: Request) -> ActivityNotifier:
    return request.app.state.activity_notifier


def get_allow_redecision(request: Request) -> bool:
    return getattr(request.app.state, "allow_redecision", settings.allow_redecision)


async def get_current_user(request: Request) -> dict:
    """Return the authenticated user dict or raise 401."""
    user = getattr(request.state, "user", {})
    if "_auth_error" in (user or {}):
        raise AuthenticationError(user["_auth_error"])
    if not user or user.get("sub") in ("anonymous", ""):
        raise AuthenticationError("Authentication required")
    return user


async def get_caller(
    request: Request,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Caller:
    """Resolve the caller's profile and organization."""
    profile = await UserRepository(db).get_profile(user["sub"])
    if not profile or not profile.is_active or not profile.org_id:
        raise NotFoundError("Organization", f"for user {user['sub']}")

    bind_request_context(get_trace_id(request), user_id=profile.user_id, org_id=profile.org_id)
    return Caller(
        user_id=profile.user_id,
        org_id=profile.org_id,
        role=profile.role,
        full_name=profile.full_name,
        token_roles=tuple(user.get("roles", [])),
    )


def require_role(*roles: str):
    """Return a dependency that enforces one of the given profile roles."""

    async def _check(caller: Caller = Depends(get_caller)) -> Caller:
        if caller.role not in roles and not set(caller.token_roles).intersection(roles):
            raise AuthorizationError(f"Requires one of: {', '.join(roles)}")
        return caller

    return _check


# Type aliases for dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentCaller = Annotated[Caller, Depends(get_caller)]
Notifier = Annotated[ActivityNotifier, Depends(get_activity_notifier)]
AllowRedecision = Annotated[bool, Depends(get_allow_redecision)]
ThresholdAdmin = Annotated[Caller, Depends(require_role("owner", "admin"))]
