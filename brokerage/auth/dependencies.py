"""
Brokerage Back-Office - Security Dependencies

FastAPI dependencies for authentication and authorization.

Usage:
    @router.get("/public")
    async def public_route(principal: Principal = Depends(get_principal)):
        ...

    @router.post("/content")
    async def write_route(
        principal: Authenticated = Depends(require_permission(Permission.MANAGE_CONTENT)),
    ):
        ...

The session token travels in the Authorization header as a bearer token and
is resolved to a Principal once per request.
"""

from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session as DBSession

from brokerage.auth import sessions as session_service
from brokerage.auth.principal import Anonymous, Authenticated, Principal
from brokerage.auth.rbac import Permission, authorize
from brokerage.errors import AuthError


# HTTP Bearer scheme for session token extraction
security = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Generator[DBSession, None, None]:
    """One database session per request, closed after the response."""
    db = request.app.state.db_session_factory()
    try:
        yield db
    finally:
        db.close()


def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    if credentials is None:
        return None
    return credentials.credentials


async def get_principal(
    token: Optional[str] = Depends(get_session_token),
    db: DBSession = Depends(get_db),
) -> Principal:
    """
    Resolve the caller to Anonymous or Authenticated.

    Missing, unknown and expired tokens all resolve to Anonymous.
    """
    admin = await session_service.resolve_session(db, token)
    if admin is None:
        return Anonymous()
    return Authenticated(admin=admin, token=token)


def require_permission(permission: Permission):
    """
    Dependency factory enforcing a permission before the handler runs.

    Raises (via the app's error handler):
        401: Caller is anonymous
        403: Caller's role lacks the permission
    """
    async def dependency(principal: Principal = Depends(get_principal)) -> Authenticated:
        return authorize(principal, permission)

    return dependency


async def require_admin(principal: Principal = Depends(get_principal)) -> Authenticated:
    """Any signed-in admin, regardless of role."""
    if not isinstance(principal, Authenticated):
        raise AuthError("Authentication required")
    return principal
