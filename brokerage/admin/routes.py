"""
Brokerage Back-Office - Admin Management Routes

Endpoints for managing admin accounts:
- Listing admins (any admin)
- Invitations, role changes, removal (super admin)
- Forced logout of an admin's sessions (super admin)
- Purging expired auth rows (super admin)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Path, status
from sqlmodel import Session as DBSession

from brokerage.auth import credentials, maintenance, sessions as session_service
from brokerage.auth.dependencies import get_db, require_permission
from brokerage.auth.principal import Authenticated
from brokerage.auth.rbac import Permission
from brokerage.auth.schemas import (
    AdminListResponse,
    AdminResponse,
    InviteRequest,
    InviteResponse,
    PurgeResponse,
    SuccessResponse,
    UpdateRoleRequest,
)
from brokerage.errors import BrokerageError


router = APIRouter(prefix="/admins", tags=["admins"])


# =============================================================================
# Admin Account Endpoints
# =============================================================================

@router.get("", response_model=AdminListResponse, summary="List all admins")
async def list_admins(
    principal: Authenticated = Depends(require_permission(Permission.VIEW_ADMINS)),
    db: DBSession = Depends(get_db),
):
    admins = await credentials.list_admins(db)
    return AdminListResponse(
        admins=[AdminResponse.model_validate(a) for a in admins],
        total=len(admins),
    )


@router.post(
    "",
    response_model=InviteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Invite an admin",
)
async def invite_admin(
    body: InviteRequest,
    principal: Authenticated = Depends(require_permission(Permission.MANAGE_ADMINS)),
    db: DBSession = Depends(get_db),
):
    """
    Create an admin with a temporary password.

    The temporary password is returned once; delivering it to the invitee is
    up to the caller.
    """
    admin, temp_password = await credentials.invite_admin(
        db, email=body.email, name=body.name, role=body.role
    )
    return InviteResponse(admin_id=admin.id, temp_password=temp_password)


@router.patch("/{admin_id}/role", response_model=AdminResponse, summary="Change an admin's role")
async def update_role(
    body: UpdateRoleRequest,
    admin_id: UUID = Path(..., description="Admin ID to update"),
    principal: Authenticated = Depends(require_permission(Permission.MANAGE_ADMINS)),
    db: DBSession = Depends(get_db),
):
    admin = await credentials.update_role(db, admin_id, body.role)
    return AdminResponse.model_validate(admin)


@router.delete("/{admin_id}", response_model=SuccessResponse, summary="Remove an admin")
async def remove_admin(
    admin_id: UUID = Path(..., description="Admin ID to remove"),
    principal: Authenticated = Depends(require_permission(Permission.MANAGE_ADMINS)),
    db: DBSession = Depends(get_db),
):
    if principal.admin.id == admin_id:
        raise BrokerageError("Cannot remove your own account")

    await credentials.remove_admin(db, admin_id)
    return SuccessResponse(message="Admin removed")


@router.post(
    "/{admin_id}/revoke-sessions",
    response_model=SuccessResponse,
    summary="Log an admin out everywhere",
)
async def revoke_admin_sessions(
    admin_id: UUID = Path(..., description="Admin whose sessions to revoke"),
    principal: Authenticated = Depends(require_permission(Permission.MANAGE_ADMINS)),
    db: DBSession = Depends(get_db),
):
    count = await session_service.revoke_admin_sessions(db, admin_id)
    db.commit()
    return SuccessResponse(message=f"Revoked {count} sessions")


# =============================================================================
# Maintenance Endpoints
# =============================================================================

@router.post("/maintenance/purge", response_model=PurgeResponse, summary="Purge expired auth rows")
async def purge_expired(
    principal: Authenticated = Depends(require_permission(Permission.MANAGE_ADMINS)),
    db: DBSession = Depends(get_db),
):
    result = await maintenance.purge_expired(db)
    return PurgeResponse(**result)
