"""
Brokerage Back-Office - Authentication Package

Session-based admin authentication with:
- Opaque server-side session tokens (fixed 7-day lifetime)
- bcrypt password hashing
- Single-use password reset tokens
- RBAC with deny-by-default
"""

from brokerage.auth.models import Admin, AdminSession, PasswordResetToken, Role
from brokerage.auth.dependencies import get_principal, require_permission
from brokerage.auth.rbac import Permission, authorize

__all__ = [
    "Admin",
    "AdminSession",
    "PasswordResetToken",
    "Role",
    "Permission",
    "authorize",
    "get_principal",
    "require_permission",
]
