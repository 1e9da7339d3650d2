"""
Brokerage Back-Office - Role-Based Access Control (RBAC)

Permission checks based on admin roles.
Policies are defined in policies.yaml and enforced through authorize().

Security:
- Deny-by-default: All privileged actions require explicit permission
- Role hierarchy is NOT inherited (explicit grants only)
- All denials are logged
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Set

import yaml

from brokerage.auth.principal import Authenticated, Principal
from brokerage.errors import AuthError, PermissionDeniedError


logger = logging.getLogger(__name__)

POLICY_PATH = Path(__file__).parent / "policies.yaml"


class Permission(str, Enum):
    """Granular permissions, resource:action style."""
    VIEW_ADMINS = "view:admins"
    MANAGE_ADMINS = "manage:admins"
    MANAGE_CONTENT = "manage:content"
    MANAGE_INBOX = "manage:inbox"


class RBACPolicy:
    """
    Role-to-permission mappings loaded from policies.yaml.

    Singleton; the file is read once per process.
    """

    _instance: Optional["RBACPolicy"] = None
    _policies: Dict[str, Set[str]] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_policies(POLICY_PATH)
        return cls._instance

    def _load_policies(self, policy_path: Path):
        if not policy_path.exists():
            # Default deny-all if no policy file
            logger.warning("RBAC policy file missing at %s; denying all", policy_path)
            self._policies = {}
            return

        with open(policy_path, "r") as f:
            config = yaml.safe_load(f) or {}

        self._policies = {
            role: set(perms)
            for role, perms in config.get("roles", {}).items()
        }

    def has_permission(self, role: str, permission: Permission) -> bool:
        """True if the role is explicitly granted the permission."""
        return permission.value in self._policies.get(role, set())

    def get_role_permissions(self, role: str) -> Set[str]:
        return set(self._policies.get(role, set()))


def authorize(principal: Principal, permission: Permission) -> Authenticated:
    """
    Single authorization gate for privileged operations.

    Returns:
        The authenticated principal, for the caller's convenience

    Raises:
        AuthError: The caller is anonymous
        PermissionDeniedError: The caller's role lacks the permission
    """
    if not isinstance(principal, Authenticated):
        raise AuthError("Authentication required")

    role = principal.role.value
    if not RBACPolicy().has_permission(role, permission):
        logger.warning(
            "Permission %s denied for admin %s (role=%s)",
            permission.value,
            principal.admin.id,
            role,
        )
        raise PermissionDeniedError(f"Permission denied: {permission.value}")

    return principal
