"""
Caller identity, resolved once per request.

A request is either Anonymous or Authenticated(admin). Route handlers receive
one of the two and never probe raw admin records for a role or name.
"""

from dataclasses import dataclass
from typing import Union

from brokerage.auth.models import Admin, Role


@dataclass(frozen=True)
class Anonymous:
    is_authenticated = False


@dataclass(frozen=True)
class Authenticated:
    admin: Admin
    token: str
    is_authenticated = True

    @property
    def role(self) -> Role:
        return self.admin.role


Principal = Union[Anonymous, Authenticated]
