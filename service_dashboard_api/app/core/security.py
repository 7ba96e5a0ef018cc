"""
Role gate for destructive catalog operations.

The dashboard has no login flow of its own.  Clients keep the
current user's role as a plain string (persisted locally by the
client) and send it with every request in the ``X-User-Role`` header.
Only the exact value configured as ``settings.admin_role`` (``admin``
by default) may delete services; any other value, including a missing
header, is refused.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, status

from .config import settings

ROLE_HEADER = "X-User-Role"


def get_current_role(role: Optional[str] = Header(None, alias=ROLE_HEADER)) -> str:
    """Return the role string sent by the client, or ``""`` when absent."""
    return role or ""


def is_admin(role: Optional[str]) -> bool:
    """Return True only for the exact admin role value."""
    return role == settings.admin_role


def require_admin(
    detail: str = "Only admin can delete services.",
) -> Callable[[str], str]:
    """Dependency factory that lets only the admin role through.

    Use it in endpoints via ``Depends(require_admin())``.  The role is
    compared exactly; no trimming or case folding is applied.  Refused
    requests raise HTTP 403 with ``detail`` as the message.
    """

    def _role_dependency(role: str = Depends(get_current_role)) -> str:
        if not is_admin(role):
            logging.getLogger(__name__).warning(
                "Refused admin-only request for role %r", role
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return role

    return _role_dependency
