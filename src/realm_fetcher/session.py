"""
Minimal session holders satisfying the User and UserContext protocols.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from .console import mask_sensitive


@dataclass
class SessionUser:
    """A logged-in user as far as request composition is concerned."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    request_headers: Dict[str, str] = field(default_factory=dict)

    def __repr__(self) -> str:
        """Safe repr that masks tokens."""
        return (
            f"SessionUser(access_token={mask_sensitive(self.access_token)!r}, "
            f"refresh_token={mask_sensitive(self.refresh_token)!r}, "
            f"request_headers={sorted(self.request_headers)!r})"
        )


@dataclass
class StaticUserContext:
    """UserContext whose current user is set explicitly (None when logged out)."""

    current_user: Optional[SessionUser] = None
