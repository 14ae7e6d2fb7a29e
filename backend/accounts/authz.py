# accounts/authz.py
"""
Authorization utilities for the brokerage back office.

Provides:
- ActorContext: Immutable context for the current request
- resolve_actor: Extract actor context from request
- require: Check permissions and raise if not granted

Permissions are plain Django model permissions ("app_label.codename"):

    trades.finalize_trade
    ledger.post_journal_entry
    ledger.clear_ledger
    efts.manage_counters

Superusers pass every check. Everything else an authenticated user may
do is governed by DRF's IsAuthenticated default.
"""

from dataclasses import dataclass
from typing import FrozenSet

from django.core.exceptions import PermissionDenied
from rest_framework.exceptions import NotAuthenticated


FINALIZE_TRADE = "trades.finalize_trade"
POST_JOURNAL_ENTRY = "ledger.post_journal_entry"
CLEAR_LEDGER = "ledger.clear_ledger"
MANAGE_COUNTERS = "efts.manage_counters"


@dataclass(frozen=True)
class ActorContext:
    """
    Who is performing a command.

    Attributes:
        user: The authenticated user
        perms: Permission codes resolved at request time
    """
    user: object  # User model
    perms: FrozenSet[str]

    def has(self, code: str) -> bool:
        if getattr(self.user, "is_superuser", False):
            return True
        return code in self.perms

    @property
    def is_authenticated(self) -> bool:
        return bool(getattr(self.user, "is_authenticated", False))

    @property
    def label(self) -> str:
        """Name recorded on audit fields such as ``cleared_by``."""
        return self.user.get_username() or "user"


def actor_for_user(user) -> ActorContext:
    """Build an ActorContext with the user's current permissions."""
    return ActorContext(user=user, perms=frozenset(user.get_all_permissions()))


def resolve_actor(request) -> ActorContext:
    """
    Extract ActorContext from the current request.

    Permissions are loaded fresh on every request so grants and
    revocations take effect immediately.

    Raises:
        NotAuthenticated: If user is not authenticated
    """
    user = getattr(request, "user", None)

    if not user or not user.is_authenticated:
        raise NotAuthenticated("Authentication required.")

    return actor_for_user(user)


def require(actor: ActorContext, code: str) -> None:
    """
    Require that the actor has a specific permission.

    Raises:
        PermissionDenied: If permission is not granted

    Example:
        require(actor, FINALIZE_TRADE)
    """
    if not actor.has(code):
        raise PermissionDenied(f"Permission denied: {code}")
