"""Role-based authorization rules.

Everything here is pure: callers load the records first and hand in the
owner id, so existence is always checked before authorization.
"""

from dataclasses import dataclass

from app.api.users.models import CurrentRole, SystemRole
from app.core.validations.exceptions import PermissionDeniedError


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a request."""

    id: str
    system_role: SystemRole
    current_role: CurrentRole = CurrentRole.ATTENDEE

    @property
    def is_super_admin(self) -> bool:
        return self.system_role == SystemRole.SUPER_ADMIN

    @property
    def is_admin(self) -> bool:
        return self.system_role in (SystemRole.ADMIN, SystemRole.SUPER_ADMIN)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str | None = None


ALLOW = Decision(True)


def evaluate(
    role: SystemRole, actor_id: str, owner_id: str | None, action: str
) -> Decision:
    if role == SystemRole.SUPER_ADMIN:
        return ALLOW
    if role == SystemRole.ADMIN:
        if owner_id is not None and actor_id == owner_id:
            return ALLOW
        return Decision(False, f"You can only {action} events that you organize")
    return Decision(False, f"You do not have permission to {action} events")


def ensure_allowed(actor: Actor, owner_id: str | None, action: str) -> None:
    decision = evaluate(actor.system_role, actor.id, owner_id, action)
    if not decision.allowed:
        raise PermissionDeniedError(decision.reason)


def can_manage_event(actor: Actor, organizer_id: str | None) -> bool:
    return evaluate(actor.system_role, actor.id, organizer_id, "manage").allowed


def ensure_participant_access(
    actor: Actor,
    organizer_id: str | None,
    action: str,
    target_user_id: str | None = None,
    is_approved_volunteer: bool = False,
) -> None:
    """Like ``ensure_allowed`` but also admits the target user themselves and
    approved volunteers of the event."""
    decision = evaluate(actor.system_role, actor.id, organizer_id, action)
    if decision.allowed:
        return
    if target_user_id is not None and actor.id == target_user_id:
        return
    if is_approved_volunteer:
        return
    raise PermissionDeniedError(decision.reason)
