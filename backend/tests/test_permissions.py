"""
Tests for the role evaluator and composite identifiers.
"""

import pytest

from app.api.users.models import SystemRole
from app.core.auth.permissions import (
    Actor,
    can_manage_event,
    ensure_allowed,
    ensure_participant_access,
    evaluate,
)
from app.core.utils.keys import CompositeKey, generate_object_name
from app.core.validations.exceptions import (
    PermissionDeniedError,
    RequestValidationError,
)


def test_super_admin_is_always_allowed():
    decision = evaluate(SystemRole.SUPER_ADMIN, "a", "someone-else", "update")
    assert decision.allowed
    assert decision.reason is None


def test_admin_allowed_only_on_own_events():
    assert evaluate(SystemRole.ADMIN, "a", "a", "update").allowed
    decision = evaluate(SystemRole.ADMIN, "a", "b", "update")
    assert not decision.allowed
    assert decision.reason == "You can only update events that you organize"


def test_admin_denied_without_owner():
    assert not evaluate(SystemRole.ADMIN, "a", None, "delete").allowed


def test_user_is_denied():
    decision = evaluate(SystemRole.USER, "a", "a", "delete")
    assert not decision.allowed
    assert decision.reason == "You do not have permission to delete events"


def test_ensure_allowed_raises_with_reason():
    actor = Actor(id="a", system_role=SystemRole.ADMIN)
    with pytest.raises(PermissionDeniedError) as exc_info:
        ensure_allowed(actor, "b", "update status for")
    assert exc_info.value.status_code == 403
    assert exc_info.value.message == (
        "You can only update status for events that you organize"
    )


def test_can_manage_event():
    assert can_manage_event(Actor(id="x", system_role=SystemRole.SUPER_ADMIN), "y")
    assert can_manage_event(Actor(id="x", system_role=SystemRole.ADMIN), "x")
    assert not can_manage_event(Actor(id="x", system_role=SystemRole.USER), "x")


def test_participant_access_admits_self_and_volunteers():
    user = Actor(id="u", system_role=SystemRole.USER)
    ensure_participant_access(user, "org", "view attendees for", target_user_id="u")
    ensure_participant_access(
        user, "org", "view attendees for", is_approved_volunteer=True
    )
    with pytest.raises(PermissionDeniedError):
        ensure_participant_access(
            user, "org", "view attendees for", target_user_id="other"
        )


def test_composite_key_round_trip():
    key = CompositeKey.parse("user-1:event-9")
    assert key == CompositeKey("user-1", "event-9")
    assert str(key) == "user-1:event-9"


@pytest.mark.parametrize("token", ["", "abc", "a:b:c", ":b", "a: "])
def test_composite_key_rejects_malformed(token):
    with pytest.raises(RequestValidationError) as exc_info:
        CompositeKey.parse(token)
    assert exc_info.value.message == (
        'Invalid attendance ID format - must be "userId:eventId"'
    )


def test_generate_object_name_keeps_extension():
    name = generate_object_name("My Poster (final).PNG", prefix="general/")
    assert name.startswith("general/my-poster-final-")
    assert name.endswith(".png")
    assert generate_object_name("My Poster (final).PNG") != generate_object_name(
        "My Poster (final).PNG"
    )
