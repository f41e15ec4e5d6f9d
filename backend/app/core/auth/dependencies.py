from typing import Annotated, Iterable, Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from app.api.users.models import SystemRole
from app.core.auth.authentication import bearer_scheme, get_user
from app.core.auth.jwt import decode_jwt_token
from app.core.auth.permissions import Actor
from app.core.validations.exceptions import (
    PermissionDeniedError,
    UnauthenticatedError,
)
from app.db.core import SessionDep


async def get_current_actor(
    credentials: Annotated[
        Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)
    ],
    session: SessionDep,
) -> Optional[Actor]:
    if credentials is None or not credentials.credentials:
        return None
    try:
        payload = decode_jwt_token(credentials.credentials)
    except ExpiredSignatureError:
        raise UnauthenticatedError("Token has expired", error_code="TOKEN_EXPIRED")
    except InvalidTokenError:
        raise UnauthenticatedError()
    user_id = payload.get("sub")
    if not user_id:
        raise UnauthenticatedError()
    user = await get_user(session, str(user_id))
    if user is None:
        raise UnauthenticatedError()
    return Actor(
        id=user.id, system_role=user.system_role, current_role=user.current_role
    )


def require_roles(required_roles: Iterable[SystemRole] | None = None, optional=False):
    """
    Creates a dependency resolving the calling Actor and checking its role.

    Args:
        required_roles: roles allowed through; ``None`` admits any signed-in user
        optional: return ``None`` instead of failing for anonymous callers

    Returns:
        Dependency function that yields the Actor
    """
    allowed = set(required_roles) if required_roles else None

    async def role_checker(
        actor: Annotated[Optional[Actor], Depends(get_current_actor)],
    ) -> Optional[Actor]:
        if actor is None:
            if optional:
                return None
            raise UnauthenticatedError()
        if allowed is not None and actor.system_role not in allowed:
            raise PermissionDeniedError()
        return actor

    return role_checker


AuthActor = Annotated[Actor, Depends(require_roles())]
AdminActor = Annotated[
    Actor, Depends(require_roles([SystemRole.ADMIN, SystemRole.SUPER_ADMIN]))
]
OptionalActor = Annotated[Optional[Actor], Depends(require_roles(optional=True))]
