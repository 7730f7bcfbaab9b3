from typing import Optional

from fastapi import Depends, Request
from sqlmodel import Session

from .config import settings
from .db import get_session
from .models import User, UserType
from .security import decode_access_token
from .services.errors import PermissionDenied, Unauthorized
from .services.notifier import Notifier


def _token_from_request(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


def user_from_token(session: Session, token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        return None
    try:
        user = session.get(User, int(payload["sub"]))
    except (TypeError, ValueError):
        return None
    if not user or not user.is_active:
        return None
    return user


def get_current_user(request: Request, session: Session = Depends(get_session)) -> Optional[User]:
    """The user named by the bearer token or auth cookie, if any."""
    return user_from_token(session, _token_from_request(request))


def require_user(current_user: Optional[User] = Depends(get_current_user)) -> User:
    if not current_user:
        raise Unauthorized("Not authenticated")
    return current_user


def require_role(*roles: str):
    """Dependency factory that ensures a user has one of the required roles."""
    def role_checker(user: User = Depends(require_user)) -> User:
        if user.type not in roles:
            raise PermissionDenied("Permission denied")
        return user
    return role_checker


require_staff = require_role(UserType.TEACHER.value, UserType.ADMIN.value)
require_student = require_role(UserType.STUDENT.value)


def get_notifier(session: Session = Depends(get_session)) -> Notifier:
    return Notifier(session)
