from dataclasses import dataclass, field
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, ExpiredSignatureError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from online_library.core.exceptions import authorization_error, forbidden
from online_library.database.db import MAX_ID
from online_library.database.db_depends import get_db
from online_library.models import User
from online_library.models.enum import UserRole
from online_library.utils.jwt import (
    decode_access_token,
    roles_from_claims,
    subject_from_claims,
)

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


@dataclass
class Principal:
    """Caller identity extracted from a validated bearer token."""

    user_id: int
    roles: set[str] = field(default_factory=set)

    @property
    def is_admin(self) -> bool:
        return UserRole.ADMIN.value in self.roles


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Principal:
    """
    Validate the bearer token and return the caller.

    Any failure (no token, expired, bad signature, malformed,
    subject that is not an integer) ends with 401.
    """
    if credentials is None or not credentials.credentials:
        logger.warning("❌ Authentication failed: no token")
        authorization_error("Not authenticated")

    try:
        claims = decode_access_token(credentials.credentials)
    except ExpiredSignatureError:
        logger.warning("❌ Token expired")
        authorization_error("Token has expired")
    except JWTError as e:
        logger.warning(f"❌ JWT error: {e}")
        authorization_error("Could not validate credentials")

    subject = subject_from_claims(claims)
    try:
        user_id = int(str(subject))
    except (TypeError, ValueError):
        user_id = None
    if user_id is None or not 1 <= user_id <= MAX_ID:
        logger.warning(f"❌ Token subject is not a user id: {subject!r}")
        authorization_error("Invalid token subject")

    principal = Principal(user_id=user_id, roles=roles_from_claims(claims))
    logger.debug(f"✅ Token decoded: user_id={principal.user_id}, roles={principal.roles}")
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def require_admin(principal: CurrentPrincipal) -> Principal:
    """Authenticated and holding the admin role, otherwise 403."""
    if not principal.is_admin:
        logger.warning(f"⛔ User {principal.user_id} is not an admin")
        forbidden("Admin role required")
    return principal


async def get_current_user(
    principal: CurrentPrincipal,
    db: AsyncSession = Depends(get_db),
) -> User:
    """Authenticated caller whose user row exists."""
    user = await db.get(User, principal.user_id)
    if not user:
        logger.warning(f"❌ User {principal.user_id} not found in database")
        authorization_error("User not found")
    return user


AdminPrincipal = Annotated[Principal, Depends(require_admin)]
CurrentUser = Annotated[User, Depends(get_current_user)]
