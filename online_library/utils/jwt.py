from datetime import datetime, timedelta, timezone
from jose import jwt
from online_library.core.config import settings
import logging

logger = logging.getLogger(__name__)

# Claim names used by .NET token issuers
DOTNET_NAME_ID_CLAIM = (
    "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/nameidentifier"
)
DOTNET_ROLE_CLAIM = "http://schemas.microsoft.com/ws/2008/06/identity/claims/role"


def create_access_token(
    subject: str | int,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(subject),
        "exp": datetime.now(timezone.utc) + expires_delta,
        "iat": datetime.now(timezone.utc),
    }
    if role is not None:
        to_encode["role"] = role
    token = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    logger.debug(f"✅ JWT created: sub={subject}, role={role}, exp={to_encode['exp']}")
    return token


def decode_access_token(token: str) -> dict:
    # Signature and an unexpired exp are required; issuer and audience are not checked
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={
            "verify_aud": False,
            "verify_iss": False,
            "verify_sub": False,
            "require_exp": True,
        },
    )


def subject_from_claims(claims: dict) -> str | None:
    return claims.get("sub") or claims.get(DOTNET_NAME_ID_CLAIM)


def roles_from_claims(claims: dict) -> set[str]:
    roles: set[str] = set()
    for name in ("role", DOTNET_ROLE_CLAIM):
        value = claims.get(name)
        if isinstance(value, str):
            roles.add(value)
        elif isinstance(value, (list, tuple)):
            roles.update(v for v in value if isinstance(v, str))
    return roles
