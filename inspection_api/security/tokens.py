"""
Bearer token verification and role checks.
Provides the dependencies route handlers use to require a role.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from inspection_api.config import settings
from inspection_api.exceptions import AuthenticationError, AuthorizationError
from inspection_api.security.roles import Role

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported as 401 by verify_token,
# not as FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenPayload:
    """Validated token claims the API cares about."""

    sub: str
    roles: List[str]
    name: Optional[str] = None
    exp: Optional[datetime] = None
    raw_claims: Dict[str, Any] = field(default_factory=dict)

    def has_any_role(self, roles: Sequence[str]) -> bool:
        return any(role in self.roles for role in roles)


ANONYMOUS_DEVELOPER = TokenPayload(sub="anonymous", roles=list(Role.ANY), name="Local developer")


def _extract_roles(claims: Dict[str, Any]) -> List[str]:
    roles: List[str] = []

    # Flat roles claim (Azure AD app roles)
    flat = claims.get("roles")
    if isinstance(flat, list):
        roles.extend(str(role) for role in flat)

    # Realm roles (Keycloak)
    realm_access = claims.get("realm_access")
    if isinstance(realm_access, dict):
        roles.extend(str(role) for role in realm_access.get("roles", []))

    return sorted(set(roles))


def decode_token(token: str) -> TokenPayload:
    """
    Decode and validate a JWT.

    Validates signature and expiry, and the audience when AUTH_AUDIENCE is set.

    Raises:
        AuthenticationError: The token is malformed, expired or fails verification.
    """
    decode_kwargs: Dict[str, Any] = {"algorithms": [settings.auth_jwt_algorithm]}
    if settings.auth_audience:
        decode_kwargs["audience"] = settings.auth_audience
    else:
        decode_kwargs["options"] = {"verify_aud": False}

    try:
        claims = jwt.decode(token, settings.auth_jwt_secret, **decode_kwargs)
    except JWTError as e:
        logger.warning("Token verification failed: %s", str(e))
        raise AuthenticationError(message="Invalid or expired token")

    subject = claims.get("sub")
    if not subject:
        raise AuthenticationError(message="Token has no subject")

    exp = claims.get("exp")
    return TokenPayload(
        sub=str(subject),
        roles=_extract_roles(claims),
        name=claims.get("name") or claims.get("preferred_username"),
        exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
        raw_claims=claims,
    )


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenPayload:
    """Dependency that verifies the bearer token and returns its claims."""
    if not settings.auth_enabled:
        return ANONYMOUS_DEVELOPER
    if credentials is None:
        raise AuthenticationError(message="Not authenticated")
    return decode_token(credentials.credentials)


def require_roles(*roles: str) -> Callable:
    """
    Build a dependency that requires the caller to hold at least one of `roles`.

    Usage:
        @router.get("/", dependencies=[Depends(require_roles(*Role.ANY))])
    """

    async def dependency(user: TokenPayload = Depends(verify_token)) -> TokenPayload:
        if not user.has_any_role(roles):
            logger.info("Caller %s lacks any of roles %s", user.sub, ", ".join(roles))
            raise AuthorizationError(required_roles=roles)
        return user

    return dependency


require_any_role = require_roles(*Role.ANY)
