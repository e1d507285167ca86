"""Authentication and role-based authorization."""

from inspection_api.security.roles import Role
from inspection_api.security.tokens import (
    TokenPayload,
    decode_token,
    require_any_role,
    require_roles,
    verify_token,
)

__all__ = [
    "Role",
    "TokenPayload",
    "decode_token",
    "verify_token",
    "require_roles",
    "require_any_role",
]
