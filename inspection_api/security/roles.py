"""Role names carried in access tokens, and the role sets endpoints accept."""

from typing import Tuple


class Role:
    ADMIN = "Role.Admin"
    USER = "Role.User"
    READ_ONLY = "Role.ReadOnly"

    # Any authenticated role
    ANY: Tuple[str, ...] = (ADMIN, USER, READ_ONLY)
