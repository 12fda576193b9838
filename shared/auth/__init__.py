"""
Authentication Module
=====================

Caller identity for the RMF assessment service.

Tokens are issued by the identity service; this module only decodes them
and exposes FastAPI dependencies for route protection.

Usage:
    from shared.auth import User, get_current_user, require_assessor

    @router.put("/{assessment_id}/framework")
    async def update(user: User = Depends(require_assessor)):
        ...
"""

from shared.auth.dependencies import (
    User,
    get_current_user,
    oauth2_scheme,
    require_admin,
    require_assessor,
    require_auditor,
    require_roles,
)
from shared.auth.jwt import TokenData, create_access_token, decode_token

__all__ = [
    # JWT
    "create_access_token",
    "decode_token",
    "TokenData",
    # Dependencies
    "User",
    "get_current_user",
    "require_roles",
    "require_admin",
    "require_assessor",
    "require_auditor",
    "oauth2_scheme",
]
