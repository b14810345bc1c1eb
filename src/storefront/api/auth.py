"""Request-scoped identity for the storefront API.

Every protected route depends on ``current_principal`` (or
``require_admin``), which resolves the bearer token into a ``Principal``
and hands it to the route explicitly.
"""

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from storefront.identity.security import InvalidTokenError, decode_access_token
from storefront.identity.user import UserRole
from storefront.utils.logging import add_context

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise _unauthenticated("Not authenticated")

    try:
        claims = decode_access_token(credentials.credentials)
    except InvalidTokenError as exc:
        logger.info("Rejected bearer token", reason=str(exc))
        raise _unauthenticated("Invalid or expired token") from exc

    principal = Principal(user_id=claims["sub"], role=claims["role"])
    add_context(user_id=principal.user_id)
    return principal


async def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return principal
