"""FastAPI dependencies: get_current_principal, require_card_owner.

Usage in any protected router:
    from src.cc_gateway.auth.dependencies import require_card_owner

    @router.get("/protected")
    async def protected(principal: Principal = Depends(require_card_owner)):
        ...

Every request is authenticated from its own Authorization header; nothing is
kept between requests.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_common.database import get_db_session
from src.cc_common.errors import ForbiddenError, UnauthenticatedError
from src.cc_gateway.user.models import Principal
from src.cc_gateway.user.service import UserService

# auto_error=False: a missing header is reported through UnauthenticatedError so
# every 401 shares the same empty body and WWW-Authenticate challenge.
basic_scheme = HTTPBasic(realm=settings.AUTH_REALM, auto_error=False)

_user_service = UserService()


def get_user_service() -> UserService:
    return _user_service


async def get_current_principal(
    credentials: Annotated[HTTPBasicCredentials | None, Depends(basic_scheme)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> Principal:
    """Validate the Basic credentials and return the caller's Principal.

    Raises HTTP 401 if the header is missing or the credentials do not match.
    """
    if credentials is None:
        raise UnauthenticatedError(settings.AUTH_REALM)
    return await user_service.authenticate(credentials.username, credentials.password, db)


async def require_card_owner(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Verify the caller holds the CARD-OWNER role.

    Raises HTTP 403 before any cash card lookup happens.
    """
    if not principal.is_card_owner:
        raise ForbiddenError()
    return principal
