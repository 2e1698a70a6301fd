"""User domain service: verify Basic credentials against the identity store."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from config.settings import settings
from src.cc_common.errors import UnauthenticatedError
from src.cc_gateway.auth.password import hash_password, verify_password
from src.cc_gateway.user.models import Principal
from src.cc_gateway.user.repository import UserRepository, UserRepositoryProtocol

logger = logging.getLogger(__name__)

# Checked when the username is unknown so every rejection costs one bcrypt verify.
_DUMMY_PASSWORD_HASH = hash_password("cash-card-unknown-user")


class UserService:
    """Stateless service; instantiate once, reuse across requests."""

    def __init__(self, repo: UserRepositoryProtocol | None = None) -> None:
        self._repo: UserRepositoryProtocol = repo or UserRepository()

    async def authenticate(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> Principal:
        """Return the Principal for a matching username/password pair.

        Unknown username and wrong password raise the same UnauthenticatedError
        after the same amount of work. bcrypt runs in the threadpool, off the
        event loop.
        """
        credential = await self._repo.get_by_username(db, username)

        password_hash = credential.password_hash if credential else _DUMMY_PASSWORD_HASH
        matches = await run_in_threadpool(verify_password, password, password_hash)

        if credential is None or not matches:
            logger.info("Rejected Basic credentials for username=%s", username)
            raise UnauthenticatedError(settings.AUTH_REALM)

        return Principal(username=credential.username, role=credential.role)
