"""Identity store: Protocol plus the SQLAlchemy implementation.

Principals are provisioned out of band (seed migration); this module only
reads them.
"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_common.enums import Role
from src.cc_gateway.user.db_models import UserModel
from src.cc_gateway.user.models import Credential


class UserRepositoryProtocol(Protocol):
    async def get_by_username(
        self, db: AsyncSession, username: str
    ) -> Credential | None: ...


class UserRepository:
    async def get_by_username(
        self, db: AsyncSession, username: str
    ) -> Credential | None:
        result = await db.execute(
            select(UserModel).where(UserModel.username == username)
        )
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return Credential(
            username=user.username,
            password_hash=user.password_hash,
            role=Role(user.role),
        )
