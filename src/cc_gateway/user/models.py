"""Identity-store records and the per-request Principal."""

from dataclasses import dataclass

from src.cc_common.enums import Role


@dataclass(frozen=True)
class Credential:
    """A stored principal as read from the identity store."""

    username: str
    password_hash: str
    role: Role


@dataclass(frozen=True)
class Principal:
    """The authenticated caller. Passed explicitly to every cash card operation."""

    username: str
    role: Role

    @property
    def is_card_owner(self) -> bool:
        return self.role == Role.CARD_OWNER
