"""Mock user service.

Nothing is persisted: the listing is a fixed sample and every created user
gets a fresh random id, so repeated calls are independent of each other.
"""

import logging
import random
from dataclasses import dataclass
from datetime import UTC, datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    created_at: datetime | None = None


SAMPLE_USERS = (
    User(id=1, name="John Doe", email="john@example.com"),
    User(id=2, name="Jane Smith", email="jane@example.com"),
)


class UserService:
    """Serves the sample user listing and echoes created users."""

    def get_all(self) -> list[User]:
        return list(SAMPLE_USERS)

    def create(self, name: str, email: str) -> User:
        user = User(
            id=random.randrange(1000),
            name=name,
            email=email,
            created_at=datetime.now(UTC),
        )
        logger.info("User created", extra={"user_id": user.id})
        return user
