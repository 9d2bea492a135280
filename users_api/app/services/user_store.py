"""
In-memory storage for users.

``UserStore`` is the sole owner of the user collection and of the id
counter.  Records are kept in a ``dict`` keyed by id: lookups are O(1)
and iteration follows insertion order, which updates preserve because
a record is replaced under its existing key.

All operations take an internal lock so the store can be shared by
request handlers running in FastAPI's thread pool.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..schemas.user import User


logger = logging.getLogger(__name__)

# Fields owned by the store; callers can never set them.
PROTECTED_FIELDS = frozenset({"id", "createdAt", "updatedAt", "created_at", "updated_at"})

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserNotFoundError(LookupError):
    """Raised when an id-based operation targets a missing user."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id


class UserStore:
    """Create, read, update and delete users held in process memory.

    Parameters
    ----------
    clock : Callable[[], datetime], optional
        Source of timestamps for ``createdAt``/``updatedAt``.  Defaults
        to the current UTC time.
    """

    INITIAL_ID = 1

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or utcnow
        self._lock = threading.Lock()
        self._users: Dict[int, User] = {}
        self._next_id = self.INITIAL_ID

    @staticmethod
    def _clean(attributes: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return {k: v for k, v in (attributes or {}).items() if k not in PROTECTED_FIELDS}

    def _get(self, user_id: int) -> User:
        user = self._users.get(user_id)
        if user is None:
            logger.debug("User %s not found", user_id)
            raise UserNotFoundError(user_id)
        return user

    def create(self, attributes: Optional[Mapping[str, Any]] = None) -> User:
        """Store a new user built from ``attributes`` and return it."""
        data = self._clean(attributes)
        with self._lock:
            now = self._clock()
            user = User.model_validate({
                **data,
                "id": self._next_id,
                "createdAt": now,
                "updatedAt": now,
            })
            self._users[user.id] = user
            self._next_id += 1
        logger.info("Created user %s", user.id)
        return user

    def find_all(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def find_one(self, user_id: int) -> User:
        with self._lock:
            return self._get(user_id)

    def update(self, user_id: int, attributes: Optional[Mapping[str, Any]] = None) -> User:
        """Overlay ``attributes`` on an existing user.

        The stored record is replaced by a new ``User`` in the same
        position.  ``updatedAt`` always moves forward, even if the clock
        has not advanced since the previous write.
        """
        changes = self._clean(attributes)
        with self._lock:
            current = self._get(user_id)
            updated_at = max(self._clock(), current.updated_at + _TICK)
            data = current.model_dump(by_alias=True)
            data.update(changes)
            data["updatedAt"] = updated_at
            user = User.model_validate(data)
            self._users[user_id] = user
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(changes)) or "no fields")
        return user

    def remove(self, user_id: int) -> Dict[str, Any]:
        with self._lock:
            self._get(user_id)
            del self._users[user_id]
        logger.info("Deleted user %s", user_id)
        return {"id": user_id, "message": f"User with ID {user_id} has been successfully deleted"}

    def find_by_email(self, email: str) -> Optional[User]:
        """Return the first user with ``email``, or ``None``."""
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def clear(self) -> Dict[str, str]:
        """Remove every user and restart ids at 1."""
        with self._lock:
            self._users.clear()
            self._next_id = self.INITIAL_ID
        logger.info("Cleared all users")
        return {"message": "All users have been cleared"}

    def search(self, term: Optional[str]) -> List[User]:
        """Users whose name or email contains ``term`` (case-insensitive)."""
        if not term:
            return self.find_all()
        needle = term.lower()
        return self.find_where(
            lambda u: any(needle in (value or "").lower() for value in (u.name, u.email))
        )

    def find_where(self, predicate: Callable[[User], bool]) -> List[User]:
        with self._lock:
            users = list(self._users.values())
        return [u for u in users if predicate(u)]
