from __future__ import annotations

from typing import Optional

from src.medinote_mock.domain.models.user import User
from src.medinote_mock.errors import NotFoundError, ValidationError
from src.medinote_mock.infra.db.inmemory import InMemoryStore


class UserService:
    """Very small user lookup over the seeded accounts.

    Accounts are fixture data; there is no sign-up flow in the mock.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get_user(self, user_id: str) -> Optional[User]:
        with self._store.lock:
            return self._store.users.get(user_id)

    def find_by_email(self, email: Optional[str]) -> User:
        if not email:
            raise ValidationError("email parameter required")
        with self._store.lock:
            for user in self._store.users.values():
                if user.email == email:
                    return user
        raise NotFoundError("User not found")
