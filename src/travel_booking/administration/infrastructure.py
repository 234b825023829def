"""
Инфраструктурный слой контекста администрирования.
"""

from typing import Dict, Iterable, List, Optional

from ..shared_kernel import UserId
from . import interfaces as ports
from .domain import User, UserRole, is_admin


class InMemoryUserDirectory(ports.IUserDirectory):
    """Справочник пользователей в памяти."""

    def __init__(self, users: Iterable[User] = ()):
        self._users: Dict[UserId, User] = {}
        for user in users:
            self.add(user)

    def get_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    def add(self, user: User) -> None:
        if user.id in self._users:
            raise ValueError(f"User with id {user.id} already exists")
        self._users[user.id] = user

    def is_admin(self, user_id: UserId) -> bool:
        return is_admin(self._users.get(user_id))


def sample_users() -> List[User]:
    """Тестовые пользователи."""
    return [
        User(id=101, name="sachin", email="sac@gmail.com", location="Hubli"),
        User(id=102, name="alwyn", email="alw@gmail.com", location="Hubli"),
        User(id=103, name="pavan", email="pav123@gmail.com", location="Gadag"),
        User(
            id=1001,
            name="ascii",
            email="as@gmail.com",
            location="Bangalore",
            role=UserRole.ADMIN,
        ),
        User(
            id=1002,
            name="robert",
            email="rob@gmail.com",
            location="Belgaum",
            role=UserRole.ADMIN,
        ),
    ]
