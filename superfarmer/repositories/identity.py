"""Repositories for users and roles."""

from superfarmer.domain.role import Role
from superfarmer.domain.user import User
from superfarmer.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    model = Role


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str, *, include_deleted: bool = False) -> User | None:
        return await self.find_one(email=email.lower(), include_deleted=include_deleted)
