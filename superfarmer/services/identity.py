"""User, role and authentication services."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.cache import Cache
from superfarmer.core.config import settings
from superfarmer.core.exceptions import BadRequestError, ConflictError
from superfarmer.core.messaging import Publisher
from superfarmer.core.security import (
    create_access_token,
    generate_otp,
    hash_password,
    verify_password,
)
from superfarmer.domain.role import FARMER_ROLE_ID, Role
from superfarmer.domain.user import User
from superfarmer.repositories.identity import RoleRepository, UserRepository
from superfarmer.schemas.identity import RoleCreate, RoleOut, UserCreate, UserOut, UserUpdate
from superfarmer.services.base import CrudService

logger = logging.getLogger(__name__)


class RoleService(CrudService[Role]):
    entity = "Role"
    repository_cls = RoleRepository
    out_schema = RoleOut

    async def create(self, data: RoleCreate) -> Role:
        if await self._repo.find_one(name=data.name, include_deleted=True):
            raise ConflictError(f"Role '{data.name}' already exists")
        return await super().create(data)


class UserService(CrudService[User]):
    entity = "User"
    repository_cls = UserRepository
    out_schema = UserOut
    cache_namespace = "users"

    async def create(self, data: UserCreate, role_id: int = FARMER_ROLE_ID) -> User:
        if await self._repo.get_by_email(data.email, include_deleted=True):
            raise ConflictError(f"Email '{data.email}' is already registered")
        fields = data.model_dump(exclude_none=True)
        fields["password"] = hash_password(data.password)
        user = await self._repo.create(role_id=role_id, **fields)
        self._invalidate()
        logger.info("Registered user %s", user.id)
        return user

    async def update(self, user_id: str, data: UserUpdate) -> User:
        user = await self.get(user_id)
        changes = data.model_dump(exclude_none=True, exclude_unset=True)
        if "email" in changes and changes["email"] != user.email:
            if await self._repo.get_by_email(changes["email"], include_deleted=True):
                raise ConflictError(f"Email '{changes['email']}' is already registered")
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])
        updated = await self._repo.update(user_id, **changes)
        self._invalidate()
        return updated  # type: ignore[return-value]


class AuthService:
    """Login and e-mail one-time-password verification."""

    def __init__(self, session: AsyncSession, cache: Cache, publisher: Publisher | None = None):
        self._users = UserRepository(session)
        self._cache = cache
        self._publisher = publisher

    async def login(self, email: str, password: str) -> tuple[User, str]:
        user = await self._users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            raise BadRequestError("Invalid email or password")
        return user, create_access_token(user.id, user.role_id)

    @staticmethod
    def _otp_key(email: str) -> str:
        return f"otp:{email.lower()}"

    async def send_otp(self, email: str) -> None:
        user = await self._users.get_by_email(email)
        if user is None:
            raise BadRequestError(f"No user registered with '{email}'")
        otp = generate_otp()
        await self._cache.set(self._otp_key(email), otp, ttl=settings.otp_ttl_seconds)
        await self._publisher.publish_mail({"to": user.email, "otp": otp})

    async def verify_otp(self, email: str, otp: str) -> None:
        stored = await self._cache.get(self._otp_key(email))
        if stored is None:
            raise BadRequestError("OTP not found or expired")
        if stored != otp:
            raise BadRequestError("Invalid OTP")
        await self._cache.delete(self._otp_key(email))
