import logging
from typing import Optional
from uuid import UUID

from tortoise import timezone
from tortoise.exceptions import IntegrityError

from ...port.user_repository import UserRepository
from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import DuplicateEmailError
from .conflict import ConflictKind, classify_integrity_error
from .models import User

logger = logging.getLogger(__name__)


class TortoiseUserRepository(UserRepository):
    """
    Tortoise ORM を用いた UserRepository の実装

    接続の初期化・終了は呼び出し側（init_db / close_db）が管理する。
    """

    def __init__(self, email_constraint: str = "users_email_key"):
        self._email_constraint = email_constraint

    async def find_by_id(self, user_id: UUID) -> Optional[UserEntity]:
        user = await User.filter(id=user_id).first()
        if not user:
            return None
        return self._to_entity(user)

    async def find_by_email(self, email: str) -> Optional[UserEntity]:
        user = await User.filter(email=email).first()
        if not user:
            return None
        return self._to_entity(user)

    async def count_by_id(self, user_id: UUID) -> int:
        return await User.filter(id=user_id).count()

    async def save(self, user: UserEntity) -> None:
        """
        idをキーにupsertする

        既存行があればemail・password_hashを上書きし、なければ挿入する。
        emailの一意制約違反はDuplicateEmailErrorに変換し、それ以外はそのまま送出する。
        """
        try:
            updated = await User.filter(id=user.id).update(
                email=user.email,
                password_hash=user.password_hash,
                updated_at=timezone.now(),
            )
            if updated:
                return

            await User.create(
                id=user.id,
                email=user.email,
                password_hash=user.password_hash,
            )
        except IntegrityError as e:
            if classify_integrity_error(e, self._email_constraint) is ConflictKind.UNIQUE_EMAIL:
                logger.debug("Email uniqueness conflict", extra={"user_id": str(user.id)})
                raise DuplicateEmailError(user.email) from e
            raise

    def _to_entity(self, user: User) -> UserEntity:
        return UserEntity(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
