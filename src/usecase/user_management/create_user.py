import logging
from uuid import uuid4

from ...port.user_repository import UserRepository
from ...port.password_hasher import PasswordHasher
from ...port.dto.user_dto import CreateUserDTO
from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import (
    DuplicateEmailError,
    UserCreationVerificationError,
)

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    ユーザー作成のユースケース実装

    ID採番 → パスワードのハッシュ化 → 保存 → 読み戻し の順に実行する。
    emailの一意性は事前チェックせず、ストレージの一意制約に委ねる。
    """
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher):
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    async def execute(self, user_dto: CreateUserDTO) -> UserEntity:
        user_id = uuid4()
        password_hash = await self.password_hasher.hash(user_dto.raw_password)

        new_user = UserEntity(
            id=user_id,
            email=user_dto.email,
            password_hash=password_hash,
        )

        try:
            await self.user_repository.save(new_user)
        except DuplicateEmailError:
            logger.warning("Email already registered", extra={"user_id": str(user_id)})
            raise

        created_user = await self.user_repository.find_by_id(user_id)
        if created_user is None:
            logger.error("Created user could not be read back", extra={"user_id": str(user_id)})
            raise UserCreationVerificationError(user_id)

        logger.info("User created", extra={"user_id": str(user_id)})
        return created_user
