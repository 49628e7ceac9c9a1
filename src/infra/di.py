from typing import Optional

from ..port.password_hasher import PasswordHasher
from ..port.user_repository import UserRepository
from ..usecase.user_management.create_user import CreateUserUseCase
from .auth import Argon2PasswordHasher
from .config import Settings
from .logging_config import configure_logging
from .tortoise_client.user_repository import TortoiseUserRepository


class DIContainer:
    """
    依存性注入コンテナ

    設定を明示的に受け取り、各インスタンスをコンテナ単位で遅延生成・保持する。
    モジュールレベルのグローバルインスタンスは持たない。
    生成時に設定のログレベルをプロジェクトのロガーへ適用する。
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        configure_logging(settings)
        self._password_hasher: Optional[PasswordHasher] = None
        self._user_repository: Optional[UserRepository] = None
        self._create_user_usecase: Optional[CreateUserUseCase] = None

    @property
    def password_hasher(self) -> PasswordHasher:
        if self._password_hasher is None:
            self._password_hasher = Argon2PasswordHasher.from_settings(self.settings)
        return self._password_hasher

    @property
    def user_repository(self) -> UserRepository:
        if self._user_repository is None:
            self._user_repository = TortoiseUserRepository(
                email_constraint=self.settings.email_unique_constraint
            )
        return self._user_repository

    @property
    def create_user_usecase(self) -> CreateUserUseCase:
        if self._create_user_usecase is None:
            self._create_user_usecase = CreateUserUseCase(
                self.user_repository, self.password_hasher
            )
        return self._create_user_usecase
