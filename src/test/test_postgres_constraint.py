"""
PostgreSQL上での一意制約名の確認

DATABASE_URL に postgres:// のURLが設定されている場合のみ実行する
"""
import os
import sys
from uuid import uuid4

import pytest
import pytest_asyncio
from tortoise import Tortoise
from tortoise.exceptions import IntegrityError

# Add path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from src.domain.entity.user_entity import UserEntity
from src.domain.exception.user_exceptions import DuplicateEmailError
from src.infra.tortoise_client.config import build_tortoise_config
from src.infra.tortoise_client.conflict import ConflictKind, classify_integrity_error
from src.infra.tortoise_client.models import User
from src.infra.tortoise_client.user_repository import TortoiseUserRepository

POSTGRES_URL = os.environ.get("DATABASE_URL", "")
TEST_DOMAIN = "@pg-test.example"

pytestmark = pytest.mark.skipif(
    not POSTGRES_URL.startswith(("postgres://", "asyncpg://")),
    reason="DATABASE_URL does not point at PostgreSQL",
)


class TestPostgresEmailConstraint:

    @pytest_asyncio.fixture
    async def repo(self):
        pytest.importorskip("asyncpg")
        await Tortoise.init(config=build_tortoise_config(POSTGRES_URL))
        await Tortoise.generate_schemas(safe=True)
        yield TortoiseUserRepository()
        await User.filter(email__endswith=TEST_DOMAIN).delete()
        await Tortoise.close_connections()

    def _user(self, email):
        return UserEntity(id=uuid4(), email=email, password_hash="$argon2id$hash")

    @pytest.mark.asyncio
    async def test_generated_email_constraint_name(self, repo):
        email = f"{uuid4()}{TEST_DOMAIN}"
        first = self._user(email)
        second = self._user(email)
        await User.create(id=first.id, email=email, password_hash=first.password_hash)

        with pytest.raises(IntegrityError) as exc_info:
            await User.create(id=second.id, email=email, password_hash=second.password_hash)

        assert classify_integrity_error(exc_info.value, "users_email_key") is ConflictKind.UNIQUE_EMAIL

    @pytest.mark.asyncio
    async def test_save_reports_duplicate_email(self, repo):
        email = f"{uuid4()}{TEST_DOMAIN}"
        await repo.save(self._user(email))

        with pytest.raises(DuplicateEmailError):
            await repo.save(self._user(email))

        assert await User.filter(email=email).count() == 1
