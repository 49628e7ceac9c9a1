"""
パスワードハッシュ化モジュール

このモジュールは、ユーザーのパスワードを保存用にハッシュ化し、平文との照合を行います。
passlibのCryptContextにArgon2スキームを設定して使用します。

主な機能:
- パスワードのハッシュ化（ソルトはハッシュ文字列に埋め込まれる）
- 平文パスワードとハッシュの照合
- パラメータ変更時の再ハッシュ要否判定

セキュリティ考慮事項:
- メモリ・CPU負荷の高いArgon2を使用し、弱いスキームへのフォールバックは行わない
- ハッシュ計算はイベントループを塞がないようワーカースレッドで実行する
- 平文パスワードやハッシュはログに出力しない
"""

import asyncio
import logging

from passlib.context import CryptContext
from passlib.exc import MissingBackendError, PasswordSizeError

from src.domain.exception.user_exceptions import PasswordHashingError, PasswordTooLongError
from src.infra.config import Settings

logger = logging.getLogger(__name__)


class Argon2PasswordHasher:
    """Argon2を用いたPasswordHasherの実装"""

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4):
        self._context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__rounds=time_cost,
            argon2__memory_cost=memory_cost,
            argon2__parallelism=parallelism,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Argon2PasswordHasher":
        return cls(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
        )

    async def hash(self, plaintext: str) -> str:
        """
        パスワードをハッシュ化する

        Args:
            plaintext (str): 平文パスワード

        Returns:
            str: ソルトとパラメータを含むArgon2ハッシュ文字列

        Raises:
            PasswordTooLongError: passlibの最大パスワード長を超えている場合
            PasswordHashingError: ハッシュ計算が完了できなかった場合
        """
        try:
            return await asyncio.to_thread(self._context.hash, plaintext)
        except PasswordSizeError as e:
            raise PasswordTooLongError(e.max_size) from e
        except (MissingBackendError, MemoryError) as e:
            logger.error("Password hashing failed", extra={"error_type": type(e).__name__})
            raise PasswordHashingError(str(e)) from e

    async def verify(self, plaintext: str, hashed: str) -> bool:
        """
        パスワードをハッシュと照合して検証する

        識別できない形式のハッシュは一致しないものとして扱う。

        Args:
            plaintext (str): 平文パスワード
            hashed (str): 保存済みのハッシュ

        Returns:
            bool: 一致する場合True、そうでなければFalse
        """
        try:
            return await asyncio.to_thread(self._context.verify, plaintext, hashed)
        except PasswordSizeError:
            return False
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be identified")
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """現在のパラメータより弱い設定で作られたハッシュならTrue"""
        try:
            return self._context.needs_update(hashed)
        except (ValueError, TypeError):
            return True
