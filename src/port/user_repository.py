from typing import Protocol, Optional
from uuid import UUID

from ..domain.entity.user_entity import UserEntity

class UserRepository(Protocol):
    """
    ユーザーデータの永続化インターフェース。

    emailの一意性はストレージ層の制約で保証される。実装は一意制約違反を
    DuplicateEmailErrorに変換し、それ以外のエラーはそのまま伝播させること。
    """

    async def find_by_id(self, user_id: UUID) -> Optional[UserEntity]:
        ...

    async def find_by_email(self, email: str) -> Optional[UserEntity]:
        ...

    async def save(self, user: UserEntity) -> None:
        """idをキーにしたupsert。存在すれば更新、なければ挿入する。"""
        ...

    async def count_by_id(self, user_id: UUID) -> int:
        ...
