from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

@dataclass
class UserEntity:
    """
    ユーザーのビジネスドメインモデル

    emailは大文字小文字を区別する一意キー。password_hashは常にハッシュ済みの値。
    """
    id: UUID
    email: str
    password_hash: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
