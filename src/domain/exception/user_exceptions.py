"""
ユーザー関連の例外クラス

このモジュールは、ユーザー管理に関する例外を定義します。
ユーザー作成、パスワードハッシュ化、永続化で発生するドメインエラーを統一的に管理します。
ストレージ層のその他のエラーはここでは変換せず、そのまま呼び出し元へ伝播します。
"""

from typing import Optional
from uuid import UUID

class UserException(Exception):
    """ユーザー関連の基底例外クラス"""
    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

class DuplicateEmailError(UserException):
    """指定のメールアドレスは既に登録されています。"""
    def __init__(self, email: str):
        super().__init__(f"Email already exists: {email}", "DUPLICATE_EMAIL")
        self.email = email

class UserCreationVerificationError(UserException):
    """書き込みは成功したが、作成したユーザーを読み戻せない場合の例外"""
    def __init__(self, user_id: UUID):
        super().__init__(f"Failed to verify created user: {user_id}", "CREATION_VERIFICATION_FAILED")
        self.user_id = user_id

class PasswordHashingError(UserException):
    """パスワードのハッシュ化に失敗した場合の例外"""
    def __init__(self, reason: str):
        super().__init__(f"Password hashing failed: {reason}", "PASSWORD_HASHING_FAILED")

class PasswordTooLongError(UserException):
    """パスワードがハッシュ化できる最大長を超えている場合の例外"""
    def __init__(self, max_size: int):
        super().__init__(f"Password exceeds maximum length of {max_size} characters", "PASSWORD_TOO_LONG")
        self.max_size = max_size
