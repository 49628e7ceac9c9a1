from typing import Protocol

class PasswordHasher(Protocol):
    """
    パスワードハッシュ化のインターフェース。

    ハッシュにはソルトが埋め込まれるため、同じ平文でも毎回異なる値になる。
    照合には必ずverifyを使い、ハッシュ同士を比較しないこと。
    """

    async def hash(self, plaintext: str) -> str:
        ...

    async def verify(self, plaintext: str, hashed: str) -> bool:
        ...

    def needs_rehash(self, hashed: str) -> bool:
        ...
