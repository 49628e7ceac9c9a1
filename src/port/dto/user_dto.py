from dataclasses import dataclass

@dataclass
class CreateUserDTO:
    """
    ユーザー作成用DTO
    """
    email: str
    raw_password: str
