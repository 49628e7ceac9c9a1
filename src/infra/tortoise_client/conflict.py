"""
一意制約違反の構造的な判定

TortoiseのIntegrityErrorが包んでいるドライバ例外を辿り、エラーメッセージの文字列ではなく
SQLSTATE・制約名・SQLite拡張エラーコードで衝突の種類を判定する。
"""
import sqlite3
from enum import Enum
from typing import Iterator


PG_UNIQUE_VIOLATION = "23505"
SQLITE_CONSTRAINT_UNIQUE = 2067


class ConflictKind(Enum):
    UNIQUE_EMAIL = "unique_email"
    OTHER = "other"


def _driver_errors(exc: BaseException) -> Iterator[BaseException]:
    """例外自身と、引数・原因として連なる例外を重複なく列挙する"""
    seen = set()
    stack = [exc]
    while stack:
        err = stack.pop()
        if err is None or id(err) in seen:
            continue
        seen.add(id(err))
        yield err
        stack.extend(arg for arg in err.args if isinstance(arg, BaseException))
        stack.append(err.__cause__)
        stack.append(err.__context__)


def _constraint_name(err: BaseException) -> str | None:
    # asyncpg exposes it directly, psycopg through the diagnostics object
    name = getattr(err, "constraint_name", None)
    if name is None:
        name = getattr(getattr(err, "diag", None), "constraint_name", None)
    return name


def classify_integrity_error(exc: BaseException, email_constraint: str) -> ConflictKind:
    """
    IntegrityErrorがemailの一意制約違反かどうかを判定する

    PostgreSQL: SQLSTATE 23505 かつ制約名が email_constraint と一致する場合。
    SQLite: 拡張エラーコードが SQLITE_CONSTRAINT_UNIQUE の場合。usersテーブルで
    主キー以外の一意制約はemailのみで、主キー違反は SQLITE_CONSTRAINT_PRIMARYKEY になる。
    """
    for err in _driver_errors(exc):
        if getattr(err, "sqlstate", None) == PG_UNIQUE_VIOLATION:
            if _constraint_name(err) == email_constraint:
                return ConflictKind.UNIQUE_EMAIL
            return ConflictKind.OTHER
        if isinstance(err, sqlite3.IntegrityError):
            if getattr(err, "sqlite_errorcode", None) == SQLITE_CONSTRAINT_UNIQUE:
                return ConflictKind.UNIQUE_EMAIL
            return ConflictKind.OTHER
    return ConflictKind.OTHER
