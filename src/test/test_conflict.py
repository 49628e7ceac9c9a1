"""一意制約違反の構造的判定のテスト"""
import os
import sqlite3
import sys

# Add path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from tortoise.exceptions import IntegrityError

from src.infra.tortoise_client.conflict import ConflictKind, classify_integrity_error

EMAIL_CONSTRAINT = "users_email_key"


class FakeUniqueViolationError(Exception):
    """asyncpgのUniqueViolationErrorと同じ属性を持つ例外"""
    sqlstate = "23505"

    def __init__(self, message, constraint_name):
        super().__init__(message)
        self.constraint_name = constraint_name


class FakeDiag:
    def __init__(self, constraint_name):
        self.constraint_name = constraint_name


class FakePsycopgError(Exception):
    """psycopgのUniqueViolationと同じ属性を持つ例外"""
    sqlstate = "23505"

    def __init__(self, message, constraint_name):
        super().__init__(message)
        self.diag = FakeDiag(constraint_name)


def _sqlite_error(code):
    err = sqlite3.IntegrityError("constraint failed")
    err.sqlite_errorcode = code
    return err


class TestClassifyIntegrityError:

    def test_postgres_email_constraint_is_unique_email(self):
        exc = IntegrityError(FakeUniqueViolationError("duplicate key", EMAIL_CONSTRAINT))

        assert classify_integrity_error(exc, EMAIL_CONSTRAINT) is ConflictKind.UNIQUE_EMAIL

    def test_postgres_other_constraint_is_other(self):
        exc = IntegrityError(FakeUniqueViolationError("duplicate key", "users_pkey"))

        assert classify_integrity_error(exc, EMAIL_CONSTRAINT) is ConflictKind.OTHER

    def test_psycopg_diagnostics_are_used(self):
        exc = IntegrityError(FakePsycopgError("duplicate key", EMAIL_CONSTRAINT))

        assert classify_integrity_error(exc, EMAIL_CONSTRAINT) is ConflictKind.UNIQUE_EMAIL

    def test_configured_constraint_name_is_respected(self):
        exc = IntegrityError(FakeUniqueViolationError("duplicate key", "uniq_users_email"))

        assert classify_integrity_error(exc, "uniq_users_email") is ConflictKind.UNIQUE_EMAIL
        assert classify_integrity_error(exc, EMAIL_CONSTRAINT) is ConflictKind.OTHER

    def test_message_text_alone_is_not_enough(self):
        exc = IntegrityError(Exception('duplicate key value violates unique constraint "users_email_key"'))

        assert classify_integrity_error(exc, EMAIL_CONSTRAINT) is ConflictKind.OTHER

    def test_sqlite_unique_code_is_unique_email(self):
        exc = IntegrityError(_sqlite_error(2067))

        assert classify_integrity_error(exc, EMAIL_CONSTRAINT) is ConflictKind.UNIQUE_EMAIL

    def test_sqlite_primary_key_code_is_other(self):
        exc = IntegrityError(_sqlite_error(1555))

        assert classify_integrity_error(exc, EMAIL_CONSTRAINT) is ConflictKind.OTHER

    def test_driver_error_found_through_cause(self):
        try:
            try:
                raise FakeUniqueViolationError("duplicate key", EMAIL_CONSTRAINT)
            except FakeUniqueViolationError as e:
                raise IntegrityError("wrapped") from e
        except IntegrityError as exc:
            assert classify_integrity_error(exc, EMAIL_CONSTRAINT) is ConflictKind.UNIQUE_EMAIL
