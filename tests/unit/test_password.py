"""Unit tests for password hashing and strength rules."""

import pytest

from src.rc_gateway.auth.password import hash_password, validate_password, verify_password


class TestHashing:
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("Secret123", rounds=4)
        assert hashed.startswith("$2b$04$")
        assert verify_password("Secret123", hashed) is True
        assert verify_password("secret123", hashed) is False

    def test_default_cost_is_12(self) -> None:
        assert hash_password("Secret123").startswith("$2b$12$")

    def test_salted(self) -> None:
        assert hash_password("Secret123", rounds=4) != hash_password("Secret123", rounds=4)


class TestValidatePassword:
    def test_strong_password(self) -> None:
        result = validate_password("Password1")
        assert result.is_valid
        assert result.errors == ()

    @pytest.mark.parametrize(
        ("password", "code"),
        [
            ("Pass1", "too_short"),
            ("password1", "missing_uppercase"),
            ("PASSWORD1", "missing_lowercase"),
            ("Passwordx", "missing_digit"),
        ],
    )
    def test_single_rule_failure(self, password: str, code: str) -> None:
        result = validate_password(password)
        assert not result.is_valid
        assert [e.code for e in result.errors] == [code]
        assert all(e.field == "password" for e in result.errors)

    def test_reports_every_failure(self) -> None:
        result = validate_password("abc")
        assert {e.code for e in result.errors} == {"too_short", "missing_uppercase", "missing_digit"}

    def test_empty_password_fails_all_rules(self) -> None:
        result = validate_password("")
        assert len(result.errors) == 4

    def test_too_short_message(self) -> None:
        result = validate_password("Ab1")
        assert result.errors[0].message == "Password must be at least 8 characters long"
