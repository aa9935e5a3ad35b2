"""Tests for password hashing, token generation and strength validation."""

import re

import pytest

from crossfire.auth.password import (
    PasswordHasher,
    PasswordStrengthError,
    hash_token,
    validate_password_strength,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


class TestPasswordHashing:
    def test_hash_and_verify(self, hasher: PasswordHasher):
        password = "SecureP@ss1"
        hashed = hasher.hash_password(password)
        assert hasher.verify_password(password, hashed) is True

    def test_wrong_password_rejected(self, hasher: PasswordHasher):
        hashed = hasher.hash_password("CorrectP@ss1")
        assert hasher.verify_password("WrongP@ss1", hashed) is False

    def test_malformed_hash_returns_false(self, hasher: PasswordHasher):
        assert hasher.verify_password("SecureP@ss1", "not-a-hash") is False

    def test_hash_is_argon2id(self, hasher: PasswordHasher):
        hashed = hasher.hash_password("TestP@ss1")
        assert hashed.startswith("$argon2id$")

    def test_same_password_hashes_differently(self, hasher: PasswordHasher):
        assert hasher.hash_password("TestP@ss1") != hasher.hash_password("TestP@ss1")

    def test_check_needs_rehash(self, hasher: PasswordHasher):
        hashed = hasher.hash_password("TestP@ss1")
        assert hasher.check_needs_rehash(hashed) is False

    def test_stronger_params_need_rehash(self, hasher: PasswordHasher):
        hashed = hasher.hash_password("TestP@ss1")
        stronger = PasswordHasher(time_cost=2, memory_cost=2048, parallelism=1)
        assert stronger.check_needs_rehash(hashed) is True


class TestTokens:
    def test_token_is_64_lowercase_hex(self):
        token = PasswordHasher.generate_token()
        assert re.fullmatch(r"[0-9a-f]{64}", token)

    def test_tokens_are_unique(self):
        tokens = {PasswordHasher.generate_token() for _ in range(100)}
        assert len(tokens) == 100

    def test_hash_token_is_sha256_hex(self):
        digest = hash_token("abc")
        assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_hash_token_differs_from_token(self):
        token = PasswordHasher.generate_token()
        assert hash_token(token) != token


class TestPasswordStrength:
    def test_password_strength_validation(self):
        validate_password_strength("StrongP@ss1")  # Should not raise

    def test_empty_password_rejected(self):
        with pytest.raises(PasswordStrengthError):
            validate_password_strength("")

    def test_whitespace_only_rejected(self):
        with pytest.raises(PasswordStrengthError):
            validate_password_strength("   ")

    def test_short_password_rejected(self):
        with pytest.raises(PasswordStrengthError, match="at least 8"):
            validate_password_strength("Sh0rt!")

    def test_no_uppercase_rejected(self):
        with pytest.raises(PasswordStrengthError, match="uppercase"):
            validate_password_strength("nouppercase1!")

    def test_no_lowercase_rejected(self):
        with pytest.raises(PasswordStrengthError, match="lowercase"):
            validate_password_strength("NOLOWERCASE1!")

    def test_no_digit_rejected(self):
        with pytest.raises(PasswordStrengthError, match="digit"):
            validate_password_strength("NoDigitHere!")

    def test_no_special_character_rejected(self):
        with pytest.raises(PasswordStrengthError, match="special"):
            validate_password_strength("NoSpecial1")

    def test_too_long_password_rejected(self):
        with pytest.raises(PasswordStrengthError):
            validate_password_strength("A" * 100 + "a" * 28 + "1!")
