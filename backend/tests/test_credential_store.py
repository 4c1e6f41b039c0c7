"""Tests for bcrypt hashing and verification of folder passwords."""

from giftgallery.exceptions import ValidationError
from giftgallery.services.credential_store import CredentialStore


class TestHash:

    def test_hash_never_equals_plaintext(self, credentials):
        result = credentials.hash("pw123")
        assert result.ok
        assert result.value != "pw123"
        assert "pw123" not in result.value

    def test_same_secret_hashes_differently(self, credentials):
        assert credentials.hash("pw123").value != credentials.hash("pw123").value

    def test_empty_secret_is_validation_error(self, credentials):
        result = credentials.hash("")
        assert not result.ok
        assert isinstance(result.error, ValidationError)
        assert result.error.status_code == 400

    def test_rounds_are_applied(self):
        hashed = CredentialStore(rounds=5).hash("pw123").value
        assert hashed.startswith("$2b$05$")


class TestVerify:

    def test_correct_secret_verifies(self, credentials):
        for secret in ("pw123", "a", "with spaces ", "ünïcødé", "x" * 72):
            assert credentials.verify(secret, credentials.hash(secret).value) is True

    def test_wrong_secret_fails(self, credentials):
        hashed = credentials.hash("pw123").value
        assert credentials.verify("wrong", hashed) is False
        assert credentials.verify("pw1234", hashed) is False
        assert credentials.verify("PW123", hashed) is False

    def test_empty_inputs_return_false(self, credentials):
        hashed = credentials.hash("pw123").value
        assert credentials.verify("", hashed) is False
        assert credentials.verify("pw123", "") is False
        assert credentials.verify("pw123", None) is False

    def test_malformed_hash_returns_false(self, credentials):
        assert credentials.verify("pw123", "not-a-bcrypt-hash") is False
