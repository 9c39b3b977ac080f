"""Unit tests for the Email value object."""

import pytest

from shop_identity.domain.user import Email
from shop_identity.exceptions import ErrorCode, InvalidEmailError, ValidationError


class TestEmail:
    def test_normalizes_case_and_whitespace(self):
        assert Email("  Alice@Example.COM ").value == "alice@example.com"

    def test_normalize_accepts_email_instance(self):
        email = Email("bob@example.com")
        assert Email.normalize(email) == "bob@example.com"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "no-at-sign",
            "a@b",
            "a@@example.com",
            "alice@example.c",
            "alice..martin@example.com",
            ".alice@example.com",
            "alice@-example.com",
        ],
    )
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidEmailError) as exc_info:
            Email(raw)
        assert exc_info.value.code == ErrorCode.INVALID_EMAIL

    def test_invalid_email_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            Email.normalize("not-an-email")

    def test_str(self):
        assert str(Email("carol@example.com")) == "carol@example.com"

    def test_local_part_is_lowercased_too(self):
        assert Email.normalize("Alice.Martin+Shop@Example.com") == "alice.martin+shop@example.com"

    def test_non_string_is_rejected(self):
        with pytest.raises(InvalidEmailError, match="cannot be empty"):
            Email(None)  # type: ignore[arg-type]
