"""Unit tests for projections and boundary input models."""

import pydantic
import pytest

from shop_identity.domain.user import User
from shop_identity.schemas import (
    ConfirmResetInput,
    RegisterInput,
    UpdateProfileInput,
    UserProfile,
)


class TestUserProfile:
    def test_projection_drops_password_hash(self, make_user):
        profile = UserProfile.from_user(make_user())

        assert profile.full_name == "Alice Martin"
        assert not hasattr(profile, "password_hash")

    def test_unsaved_user_cannot_be_projected(self):
        with pytest.raises(ValueError, match="not been stored"):
            UserProfile.from_user(User.create("a@example.com", "h", "A", "B"))


class TestInputModels:
    def test_register_rejects_unknown_fields(self):
        with pytest.raises(pydantic.ValidationError):
            RegisterInput(
                email="alice@example.com",
                password="Secret123",
                first_name="Alice",
                last_name="Martin",
                is_admin=True,
            )

    def test_register_rejects_bad_email(self):
        with pytest.raises(pydantic.ValidationError):
            RegisterInput(
                email="nope",
                password="Secret123",
                first_name="Alice",
                last_name="Martin",
            )

    def test_passwords_are_not_stripped(self):
        data = RegisterInput(
            email="alice@example.com",
            password=" Secret123 ",
            first_name="Alice",
            last_name="Martin",
        )
        assert data.password == " Secret123 "

    def test_confirm_reset_mismatch(self):
        with pytest.raises(pydantic.ValidationError, match="Passwords do not match"):
            ConfirmResetInput(
                token="t",
                new_password="NewSecret456",
                confirm_password="Other",
            )

    def test_update_profile_omitted_fields(self):
        data = UpdateProfileInput(first_name="Alicia")
        assert data.model_dump(exclude_none=True) == {"first_name": "Alicia"}
