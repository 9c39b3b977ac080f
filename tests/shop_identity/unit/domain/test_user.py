"""Unit tests for the User aggregate."""

import dataclasses

import pytest

from shop_identity.domain.user import BackofficeStatus, User, UserUpdate


class TestUserCreate:
    def test_new_user_is_active_and_pending(self):
        user = User.create("Alice@Example.com", "hash", " Alice ", "Martin")

        assert user.email == "alice@example.com"
        assert user.first_name == "Alice"
        assert user.is_active is True
        assert user.backoffice_status == BackofficeStatus.PENDING
        assert user.is_pending
        assert user.user_id is None
        assert user.created_at == user.updated_at

    def test_password_hash_not_in_repr(self):
        user = User.create("alice@example.com", "super-secret-hash", "Alice", "Martin")
        assert "super-secret-hash" not in repr(user)

    def test_full_name(self, make_user):
        assert make_user().full_name == "Alice Martin"

    def test_status_coerced_from_string(self):
        user = User(
            email="alice@example.com",
            password_hash="h",
            first_name="Alice",
            last_name="Martin",
            backoffice_status="approved",
        )
        assert user.backoffice_status is BackofficeStatus.APPROVED


class TestUserImmutability:
    def test_fields_cannot_be_assigned(self, make_user):
        user = make_user()
        with pytest.raises(dataclasses.FrozenInstanceError):
            user.email = "other@example.com"  # type: ignore[misc]

    def test_merge_overlays_only_supplied_fields(self, make_user):
        user = make_user()

        updated = user.merge(UserUpdate(first_name="Alicia"))

        assert updated.first_name == "Alicia"
        assert updated.last_name == user.last_name
        assert updated.email == user.email
        assert updated.password_hash == user.password_hash
        assert updated.backoffice_status == user.backoffice_status
        assert updated.user_id == user.user_id
        assert updated.updated_at >= user.updated_at
        assert user.first_name == "Alice"

    def test_merge_with_empty_update_returns_same_user(self, make_user):
        user = make_user()
        assert user.merge(UserUpdate()) is user

    def test_merge_normalizes_email(self, make_user):
        updated = make_user().merge(UserUpdate(email="NEW@Example.com"))
        assert updated.email == "new@example.com"

    def test_update_reports_supplied_fields(self):
        update = UserUpdate(last_name="Doe", is_active=False)
        assert update.supplied() == {"last_name": "Doe", "is_active": False}
        assert not update.is_empty()
        assert UserUpdate().is_empty()


class TestBackofficeTransitions:
    def test_approve_clears_rejection(self, make_user):
        user = make_user(status=BackofficeStatus.REJECTED)

        approved = user.approve_backoffice()

        assert approved.is_approved
        assert not approved.is_rejected

    def test_reject_clears_approval(self, make_user):
        user = make_user(status=BackofficeStatus.APPROVED)

        rejected = user.reject_backoffice()

        assert rejected.is_rejected
        assert not rejected.is_approved

    def test_transitions_leave_active_flag_and_credentials(self, make_user):
        user = make_user(is_active=False)

        approved = user.approve_backoffice()

        assert approved.is_active is False
        assert approved.password_hash == user.password_hash

    def test_activate_and_deactivate(self, make_user):
        user = make_user()
        assert user.deactivate().is_active is False
        assert user.deactivate().activate().is_active is True

    def test_with_password_hash(self, make_user):
        assert make_user().with_password_hash("new").password_hash == "new"


class TestUserEquality:
    def test_equal_by_id(self, make_user):
        a = make_user(user_id=7)
        b = make_user(user_id=7).merge(UserUpdate(first_name="Other"))
        assert a == b
        assert hash(a) == hash(b)

    def test_unsaved_users_compare_by_identity(self):
        a = User.create("a@example.com", "h", "A", "A")
        b = User.create("a@example.com", "h", "A", "A")
        assert a != b
        assert a == a
