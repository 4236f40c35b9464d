from unittest.mock import MagicMock

import pytest
from django.contrib.auth.hashers import identify_hasher
from django.db import IntegrityError

from authentication.domain.services.credential_store import CredentialStore, check_duplicate, is_unique_violation
from authentication.models import Principal
from utils.exceptions import Conflict
from utils.rbac import Role


@pytest.fixture
def store():
    return CredentialStore(cost_factor=4)


@pytest.mark.unit
class TestHashing:
    def test_hash_is_not_plaintext_and_verifies(self, store):
        stored = store.hash("s3cret-pass")

        assert stored != "s3cret-pass"
        assert "s3cret-pass" not in stored
        assert store.verify("s3cret-pass", stored) is True
        assert store.verify("wrong-pass", stored) is False

    def test_hash_uses_bcrypt_with_requested_cost(self, store):
        stored = store.hash("s3cret-pass", cost_factor=5)

        assert identify_hasher(stored).algorithm == "bcrypt_sha256"
        assert "$05$" in stored

    def test_same_password_hashes_differently(self, store):
        assert store.hash("s3cret-pass") != store.hash("s3cret-pass")

    def test_verify_rejects_empty_input(self, store):
        stored = store.hash("s3cret-pass")

        assert store.verify("", stored) is False
        assert store.verify("s3cret-pass", "") is False
        assert store.verify(None, stored) is False


@pytest.mark.unit
class TestCheckDuplicate:
    def test_unique_violation_becomes_conflict(self):
        error = IntegrityError("UNIQUE constraint failed: authentication_principal.email")

        result = check_duplicate(error, "email")

        assert isinstance(result, Conflict)
        assert result.status_code == 409
        assert result.errors == [{"field": "email", "location": "body", "messages": ['"email" already exists']}]

    def test_postgres_style_message_is_recognised(self):
        error = IntegrityError('duplicate key value violates unique constraint "authentication_principal_email_key"')

        assert is_unique_violation(error) is True

    def test_other_errors_pass_through(self):
        error = IntegrityError("NOT NULL constraint failed: marketplace_order.total")
        assert check_duplicate(error) is error

        other = ValueError("boom")
        assert check_duplicate(other) is other

    def test_store_exposes_check_duplicate(self, store):
        result = store.check_duplicate(IntegrityError("UNIQUE constraint failed"), "email")
        assert isinstance(result, Conflict)


@pytest.mark.unit
@pytest.mark.django_db
class TestRegister:
    def test_register_persists_hashed_password(self, store):
        principal = store.register(email="  New.User@Example.com ", password="s3cret-pass", name="New User")

        principal.refresh_from_db()
        assert principal.email == "new.user@example.com"
        assert principal.role == Role.USER
        assert principal.password != "s3cret-pass"
        assert store.verify("s3cret-pass", principal.password)

    def test_register_duplicate_email_raises_conflict(self, store):
        store.register(email="taken@example.com", password="s3cret-pass")

        with pytest.raises(Conflict) as exc_info:
            store.register(email="TAKEN@example.com", password="another-pass")

        assert exc_info.value.errors[0]["field"] == "email"
        assert Principal.objects.filter(email="taken@example.com").count() == 1

    def test_register_admin_role(self, store):
        principal = store.register(email="root@example.com", password="s3cret-pass", role=Role.ADMIN)
        assert principal.is_admin()

    def test_non_unique_integrity_error_is_reraised(self, store, monkeypatch):
        monkeypatch.setattr(Principal, "save", MagicMock(side_effect=IntegrityError("NOT NULL constraint failed")))

        with pytest.raises(IntegrityError):
            store.register(email="x@example.com", password="s3cret-pass")
