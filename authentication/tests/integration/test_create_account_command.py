from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from authentication.models import Principal
from authentication.tests.factories import PrincipalFactory


@pytest.mark.django_db
class TestCreateAccountCommand:
    def test_creates_admin(self):
        out = StringIO()

        call_command("create_account", email="Root@Example.com", password="secret123", admin=True, stdout=out)

        principal = Principal.objects.get(email="root@example.com")
        assert principal.role == "admin"
        assert "Successfully created user account" in out.getvalue()

    def test_creates_plain_user_by_default(self):
        call_command("create_account", email="plain@example.com", password="secret123", stdout=StringIO())

        assert Principal.objects.get(email="plain@example.com").role == "user"

    def test_duplicate_email_fails(self):
        PrincipalFactory(email="taken@example.com")

        with pytest.raises(CommandError):
            call_command("create_account", email="taken@example.com", password="secret123", stdout=StringIO())

    def test_duplicate_email_skipped_with_force(self):
        PrincipalFactory(email="taken@example.com")
        out = StringIO()

        call_command("create_account", email="taken@example.com", password="secret123", force=True, stdout=out)

        assert "Skipping" in out.getvalue()
        assert Principal.objects.filter(email="taken@example.com").count() == 1

    @pytest.mark.parametrize("email, password", [("not-an-email", "secret123"), ("ok@example.com", "abc")])
    def test_invalid_input_is_rejected(self, email, password):
        with pytest.raises(CommandError):
            call_command("create_account", email=email, password=password, stdout=StringIO())
