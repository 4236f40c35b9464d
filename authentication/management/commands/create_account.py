"""
Django management command to create a user account from the shell.

Usage:
    python manage.py create_account --email "admin@example.com" --password "s3cret!" --name "Site Admin" --admin
    python manage.py create_account --email "user@example.com" --password "s3cret!"

This is the only way to obtain the first administrator: self-service
registration always creates plain users.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.management.base import BaseCommand, CommandError
from django.core.validators import validate_email

from authentication.domain.services import CredentialStore
from utils.exceptions import Conflict
from utils.rbac import Role


class Command(BaseCommand):
    help = "Create a user account (optionally with the admin role)"

    def add_arguments(self, parser):
        parser.add_argument("--email", type=str, required=True, help="Email address for the account (must be unique)")
        parser.add_argument("--password", type=str, required=True, help="Password (6 to 128 characters)")
        parser.add_argument("--name", type=str, default="", help="Display name")
        parser.add_argument("--admin", action="store_true", help="Give the account the admin role")
        parser.add_argument("--force", action="store_true", help="Skip silently if the email already exists")

    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        password = options["password"]

        try:
            validate_email(email)
        except DjangoValidationError:
            raise CommandError(f"Invalid email format: {email}")

        if not 6 <= len(password) <= 128:
            raise CommandError("Password must be between 6 and 128 characters long")

        role = Role.ADMIN if options["admin"] else Role.USER
        try:
            principal = CredentialStore().register(email=email, password=password, name=options["name"], role=role)
        except Conflict:
            if options["force"]:
                self.stdout.write(self.style.WARNING(f'Email "{email}" already exists. Skipping due to --force flag.'))
                return
            raise CommandError(f'Email "{email}" already exists. Use --force to skip existing users.')

        self.stdout.write(
            self.style.SUCCESS(
                f"  Successfully created user account:\n"
                f"   Email: {principal.email}\n"
                f"   Name: {principal.name}\n"
                f"   Role: {principal.role}\n"
                f"   User ID: {principal.pk}"
            )
        )
