from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from authentication.models import Principal, RefreshToken
from authentication.tests.factories import DEFAULT_PASSWORD, PrincipalFactory, RefreshTokenFactory


class RegisterViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("register")

    def test_register_returns_user_and_tokens(self):
        response = self.client.post(
            self.url, {"email": "New.User@Example.com", "password": "secret123", "name": "New User"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["email"], "new.user@example.com")
        self.assertEqual(response.data["user"]["role"], "user")
        self.assertNotIn("password", response.data["user"])
        self.assertEqual(response.data["token"]["token_type"], "Bearer")
        self.assertTrue(response.data["token"]["access"])
        self.assertTrue(RefreshToken.objects.filter(token=response.data["token"]["refresh"]).exists())

    def test_register_stores_a_hash_not_the_password(self):
        self.client.post(self.url, {"email": "hash@example.com", "password": "secret123"}, format="json")

        principal = Principal.objects.get(email="hash@example.com")
        self.assertNotEqual(principal.password, "secret123")
        self.assertNotIn("secret123", principal.password)

    def test_register_cannot_pick_a_role(self):
        response = self.client.post(
            self.url, {"email": "sneaky@example.com", "password": "secret123", "role": "admin"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["role"], "user")

    def test_register_duplicate_email_conflicts(self):
        PrincipalFactory(email="taken@example.com")

        response = self.client.post(self.url, {"email": "TAKEN@example.com", "password": "secret123"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["status"], 409)
        self.assertEqual(response.data["errors"][0]["field"], "email")
        self.assertEqual(response.data["errors"][0]["messages"], ['"email" already exists'])

    def test_register_rejects_short_password(self):
        response = self.client.post(self.url, {"email": "short@example.com", "password": "abc"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Validation Error")
        self.assertEqual(response.data["errors"][0]["field"], "password")
        self.assertEqual(response.data["errors"][0]["location"], "body")

    def test_register_rejects_invalid_email(self):
        response = self.client.post(self.url, {"email": "not-an-email", "password": "secret123"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errors"][0]["field"], "email")


class LoginViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("login")
        self.user = PrincipalFactory(email="login@example.com")

    def test_login_success(self):
        response = self.client.post(
            self.url, {"email": "login@example.com", "password": DEFAULT_PASSWORD}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["id"], str(self.user.id))
        self.assertTrue(response.data["token"]["access"])
        self.assertTrue(response.data["token"]["refresh"])

    def test_login_email_is_case_insensitive(self):
        response = self.client.post(
            self.url, {"email": "LOGIN@example.com", "password": DEFAULT_PASSWORD}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_wrong_password_and_unknown_email_look_the_same(self):
        wrong_password = self.client.post(self.url, {"email": "login@example.com", "password": "nope"}, format="json")
        unknown_email = self.client.post(
            self.url, {"email": "ghost@example.com", "password": DEFAULT_PASSWORD}, format="json"
        )

        self.assertEqual(wrong_password.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(unknown_email.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(wrong_password.data, unknown_email.data)
        self.assertEqual(wrong_password.data["message"], "Incorrect email or password")

    def test_login_without_email(self):
        response = self.client.post(self.url, {"password": DEFAULT_PASSWORD}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "An email is required to generate a token")

    def test_login_body_must_be_an_object(self):
        response = self.client.post(self.url, [1, 2], format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Request body must be a JSON object")

    def test_inactive_user_cannot_login(self):
        PrincipalFactory(email="inactive@example.com", is_active=False)

        response = self.client.post(
            self.url, {"email": "inactive@example.com", "password": DEFAULT_PASSWORD}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_access_token_from_login_authenticates(self):
        login = self.client.post(self.url, {"email": "login@example.com", "password": DEFAULT_PASSWORD}, format="json")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']['access']}")
        response = self.client.get(reverse("users-profile"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "login@example.com")


class RefreshTokenViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("refresh_token")
        self.refresh = RefreshTokenFactory()
        self.user = self.refresh.principal

    def test_refresh_issues_new_access_token(self):
        response = self.client.post(
            self.url, {"email": self.user.email, "refresh_token": self.refresh.token}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["id"], str(self.user.id))
        self.assertEqual(response.data["token"]["refresh"], self.refresh.token)
        self.assertTrue(response.data["token"]["access"])

    def test_refresh_with_wrong_email(self):
        other = PrincipalFactory()

        response = self.client.post(
            self.url, {"email": other.email, "refresh_token": self.refresh.token}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "Incorrect email or refreshToken")

    def test_refresh_with_expired_token(self):
        expired = RefreshTokenFactory(principal=self.user, expires=timezone.now() - timedelta(seconds=1))

        response = self.client.post(self.url, {"email": self.user.email, "refresh_token": expired.token}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "Invalid refresh token.")

    def test_refresh_body_must_be_an_object(self):
        response = self.client.post(self.url, ["email", "token"], format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Request body must be a JSON object")

    def test_refresh_without_email(self):
        response = self.client.post(self.url, {"refresh_token": self.refresh.token}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "An email is required to generate a token")
