from django.contrib.auth.hashers import identify_hasher
from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from authx.services import AuthService, legacy_encode
from core.constants import (
    KEY_USERS,
    MSG_DUPLICATE_ACCOUNT,
    MSG_INVALID_CREDENTIALS,
    ROLE_ADMIN,
    ROLE_PARTICIPANT,
)
from core.exceptions import AccessDenied, DuplicateAccount, InvalidCredentials, ValidationFailed
from core.state import StateRepository
from core.storage import KeyValueStore
from core.tests.helpers import TempStoreMixin


class AuthServiceTests(TempStoreMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.auth = AuthService()

    def test_signup_opens_session(self):
        session = self.auth.signup("Grace", "grace@example.com", "s3cret")

        self.assertEqual(session.role, ROLE_PARTICIPANT)
        self.assertEqual(self.auth.current_session(), session)

    def test_password_is_not_stored_in_plain_text(self):
        self.auth.signup("Grace", "grace@example.com", "s3cret")

        stored = StateRepository().read().users[0].password
        self.assertNotEqual(stored, "s3cret")
        self.assertNotEqual(stored, legacy_encode("s3cret"))
        identify_hasher(stored)

    def test_duplicate_email_differing_in_case_is_rejected(self):
        self.auth.signup("Grace", "grace@example.com", "s3cret")

        with self.assertRaises(DuplicateAccount):
            self.auth.signup("Other Grace", "GRACE@Example.com", "another")

        self.assertEqual(len(StateRepository().read().users), 1)

    def test_signup_requires_all_fields(self):
        with self.assertRaises(ValidationFailed):
            self.auth.signup("", "grace@example.com", "s3cret")
        with self.assertRaises(ValidationFailed):
            self.auth.signup("Grace", "grace@example.com", "")

    def test_login_is_case_insensitive_on_email(self):
        self.auth.signup("Grace", "grace@example.com", "s3cret")
        self.auth.logout()

        session = self.auth.login("Grace@Example.COM", "s3cret")
        self.assertEqual(session.email, "grace@example.com")

    def test_login_errors_do_not_reveal_which_part_failed(self):
        self.auth.signup("Grace", "grace@example.com", "s3cret")

        with self.assertRaises(InvalidCredentials) as wrong_password:
            self.auth.login("grace@example.com", "nope")
        with self.assertRaises(InvalidCredentials) as unknown_email:
            self.auth.login("nobody@example.com", "s3cret")

        self.assertEqual(str(wrong_password.exception.detail), MSG_INVALID_CREDENTIALS)
        self.assertEqual(str(unknown_email.exception.detail), MSG_INVALID_CREDENTIALS)

    def test_legacy_password_is_upgraded_on_login(self):
        KeyValueStore().save(KEY_USERS, [{
            "id": "user_1700000000000_abcdefg",
            "name": "Old Timer",
            "email": "old@example.com",
            "password": legacy_encode("hunter2"),
            "role": ROLE_ADMIN,
            "createdAt": "2024-01-01T00:00:00.000Z",
        }])

        with self.assertRaises(InvalidCredentials):
            self.auth.login("old@example.com", "wrong")

        session = self.auth.login("old@example.com", "hunter2")
        self.assertTrue(session.is_admin)

        stored = StateRepository().read().users[0].password
        identify_hasher(stored)
        self.auth.logout()
        self.assertEqual(self.auth.login("old@example.com", "hunter2").email, "old@example.com")

    def test_logout_clears_session(self):
        self.auth.signup("Grace", "grace@example.com", "s3cret")
        self.auth.logout()

        self.assertIsNone(self.auth.current_session())

    def test_require_admin(self):
        with self.assertRaises(AccessDenied):
            self.auth.require_admin()

        self.auth.signup("Root", "root@example.com", "pw", role=ROLE_ADMIN)
        self.assertTrue(self.auth.require_admin().is_admin)

    def test_set_role_refreshes_active_session(self):
        self.auth.signup("Grace", "grace@example.com", "s3cret")

        self.auth.set_role("grace@example.com", ROLE_ADMIN)

        self.assertTrue(self.auth.current_session().is_admin)
        with self.assertRaises(ValidationFailed):
            self.auth.set_role("nobody@example.com", ROLE_ADMIN)


class AuthAPITests(TempStoreMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()

    def test_signup_login_logout_flow(self):
        r = self.client.post(
            reverse("signup"),
            {"name": "Grace", "email": "grace@example.com", "password": "s3cret"},
            format="json",
        )
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.content)
        self.assertEqual(r.data["session"]["email"], "grace@example.com")

        r = self.client.post(reverse("logout"))
        self.assertEqual(r.status_code, status.HTTP_200_OK)

        r = self.client.get(reverse("session"))
        self.assertFalse(r.data["authenticated"])
        self.assertIsNone(r.data["session"])

        r = self.client.post(
            reverse("login"),
            {"email": "grace@example.com", "password": "s3cret"},
            format="json",
        )
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.content)

        r = self.client.get(reverse("session"))
        self.assertTrue(r.data["authenticated"])
        self.assertFalse(r.data["is_admin"])

    def test_duplicate_signup_returns_conflict(self):
        payload = {"name": "Grace", "email": "grace@example.com", "password": "s3cret"}
        self.client.post(reverse("signup"), payload, format="json")

        r = self.client.post(reverse("signup"), payload, format="json")

        self.assertEqual(r.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(r.data["success"])
        self.assertEqual(r.data["errors"]["detail"], MSG_DUPLICATE_ACCOUNT)

    def test_bad_login_returns_generic_error(self):
        r = self.client.post(
            reverse("login"),
            {"email": "nobody@example.com", "password": "x"},
            format="json",
        )

        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(r.data["errors"]["detail"], MSG_INVALID_CREDENTIALS)
