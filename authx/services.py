# authx/services.py
"""
Desk accounts and the single active session.

The session is not a security boundary: it only decides which parts of the
desk (the admin dashboard) are shown to whoever is operating it.
"""
import base64
import hmac
import logging

from django.contrib.auth.hashers import check_password, identify_hasher, make_password

from core.constants import (
    ID_PREFIX_USER,
    MSG_LOGIN_REQUIRED_FIELDS,
    MSG_REQUIRED_FIELDS,
    ROLE_CHOICES,
    ROLE_PARTICIPANT,
)
from core.exceptions import AccessDenied, DuplicateAccount, InvalidCredentials, ValidationFailed
from core.records import Session, UserAccount, generate_id
from core.state import StateRepository
from events.sanitizers import sanitize_text

logger = logging.getLogger("ems.auth")


def legacy_encode(password: str) -> str:
    """Reversible base64 encoding used by accounts created in the browser tool."""
    return base64.b64encode(password.encode("utf-8")).decode("ascii")


class AuthService:
    def __init__(self, repository: StateRepository = None):
        self.repository = repository or StateRepository()

    def signup(self, name: str, email: str, password: str, role: str = ROLE_PARTICIPANT) -> Session:
        name = sanitize_text(name, max_length=255)
        email = sanitize_text(email, max_length=254)

        if not name or not email or not password:
            raise ValidationFailed(MSG_REQUIRED_FIELDS)

        if role not in dict(ROLE_CHOICES):
            raise ValidationFailed(f"Unknown role '{role}'.")

        with self.repository.transaction() as state:
            if state.find_user(email) is not None:
                logger.warning(f"Signup rejected, email already registered: {email}")
                raise DuplicateAccount()

            user = UserAccount(
                id=generate_id(ID_PREFIX_USER),
                name=name,
                email=email,
                password=make_password(password),
                role=role,
            )
            state.users.append(user)
            state.session = Session.for_user(user)

            logger.info(f"Account created: user={user.id}, role={user.role}")
            return state.session

    def login(self, email: str, password: str) -> Session:
        email = sanitize_text(email, max_length=254)

        if not email or not password:
            raise ValidationFailed(MSG_LOGIN_REQUIRED_FIELDS)

        with self.repository.transaction() as state:
            user = state.find_user(email)
            # Same error for unknown email and wrong password
            if user is None or not self.verify_password(user, password):
                raise InvalidCredentials()

            state.session = Session.for_user(user)
            logger.info(f"Login: user={user.id}")
            return state.session

    def logout(self) -> None:
        with self.repository.transaction() as state:
            if state.session is not None:
                logger.info(f"Logout: user={state.session.id}")
            state.session = None

    def current_session(self):
        return self.repository.read().session

    def require_admin(self, session=None) -> Session:
        if session is None:
            session = self.current_session()
        if session is None or not session.is_admin:
            raise AccessDenied()
        return session

    @staticmethod
    def verify_password(user: UserAccount, password: str) -> bool:
        """
        Check ``password`` against the stored hash, upgrading the stored
        value in place when it uses an outdated or legacy encoding. The
        caller is responsible for saving.
        """
        def upgrade(raw_password):
            user.password = make_password(raw_password)
            logger.info(f"Password hash upgraded: user={user.id}")

        try:
            identify_hasher(user.password)
        except ValueError:
            if not hmac.compare_digest(legacy_encode(password).encode("utf-8"), user.password.encode("utf-8")):
                return False
            upgrade(password)
            return True

        return check_password(password, user.password, setter=upgrade)

    def set_role(self, email: str, role: str) -> UserAccount:
        """
        Change an existing account's role. An active session for the same
        account picks up the new role immediately.
        """
        if role not in dict(ROLE_CHOICES):
            raise ValidationFailed(f"Unknown role '{role}'.")

        with self.repository.transaction() as state:
            user = state.find_user(sanitize_text(email, max_length=254))
            if user is None:
                raise ValidationFailed(f"No account registered for {email}.")

            user.role = role
            if state.session is not None and state.session.id == user.id:
                state.session = Session.for_user(user)

            logger.info(f"Role changed: user={user.id}, role={role}")
            return user
