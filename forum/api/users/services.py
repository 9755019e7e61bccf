# forum/api/users/services.py

import hashlib
import logging
import secrets
from dataclasses import asdict
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from forum.core.errors import Conflict, NotFound, Unauthenticated, ValidationFailure
from forum.engine import EntityKind
from forum.models import USERS, User
from forum.services.base import BaseForumService
from forum.services.mailer import log_reset_mailer
from forum.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


def _hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


class UserService(BaseForumService):
    """
    User accounts: listing, profiles, registration, credential checks and password reset.
    Token issuance is left to the route layer (flask-jwt-extended).
    """

    def __init__(self, store, mailer: Optional[Callable[[str, str], None]] = None,
                 reset_ttl_minutes: int = 60, **kwargs):
        super().__init__(store, **kwargs)
        self.mailer = mailer or log_reset_mailer
        self.reset_ttl = timedelta(minutes=reset_ttl_minutes)

    def get_all_users(self) -> List[Dict[str, Any]]:
        docs = self.store.find(USERS, order_by='created_at', descending=True)
        return self.reader.render_many(EntityKind.USER, docs)

    def get_user_profile(self, user_id: str) -> Dict[str, Any]:
        doc = self._get_or_404(USERS, user_id, "User")
        return self.reader.render(EntityKind.USER, doc)

    def register(self, first_name: str, last_name: str, username: str, email: str, password: str) -> Dict[str, Any]:
        """Creates an account and returns its public view."""
        first_name = self._require_text(first_name, 'firstName')
        last_name = self._require_text(last_name, 'lastName')
        username = self._require_text(username, 'username')
        email = self._require_text(email, 'email').lower()
        if not isinstance(password, str) or not password:
            raise ValidationFailure("'password' is required")

        if self.store.exists(USERS, [('email', '==', email)]):
            raise Conflict("User already exists", error_code="USER_EXISTS")
        if self.store.exists(USERS, [('username', '==', username)]):
            raise Conflict("Username is already taken", error_code="USERNAME_TAKEN")

        user = User(
            first_name=first_name,
            last_name=last_name,
            username=username,
            email=email,
            password=generate_password_hash(password),
            created_at=self.clock()
        )
        saved = self.store.create(USERS, asdict(user))
        logger.info(f"User registered: {saved['id']} ({username})")
        return self.reader.render(EntityKind.USER, saved)

    def authenticate(self, email: str, password: str) -> Dict[str, Any]:
        """Returns the user's public view when the credentials match."""
        if not email or not password:
            raise Unauthenticated("Invalid credentials")
        doc = self.store.find_one(USERS, [('email', '==', email.strip().lower())])
        if not doc or not doc.get('password') or not check_password_hash(doc['password'], password):
            raise Unauthenticated("Invalid credentials")
        return self.reader.render(EntityKind.USER, doc)

    def request_password_reset(self, email: str) -> Dict[str, str]:
        email = self._require_text(email, 'email').lower()
        doc = self.store.find_one(USERS, [('email', '==', email)])
        if not doc:
            raise NotFound("User not found")

        token = secrets.token_hex(20)
        self.store.update(USERS, doc['id'], {
            'reset_password_token': _hash_reset_token(token),
            'reset_password_expires': self.clock() + self.reset_ttl,
        })
        self.mailer(email, token)
        return {"message": "Password reset email sent"}

    def reset_password(self, token: str, new_password: str) -> Dict[str, str]:
        token = self._require_text(token, 'token')
        if not isinstance(new_password, str) or not new_password:
            raise ValidationFailure("'newPassword' is required")

        doc = self.store.find_one(USERS, [('reset_password_token', '==', _hash_reset_token(token))])
        expires = DateTimeUtils.coerce(doc.get('reset_password_expires')) if doc else None
        if not doc or expires is None or expires <= self.clock():
            raise ValidationFailure("Password reset token is invalid or has expired", error_code="INVALID_RESET_TOKEN")

        self.store.update(USERS, doc['id'], {
            'password': generate_password_hash(new_password),
            'reset_password_token': None,
            'reset_password_expires': None,
        })
        logger.info(f"Password reset completed for user {doc['id']}")
        return {"message": "Password has been reset"}

