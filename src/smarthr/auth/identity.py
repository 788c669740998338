"""Identity provider (Firebase Auth) behind a small interface."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Protocol

from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from ..core.exceptions import AuthenticationError, GatewayError, ValidationError
from ..core.logging import get_logger
from ..database.connection import FirebaseConnection

logger = get_logger(__name__)


@dataclass(frozen=True)
class VerifiedToken:
    uid: str
    email: str


class IdentityProvider(Protocol):
    def create_session_cookie(self, id_token: str, *, expires_in: timedelta) -> str:
        raise NotImplementedError

    def verify_session_cookie(self, cookie: str) -> VerifiedToken:
        raise NotImplementedError

    def verify_id_token(self, id_token: str) -> VerifiedToken:
        raise NotImplementedError

    def create_user(self, *, email: str, password: str, display_name: Optional[str] = None) -> str:
        raise NotImplementedError

    def delete_user(self, uid: str) -> None:
        raise NotImplementedError


class FirebaseIdentityProvider(IdentityProvider):
    def __init__(self, conn: FirebaseConnection):
        self._conn = conn

    def create_session_cookie(self, id_token: str, *, expires_in: timedelta) -> str:
        try:
            return firebase_auth.create_session_cookie(id_token, expires_in=expires_in, app=self._conn.app())
        except (firebase_auth.InvalidIdTokenError, ValueError) as e:
            raise AuthenticationError("Invalid ID token") from e
        except firebase_exceptions.FirebaseError as e:
            raise GatewayError("Could not create session") from e

    def verify_session_cookie(self, cookie: str) -> VerifiedToken:
        try:
            claims = firebase_auth.verify_session_cookie(cookie, check_revoked=True, app=self._conn.app())
        except (firebase_auth.InvalidSessionCookieError, firebase_auth.UserDisabledError, ValueError) as e:
            raise AuthenticationError("Unauthorized") from e
        except firebase_exceptions.FirebaseError as e:
            raise AuthenticationError("Unauthorized") from e
        return VerifiedToken(uid=claims["uid"], email=claims.get("email") or "")

    def verify_id_token(self, id_token: str) -> VerifiedToken:
        try:
            claims = firebase_auth.verify_id_token(id_token, app=self._conn.app())
        except (firebase_auth.InvalidIdTokenError, ValueError) as e:
            raise AuthenticationError("Invalid ID token") from e
        return VerifiedToken(uid=claims["uid"], email=claims.get("email") or "")

    def create_user(self, *, email: str, password: str, display_name: Optional[str] = None) -> str:
        try:
            record = firebase_auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                app=self._conn.app(),
            )
        except firebase_auth.EmailAlreadyExistsError as e:
            raise ValidationError("An account with this email already exists") from e
        except ValueError as e:
            raise ValidationError(str(e)) from e
        except firebase_exceptions.FirebaseError as e:
            raise GatewayError("Could not create account") from e
        return record.uid

    def delete_user(self, uid: str) -> None:
        try:
            firebase_auth.delete_user(uid, app=self._conn.app())
        except firebase_exceptions.FirebaseError as e:
            raise GatewayError(f"Could not delete account {uid}") from e
