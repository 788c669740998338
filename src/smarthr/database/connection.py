from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore

from ..core.logging import get_logger

logger = get_logger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass
class FirebaseConfig:
    project_id: str
    client_email: str
    private_key: str

    def is_complete(self) -> bool:
        return bool(self.project_id and self.client_email and self.private_key)


class FirebaseConnection:
    """Singleton-like holder for the Firebase Admin app.

    Note: the app is initialized lazily on first use so importing the package
    (or building the container in tests) never needs credentials.
    """

    _instance: Optional["FirebaseConnection"] = None

    def __init__(self, config: FirebaseConfig):
        self._config = config
        self._app: Optional[firebase_admin.App] = None
        self._db = None

    @classmethod
    def get_instance(cls, config: FirebaseConfig) -> "FirebaseConnection":
        if cls._instance is None:
            cls._instance = FirebaseConnection(config)
        return cls._instance

    def app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app

        try:
            self._app = firebase_admin.get_app()
            return self._app
        except ValueError:
            pass

        logger.debug(
            "firebase_admin_init",
            project_id=self._config.project_id,
            client_email=(self._config.client_email[:5] + "...") if self._config.client_email else "MISSING",
            has_private_key=bool(self._config.private_key),
        )
        if not self._config.is_complete():
            raise RuntimeError("Missing required Firebase Admin credentials")

        cert = credentials.Certificate(
            {
                "type": "service_account",
                "project_id": self._config.project_id,
                "client_email": self._config.client_email,
                "private_key": self._config.private_key,
                "token_uri": TOKEN_URI,
            }
        )
        self._app = firebase_admin.initialize_app(cert, {"projectId": self._config.project_id})
        logger.info("firebase_admin_initialized", project_id=self._config.project_id)
        return self._app

    def db(self):
        if self._db is None:
            self._db = firestore.client(self.app())
        return self._db
