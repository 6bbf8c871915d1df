"""Firebase Admin SDK wrapper for minting custom tokens.

The Admin SDK keeps a process-wide registry of apps. AdminClient owns a
single named app in that registry and is passed explicitly to callers
instead of relying on the default app.
"""

import logging
from typing import Any, Optional

import firebase_admin
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError
from google.auth.exceptions import GoogleAuthError

from .exceptions import AdminInitError, MintError
from .timing import time_external_call

logger = logging.getLogger(__name__)

APP_NAME = "fbtoken"


class AdminClient:
    """Caller-held handle to an initialized Firebase Admin app."""

    def __init__(self, credential: Any, project_id: Optional[str] = None, name: str = APP_NAME):
        self.credential = credential
        self.project_id = project_id
        self.name = name
        self._app = None

    @property
    def app(self):
        if self._app is None:
            self.initialize()
        return self._app

    def initialize(self):
        """Initialize the Admin app once; an existing app with this name is reused."""
        if self._app is not None:
            return self._app
        try:
            self._app = firebase_admin.get_app(self.name)
            logger.debug(f"Reusing Firebase Admin app '{self.name}'")
            return self._app
        except ValueError:
            pass

        options = {}
        if self.project_id:
            options['projectId'] = self.project_id
        try:
            self._app = firebase_admin.initialize_app(self.credential, options or None, name=self.name)
        except (ValueError, FirebaseError, GoogleAuthError) as e:
            raise AdminInitError(str(e)) from e
        logger.debug(f"Initialized Firebase Admin app '{self.name}' (project: {self.project_id or 'auto'})")
        return self._app

    @time_external_call
    def mint(self, uid: str) -> str:
        """
        Create a signed custom token for a UID.

        Raises:
            MintError: with the Admin SDK's message, for any signing failure
        """
        try:
            token = auth.create_custom_token(uid, app=self.app)
        except AdminInitError:
            raise
        except (ValueError, FirebaseError, GoogleAuthError) as e:
            raise MintError(str(e)) from e
        if isinstance(token, bytes):
            token = token.decode('utf-8')
        return token

    def close(self):
        """Delete the underlying app so a new client can be created in-process."""
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None
