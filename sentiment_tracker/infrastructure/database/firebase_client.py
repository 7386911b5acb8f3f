"""Firebase Firestore client setup.

Initializes firebase-admin and hands back a Firestore client, which the
container passes to every repository. Authenticates with a service account
key file or application default credentials.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, TypeVar

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPICallError
from google.auth.exceptions import DefaultCredentialsError

from sentiment_tracker.domain.exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _resolve_credentials(credential_path: str | None) -> tuple[credentials.Base, str]:
    """Pick the credential source and describe it for the startup log."""
    if credential_path:
        key_file = Path(credential_path)
        if key_file.is_file():
            return credentials.Certificate(str(key_file)), f"service account key {key_file.resolve()}"
        logger.warning(
            f"Service account key {credential_path} not found, "
            f"falling back to application default credentials"
        )
    return credentials.ApplicationDefault(), "application default credentials"


def init_firebase(
    credential_path: str | None = None,
    project_id: str | None = None,
):
    """Initialize the Firebase app and return a Firestore client.

    Args:
        credential_path: Service account key JSON path. When it does not exist,
                         GOOGLE_APPLICATION_CREDENTIALS / ADC is used instead.
        project_id: Firebase project id (optional).

    Raises StorageError when the key file is unreadable or no credentials can
    be found.
    """
    if firebase_admin._apps:
        app = firebase_admin.get_app()
        logger.info(f"Reusing Firebase app '{app.name}' (project {app.project_id or 'from credentials'})")
        return firestore.client(app)

    try:
        cred, described = _resolve_credentials(credential_path)
        app = firebase_admin.initialize_app(cred, {"projectId": project_id} if project_id else None)
        client = firestore.client(app)
    except (ValueError, OSError, DefaultCredentialsError) as e:
        raise StorageError(f"Firestore could not be initialized: {e}") from e

    logger.info(f"Firestore connected to project {client.project} using {described}")
    return client


async def run_in_thread(fn: Callable[[], T]) -> T:
    """Run a blocking Firestore call off the event loop.

    SDK errors surface as StorageError.
    """
    try:
        return await asyncio.to_thread(fn)
    except GoogleAPICallError as e:
        logger.error(f"Firestore call failed: {e}")
        raise StorageError(str(e)) from e
