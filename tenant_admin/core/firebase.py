"""
Firebase app lifecycle.

The admin app is process-wide state: it is initialized once at start-up
(FastAPI lifespan or the operator CLI) and handed to services through
dependency providers.
"""
import os
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1 import Client

from tenant_admin.core.config import Settings, settings as default_settings
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)


_app: Optional[firebase_admin.App] = None


def init_firebase(config: Settings = default_settings) -> firebase_admin.App:
    """Initialize the default Firebase app, returning the existing one on repeat calls."""
    global _app
    if _app is not None:
        return _app

    try:
        _app = firebase_admin.get_app()
        logger.info("Reusing already initialized Firebase app")
        return _app
    except ValueError:
        pass

    if config.firestore_emulator_host:
        os.environ["FIRESTORE_EMULATOR_HOST"] = config.firestore_emulator_host
        logger.info(f"Using Firestore emulator at {config.firestore_emulator_host}")

    options = {}
    if config.firebase_project_id:
        options["projectId"] = config.firebase_project_id

    if config.firebase_credentials_path:
        credential = credentials.Certificate(config.firebase_credentials_path)
    else:
        credential = credentials.ApplicationDefault()

    _app = firebase_admin.initialize_app(credential, options or None)
    logger.info(f"Firebase app initialized (project={config.firebase_project_id or 'default'})")
    return _app


def get_firebase_app() -> firebase_admin.App:
    if _app is None:
        raise RuntimeError("Firebase app is not initialized; call init_firebase() first")
    return _app


def get_firestore_client() -> Client:
    """Get Firestore client bound to the initialized app"""
    return firestore.client(get_firebase_app())


def shutdown_firebase() -> None:
    global _app
    if _app is None:
        return
    firebase_admin.delete_app(_app)
    _app = None
    logger.info("Firebase app deleted")
