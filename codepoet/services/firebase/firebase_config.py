"""Firebase Admin SDK configuration and initialization"""

import os
import logging

import firebase_admin
from firebase_admin import credentials, firestore

logger = logging.getLogger(__name__)

_firebase_app = None
_firestore_client = None


def get_credentials_file() -> str:
    """Get the Firebase credentials file path based on environment"""
    cred_file = os.getenv("FIREBASE_CREDENTIALS_FILE")
    if cred_file:
        return cred_file

    if os.getenv("ENV", "local") == "production":
        return "firebase-credentials.json"
    return "firebase-credentials-dev.json"


def initialize_firebase() -> firebase_admin.App:
    """
    Initialize Firebase Admin SDK once and cache the app.

    Raises:
        FileNotFoundError: If the credentials file is not found
    """
    global _firebase_app

    if _firebase_app is not None:
        return _firebase_app

    cred_file = get_credentials_file()

    if not os.path.exists(cred_file):
        logger.warning(
            f"Firebase credentials file not found: {cred_file}. "
            "Authentication and cloud sync are unavailable until it is provided."
        )
        raise FileNotFoundError(f"Firebase credentials file not found: {cred_file}")

    cred = credentials.Certificate(cred_file)
    _firebase_app = firebase_admin.initialize_app(cred)
    logger.info(f"Firebase initialized with credentials from: {cred_file}")
    return _firebase_app


def get_firebase_app() -> firebase_admin.App:
    if _firebase_app is None:
        return initialize_firebase()
    return _firebase_app


def get_firestore_client():
    """Return the Firestore client bound to the Firebase app."""
    global _firestore_client

    if _firestore_client is None:
        _firestore_client = firestore.client(get_firebase_app())
    return _firestore_client


def is_firebase_initialized() -> bool:
    return _firebase_app is not None
