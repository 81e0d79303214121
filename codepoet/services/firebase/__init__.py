"""Firebase service module for authentication and cloud storage"""

from codepoet.services.firebase.firebase_config import (
    get_firebase_app,
    get_firestore_client,
    initialize_firebase,
    is_firebase_initialized,
)
from codepoet.services.firebase.firebase_auth import (
    TokenData,
    get_current_identity,
    token_data_from_claims,
    verify_token_async,
)
from codepoet.services.firebase.firestore_store import FirestoreRecordStore

__all__ = [
    "get_firebase_app",
    "get_firestore_client",
    "initialize_firebase",
    "is_firebase_initialized",
    "TokenData",
    "get_current_identity",
    "token_data_from_claims",
    "verify_token_async",
    "FirestoreRecordStore",
]
