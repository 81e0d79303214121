"""Firebase ID token verification and the identity dependency"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request
from firebase_admin import auth

from codepoet.services.firebase.firebase_config import get_firebase_app

logger = logging.getLogger(__name__)

ANONYMOUS_PROVIDER = "anonymous"


@dataclass
class TokenData:
    """Decoded Firebase token data"""

    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    email_verified: bool = False
    is_anonymous: bool = False


def token_data_from_claims(decoded_token: dict) -> TokenData:
    provider = (decoded_token.get("firebase") or {}).get("sign_in_provider")
    return TokenData(
        uid=decoded_token["uid"],
        email=decoded_token.get("email"),
        name=decoded_token.get("name"),
        email_verified=decoded_token.get("email_verified", False),
        is_anonymous=provider == ANONYMOUS_PROVIDER,
    )


async def verify_token_async(id_token: str) -> TokenData:
    """
    Verify a Firebase ID token without blocking the event loop.

    Raises:
        HTTPException: If token verification fails
    """
    try:
        get_firebase_app()
    except FileNotFoundError:
        raise HTTPException(status_code=503, detail="Authentication is not configured")

    try:
        decoded_token = await asyncio.to_thread(auth.verify_id_token, id_token)
    except auth.ExpiredIdTokenError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except auth.RevokedIdTokenError:
        raise HTTPException(status_code=401, detail="Token has been revoked")
    except auth.InvalidIdTokenError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")
    except Exception as e:
        logger.error(f"Token verification failed: {e}")
        raise HTTPException(status_code=401, detail="Authentication failed")

    return token_data_from_claims(decoded_token)


def get_token_from_header(request: Request) -> str:
    """
    Extract Bearer token from Authorization header.

    Raises:
        HTTPException: If Authorization header is missing or invalid
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header:
        raise HTTPException(status_code=401, detail="Authorization header missing")

    if not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=401, detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )

    return auth_header.split("Bearer ")[1]


async def get_current_identity(request: Request) -> TokenData:
    """FastAPI dependency returning the verified caller identity."""
    token = get_token_from_header(request)
    return await verify_token_async(token)
