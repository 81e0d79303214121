#!/usr/bin/env python3
"""
Generate a Firebase ID token for calling the API by hand.

Usage:
    ENV=staging python scripts/generate_test_token.py --email someone@example.com
    ENV=staging python scripts/generate_test_token.py --anonymous
"""

import argparse
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

env = os.getenv("ENV", "local")
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
    print(f"Loaded environment from: {env_file}")

import httpx
from firebase_admin import auth

from codepoet.services.firebase import initialize_firebase

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1/accounts"


def get_firebase_api_key() -> str:
    """Get Firebase Web API key from the environment or a config file."""
    api_key = os.getenv("FIREBASE_API_KEY")
    if api_key:
        return api_key

    config_file = f"firebase-config-{env}.json" if env != "production" else "firebase-config.json"
    if os.path.exists(config_file):
        with open(config_file) as f:
            return json.load(f).get("apiKey", "")

    return ""


def get_or_create_firebase_user(email: str) -> str:
    initialize_firebase()

    try:
        user = auth.get_user_by_email(email)
        print(f"Found existing Firebase user: {user.uid}")
    except auth.UserNotFoundError:
        user = auth.create_user(email=email, email_verified=True)
        print(f"Created new Firebase user: {user.uid}")
    return user.uid


def exchange_custom_token(uid: str, email: str, api_key: str) -> str:
    custom_token = auth.create_custom_token(uid, {"email": email, "email_verified": True})
    if isinstance(custom_token, bytes):
        custom_token = custom_token.decode()

    response = httpx.post(
        f"{IDENTITY_TOOLKIT_URL}:signInWithCustomToken",
        params={"key": api_key},
        json={"token": custom_token, "returnSecureToken": True},
    )
    response.raise_for_status()
    return response.json()["idToken"]


def sign_in_anonymously(api_key: str) -> str:
    """A guest identity, the same as the app's first launch."""
    response = httpx.post(
        f"{IDENTITY_TOOLKIT_URL}:signUp",
        params={"key": api_key},
        json={"returnSecureToken": True},
    )
    response.raise_for_status()
    return response.json()["idToken"]


def main():
    parser = argparse.ArgumentParser(description="Generate Firebase test token")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--email", help="Email for a permanent (free tier) test user")
    group.add_argument("--anonymous", action="store_true", help="Create a guest identity")
    args = parser.parse_args()

    api_key = get_firebase_api_key()
    if not api_key:
        print("No FIREBASE_API_KEY found. Set it or create firebase-config-<env>.json")
        sys.exit(1)

    try:
        if args.anonymous:
            id_token = sign_in_anonymously(api_key)
        else:
            uid = get_or_create_firebase_user(args.email)
            id_token = exchange_custom_token(uid, args.email, api_key)
    except httpx.HTTPError as e:
        print(f"Failed to get an ID token: {e}")
        sys.exit(1)

    print(f"\nID Token (use this for API calls):\n{id_token}")
    print(f'\ncurl -H "Authorization: Bearer {id_token[:50]}..." .../api/v1/usage')


if __name__ == "__main__":
    main()
