"""Gemini service configuration"""

import os
from pydantic_settings import BaseSettings


class GeminiSettings(BaseSettings):
    """Settings for the Gemini text generation API"""

    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")

    GEMINI_BASE_URL: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )

    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

    # Default request timeout (seconds); callers may pass a tighter one
    GEMINI_TIMEOUT: float = float(os.getenv("GEMINI_TIMEOUT", "30"))

    # High creativity
    GEMINI_TEMPERATURE: float = float(os.getenv("GEMINI_TEMPERATURE", "0.9"))
    GEMINI_TOP_K: int = int(os.getenv("GEMINI_TOP_K", "40"))
    GEMINI_TOP_P: float = float(os.getenv("GEMINI_TOP_P", "0.95"))
    GEMINI_MAX_OUTPUT_TOKENS: int = int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "500"))

    class Config:
        env_prefix = ""
        extra = "ignore"
