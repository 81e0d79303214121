"""Gemini service for turning code into poems"""

from typing import Optional

import httpx

from codepoet.utils import logger
from codepoet.services.gemini.gemini_config import GeminiSettings
from codepoet.services.gemini.prompts import build_prompt, clean_poem

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class GeminiError(Exception):
    """Gemini call failed or returned something that is not a poem."""

    def __init__(self, message: str, timed_out: bool = False):
        self.message = message
        self.timed_out = timed_out
        super().__init__(message)


class GeminiService:
    """Service for interacting with the Gemini generateContent API"""

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings
        self._transport = transport

    @property
    def settings(self) -> GeminiSettings:
        if self._settings is None:
            self._settings = GeminiSettings()
        return self._settings

    @property
    def api_key(self) -> str:
        return self.settings.GEMINI_API_KEY

    @property
    def base_url(self) -> str:
        return self.settings.GEMINI_BASE_URL.rstrip("/")

    def _get_headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    def is_configured(self) -> bool:
        """Check if Gemini is properly configured"""
        return bool(self.api_key)

    def _build_payload(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.settings.GEMINI_TEMPERATURE,
                "topK": self.settings.GEMINI_TOP_K,
                "topP": self.settings.GEMINI_TOP_P,
                "maxOutputTokens": self.settings.GEMINI_MAX_OUTPUT_TOKENS,
            },
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_NONE"}
                for category in SAFETY_CATEGORIES
            ],
        }

    async def submit(
        self,
        code: str,
        language: str,
        style: str,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Generate a poem about a code snippet.

        Args:
            code: The code snippet to analyze
            language: Programming language (e.g., 'python', 'dart')
            style: Poetry style (e.g., 'haiku', 'sonnet', 'free verse', 'cyberpunk')
            timeout: Request timeout in seconds (default from settings)

        Returns:
            The cleaned poem text

        Raises:
            GeminiError: on missing configuration, HTTP failure, timeout or
                an unusable response
        """
        if not self.is_configured():
            logger.error("Gemini API key not configured")
            raise GeminiError("Gemini API key not configured")

        timeout = timeout or self.settings.GEMINI_TIMEOUT
        prompt = build_prompt(code, language, style)
        url = f"{self.base_url}/models/{self.settings.GEMINI_MODEL}:generateContent"

        try:
            async with self._client(timeout) as client:
                logger.info(
                    f"Generating {style} poem with Gemini, "
                    f"language={language}, code_length={len(code)}"
                )
                response = await client.post(
                    url,
                    headers=self._get_headers(),
                    json=self._build_payload(prompt),
                )
        except httpx.TimeoutException as e:
            logger.error("Gemini request timed out")
            raise GeminiError("Gemini request timed out", timed_out=True) from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {e}")
            raise GeminiError(f"Gemini request failed: {e}") from e

        if response.status_code != 200:
            error_msg = f"Gemini API error: {response.status_code}"
            try:
                error_data = response.json()
                if isinstance(error_data, dict) and "error" in error_data:
                    error_msg = f"{error_msg} - {error_data['error'].get('message', '')}"
            except ValueError:
                error_msg = f"{error_msg} - {response.text[:200]}"
            logger.error(error_msg)
            raise GeminiError(error_msg)

        try:
            data = response.json()
        except ValueError as e:
            raise GeminiError("Gemini returned a non-JSON response") from e

        return clean_poem(self.extract_text(data))

    @staticmethod
    def extract_text(data: dict) -> str:
        """Pull the first candidate's text out of a generateContent response."""
        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback")
            if feedback:
                reason = feedback.get("blockReason") or "Unknown safety block"
                raise GeminiError(f"Poem blocked: {reason}")
            raise GeminiError("No poem generated (empty candidates list)")

        content = candidates[0].get("content")
        if not isinstance(content, dict):
            raise GeminiError('Failed to parse: "content" key is missing or null')

        parts = content.get("parts")
        if not parts:
            raise GeminiError('Failed to parse: "parts" list is missing or empty')

        text = parts[0].get("text")
        if not isinstance(text, str):
            raise GeminiError('Failed to parse: "text" is missing or null')

        return text

    async def list_models(self) -> list[str]:
        """List model names available to the configured key."""
        if not self.is_configured():
            return []

        try:
            async with self._client(30.0) as client:
                response = await client.get(
                    f"{self.base_url}/models",
                    headers=self._get_headers(),
                )
        except httpx.HTTPError as e:
            logger.error(f"Failed to list Gemini models: {e}")
            return []

        if response.status_code != 200:
            logger.warning(f"Listing Gemini models returned {response.status_code}")
            return []

        return [model["name"] for model in response.json().get("models", [])]


# Singleton instance
gemini_service = GeminiService()
