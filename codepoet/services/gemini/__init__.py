"""Gemini service module for poem generation"""

from codepoet.services.gemini.gemini_service import GeminiError, GeminiService, gemini_service

__all__ = ["GeminiError", "GeminiService", "gemini_service"]
