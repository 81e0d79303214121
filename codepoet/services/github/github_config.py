"""GitHub import configuration"""

import os
from pydantic_settings import BaseSettings

from codepoet.utils.constants import GITHUB_MAX_RECURSION_DEPTH


class GitHubSettings(BaseSettings):
    """Settings for the GitHub REST API client"""

    GITHUB_API_BASE_URL: str = os.getenv("GITHUB_API_BASE_URL", "https://api.github.com")

    # Timeout for API requests (seconds)
    GITHUB_TIMEOUT: float = float(os.getenv("GITHUB_TIMEOUT", "30"))

    # Cap on directory levels walked by the recursive file listing
    GITHUB_MAX_RECURSION_DEPTH: int = int(os.getenv("GITHUB_MAX_RECURSION_DEPTH", str(GITHUB_MAX_RECURSION_DEPTH)))

    class Config:
        env_prefix = ""
        extra = "ignore"
