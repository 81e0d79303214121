"""GitHub service module for importing code"""

from codepoet.services.github.github_service import (
    GitHubBranch,
    GitHubCommit,
    GitHubContent,
    GitHubRepository,
    GitHubService,
    GitHubUser,
    github_service,
)

__all__ = [
    "GitHubBranch",
    "GitHubCommit",
    "GitHubContent",
    "GitHubRepository",
    "GitHubService",
    "GitHubUser",
    "github_service",
]
