"""API routers module"""

from codepoet.routers.generate import router as generate_router
from codepoet.routers.usage import router as usage_router
from codepoet.routers.poems import router as poems_router
from codepoet.routers.styles import router as styles_router
from codepoet.routers.sync import router as sync_router
from codepoet.routers.account import router as account_router
from codepoet.routers.github import router as github_router

__all__ = [
    "generate_router",
    "usage_router",
    "poems_router",
    "styles_router",
    "sync_router",
    "account_router",
    "github_router",
]
