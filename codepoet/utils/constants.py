"""Application-wide constants."""

# API Configuration
API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"

# Usage limits
FREE_POEMS_PER_DAY = 5
GUEST_POEMS_LIFETIME = 3

# Text limits
MAX_CODE_LENGTH = 10_000  # characters

# Generation timeout (in seconds)
DEFAULT_GENERATION_TIMEOUT_SECONDS = 30.0

# Poetry styles
DEFAULT_STYLE = "haiku"
DEFAULT_LANGUAGE = "python"

POETRY_STYLES = {
    "haiku": {
        "display_name": "Haiku",
        "description": "Minimalist, 5-7-5 syllables. Calm and zen.",
        "icon": "🍃",
    },
    "sonnet": {
        "display_name": "Sonnet",
        "description": "Classical, 14 lines. Elegant and structured.",
        "icon": "👑",
    },
    "free verse": {
        "display_name": "Free Verse",
        "description": "No rules. Creative and flowing.",
        "icon": "🎨",
    },
    "cyberpunk": {
        "display_name": "Cyberpunk",
        "description": "Futuristic, edgy. Tech noir vibes.",
        "icon": "⚡",
    },
}

# GitHub import
GITHUB_MAX_RECURSION_DEPTH = 3
GITHUB_DEFAULT_PAGE_SIZE = 30

CODE_EXTENSIONS = [
    ".dart", ".py", ".js", ".ts", ".java", ".cpp", ".c", ".cs",
    ".rb", ".go", ".rs", ".swift", ".kt", ".php", ".scala",
    ".jsx", ".tsx", ".vue", ".html", ".css", ".scss",
]

LANGUAGE_BY_EXTENSION = {
    ".dart": "Dart",
    ".py": "Python",
    ".js": "JavaScript",
    ".ts": "TypeScript",
    ".java": "Java",
    ".cpp": "C++",
    ".c": "C",
    ".cs": "C#",
    ".rb": "Ruby",
    ".go": "Go",
    ".rs": "Rust",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".php": "PHP",
}

# Pagination
MAX_PAGE_SIZE = 100
