"""Configuration module for the CodeQuest API.

This module provides centralized configuration management, including directory
paths, API server settings, database, authentication, AI provider settings and
gamification constants. All configuration values can be overridden via
environment variables.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/codequest.db"
)

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "5000"))

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Authentication Configuration ---

# Tokens are issued by the external identity provider; we only verify them.
AUTH_JWT_SECRET: str = os.getenv(
    "AUTH_JWT_SECRET", "your-secret-key-change-in-production"
)
AUTH_JWT_ALGORITHM: str = os.getenv("AUTH_JWT_ALGORITHM", "HS256")
AUTH_JWT_AUDIENCE: Optional[str] = os.getenv("AUTH_JWT_AUDIENCE") or None

# --- AI Provider Configuration ---

# Provider registry for OpenAI-compatible completion endpoints
AI_PROVIDERS: Dict[str, Dict[str, Optional[str]]] = {
    "qwen": {
        "display_name": "Qwen (Together AI)",
        "base_url": "https://api.together.xyz/v1",
        "default_model": "Qwen/Qwen2.5-Coder-32B-Instruct",
        "env_key": "QWEN_API_KEY",
    },
    "gemini": {
        "display_name": "Google Gemini",
        "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "default_model": "gemini-2.5-flash",
        "env_key": "GEMINI_API_KEY",
    },
}

# Active provider for the AI assistant
AI_PROVIDER: str = os.getenv("AI_PROVIDER", "qwen")

# Optional model override; falls back to the provider's default_model
AI_MODEL: Optional[str] = os.getenv("AI_MODEL") or None

# Upper bound (seconds) for a single upstream completion request
AI_REQUEST_TIMEOUT: float = float(os.getenv("AI_REQUEST_TIMEOUT", "30"))
AI_MAX_RETRIES: int = int(os.getenv("AI_MAX_RETRIES", "1"))

# Sampling settings per operation
CODE_ASSISTANCE_TEMPERATURE: float = float(
    os.getenv("CODE_ASSISTANCE_TEMPERATURE", "0.7")
)
CODE_ASSISTANCE_MAX_TOKENS: int = int(os.getenv("CODE_ASSISTANCE_MAX_TOKENS", "2048"))
CHAT_TEMPERATURE: float = float(os.getenv("CHAT_TEMPERATURE", "0.8"))
CHAT_MAX_TOKENS: int = int(os.getenv("CHAT_MAX_TOKENS", "1500"))
COURSE_CONTENT_TEMPERATURE: float = float(
    os.getenv("COURSE_CONTENT_TEMPERATURE", "0.9")
)
COURSE_CONTENT_MAX_TOKENS: int = int(os.getenv("COURSE_CONTENT_MAX_TOKENS", "500"))


def get_provider_api_key(provider: str) -> Optional[str]:
    """Return the API key configured in the environment for a provider."""
    env_key = AI_PROVIDERS.get(provider, {}).get("env_key")
    return os.getenv(env_key) if env_key else None


# --- Gamification Configuration ---

# XP granted on first enrollment in a course
ENROLLMENT_XP_BONUS: int = int(os.getenv("ENROLLMENT_XP_BONUS", "50"))

# XP granted for saving a code snippet
SNIPPET_XP_BONUS: int = int(os.getenv("SNIPPET_XP_BONUS", "10"))

DEFAULT_LEADERBOARD_LIMIT: int = int(os.getenv("DEFAULT_LEADERBOARD_LIMIT", "100"))
MAX_LEADERBOARD_LIMIT: int = int(os.getenv("MAX_LEADERBOARD_LIMIT", "1000"))

# --- Catalog Configuration ---

# Populate the starter catalog when the course table is empty
SEED_COURSE_CATALOG: bool = (
    os.getenv("SEED_COURSE_CATALOG", "true").lower() == "true"
)

COURSE_CATEGORIES: List[str] = ["frontend", "backend", "fullstack", "ai", "blockchain"]
COURSE_LEVELS: List[str] = ["beginner", "intermediate", "advanced"]
