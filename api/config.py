"""
Environment-backed settings.

Values are read once at import. Nothing here raises: clients that need a
missing value fail when they are first built.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Supabase
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").strip()
SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "").strip()
SUPABASE_SERVICE_ROLE_KEY: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "").strip()
SUPABASE_JWT_AUDIENCE: str = os.getenv("SUPABASE_JWT_AUDIENCE", "authenticated")

# Storage
QUESTION_PAPERS_BUCKET: str = os.getenv("QUESTION_PAPERS_BUCKET", "question-papers")

# Upload limits (bytes)
MAX_FILE_SIZE: int = 10 * 1024 * 1024
MIN_FILE_SIZE: int = 100

ALLOWED_EXTENSIONS: frozenset[str] = frozenset(
    {".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png", ".webp", ".heic", ".heif"}
)

# AI gateway (OpenAI-compatible chat completions)
AI_GATEWAY_API_KEY: str = (
    os.getenv("AI_GATEWAY_API_KEY", "").strip() or os.getenv("LOVABLE_API_KEY", "").strip()
)
AI_GATEWAY_URL: str = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1").strip()
AI_CHAT_MODEL: str = os.getenv("AI_CHAT_MODEL", "google/gemini-2.5-flash").strip() or "google/gemini-2.5-flash"
AI_CHAT_MAX_TOKENS: int = 1024
AI_CHAT_TEMPERATURE: float = 0.7
AI_CHAT_MAX_HISTORY: int = 10

# CORS
DEFAULT_ALLOWED_ORIGINS: tuple[str, ...] = (
    "https://lovable.dev",
    "https://www.lovable.dev",
    "https://qpaperhub.vercel.app",
    "http://localhost:5173",
    "http://localhost:8080",
    "http://localhost:3000",
)
ALLOWED_ORIGINS: tuple[str, ...] = tuple(
    o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if o.strip()
) or DEFAULT_ALLOWED_ORIGINS
ALLOWED_ORIGIN_SUFFIXES: tuple[str, ...] = (".lovableproject.com", ".lovable.app", ".vercel.app")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
