import os
from dotenv import load_dotenv

# Load .env from the backend directory
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", ".env"))

# Database, stored in backend/data/
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.abspath(os.path.join(BASE_DIR, "..", ".."))

DATABASE_PATH: str = os.getenv(
    "DATABASE_PATH",
    os.path.join(BACKEND_DIR, "data", "feynman.db"),
)
MIGRATIONS_DIR: str = os.path.join(BACKEND_DIR, "migrations")

# Language model: any OpenAI-compatible endpoint (OpenRouter by default)
OPENAI_API_KEY: str = (os.getenv("OPENAI_API_KEY") or os.getenv("OPENROUTER_API_KEY") or "").strip()
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://openrouter.ai/api/v1").strip()
OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "openai/gpt-4o-mini").strip()
TRANSCRIPTION_MODEL: str = os.getenv("TRANSCRIPTION_MODEL", "whisper-1").strip()
OPENAI_TIMEOUT_SECONDS: float = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "60"))
OPENAI_MAX_RETRIES: int = int(os.getenv("OPENAI_MAX_RETRIES", "2"))

# Ingestion
MAX_LECTURE_CHARS: int = int(os.getenv("MAX_LECTURE_CHARS", "100000"))
CONCEPT_BATCH_MIN: int = int(os.getenv("CONCEPT_BATCH_MIN", "5"))
CONCEPT_BATCH_MAX: int = int(os.getenv("CONCEPT_BATCH_MAX", "15"))

# Review sessions. 0 means no ceiling on learner turns
REVIEW_MAX_TURNS: int = int(os.getenv("REVIEW_MAX_TURNS", "0"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
