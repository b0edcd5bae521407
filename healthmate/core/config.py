from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env lives in the project root: healthmate/core/config.py -> healthmate/core -> healthmate -> root
_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _ROOT / ".env"

# OpenAI keys without this prefix are treated as missing
OPENAI_KEY_PREFIX = "sk-"

LLM_PROVIDERS = ("gemini", "openai")


class Settings(BaseSettings):
    secret_key: str = "change-me-in-production"
    database_url: str = "sqlite:///./healthmate.db"
    # Comma separated origin list; the Next.js frontend runs on :3000 in development
    cors_origins: str = "http://localhost:3000"
    # Analyses per minute per client IP
    rate_limit_analyze_per_minute: int = 10
    # "gemini" (generateContent REST API) or "openai" (chat completions)
    llm_provider: str = "gemini"
    gemini_api_key: str = ""
    gemini_model: str = "models/gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    openai_api_key: str = ""
    # Several keys, comma separated. When a key hits auth/rate limits the next one is tried.
    openai_api_keys: str = ""
    openai_model: str = "gpt-4o-mini"
    llm_timeout_seconds: float = 60.0
    # Cloudinary: used to sign delivery URLs of raw (PDF) uploads
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    # Report text beyond this many characters is not sent to the model
    analysis_max_chars: int = 8000

    model_config = {
        "env_file": _ENV_FILE if _ENV_FILE.is_file() else ".env",
        "extra": "ignore",
    }

    @field_validator(
        "gemini_api_key",
        "openai_api_key",
        "openai_api_keys",
        "cloudinary_cloud_name",
        "cloudinary_api_key",
        "cloudinary_api_secret",
        mode="before",
    )
    @classmethod
    def strip_secret(cls, v: str | None) -> str:
        """Trailing spaces from copy/paste break signatures and auth headers."""
        return (v or "").strip()

    @field_validator("llm_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: str | None) -> str:
        provider = (v or "gemini").strip().lower()
        if provider not in LLM_PROVIDERS:
            raise ValueError(f"LLM_PROVIDER must be one of {', '.join(LLM_PROVIDERS)}")
        return provider


settings = Settings()


def get_openai_keys(config: Settings | None = None) -> list[str]:
    """
    Usable OpenAI keys (prefixed with sk-, no whitespace).
    OPENAI_API_KEYS wins when set; otherwise OPENAI_API_KEY as a single entry.
    """
    config = config or settings
    keys_raw = (config.openai_api_keys or "").strip()
    if keys_raw:
        keys = [k.strip() for k in keys_raw.split(",") if k.strip() and k.strip().startswith(OPENAI_KEY_PREFIX)]
        if keys:
            return keys
    single = (config.openai_api_key or "").strip()
    if single and single.startswith(OPENAI_KEY_PREFIX):
        return [single]
    return []


def is_llm_configured(config: Settings | None = None) -> bool:
    """Is there a credential for the selected provider?"""
    config = config or settings
    if config.llm_provider == "openai":
        return len(get_openai_keys(config)) > 0
    return bool(config.gemini_api_key)


def is_storage_configured(config: Settings | None = None) -> bool:
    config = config or settings
    return bool(config.cloudinary_cloud_name and config.cloudinary_api_key and config.cloudinary_api_secret)
