"""Centralized configuration — all env vars in one place."""

import os


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.port: int = int(os.getenv("PORT", "3000"))

        # Spoonacular
        self.spoonacular_key: str | None = os.getenv("SPOONACULAR_KEY")
        self.spoonacular_base_url: str = os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com")
        self.upstream_timeout_seconds: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "5"))

        # Cache TTLs
        self.search_ttl_seconds: float = float(os.getenv("SEARCH_TTL_SECONDS", "3600"))
        self.detail_ttl_seconds: float = float(os.getenv("DETAIL_TTL_SECONDS", "86400"))

        # Debug dumps of upstream responses
        self.data_dir: str = os.getenv("DATA_DIR", "data")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing required env vars for upstream calls."""
        required = ["SPOONACULAR_KEY"]
        return [var for var in required if not getattr(self, _attr_for(var))]


settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "SPOONACULAR_KEY": "spoonacular_key",
    }
    return mapping.get(env_var, env_var.lower())
