"""Configuration for the HIG docs server.

Settings are read from the environment (``HIG_`` prefix) and an optional
``.env`` file. Import the module-level ``settings`` instance.
"""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.enums import ScorerKind, TechnicalDocsSource


class Settings(BaseSettings):
    """Server settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="HIG_", extra="ignore")

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    cors_allowed_origins: str = "*"

    # Error tracking (empty = disabled)
    sentry_dsn: str = ""

    # Content bundles (empty path = bundled package data)
    content_path: str = ""
    index_path: str = ""
    technical_docs_path: str = ""

    # Cache
    cache_ttl_seconds: int = 3600
    cache_backup_multiplier: int = 24
    cache_max_entries: int = 10000

    # Relevance scoring
    search_scorer: ScorerKind = ScorerKind.KEYWORD
    embedding_model: str = "all-MiniLM-L6-v2"
    semantic_weight: float = 0.4
    keyword_weight: float = 0.3
    structure_weight: float = 0.2
    context_weight: float = 0.1

    # Input limits
    max_query_length: int = 100
    max_search_limit: int = 50
    default_search_limit: int = 10
    max_component_name_length: int = 50
    max_compare_platforms: int = 6
    max_wildcard_results: int = 100

    # Quality thresholds
    min_quality_score: float = 0.5
    min_confidence: float = 0.4
    min_content_length: int = 200
    min_structure_score: float = 0.2
    min_apple_terms_score: float = 0.1
    max_fallback_rate: float = 5.0  # percent
    strict_validation: bool = False  # drop every invalid section at build time

    # Unified search
    enable_combined_results: bool = True

    # Technical documentation source
    technical_docs_source: TechnicalDocsSource = TechnicalDocsSource.STATIC
    technical_docs_base_url: str = "https://developer.apple.com/tutorials/data"
    technical_docs_timeout: float = 15.0
    technical_docs_frameworks: str = "swiftui,uikit,appkit"

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    @property
    def technical_docs_frameworks_list(self) -> list[str]:
        """Frameworks queried by the remote technical docs client."""
        return [f.strip() for f in self.technical_docs_frameworks.split(",") if f.strip()]


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
