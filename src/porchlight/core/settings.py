"""Application settings and configuration.

This module defines all configuration options for the Porchlight application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Porchlight", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Identity provider token verification
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_audience: str | None = Field(default=None, alias="JWT_AUDIENCE")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Comma-separated list of administrator emails
    admin_emails_raw: str = Field(default="", alias="ADMIN_EMAILS")

    # Database configuration
    database_url: str = Field(default="sqlite:///./porchlight.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Address search and listing limits
    search_min_query_length: int = Field(default=3, alias="SEARCH_MIN_QUERY_LENGTH")
    search_result_limit: int = Field(default=10, alias="SEARCH_RESULT_LIMIT")
    autocomplete_min_query_length: int = Field(
        default=5,
        alias="AUTOCOMPLETE_MIN_QUERY_LENGTH",
    )
    autocomplete_limit: int = Field(default=5, alias="AUTOCOMPLETE_LIMIT")
    recent_reviews_default_limit: int = Field(
        default=3,
        alias="RECENT_REVIEWS_DEFAULT_LIMIT",
    )
    dashboard_top_addresses: int = Field(default=3, alias="DASHBOARD_TOP_ADDRESSES")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def admin_emails(self) -> frozenset[str]:
        """Return the administrator allow-list as a normalized set.

        Returns:
            Lower-cased, stripped email addresses; empty entries are dropped.
        """
        return frozenset(
            email.strip().lower()
            for email in self.admin_emails_raw.split(",")
            if email.strip()
        )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
