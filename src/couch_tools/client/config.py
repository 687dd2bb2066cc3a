"""Configuration for the CouchDB client."""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CouchConfig(BaseSettings):
    """Configuration for the CouchDB client.

    All settings can be configured via environment variables with COUCH_ prefix.

    Server:
        - COUCH_URL (or COUCHDB_URL): server base URL, may include a path prefix

    Authentication (optional, pick one):
        - COUCH_USERNAME / COUCH_PASSWORD: HTTP basic auth
        - COUCH_OAUTH_*: OAuth2 client credentials, for servers behind a
          token-issuing gateway or using JWT authentication
    """

    model_config = SettingsConfigDict(
        env_prefix="COUCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:5984",
        validation_alias=AliasChoices("url", "COUCH_URL", "COUCHDB_URL"),
    )
    timeout: float = Field(default=30.0, ge=1.0, le=300.0)

    # Basic auth
    username: str | None = Field(default=None)
    password: str | None = Field(default=None)

    # OAuth2 client credentials
    oauth_client_id: str | None = Field(default=None)
    oauth_client_secret: str | None = Field(default=None)
    oauth_token_url: str | None = Field(default=None)
    oauth_scope: str | None = Field(default=None)

    log_level: str = Field(default="INFO")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format and strip trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @property
    def basic_auth_enabled(self) -> bool:
        """Check if basic auth credentials are configured."""
        return self.username is not None and self.password is not None

    @property
    def oauth_enabled(self) -> bool:
        """Check if OAuth is configured."""
        return all([
            self.oauth_client_id,
            self.oauth_client_secret,
            self.oauth_token_url,
        ])

    def validate_config(self) -> None:
        """Validate that authentication settings are complete and consistent.

        Raises:
            ValueError: If configuration is incomplete or ambiguous.
        """
        if self.password is not None and self.username is None:
            raise ValueError("COUCH_PASSWORD is set but COUCH_USERNAME is not")

        oauth_fields = [self.oauth_client_id, self.oauth_client_secret, self.oauth_token_url]
        if any(oauth_fields) and not all(oauth_fields):
            raise ValueError(
                "OAuth requires COUCH_OAUTH_CLIENT_ID, COUCH_OAUTH_CLIENT_SECRET "
                "and COUCH_OAUTH_TOKEN_URL to all be set"
            )

        if self.basic_auth_enabled and self.oauth_enabled:
            raise ValueError("Configure either basic auth or OAuth, not both")
