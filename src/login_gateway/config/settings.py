"""Login gateway configuration using pydantic-settings"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .auth_config import AuthConfig, ProviderConfig

JWT_VALID_SECONDS = 14 * 24 * 60 * 60  # 14 days


class Settings(BaseSettings):
    """Login gateway configuration from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Session tokens
    jwt_secret: str = Field(
        default="",
        description="Shared secret used to sign session tokens (HS256)",
    )
    jwt_valid_seconds: int = Field(
        default=JWT_VALID_SECONDS,
        description="Validity window of newly issued session tokens",
    )

    # Google OAuth
    google_client_id: str = Field(
        default="",
        description="OAuth client identifier registered with Google",
    )
    google_client_secret: str = Field(
        default="",
        description="OAuth client secret registered with Google",
    )
    google_token_url: str = Field(
        default="https://accounts.google.com/o/oauth2/token",
        description="Google authorization-code token endpoint",
    )

    # Azure (Office365) OAuth
    azure_client_id: str = Field(
        default="",
        description="OAuth client identifier registered with Azure AD",
    )
    azure_client_secret: str = Field(
        default="",
        description="OAuth client secret registered with Azure AD",
    )
    azure_token_url: str = Field(
        default="https://login.microsoftonline.com/common/oauth2/token",
        description="Azure AD authorization-code token endpoint",
    )
    azure_resource: str = Field(
        default="https://graph.windows.net/",
        description="Resource requested from Azure AD during the code exchange",
    )

    # User store
    user_store_url: str = Field(
        default="http://localhost:8001",
        description="Base URL of the user store service",
    )
    http_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for outbound HTTP calls",
    )

    # Gateway Configuration
    gateway_host: str = Field(
        default="0.0.0.0",
        description="Gateway bind host",
    )
    gateway_port: int = Field(
        default=8080,
        description="Gateway bind port",
    )

    # CORS Configuration
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173,http://localhost:8080",
        description="Comma-separated list of allowed CORS origins",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    def auth_config(self) -> AuthConfig:
        """
        Build the immutable authentication configuration.

        The result is handed to the OAuth exchange client and the session
        resolver at construction; neither reads settings afterwards.

        Returns:
            Frozen AuthConfig with the signing secret and both providers
        """
        return AuthConfig(
            jwt_secret=self.jwt_secret,
            jwt_valid_seconds=self.jwt_valid_seconds,
            providers={
                "google": ProviderConfig(
                    name="google",
                    token_url=self.google_token_url,
                    client_id=self.google_client_id,
                    client_secret=self.google_client_secret,
                    identity_claim="email",
                ),
                "azure": ProviderConfig(
                    name="azure",
                    token_url=self.azure_token_url,
                    client_id=self.azure_client_id,
                    client_secret=self.azure_client_secret,
                    identity_claim="upn",
                    extra_params=(("resource", self.azure_resource),),
                ),
            },
        )


# Singleton settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
