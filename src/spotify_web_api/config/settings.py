"""Settings loaded from the environment (and an optional ``.env`` file).

Hey future me - each group reads its OWN env prefix, so a deployment only needs e.g.:

    SPOTIFY_CLIENT_ID=...
    SPOTIFY_CLIENT_SECRET=...          # client credentials flow only
    SPOTIFY_REDIRECT_URI=http://127.0.0.1:8888/callback
    SPOTIFY_SCOPES="user-library-read playlist-modify-private"
    HTTP_TIMEOUT=10
    LOG_LEVEL=DEBUG
    OBSERVABILITY_LOG_JSON_FORMAT=true

Nothing here is validated for presence - the client factories raise ConfigurationError when the
flow they build actually needs a missing value.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spotify_web_api.domain.value_objects.scopes import Scope, parse_scopes


class SpotifySettings(BaseSettings):
    """Spotify app credentials and endpoints."""

    model_config = SettingsConfigDict(env_prefix="SPOTIFY_", env_file=".env", extra="ignore")

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""
    # Space separated, exactly like the OAuth ``scope`` parameter.
    scopes: str = ""
    api_url: str = "https://api.spotify.com/v1/"
    accounts_url: str = "https://accounts.spotify.com"

    @property
    def scope_set(self) -> set[Scope]:
        return parse_scopes(self.scopes)

    @property
    def token_url(self) -> str:
        return f"{self.accounts_url.rstrip('/')}/api/token"

    @property
    def authorize_url(self) -> str:
        return f"{self.accounts_url.rstrip('/')}/authorize"


class HttpSettings(BaseSettings):
    """httpx client tuning."""

    model_config = SettingsConfigDict(env_prefix="HTTP_", env_file=".env", extra="ignore")

    timeout: float = Field(default=10.0, gt=0)
    max_connections: int = Field(default=50, ge=1)
    max_keepalive: int = Field(default=20, ge=0)


class ObservabilitySettings(BaseSettings):
    """Logging output options."""

    model_config = SettingsConfigDict(
        env_prefix="OBSERVABILITY_", env_file=".env", extra="ignore"
    )

    log_json_format: bool = False


class Settings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "spotify-web-api"
    log_level: str = "INFO"

    spotify: SpotifySettings = Field(default_factory=SpotifySettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


# Cached so every caller shares one instance; tests call get_settings.cache_clear() after
# patching the environment.
@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings."""
    return Settings()
