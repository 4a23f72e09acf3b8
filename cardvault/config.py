from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CARDVAULT_")

    app_name: str = "CardVault"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/cardvault"

    # Source pages may only be fetched from these hosts (subdomains included)
    allowed_hosts: list[str] = ["yugipedia.com"]
    fetch_timeout_seconds: float = 15.0
    max_redirects: int = 5
    user_agent: str = "Mozilla/5.0 (compatible; CardVaultBot/1.0)"

    # Used when no language can be detected from the card codes
    default_language: str = "EN"


settings = Settings()
