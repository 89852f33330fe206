"""
Configuration management for the IPTV catalog backend.
Uses pydantic-settings for environment variable loading.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # API Configuration
    app_name: str = "IPTV Catalog"
    app_version: str = "0.1.0"
    debug: bool = False
    
    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    
    # CORS Configuration
    # Default allows all origins for development; set IPTV_CORS_ORIGINS for production
    cors_origins: list[str] = ["*"]
    
    # Rate Limiting
    rate_limit_per_minute: int = 100
    
    # Fetching
    fetch_timeout_seconds: float = 60.0
    
    # Playlist defaults
    default_logo_url: str = "https://i.imgur.com/p8vG2x9.png"
    
    # Sources offered by the "load example" action
    example_playlist_url: str = "https://iptv-org.github.io/iptv/index.m3u"
    example_guide_url: str = ""
    
    # Key-value store for source URLs and favorites
    database_path: str = "data/iptv_catalog.db"
    
    # Pydantic V2 configuration
    model_config = SettingsConfigDict(env_prefix="IPTV_", env_file=".env")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
