# core/config.py

"""
Configuration management for the portfolio service.
"""

from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # Service configuration
    app_name: str = "portfolio-service"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API when debug is off",
    )

    # Logging configuration
    log_level: str = "INFO"
    log_file_path: str = "logs/"

    # Cache configuration
    enable_caching: bool = True
    cache_ttl_seconds: int = 300
    cache_ttl_news: int = Field(
        default=600, description="TTL for aggregated news per region"
    )
    cache_max_size: int = 1000

    # News aggregation
    news_batch_size: int = Field(
        default=3, description="Feeds fetched concurrently per batch"
    )
    news_max_items_per_feed: int = 20
    news_request_timeout: int = Field(
        default=15, description="HTTP timeout per provider request in seconds"
    )
    news_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    )
    news_page_size: int = Field(default=12, description="Articles per page step")
    news_providers: List[str] = Field(
        default_factory=lambda: ["rss2json", "rss_to_json", "allorigins", "codetabs"],
        description="Provider order used when fetching a feed",
    )
    rss2json_base_url: str = "https://api.rss2json.com/v1/api.json"
    rss_to_json_base_url: str = "https://rss-to-json-serverless-api.vercel.app/api"
    allorigins_base_url: str = "https://api.allorigins.win/get?url="
    codetabs_base_url: str = "https://api.codetabs.com/v1/proxy?quest="

    # Encryption
    pbkdf2_iterations: int = 150000

    # Upload limits
    max_pdf_size_bytes: int = 100 * 1024 * 1024  # 100MB
    max_image_files: int = 100
    max_total_upload_bytes: int = 1024 * 1024 * 1024  # 1GB
    max_upload_bytes: int = Field(
        default=200 * 1024 * 1024,
        description="Upper bound for a single encrypted/decrypted upload",
    )
    upload_temp_dir: str = "tmp/uploads"

    # Auth configuration
    admin_username: str = "admin"
    admin_password_hash: Optional[str] = Field(
        default=None,
        description="pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>",
    )
    admin_password: Optional[str] = Field(
        default=None, description="Plain password, hashed at startup (dev only)"
    )
    token_ttl_seconds: int = 3600

    # Private item storage
    repository_backend: str = Field(
        default="memory", description="Repository backend: 'memory' or 'mongodb'"
    )
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "portfolio"
    mongodb_collection_private_items: str = "private_items"
    mongodb_collection_contact_messages: str = "contact_messages"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_login: str = "20/minute"
    rate_limit_refresh: str = "10/minute"

    # Transliteration
    nepali_dictionary_path: Optional[str] = Field(
        default=None, description="Override path of the Nepali words JSON file"
    )
    enable_itrans: bool = Field(
        default=True, description="Transliterate using the ITRANS scheme"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in levels:
            raise ValueError(f"log_level must be one of {sorted(levels)}")
        return v.upper()

    @field_validator("repository_backend")
    @classmethod
    def validate_repository_backend(cls, v):
        valid_backends = {"memory", "mongodb"}
        if v.lower() not in valid_backends:
            raise ValueError(f"repository_backend must be one of {sorted(valid_backends)}")
        return v.lower()

    @field_validator("news_batch_size")
    @classmethod
    def validate_news_batch_size(cls, v):
        if v < 1 or v > 10:
            raise ValueError("news_batch_size must be between 1 and 10")
        return v

    @field_validator("pbkdf2_iterations")
    @classmethod
    def validate_pbkdf2_iterations(cls, v):
        if v < 10000:
            raise ValueError("pbkdf2_iterations must be at least 10000")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def provider_base_urls(self) -> dict:
        """Get base URL per feed provider"""
        return {
            "rss2json": self.rss2json_base_url,
            "rss_to_json": self.rss_to_json_base_url,
            "allorigins": self.allorigins_base_url,
            "codetabs": self.codetabs_base_url,
            "direct": "",
        }


# Global settings instance
settings = Settings()
