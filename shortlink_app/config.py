from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = False
    
    # Application
    app_name: str = "Shortlink"
    app_version: str = "1.0.0"
    
    # Server (loopback by default, override with HOST/PORT)
    host: str = "127.0.0.1"
    port: int = 8080
    base_url: str = "http://127.0.0.1:8080"
    
    # Short code derivation
    short_code_strategy: str = "sha3_256"  # Options: "sha3_256", "blake2b"
    short_code_bytes: int = 6  # Digest bytes kept, rendered as 2 hex chars each
    collision_policy: str = "overwrite"  # Options: "overwrite", "reject"
    
    # Persistence
    persistence_backend: str = "file"  # Options: "file", "sqlite", "redis", "null"
    storage_file_path: str = "shortened_urls.txt"
    database_url: str = "sqlite:///./shortlink.db"
    redis_url: str = "redis://localhost:6379/0"
    redis_key: str = "shortlink:entries"
    
    # Metrics
    metrics_top_n: int = 3
    
    # Logging
    log_level: str = "INFO"
    log_file: str = ""
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
