"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "payment-intent-gateway"
    log_level: str = "INFO"

    # Inference gateway
    inference_provider: str = "openai"  # openai | offline
    inference_api_base: str = "https://api.openai.com/v1"
    inference_api_key: str = ""
    inference_model: str = "gpt-4o-mini"
    gateway_timeout_seconds: float = 10.0

    # Prompt parameters per call site
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 500
    scoring_temperature: float = 0.1
    scoring_max_tokens: int = 300


settings = Settings()
