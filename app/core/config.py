"""
Application configuration using Pydantic Settings
"""

from typing import List, Literal, Union
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Settings
    api_title: str = "Image SEO Metadata API"
    api_description: str = (
        "Generates alt text, captions, descriptions, keywords and filenames "
        "for images using a vision-language model"
    )
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # CORS Settings
    cors_origins: Union[List[str], str] = ["*"]
    cors_allow_methods: list = ["GET", "POST", "OPTIONS"]
    cors_allow_headers: list = ["*"]

    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string to list.

        Args:
            v: Can be either a list of origins or a comma-separated string.
               If "*" is provided, allows all origins.

        Example:
            >>> parse_cors_origins("http://localhost:3000,http://localhost:8080")
            ['http://localhost:3000', 'http://localhost:8080']
        """
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = "data/app.log"

    # Image Settings
    max_image_size: int = 10 * 1024 * 1024  # 10 MiB

    # Vision Model Settings
    vision_provider: Literal["workers_ai", "openai"] = "workers_ai"

    # Cloudflare Workers AI
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""
    workers_ai_model: str = "@cf/meta/llama-3.2-11b-vision-instruct"
    workers_ai_base_url: str = "https://api.cloudflare.com/client/v4"
    workers_ai_max_tokens: int = 1024

    # AI Pydantic Settings
    ai_pydantic_model: str = "openai:gpt-4o-mini"

    # OpenAI API Key
    openai_api_key: str = ""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
