"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Persistence settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="MARKUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Traversal
    max_depth: int = Field(default=64, gt=0, description="Maximum component nesting depth")

    # Output
    indent_text: str = Field(default="\t", description="Text written per indent level")
    newline: str = Field(default="\n", min_length=1, description="Line terminator")
    encode_attributes: bool = Field(default=False, description="HTML-encode attribute values")
    run_at_server: bool = Field(default=True, description="Emit runat=\"server\" on top-level tags")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
