from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StringParamConfig(BaseModel):
    """Length bounds applied to string request parameters."""

    min_length: int = Field(default=0, description="Minimum accepted zip code length")
    max_length: int = Field(default=0, description="Maximum zip code length quoted to callers")

    @field_validator("min_length", "max_length", mode="before")
    def parse_length(cls, v):
        """Treat empty or non-integer values as missing (0)."""
        if v is None:
            return 0
        try:
            return int(str(v).strip())
        except ValueError:
            return 0

    def problem(self) -> Optional[str]:
        """Describe what is wrong with the bounds, or None when both are usable."""
        if self.min_length > 0 and self.max_length > 0:
            return None
        return (
            "String length bounds are not configured properly "
            f"(min_length={self.min_length}, max_length={self.max_length})"
        )


class EndPoints(BaseModel):
    """URL prefixes of the upstream lookup services."""

    zipcode: Optional[str] = Field(default="", description="Zip lookup URL prefix")
    weather: Optional[str] = Field(default="", description="Weather lookup URL prefix")

    def problem(self) -> Optional[str]:
        """Describe which endpoints are missing, or None when both are set."""
        missing = [name for name in ("zipcode", "weather") if not getattr(self, name)]
        if not missing:
            return None
        return f"API endpoints are not configured properly (missing: {', '.join(missing)})"

    def urls(self) -> Tuple[str, str]:
        return self.zipcode or "", self.weather or ""


class Config(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.

    Lookup groups tolerate missing or invalid values at startup. Their
    problems are reported per request by the lookup handler.
    """

    # Lookup Configuration
    string_param_config: StringParamConfig = Field(
        default_factory=StringParamConfig, description="Zip code length bounds"
    )
    end_points: EndPoints = Field(
        default_factory=EndPoints, description="Upstream service URL prefixes"
    )
    upstream_base_url: str = Field(
        default="", description="Base URL prepended to relative endpoint prefixes"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="FastAPI host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="FastAPI port")

    # Logging Configuration
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


config = Config()
