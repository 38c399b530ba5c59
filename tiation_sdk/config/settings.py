"""Configuration management for the Tiation SDK."""

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from ..exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.tiation.com/v1"
DEFAULT_USER_AGENT = "tiation-sdk-python/1.0.0"


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Configuration settings for the Tiation client."""
    
    # Credentials and endpoint (api_key is required)
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    
    # Retry settings
    max_retries: int = 3
    backoff_factor: float = 2.0
    max_retry_after: float = 60.0  # upper bound on a server-sent Retry-After
    
    # Batch operations
    batch_size: int = 50
    
    # Optional GET response cache
    cache_enabled: bool = False
    cache_dir: str = ".tiation_cache"
    cache_max_age_seconds: int = 300
    
    def __post_init__(self):
        """Normalize derived values after object creation."""
        if self.base_url:
            self.base_url = self.base_url.rstrip("/")
    
    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Create settings from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()
        
        return cls(
            api_key=os.getenv("TIATION_API_KEY", ""),
            base_url=os.getenv("TIATION_BASE_URL", DEFAULT_BASE_URL),
            timeout=_env_float("TIATION_TIMEOUT", "30"),
            user_agent=os.getenv("TIATION_USER_AGENT", DEFAULT_USER_AGENT),
            max_retries=_env_int("TIATION_MAX_RETRIES", "3"),
            backoff_factor=_env_float("TIATION_BACKOFF_FACTOR", "2.0"),
            max_retry_after=_env_float("TIATION_MAX_RETRY_AFTER", "60"),
            batch_size=_env_int("TIATION_BATCH_SIZE", "50"),
            cache_enabled=_env_bool("TIATION_CACHE_ENABLED", "false"),
            cache_dir=os.getenv("TIATION_CACHE_DIR", ".tiation_cache"),
            cache_max_age_seconds=_env_int("TIATION_CACHE_MAX_AGE", "300"),
        )
    
    def validate(self) -> None:
        """Validate configuration settings."""
        if not self.api_key:
            raise ConfigurationError("TIATION_API_KEY is required")
        
        parsed = urlparse(self.base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"TIATION_BASE_URL must be an http(s) URL, got {self.base_url!r}")
        
        if self.timeout <= 0:
            raise ConfigurationError("TIATION_TIMEOUT must be positive")
        
        if self.max_retries < 0:
            raise ConfigurationError("TIATION_MAX_RETRIES cannot be negative")
        
        if self.max_retry_after < 0:
            raise ConfigurationError("TIATION_MAX_RETRY_AFTER cannot be negative")
        
        if self.batch_size < 1:
            raise ConfigurationError("TIATION_BATCH_SIZE must be at least 1")
    
    def masked_api_key(self) -> str:
        """Return the API key with all but the last four characters hidden."""
        if not self.api_key:
            return "(not set)"
        if len(self.api_key) <= 4:
            return "*" * len(self.api_key)
        return "*" * (len(self.api_key) - 4) + self.api_key[-4:]
