"""Configuration management for the harbormaster application."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from jsonschema import ValidationError, validate

from harbormaster.errors import ConfigError

# Load environment variables from .env file if it exists
load_dotenv()

# Digital Ocean personal access tokens are 64 hex characters
MIN_DO_API_KEY_LENGTH = 64


class Config:
    """Application configuration with sensible defaults."""

    CONFIG_PATH: str = os.getenv("HARBORMASTER_CONFIG", "/var/www/work/bin/harbormaster.json")

    # Timeouts (in seconds)
    API_TIMEOUT: int = int(os.getenv("API_TIMEOUT", "30"))

    # Polling
    STATUS_POLL_ATTEMPTS: int = int(os.getenv("STATUS_POLL_ATTEMPTS", "10"))
    STATUS_POLL_INTERVAL: float = float(os.getenv("STATUS_POLL_INTERVAL", "3.0"))
    LOCK_POLL_INTERVAL: float = float(os.getenv("LOCK_POLL_INTERVAL", "20.0"))
    CREATE_SETTLE_DELAY: float = float(os.getenv("CREATE_SETTLE_DELAY", "5.0"))
    POWER_OFF_SETTLE_DELAY: float = float(os.getenv("POWER_OFF_SETTLE_DELAY", "5.0"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Security
    REDACT_KEYS: tuple = ("api_key", "authorization", "x-auth-key", "secret", "token")

    # HTTP API
    API_KEY: str = os.getenv("HARBORMASTER_API_KEY", "")


CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "digital_ocean": {
            "type": "object",
            "properties": {
                "api_key": {"type": "string"},
            },
            "required": ["api_key"],
        },
        "cloudflare": {
            "type": "object",
            "properties": {
                "api_key": {"type": "string"},
                "email": {"type": "string"},
                "zone": {"type": "string"},
            },
            "required": ["api_key", "email", "zone"],
        },
    },
    "anyOf": [
        {"required": ["digital_ocean"]},
        {"required": ["cloudflare"]},
    ],
}


@dataclass
class PollSettings:
    """Timing for the state-transition driver."""
    status_attempts: int = Config.STATUS_POLL_ATTEMPTS
    status_interval: float = Config.STATUS_POLL_INTERVAL
    lock_interval: float = Config.LOCK_POLL_INTERVAL
    create_settle_delay: float = Config.CREATE_SETTLE_DELAY
    power_off_settle_delay: float = Config.POWER_OFF_SETTLE_DELAY

    def __post_init__(self):
        if self.status_attempts < 1:
            raise ConfigError(f"STATUS_POLL_ATTEMPTS must be at least 1, got {self.status_attempts}")


@dataclass
class DigitalOceanConfig:
    api_key: str

    def validate(self) -> None:
        if len(self.api_key or "") < MIN_DO_API_KEY_LENGTH:
            raise ConfigError("Digital Ocean api key appears invalid")


@dataclass
class CloudflareConfig:
    api_key: str
    email: str
    zone: str

    def validate(self) -> None:
        missing = [k for k in ("api_key", "email", "zone") if not getattr(self, k)]
        if missing:
            raise ConfigError(f"Missing Cloudflare configuration: {', '.join(missing)}")
        if "@" not in self.email:
            raise ConfigError(f"Cloudflare email appears invalid: {self.email}")


@dataclass
class HarbormasterConfig:
    """Provider credentials loaded from the config file."""
    digital_ocean: Optional[DigitalOceanConfig] = None
    cloudflare: Optional[CloudflareConfig] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HarbormasterConfig":
        try:
            validate(instance=data, schema=CONFIG_SCHEMA)
        except ValidationError as ve:
            raise ConfigError(f"Config validation error: {ve.message}") from ve

        do = data.get("digital_ocean")
        cf = data.get("cloudflare")
        config = cls(
            digital_ocean=DigitalOceanConfig(**do) if do else None,
            cloudflare=CloudflareConfig(**cf) if cf else None,
        )
        for provider in (config.digital_ocean, config.cloudflare):
            if provider is not None:
                provider.validate()
        return config

    def require_digital_ocean(self) -> DigitalOceanConfig:
        if self.digital_ocean is None:
            raise ConfigError("No 'digital_ocean' section in config")
        return self.digital_ocean

    def require_cloudflare(self) -> CloudflareConfig:
        if self.cloudflare is None:
            raise ConfigError("No 'cloudflare' section in config")
        return self.cloudflare


def load_config(path: Union[str, Path, None] = None) -> HarbormasterConfig:
    """Read and validate a JSON or YAML config file.

    Args:
        path: Location of the config file (defaults to Config.CONFIG_PATH)

    Returns:
        Validated HarbormasterConfig

    Raises:
        ConfigError: If the file is missing, unparseable or fails validation
    """
    path = Path(path or Config.CONFIG_PATH).expanduser()
    if not path.exists():
        raise ConfigError(f"Unable to open '{path}' file")

    # JSON is a subset of YAML, so one loader handles both
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config in {path} must be a mapping")
    return HarbormasterConfig.from_dict(data)
