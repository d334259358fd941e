"""Configuration management for dayprism clients and services."""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from dayprism.core.exceptions import ConfigurationError

API_KEY_ENV_VARS = ("DAYPRISM_ALPHA_VANTAGE_API_KEY", "ALPHAVANTAGE_API_KEY")


@dataclass
class AlphaVantageConfig:
    """Upstream provider settings."""

    api_key: str | None = None
    base_url: str = "https://www.alphavantage.co/query"
    interval: str = "15min"
    timeout: float = 30.0
    rich_output_size: str = "full"
    degraded_output_size: str = "compact"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive", setting="alpha_vantage.timeout")
        if not self.base_url:
            raise ConfigurationError("base_url cannot be empty", setting="alpha_vantage.base_url")

    def require_api_key(self) -> str:
        """Return the API key or raise when none is configured."""
        api_key = (self.api_key or "").strip()
        if not api_key:
            raise ConfigurationError(
                "Alpha Vantage API key is not configured. "
                f"Set {API_KEY_ENV_VARS[0]} or alpha_vantage.api_key in the config file.",
                setting="alpha_vantage.api_key",
            )
        return api_key


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    file: str | None = None


@dataclass
class WebConfig:
    """Web service settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


@dataclass
class DayPrismConfig:
    """Top level dayprism configuration."""

    alpha_vantage: AlphaVantageConfig = field(default_factory=AlphaVantageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "DayPrismConfig":
        """Build a configuration from a nested dictionary."""
        return cls(
            alpha_vantage=AlphaVantageConfig(**config_dict.get("alpha_vantage", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
            web=WebConfig(**config_dict.get("web", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested dictionary."""
        return {
            "alpha_vantage": asdict(self.alpha_vantage),
            "logging": asdict(self.logging),
            "web": asdict(self.web),
        }


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            current = d.get(k)
            d[k] = _deep_update(current if isinstance(current, dict) else {}, v)
        else:
            d[k] = v
    return d


class ConfigManager:
    """Loads configuration from a TOML file and the environment.

    Environment variables take precedence over the file, which takes
    precedence over the dataclass defaults.
    """

    def __init__(self, config_path: Path | None = None, *, use_env: bool = True):
        env_path = os.getenv("DAYPRISM_CONFIG_FILE")
        default_path = Path(env_path) if env_path else Path.home() / ".dayprism" / "config.toml"
        self.config_path = config_path or default_path
        self.use_env = use_env
        self.config = self._load_config()

    def _read_file(self) -> dict[str, Any]:
        if not self.config_path.exists():
            return {}
        try:
            with open(self.config_path, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Failed to load config from {path}: {error}", path=str(self.config_path), error=str(e))
            return {}

    def _load_config(self) -> DayPrismConfig:
        env_config = load_config_from_env() if self.use_env else {}
        config_dict = _deep_update(self._read_file(), env_config)
        try:
            return DayPrismConfig.from_dict(config_dict)
        except TypeError as e:
            logger.warning("Ignoring invalid config from {path}: {error}", path=str(self.config_path), error=str(e))
            return DayPrismConfig.from_dict(env_config)

    def get_config(self) -> DayPrismConfig:
        """Return the active configuration."""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Deep-merge ``updates`` into the active configuration."""
        config_dict = self.config.to_dict()
        _deep_update(config_dict, updates)
        self.config = DayPrismConfig.from_dict(config_dict)


def load_config_from_env() -> dict[str, Any]:
    """Read configuration overrides from environment variables."""
    config: dict[str, Any] = {}

    provider_config: dict[str, Any] = {}
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value and value.strip():
            provider_config["api_key"] = value.strip()
            break
    base_url = os.getenv("DAYPRISM_ALPHA_VANTAGE_BASE_URL")
    if base_url:
        provider_config["base_url"] = base_url
    timeout = os.getenv("DAYPRISM_ALPHA_VANTAGE_TIMEOUT")
    if timeout is not None:
        try:
            provider_config["timeout"] = float(timeout)
        except ValueError as e:
            raise ConfigurationError(
                f"DAYPRISM_ALPHA_VANTAGE_TIMEOUT must be a number, got {timeout!r}",
                setting="alpha_vantage.timeout",
            ) from e
    interval = os.getenv("DAYPRISM_ALPHA_VANTAGE_INTERVAL")
    if interval:
        provider_config["interval"] = interval
    if provider_config:
        config["alpha_vantage"] = provider_config

    logging_config: dict[str, Any] = {}
    level = os.getenv("DAYPRISM_LOGGING_LEVEL")
    if level is not None:
        logging_config["level"] = level
    log_file = os.getenv("DAYPRISM_LOGGING_FILE")
    if log_file is not None:
        logging_config["file"] = log_file
    if logging_config:
        config["logging"] = logging_config

    web_config: dict[str, Any] = {}
    host = os.getenv("DAYPRISM_HOST")
    if host:
        web_config["host"] = host
    port = os.getenv("DAYPRISM_PORT")
    if port is not None:
        try:
            web_config["port"] = int(port)
        except ValueError as e:
            raise ConfigurationError(f"DAYPRISM_PORT must be an integer, got {port!r}", setting="web.port") from e
    reload = os.getenv("DAYPRISM_RELOAD")
    if reload is not None:
        web_config["reload"] = reload.lower() == "true"
    if web_config:
        config["web"] = web_config

    return config


def get_default_config() -> DayPrismConfig:
    """Return a configuration built from defaults only."""
    return DayPrismConfig()
