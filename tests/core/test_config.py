"""Tests for configuration loading."""

from pathlib import Path

import pytest

from dayprism.core.config import (
    AlphaVantageConfig,
    ConfigManager,
    DayPrismConfig,
    get_default_config,
    load_config_from_env,
)
from dayprism.core.exceptions import ConfigurationError

ENV_VARS = (
    "DAYPRISM_ALPHA_VANTAGE_API_KEY",
    "ALPHAVANTAGE_API_KEY",
    "DAYPRISM_ALPHA_VANTAGE_BASE_URL",
    "DAYPRISM_ALPHA_VANTAGE_TIMEOUT",
    "DAYPRISM_ALPHA_VANTAGE_INTERVAL",
    "DAYPRISM_LOGGING_LEVEL",
    "DAYPRISM_LOGGING_FILE",
    "DAYPRISM_HOST",
    "DAYPRISM_PORT",
    "DAYPRISM_RELOAD",
    "DAYPRISM_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_default_config():
    config = get_default_config()

    assert config.alpha_vantage.api_key is None
    assert config.alpha_vantage.base_url == "https://www.alphavantage.co/query"
    assert config.alpha_vantage.interval == "15min"
    assert config.alpha_vantage.rich_output_size == "full"
    assert config.alpha_vantage.degraded_output_size == "compact"
    assert config.logging.level == "INFO"
    assert config.web.port == 8000


def test_require_api_key():
    assert AlphaVantageConfig(api_key=" abc ").require_api_key() == "abc"
    with pytest.raises(ConfigurationError, match="API key is not configured"):
        AlphaVantageConfig().require_api_key()


@pytest.mark.parametrize("kwargs", [{"timeout": 0}, {"timeout": -1.0}, {"base_url": ""}])
def test_invalid_provider_config(kwargs):
    with pytest.raises(ConfigurationError):
        AlphaVantageConfig(**kwargs)


def test_to_dict_round_trip():
    config = DayPrismConfig(alpha_vantage=AlphaVantageConfig(api_key="k", timeout=5.0))

    assert DayPrismConfig.from_dict(config.to_dict()) == config


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DAYPRISM_ALPHA_VANTAGE_API_KEY", "primary")
    monkeypatch.setenv("ALPHAVANTAGE_API_KEY", "secondary")
    monkeypatch.setenv("DAYPRISM_ALPHA_VANTAGE_TIMEOUT", "12.5")
    monkeypatch.setenv("DAYPRISM_LOGGING_LEVEL", "DEBUG")
    monkeypatch.setenv("DAYPRISM_PORT", "9000")
    monkeypatch.setenv("DAYPRISM_RELOAD", "TRUE")

    config = load_config_from_env()

    assert config == {
        "alpha_vantage": {"api_key": "primary", "timeout": 12.5},
        "logging": {"level": "DEBUG"},
        "web": {"port": 9000, "reload": True},
    }


def test_fallback_api_key_env_var(monkeypatch):
    monkeypatch.setenv("ALPHAVANTAGE_API_KEY", "secondary")

    assert load_config_from_env()["alpha_vantage"]["api_key"] == "secondary"


def test_empty_env_is_empty():
    assert load_config_from_env() == {}


@pytest.mark.parametrize(("name", "value"), [("DAYPRISM_ALPHA_VANTAGE_TIMEOUT", "soon"), ("DAYPRISM_PORT", "http")])
def test_bad_numeric_env_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        load_config_from_env()


def test_manager_reads_toml_file(tmp_path: Path):
    path = tmp_path / "config.toml"
    path.write_text('[alpha_vantage]\napi_key = "from-file"\ntimeout = 10.0\n\n[web]\nport = 8100\n', encoding="utf-8")

    config = ConfigManager(path).get_config()

    assert config.alpha_vantage.api_key == "from-file"
    assert config.alpha_vantage.timeout == 10.0
    assert config.web.port == 8100


def test_env_takes_precedence_over_file(tmp_path: Path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text('[alpha_vantage]\napi_key = "from-file"\n', encoding="utf-8")
    monkeypatch.setenv("DAYPRISM_ALPHA_VANTAGE_API_KEY", "from-env")

    assert ConfigManager(path).get_config().alpha_vantage.api_key == "from-env"
    assert ConfigManager(path, use_env=False).get_config().alpha_vantage.api_key == "from-file"


def test_config_file_env_var_sets_default_path(tmp_path: Path, monkeypatch):
    path = tmp_path / "custom.toml"
    path.write_text('[logging]\nlevel = "ERROR"\n', encoding="utf-8")
    monkeypatch.setenv("DAYPRISM_CONFIG_FILE", str(path))

    manager = ConfigManager()

    assert manager.config_path == path
    assert manager.get_config().logging.level == "ERROR"


def test_missing_file_gives_defaults(tmp_path: Path):
    assert ConfigManager(tmp_path / "absent.toml").get_config() == DayPrismConfig()


def test_malformed_file_falls_back_to_defaults(tmp_path: Path):
    path = tmp_path / "config.toml"
    path.write_text("this is = = not toml", encoding="utf-8")

    assert ConfigManager(path).get_config() == DayPrismConfig()


def test_unknown_keys_fall_back_to_defaults(tmp_path: Path):
    path = tmp_path / "config.toml"
    path.write_text("[alpha_vantage]\nunknown = 1\n", encoding="utf-8")

    assert ConfigManager(path).get_config() == DayPrismConfig()


def test_invalid_file_keeps_env_overrides(tmp_path: Path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text("[alpha_vantage]\nunknown = 1\n", encoding="utf-8")
    monkeypatch.setenv("DAYPRISM_ALPHA_VANTAGE_API_KEY", "env-key")
    monkeypatch.setenv("DAYPRISM_PORT", "9100")

    config = ConfigManager(path).get_config()

    assert config.alpha_vantage.api_key == "env-key"
    assert config.alpha_vantage.interval == "15min"
    assert config.web.port == 9100


def test_scalar_section_with_env_override_keeps_env(tmp_path: Path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text('alpha_vantage = "x"\n', encoding="utf-8")
    monkeypatch.setenv("DAYPRISM_ALPHA_VANTAGE_API_KEY", "env-key")

    assert ConfigManager(path).get_config().alpha_vantage.api_key == "env-key"


def test_update_config_deep_merges(tmp_path: Path):
    manager = ConfigManager(tmp_path / "absent.toml")

    manager.update_config(alpha_vantage={"api_key": "new"}, web={"port": 8200})

    config = manager.get_config()
    assert config.alpha_vantage.api_key == "new"
    assert config.alpha_vantage.interval == "15min"
    assert config.web.port == 8200
