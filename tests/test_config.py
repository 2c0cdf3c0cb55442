import pytest
from pydantic import ValidationError

from cryptolearn.config import Settings, load_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("CRYPTOLEARN_AUTOPLAY_INTERVAL", "CRYPTOLEARN_DEFAULT_MODE", "CRYPTOLEARN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.autoplay_interval_seconds == 1.5
    assert settings.default_mode == "forward"
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CRYPTOLEARN_AUTOPLAY_INTERVAL", "0.25")
    monkeypatch.setenv("CRYPTOLEARN_DEFAULT_MODE", "Inverse")
    monkeypatch.setenv("CRYPTOLEARN_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.autoplay_interval_seconds == 0.25
    assert settings.default_mode == "inverse"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"autoplay_interval_seconds": 0},
        {"default_mode": "sideways"},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValidationError):
        Settings(**kwargs)
