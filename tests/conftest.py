"""Shared pytest fixtures."""
import pytest
from rangeCurve import config as app_config


@pytest.fixture(autouse=True)
def reset_app_settings(tmp_path, monkeypatch):
    """Ensure tests operate on a fresh settings instance and log into a temp dir."""
    monkeypatch.setenv("RANGE_CURVE_LOGGING__LOG_DIR", str(tmp_path / "logs"))
    app_config.reset_logging()
    app_config.get_settings.cache_clear()
    app_config.settings = app_config.get_settings()
    yield
    app_config.reset_logging()
    app_config.get_settings.cache_clear()
    app_config.settings = app_config.get_settings()


@pytest.fixture()
def linear_curve_data():
    """Three samples on y = x."""
    return [0.0, 1.0, 2.0], [0.0, 1.0, 2.0]
