"""
Tests for environment-driven settings.
"""
from dataclasses import fields
from pathlib import Path

from pricing_calculator.config.settings import Settings, get_sample_data_dir


def test_defaults_point_at_bundled_sample_data(monkeypatch):
    monkeypatch.delenv("PRICING_DATA_DIR", raising=False)
    monkeypatch.delenv("PRICING_LOG_LEVEL", raising=False)

    settings = Settings.load()

    assert settings.data_dir == get_sample_data_dir()
    assert (settings.data_dir / "products.csv").exists()
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("PRICING_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PRICING_LOG_LEVEL", "debug")

    settings = Settings.load()

    assert settings.data_dir == Path(tmp_path)
    assert settings.log_level == "DEBUG"


def test_settings_only_carry_runtime_options():
    assert [f.name for f in fields(Settings)] == ["data_dir", "log_level", "currency_symbol"]
