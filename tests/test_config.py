# tests/test_config.py

import logging

import core.config as settings


def test_get_config_by_name():
    assert settings.get_config("testing") is settings.TestingConfig
    assert settings.get_config("development") is settings.DevelopmentConfig
    assert settings.get_config("default") is settings.Config
    assert settings.get_config("production") is settings.Config


def test_get_config_from_environment(monkeypatch):
    monkeypatch.setenv("GRADES_ENV", "testing")
    assert settings.get_config() is settings.TestingConfig

    monkeypatch.delenv("GRADES_ENV")
    assert settings.get_config() is settings.Config


def test_testing_config_bounds_the_search():
    assert settings.TestingConfig.SEARCH_MAX_NODES < settings.Config.SEARCH_MAX_NODES
    assert settings.TestingConfig.SEARCH_TIMEOUT > 0


def test_configure_logging_unknown_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    class LoudConfig(settings.Config):
        LOG_LEVEL = "LOUD"

    settings.configure_logging(LoudConfig)

    assert calls[0]["level"] == logging.WARNING
    assert calls[0]["format"] == settings.Config.LOG_FORMAT
