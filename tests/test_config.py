import logging

from catasto.config import Settings
from catasto.logging_config import setup_logging
from config.sister_selectors import LOGIN_URL


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.login_url == LOGIN_URL
    assert settings.login_attempts == 5
    assert settings.province_attempts == 5
    assert settings.confirm_attempts == 3
    assert settings.logout_attempts == 3
    assert settings.retry_delay_seconds == 0.5
    assert settings.accept_language == "it-IT,it;q=0.9"


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("CATASTO_HEADLESS", "false")
    monkeypatch.setenv("CATASTO_LOGIN_ATTEMPTS", "7")

    settings = Settings(_env_file=None)

    assert settings.headless is False
    assert settings.login_attempts == 7


def test_setup_logging_is_idempotent():
    logger = setup_logging("DEBUG")
    handlers_before = len(logger.handlers)

    setup_logging("WARNING")

    assert len(logger.handlers) == handlers_before
    assert logger.level == logging.WARNING
    assert logger is logging.getLogger("catasto")
