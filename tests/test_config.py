import logging

import pytest
from pydantic import ValidationError

from sshoc_client.client import client_from_settings
from sshoc_client.config import Settings, configure_logging


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "https://marketplace.example.org")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.delenv("ENV_VALIDATION", raising=False)
    settings = Settings()
    assert settings.api_base_url == "https://marketplace.example.org"
    assert settings.request_timeout == 2.5
    assert settings.env_validation == "enabled"


def test_invalid_base_url_rejected(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "not a url")
    monkeypatch.delenv("ENV_VALIDATION", raising=False)
    with pytest.raises(ValidationError):
        Settings()


def test_validation_can_be_disabled(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "not a url")
    monkeypatch.setenv("ENV_VALIDATION", "disabled")
    assert Settings().api_base_url == "not a url"


def test_client_from_settings():
    settings = Settings(api_base_url="https://marketplace.example.org/", request_timeout=3)
    client = client_from_settings(settings)
    assert client.base_url == "https://marketplace.example.org/"
    assert client.items.search().url.startswith(
        "https://marketplace.example.org/api/item-search?"
    )


def test_configure_logging_sets_level(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", logging.WARNING)
    configure_logging("DEBUG")
    assert root.level == logging.DEBUG
