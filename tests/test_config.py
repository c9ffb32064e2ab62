from __future__ import annotations

import pytest

from sdetech_sms.config import Settings, get_settings


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDETECH_API_BASE_URL", "https://gateway.test/api/")
    monkeypatch.setenv("SDETECH_SEND_METHOD", "Send.aspx")
    monkeypatch.setenv("SDETECH_CONFIRM_METHOD", "Confirm.aspx")
    monkeypatch.setenv("SDETECH_API_KEY", "env-key")
    monkeypatch.setenv("SDETECH_TIMEOUT", "12.5")

    get_settings.cache_clear()
    settings = get_settings()

    assert settings.send_url == "https://gateway.test/api/Send.aspx"
    assert settings.confirm_url == "https://gateway.test/api/Confirm.aspx"
    assert settings.api_key == "env-key"
    assert settings.request_timeout == 12.5

    get_settings.cache_clear()


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SDETECH_API_BASE_URL",
        "SDETECH_SEND_METHOD",
        "SDETECH_CONFIRM_METHOD",
        "SDETECH_API_KEY",
        "SDETECH_API_PASSWORD",
        "SDETECH_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.api_base_url == ""
    assert settings.send_method_name == "SendSMS"
    assert settings.confirm_method_name == "IsCell"
    assert settings.api_key is None
    assert settings.request_timeout == 30
