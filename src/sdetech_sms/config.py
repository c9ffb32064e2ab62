from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


class Settings(BaseModel):
    # Gateway endpoints. The send and confirm URLs are the base URL with the
    # method name appended verbatim, so the base URL normally ends with "/".
    api_base_url: str = Field(default_factory=lambda: _env("SDETECH_API_BASE_URL", "") or "")
    send_method_name: str = Field(
        default_factory=lambda: _env("SDETECH_SEND_METHOD", "SendSMS") or "SendSMS"
    )
    confirm_method_name: str = Field(
        default_factory=lambda: _env("SDETECH_CONFIRM_METHOD", "IsCell") or "IsCell"
    )

    # --- Client credentials used by the host app and the debug CLI ---
    api_key: str | None = Field(default_factory=lambda: _env("SDETECH_API_KEY"))
    api_password: str | None = Field(default_factory=lambda: _env("SDETECH_API_PASSWORD"))

    # Seconds before the transport gives up on a POST
    request_timeout: float = Field(
        default_factory=lambda: float(_env("SDETECH_TIMEOUT", "30") or "30")
    )

    @property
    def send_url(self) -> str:
        return f"{self.api_base_url}{self.send_method_name}"

    @property
    def confirm_url(self) -> str:
        return f"{self.api_base_url}{self.confirm_method_name}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
