from __future__ import annotations

from http import HTTPStatus

import pytest

from sdetech_sms.config import Settings


class FakeTransport:
    """Stands in for HttpPostAdapter and records what would have been posted."""

    instances: list[FakeTransport] = []

    def __init__(
        self,
        url: str,
        timeout: float = 30,
        response: str = "",
        error: Exception | None = None,
        last_error: str = "",
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.params: list[tuple[str, str]] = []
        self.posted = False
        self.cleared = False
        self._response = response
        self._error = error
        self._last_error = last_error
        FakeTransport.instances.append(self)

    def append_post_parameter(self, key: str, value: str | None) -> None:
        self.params.append((key, "" if value is None else str(value)))

    def post(self) -> str:
        self.posted = True
        if self._error is not None:
            raise self._error
        return self._response

    def acquire_last_error(self) -> str:
        return self._last_error

    def clear(self) -> None:
        self.cleared = True
        self.params.clear()


class Recorder:
    """Collects both notification channels."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, str]] = []
        self.statuses: list[tuple[HTTPStatus, str]] = []

    def post_entry(self, action: str, message: str) -> None:
        self.entries.append((action, message))

    def apply_response(self, status: HTTPStatus, message: str) -> None:
        self.statuses.append((status, message))


def transport_returning(response: str = "", error: Exception | None = None, last_error: str = ""):
    def factory(url: str, timeout: float = 30) -> FakeTransport:
        return FakeTransport(url, timeout, response=response, error=error, last_error=last_error)

    return factory


@pytest.fixture(autouse=True)
def reset_fake_transports() -> None:
    FakeTransport.instances.clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://gateway.test/api/",
        send_method_name="SendSMS",
        confirm_method_name="IsCell",
        api_key="test-key",
        api_password="secret",
        request_timeout=5,
    )


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


