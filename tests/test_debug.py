from __future__ import annotations

import pytest
from conftest import transport_returning

from sdetech_sms import debug
from sdetech_sms.config import Settings
from sdetech_sms.service import ShortMessageService


@pytest.fixture
def patched(settings: Settings, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(debug, "get_settings", lambda: settings)

    def use_reply(**transport: object) -> None:
        def build(**kwargs: object) -> ShortMessageService:
            return ShortMessageService(transport_factory=transport_returning(**transport), **kwargs)  # type: ignore[arg-type]

        monkeypatch.setattr(debug, "ShortMessageService", build)

    return use_reply


def test_send_command(patched, capsys: pytest.CaptureFixture[str]) -> None:
    patched(response="<SMS><Status>1</Status></SMS>")

    assert debug.main(["send", "5551234567", "55555", "Hello"]) == 0
    assert "result: True" in capsys.readouterr().out


def test_cell_command_prints_notifications(patched, capsys: pytest.CaptureFixture[str]) -> None:
    patched(response="not xml")

    assert debug.main(["cell", "5551234567"]) == 1

    out = capsys.readouterr().out
    assert "audit: [SYSTEM:WARNING] Unable to parse cell confirmation response:" in out
    assert "status: 500 Unable to parse cell confirmation response." in out
    assert "result: False" in out
