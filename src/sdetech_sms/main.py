from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass, field
from http import HTTPStatus

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from loguru import logger

from .config import get_settings
from .models import CellCheckRequest, SendRequest
from .service import ShortMessageService

app = FastAPI(title="sdetech-sms", version="0.1.0")


@dataclass
class Notifications:
    """Collects the status reports the adapter emits during one request."""

    statuses: list[tuple[HTTPStatus, str]] = field(default_factory=list)

    def record(self, status: HTTPStatus, message: str) -> None:
        self.statuses.append((status, message))

    def raise_last(self, fallback: str) -> None:
        if self.statuses:
            status, message = self.statuses[-1]
            raise HTTPException(status_code=status.value, detail=message)
        raise HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, detail=fallback)


AUDIT_LEVELS = {
    "SYSTEM:ERROR": "ERROR",
    "SYSTEM:WARNING": "WARNING",
}


def post_audit_entry(action: str, message: str) -> None:
    logger.log(AUDIT_LEVELS.get(action, "INFO"), f"[{action}] {message}")


# --- Dependencies ---


def get_notifications() -> Notifications:
    return Notifications()


def get_service(
    notifications: Notifications = Depends(get_notifications),
) -> Generator[ShortMessageService, None, None]:
    service = ShortMessageService(
        settings=get_settings(),
        on_post_entry=post_audit_entry,
        on_http_response=notifications.record,
    )
    try:
        yield service
    finally:
        service.close()


# --- Routes ---


@app.post("/sms/send")
def send_sms(
    payload: SendRequest,
    service: ShortMessageService = Depends(get_service),
    notifications: Notifications = Depends(get_notifications),
) -> JSONResponse:
    """
    Dispatch one SMS through the gateway.

    Accepts JSON:

      { "to_number": "5551234567", "from_number": "55555", "message": "Hi" }

    api_key / password default to SDETECH_API_KEY / SDETECH_API_PASSWORD.
    """
    settings = get_settings()
    sent = service.send(
        user=payload.api_key or settings.api_key,
        password=payload.password or settings.api_password,
        to=payload.to_number,
        from_=payload.from_number,
        message=payload.message,
        reference=payload.reference_id,
        note=payload.note,
    )
    if not sent:
        notifications.raise_last("Message was not delivered.")
    return JSONResponse({"status": "ok"})


@app.post("/sms/cell")
def check_cell(
    payload: CellCheckRequest,
    service: ShortMessageService = Depends(get_service),
    notifications: Notifications = Depends(get_notifications),
) -> JSONResponse:
    """
    Confirm whether a number is a cell phone.

    A plain "not a cell" answer is 200 with is_cell false; only reported
    problems become errors.
    """
    settings = get_settings()
    is_cell = service.is_a_cell(
        user=payload.api_key or settings.api_key,
        password=payload.password or settings.api_password,
        digits=payload.digits,
    )
    if not is_cell and notifications.statuses:
        notifications.raise_last("Unable to confirm number.")
    return JSONResponse({"phone": payload.digits, "is_cell": is_cell})


@app.get("/sms/keyword")
def keyword_available(
    did: str,
    keyword: str,
    service: ShortMessageService = Depends(get_service),
) -> JSONResponse:
    settings = get_settings()
    available = service.is_keyword_available(
        user=settings.api_key,
        password=settings.api_password,
        did=did,
        keyword=keyword,
    )
    return JSONResponse({"did": did, "keyword": keyword, "available": available})
