from __future__ import annotations

from pydantic import BaseModel


class SendRequest(BaseModel):
    to_number: str
    from_number: str
    message: str
    reference_id: str | None = None
    # Accepted for parity with the other providers; never sent to the gateway.
    note: str | None = None
    api_key: str | None = None
    password: str | None = None


class CellCheckRequest(BaseModel):
    digits: str
    api_key: str | None = None
    password: str | None = None


class ConfirmationResult(BaseModel):
    confirmed: bool
    carrier: str | None = None
    city: str | None = None
    state: str | None = None
