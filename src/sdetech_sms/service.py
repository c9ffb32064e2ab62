from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus
from types import TracebackType
from typing import Final

from loguru import logger

from .config import Settings, get_settings
from .exceptions import ResponseParseError
from .models import ConfirmationResult
from .transport import HttpPostAdapter
from .xml_response import ResponseDocument, parse_bool, parse_response

# The successful status code returned by the gateway's send method.
API_SEND_SUCCESS_CODE: Final[str] = "1"

PostEntry = Callable[[str, str], None]
ApplyHttpResponse = Callable[[HTTPStatus, str], None]
TransportFactory = Callable[..., HttpPostAdapter]


def mask_number(number: str | None) -> str:
    """Hide all but the last four digits of a phone number for logging."""
    if not number:
        return "<none>"
    visible = number[-4:]
    return "*" * (len(number) - len(visible)) + visible


class ShortMessageService:
    """
    SMS provider backed by the SDE Tech REST/XML gateway.

    Failures never raise to the caller. Every public operation returns a
    bool and reports problems through two optional callbacks:

    - on_post_entry(action, message): audit trail for accountability and
      debugging, e.g. ("SYSTEM:ERROR", "Problem dispatching message: ...").
    - on_http_response(status, message): the HTTP status and message the
      host should surface to its own API caller. Always 500 here.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        on_post_entry: PostEntry | None = None,
        on_http_response: ApplyHttpResponse | None = None,
        transport_factory: TransportFactory = HttpPostAdapter,
    ) -> None:
        self.settings = settings or get_settings()
        self.on_post_entry = on_post_entry
        self.on_http_response = on_http_response
        self._transport_factory = transport_factory

    # --- lifecycle ---

    def close(self) -> None:
        """Nothing is held between calls."""

    def __enter__(self) -> ShortMessageService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # --- public operations ---

    def send(
        self,
        user: str | None,
        password: str | None,
        to: str | None,
        from_: str | None,
        message: str | None,
        reference: str | None = None,
        note: str | None = None,
    ) -> bool:
        """
        Send a message to a cell recipient.

        `user` is the client's api key. `password` and `note` are part of
        the provider contract but the gateway has no use for them.
        """
        if not user:
            self._apply_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Client api key not configured.")
            return False

        adapter = self._transport_factory(self.settings.send_url, timeout=self.settings.request_timeout)
        adapter.append_post_parameter("ApiKey", user)
        adapter.append_post_parameter("PhoneNumber", to)
        adapter.append_post_parameter("FromSMS", "" if from_ is None else f"{from_}")
        adapter.append_post_parameter("ClientUserId", reference)
        adapter.append_post_parameter("Message", message)

        logger.debug(f"Dispatching SMS to {mask_number(to)} via {self.settings.send_url}")
        try:
            response = adapter.post()
        except Exception as e:  # any transport fault is reported, never raised
            self._post_entry("SYSTEM:ERROR", f"Problem dispatching message: {e}")
            self._apply_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                "Problem dispatching message. It was not delivered.",
            )
            return False

        if not response:
            self._apply_response(HTTPStatus.INTERNAL_SERVER_ERROR, adapter.acquire_last_error())
            return False

        if self._dispatch_failed(response):
            return False

        adapter.clear()
        return True

    def is_a_cell(self, user: str | None, password: str | None, digits: str | None) -> bool:
        """Check whether the given phone digits belong to a mobile carrier."""
        if not user:
            self._apply_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Client api key not configured.")
            return False

        adapter = self._transport_factory(self.settings.confirm_url, timeout=self.settings.request_timeout)
        adapter.append_post_parameter("ApiKey", user)
        adapter.append_post_parameter("PhoneNumber", "" if digits is None else f"{digits}")

        logger.debug(f"Confirming {mask_number(digits)} as a cell via {self.settings.confirm_url}")
        try:
            response = adapter.post()
        except Exception as e:  # any transport fault is reported, never raised
            self._post_entry("SYSTEM:ERROR", f"Problem confirming number as a cell phone: {e}")
            self._apply_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                "Problem confirming number as a cell phone.",
            )
            return False

        return self._check_confirmation(digits, response)

    def is_keyword_available(
        self,
        user: str | None,
        password: str | None,
        did: str | None,
        keyword: str | None,
    ) -> bool:
        """
        Check whether a keyword is free on a shared short code.

        The gateway offers no keyword lookup, so this always answers False.
        """
        return False

    # --- response checks ---

    def _dispatch_failed(self, response: str | None) -> bool:
        """True when the send reply is unusable or reports an error."""
        if not response:
            self._apply_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Dispatch response was empty.")
            return True

        try:
            doc = parse_response(response)
        except ResponseParseError as e:
            self._post_entry("SYSTEM:ERROR", f"Unable to parse dispatch response: {e}")
            self._apply_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Unable to parse dispatch response.")
            return True

        if doc.child_count <= 0:
            self._apply_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Dispatch response invalid.")
            return True

        return self._api_call_errored(doc)

    def _check_confirmation(self, cell: str | None, response: str | None) -> bool:
        """True only when the reply confirms `cell` as a wireless number."""
        if not response:
            self._apply_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                "Cell phone confirmation response was empty.",
            )
            return False

        try:
            doc = parse_response(response)
        except ResponseParseError as e:
            self._post_entry("SYSTEM:WARNING", f"Unable to parse cell confirmation response: {e}")
            self._apply_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                "Unable to parse cell confirmation response.",
            )
            return False

        if doc.child_count <= 0:
            return False

        if self._api_call_errored(doc):
            return False

        wireless = doc.select_text("Response/Wireless")
        if not wireless:
            self._apply_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                "Unable to obtain wireless confirmation result.",
            )
            return False

        if not parse_bool(wireless):
            return False

        # Carrier details ride along on a confirmed number; callers only get the flag.
        confirmation = ConfirmationResult(
            confirmed=True,
            carrier=doc.select_text("Response/Company"),
            city=doc.select_text("Response/RC"),
            state=doc.select_text("Response/State"),
        )
        logger.debug(f"{mask_number(cell)} confirmed as a cell ({confirmation.carrier or 'unknown carrier'})")
        return confirmation.confirmed

    def _api_call_errored(self, doc: ResponseDocument) -> bool:
        """
        Check the standard Response/Success flag shared by every method.

        Send replies use a different schema, so a missing flag defers to
        _api_send_errored.
        """
        success = doc.select_text("Response/Success")
        if not success:
            return self._api_send_errored(doc)

        if parse_bool(success):
            return False

        reason = doc.select_text("Response/Data")
        if not reason:
            self._apply_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                "Message failed for an unknown reason (data node missing).",
            )
            return True

        self._apply_response(HTTPStatus.INTERNAL_SERVER_ERROR, f"Message failed: {reason}")
        return True

    def _api_send_errored(self, doc: ResponseDocument) -> bool:
        status = doc.select_text("SMS/Status")
        if not status:
            return False

        if status.strip() == API_SEND_SUCCESS_CODE:
            return False

        reason = doc.select_text("SMS/Value")
        if not reason:
            self._apply_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                "Message failed for an unknown reason (value node missing).",
            )
            return True

        self._apply_response(HTTPStatus.INTERNAL_SERVER_ERROR, f"Message failed: {reason}")
        return True

    # --- notifications ---

    def _post_entry(self, action: str, message: str) -> None:
        if self.on_post_entry is not None:
            self.on_post_entry(action, message)

    def _apply_response(self, status: HTTPStatus, message: str) -> None:
        logger.warning(f"SMS gateway problem ({status.value}): {message}")
        if self.on_http_response is not None:
            self.on_http_response(status, message)
