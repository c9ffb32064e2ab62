from __future__ import annotations

import requests
from loguru import logger

from .exceptions import TransportError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HttpPostAdapter:
    """
    Form-encoded POST to a single gateway URL.

    Parameters accumulate in the order they are appended and are all sent on
    the next post(). One instance serves one call; nothing is shared.
    """

    def __init__(self, url: str, timeout: float = 30) -> None:
        self.url = url
        self.timeout = timeout
        self._params: list[tuple[str, str]] = []
        self._last_error = ""

    @property
    def params(self) -> list[tuple[str, str]]:
        return list(self._params)

    def append_post_parameter(self, key: str, value: str | None) -> None:
        self._params.append((key, "" if value is None else str(value)))

    def post(self) -> str:
        """
        Send the accumulated parameters and return the response body.

        A non-2xx reply returns "" and records the status as the last error.
        A connection-level failure is re-raised as TransportError.
        """
        self._last_error = ""
        try:
            response = requests.post(
                self.url,
                data=self._params,
                headers={"Content-Type": FORM_CONTENT_TYPE},
                timeout=self.timeout,
            )
        except (requests.RequestException, OSError) as e:
            self._last_error = str(e)
            raise TransportError(str(e)) from e

        if not response.ok:
            self._last_error = f"HTTP {response.status_code}: {response.reason}"
            logger.debug(f"POST {self.url} failed: {self._last_error}")
            return ""

        if not response.text:
            self._last_error = "Empty response from SMS gateway."

        return response.text

    def acquire_last_error(self) -> str:
        return self._last_error

    def clear(self) -> None:
        self._params.clear()
        self._last_error = ""
