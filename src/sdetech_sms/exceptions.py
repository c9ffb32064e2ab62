from __future__ import annotations


class SmsGatewayError(Exception):
    """Base exception for SDE Tech gateway errors."""


class TransportError(SmsGatewayError):
    """Raised when the HTTP POST to the gateway could not be completed."""


class ResponseParseError(SmsGatewayError):
    """Raised when a gateway reply is not well-formed XML."""
