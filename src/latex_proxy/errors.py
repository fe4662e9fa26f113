"""Errors raised before a request ever reaches the remote compiler."""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UPSTREAM_FAILURE = "upstream_failure"
    UPSTREAM_TIMEOUT = "upstream_timeout"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    TRANSPORT_ERROR = "transport_error"


class GatewayError(Exception):
    """Base class for request failures detected locally."""

    status_code: int = 400
    kind: FailureKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(GatewayError):
    """A required field is missing or has the wrong shape."""

    kind = FailureKind.INVALID_INPUT


class PayloadTooLargeError(GatewayError):
    """A configured size ceiling was exceeded."""

    kind = FailureKind.PAYLOAD_TOO_LARGE
