"""Custom exception hierarchy for pyattrib."""

from __future__ import annotations


class AttribError(Exception):
    """Base exception for all pyattrib errors."""


class AttribConfigError(AttribError):
    """Invalid or missing configuration."""


class HashingError(AttribError):
    """Identity digest failure.

    Raised when an e-mail cannot be normalised or hashed.  Only the
    identity update that triggered it is rejected; callers decide whether
    to carry on without an identity.
    """


class SinkError(AttribError):
    """A backend sink rejected or failed to deliver an event.

    The dispatcher catches this (and any other exception) at the sink
    boundary, so it never reaches code that calls ``dispatch``.
    """

    def __init__(self, message: str, *, sink: str = "") -> None:
        self.sink = sink
        super().__init__(message)


class SinkTransportError(SinkError):
    """HTTP-level failure talking to a sink (network, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        sink: str = "",
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message, sink=sink)
