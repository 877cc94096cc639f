"""Error hierarchy for identity lookups.

A lookup has three outcomes: a resolved record, ``None`` (no such user/group),
or one of the exceptions below. Absence is never reported as an exception.
"""


class UserdbError(Exception):
    """Base error raised by identity lookups."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with a machine-readable code and a human-readable message.

        Args:
            code: Machine-readable error code (e.g. "connect_failed").
            message: Human-readable error description.

        """
        super().__init__(message)
        self.code = code


class TransportError(UserdbError):
    """Socket-level failure: dial, send, read, timeout, or cancellation."""

    @property
    def cancelled(self) -> bool:
        """True if the exchange was aborted from outside."""
        return self.code == "cancelled"


class ProtocolError(UserdbError):
    """A reply frame could not be decoded into the expected envelope."""


class ServiceError(UserdbError):
    """The service answered with a varlink error. ``code`` is the error name."""
