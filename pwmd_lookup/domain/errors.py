from __future__ import annotations

# gpg-error layout: low 16 bits carry the code, the rest the error source.
GPG_ERR_CODE_MASK = 0xFFFF
GPG_ERR_CHECKSUM = 10


def gpg_err_code(rc: int) -> int:
    """Strip the error source from a gpg-error value."""
    return int(rc) & GPG_ERR_CODE_MASK


class TransportError(RuntimeError):
    """Raised by a transport when a daemon call fails.

    Fields:
        code: gpg-error value as returned by the daemon.
        description: Driver-native description text.
    """

    def __init__(self, code: int, description: str = "") -> None:
        self.code = int(code)
        self.description = description or "unknown error"
        super().__init__(f"{self.code}: {self.description}")

    @property
    def is_stale_file(self) -> bool:
        """True when another client saved the data file since it was opened."""
        return gpg_err_code(self.code) == GPG_ERR_CHECKSUM


class PwmdLookupError(RuntimeError):
    """Base for classified lookup failures."""

    retryable = True


class ConfigError(PwmdLookupError, ValueError):
    """Raised when the connector is misconfigured; not retryable."""

    retryable = False


class ResourceError(PwmdLookupError):
    """Raised when a session or buffer cannot be obtained; retry later."""


class ProtocolError(PwmdLookupError):
    """Raised when the daemon rejects an open or command."""

    def __init__(self, message: str, code: int = 0, description: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.description = description
