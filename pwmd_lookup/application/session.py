from __future__ import annotations

from typing import Optional

from ..domain.errors import ResourceError, TransportError
from ..domain.interfaces import HandleOption, PwmdHandle, PwmdTransport
from ..domain.models import ArgVector
from ..infrastructure.logging import get_logger

CLIENT_NAME = "exim"
DEFAULT_LOCK_TIMEOUT = 100

logger = get_logger("pwmd_lookup.session")

_STEP_ERRORS = (TransportError, MemoryError)


class SessionManager:
    """Owns the one cached daemon connection for this process.

    The handle is built on first use and reused until shutdown() or a failed
    handshake discards it. Not thread-safe; callers serialise access.
    """

    def __init__(
        self,
        transport: PwmdTransport,
        socket: Optional[str] = None,
        args: Optional[ArgVector] = None,
        lock_timeout: int = DEFAULT_LOCK_TIMEOUT,
    ) -> None:
        self._transport = transport
        self._socket = socket
        self._args = args or ArgVector()
        self._lock_timeout = lock_timeout
        self._handle: Optional[PwmdHandle] = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def ensure_session(self) -> PwmdHandle:
        """
        Return the live handle, connecting first when there is none.

        Raises:
            ResourceError: When a handle cannot be allocated, configured or
                connected. Any partially built handle is closed first.
        """
        if self._handle is not None:
            return self._handle

        try:
            handle = self._transport.new_handle(CLIENT_NAME)
        except _STEP_ERRORS as exc:
            logger.debug("pwmd_find: ENOMEM while obtaining new handle")
            raise ResourceError(f"pwmd_find: pwmd_new(): {_describe(exc)}") from exc

        try:
            self._handshake(handle)
        except ResourceError:
            _discard(handle)
            raise
        except Exception as exc:
            _discard(handle)
            raise ResourceError(f"pwmd_find: handshake failed: {_describe(exc)}") from exc

        self._handle = handle
        return handle

    def _handshake(self, handle: PwmdHandle) -> None:
        try:
            # A long-lived connection must not hold the file lock and starve
            # clients that want to save.
            handle.set_option(HandleOption.LOCK_ON_OPEN, False)
        except _STEP_ERRORS as exc:
            raise ResourceError(f"pwmd_find: pwmd_setopt(): {_describe(exc)}") from exc

        slots = self._args.slots()
        try:
            handle.connect(self._socket, *slots)
        except _STEP_ERRORS as exc:
            shown = " ".join(f"arg{i}='{a if a is not None else ''}'" for i, a in enumerate(slots, 1))
            raise ResourceError(f"pwmd_find: pwmd_connect(): {_describe(exc)} ({shown})") from exc

        logger.debug("pwmd_find: connected to pwmd server at %s", self._socket or "default socket")

        try:
            handle.set_option(HandleOption.LOCK_TIMEOUT, self._lock_timeout)
        except _STEP_ERRORS as exc:
            raise ResourceError(f"pwmd_find: error while setting lock timeout: {_describe(exc)}") from exc

    def shutdown(self) -> None:
        """Close the cached handle, if any. Safe to call repeatedly."""
        handle, self._handle = self._handle, None
        if handle is None:
            return
        logger.debug("pwmd_tidy: closing pwmd connection")
        _discard(handle)


def _discard(handle: PwmdHandle) -> None:
    try:
        handle.close()
    except TransportError as exc:
        logger.debug("pwmd: error closing handle: %s", exc)


def _describe(exc: BaseException) -> str:
    if isinstance(exc, TransportError):
        return f"{exc.code}: {exc.description}"
    return f"{type(exc).__name__}: {exc}"
