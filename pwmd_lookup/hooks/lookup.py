from __future__ import annotations

from typing import Optional

from ..application.dto import LookupRequest
from ..application.session import SessionManager
from ..application.socket_args import parse_socket_args
from ..application.use_cases.lookup_secret import LookupSecretUseCase
from ..domain.errors import ConfigError, PwmdLookupError, TransportError
from ..domain.interfaces import PwmdTransport
from ..domain.models import LookupResult
from ..infrastructure.config import LookupSettings
from ..infrastructure.logging import get_logger
from ..infrastructure.timeouts import ReopenPolicy
from ..infrastructure.transport_loader import load_transport

logger = get_logger("pwmd_lookup.hooks")


class PwmdLookup:
    """Query-style lookup driven by the host through open/find/tidy.

    One instance is the composition root: it owns the SessionManager, so the
    single-connection rule is scoped to this object rather than the module.
    """

    name = "pwmd"
    querystyle = True

    def __init__(self, settings: LookupSettings, transport: PwmdTransport) -> None:
        self._settings = settings
        self._transport = transport
        self._sessions: Optional[SessionManager] = None

    @classmethod
    def from_env(cls, transport: Optional[PwmdTransport] = None) -> "PwmdLookup":
        """Build from PWMD_* settings; the transport comes from $PWMD_TRANSPORT unless given."""
        return cls(LookupSettings.from_env(), transport or load_transport())

    @property
    def settings(self) -> LookupSettings:
        return self._settings

    @property
    def sessions(self) -> Optional[SessionManager]:
        return self._sessions

    def open(self) -> "PwmdLookup":
        """
        Initialization hook: initialise the client library and validate the socket arguments.

        Does not contact the daemon; the connection is made by the first find().

        Raises:
            ConfigError: When the client library fails to initialise or the
                socket arguments exceed the connect arity.
        """
        if self._sessions is not None:
            return self
        try:
            self._transport.init()
        except TransportError as exc:
            raise ConfigError(f"pwmd_open: error initializing libpwmd: {exc.code}: {exc.description}") from exc
        args = parse_socket_args(self._settings.socket_args)
        self._sessions = SessionManager(
            self._transport,
            socket=self._settings.socket,
            args=args,
            lock_timeout=self._settings.lock_timeout,
        )
        return self

    def find(self, key: str) -> LookupResult:
        """Lookup hook: return the escaped value for key, or a classified failure."""
        try:
            self.open()
            policy = ReopenPolicy(
                delay_seconds=self._settings.reopen_delay,
                max_attempts=self._settings.reopen_max_attempts,
            )
            return LookupSecretUseCase(self._sessions, policy).execute(
                LookupRequest(file_id=self._settings.file, key=key)
            )
        except ConfigError as exc:
            logger.warning("pwmd lookup misconfigured | %s", exc)
            return LookupResult.fail(str(exc))
        except PwmdLookupError as exc:
            logger.debug("pwmd lookup deferred | key=%s | %s", key, exc)
            return LookupResult.defer(str(exc))

    def tidy(self) -> None:
        """Teardown hook: drop the cached connection. Safe without any prior query."""
        if self._sessions is not None:
            self._sessions.shutdown()
