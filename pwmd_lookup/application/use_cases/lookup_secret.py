from __future__ import annotations

from typing import List

from ..dto import LookupRequest
from ..session import SessionManager
from ...domain.errors import ConfigError, ProtocolError, ResourceError, TransportError
from ...domain.interfaces import PwmdHandle
from ...domain.models import LookupResult
from ...infrastructure.logging import get_logger
from ...infrastructure.timeouts import ReopenPolicy

logger = get_logger("pwmd_lookup.lookup")

_ESCAPED = frozenset("$\\")


def escape_value(raw: str) -> str:
    """Prefix every '$' and '\\' with a backslash so host expansion leaves them alone."""
    out: List[str] = []
    for ch in raw:
        if ch in _ESCAPED:
            out.append("\\")
        out.append(ch)
    return "".join(out)


class LookupSecretUseCase:
    """Use-case: open the data file, GET one key, escape the value."""

    def __init__(self, sessions: SessionManager, policy: ReopenPolicy) -> None:
        self._sessions = sessions
        self._policy = policy

    def execute(self, req: LookupRequest) -> LookupResult:
        """
        Fetch the value stored under req.key in req.file_id.

        When the daemon reports a checksum mismatch (another client saved the
        file since we opened it) the file is reopened and the GET repeated
        after policy.delay_seconds, up to policy.max_attempts cycles.

        Raises:
            ConfigError: file_id is missing; no daemon call is made.
            ResourceError: Session setup or escaping failed.
            ProtocolError: Any other daemon error, or the reopen bound was hit.
        """
        if not req.file_id:
            raise ConfigError("pwmd_find: required parameter pwmd_file is not set")

        handle = self._sessions.ensure_session()
        raw = self._fetch_with_reopen(handle, req)
        try:
            escaped = escape_value(raw)
        except MemoryError as exc:
            logger.debug("pwmd_find: deferring due to ENOMEM while escaping command result")
            raise ResourceError("pwmd_find: out of memory while escaping command result") from exc
        finally:
            handle.release(raw)
        return LookupResult.success(escaped)

    def _fetch_with_reopen(self, handle: PwmdHandle, req: LookupRequest) -> str:
        attempt = 0
        while True:
            attempt += 1
            try:
                handle.open(req.file_id)
                logger.debug("pwmd_find: opened pwmd file: %s", req.file_id)
                raw = handle.command(f"GET {req.key}")
            except MemoryError as exc:
                raise ResourceError("pwmd_find: out of memory while reading command result") from exc
            except TransportError as exc:
                if not exc.is_stale_file or self._policy.exhausted(attempt):
                    raise ProtocolError(
                        f"pwmd_find: deferring due to pwmd error {exc.code}: {exc.description}",
                        code=exc.code,
                        description=exc.description,
                    ) from exc
                # The file is opened without a lock, so a SAVE by another
                # client invalidates it; reopen and ask again.
                self._policy.wait()
                logger.debug(
                    "pwmd_find: pwmd reopening data file %s: %s: %s", req.file_id, exc.code, exc.description
                )
                continue
            logger.debug("pwmd_find: pwmd GET succeeded")
            return raw
