from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, TypeVar

N = TypeVar("N", int, float)


def _load_dotenv(path: Path = Path(".env")) -> Dict[str, str]:
    """Read KEY=VALUE lines from path; '#' comments and surrounding quotes are dropped."""
    try:
        text = path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return {}
    found: Dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        found[key] = value.strip().strip("\"'")
    return found


def _read(key: str, strip: bool = True) -> Optional[str]:
    """
    Resolve one PWMD_* setting.

    The process environment wins; a ./.env file in the working directory is the
    fallback. Blank values count as unset. With strip=False the winning value
    is returned exactly as written.
    """
    value = os.environ.get(key)
    if value is None or not value.strip():
        value = _load_dotenv().get(key)
    if value is None or not value.strip():
        return None
    return value.strip() if strip else value


def _number(key: str, cast: Callable[[str], N], default: N, floor: Optional[N] = None) -> N:
    raw = _read(key)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        return default
    return value if floor is None else max(floor, value)


def pwmd_socket() -> Optional[str]:
    return _read("PWMD_SOCKET")


def pwmd_socket_args() -> Optional[str]:
    # Not stripped: the argument parser owns whitespace handling.
    return _read("PWMD_SOCKET_ARGS", strip=False)


def pwmd_file() -> Optional[str]:
    return _read("PWMD_FILE")


def lock_timeout() -> int:
    return _number("PWMD_LOCK_TIMEOUT", int, 100)


def reopen_delay() -> float:
    return _number("PWMD_REOPEN_DELAY", float, 1.0, floor=0.0)


def reopen_max_attempts() -> int:
    """
    Upper bound on open+GET cycles while the data file keeps changing underneath us.
    Defaults to 30 when PWMD_REOPEN_MAX_ATTEMPTS is not set or invalid; 0 disables the bound.
    """
    return _number("PWMD_REOPEN_MAX_ATTEMPTS", int, 30, floor=0)


def transport_factory() -> Optional[str]:
    return _read("PWMD_TRANSPORT")


@dataclass(frozen=True)
class LookupSettings:
    """Values the host configures once, before any query.

    Fields:
        socket: Daemon endpoint; None selects the daemon's default socket.
        socket_args: Comma-separated positional connect arguments.
        file: Data file opened for every lookup.
        lock_timeout: Lock acquisition timeout set once per session.
        reopen_delay: Seconds to wait before reopening a file another client saved.
        reopen_max_attempts: Ceiling on open+GET cycles; 0 means unbounded.
    """
    socket: Optional[str] = None
    socket_args: Optional[str] = None
    file: Optional[str] = None
    lock_timeout: int = 100
    reopen_delay: float = 1.0
    reopen_max_attempts: int = 30

    @classmethod
    def from_env(cls) -> "LookupSettings":
        return cls(
            socket=pwmd_socket(),
            socket_args=pwmd_socket_args(),
            file=pwmd_file(),
            lock_timeout=lock_timeout(),
            reopen_delay=reopen_delay(),
            reopen_max_attempts=reopen_max_attempts(),
        )
