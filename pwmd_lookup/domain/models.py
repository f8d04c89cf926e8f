from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

ARG_MAX = 8

STATUS_OK = "ok"
STATUS_DEFER = "defer"
STATUS_FAIL = "fail"


@dataclass(frozen=True)
class ArgVector:
    """Positional arguments for the daemon connect handshake.

    Fields:
        args: Parsed arguments in order; empty strings keep a slot at its default.

    Never longer than ARG_MAX; the parser refuses to build an oversized vector.
    """
    args: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.args) > ARG_MAX:
            raise ValueError(f"ArgVector holds at most {ARG_MAX} arguments, got {len(self.args)}")

    def __len__(self) -> int:
        return len(self.args)

    def slots(self) -> Tuple[Optional[str], ...]:
        """Full-arity view for the connect call; unused or empty slots are None."""
        padded = [a or None for a in self.args]
        padded.extend([None] * (ARG_MAX - len(padded)))
        return tuple(padded)


@dataclass(frozen=True)
class LookupResult:
    """Outcome handed back to the host lookup framework.

    Fields:
        status: "ok", "defer" (retry later) or "fail" (misconfigured).
        value: Escaped value on success.
        error: Diagnostic message on failure.
        cacheable: Whether the host may memoize the result; only set on success.
    """
    status: str
    value: Optional[str] = None
    error: Optional[str] = None
    cacheable: bool = False

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @classmethod
    def success(cls, value: str) -> "LookupResult":
        return cls(status=STATUS_OK, value=value, cacheable=True)

    @classmethod
    def defer(cls, error: str) -> "LookupResult":
        return cls(status=STATUS_DEFER, error=error)

    @classmethod
    def fail(cls, error: str) -> "LookupResult":
        return cls(status=STATUS_FAIL, error=error)
