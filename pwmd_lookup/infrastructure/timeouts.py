from __future__ import annotations

import time
from dataclasses import dataclass

from .config import reopen_delay, reopen_max_attempts


@dataclass(frozen=True)
class ReopenPolicy:
    """Pacing for reopening a data file that another client saved.

    Fields:
        delay_seconds: Sleep between attempts; coarse on purpose.
        max_attempts: Total open+GET cycles allowed; 0 means unbounded.
    """
    delay_seconds: float = 1.0
    max_attempts: int = 30

    @classmethod
    def from_env(cls) -> "ReopenPolicy":
        return cls(delay_seconds=reopen_delay(), max_attempts=reopen_max_attempts())

    def exhausted(self, attempt: int) -> bool:
        return self.max_attempts > 0 and attempt >= self.max_attempts

    def wait(self) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
