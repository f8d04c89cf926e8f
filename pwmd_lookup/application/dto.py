from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LookupRequest:
    file_id: Optional[str]
    key: str
