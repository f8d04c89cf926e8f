from __future__ import annotations

from typing import List, Optional

from ..domain.errors import ConfigError
from ..domain.models import ARG_MAX, ArgVector


def parse_socket_args(spec: Optional[str]) -> ArgVector:
    """
    Split a comma-separated socket option string into connect arguments.

    Order is significant and must follow the daemon's connect() argument list.
    Whitespace around each argument is padding; whitespace inside is kept.
    End of string acts as the final delimiter, so "a,b," yields two arguments.
    Empty interior segments are kept as placeholders for the daemon default.

    Args:
        spec: Raw option string; None or blank means "use daemon defaults".

    Returns:
        ArgVector with one entry per segment.

    Raises:
        ConfigError: When more than ARG_MAX arguments are given.
    """
    if spec is None or not spec.strip():
        return ArgVector()

    segments: List[str] = [s.strip() for s in spec.split(",")]
    if not segments[-1]:
        segments.pop()

    if len(segments) > ARG_MAX:
        raise ConfigError(f"Too many parameters to pwmd connect() (max={ARG_MAX})! Not continuing.")
    return ArgVector(args=tuple(segments))
