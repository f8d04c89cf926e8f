from __future__ import annotations

import importlib
from typing import Optional

from ..domain.errors import ConfigError
from ..domain.interfaces import PwmdTransport
from .config import transport_factory


def load_transport(reference: Optional[str] = None) -> PwmdTransport:
    """Resolve a transport from a "package.module:factory" reference.

    The factory is called without arguments; a PwmdTransport instance is also
    accepted as-is. Falls back to $PWMD_TRANSPORT when reference is omitted.

    Raises:
        ConfigError: When no reference is configured or it does not resolve.
    """
    ref = (reference or transport_factory() or "").strip()
    if not ref:
        raise ConfigError("PWMD_TRANSPORT not set in environment or .env; set it to 'module:factory'")
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Invalid transport reference '{ref}'; expected 'module:factory'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import transport module '{module_name}': {exc}") from exc
    try:
        target = getattr(module, attr)
    except AttributeError as exc:
        raise ConfigError(f"Transport module '{module_name}' has no attribute '{attr}'") from exc

    transport = target if isinstance(target, PwmdTransport) else target()
    if not isinstance(transport, PwmdTransport):
        raise ConfigError(f"'{ref}' did not produce a PwmdTransport (got {type(transport).__name__})")
    return transport
