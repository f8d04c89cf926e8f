"""Query-style lookup connector for the pwmd secret-store daemon."""

from .domain.errors import ConfigError, ProtocolError, PwmdLookupError, ResourceError, TransportError
from .domain.models import ArgVector, LookupResult
from .hooks.lookup import PwmdLookup

__all__ = [
    "ArgVector",
    "ConfigError",
    "LookupResult",
    "ProtocolError",
    "PwmdLookup",
    "PwmdLookupError",
    "ResourceError",
    "TransportError",
]
