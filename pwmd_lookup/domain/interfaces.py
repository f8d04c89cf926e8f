from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union


class HandleOption(Enum):
    """Handle options the connector sets on every new session."""

    LOCK_ON_OPEN = "lock_on_open"
    LOCK_TIMEOUT = "lock_timeout"


class PwmdHandle(ABC):
    """Port for a single daemon connection.

    All methods raise TransportError on failure; the code is a gpg-error value.
    """

    @abstractmethod
    def set_option(self, option: HandleOption, value: Union[bool, int]) -> None:
        raise NotImplementedError

    @abstractmethod
    def connect(
        self,
        url: Optional[str],
        arg1: Optional[str],
        arg2: Optional[str],
        arg3: Optional[str],
        arg4: Optional[str],
        arg5: Optional[str],
        arg6: Optional[str],
        arg7: Optional[str],
        arg8: Optional[str],
    ) -> None:
        """Connect to the daemon at url (None selects the default socket)."""
        raise NotImplementedError

    @abstractmethod
    def open(self, filename: str) -> None:
        """Open a data file without taking the file lock."""
        raise NotImplementedError

    @abstractmethod
    def command(self, line: str) -> str:
        """Send a protocol command and return the raw response text."""
        raise NotImplementedError

    def release(self, value: str) -> None:
        """Give a response returned by command() back to the transport."""
        return None

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError


class PwmdTransport(ABC):
    """Port for the daemon client library (e.g. a libpwmd binding)."""

    def init(self) -> None:
        """Initialise the client library once, before any handle is created."""
        return None

    @abstractmethod
    def new_handle(self, name: str) -> PwmdHandle:
        """Allocate an unconnected handle identified by client name."""
        raise NotImplementedError
