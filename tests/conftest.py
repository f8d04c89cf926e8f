"""
Pytest configuration and fixtures for pwmd lookup tests.

Provides an in-memory transport that records every daemon call.
"""

import os
from collections import deque
from typing import List, Optional

import pytest

from pwmd_lookup.domain.errors import GPG_ERR_CHECKSUM, TransportError
from pwmd_lookup.domain.interfaces import PwmdHandle, PwmdTransport
from pwmd_lookup.infrastructure.timeouts import ReopenPolicy

# gpg-error source bits as libpwmd sets them (GPG_ERR_SOURCE_USER_1 << 24)
SOURCE_BITS = 32 << 24


def stale_file_error() -> TransportError:
    return TransportError(SOURCE_BITS | GPG_ERR_CHECKSUM, "Bad checksum")


class FakeHandle(PwmdHandle):
    """Scriptable handle: queue exceptions/values for open() and command()."""

    def __init__(self, name: str, values: Optional[dict] = None) -> None:
        self.name = name
        self.values = dict(values or {})
        self.calls: List[tuple] = []
        self.options: dict = {}
        self.released: List[str] = []
        self.open_script: deque = deque()
        self.command_script: deque = deque()
        self.fail_on: dict = {}
        self.closed = 0

    def set_option(self, option, value):
        self.calls.append(("set_option", option, value))
        err = self.fail_on.get(option)
        if err is not None:
            raise err
        self.options[option] = value

    def connect(self, url, *args):
        self.calls.append(("connect", url) + tuple(args))
        err = self.fail_on.get("connect")
        if err is not None:
            raise err

    def open(self, filename):
        self.calls.append(("open", filename))
        if self.open_script:
            err = self.open_script.popleft()
            if err is not None:
                raise err

    def command(self, line):
        self.calls.append(("command", line))
        if self.command_script:
            item = self.command_script.popleft()
            if isinstance(item, Exception):
                raise item
            return item
        key = line.split(" ", 1)[1]
        if key not in self.values:
            raise TransportError(SOURCE_BITS | 27, "Not found")
        return self.values[key]

    def release(self, value):
        self.released.append(value)

    def close(self):
        self.calls.append(("close",))
        self.closed += 1

    def count(self, kind: str) -> int:
        return sum(1 for c in self.calls if c[0] == kind)


class FakeTransport(PwmdTransport):
    """Hands out FakeHandle instances and remembers them."""

    def __init__(self, values: Optional[dict] = None) -> None:
        self.values = dict(values or {})
        self.handles: List[FakeHandle] = []
        self.new_handle_error: Optional[BaseException] = None
        self.init_error: Optional[BaseException] = None
        self.init_calls = 0
        self.prepare = None

    def init(self):
        self.init_calls += 1
        if self.init_error is not None:
            raise self.init_error

    def new_handle(self, name):
        if self.new_handle_error is not None:
            raise self.new_handle_error
        handle = FakeHandle(name, self.values)
        if self.prepare is not None:
            self.prepare(handle)
        self.handles.append(handle)
        return handle

    @property
    def last(self) -> FakeHandle:
        return self.handles[-1]


@pytest.fixture
def fake_transport():
    """Transport whose daemon holds a couple of secrets."""
    return FakeTransport({"smtp/relay/password": "s3cr$t\\x", "plain": "hunter2"})


@pytest.fixture
def no_wait_policy():
    """Reopen policy that never sleeps."""
    return ReopenPolicy(delay_seconds=0.0, max_attempts=5)


@pytest.fixture
def clean_environment(tmp_path, monkeypatch):
    """Clean PWMD_* variables and run from an empty directory (no stray .env)."""
    for var in list(os.environ):
        if var.startswith("PWMD_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "cli: mark test as CLI command test")
    config.addinivalue_line("markers", "env: mark test as environment resolution test")

