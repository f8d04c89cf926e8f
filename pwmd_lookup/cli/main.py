from __future__ import annotations

import dataclasses
import json
from typing import Any, Dict, Optional, Sequence

from ..application.socket_args import parse_socket_args
from ..application.use_cases.lookup_secret import escape_value
from ..domain.errors import ConfigError
from ..domain.models import STATUS_FAIL, STATUS_OK
from ..hooks.lookup import PwmdLookup
from ..infrastructure.config import LookupSettings, pwmd_socket_args
from ..infrastructure.logging import get_logger
from ..infrastructure.transport_loader import load_transport
from .parsers import build_parser

logger = get_logger("pwmd_lookup.cli")

EXIT_OK = 0
EXIT_FAIL = 2
EXIT_DEFER = 3


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def _settings_for(ns) -> LookupSettings:
    """Environment settings with any explicit CLI flags layered on top."""
    settings = LookupSettings.from_env()
    overrides: Dict[str, Any] = {}
    if getattr(ns, "file", None):
        overrides["file"] = ns.file
    if getattr(ns, "socket", None):
        overrides["socket"] = ns.socket
    if getattr(ns, "socket_args", None):
        overrides["socket_args"] = ns.socket_args
    return dataclasses.replace(settings, **overrides) if overrides else settings


def get_value(ns, transport=None) -> int:
    """
    Run one lookup through open/find/tidy, exactly as the host would.

    Exit code 0 on success, 2 when misconfigured, 3 when the lookup deferred.
    """
    settings = _settings_for(ns)
    lookup = PwmdLookup(settings, transport or load_transport(getattr(ns, "transport", None)))
    try:
        lookup.open()
        result = lookup.find(ns.key)
    finally:
        lookup.tidy()

    logger.info("CLI get | key=%s | file=%s | status=%s", ns.key, settings.file, result.status)
    if result.ok:
        _emit({"status": STATUS_OK, "key": ns.key, "value": result.value, "cacheable": result.cacheable})
        return EXIT_OK
    _emit({"status": result.status, "key": ns.key, "error": result.error})
    return EXIT_FAIL if result.status == STATUS_FAIL else EXIT_DEFER


def show_args(ns) -> int:
    spec = ns.spec if ns.spec is not None else pwmd_socket_args()
    args = parse_socket_args(spec)
    _emit({"status": STATUS_OK, "count": len(args), "args": list(args.args), "slots": list(args.slots())})
    return EXIT_OK


def escape_text(ns) -> int:
    _emit({"status": STATUS_OK, "value": escape_value(ns.text)})
    return EXIT_OK


def dispatch_commands(ns, transport=None) -> int:
    """
    Dispatches CLI commands.

    Commands:
    - get: fetch and escape one value (transport from --transport or $PWMD_TRANSPORT)
    - parse-args: show the connect slots a socket-args string produces
    - escape: apply the host escaping to a literal string
    """
    if ns.cmd == "get":
        return get_value(ns, transport)
    if ns.cmd == "parse-args":
        return show_args(ns)
    if ns.cmd == "escape":
        return escape_text(ns)

    _emit({"status": "error", "error": f"Unknown command: {ns.cmd}"})
    return EXIT_FAIL


def run(argv: Optional[Sequence[str]] = None, transport=None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))
    try:
        return dispatch_commands(ns, transport)
    except ConfigError as ex:
        _emit({"status": STATUS_FAIL, "error": str(ex)})
        return EXIT_FAIL


def main() -> int:
    import sys
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
