from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="pwmd lookup connector (diagnostic front end)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # Fetch one value through the same path the host uses
    g = sub.add_parser("get")
    g.add_argument("key", help="Element path passed to GET")
    g.add_argument("--file", default=None, help="Data file; defaults to $PWMD_FILE")
    g.add_argument("--socket", default=None, help="Daemon endpoint; defaults to $PWMD_SOCKET")
    g.add_argument("--socket-args", default=None, help="Comma-separated connect args; defaults to $PWMD_SOCKET_ARGS")
    g.add_argument("--transport", default=None, help="Transport 'module:factory'; defaults to $PWMD_TRANSPORT")

    # Show how a socket-args string maps onto connect slots
    pa = sub.add_parser("parse-args")
    pa.add_argument("spec", nargs="?", default=None, help="Socket-args string; defaults to $PWMD_SOCKET_ARGS")

    es = sub.add_parser("escape")
    es.add_argument("text")

    return ap
