"""Interactive command line for reading, writing and injecting faults."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Sequence

import requests

from .client import ChainClient, HTTPClient, RequestFailed
from .config import load_config
from .identity import ID
from .logsetup import setup

_log = logging.getLogger(__name__)


def usage() -> str:
    """Return the help text listing every command."""
    return (
        "Usage:\n"
        "\t get key\n"
        "\t put key value\n"
        "\t consensus key\n"
        "\t crash id time\n"
        "\t partition time ids...\n"
        "\t exit\n"
    )


def _atoi(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def run(command: str, args: Sequence[str], client: Any, admin: Any) -> None:
    """Carry out one command, printing its result."""
    if command == "get":
        if len(args) < 1:
            print("get KEY")
            return
        try:
            value = client.get(_atoi(args[0]))
        except (RequestFailed, requests.RequestException) as exc:
            _log.error("%s", exc)
            value = b""
        print(bytes(value or b"").decode("utf-8", errors="replace"))
    elif command == "put":
        if len(args) < 2:
            print("put KEY VALUE")
            return
        try:
            client.put(_atoi(args[0]), args[1].encode("utf-8"))
        except (RequestFailed, requests.RequestException) as exc:
            _log.error("%s", exc)
    elif command == "consensus":
        if len(args) < 1:
            print("consensus KEY")
            return
        print("true" if admin.consensus(_atoi(args[0])) else "false")
    elif command == "crash":
        if len(args) < 2:
            print("crash id time(s)")
            return
        try:
            seconds = int(args[1])
        except ValueError:
            print("second argument should be integer")
            return
        admin.crash(ID(args[0]), seconds)
    elif command == "partition":
        if len(args) < 2:
            print("partition time ids...")
            return
        try:
            seconds = int(args[0])
        except ValueError:
            print("time argument should be integer")
            return
        admin.partition(seconds, *(ID(s) for s in args[1:]))
    elif command == "exit":
        raise SystemExit(0)
    else:
        print(usage())


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command given on the command line, or read commands from stdin."""
    parser = argparse.ArgumentParser(prog="paxi", allow_abbrev=False)
    parser.add_argument("-id", default="", help="node id this client connects to")
    parser.add_argument("-algorithm", default="", help="client API type [chain]")
    parser.add_argument("-config", default="config.json", help="configuration file")
    parser.add_argument("-log_dir", default="", help="directory for log files")
    parser.add_argument("-log_level", default="INFO", help="logs at and above this level")
    parser.add_argument("words", nargs=argparse.REMAINDER)
    options = parser.parse_args(argv)

    setup(options.log_dir, options.log_level)
    config = load_config(options.config)

    admin = HTTPClient(options.id, config)
    if options.algorithm == "chain":
        client: HTTPClient = ChainClient(config)
    else:
        client = HTTPClient(options.id, config)

    if options.words:
        run(options.words[0], options.words[1:], client, admin)
        return 0

    while True:
        try:
            text = input("paxi $ ")
        except EOFError:
            print()
            return 0
        words = text.split()
        if words:
            run(words[0], words[1:], client, admin)