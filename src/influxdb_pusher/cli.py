"""Command line entry point: push a line protocol file to InfluxDB.

Usage:
    influxdb-pusher -u http://1.2.3.4:8086 -d mydb -f data.txt
    influxdb-pusher -u http://1.2.3.4:8086 -d mydb -f data.txt -c all -pr s -t 50s

Unset flags fall back to INFLUXDB_PUSHER_* environment variables (also read
from a .env file, or the one given with --env-file).
"""

from __future__ import annotations

from typing import List, Optional, Sequence
import argparse
import logging
import os
import sys

from .config import (
    load_env,
    new_pusher_config,
    parse_duration,
    with_consistency,
    with_precision,
    with_retention_policy,
    with_timeout,
    with_user_pass,
)
from .exceptions import PushError, PusherConfigError
from .models import Consistency, Precision
from .pusher import Pusher

logger = logging.getLogger("influxdb_pusher")

RET_OK = 0
RET_CONF_FAILURE = 1
RET_EXEC_FAILURE = 2

# Flags that always consume the following token.
VALUE_FLAGS = ("-u", "-d", "-f", "-c", "-pr", "-us", "-p", "-r", "-t", "--env-file")

# argparse dest -> environment variables consulted when the flag is unset.
ENV_FALLBACKS = {
    "url": ("INFLUXDB_PUSHER_URL", "INFLUXDB_URL"),
    "database": ("INFLUXDB_PUSHER_DATABASE", "INFLUXDB_DB"),
    "username": ("INFLUXDB_PUSHER_USER", "INFLUXDB_USER"),
    "password": ("INFLUXDB_PUSHER_PASSWORD", "INFLUXDB_PWD"),
    "consistency": ("INFLUXDB_PUSHER_CONSISTENCY",),
    "precision": ("INFLUXDB_PUSHER_PRECISION",),
    "retention_policy": ("INFLUXDB_PUSHER_RETENTION_POLICY",),
    "timeout": ("INFLUXDB_PUSHER_TIMEOUT",),
}


class UsageError(Exception):
    """Command line could not be parsed."""


class HelpRequested(UsageError):
    """-h was given; help has already been printed."""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)

    def exit(self, status: int = 0, message: Optional[str] = None) -> None:  # type: ignore[override]
        if status == 0 and not message:
            raise HelpRequested()
        raise UsageError(message.strip() if message else f"exit with status {status}")


def attach_flag_values(argv: Sequence[str]) -> List[str]:
    """Bind the token after a value flag to it, even when it starts with "-".

    argparse would otherwise read "-p -secret" as two flags.
    """
    out: List[str] = []
    tokens = list(argv)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in VALUE_FLAGS and i + 1 < len(tokens):
            out.append(f"{token}={tokens[i + 1]}")
            i += 2
            continue
        out.append(token)
        i += 1
    return out


def build_parser() -> argparse.ArgumentParser:
    consistencies = "|".join(c.wire for c in Consistency)
    precisions = "|".join(p.wire for p in Precision)
    parser = _ArgumentParser(
        prog="influxdb-pusher",
        description="Push an InfluxDB line protocol file to InfluxDB",
    )
    parser.add_argument("-u", dest="url", default="", help="URL, required (sample: http://1.2.3.4:8086)")
    parser.add_argument("-d", dest="database", default="", help="Database, required")
    parser.add_argument("-f", dest="file", default="", help="File to push, required")
    parser.add_argument("-c", dest="consistency", default="", help=f"Consistency ({consistencies})")
    parser.add_argument("-pr", dest="precision", default="", help=f"Precision ({precisions})")
    parser.add_argument("-us", dest="username", default="", help="Username")
    parser.add_argument("-p", dest="password", default="", help="Password")
    parser.add_argument("-r", dest="retention_policy", default="", help="Retention policy")
    parser.add_argument("-t", dest="timeout", default="", help="Timeout duration (50s, 120ms, 1m, ...)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--env-file", default=None, help="Read environment defaults from this file")
    return parser


def _apply_env_fallbacks(args: argparse.Namespace) -> None:
    for dest, names in ENV_FALLBACKS.items():
        if getattr(args, dest):
            continue
        for name in names:
            value = os.getenv(name)
            if value:
                setattr(args, dest, value)
                break


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def run(argv: Sequence[str]) -> int:
    """Parse argv, push the file and return the process exit code."""
    try:
        args = build_parser().parse_args(attach_flag_values(argv))
    except HelpRequested:
        return RET_CONF_FAILURE
    except UsageError as exc:
        logger.error("error while parsing command line arguments: %s", exc)
        return RET_CONF_FAILURE

    _configure_logging(args.verbose)
    load_env(args.env_file)
    _apply_env_fallbacks(args)

    if not args.url:
        logger.error("No URL provided")
        return RET_CONF_FAILURE
    if not args.database:
        logger.error("No database provided")
        return RET_CONF_FAILURE
    if not args.file:
        logger.error("No data file provided")
        return RET_CONF_FAILURE

    options = [with_user_pass(args.username, args.password)]
    try:
        if args.consistency:
            options.append(with_consistency(Consistency.from_wire(args.consistency)))
        if args.precision:
            options.append(with_precision(Precision.from_wire(args.precision)))
    except ValueError as exc:
        logger.error("%s", exc)
        return RET_CONF_FAILURE
    if args.retention_policy:
        options.append(with_retention_policy(args.retention_policy))
    if args.timeout:
        try:
            options.append(with_timeout(parse_duration(args.timeout)))
        except ValueError as exc:
            logger.error("error while parsing duration '%s': %s", args.timeout, exc)
            return RET_CONF_FAILURE

    try:
        config = new_pusher_config(args.url, args.database, *options)
    except PusherConfigError as exc:
        logger.error("Error when initializing pusher: %s", exc)
        return RET_CONF_FAILURE

    try:
        Pusher(config).push(args.file)
    except PushError as exc:
        logger.error("Error when pushing data: %s", exc)
        return RET_EXEC_FAILURE

    logger.info("Pushed %s to %s", args.file, config.base_url)
    return RET_OK


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
