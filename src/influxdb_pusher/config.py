"""Configuration for influxdb_pusher."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import timedelta
from typing import Callable, Optional, Union
import os
import re

from dotenv import load_dotenv

from .exceptions import PusherConfigError
from .models import Consistency, Precision

WRITE_PATH = "write"

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def load_env(path: Optional[str] = None) -> None:
    """Load environment variables from a .env file if present."""
    if path:
        load_dotenv(path)
    else:
        load_dotenv()


def parse_duration(value: str) -> float:
    """Parse a Go style duration ("50s", "2h30m", "120ms") into seconds."""
    text = value.strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f"invalid duration '{value}'")
    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration '{value}'")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def write_endpoint(base_url: str) -> str:
    """Append the write path to base_url with exactly one separating slash."""
    if base_url.endswith("/"):
        return base_url + WRITE_PATH
    return f"{base_url}/{WRITE_PATH}"


@dataclass(frozen=True)
class PusherConfig:
    """Immutable push target. Build it with new_pusher_config()."""

    base_url: str
    database: str
    username: str = ""
    password: str = ""
    consistency: str = ""
    precision: str = ""
    retention_policy: str = ""
    timeout: Optional[float] = None


@dataclass
class PusherSettings:
    """Mutable settings that options are applied to before freezing."""

    base_url: str
    database: str
    username: str = ""
    password: str = ""
    consistency: str = ""
    precision: str = ""
    retention_policy: str = ""
    timeout: Optional[float] = None

    def freeze(self) -> PusherConfig:
        return PusherConfig(**{f.name: getattr(self, f.name) for f in fields(self)})


PusherOption = Callable[[PusherSettings], None]


def new_pusher_config(base_url: str, database: str, *options: PusherOption) -> PusherConfig:
    """Build a PusherConfig, applying options in order.

    The first failing option aborts construction; nothing partially configured
    is returned.
    """
    if not base_url:
        raise PusherConfigError("no url provided")
    if not database:
        raise PusherConfigError("no database provided")

    settings = PusherSettings(base_url=write_endpoint(base_url), database=database)
    for option in options:
        try:
            option(settings)
        except Exception as exc:
            raise PusherConfigError(f"error when creating new pusher: {exc}") from exc
    return settings.freeze()


# -------------------- Options --------------------

def with_consistency(consistency: Union[Consistency, int, str]) -> PusherOption:
    """Request a write consistency level."""
    def apply(settings: PusherSettings) -> None:
        settings.consistency = Consistency.coerce(consistency).wire

    return apply


def with_precision(precision: Union[Precision, int, str]) -> PusherOption:
    """Declare the timestamp precision of the pushed data."""
    def apply(settings: PusherSettings) -> None:
        settings.precision = Precision.coerce(precision).wire

    return apply


def with_user_pass(username: str, password: str) -> PusherOption:
    def apply(settings: PusherSettings) -> None:
        settings.username = username or ""
        settings.password = password or ""

    return apply


def with_username(username: str) -> PusherOption:
    def apply(settings: PusherSettings) -> None:
        settings.username = username or ""

    return apply


def with_password(password: str) -> PusherOption:
    def apply(settings: PusherSettings) -> None:
        settings.password = password or ""

    return apply


def with_retention_policy(retention_policy: str) -> PusherOption:
    def apply(settings: PusherSettings) -> None:
        settings.retention_policy = retention_policy or ""

    return apply


def with_timeout(timeout: Union[float, int, timedelta, str, None]) -> PusherOption:
    """Limit the write request duration. Zero or None disables the limit."""

    def apply(settings: PusherSettings) -> None:
        if timeout is None:
            seconds = 0.0
        elif isinstance(timeout, timedelta):
            seconds = timeout.total_seconds()
        elif isinstance(timeout, str):
            seconds = parse_duration(timeout)
        else:
            seconds = float(timeout)
        if seconds < 0:
            raise ValueError(f"negative timeout ({timeout})")
        settings.timeout = seconds or None

    return apply


# -------------------- Environment --------------------

def _getenv(*names: str) -> str:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return ""


def pusher_config_from_env() -> PusherConfig:
    """Build a PusherConfig from INFLUXDB_PUSHER_* (or INFLUXDB_*) variables."""
    load_env()
    options = [
        with_user_pass(
            _getenv("INFLUXDB_PUSHER_USER", "INFLUXDB_USER"),
            _getenv("INFLUXDB_PUSHER_PASSWORD", "INFLUXDB_PWD"),
        ),
        with_retention_policy(_getenv("INFLUXDB_PUSHER_RETENTION_POLICY")),
    ]
    consistency = _getenv("INFLUXDB_PUSHER_CONSISTENCY")
    if consistency:
        options.append(with_consistency(consistency))
    precision = _getenv("INFLUXDB_PUSHER_PRECISION")
    if precision:
        options.append(with_precision(precision))
    timeout = _getenv("INFLUXDB_PUSHER_TIMEOUT")
    if timeout:
        options.append(with_timeout(timeout))
    return new_pusher_config(
        _getenv("INFLUXDB_PUSHER_URL", "INFLUXDB_URL"),
        _getenv("INFLUXDB_PUSHER_DATABASE", "INFLUXDB_DB"),
        *options,
    )
