"""Enumerations for influxdb_pusher."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Union


class _WireEnum(IntEnum):
    """Integer enum whose members carry the string sent on the wire."""

    wire: str

    def __new__(cls, value: int, wire: str):
        obj = int.__new__(cls, value)
        obj._value_ = value
        obj.wire = wire
        return obj

    @classmethod
    def from_wire(cls, value: str):
        """Lookup by wire value (``"ms"``) or member name (``"millisecond"``)."""
        needle = value.strip().lower()
        for member in cls:
            if needle in (member.wire, member.name.lower()):
                return member
        raise ValueError(f"Unknown {cls.__name__.lower()} ({value})")

    @classmethod
    def coerce(cls, value: Union[int, str, "_WireEnum"]):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_wire(value)
        if isinstance(value, int) and not isinstance(value, (bool, Enum)):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValueError(f"Unknown {cls.__name__.lower()} ({value})")


class Consistency(_WireEnum):
    """Write acknowledgement level requested from an InfluxDB cluster."""

    ANY = 0, "any"
    ONE = 1, "one"
    QUORUM = 2, "quorum"
    ALL = 3, "all"


class Precision(_WireEnum):
    """Timestamp unit of the pushed line protocol."""

    NANOSECOND = 0, "ns"
    MICROSECOND = 1, "u"
    MILLISECOND = 2, "ms"
    SECOND = 3, "s"
    MINUTE = 4, "m"
    HOUR = 5, "h"


class ErrorKind(Enum):
    """Closed set of push failure categories."""

    BAD_REQUEST = "bad request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not found"
    SERVER_PROBLEM = "server problem"
    LOCAL_FAILURE = "pusher error"
