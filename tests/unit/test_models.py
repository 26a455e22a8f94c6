from __future__ import annotations

import pytest

from influxdb_pusher.models import Consistency, ErrorKind, Precision


@pytest.mark.parametrize(
    "member, wire",
    [
        (Consistency.ANY, "any"),
        (Consistency.ONE, "one"),
        (Consistency.QUORUM, "quorum"),
        (Consistency.ALL, "all"),
    ],
)
def test_consistency_wire_values(member, wire) -> None:
    assert member.wire == wire
    assert Consistency.from_wire(wire) is member


@pytest.mark.parametrize(
    "member, wire",
    [
        (Precision.NANOSECOND, "ns"),
        (Precision.MICROSECOND, "u"),
        (Precision.MILLISECOND, "ms"),
        (Precision.SECOND, "s"),
        (Precision.MINUTE, "m"),
        (Precision.HOUR, "h"),
    ],
)
def test_precision_wire_values(member, wire) -> None:
    assert member.wire == wire
    assert Precision.from_wire(wire) is member


def test_from_wire_accepts_member_names_case_insensitive() -> None:
    assert Precision.from_wire("Millisecond") is Precision.MILLISECOND
    assert Consistency.from_wire(" QUORUM ") is Consistency.QUORUM


def test_coerce_accepts_ordinals() -> None:
    assert Consistency.coerce(3) is Consistency.ALL
    assert Precision.coerce(0) is Precision.NANOSECOND


@pytest.mark.parametrize("value", [42, -1, "bla", "", True, Precision.HOUR])
def test_coerce_rejects_unknown_consistency(value) -> None:
    with pytest.raises(ValueError, match="Unknown consistency"):
        Consistency.coerce(value)


def test_coerce_rejects_unknown_precision() -> None:
    with pytest.raises(ValueError, match="Unknown precision"):
        Precision.coerce(6)


def test_error_kind_is_closed_set() -> None:
    assert [k.value for k in ErrorKind] == [
        "bad request",
        "unauthorized",
        "not found",
        "server problem",
        "pusher error",
    ]
