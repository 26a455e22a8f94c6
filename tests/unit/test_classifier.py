from __future__ import annotations

import logging

import pytest

from influxdb_pusher.classifier import SEE_LOGS, classify_response, raise_for_outcome
from influxdb_pusher.exceptions import (
    BadRequestError,
    NotFoundError,
    PusherError,
    ServerProblemError,
    PushTimeoutError,
    UnauthorizedError,
    is_bad_request_error,
    is_pusher_error,
)


def test_no_content_is_success() -> None:
    def never_called():
        raise AssertionError("body must not be read on success")

    assert classify_response(204, never_called) is None


@pytest.mark.parametrize(
    "status, error_cls",
    [
        (400, BadRequestError),
        (401, UnauthorizedError),
        (404, NotFoundError),
        (500, ServerProblemError),
    ],
)
def test_mapped_statuses(status, error_cls) -> None:
    error = classify_response(status, lambda: b"")
    assert type(error) is error_cls
    assert error.detail == SEE_LOGS


@pytest.mark.parametrize("status", [200, 201, 409, 413, 503])
def test_unmapped_status_is_pusher_error(status) -> None:
    error = classify_response(status, lambda: "")
    assert type(error) is PusherError
    assert f"({status})" in str(error)


def test_body_is_logged_at_error_level(caplog) -> None:
    caplog.set_level(logging.ERROR, logger="influxdb_pusher.classifier")
    classify_response(400, lambda: b'{"error":"unable to parse"}')
    assert '{"error":"unable to parse"}' in caplog.text


def test_body_read_failure_is_distinct_pusher_error() -> None:
    def broken():
        raise OSError("connection reset")

    error = classify_response(500, broken)
    assert is_pusher_error(error)
    assert "error while consuming response" in str(error)
    assert isinstance(error.__cause__, OSError)


def test_raise_for_outcome() -> None:
    raise_for_outcome(204, lambda: b"")
    with pytest.raises(UnauthorizedError):
        raise_for_outcome(401, lambda: b"authorization failed")


def test_push_error_from_body_reader_is_kept() -> None:
    def timed_out():
        raise PushTimeoutError("timed out")

    error = classify_response(500, timed_out)
    assert type(error) is PushTimeoutError
    assert is_bad_request_error(error)
