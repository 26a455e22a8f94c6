"""Exceptions for influxdb_pusher."""

from __future__ import annotations

from .models import ErrorKind


class InfluxDBPusherError(Exception):
    """Base exception for influxdb_pusher."""


class PushError(InfluxDBPusherError):
    """A push failure tagged with exactly one ErrorKind.

    The kind is the stable part callers branch on. The detail is free text
    meant for logs only.
    """

    kind: ErrorKind = ErrorKind.LOCAL_FAILURE

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.detail}"


class BadRequestError(PushError):
    """InfluxDB rejected the request, or the request could not be sent."""

    kind = ErrorKind.BAD_REQUEST


class PushTimeoutError(BadRequestError):
    """The write request did not complete within the configured timeout."""


class UnauthorizedError(PushError):
    """InfluxDB refused the credentials."""

    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(PushError):
    """InfluxDB reported a missing database or endpoint."""

    kind = ErrorKind.NOT_FOUND


class ServerProblemError(PushError):
    """InfluxDB failed internally."""

    kind = ErrorKind.SERVER_PROBLEM


class PusherError(PushError):
    """Local failure: configuration, data file, or an unexpected status."""

    kind = ErrorKind.LOCAL_FAILURE


class PusherConfigError(PusherError):
    """Invalid pusher configuration."""


def _is_kind(err: object, kind: ErrorKind) -> bool:
    return isinstance(err, PushError) and err.kind is kind


def is_bad_request_error(err: object) -> bool:
    return _is_kind(err, ErrorKind.BAD_REQUEST)


def is_unauthorized_error(err: object) -> bool:
    return _is_kind(err, ErrorKind.UNAUTHORIZED)


def is_not_found_error(err: object) -> bool:
    return _is_kind(err, ErrorKind.NOT_FOUND)


def is_server_problem_error(err: object) -> bool:
    return _is_kind(err, ErrorKind.SERVER_PROBLEM)


def is_pusher_error(err: object) -> bool:
    """True for local failures (config, file I/O, unmapped HTTP status)."""
    return _is_kind(err, ErrorKind.LOCAL_FAILURE)
