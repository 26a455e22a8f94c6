"""influxdb_pusher package."""

from .classifier import classify_response, raise_for_outcome
from .config import (
    PusherConfig,
    load_env,
    new_pusher_config,
    parse_duration,
    pusher_config_from_env,
    with_consistency,
    with_password,
    with_precision,
    with_retention_policy,
    with_timeout,
    with_user_pass,
    with_username,
)
from .exceptions import (
    BadRequestError,
    InfluxDBPusherError,
    NotFoundError,
    PushError,
    PushTimeoutError,
    PusherConfigError,
    PusherError,
    ServerProblemError,
    UnauthorizedError,
    is_bad_request_error,
    is_not_found_error,
    is_pusher_error,
    is_server_problem_error,
    is_unauthorized_error,
)
from .models import Consistency, ErrorKind, Precision
from .pusher import Pusher, push
from .request import build_write_url, query_params, write_endpoint

__all__ = [
    "Pusher",
    "push",
    "PusherConfig",
    "new_pusher_config",
    "pusher_config_from_env",
    "load_env",
    "parse_duration",
    "with_consistency",
    "with_precision",
    "with_user_pass",
    "with_username",
    "with_password",
    "with_retention_policy",
    "with_timeout",
    "build_write_url",
    "query_params",
    "write_endpoint",
    "classify_response",
    "raise_for_outcome",
    "Consistency",
    "Precision",
    "ErrorKind",
    "InfluxDBPusherError",
    "PushError",
    "BadRequestError",
    "PushTimeoutError",
    "UnauthorizedError",
    "NotFoundError",
    "ServerProblemError",
    "PusherError",
    "PusherConfigError",
    "is_bad_request_error",
    "is_unauthorized_error",
    "is_not_found_error",
    "is_server_problem_error",
    "is_pusher_error",
]
