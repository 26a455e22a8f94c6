"""Classification of InfluxDB write responses."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Type, Union
import logging

from .exceptions import (
    BadRequestError,
    NotFoundError,
    PushError,
    PusherError,
    ServerProblemError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

STATUS_NO_CONTENT = 204
SEE_LOGS = "See logs for more details"

STATUS_ERRORS: Dict[int, Type[PushError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    404: NotFoundError,
    500: ServerProblemError,
}

BodyReader = Callable[[], Union[str, bytes]]


def classify_response(status_code: int, read_body: BodyReader) -> Optional[PushError]:
    """Map a write response to None (success) or a tagged PushError.

    For any status other than 204 the body is read and logged before the
    error is returned. A failure while reading it yields its own PusherError,
    unless the reader already raised a PushError, which is returned as is.
    """
    if status_code == STATUS_NO_CONTENT:
        return None

    error_cls = STATUS_ERRORS.get(status_code)
    if error_cls is None:
        error: PushError = PusherError(f"unexpected http status code ({status_code})")
    else:
        error = error_cls(SEE_LOGS)

    try:
        body = read_body()
    except PushError as exc:
        return exc
    except Exception as exc:
        read_error = PusherError(f"error while consuming response: {exc}")
        read_error.__cause__ = exc
        return read_error
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    logger.error("%s", body)
    return error


def raise_for_outcome(status_code: int, read_body: BodyReader) -> None:
    error = classify_response(status_code, read_body)
    if error is not None:
        raise error
