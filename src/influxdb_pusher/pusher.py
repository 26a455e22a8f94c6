"""Push a line protocol file to the InfluxDB write endpoint."""

from __future__ import annotations

from typing import Optional
import logging
import os
import time

import requests

from .classifier import raise_for_outcome
from .config import PusherConfig
from .exceptions import BadRequestError, PushTimeoutError, PusherError
from .request import build_write_url, redact_url

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/plain"
BODY_CHUNK_SIZE = 8192


class Pusher:
    """Pushes data files to the target described by an immutable PusherConfig.

    ``http`` is anything exposing ``post(url, data=..., headers=..., timeout=...,
    stream=...)`` like the ``requests`` module does; it defaults to ``requests``
    so no session state is shared between pushes.
    """

    def __init__(self, config: PusherConfig, http: Optional[object] = None) -> None:
        self.config = config
        self._http = requests if http is None else http

    def push(self, path: str | os.PathLike) -> None:
        """Push the file at path in a single POST.

        Returns None on success, raises a PushError subclass otherwise. The
        configured timeout bounds the whole exchange, body read included, not
        only each socket operation.
        """
        url = build_write_url(self.config)
        logger.debug("URL: %s", redact_url(url, self.config))

        try:
            data = open(path, "rb")
        except OSError as exc:
            raise PusherError(f"error when reading data file '{path}': {exc}") from exc

        deadline = time.monotonic() + self.config.timeout if self.config.timeout else None
        with data:
            try:
                response = self._http.post(
                    url,
                    data=data,
                    headers={"Content-Type": CONTENT_TYPE},
                    timeout=self.config.timeout,
                    stream=True,
                )
            except requests.exceptions.Timeout as exc:
                raise self._timeout_error(exc) from exc
            except requests.exceptions.RequestException as exc:
                raise BadRequestError(f"error when pushing data: {exc}") from exc

            with response:
                self._check_deadline(deadline)
                raise_for_outcome(response.status_code, lambda: self._read_body(response, deadline))

    def _read_body(self, response, deadline: Optional[float]) -> bytes:
        if deadline is None:
            return response.content
        chunks = []
        for chunk in response.iter_content(BODY_CHUNK_SIZE):
            chunks.append(chunk)
            self._check_deadline(deadline)
        return b"".join(chunks)

    def _check_deadline(self, deadline: Optional[float]) -> None:
        if deadline is not None and time.monotonic() > deadline:
            raise self._timeout_error()

    def _timeout_error(self, exc: Optional[Exception] = None) -> PushTimeoutError:
        detail = "error when pushing data: timed out"
        if self.config.timeout:
            detail += f" after {self.config.timeout}s"
        if exc is not None:
            detail += f": {exc}"
        return PushTimeoutError(detail)

    def __repr__(self) -> str:
        return f"Pusher({self.config.base_url}, db={self.config.database})"


def push(config: PusherConfig, path: str | os.PathLike) -> None:
    """Push the file at path using config. See Pusher.push."""
    Pusher(config).push(path)
