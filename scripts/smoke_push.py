"""Local smoke test for influxdb-pusher against a real InfluxDB.

Writes one point to a throwaway measurement using the INFLUXDB_PUSHER_*
environment (or .env) configuration.

Usage:
    py scripts/smoke_push.py
    py scripts/smoke_push.py --measurement pusher_smoke --keep-file
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
import sys
import tempfile

from influxdb_pusher import Precision, PushError, Pusher, pusher_config_from_env


def _line(measurement: str, now: datetime) -> str:
    return f"{measurement},source=smoke_push value=1i {int(now.timestamp())}\n"


def _write_payload(measurement: str, now: datetime) -> Path:
    handle = tempfile.NamedTemporaryFile("w", suffix=".lp", delete=False, encoding="utf-8")
    with handle:
        handle.write(_line(measurement, now))
    return Path(handle.name)


def run(measurement: str, keep_file: bool = False) -> int:
    # The generated point carries a second timestamp.
    config = replace(pusher_config_from_env(), precision=Precision.SECOND.wire)
    path = _write_payload(measurement, datetime.now(UTC))
    try:
        Pusher(config).push(path)
        print(f"pushed 1 point to {config.base_url} db={config.database} measurement={measurement}")
    finally:
        if keep_file:
            print(f"payload kept at {path}")
        else:
            path.unlink(missing_ok=True)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Push one point with influxdb-pusher")
    parser.add_argument("--measurement", default="pusher_smoke", help="Measurement name to write")
    parser.add_argument("--keep-file", action="store_true", help="Do not delete the generated payload")
    args = parser.parse_args()
    try:
        return run(args.measurement, keep_file=args.keep_file)
    except PushError as exc:
        print(f"Smoke push failed ({exc.kind.name}): {exc}", file=sys.stderr)
        return 2
    except Exception as exc:
        print(f"Smoke push failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
