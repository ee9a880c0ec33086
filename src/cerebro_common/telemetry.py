from __future__ import annotations

import datetime as _dt
import json
import logging
from typing import Any

from cerebro_common.context import get_request_id
from cerebro_config.settings import env_flag

# Kept apart from module loggers so operators can route or silence it on its own.
telemetry_logger = logging.getLogger("cerebro.telemetry")


def telemetry_disabled() -> bool:
    return env_flag("CEREBRO_DISABLE_TELEMETRY")


def log_event(
    kind: str,
    name: str,
    args: dict | None = None,
    ok: bool = True,
    ms: int = 0,
    *,
    corr_id: str | None = None,
) -> dict[str, Any] | None:
    """
    Emit one JSON telemetry record for a tool call and return it.

    Records go through logging (stderr), never to disk, and never to stdout.
    """
    if telemetry_disabled():
        return None

    rid = get_request_id()
    rec: dict[str, Any] = {
        "ts": _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z"),
        "kind": kind,
        "name": name,
        "corr_id": corr_id or rid,
        "args": {} if args is None else dict(args),
        "ok": bool(ok),
        "ms": int(ms),
    }
    telemetry_logger.info(json.dumps(rec, ensure_ascii=False, default=str))
    return rec
