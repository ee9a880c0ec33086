from __future__ import annotations

import functools
import inspect
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from cerebro_common.context import get_request_id, new_request_id, set_request_id
from cerebro_common.telemetry import log_event


# ---------------------------------------------------------------------------
# Shared helpers for MCP tool handlers
# ---------------------------------------------------------------------------


def _bound_args(fn_sig: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
    """Bind positional/keyword args to parameter names for logging."""
    try:
        bound = fn_sig.bind_partial(*args, **kwargs)
        return dict(bound.arguments)
    except TypeError:
        d: dict[str, Any] = dict(kwargs)
        if args:
            d["_args"] = list(args)
        return d


def _failure_message(payload: Any) -> str | None:
    """Error message of a failed tool result, or None when the call succeeded."""
    if getattr(payload, "is_error", False):
        return getattr(payload, "message", None) or "error"
    return None


@dataclass(frozen=True)
class InstrumentConfig:
    kind: str
    # bound parameter holding the tool name, and the one holding its arguments
    name_param: str = "name"
    args_param: str = "arguments"

    # correlation id behavior
    new_corr_id_per_call: bool = True


def instrument_async_tool(cfg: InstrumentConfig):
    """Decorator for async tool dispatch: one telemetry event per call."""

    def decorator(fn: Callable[..., Awaitable[Any]]):
        fn_sig = inspect.signature(fn)

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any):
            corr_id = get_request_id()
            if cfg.new_corr_id_per_call or not corr_id:
                corr_id = new_request_id()
                set_request_id(corr_id)

            t0 = time.perf_counter()
            bound = _bound_args(fn_sig, args, kwargs)
            tool_name = str(bound.get(cfg.name_param, fn.__name__))
            args_for_log: dict[str, Any] = {"args": bound.get(cfg.args_param) or {}}

            try:
                payload = await fn(*args, **kwargs)
            except Exception as e:
                ms = int((time.perf_counter() - t0) * 1000)
                args_for_log["error"] = f"{type(e).__name__}: {e}"
                log_event(cfg.kind, tool_name, args_for_log, ok=False, ms=ms, corr_id=corr_id)
                raise

            ms = int((time.perf_counter() - t0) * 1000)
            error = _failure_message(payload)
            if error is not None:
                args_for_log["error"] = error

            log_event(cfg.kind, tool_name, args_for_log, ok=error is None, ms=ms, corr_id=corr_id)
            return payload

        # Preserve signature for introspection
        wrapper.__signature__ = fn_sig  # type: ignore[attr-defined]
        return wrapper

    return decorator
