from __future__ import annotations

import uuid
from contextvars import ContextVar

# Each MCP request runs in its own task, so the id never leaks between invocations.
_request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def new_request_id() -> str:
    return uuid.uuid4().hex


def get_request_id() -> str | None:
    return _request_id_ctx.get()


def set_request_id(rid: str | None) -> None:
    if rid:
        _request_id_ctx.set(rid)
