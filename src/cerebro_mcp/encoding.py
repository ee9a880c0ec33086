from __future__ import annotations

from urllib.parse import quote, urlsplit, urlunsplit

from cerebro_mcp.errors import SerializationError
from cerebro_mcp.schema import FilterRequest, Origin, ToolSchema


def _value_text(value: object) -> str:
    # bool before str: Origin is a str subclass, bool is not.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Origin):
        return value.value
    if isinstance(value, str):
        return value
    raise SerializationError(f"unsupported value type {type(value).__name__}")


def _quote(text: str) -> str:
    try:
        return quote(text, safe="")
    except UnicodeEncodeError as e:
        raise SerializationError(str(e)) from e


def encode_query(schema: ToolSchema, request: FilterRequest) -> str:
    """Render `request` as a query string: one `wire=value` pair per present field, in definition order."""
    pairs = []
    for spec in schema.fields:
        if spec.name not in request:
            continue
        value = request[spec.name]
        if value is None:
            continue
        pairs.append(f"{_quote(spec.key)}={_quote(_value_text(value))}")

    extra = set(request) - {spec.name for spec in schema.fields}
    if extra:
        raise SerializationError(f"unknown field(s): {', '.join(sorted(extra))}")
    return "&".join(pairs)


def build_url(base_url: str, path: str, query: str = "") -> str:
    """Replace the path of `base_url` with `/path` and attach `query` when it is non-empty."""
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, "/" + path.strip("/"), query, ""))
