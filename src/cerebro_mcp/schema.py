"""
Parameter schemas for the Cerebro tools.

Each tool has a hand-built table of optional filter fields. The table is the
single source for both the JSON Schema advertised at session start and the
validation applied to incoming arguments before any network call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from cerebro_mcp.errors import SchemaValidationError


class Origin(str, Enum):
    ALL = "all"
    OFFICIAL = "official"
    UNOFFICIAL = "unofficial"

    def __str__(self) -> str:
        return self.value


class FieldKind(str, Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    ORIGIN = "origin"


FilterValue = Union[str, bool, Origin]
# Ordered by schema definition; only fields the caller actually set.
FilterRequest = dict[str, FilterValue]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    description: str
    wire_name: str | None = None
    optional: bool = True

    @property
    def key(self) -> str:
        """Name used in the query string and in the advertised schema."""
        return self.wire_name or self.name

    def json_schema(self) -> dict[str, Any]:
        if self.kind is FieldKind.ORIGIN:
            return {
                "type": "string",
                "enum": [o.value for o in Origin],
                "description": self.description,
            }
        return {"type": self.kind.value, "description": self.description}

    def coerce(self, value: Any) -> FilterValue:
        """Return the typed value, or raise ValueError with a reason."""
        if self.kind is FieldKind.BOOLEAN:
            if not isinstance(value, bool):
                raise ValueError(f"expected boolean, got {type(value).__name__}")
            return value
        if self.kind is FieldKind.ORIGIN:
            if isinstance(value, Origin):
                return value
            if isinstance(value, str):
                try:
                    return Origin(value)
                except ValueError:
                    pass
            allowed = ", ".join(repr(o.value) for o in Origin)
            raise ValueError(f"expected one of {allowed}, got {value!r}")
        if not isinstance(value, str):
            raise ValueError(f"expected string, got {type(value).__name__}")
        return value


@dataclass(frozen=True)
class ToolSchema:
    description: str
    fields: tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec:
        for f in self.fields:
            if name in (f.name, f.key):
                return f
        raise KeyError(name)

    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "description": self.description,
            "properties": {f.key: f.json_schema() for f in self.fields},
            "additionalProperties": False,
        }
        required = [f.key for f in self.fields if not f.optional]
        if required:
            schema["required"] = required
        return schema

    def validate(self, tool: str, arguments: Mapping[str, Any] | None) -> FilterRequest:
        """Check `arguments` against the table and return the present fields in definition order.

        Fields may be addressed by wire name or internal name; null means absent.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise SchemaValidationError(tool, f"arguments must be an object, got {type(arguments).__name__}")

        by_alias: dict[str, FieldSpec] = {}
        for f in self.fields:
            by_alias[f.key] = f
            by_alias[f.name] = f

        unknown = sorted(str(k) for k in arguments if k not in by_alias)
        if unknown:
            raise SchemaValidationError(tool, f"unknown field(s): {', '.join(unknown)}")

        supplied: dict[str, Any] = {}
        for key, value in arguments.items():
            spec = by_alias[key]
            if spec.name in supplied:
                raise SchemaValidationError(tool, f"field '{spec.key}' given more than once")
            supplied[spec.name] = value

        out: FilterRequest = {}
        for f in self.fields:
            if f.name not in supplied or supplied[f.name] is None:
                if not f.optional:
                    raise SchemaValidationError(tool, f"missing required field '{f.key}'")
                continue
            try:
                out[f.name] = f.coerce(supplied[f.name])
            except ValueError as e:
                raise SchemaValidationError(tool, f"field '{f.key}': {e}") from None
        return out


def _origin(what: str) -> FieldSpec:
    return FieldSpec(
        "origin",
        FieldKind.ORIGIN,
        f"Filter by {what}origin ('official', 'unofficial', or 'all'). If omitted, the API defaults to 'all'.",
    )


CARDS_SCHEMA = ToolSchema(
    description="Parameters for filtering cards from the Cerebro API.",
    fields=(
        _origin("card "),
        FieldSpec("incomplete", FieldKind.BOOLEAN, "Filter incomplete cards."),
        FieldSpec("author", FieldKind.STRING, "Filter by card author ID."),
        FieldSpec(
            "boost",
            FieldKind.STRING,
            "Filter by boost icon value (e.g., '{b}' or '{s}'. For more than one boost icon, append them "
            "one after another: '{b}{b}'. If there is a '{s}', it always comes first.).",
        ),
        FieldSpec(
            "classification",
            FieldKind.STRING,
            "Filter by classification ('encounter', 'basic', 'protection', ...). This is sometimes called "
            "\"aspect\". Note: API uses lowercase.",
        ),
        FieldSpec("cost", FieldKind.STRING, "Filter by card cost (e.g., '-', '0', '1', 'X')."),
        FieldSpec(
            "exclude_campaign",
            FieldKind.BOOLEAN,
            "If present (e.g., 'true'), exclude campaign cards.",
            wire_name="excludeCampaign",
        ),
        FieldSpec("name", FieldKind.STRING, "Filter by card name (partial match)."),
        FieldSpec(
            "resource",
            FieldKind.STRING,
            "Filter by printed resource ('{p}' for Physical, '{m}' for Mental, '{e}' for Energy, '{w}' for "
            "Wild, or 'none'). To filter by more than one resource, just append them (i.e. '{e}{p}'). "
            "Note: API uses lowercase.",
        ),
        FieldSpec("text", FieldKind.STRING, "Filter by text in the card's rules or special text."),
        FieldSpec(
            "traits",
            FieldKind.STRING,
            "Filter by traits (comma-separated list, e.g., 'Avenger,S.H.I.E.L.D.'). "
            "All specified traits must be present.",
        ),
        FieldSpec(
            "type_",
            FieldKind.STRING,
            "Filter by card type (e.g., 'ally', 'event', 'hero', 'villain', 'minion', etc.). "
            "Note: API uses lowercase.",
            wire_name="type",
        ),
        FieldSpec("pack", FieldKind.STRING, "Filter by pack code or name."),
        FieldSpec("set", FieldKind.STRING, "Filter by set code or name."),
    ),
)

PACKS_SCHEMA = ToolSchema(
    description="Parameters for filtering packs from the Cerebro API.",
    fields=(
        _origin("pack "),
        FieldSpec("incomplete", FieldKind.BOOLEAN, "Filter incomplete cards."),
        FieldSpec("id", FieldKind.STRING, "Filter by pack ID."),
        FieldSpec("name", FieldKind.STRING, "Filter by pack name."),
    ),
)

SETS_SCHEMA = ToolSchema(
    description="Parameters for filtering sets from the Cerebro API.",
    fields=(
        _origin(""),
        FieldSpec("id", FieldKind.STRING, "Filter by set ID."),
        FieldSpec("name", FieldKind.STRING, "Filter by set name."),
        FieldSpec("type_", FieldKind.STRING, "Filter by set type.", wire_name="type"),
    ),
)
