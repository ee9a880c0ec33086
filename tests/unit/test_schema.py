import pytest

from cerebro_mcp.errors import SchemaValidationError
from cerebro_mcp.schema import CARDS_SCHEMA, PACKS_SCHEMA, SETS_SCHEMA, Origin


def test_cards_schema_field_order_and_wire_names():
    keys = [f.key for f in CARDS_SCHEMA.fields]
    assert keys == [
        "origin", "incomplete", "author", "boost", "classification", "cost", "excludeCampaign",
        "name", "resource", "text", "traits", "type", "pack", "set",
    ]
    assert CARDS_SCHEMA.field("exclude_campaign").key == "excludeCampaign"
    assert CARDS_SCHEMA.field("type").name == "type_"


def test_packs_and_sets_fields():
    assert [f.key for f in PACKS_SCHEMA.fields] == ["origin", "incomplete", "id", "name"]
    assert [f.key for f in SETS_SCHEMA.fields] == ["origin", "id", "name", "type"]


def test_input_schema_is_deterministic_and_closed():
    first = CARDS_SCHEMA.input_schema()
    assert first == CARDS_SCHEMA.input_schema()
    assert first["type"] == "object"
    assert first["additionalProperties"] is False
    assert "required" not in first
    assert first["properties"]["origin"]["enum"] == ["all", "official", "unofficial"]
    assert first["properties"]["excludeCampaign"]["type"] == "boolean"
    assert first["properties"]["name"]["type"] == "string"
    assert all(p["description"] for p in first["properties"].values())


def test_validate_keeps_definition_order_and_typed_values():
    out = CARDS_SCHEMA.validate("get_cards", {"type": "ally", "origin": "official", "excludeCampaign": True})
    assert list(out) == ["origin", "exclude_campaign", "type_"]
    assert out["origin"] is Origin.OFFICIAL
    assert out["exclude_campaign"] is True


def test_validate_accepts_internal_names():
    out = SETS_SCHEMA.validate("get_sets", {"type_": "modular"})
    assert out == {"type_": "modular"}


def test_validate_none_and_null_mean_absent():
    assert PACKS_SCHEMA.validate("get_packs", None) == {}
    assert PACKS_SCHEMA.validate("get_packs", {"origin": None, "name": None}) == {}


@pytest.mark.parametrize(
    "args, fragment",
    [
        ({"colour": "red"}, "unknown field(s): colour"),
        ({"incomplete": "true"}, "field 'incomplete': expected boolean, got str"),
        ({"incomplete": 1}, "expected boolean, got int"),
        ({"name": 42}, "field 'name': expected string, got int"),
        ({"origin": "Official"}, "field 'origin': expected one of"),
        ({"origin": True}, "field 'origin'"),
    ],
)
def test_validate_rejects_bad_arguments(args, fragment):
    with pytest.raises(SchemaValidationError) as ei:
        PACKS_SCHEMA.validate("get_packs", args)
    assert fragment in str(ei.value)
    assert str(ei.value).startswith("Invalid arguments for get_packs: ")


def test_validate_rejects_alias_and_wire_name_together():
    with pytest.raises(SchemaValidationError, match="given more than once"):
        CARDS_SCHEMA.validate("get_cards", {"type": "ally", "type_": "event"})


def test_validate_rejects_non_object():
    with pytest.raises(SchemaValidationError, match="arguments must be an object"):
        SETS_SCHEMA.validate("get_sets", ["origin", "all"])  # type: ignore[arg-type]


def test_origin_tokens():
    assert [str(o) for o in Origin] == ["all", "official", "unofficial"]
