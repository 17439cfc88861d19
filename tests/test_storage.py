import pytest

from formapi.errors import PersistenceError, SchemaValidationError, UnsupportedPropertyType
from formapi.forms import contact_form
from formapi.schema import generate_schema
from formapi.storage import build_storage_definition, schema_fingerprint, untag


def test_types_map_to_column_kinds():
    definition = build_storage_definition({
        "type": "object",
        "properties": {
            "s": {"type": "string", "minLength": 2, "maxLength": 5},
            "i": {"type": "integer"},
            "n": {"type": "number"},
            "b": {"type": "boolean"},
            "o": {"type": "object"},
        },
        "required": ["s"],
    })
    kinds = {name: column.kind for name, column in definition.columns.items()}
    assert kinds == {"s": "text", "i": "number", "n": "number", "b": "flag", "o": "blob"}
    assert definition.columns["s"].required
    assert definition.columns["s"].min_length == 2
    assert definition.columns["s"].max_length == 5
    assert not definition.columns["i"].required


@pytest.mark.parametrize("type_", ["array", "null", None, ["string", "null"]])
def test_unsupported_types_are_rejected(type_):
    prop = {} if type_ is None else {"type": type_}
    with pytest.raises(UnsupportedPropertyType) as exc_info:
        build_storage_definition({"type": "object", "properties": {"tags": prop}})
    assert isinstance(exc_info.value, SchemaValidationError)
    assert exc_info.value.errors[0]["path"] == "tags"


def test_tag_casts_and_drops_undeclared_keys(contact_values):
    definition = build_storage_definition(generate_schema(contact_form))
    contact_values["extra"] = "ignored"
    contact_values["avatar"] = {"url": "http://x/y.png"}
    contact_values["subscribe"] = True

    tagged = definition.tag(contact_values)

    assert "extra" not in tagged
    assert tagged["name"] == {"kind": "text", "value": "Al"}
    assert tagged["age"] == {"kind": "number", "value": 30}
    assert tagged["subscribe"] == {"kind": "flag", "value": True}
    assert tagged["avatar"] == {"kind": "blob", "value": {"url": "http://x/y.png"}}
    assert untag(tagged)["birthdate"] == "2000-01-01"


def test_tag_enforces_required_and_lengths():
    definition = build_storage_definition({
        "type": "object",
        "properties": {"code": {"type": "string", "maxLength": 3}},
        "required": ["code"],
    })
    with pytest.raises(PersistenceError):
        definition.tag({})
    with pytest.raises(PersistenceError):
        definition.tag({"code": "toolong"})
    assert definition.tag({"code": 12}) == {"code": {"kind": "text", "value": "12"}}


def test_tag_rejects_uncastable_values():
    definition = build_storage_definition({
        "type": "object",
        "properties": {"n": {"type": "integer"}, "b": {"type": "boolean"}},
    })
    with pytest.raises(PersistenceError):
        definition.tag({"n": "many"})
    with pytest.raises(PersistenceError):
        definition.tag({"b": "maybe"})
    assert definition.tag({"n": 2.5})["n"]["value"] == 2.5


def test_fingerprint_ignores_key_order():
    a = {"type": "object", "properties": {"x": {"type": "string"}}, "required": []}
    b = {"required": [], "properties": {"x": {"type": "string"}}, "type": "object"}
    assert schema_fingerprint(a) == schema_fingerprint(b)
    assert schema_fingerprint(a) != schema_fingerprint({**a, "required": ["x"]})


def test_boolean_subschema_is_unsupported():
    with pytest.raises(UnsupportedPropertyType) as exc_info:
        build_storage_definition({"type": "object", "properties": {"x": True}})
    assert exc_info.value.errors[0]["path"] == "x"
