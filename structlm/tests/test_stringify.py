from __future__ import annotations

import pytest

from structlm import Validator, s, validator
from structlm.tests._samples import ORDER_SCHEMA, USER_SCHEMA


def test_primitive_notation():
    assert s.string().stringify() == "string"
    assert s.number().stringify() == "number"
    assert s.boolean().stringify() == "boolean"


def test_array_notation():
    assert s.array(s.string()).stringify() == "[string]"
    assert s.array(s.array(s.number())).stringify() == "[[number]]"
    assert s.array(s.object(name=s.string(), age=s.number())).stringify() == "[{ name: string, age: number }]"


def test_object_notation_keeps_declaration_order():
    schema = s.object(
        user=s.object(name=s.string(), email=s.string()),
        tags=s.array(s.string()),
        active=s.boolean(),
    )
    assert schema.stringify() == "{ user: { name: string, email: string }, tags: [string], active: boolean }"


def test_object_notation_accepts_mapping_then_keywords():
    schema = s.object({"b": s.number(), "a": s.string()}, c=s.boolean())
    assert schema.stringify() == "{ b: number, a: string, c: boolean }"


def test_empty_object_notation():
    assert s.object().stringify() == "{  }"


def test_validation_hint_for_each_kind():
    assert s.string().validate(lambda v: "@" in v, "'@' in value").stringify() == "string /* '@' in value */"
    assert s.number().validate(lambda v: v > 0, "value > 0").stringify() == "number /* value > 0 */"
    assert s.boolean().validate(lambda v: v, "value is True").stringify() == "boolean /* value is True */"
    assert s.array(s.string()).validate(len, "len(arr) > 0").stringify() == "[string] /* len(arr) > 0 */"
    obj_schema = s.object(name=s.string(), age=s.number()).validate(lambda o: bool(o["name"]), "obj['name'] != ''")
    assert obj_schema.stringify() == "{ name: string, age: number } /* obj['name'] != '' */"


def test_optional_hint_and_combined_hint():
    assert s.number().optional().stringify() == "number /* optional */"
    hinted = s.number().validate(lambda v: v >= 0, "value >= 0").optional()
    assert hinted.stringify() == "number /* value >= 0, optional */"


def test_hint_order_does_not_depend_on_mutator_order():
    first = s.string().optional().validate(lambda v: True, "always")
    second = s.string().validate(lambda v: True, "always").optional()
    assert first.stringify() == second.stringify() == "string /* always, optional */"


def test_optional_object_field_scenario():
    schema = s.object(name=s.string(), age=s.number().optional())
    assert schema.stringify() == "{ name: string, age: number /* optional */ }"


def test_validated_field_scenario():
    schema = s.object(email=s.string().validate(lambda e: "@" in e, "e=>e.includes('@')"))
    assert schema.stringify() == "{ email: string /* e=>e.includes('@') */ }"


def test_nested_hints():
    schema = s.array(
        s.object(
            id=s.string().validate(lambda v: v.startswith("ID-"), "value.startswith('ID-')"),
            count=s.number().validate(lambda v: v > 0, "value > 0"),
        )
    ).validate(lambda arr: len(arr) > 0, "len(arr) > 0")
    assert schema.stringify() == (
        "[{ id: string /* value.startswith('ID-') */, count: number /* value > 0 */ }] /* len(arr) > 0 */"
    )


def test_named_function_label_defaults_to_name():
    def is_email(value: str) -> bool:
        return "@" in value

    assert s.string().validate(is_email).stringify() == "string /* is_email */"


def test_decorated_validator_label():
    @validator("value % 2 == 0")
    def even(value: float) -> bool:
        return value % 2 == 0

    assert isinstance(even, Validator)
    assert s.number().validate(even).stringify() == "number /* value % 2 == 0 */"


def test_explicit_label_overrides_validator_label():
    check = Validator(lambda v: v > 0, "value > 0")
    assert s.number().validate(check, "positive").stringify() == "number /* positive */"


def test_str_omits_hints_recursively():
    assert str(s.number().validate(lambda v: v > 0, "value > 0")) == "number"
    assert str(USER_SCHEMA) == "{ name: string, email: string, age: number, tags: [string] }"


def test_stringify_is_deterministic():
    assert ORDER_SCHEMA.stringify() == ORDER_SCHEMA.stringify()
    assert ORDER_SCHEMA.stringify().startswith("{ order_id: string /* value.startswith('ORD-') */, items: [{ ")
    assert ORDER_SCHEMA.stringify().endswith("total: number /* value > 0 */, gift: boolean /* optional */ }")


def test_repr_shows_class_and_notation():
    assert repr(s.array(s.string())) == "<ArraySchema [string]>"


def test_mutators_return_same_node_and_last_write_wins():
    schema = s.string()
    assert schema.validate(lambda v: True, "first") is schema
    assert schema.optional() is schema
    schema.validate(lambda v: True, "second").optional(False)
    assert schema.stringify() == "string /* second */"


def test_unlabelled_lambda_is_rejected():
    with pytest.raises(TypeError, match="label"):
        s.string().validate(lambda v: True)


def test_blank_label_is_rejected():
    with pytest.raises(ValueError):
        Validator(lambda v: True, "  ")


def test_constructors_reject_non_schemas():
    with pytest.raises(TypeError):
        s.array("string")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        s.object({"name": "string"})  # type: ignore[dict-item]
    with pytest.raises(TypeError):
        s.object({1: s.string()})  # type: ignore[dict-item]
    with pytest.raises(ValueError, match="given twice"):
        s.object({"a": s.string()}, a=s.number())


def test_object_fields_are_read_only():
    schema = s.object(name=s.string())
    with pytest.raises(TypeError):
        schema.fields["extra"] = s.number()  # type: ignore[index]
    assert list(schema.fields) == ["name"]
