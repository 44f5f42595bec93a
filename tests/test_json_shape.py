"""Tests for JSON shape classification."""

import pytest

from filekind.classification import JSONShape, classify_json_shape


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("not json", JSONShape.CORRUPTED),
        ("", JSONShape.CORRUPTED),
        ('{"a": 1,}', JSONShape.CORRUPTED),
        ('{"tables": []}', JSONShape.SQL),
        ('{"schema": {"users": {"id": "int"}}}', JSONShape.SQL),
        ('[{"collection": "x"}]', JSONShape.NOSQL),
        ('[{"document": {"a": 1}}]', JSONShape.NOSQL),
        ('[{"table": "x", "rows": []}]', JSONShape.SQL),
        ('[{"rows": [[1, 2]]}]', JSONShape.SQL),
        ('[{"foo": 1}]', JSONShape.NOSQL),
        ("[]", JSONShape.NOSQL),
        ('{"name": "widget"}', JSONShape.NOSQL),
        ("42", JSONShape.NOSQL),
        ('"text"', JSONShape.NOSQL),
        ("null", JSONShape.NOSQL),
        ("NaN", JSONShape.CORRUPTED),
        ("Infinity", JSONShape.CORRUPTED),
        ("-Infinity", JSONShape.CORRUPTED),
        ('{"tables": NaN}', JSONShape.CORRUPTED),
        ('[{"rows": Infinity}]', JSONShape.CORRUPTED),
    ],
)
def test_classify_json_shape(content: str, expected: JSONShape) -> None:
    assert classify_json_shape(content) is expected


def test_document_keys_take_priority_over_table_keys() -> None:
    assert classify_json_shape('[{"table": "t", "collection": "c"}]') is JSONShape.NOSQL


def test_only_first_element_is_inspected() -> None:
    assert classify_json_shape('[{"foo": 1}, {"table": "t"}]') is JSONShape.NOSQL
    assert classify_json_shape('[{"rows": []}, {"collection": "c"}]') is JSONShape.SQL


def test_mixed_arrays_skip_record_rules() -> None:
    assert classify_json_shape('[{"table": "t"}, 1]') is JSONShape.NOSQL
    assert classify_json_shape('[{"table": "t"}, null]') is JSONShape.NOSQL


def test_root_keys_are_not_checked_for_record_arrays() -> None:
    assert classify_json_shape('[{"tables": []}]') is JSONShape.NOSQL


def test_root_table_keys_need_only_be_present() -> None:
    assert classify_json_shape('{"schema": null, "other": 1}') is JSONShape.SQL


def test_deeply_nested_payload_does_not_raise() -> None:
    content = "[" * 100_000 + "]" * 100_000

    assert classify_json_shape(content) in set(JSONShape)


def test_classification_is_repeatable() -> None:
    content = '[{"table": "orders", "rows": [[1]]}]'

    assert {classify_json_shape(content) for _ in range(5)} == {JSONShape.SQL}
