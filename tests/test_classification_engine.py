"""Tests for the classification engine."""

from pathlib import Path

from filekind.classification import (
    Category,
    ClassificationEngine,
    ClassificationRequest,
    JSONShape,
    requires_content,
)
from filekind.ingestion.models import FileDescriptor


def test_non_json_category_is_final() -> None:
    engine = ClassificationEngine()

    decision = engine.classify_file("photo.jpg", "image/jpeg", content='{"tables": []}')

    assert decision.category is Category.IMAGE
    assert decision.json_shape is None
    assert decision.label == "Image"


def test_json_category_uses_shape_as_label() -> None:
    engine = ClassificationEngine()

    decision = engine.classify_file("export.json", "application/json", '[{"table": "t"}]')

    assert decision.category is Category.JSON
    assert decision.json_shape is JSONShape.SQL
    assert decision.label == "SQLJSON"


def test_corrupted_json_is_reported_not_raised() -> None:
    decision = ClassificationEngine().classify_file("broken.json", "", "{oops")

    assert decision.label == "CorruptedJSON"


def test_missing_content_keeps_json_label() -> None:
    decision = ClassificationEngine().classify_file("data.json", "application/json")

    assert decision.json_shape is None
    assert decision.label == "JSON"
    assert decision.notes


def test_oversized_content_is_not_parsed() -> None:
    engine = ClassificationEngine(max_json_bytes=8)

    decision = engine.classify_file("big.json", "", '{"tables": [1, 2, 3]}')

    assert decision.json_shape is None
    assert "exceeds 8 bytes" in decision.notes[0]


def test_batch_preserves_request_order() -> None:
    requests = [
        ClassificationRequest(descriptor=FileDescriptor(name="a.mp3")),
        ClassificationRequest(descriptor=FileDescriptor(name="b.json", content='[{"collection": "c"}]')),
        ClassificationRequest(
            descriptor=FileDescriptor(name="c.bin", path=Path("/tmp/c.bin"), media_type="")
        ),
    ]

    batch = ClassificationEngine().classify(requests)

    assert [decision.label for decision in batch.decisions] == ["Audio", "NoSQLJSON", "General"]
    assert batch.errors == []


def test_requires_content_only_for_json() -> None:
    assert requires_content("data.json", "application/json") is True
    assert requires_content("data.json", "image/png") is False
    assert requires_content("schema.sql", "") is False
