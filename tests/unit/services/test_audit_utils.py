from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from src.app.services.audit_utils import (
    CIRCULAR_MARKER,
    changed_fields,
    module_for_target_type,
    sanitize,
    update_description,
)
from src.domain.entities import Project, ProjectStatus


def test_changed_fields_identical_records_is_empty():
    record = {"name": "Alpha", "budget": 10, "team": ["a", "b"], "extra": {"x": 1}}

    assert changed_fields(record, dict(record)) == []


def test_changed_fields_single_field():
    before = {"name": "Alpha", "status": "pending", "progress": 10}
    after = {"name": "Alpha", "status": "completed", "progress": 10}

    assert changed_fields(before, after) == ["status"]


def test_changed_fields_ignores_nested_key_order():
    before = {"settings": {"a": 1, "b": {"c": 2, "d": 3}}}
    after = {"settings": {"b": {"d": 3, "c": 2}, "a": 1}}

    assert changed_fields(before, after) == []


def test_changed_fields_list_order_counts():
    assert changed_fields({"team": ["a", "b"]}, {"team": ["b", "a"]}) == ["team"]


def test_changed_fields_none_inputs():
    assert changed_fields(None, None) == []
    assert changed_fields(None, {"name": "Alpha"}) == ["name"]
    assert changed_fields({"name": "Alpha"}, None) == ["name"]


def test_changed_fields_skips_bookkeeping_fields():
    before = {"id": "1", "updated_at": "2024-01-01", "name": "Alpha"}
    after = {"id": "1", "updated_at": "2024-02-01", "name": "Alpha"}

    assert changed_fields(before, after) == []


def test_changed_fields_key_on_one_side_only():
    assert changed_fields({"a": 1}, {"a": 1, "b": None}) == ["b"]


def test_sanitize_none_is_empty():
    assert sanitize(None) == {}


def test_sanitize_removes_sensitive_fields_at_every_depth():
    record = {
        "email": "ana@example.com",
        "password": "secret",
        "profile": {"salt": "xyz", "name": "Ana"},
        "tokens": [{"token_hash": "abc", "kind": "refresh"}],
        "__v": 3,
    }

    assert sanitize(record) == {
        "email": "ana@example.com",
        "profile": {"name": "Ana"},
        "tokens": [{"kind": "refresh"}],
    }


def test_sanitize_drops_binary_and_callables():
    record = {"name": "file", "content": b"\x00\x01", "hook": lambda: None}

    assert sanitize(record) == {"name": "file"}


def test_sanitize_converts_values_to_json_compatible():
    record_id = uuid4()
    record = {
        "id": record_id,
        "when": datetime(2024, 5, 1, 12, 30),
        "status": ProjectStatus.completed,
        "amount": Decimal("10.50"),
    }

    assert sanitize(record) == {
        "id": str(record_id),
        "when": "2024-05-01T12:30:00",
        "status": "completed",
        "amount": "10.50",
    }


def test_sanitize_marks_circular_references():
    record = {"name": "loop"}
    record["self"] = record

    assert sanitize(record) == {"name": "loop", "self": CIRCULAR_MARKER}


def test_sanitize_keeps_shared_non_circular_references():
    shared = {"a": 1}

    assert sanitize({"left": shared, "right": shared}) == {"left": {"a": 1}, "right": {"a": 1}}


def test_sanitize_entity_snapshot():
    project = Project(name="Alpha", start_date=datetime(2024, 1, 1), team=["x"])

    snapshot = sanitize(project)

    assert snapshot["name"] == "Alpha"
    assert snapshot["start_date"] == "2024-01-01T00:00:00"
    assert snapshot["team"] == ["x"]
    assert snapshot["id"] == str(project.id)


def test_module_for_target_type():
    assert module_for_target_type("proyecto") == "proyectos"
    assert module_for_target_type("factura") == "finanzas"
    assert module_for_target_type("desconocido") == "otro"


def test_update_description_lists_fields():
    assert (
        update_description("proyecto", "Alpha", ["status", "progress"])
        == "Actualización de proyecto: Alpha (campos: status, progress)"
    )
    assert update_description("proyecto", "Alpha") == "Actualización de proyecto: Alpha"


def test_sanitize_str_enums_become_plain_strings():
    project = Project(name="Alpha", start_date=datetime(2024, 1, 1), status=ProjectStatus.completed)

    snapshot = sanitize(project)

    assert type(snapshot["status"]) is str
    assert type(snapshot["priority"]) is str
    assert f"{snapshot['status']}" == "completed"
