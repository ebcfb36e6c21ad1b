"""Unit tests for the document store helpers."""

from datetime import UTC, datetime

import pytest

from prompt_universe.core.documents import (
    SERVER_TIMESTAMP,
    DocumentSnapshot,
    FieldFilter,
    OrderBy,
)
from prompt_universe.core.documents.base import (
    apply_query,
    deep_merge,
    resolve_server_timestamps,
)


class TestFieldFilter:
    """Tests for FieldFilter.matches."""

    @pytest.mark.parametrize(
        ("op", "value", "expected"),
        [
            ("==", 5, True),
            ("!=", 5, False),
            ("<", 6, True),
            ("<=", 5, True),
            (">", 5, False),
            (">=", 5, True),
            ("in", [1, 5], True),
        ],
    )
    def test_operators(self, op, value, expected):
        assert FieldFilter("priority", op, value).matches({"priority": 5}) is expected

    def test_missing_field_never_matches(self):
        assert not FieldFilter("tenantId", "!=", "t1").matches({})

    def test_incomparable_values_do_not_match(self):
        assert not FieldFilter("priority", "<", 3).matches({"priority": "high"})


class TestApplyQuery:
    """Tests for in-memory query evaluation."""

    def _snapshots(self) -> list[DocumentSnapshot]:
        return [
            DocumentSnapshot("a", {"priority": 30, "scope": "通用"}),
            DocumentSnapshot("b", {"priority": 10, "scope": "通用"}),
            DocumentSnapshot("c", {"priority": 20, "scope": "专属"}),
            DocumentSnapshot("d", {"scope": "通用"}),
        ]

    def test_filters_and_orders(self):
        result = apply_query(
            self._snapshots(),
            filters=[FieldFilter("scope", "==", "通用")],
            order_by=[OrderBy("priority")],
        )
        assert [snap.id for snap in result] == ["b", "a"]

    def test_descending_with_limit(self):
        result = apply_query(
            self._snapshots(), order_by=[OrderBy("priority", descending=True)], limit=2
        )
        assert [snap.id for snap in result] == ["a", "c"]

    def test_documents_without_order_field_are_dropped(self):
        result = apply_query(self._snapshots(), order_by=[OrderBy("priority")])
        assert "d" not in [snap.id for snap in result]


def test_deep_merge_keeps_untouched_nested_fields():
    existing = {"name": "A", "metadata": {"scope": "x", "constraints": "y"}}
    merged = deep_merge(existing, {"metadata": {"scope": "z"}})

    assert merged == {"name": "A", "metadata": {"scope": "z", "constraints": "y"}}
    assert existing["metadata"]["scope"] == "x"


def test_resolve_server_timestamps_replaces_nested_sentinels():
    now = datetime(2025, 1, 1, tzinfo=UTC)
    data = {"createdAt": SERVER_TIMESTAMP, "items": [{"at": SERVER_TIMESTAMP}], "n": 1}

    assert resolve_server_timestamps(data, now) == {
        "createdAt": now,
        "items": [{"at": now}],
        "n": 1,
    }
