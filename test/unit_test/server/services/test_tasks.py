"""Unit tests for task listing query parsing."""

import pytest

from taskmanager.core.errors import InvalidOperationError
from taskmanager.server.services.tasks import build_task_query


class TestBuildTaskQuery:
    def test_defaults(self):
        query = build_task_query()

        assert query.completed is None
        assert query.limit is None
        assert query.offset is None
        assert query.order_by() == [("id", False)]

    def test_maps_skip_to_offset(self):
        query = build_task_query(completed=True, limit=10, skip=20)

        assert (query.completed, query.limit, query.offset) == (True, 10, 20)

    @pytest.mark.parametrize(
        "sort_by,expected",
        [
            ("createdAt:desc", [("created_at", True), ("id", True)]),
            ("updatedAt", [("updated_at", False), ("id", False)]),
            ("description:ASC", [("description", False), ("id", False)]),
            ("completed:desc", [("completed", True), ("id", True)]),
        ],
    )
    def test_sort_expressions(self, sort_by, expected):
        assert build_task_query(sort_by=sort_by).order_by() == expected

    @pytest.mark.parametrize("sort_by", ["owner_id", "createdAt:up", ":asc"])
    def test_invalid_sort_expressions(self, sort_by):
        with pytest.raises(InvalidOperationError):
            build_task_query(sort_by=sort_by)
