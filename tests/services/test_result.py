"""Tests for ServiceResult and ServiceError."""

import json
from datetime import date

import pytest

from mdstudio.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="list_entries", data={"count": 2})
        assert result.ok is True
        assert result.op == "list_entries"
        assert result.data == {"count": 2}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="ENTRY_NOT_FOUND", message="Not found")
        result = ServiceResult(ok=False, op="get", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "ENTRY_NOT_FOUND"
        assert result.error.detail == {}

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("get", "NOT_FOUND", "missing", {"path": "a.md"})
        assert result.ok is False
        assert result.data == {}
        assert result.error == ServiceError(
            code="NOT_FOUND", message="missing", detail={"path": "a.md"}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="get",
            data={"metadata": {"published": date(2024, 1, 15)}},
            warnings=["posts/a.md: title: Field required"],
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["metadata"]["published"] == "2024-01-15"
        assert parsed["warnings"] == ["posts/a.md: title: Field required"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="check")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]
