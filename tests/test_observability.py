"""
Tests for logfire tracing of ledger operations.
"""

import pytest
from logfire.testing import CaptureLogfire

from lending_ledger.errors import ItemUnavailableError

ADMIN = "admin"


def _closed_span(capfire: CaptureLogfire, name: str):
    [span] = [
        s
        for s in capfire.exporter.exported_spans
        if s.name == name and s.attributes.get("logfire.span_type") == "span"
    ]
    return span


class TestTraceOperation:
    """Operation spans carry the caller and the positional inputs."""

    def test_add_item_inputs(self, capfire: CaptureLogfire, ledger):
        ledger.add_item(ADMIN, "Dune", 6, "Herbert")

        attributes = _closed_span(capfire, "ledger.operation.add_item").attributes
        assert attributes["principal"] == ADMIN
        assert attributes["input.name"] == "Dune"
        assert attributes["input.copies"] == 6
        assert attributes["input.author"] == "Herbert"
        assert attributes["operation.success"] is True
        assert "input.self" not in attributes
        assert "input.caller" not in attributes

    def test_borrow_records_item(self, capfire: CaptureLogfire, ledger, dune):
        ledger.borrow("alice", dune)

        attributes = _closed_span(capfire, "ledger.operation.borrow").attributes
        assert attributes["principal"] == "alice"
        assert attributes["input.item_id"] == dune
        assert attributes["operation.success"] is True

    def test_keyword_arguments(self, capfire: CaptureLogfire, ledger, dune):
        ledger.borrow("alice", item_id=dune)

        attributes = _closed_span(capfire, "ledger.operation.borrow").attributes
        assert attributes["input.item_id"] == dune

    def test_failure_records_error_code(self, capfire: CaptureLogfire, ledger, single_copy):
        ledger.borrow("alice", single_copy)
        capfire.exporter.clear()

        with pytest.raises(ItemUnavailableError):
            ledger.borrow("bob", single_copy)

        attributes = _closed_span(capfire, "ledger.operation.borrow").attributes
        assert attributes["input.item_id"] == single_copy
        assert attributes["operation.success"] is False
        assert attributes["operation.error_code"] == "ItemUnavailable"
