"""Tests for item ID parsing and formatting."""

from __future__ import annotations

import uuid

import pytest

from licwatch.domain.ids import format_id, is_id, new_id, parse_id


class TestParseId:
    def test_braced_and_bare_forms_are_equal(self) -> None:
        assert parse_id("{7210C857-D27B-4325-A6FA-1346E8ECA366}") == parse_id(
            "7210c857-d27b-4325-a6fa-1346e8eca366"
        )

    @pytest.mark.parametrize("text", ["", "Settings", "{7210C857-D27B}", "7210C857D27B4325A6FA1346E8ECA366X"])
    def test_rejects_non_ids(self, text: str) -> None:
        with pytest.raises(ValueError, match="Not a valid item ID"):
            parse_id(text)
        assert not is_id(text)

    def test_format_is_braced_upper_case(self) -> None:
        item_id = uuid.UUID("7210c857-d27b-4325-a6fa-1346e8eca366")
        assert format_id(item_id) == "{7210C857-D27B-4325-A6FA-1346E8ECA366}"

    def test_new_ids_are_unique(self) -> None:
        assert new_id() != new_id()
