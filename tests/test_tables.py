"""Tests for reference table loading."""

import json

import pytest

from tables import build_tables, default_tables, load_tables


class TestDefaultTables:
    """Test the built-in tables."""

    def test_lookups(self, tables):
        assert tables.engagement("emergency") == 0.95
        assert tables.engagement("unknown") == 0.5
        assert tables.roles_for("medical") == ["doctor", "nurse"]
        assert tables.roles_for("unknown") == []
        assert 10 in tables.preferred_hours

    def test_tables_are_read_only(self, tables):
        with pytest.raises(TypeError):
            tables.category_engagement["medical"] = 0.1


class TestOverrides:
    """Test replacing individual tables."""

    def test_override_replaces_named_table(self):
        tables = build_tables({"preferred_hours": [7], "medical_terms": ["Dialysis"]})
        assert tables.preferred_hours == frozenset({7})
        assert tables.medical_terms == ("dialysis",)
        assert tables.category_engagement == default_tables().category_engagement

    def test_unknown_keys_ignored(self):
        assert build_tables({"colour": "blue"}) == default_tables()


class TestLoadTables:
    """Test loading overrides from JSON."""

    def test_load_nested_tables_key(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"tables": {"preferred_hours": [9, 13]}}))
        assert load_tables(str(path)).preferred_hours == frozenset({9, 13})

    def test_load_top_level(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"category_engagement": {"medical": 0.2}}))
        assert load_tables(str(path)).engagement("medical") == 0.2

    def test_missing_file_falls_back(self, tmp_path, capsys):
        tables = load_tables(str(tmp_path / "nope.json"))
        assert tables == default_tables()
        assert "[ReferenceTables] Warning" in capsys.readouterr().out

    def test_invalid_json_falls_back(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert load_tables(str(path)) == default_tables()
        assert "Could not load tables" in capsys.readouterr().out

    def test_non_object_falls_back(self, tmp_path, capsys):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert load_tables(str(path)) == default_tables()
        assert "not a JSON object" in capsys.readouterr().out
