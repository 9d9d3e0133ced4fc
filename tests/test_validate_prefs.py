#!/usr/bin/env python3
"""Tests for validate_prefs schema validation."""

from oil_tracker import RecordStore
from validate_prefs import load_schema, main, validate_prefs_file


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_has_expected_structure(self):
        schema = load_schema()
        assert isinstance(schema, dict)
        assert set(schema["properties"]) == {
            "lastMileage",
            "oilChangeInterval",
            "lastChangeTimestamp",
        }


class TestValidatePrefsFile:
    """Tests for validate_prefs_file function."""

    def test_store_output_is_valid(self, tmp_path):
        path = tmp_path / "OilChangePrefs.yaml"
        store = RecordStore(path, clock=lambda: 1718452800000)
        store.record_change("4600")
        store.update_interval("7500")
        assert validate_prefs_file(path, load_schema()) == []

    def test_interval_below_minimum(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("oilChangeInterval: 500\n")
        errors = validate_prefs_file(path, load_schema())
        assert len(errors) == 1
        assert errors[0].startswith("oilChangeInterval: ")
        assert "1000" in errors[0]

    def test_unknown_keys_kept_by_store_are_valid(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("theme: dark\n")
        RecordStore(path, clock=lambda: 1718452800000).record_change("10")
        assert validate_prefs_file(path, load_schema()) == []

    def test_empty_file_is_valid(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("")
        assert validate_prefs_file(path, load_schema()) == []

    def test_wrong_type_names_key(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("lastMileage: lots\n")
        [error] = validate_prefs_file(path, load_schema())
        assert error.startswith("lastMileage: ")

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("lastMileage: [unclosed\n")
        errors = validate_prefs_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_prefs_file(tmp_path / "missing.yaml", load_schema())
        assert len(errors) == 1
        assert errors[0].startswith("Error:")


class TestMain:
    def test_exit_codes(self, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text("lastMileage: 10\n")
        bad = tmp_path / "bad.yaml"
        bad.write_text("lastMileage: -1\n")
        assert main([str(good)]) == 0
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert f"OK: {good}" in out
        assert f"FAIL: {bad}" in out

    def test_ok_line_describes_record(self, tmp_path, capsys):
        path = tmp_path / "OilChangePrefs.yaml"
        path.write_text("lastMileage: 4600\noilChangeInterval: 5000\n")
        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        assert "last change 4600 km on never" in out
        assert "next change 9600 km" in out

    def test_default_path_not_created_yet(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("OILCHANGE_HOME", str(tmp_path))
        monkeypatch.setattr("sys.argv", ["validate-prefs"])
        assert main() == 0
        out = capsys.readouterr().out
        default = tmp_path / "OilChangePrefs.yaml"
        assert f"Checking default prefs file: {default}" in out
        assert "defaults apply" in out

    def test_default_path_invalid(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("OILCHANGE_HOME", str(tmp_path))
        (tmp_path / "OilChangePrefs.yaml").write_text("oilChangeInterval: 10\n")
        assert main([]) == 1
        assert "FAIL:" in capsys.readouterr().out
