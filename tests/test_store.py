#!/usr/bin/env python3
"""Tests for the YAML-backed record store."""

import pytest
import yaml

from oil_tracker import (
    BelowMinimum,
    InvalidInput,
    OilChangeRecord,
    RecordStore,
    default_prefs_path,
)

NOW_MS = 1718452800000


@pytest.fixture
def prefs(tmp_path):
    return tmp_path / "OilChangePrefs.yaml"


@pytest.fixture
def store(prefs):
    return RecordStore(prefs, clock=lambda: NOW_MS)


# =============================================================================
# load tests
# =============================================================================


class TestLoad:
    """Tests for RecordStore.load."""

    def test_missing_file_gives_defaults(self, store):
        record = store.load()
        assert record == OilChangeRecord(0, 5000, 0)
        assert record.next_change_mileage == 5000

    def test_missing_keys_gives_defaults(self, prefs, store):
        prefs.write_text("lastMileage: 4600\n")
        record = store.load()
        assert record.last_mileage == 4600
        assert record.oil_change_interval == 5000
        assert record.last_change_timestamp == 0

    def test_reads_all_keys(self, prefs, store):
        prefs.write_text(
            "lastMileage: 4600\noilChangeInterval: 7500\nlastChangeTimestamp: 1700000000000\n"
        )
        assert store.load() == OilChangeRecord(4600, 7500, 1700000000000)

    def test_non_integer_values_give_defaults(self, prefs, store):
        prefs.write_text("lastMileage: lots\noilChangeInterval: true\nlastChangeTimestamp: 1.5\n")
        assert store.load() == OilChangeRecord()

    def test_empty_file_gives_defaults(self, prefs, store):
        prefs.write_text("")
        assert store.load() == OilChangeRecord()

    def test_malformed_yaml_gives_defaults(self, prefs, store):
        prefs.write_text("lastMileage: [4600\n")
        assert store.load() == OilChangeRecord()

    def test_malformed_yaml_replaced_on_next_write(self, prefs, store):
        prefs.write_text("lastMileage: [4600\n")
        store.record_change("4700")
        assert store.load().last_mileage == 4700

    def test_non_mapping_gives_defaults(self, prefs, store):
        prefs.write_text("- 4600\n- 5000\n")
        assert store.load() == OilChangeRecord()


# =============================================================================
# record_change tests
# =============================================================================


class TestRecordChange:
    """Tests for RecordStore.record_change."""

    def test_saves_mileage_and_timestamp(self, store):
        returned = store.record_change("4600")
        record = store.load()
        assert record.last_mileage == 4600
        assert record.last_change_timestamp == NOW_MS
        assert returned == record

    def test_keeps_interval(self, store):
        store.update_interval("7500")
        store.record_change("12000")
        assert store.load().oil_change_interval == 7500

    def test_visible_to_new_store_instance(self, prefs, store):
        store.record_change("300")
        assert RecordStore(prefs).load().last_mileage == 300

    def test_zero_is_allowed(self, store):
        store.record_change("0")
        assert store.load().last_mileage == 0
        assert store.load().last_change_timestamp == NOW_MS

    def test_uses_system_clock_by_default(self, prefs):
        import time

        before = int(time.time() * 1000)
        RecordStore(prefs).record_change("10")
        after = int(time.time() * 1000)
        assert before <= RecordStore(prefs).load().last_change_timestamp <= after

    @pytest.mark.parametrize("text", ["", "   ", "abc", "12.5", "-4"])
    def test_invalid_input_leaves_store_unchanged(self, prefs, store, text):
        store.record_change("4600")
        before = prefs.read_text()
        with pytest.raises(InvalidInput):
            store.record_change(text)
        assert prefs.read_text() == before

    def test_invalid_input_creates_no_file(self, prefs, store):
        with pytest.raises(InvalidInput):
            store.record_change("")
        assert not prefs.exists()

    def test_written_yaml_uses_pref_keys(self, prefs, store):
        store.record_change("4600")
        data = yaml.safe_load(prefs.read_text())
        assert data == {"lastMileage": 4600, "lastChangeTimestamp": NOW_MS}

    def test_preserves_unknown_keys(self, prefs, store):
        prefs.write_text("theme: dark\n")
        store.record_change("10")
        assert yaml.safe_load(prefs.read_text())["theme"] == "dark"

    def test_no_temp_files_left_behind(self, tmp_path, store):
        store.record_change("10")
        assert [p.name for p in tmp_path.iterdir()] == ["OilChangePrefs.yaml"]


# =============================================================================
# update_interval tests
# =============================================================================


class TestUpdateInterval:
    """Tests for RecordStore.update_interval."""

    @pytest.mark.parametrize("interval", [1000, 5000, 15000])
    def test_saves_interval(self, store, interval):
        store.update_interval(str(interval))
        assert store.load().oil_change_interval == interval

    def test_leaves_mileage_and_timestamp(self, store):
        store.record_change("4600")
        store.update_interval("8000")
        record = store.load()
        assert record.last_mileage == 4600
        assert record.last_change_timestamp == NOW_MS

    @pytest.mark.parametrize("text", ["999", "0", "-5000"])
    def test_below_minimum(self, prefs, store, text):
        store.update_interval("6000")
        before = prefs.read_text()
        with pytest.raises(BelowMinimum) as exc:
            store.update_interval(text)
        assert exc.value.value == int(text)
        assert exc.value.minimum == 1000
        assert prefs.read_text() == before
        assert store.load().oil_change_interval == 6000

    @pytest.mark.parametrize("text", ["", "xyz", "1000.0"])
    def test_invalid_input(self, prefs, store, text):
        with pytest.raises(InvalidInput):
            store.update_interval(text)
        assert not prefs.exists()


class TestDefaultPrefsPath:
    """Tests for default_prefs_path."""

    def test_uses_oilchange_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OILCHANGE_HOME", str(tmp_path))
        assert default_prefs_path() == tmp_path / "OilChangePrefs.yaml"

    def test_falls_back_to_home_dir(self, monkeypatch, tmp_path):
        monkeypatch.delenv("OILCHANGE_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_prefs_path() == tmp_path / ".oilchange" / "OilChangePrefs.yaml"

    def test_store_without_path_uses_default(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OILCHANGE_HOME", str(tmp_path))
        store = RecordStore(clock=lambda: NOW_MS)
        store.record_change("42")
        assert (tmp_path / "OilChangePrefs.yaml").exists()
