#!/usr/bin/env python3
"""Validate oil change prefs files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

import oil_tracker
from oil_tracker import RecordStore, default_prefs_path


def load_schema() -> dict:
    """Load the JSON schema shipped with the oil_tracker package."""
    schema_path = Path(oil_tracker.__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_prefs_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single prefs file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            # An empty file holds no keys, so every default applies
            data = yaml.safe_load(f) or {}
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"Not readable as YAML, the tracker will fall back to defaults: {e}")
    except ValidationError as e:
        key = ".".join(str(p) for p in e.path)
        if key:
            errors.append(f"{key}: {e.message}")
        else:
            errors.append(f"Schema validation error: {e.message}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def describe_prefs(filepath: Path) -> str:
    """One-line summary of the record a prefs file holds."""
    record = RecordStore(filepath).load()
    changed = record.last_change_date
    return (
        f"last change {record.last_mileage} km "
        f"on {changed.strftime('%Y-%m-%d') if changed else 'never'}, "
        f"interval {record.oil_change_interval} km, "
        f"next change {record.next_change_mileage} km"
    )


def main(argv=None):
    """Validate the given prefs files, or the default one."""
    paths = [Path(p) for p in (sys.argv[1:] if argv is None else argv)]
    if not paths:
        default = default_prefs_path()
        print(f"Checking default prefs file: {default}")
        if not default.exists():
            print(f"OK: {default} (nothing saved yet, defaults apply)")
            return 0
        paths = [default]

    schema = load_schema()
    all_valid = True
    for filepath in paths:
        errors = validate_prefs_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath} ({describe_prefs(filepath)})")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
