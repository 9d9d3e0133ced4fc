"""YAML-backed persistence for the oil change record."""

import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml
from loguru import logger

from .collaborators import system_clock
from .errors import BelowMinimum
from .parsing import parse_int, parse_mileage
from .record import (
    DEFAULT_INTERVAL,
    DEFAULT_MILEAGE,
    DEFAULT_TIMESTAMP,
    MIN_INTERVAL,
    OilChangeRecord,
)

PREFS_NAMESPACE = "OilChangePrefs"

KEY_LAST_MILEAGE = "lastMileage"
KEY_INTERVAL = "oilChangeInterval"
KEY_TIMESTAMP = "lastChangeTimestamp"


def default_prefs_path() -> Path:
    """Prefs file location, under $OILCHANGE_HOME or ~/.oilchange."""
    home = os.environ.get("OILCHANGE_HOME")
    base = Path(home) if home else Path.home() / ".oilchange"
    return base / f"{PREFS_NAMESPACE}.yaml"


def _int_or_default(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key)
    # bool is an int subclass but never a valid stored value
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def check_interval(interval_text) -> int:
    """Parse an interval, raising BelowMinimum under MIN_INTERVAL."""
    interval = parse_int(interval_text)
    if interval < MIN_INTERVAL:
        raise BelowMinimum(interval, MIN_INTERVAL)
    return interval


class RecordStore:
    """
    Durable key-value store holding the single oil change record.

    Every successful write is committed to disk before returning, so a
    following load() from any store on the same path sees it.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        clock: Callable[[], int] = system_clock,
    ):
        self.path = Path(path) if path is not None else default_prefs_path()
        self.clock = clock

    def _read_raw(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as fp:
                data = yaml.load(fp, Loader=yaml.SafeLoader)
        except yaml.YAMLError as e:
            logger.warning(f"Unreadable prefs file {self.path}, using defaults: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_raw(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{PREFS_NAMESPACE}_", suffix=".yaml", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w") as fp:
                yaml.dump(
                    data,
                    fp,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=False,
                    width=120,
                )
            os.replace(tmp_name, self.path)
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def _update(self, **fields: int) -> OilChangeRecord:
        data = self._read_raw()
        data.update(fields)
        self._write_raw(data)
        logger.info(f"Saved {', '.join(f'{k}={v}' for k, v in fields.items())} to {self.path}")
        return self.load()

    def load(self) -> OilChangeRecord:
        """Read the record, substituting defaults for anything missing."""
        data = self._read_raw()
        record = OilChangeRecord(
            last_mileage=_int_or_default(data, KEY_LAST_MILEAGE, DEFAULT_MILEAGE),
            oil_change_interval=_int_or_default(data, KEY_INTERVAL, DEFAULT_INTERVAL),
            last_change_timestamp=_int_or_default(data, KEY_TIMESTAMP, DEFAULT_TIMESTAMP),
        )
        logger.debug(f"Loaded {record} from {self.path}")
        return record

    def record_change(self, mileage_text) -> OilChangeRecord:
        """
        Record an oil change at the given odometer reading.

        Writes the mileage and the current time together. Raises InvalidInput
        without writing when the text is blank or not a whole number.
        """
        mileage = parse_mileage(mileage_text)
        return self._update(
            **{KEY_LAST_MILEAGE: mileage, KEY_TIMESTAMP: int(self.clock())}
        )

    def update_interval(self, interval_text) -> OilChangeRecord:
        """
        Change the oil change interval.

        Raises InvalidInput for blank or non-numeric text and BelowMinimum
        for anything under MIN_INTERVAL. Nothing is written on failure.
        """
        interval = check_interval(interval_text)
        return self._update(**{KEY_INTERVAL: interval})
