"""OilChangeRecord dataclass for the persisted oil change state."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from dateutil import tz

DEFAULT_MILEAGE = 0
DEFAULT_INTERVAL = 5000
MIN_INTERVAL = 1000
DEFAULT_TIMESTAMP = 0


@dataclass(frozen=True)
class OilChangeRecord:
    """Mileage and date of the last oil change plus the change interval."""

    last_mileage: int = DEFAULT_MILEAGE
    oil_change_interval: int = DEFAULT_INTERVAL
    last_change_timestamp: int = DEFAULT_TIMESTAMP

    @property
    def next_change_mileage(self) -> int:
        """Mileage at which the next change is due."""
        return self.last_mileage + self.oil_change_interval

    @property
    def has_record(self) -> bool:
        """False until the first oil change has been recorded."""
        return self.last_change_timestamp > 0

    @property
    def last_change_date(self) -> Optional[datetime]:
        """Local time of the last recorded change, or None."""
        if not self.has_record:
            return None
        return datetime.fromtimestamp(
            self.last_change_timestamp / 1000, tz=tz.tzlocal()
        )
