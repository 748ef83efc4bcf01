"""Timestamp boundary below which build logs count as already reported."""
from dataclasses import dataclass
from typing import Iterable

MIN_TIMESTAMP = "0000-00-00T00:00:00.000Z"


@dataclass(frozen=True)
class Watermark:
    value: str = MIN_TIMESTAMP

    def admits(self, timestamp: str) -> bool:
        """True if timestamp sorts strictly after the watermark."""
        # Plain string order: only valid while the service keeps one fixed-width format.
        return timestamp > self.value

    def advance(self, timestamps: Iterable[str]) -> "Watermark":
        """Return a watermark at the string-max of the current value and timestamps. Never moves back."""
        newest = max(timestamps, default=self.value)
        if newest > self.value:
            return Watermark(newest)
        return self

    def __str__(self) -> str:
        return self.value
