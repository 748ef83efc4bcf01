"""Turn a fetched batch of build logs into output lines and the next watermark."""
import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, TextIO

from .errors import MalformedLogEntry
from .log_record import LogRecord
from .watermark import Watermark

logger = logging.getLogger(__name__)


class OutputMode(Enum):
    # every new entry, as fetched
    VERBATIM = "verbatim"
    # writes only, tagged UPDATE:/DELETE:
    CLASSIFIED = "classified"


@dataclass(frozen=True)
class BatchResult:
    watermark: Watermark
    lines: List[str] = field(default_factory=list)
    retained: int = 0
    skipped: int = 0


def parse_entries(entries: Optional[Iterable[Any]]) -> tuple[list[LogRecord], int]:
    """Return (records, skipped). Entries without a timestamp are dropped with a warning."""
    records = []
    skipped = 0
    for entry in entries or []:
        try:
            records.append(LogRecord.from_entry(entry))
        except MalformedLogEntry as e:
            skipped += 1
            logger.warning("Skipping log entry: %s", e)
    return records, skipped


def format_record(record: LogRecord, mode: OutputMode) -> str | None:
    """Output line for a record, or None if the mode drops it."""
    if mode is OutputMode.VERBATIM:
        return record.raw_payload
    if record.is_read():
        return None
    prefix = "DELETE:" if record.is_delete() else "UPDATE:"
    return prefix + record.raw_payload


def process_batch(
    entries: Optional[Iterable[Any]],
    watermark: Watermark,
    mode: OutputMode = OutputMode.VERBATIM,
) -> BatchResult:
    """Parse, keep entries newer than watermark, classify, emit in fetch order, then advance the watermark.

    The new watermark is the max timestamp over all retained records (including reads dropped
    by CLASSIFIED), not the timestamp of the last one emitted: batches are not sorted.
    """
    records, skipped = parse_entries(entries)
    retained = [r for r in records if watermark.admits(r.timestamp)]
    lines = []
    for record in retained:
        line = format_record(record, mode)
        if line is not None:
            lines.append(line)
    return BatchResult(
        watermark=watermark.advance(r.timestamp for r in retained),
        lines=lines,
        retained=len(retained),
        skipped=skipped,
    )


def run_pipeline(
    client: Any,
    watermark: Watermark,
    mode: OutputMode = OutputMode.VERBATIM,
    out: TextIO | None = None,
) -> BatchResult:
    """Fetch the latest build logs, write new lines to out (stdout by default), return the result."""
    out = out or sys.stdout
    result = process_batch(client.fetch_logs(), watermark, mode)
    for line in result.lines:
        print(line, file=out)
    out.flush()
    logger.debug(
        "Logs: %d retained, %d emitted, %d skipped; watermark %s",
        result.retained,
        len(result.lines),
        result.skipped,
        result.watermark,
    )
    return result
