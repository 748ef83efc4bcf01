#!/usr/bin/env python3
"""Algolia index size monitor: poll the record count, print build logs when it moves too far."""
import argparse
import logging
import sys
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, TextIO

from .algolia_client import create_client
from .delta import DeltaPolicy, evaluate_delta
from .errors import MonitorError
from .pipeline import OutputMode, run_pipeline
from .settings import MONITOR_DEBUG, MONITOR_DELAY, MONITOR_DELTA
from .watermark import Watermark

logger = logging.getLogger(__name__)


class ReportMode(Enum):
    # print new logs every cycle
    ALWAYS = "always"
    # print new logs only while the record count is off by more than the threshold
    ON_CHANGE = "on_change"


class MonitorState(Enum):
    IDLE = "idle"
    POLLING = "polling"


@dataclass(frozen=True)
class MonitorConfig:
    report_mode: ReportMode = ReportMode.ON_CHANGE
    expected_records: int = 0
    delay: int = MONITOR_DELAY
    delta: int = MONITOR_DELTA
    delta_policy: DeltaPolicy = DeltaPolicy.SIGNED
    output_mode: OutputMode = OutputMode.VERBATIM


class Monitor:
    """Single-threaded poll loop. Owns the watermark and the expected record count."""

    def __init__(
        self,
        client: Any,
        config: MonitorConfig,
        out: TextIO | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.config = config
        self.out = out
        self.sleep = sleep
        self.state = MonitorState.IDLE
        self.watermark = Watermark()
        self.expected_records: Optional[int] = None

    def start(self) -> int:
        """Fix the baseline: configured value, or the live record count when it is 0."""
        expected = self.config.expected_records
        if expected == 0:
            expected = self.client.count_records()
        self.expected_records = expected
        if self.config.report_mode is ReportMode.ON_CHANGE:
            logger.info("Monitoring for record count changes, started with expected value of %d", expected)
        return expected

    def poll_once(self) -> None:
        if self.expected_records is None:
            self.start()
        self.state = MonitorState.POLLING
        if self.config.report_mode is ReportMode.ALWAYS:
            self._report_logs()
            return
        current = self.client.count_records()
        result = evaluate_delta(current, self.expected_records, self.config.delta, self.config.delta_policy)
        logger.debug("Record count %d, delta %d", current, result.delta)
        if result.triggered:
            logger.info(
                "Records count difference is more than %d (%d), waiting for logs...",
                self.config.delta,
                result.delta,
            )
            self._report_logs()

    def _report_logs(self) -> None:
        result = run_pipeline(self.client, self.watermark, self.config.output_mode, self.out)
        self.watermark = result.watermark

    def run(self, max_cycles: int | None = None) -> None:
        """Poll forever (or max_cycles times), sleeping config.delay seconds between cycles.
        Transport failures propagate; there is no retry."""
        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            self.poll_once()
            cycles += 1
            self.sleep(self.config.delay)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Algolia index size monitor.")
    parser.add_argument("app_id", nargs="?", default="", help="Application ID (default: ALGOLIA_APP_ID)")
    parser.add_argument("key", nargs="?", default="", help="Algolia API key (default: ALGOLIA_API_KEY)")
    parser.add_argument("index_name", nargs="?", default="", help="Name of the index to monitor (default: ALGOLIA_INDEX_NAME)")
    parser.add_argument("-a", "--all-logs", action="store_true", help="Print new build logs every cycle, ignoring the record count")
    parser.add_argument(
        "-e",
        "--expected-records",
        type=int,
        default=0,
        help="Expected record count (default: 0 = live count at startup)",
    )
    parser.add_argument("-d", "--delay", type=int, default=MONITOR_DELAY, help=f"Seconds between polls (default: {MONITOR_DELAY})")
    parser.add_argument(
        "--delta",
        type=int,
        default=MONITOR_DELTA,
        help=f"Record count change that triggers log output; negative watches drops (default: {MONITOR_DELTA})",
    )
    parser.add_argument("--magnitude", action="store_true", help="Trigger on any change larger than |delta|, in either direction")
    parser.add_argument("--classify", action="store_true", help="Skip read logs and tag the rest UPDATE:/DELETE:")
    return parser


def config_from_args(args: argparse.Namespace) -> MonitorConfig:
    if args.expected_records < 0:
        raise ValueError("--expected-records must be >= 0")
    if args.delay < 0:
        raise ValueError(f"poll delay must be >= 0 (--delay or MONITOR_DELAY), got {args.delay}")
    return MonitorConfig(
        report_mode=ReportMode.ALWAYS if args.all_logs else ReportMode.ON_CHANGE,
        expected_records=args.expected_records,
        delay=args.delay,
        delta=args.delta,
        delta_policy=DeltaPolicy.MAGNITUDE if args.magnitude else DeltaPolicy.SIGNED,
        output_mode=OutputMode.CLASSIFIED if args.classify else OutputMode.VERBATIM,
    )


def configure_logging(debug: bool = MONITOR_DEBUG) -> None:
    """Diagnostics go to stderr; stdout carries only log lines."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    if not root.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        root.addHandler(h)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()
    try:
        config = config_from_args(args)
        client = create_client(args.app_id, args.key, args.index_name)
    except (RuntimeError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(2)

    monitor = Monitor(client, config)
    try:
        monitor.run()
    except MonitorError as e:
        logger.error("Monitoring stopped: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
