from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from partition_resolver.config.source_config import SourceConfig
from partition_resolver.core.domain.durations import duration_for_template
from partition_resolver.core.domain.errors import InvalidSourceError
from partition_resolver.core.events.event_bus import EventBus
from partition_resolver.core.events.sinks.jsonl_recorder import JsonlRecorderSink
from partition_resolver.core.events.sinks.logging_sink import LoggingEventSink
from partition_resolver.core.paths.templater import WILDCARD_SEGMENT
from partition_resolver.runtime.metrics import PrometheusMetricsClient

if TYPE_CHECKING:
    from partition_resolver.sources.mode import ExecutionMode
    from partition_resolver.sources.time_pathed import TimePathedSource

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _print_plan(source: TimePathedSource) -> None:
    """Print the expansion of a source without touching the filesystem."""
    steps = source.read_steps()
    unit = duration_for_template(source.template).unit

    print(f"Source:      {source}")
    print(f"Unit:        {unit.value}")
    print(f"Partitions:  {len(steps)}")
    for step in steps:
        print(f"  {step.path}")

    print("Glob set:")
    for pattern in source.glob_patterns():
        print(f"  {pattern}")

    if source.template.endswith(WILDCARD_SEGMENT):
        print(f"Write path:  {source.write_path()}")


def _validate(source: TimePathedSource, mode: ExecutionMode, template: str) -> int:
    outcome = source.evaluate(mode)

    metrics = PrometheusMetricsClient()
    if metrics.is_enabled():
        try:
            metrics.record_outcome(template=template, outcome=outcome)
            metrics.push_all(job="partition_resolver_validate")
        except Exception:
            LOGGER.exception("Prometheus push failed")

    try:
        outcome.raise_for_failure()
    except InvalidSourceError as exc:
        print(f"INVALID: {exc}", file=sys.stderr)
        return 1

    print(f"OK: {source} ({outcome.policy.value})")
    for path in outcome.selected_paths:
        print(f"  {path}")
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="partition-resolver",
        description="Resolve and pre-flight time-partitioned sources",
    )

    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to the source JSON config.",
    )

    command = parser.add_mutually_exclusive_group(required=True)
    command.add_argument(
        "--plan",
        action="store_true",
        help="Print the partitions and glob set covered by the range (no I/O).",
    )
    command.add_argument(
        "--validate",
        action="store_true",
        help="Check the partitions under the source policy; exit 1 if unusable.",
    )
    command.add_argument(
        "--write-path",
        action="store_true",
        help="Print the partition the range's end time writes to.",
    )

    parser.add_argument(
        "--events-file",
        type=Path,
        default=None,
        help="Append resolution events as JSON lines to this file.",
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = SourceConfig.from_file(args.config)
    source = cfg.build_source()

    if args.plan:
        _print_plan(source)
        return 0

    if args.write_path:
        print(source.write_path())
        return 0

    event_bus = EventBus([LoggingEventSink(LOGGER)])
    if args.events_file is not None:
        event_bus.register(JsonlRecorderSink(args.events_file))

    with event_bus:
        return _validate(source, cfg.build_mode(event_bus=event_bus), cfg.template)


if __name__ == "__main__":
    sys.exit(main())
