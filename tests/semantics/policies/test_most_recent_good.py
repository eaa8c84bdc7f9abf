"""
Semantic test: MOST_RECENT_GOOD policy.

Invariant:
Exactly the chronologically last good path is selected. Paths are checked
newest first and checking stops at the first good one, so older
partitions are never touched once a newer good one is found.
"""

from __future__ import annotations

from datetime import datetime, timezone

from partition_resolver.core.domain.errors import NoUsablePartitions
from partition_resolver.core.domain.types import DateRange, PathStep
from partition_resolver.core.validation.path_validator import ExistenceValidator
from partition_resolver.core.validation.policies import most_recent_good
from partition_resolver.io.memory_fs import MemoryFileSystem
from partition_resolver.sources.mode import local_mode
from partition_resolver.sources.time_pathed import MostRecentGoodSource

UTC = timezone.utc


def test_last_good_wins_over_a_bad_middle() -> None:
    steps = [PathStep("/t1/*"), PathStep("/t2/*"), PathStep("/t3/*")]

    outcome = most_recent_good(steps, lambda path: path != "/t2/*")

    assert outcome.selected_paths == ["/t3/*"]


def test_newest_bad_falls_back_to_previous_good() -> None:
    steps = [PathStep("/t1/*"), PathStep("/t2/*"), PathStep("/t3/*")]

    outcome = most_recent_good(steps, lambda path: path == "/t2/*")

    assert outcome.selected_paths == ["/t2/*"]
    assert [c.path for c in outcome.candidates] == ["/t2/*", "/t3/*"]


def test_checking_stops_at_first_good_from_the_end() -> None:
    fs = MemoryFileSystem()
    for day in ("01", "02", "03"):
        fs.touch(f"/logs/2012/01/{day}/part-00000")
    steps = [PathStep(f"/logs/2012/01/{day}/*") for day in ("01", "02", "03")]

    outcome = most_recent_good(steps, ExistenceValidator(fs).is_good)

    assert outcome.selected_paths == ["/logs/2012/01/03/*"]
    assert fs.list_calls == ["/logs/2012/01/03/*"]


def test_nothing_good_reports_every_path() -> None:
    steps = [PathStep("/t1/*"), PathStep("/t2/*")]

    outcome = most_recent_good(steps, lambda path: False)

    assert isinstance(outcome.failure, NoUsablePartitions)
    assert outcome.failure.bad_paths == ["/t1/*", "/t2/*"]


def test_source_reads_only_the_latest_partition() -> None:
    fs = MemoryFileSystem(
        {
            "/logs/2012/01/30/part-00000": b"old\n",
            "/logs/2012/01/31/part-00000": b"new\n",
        }
    )
    date_range = DateRange(datetime(2012, 1, 30, tzinfo=UTC), datetime(2012, 2, 2, tzinfo=UTC))
    source = MostRecentGoodSource("/logs/%Y/%m/%d/*", date_range, "UTC")

    handle = source.read_handle(local_mode(fs))

    assert handle.paths == ("/logs/2012/01/31/*",)
    assert handle.identifier == "/logs/2012/01/31/*"
    assert list(handle.tap.iter_records(fs)) == ["new"]
