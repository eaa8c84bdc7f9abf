"""
Semantic test: path validators.

Invariant:
A path is good under the existence check when its glob matches at least
one entry, and under the completion-marker check only when one of the
matched entries is the marker. Each check performs exactly one listing
and is never cached.
"""

from __future__ import annotations

import pytest

from partition_resolver.core.validation.path_validator import (
    SUCCESS_MARKER,
    CompletionMarkerValidator,
    ExistenceValidator,
    make_validator,
)
from partition_resolver.io.memory_fs import MemoryFileSystem


def test_existence_requires_a_match() -> None:
    fs = MemoryFileSystem()
    fs.touch("/logs/2012/01/30/part-00000")
    validator = ExistenceValidator(fs)

    assert validator.is_good("/logs/2012/01/30/*")
    assert not validator.is_good("/logs/2012/01/31/*")


def test_empty_directory_glob_is_not_good() -> None:
    fs = MemoryFileSystem()
    fs.touch("/logs/2012/01/30")

    # The partition exists as a file, not as a directory with entries.
    assert not ExistenceValidator(fs).is_good("/logs/2012/01/30/*")


def test_completion_marker_gates_partial_output() -> None:
    fs = MemoryFileSystem()
    fs.touch("/logs/2012/01/30/part-00000")
    validator = CompletionMarkerValidator(fs)

    assert not validator.is_good("/logs/2012/01/30/*")

    fs.touch(f"/logs/2012/01/30/{SUCCESS_MARKER}")

    assert validator.is_good("/logs/2012/01/30/*")


def test_one_listing_per_check_and_no_caching() -> None:
    fs = MemoryFileSystem()
    validator = ExistenceValidator(fs)

    assert not validator.is_good("/a/*")
    fs.touch("/a/file")
    assert validator.is_good("/a/*")

    assert fs.list_calls == ["/a/*", "/a/*"]


def test_make_validator_picks_variant() -> None:
    fs = MemoryFileSystem()

    assert isinstance(make_validator(fs), ExistenceValidator)
    marker_validator = make_validator(fs, "_DONE")
    assert isinstance(marker_validator, CompletionMarkerValidator)
    assert marker_validator.marker == "_DONE"


def test_marker_must_be_non_empty() -> None:
    with pytest.raises(ValueError):
        CompletionMarkerValidator(MemoryFileSystem(), "")
