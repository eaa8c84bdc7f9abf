"""Public API for the partition_resolver package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Domain types and failures
# ----------------------------------------------------------------------
from partition_resolver.core.domain.durations import (
    DAYS,
    HOURS,
    MONTHS,
    YEARS,
    Duration,
    DurationUnit,
    duration_for_template,
)
from partition_resolver.core.domain.errors import (
    IncompletePartitions,
    InvalidSourceError,
    NoUsablePartitions,
    TemplateError,
)
from partition_resolver.core.domain.types import (
    AccessMode,
    DateRange,
    IdentityStrategy,
    PathCandidate,
    PathStep,
    ResolvedHandle,
    SinkMode,
    SourcePolicy,
)

# ----------------------------------------------------------------------
# Events, path expansion and validation
# ----------------------------------------------------------------------
from partition_resolver.core.events.event_bus import EventBus
from partition_resolver.core.paths.expander import expand
from partition_resolver.core.paths.globifier import globify
from partition_resolver.core.paths.templater import (
    YEAR_MONTH_DAY,
    YEAR_MONTH_DAY_HOUR,
    render,
    write_path,
)
from partition_resolver.core.validation.path_validator import (
    SUCCESS_MARKER,
    CompletionMarkerValidator,
    ExistenceValidator,
)
from partition_resolver.core.validation.policies import PolicyOutcome, apply_policy

# ----------------------------------------------------------------------
# Filesystems, taps and sources
# ----------------------------------------------------------------------
from partition_resolver.io.local_fs import LocalFileSystem
from partition_resolver.io.memory_fs import MemoryFileSystem
from partition_resolver.io.object_storage_fs import ObjectStorageFileSystem
from partition_resolver.runtime.resolver import resolve_read, resolve_write, validate
from partition_resolver.sources.fixed_path import (
    Csv,
    FixedPathSource,
    JsonLine,
    MultipleDelimitedFiles,
    MultipleTextLineFiles,
    Osv,
    TextLine,
    Tsv,
)
from partition_resolver.sources.mode import ExecutionMode, distributed_mode, local_mode
from partition_resolver.sources.time_pathed import MostRecentGoodSource, TimePathedSource
from partition_resolver.taps.aggregator import aggregate_taps
from partition_resolver.taps.file_tap import FileTap, MultiSourceTap
from partition_resolver.taps.schemes import DelimitedScheme, JsonLineScheme, TextLineScheme

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Resolution
    "resolve_read",
    "resolve_write",
    "validate",
    "expand",
    "globify",
    "render",
    "write_path",
    "apply_policy",
    "aggregate_taps",

    # Domain
    "DateRange",
    "Duration",
    "DurationUnit",
    "HOURS",
    "DAYS",
    "MONTHS",
    "YEARS",
    "duration_for_template",
    "PathStep",
    "PathCandidate",
    "PolicyOutcome",
    "ResolvedHandle",
    "SourcePolicy",
    "AccessMode",
    "SinkMode",
    "IdentityStrategy",
    "YEAR_MONTH_DAY",
    "YEAR_MONTH_DAY_HOUR",
    "SUCCESS_MARKER",

    # Failures
    "InvalidSourceError",
    "TemplateError",
    "IncompletePartitions",
    "NoUsablePartitions",

    # Validators
    "ExistenceValidator",
    "CompletionMarkerValidator",

    # Modes and filesystems
    "ExecutionMode",
    "local_mode",
    "distributed_mode",
    "EventBus",
    "LocalFileSystem",
    "MemoryFileSystem",
    "ObjectStorageFileSystem",

    # Sources
    "TimePathedSource",
    "MostRecentGoodSource",
    "FixedPathSource",
    "Tsv",
    "Csv",
    "Osv",
    "TextLine",
    "JsonLine",
    "MultipleTextLineFiles",
    "MultipleDelimitedFiles",

    # Taps and schemes
    "FileTap",
    "MultiSourceTap",
    "TextLineScheme",
    "DelimitedScheme",
    "JsonLineScheme",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("partition-resolver")
except PackageNotFoundError:
    __version__ = "0.0.0"
