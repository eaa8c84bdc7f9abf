"""Execution modes.

A mode only selects the filesystem (and a few engine-level knobs) used
by sources; resolution, validation and aggregation behave identically in
every mode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from partition_resolver.core.domain.types import IdentityStrategy
from partition_resolver.core.events.sinks.null_event_bus import NullEventBus
from partition_resolver.io.local_fs import LocalFileSystem

if TYPE_CHECKING:
    from partition_resolver.core.events.event_bus import EventBus
    from partition_resolver.core.ports.filesystem import FileSystem


@dataclass(frozen=True, slots=True, eq=False)
class ExecutionMode:
    """
    Engine context handed to sources.

    ``strict`` is the default source strictness: sources that do not fix a
    policy read with STRICT_ALL when it is set and LENIENT_ANY otherwise.
    """

    name: Literal["local", "distributed"]
    filesystem: FileSystem
    strict: bool = False
    event_bus: EventBus = field(default_factory=NullEventBus)
    max_workers: int = 1
    identity: IdentityStrategy = IdentityStrategy.RANDOM

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")


def local_mode(
    filesystem: FileSystem | None = None,
    *,
    strict: bool = False,
    event_bus: EventBus | None = None,
) -> ExecutionMode:
    return ExecutionMode(
        name="local",
        filesystem=filesystem if filesystem is not None else LocalFileSystem(),
        strict=strict,
        event_bus=event_bus if event_bus is not None else NullEventBus(),
    )


def distributed_mode(
    filesystem: FileSystem,
    *,
    strict: bool = False,
    event_bus: EventBus | None = None,
    max_workers: int = 1,
    identity: IdentityStrategy = IdentityStrategy.RANDOM,
) -> ExecutionMode:
    return ExecutionMode(
        name="distributed",
        filesystem=filesystem,
        strict=strict,
        event_bus=event_bus if event_bus is not None else NullEventBus(),
        max_workers=max_workers,
        identity=identity,
    )
