"""Sources over an explicit list of paths."""

from __future__ import annotations

from partition_resolver.core.domain.types import PathStep, SinkMode
from partition_resolver.core.ports.tap import Scheme
from partition_resolver.sources.file_source import FileSource
from partition_resolver.taps.schemes import DelimitedScheme, JsonLineScheme, TextLineScheme


class FixedPathSource(FileSource):
    """Source reading the given paths in order and writing to the last one."""

    def __init__(
        self,
        *paths: str,
        scheme: Scheme,
        sink_mode: SinkMode = SinkMode.REPLACE,
        completion_marker: str | None = None,
    ) -> None:
        if not paths:
            raise ValueError("FixedPathSource needs at least one path")
        super().__init__(scheme=scheme, sink_mode=sink_mode, completion_marker=completion_marker)
        self.paths = tuple(paths)

    def read_steps(self) -> list[PathStep]:
        return [PathStep(path=path) for path in self.paths]

    def __str__(self) -> str:
        return f"{type(self).__name__}({', '.join(self.paths)})"

    def __eq__(self, other: object) -> bool:
        return (
            type(other) is type(self)
            and self.paths == other.paths
            and self.scheme == other.scheme
            and self.sink_mode == other.sink_mode
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.paths))


class Tsv(FixedPathSource):
    """Tab separated values."""

    def __init__(
        self,
        path: str,
        fields: tuple[str, ...] | None = None,
        *,
        skip_header: bool = False,
        write_header: bool = False,
        sink_mode: SinkMode = SinkMode.REPLACE,
    ) -> None:
        super().__init__(
            path,
            scheme=DelimitedScheme(
                separator="\t",
                fields=fields,
                skip_header=skip_header,
                write_header=write_header,
            ),
            sink_mode=sink_mode,
        )


class Csv(FixedPathSource):
    """Comma separated values, fields quoted with ``"`` where needed."""

    def __init__(
        self,
        path: str,
        fields: tuple[str, ...] | None = None,
        *,
        separator: str = ",",
        quote: str = '"',
        skip_header: bool = False,
        write_header: bool = False,
        sink_mode: SinkMode = SinkMode.REPLACE,
    ) -> None:
        super().__init__(
            path,
            scheme=DelimitedScheme(
                separator=separator,
                quote=quote,
                fields=fields,
                skip_header=skip_header,
                write_header=write_header,
            ),
            sink_mode=sink_mode,
        )


class Osv(FixedPathSource):
    """One separated values (``\\x01``), as commonly produced by Pig and Hive."""

    def __init__(
        self,
        path: str,
        fields: tuple[str, ...] | None = None,
        *,
        sink_mode: SinkMode = SinkMode.REPLACE,
    ) -> None:
        super().__init__(
            path,
            scheme=DelimitedScheme(separator="\x01", fields=fields),
            sink_mode=sink_mode,
        )


class TextLine(FixedPathSource):
    def __init__(self, path: str, *, sink_mode: SinkMode = SinkMode.REPLACE) -> None:
        super().__init__(path, scheme=TextLineScheme(), sink_mode=sink_mode)


class JsonLine(FixedPathSource):
    def __init__(
        self,
        path: str,
        fields: tuple[str, ...] | None = None,
        *,
        sink_mode: SinkMode = SinkMode.REPLACE,
    ) -> None:
        super().__init__(path, scheme=JsonLineScheme(fields=fields), sink_mode=sink_mode)


class MultipleTextLineFiles(FixedPathSource):
    def __init__(self, *paths: str) -> None:
        super().__init__(*paths, scheme=TextLineScheme())


class MultipleDelimitedFiles(FixedPathSource):
    def __init__(
        self,
        *paths: str,
        fields: tuple[str, ...] | None = None,
        separator: str = "\t",
        quote: str | None = None,
        skip_header: bool = False,
        write_header: bool = False,
    ) -> None:
        super().__init__(
            *paths,
            scheme=DelimitedScheme(
                separator=separator,
                quote=quote,
                fields=fields,
                skip_header=skip_header,
                write_header=write_header,
            ),
        )
