"""Record encodings for file taps."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass
from typing import Any, Iterable, Iterator


@dataclass(frozen=True, slots=True)
class TextLineScheme:
    """One record per line; records are the line text without its newline."""

    encoding: str = "utf-8"

    def decode(self, data: bytes) -> Iterator[str]:
        yield from data.decode(self.encoding).splitlines()

    def encode(self, records: Iterable[Any]) -> bytes:
        return "".join(f"{record}\n" for record in records).encode(self.encoding)


@dataclass(frozen=True, slots=True)
class DelimitedScheme:
    """
    Delimited text (TSV by default).

    Records are tuples of strings. With ``fields`` set and ``strict`` on,
    a row with the wrong number of columns raises ``ValueError``; with
    ``strict`` off, short rows are padded with ``None`` and long rows are
    truncated. ``quote=None`` disables quoting entirely.
    """

    separator: str = "\t"
    quote: str | None = None
    fields: tuple[str, ...] | None = None
    skip_header: bool = False
    write_header: bool = False
    strict: bool = True
    encoding: str = "utf-8"

    def _dialect(self) -> dict[str, Any]:
        if self.quote is None:
            return {"delimiter": self.separator, "quoting": csv.QUOTE_NONE, "escapechar": "\\"}
        return {"delimiter": self.separator, "quotechar": self.quote, "quoting": csv.QUOTE_MINIMAL}

    def decode(self, data: bytes) -> Iterator[tuple[str | None, ...]]:
        reader = csv.reader(io.StringIO(data.decode(self.encoding)), **self._dialect())
        for index, row in enumerate(reader):
            if index == 0 and self.skip_header:
                continue
            yield self._fit(row)

    def _fit(self, row: list[str]) -> tuple[str | None, ...]:
        if self.fields is None or len(row) == len(self.fields):
            return tuple(row)

        if self.strict:
            raise ValueError(
                f"Expected {len(self.fields)} fields {self.fields}, got {len(row)}: {row}"
            )

        width = len(self.fields)
        return tuple(row[:width]) + (None,) * (width - len(row))

    def encode(self, records: Iterable[Any]) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n", **self._dialect())

        if self.write_header and self.fields is not None:
            writer.writerow(self.fields)
        for record in records:
            writer.writerow(["" if value is None else value for value in record])

        return buffer.getvalue().encode(self.encoding)


@dataclass(frozen=True, slots=True)
class JsonLineScheme:
    """
    One JSON object per line.

    With ``fields`` set, records are tuples ordered by ``fields`` (missing
    keys read as ``None``); otherwise records are the decoded dicts.
    """

    fields: tuple[str, ...] | None = None
    encoding: str = "utf-8"

    def decode(self, data: bytes) -> Iterator[Any]:
        for line in data.decode(self.encoding).splitlines():
            if not line.strip():
                continue
            obj = json.loads(line)
            if self.fields is None:
                yield obj
            else:
                yield tuple(obj.get(field) for field in self.fields)

    def encode(self, records: Iterable[Any]) -> bytes:
        lines = []
        for record in records:
            if not isinstance(record, dict):
                if self.fields is None:
                    raise ValueError("JsonLineScheme needs fields to encode tuple records")
                record = dict(zip(self.fields, record, strict=True))
            lines.append(json.dumps(record, default=str) + "\n")
        return "".join(lines).encode(self.encoding)
