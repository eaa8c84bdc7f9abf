"""
Semantic test: record schemes.

Invariant:
Delimited rows are validated against their declared fields (strictly by
default, padded or truncated otherwise); headers are skipped on read and
written on request.
"""

from __future__ import annotations

import pytest

from partition_resolver.taps.schemes import DelimitedScheme, JsonLineScheme, TextLineScheme


def test_strict_delimited_rejects_wrong_width() -> None:
    scheme = DelimitedScheme(fields=("a", "b"))

    with pytest.raises(ValueError):
        list(scheme.decode(b"1\t2\t3\n"))


def test_lenient_delimited_pads_and_truncates() -> None:
    scheme = DelimitedScheme(fields=("a", "b"), strict=False)

    assert list(scheme.decode(b"1\n1\t2\t3\n")) == [("1", None), ("1", "2")]


def test_header_written_and_skipped() -> None:
    scheme = DelimitedScheme(
        separator=",",
        quote='"',
        fields=("id", "note"),
        skip_header=True,
        write_header=True,
    )

    data = scheme.encode([("1", "a, b"), ("2", None)])

    assert data == b'id,note\n1,"a, b"\n2,\n'
    assert list(scheme.decode(data)) == [("1", "a, b"), ("2", "")]


def test_unquoted_tsv_escapes_separator() -> None:
    scheme = DelimitedScheme()

    data = scheme.encode([("a\tb", "c")])

    assert list(scheme.decode(data)) == [("a\tb", "c")]


def test_text_lines() -> None:
    scheme = TextLineScheme()

    assert scheme.encode(["x", "y"]) == b"x\ny\n"
    assert list(scheme.decode(b"x\ny\n")) == ["x", "y"]


def test_json_lines_need_fields_for_tuples() -> None:
    with pytest.raises(ValueError):
        JsonLineScheme().encode([("1", "2")])

    scheme = JsonLineScheme(fields=("id", "kind"))
    assert scheme.encode([(1, "click")]) == b'{"id": 1, "kind": "click"}\n'
    assert list(JsonLineScheme().decode(b'{"id": 1}\n\n')) == [{"id": 1}]
