"""Dialect styles for the FETCH/OFFSET (row-limiting) clause.

Each :class:`FetchOffsetType` member knows whether it can render a row
limit and an offset, and how to write them. The writer decides spacing,
casing and line breaks; this module only decides which tokens appear,
in which order and inside which frames.
"""

from __future__ import annotations

import enum
from collections.abc import Callable

from pyrowlimit._constants import UNCONSTRAINED_PRECEDENCE
from pyrowlimit.writer import FrameType, SqlNode, SqlWriter, frame

__all__ = [
    "FetchOffsetType",
    "emit",
    "supports_fetch",
    "supports_offset",
]


class FetchOffsetType(enum.Enum):
    """Enumerates the ways databases spell FETCH and OFFSET."""

    NONE = ("none", False, False)
    LIMIT = ("limit", True, False)
    LIMIT_OFFSET = ("limit_offset", True, True)
    OFFSET_LIMIT = ("offset_limit", True, True)
    FIRST = ("first", True, False)
    TOP = ("top", True, False)
    FETCH = ("fetch", True, False)
    FETCH_OFFSET = ("fetch_offset", True, True)

    def __init__(self, label: str, can_fetch: bool, can_offset: bool) -> None:
        self.label = label
        self._can_fetch = can_fetch
        self._can_offset = can_offset

    @property
    def supports_fetch(self) -> bool:
        return self._can_fetch

    @property
    def supports_offset(self) -> bool:
        return self._can_offset

    def unparse(
        self,
        frame_type: FrameType,
        writer: SqlWriter,
        fetch: SqlNode | None = None,
        offset: SqlNode | None = None,
    ) -> None:
        """Write the fetch/offset clause for ``frame_type``.

        Writes nothing when this style has no clause for that region.
        Arguments the style cannot render are ignored.
        """
        _UNPARSERS[self](frame_type, writer, fetch, offset)


Unparser = Callable[[FrameType, SqlWriter, SqlNode | None, SqlNode | None], None]
"""Per-style clause writer: ``(frame_type, writer, fetch, offset)``."""


def _expression(writer: SqlWriter, node: SqlNode | None) -> None:
    writer.unparse_expression(node, UNCONSTRAINED_PRECEDENCE, UNCONSTRAINED_PRECEDENCE)


def _unparse_none(
    frame_type: FrameType,
    writer: SqlWriter,
    fetch: SqlNode | None,
    offset: SqlNode | None,
) -> None:
    pass


def _unparse_limit(
    frame_type: FrameType,
    writer: SqlWriter,
    fetch: SqlNode | None,
    offset: SqlNode | None,
) -> None:
    if fetch is None or frame_type != FrameType.ORDER_BY:
        return
    writer.newline_and_indent()
    with frame(writer, FrameType.FETCH):
        writer.keyword("LIMIT")
        _expression(writer, fetch)


def _unparse_limit_offset(
    frame_type: FrameType,
    writer: SqlWriter,
    fetch: SqlNode | None,
    offset: SqlNode | None,
) -> None:
    _unparse_limit(frame_type, writer, fetch, None)
    if offset is None or frame_type != FrameType.ORDER_BY:
        return
    writer.newline_and_indent()
    with frame(writer, FrameType.OFFSET):
        writer.keyword("OFFSET")
        _expression(writer, offset)


def _unparse_offset_limit(
    frame_type: FrameType,
    writer: SqlWriter,
    fetch: SqlNode | None,
    offset: SqlNode | None,
) -> None:
    if offset is None:
        _unparse_limit(frame_type, writer, fetch, None)
        return
    if frame_type != FrameType.ORDER_BY:
        return
    # MySQL-family "LIMIT offset, count"; the frame is the offset's.
    writer.newline_and_indent()
    with frame(writer, FrameType.OFFSET):
        writer.keyword("LIMIT")
        _expression(writer, offset)
        writer.sep(",", True)
        _expression(writer, fetch)


def _select_prefix(keyword: str) -> Unparser:
    def unparse(
        frame_type: FrameType,
        writer: SqlWriter,
        fetch: SqlNode | None,
        offset: SqlNode | None,
    ) -> None:
        if fetch is None or frame_type != FrameType.SELECT:
            return
        with frame(writer, FrameType.FETCH):
            writer.keyword(keyword)
            _expression(writer, fetch)

    unparse.__name__ = f"_unparse_{keyword.lower()}"
    return unparse


def _unparse_fetch(
    frame_type: FrameType,
    writer: SqlWriter,
    fetch: SqlNode | None,
    offset: SqlNode | None,
) -> None:
    if fetch is None or frame_type != FrameType.ORDER_BY:
        return
    writer.newline_and_indent()
    with frame(writer, FrameType.FETCH):
        writer.keyword("FETCH")
        writer.keyword("FIRST")
        _expression(writer, fetch)
        writer.keyword("ROWS")
        writer.keyword("ONLY")


def _unparse_fetch_offset(
    frame_type: FrameType,
    writer: SqlWriter,
    fetch: SqlNode | None,
    offset: SqlNode | None,
) -> None:
    if frame_type != FrameType.ORDER_BY:
        return
    if offset is not None:
        writer.newline_and_indent()
        with frame(writer, FrameType.OFFSET):
            writer.keyword("OFFSET")
            _expression(writer, offset)
            writer.keyword("ROWS")
    if fetch is not None:
        writer.newline_and_indent()
        with frame(writer, FrameType.FETCH):
            writer.keyword("FETCH")
            writer.keyword("NEXT")
            _expression(writer, fetch)
            writer.keyword("ROWS")
            writer.keyword("ONLY")


_UNPARSERS: dict[FetchOffsetType, Unparser] = {
    FetchOffsetType.NONE: _unparse_none,
    FetchOffsetType.LIMIT: _unparse_limit,
    FetchOffsetType.LIMIT_OFFSET: _unparse_limit_offset,
    FetchOffsetType.OFFSET_LIMIT: _unparse_offset_limit,
    FetchOffsetType.FIRST: _select_prefix("FIRST"),
    FetchOffsetType.TOP: _select_prefix("TOP"),
    FetchOffsetType.FETCH: _unparse_fetch,
    FetchOffsetType.FETCH_OFFSET: _unparse_fetch_offset,
}


def supports_fetch(style: FetchOffsetType) -> bool:
    return style.supports_fetch


def supports_offset(style: FetchOffsetType) -> bool:
    return style.supports_offset


def emit(
    style: FetchOffsetType,
    host_region: FrameType,
    writer: SqlWriter,
    fetch: SqlNode | None = None,
    offset: SqlNode | None = None,
) -> None:
    """Write ``style``'s fetch/offset clause for ``host_region`` onto ``writer``."""
    style.unparse(host_region, writer, fetch, offset)
