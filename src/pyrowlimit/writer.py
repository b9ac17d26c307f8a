"""Pretty-printing sink contract used by the row-limit dispatcher."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


class FrameType(enum.StrEnum):
    """Syntactic regions and groupings of an SQL statement.

    Used both as the host region a clause is emitted into and as the kind
    of frame opened around a group of tokens.
    """

    SELECT = "select"
    SELECT_LIST = "select_list"
    FROM_LIST = "from_list"
    WHERE = "where"
    GROUP_BY = "group_by"
    HAVING = "having"
    ORDER_BY = "order_by"
    ORDER_BY_LIST = "order_by_list"
    FETCH = "fetch"
    OFFSET = "offset"
    SIMPLE = "simple"
    SUB_QUERY = "sub_query"


@dataclass(frozen=True, eq=False)
class Frame:
    """Handle for an open frame; compared by identity."""

    frame_type: FrameType
    depth: int = 0


@runtime_checkable
class SqlNode(Protocol):
    """An expression that can render itself onto a writer."""

    def unparse(self, writer: SqlWriter, left_prec: int, right_prec: int) -> None: ...


@runtime_checkable
class SqlWriter(Protocol):
    """Minimal writer protocol the dispatcher relies on."""

    def start_list(self, frame_type: FrameType) -> Frame: ...

    def end_list(self, frame: Frame) -> None: ...

    def keyword(self, text: str) -> None: ...

    def sep(self, text: str, space_after: bool = True) -> None: ...

    def newline_and_indent(self) -> None: ...

    def unparse_expression(
        self, node: SqlNode | None, left_prec: int, right_prec: int
    ) -> None: ...


@contextmanager
def frame(writer: SqlWriter, frame_type: FrameType) -> Iterator[Frame]:
    """Open a frame on ``writer`` and close it on every exit path."""
    handle = writer.start_list(frame_type)
    try:
        yield handle
    finally:
        writer.end_list(handle)
