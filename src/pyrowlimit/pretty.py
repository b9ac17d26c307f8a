"""StringIO-backed SqlWriter implementation."""

from __future__ import annotations

import enum
import logging
from io import StringIO
from typing import Any

from lark import Tree

from pyrowlimit._constants import (
    DEFAULT_INDENTATION,
    DEFAULT_MAX_RECURSION_DEPTH,
    DEFAULT_MAX_SQL_OUTPUT_LENGTH,
)
from pyrowlimit._converter import ExpressionConverter
from pyrowlimit._errors import ERR_MSG_MISSING_EXPRESSION, InvalidArgumentsError
from pyrowlimit.dialect._base import Dialect
from pyrowlimit.dialect.postgres import PostgresDialect
from pyrowlimit.writer import Frame, FrameType, SqlNode

logger = logging.getLogger(__name__)

# Keywords that open a SELECT-list row-count prefix.
_SELECT_PREFIX_KEYWORDS = frozenset({"TOP", "FIRST"})


class KeywordCase(enum.StrEnum):
    UPPER = "upper"
    LOWER = "lower"
    AS_IS = "as_is"


class PrettySqlWriter:
    """Accumulates SQL tokens into a string.

    Tokens are separated by a single space; ``newline_and_indent`` starts a
    new line at the current indent. Frames are tracked on a stack and must
    be closed in the order they were opened.
    """

    def __init__(
        self,
        dialect: Dialect | None = None,
        *,
        keyword_case: KeywordCase = KeywordCase.UPPER,
        indentation: int = DEFAULT_INDENTATION,
        parameterize: bool = False,
        max_depth: int = DEFAULT_MAX_RECURSION_DEPTH,
        max_output_length: int = DEFAULT_MAX_SQL_OUTPUT_LENGTH,
    ) -> None:
        self.dialect = dialect if dialect is not None else PostgresDialect()
        self.keyword_case = KeywordCase(keyword_case)
        self.indentation = indentation
        self.parameterize = parameterize
        self.max_depth = max_depth
        self.max_output_length = max_output_length
        self._w = StringIO()
        self._frames: list[Frame] = []
        self._parameters: list[Any] = []
        self._indent = 0
        self._last_keyword: str | None = None
        self._needs_space = False

    @property
    def result(self) -> str:
        return self._w.getvalue()

    @property
    def parameters(self) -> list[Any]:
        return self._parameters

    @property
    def open_frames(self) -> list[Frame]:
        return list(self._frames)

    def reset(self) -> None:
        self._w = StringIO()
        self._frames.clear()
        self._parameters = []
        self._indent = 0
        self._needs_space = False
        self._last_keyword = None

    # --- Frames ---

    def start_list(self, frame_type: FrameType) -> Frame:
        handle = Frame(FrameType(frame_type), depth=len(self._frames))
        self._frames.append(handle)
        return handle

    def end_list(self, frame: Frame) -> None:
        if not self._frames or self._frames[-1] is not frame:
            raise ValueError(
                f"frame {frame.frame_type} closed out of order; "
                f"open frames: {[f.frame_type.value for f in self._frames]}"
            )
        self._frames.pop()

    # --- Tokens ---

    def indent(self) -> None:
        self._indent += 1

    def dedent(self) -> None:
        if self._indent > 0:
            self._indent -= 1

    def _space(self) -> None:
        if self._needs_space:
            self._w.write(" ")

    def keyword(self, text: str) -> None:
        self._last_keyword = text.upper()
        if self.keyword_case is KeywordCase.UPPER:
            text = text.upper()
        elif self.keyword_case is KeywordCase.LOWER:
            text = text.lower()
        self.literal(text)

    def literal(self, text: str) -> None:
        """Write a token, preceded by a space when one is needed."""
        self._space()
        self._w.write(text)
        self._needs_space = True

    def print_(self, text: str) -> None:
        """Write text with no surrounding whitespace."""
        self._w.write(text)
        self._needs_space = False

    def sep(self, text: str, space_after: bool = True) -> None:
        self._w.write(text)
        self._needs_space = space_after

    def newline_and_indent(self) -> None:
        self._w.write("\n")
        self._w.write(" " * (self.indentation * self._indent))
        self._needs_space = False

    # --- Expressions ---

    def unparse_expression(
        self, node: SqlNode | None, left_prec: int, right_prec: int
    ) -> None:
        if node is None:
            raise InvalidArgumentsError(
                ERR_MSG_MISSING_EXPRESSION,
                f"expression missing inside {self._current_frame_name()} frame",
            )
        node.unparse(self, left_prec, right_prec)

    def write_tree(self, tree: Tree, *, parenthesize: bool = False) -> None:
        """Render a CEL parse tree through the dialect and write it as one token."""
        converter = ExpressionConverter(
            self.dialect,
            parameterize=self.parameterize,
            param_start=len(self._parameters),
            max_depth=self.max_depth,
            max_output_length=self.max_output_length,
        )
        converter.visit(tree)
        converter.check_output_length()
        sql = converter.result
        if not parenthesize and self._in_select_prefix() and not sql.isdigit():
            parenthesize = True
        logger.debug(
            "rendered %s expression %r with %d parameter(s)",
            self.dialect.name, sql, len(converter.parameters),
        )
        self._parameters.extend(converter.parameters)
        self.literal(f"({sql})" if parenthesize else sql)

    def _in_select_prefix(self) -> bool:
        return (
            self.dialect.requires_parenthesized_row_count()
            and bool(self._frames)
            and self._frames[-1].frame_type is FrameType.FETCH
            and self._last_keyword in _SELECT_PREFIX_KEYWORDS
        )

    def _current_frame_name(self) -> str:
        return self._frames[-1].frame_type.value if self._frames else "top-level"
