"""Expression nodes handed to the fetch/offset dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING

from celpy.celparser import CELParseError, CELParser
from lark import Token, Tree

from pyrowlimit._errors import ERR_MSG_INVALID_SYNTAX, UnsupportedExpressionError
from pyrowlimit._operators import PRECEDENCE_ATOM, PRECEDENCE_NOT, PRECEDENCE_UNARY, RULE_PRECEDENCE

if TYPE_CHECKING:
    from pyrowlimit.pretty import PrettySqlWriter

_parser = CELParser()


def _top_level_precedence(tree: Tree) -> int:
    """Precedence of the outermost operator the rendered SQL will carry."""
    node: Tree | Token = tree
    while isinstance(node, Tree):
        if len(node.children) == 1:
            node = node.children[0]
            continue
        if node.data == "unary":
            op = node.children[0]
            if isinstance(op, Tree) and op.data == "unary_not":
                return PRECEDENCE_NOT
            return PRECEDENCE_UNARY
        # Ternary renders as CASE ... END, calls and literals are atoms.
        return RULE_PRECEDENCE.get(node.data, PRECEDENCE_ATOM)
    return PRECEDENCE_ATOM


class CelNode:
    """A CEL expression used as a row count or offset.

    The source is parsed once on construction; rendering happens when a
    writer asks the node to unparse itself.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        try:
            self.tree = _parser.parse(source)
        except CELParseError as e:
            raise UnsupportedExpressionError(
                ERR_MSG_INVALID_SYNTAX,
                f"cannot parse CEL expression {source!r}: {e}",
                wrapped=e,
            ) from e
        self.precedence = _top_level_precedence(self.tree)

    def unparse(self, writer: PrettySqlWriter, left_prec: int, right_prec: int) -> None:
        parenthesize = left_prec > self.precedence or right_prec > self.precedence
        writer.write_tree(self.tree, parenthesize=parenthesize)

    def __repr__(self) -> str:
        return f"CelNode({self.source!r})"

    def __str__(self) -> str:
        return self.source


class RawNode:
    """Pre-rendered SQL written verbatim."""

    def __init__(self, sql: str) -> None:
        self.sql = sql

    def unparse(self, writer: PrettySqlWriter, left_prec: int, right_prec: int) -> None:
        writer.literal(self.sql)

    def __repr__(self) -> str:
        return f"RawNode({self.sql!r})"

    def __str__(self) -> str:
        return self.sql
