"""ExpressionConverter - Lark Interpreter rendering CEL row counts as SQL."""

from __future__ import annotations

from io import StringIO
from typing import Any

from lark import Token, Tree
from lark.visitors import Interpreter

from pyrowlimit._constants import (
    DEFAULT_MAX_RECURSION_DEPTH,
    DEFAULT_MAX_SQL_OUTPUT_LENGTH,
)
from pyrowlimit._errors import (
    ERR_MSG_INVALID_ARGUMENTS,
    ERR_MSG_UNSUPPORTED_EXPRESSION,
    InvalidArgumentsError,
    MaxDepthExceededError,
    MaxOutputLengthExceededError,
    UnsupportedExpressionError,
)
from pyrowlimit._operators import (
    ARITHMETIC_OPERATORS,
    COMPARISON_OPERATORS,
    NULL_AWARE_OPS,
)
from pyrowlimit._utils import process_escapes, validate_no_null_bytes
from pyrowlimit.dialect._base import Dialect

_CAST_FUNCTIONS = ("int", "uint", "double", "string")


def _strip_quotes(s: str) -> str:
    """Strip surrounding quotes from a CEL string literal token."""
    if s.startswith(('r"', "r'", 'R"', "R'")):
        s = s[1:]
    if s.startswith('"""') or s.startswith("'''"):
        return s[3:-3]
    if s.startswith('"') or s.startswith("'"):
        return s[1:-1]
    return s


def _parse_int(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError as e:
        raise UnsupportedExpressionError(
            "invalid integer literal",
            f"cannot parse integer literal {text!r}: {e}",
            wrapped=e,
        ) from e


def _is_null_literal(tree: Tree | Token) -> bool:
    """Check whether a (possibly wrapped) expression is the null literal."""
    node: Tree | Token = tree
    while isinstance(node, Tree):
        if node.data == "literal":
            tok = node.children[0] if node.children else None
            return isinstance(tok, Token) and tok.type == "NULL_LIT"
        if len(node.children) != 1:
            return False
        node = node.children[0]
    return False


class ExpressionConverter(Interpreter):
    """Converts a CEL Lark parse tree into an SQL scalar expression.

    Only the arithmetic part of CEL that makes sense as a row count or
    offset is accepted; everything else raises UnsupportedExpressionError.
    """

    def __init__(
        self,
        dialect: Dialect,
        *,
        parameterize: bool = False,
        param_start: int = 0,
        max_depth: int = DEFAULT_MAX_RECURSION_DEPTH,
        max_output_length: int = DEFAULT_MAX_SQL_OUTPUT_LENGTH,
    ) -> None:
        self._w = StringIO()
        self._dialect = dialect
        self._parameterize = parameterize
        self._parameters: list[Any] = []
        self._param_count = param_start
        self._max_depth = max_depth
        self._max_output_length = max_output_length
        self._depth = 0

    @property
    def result(self) -> str:
        return self._w.getvalue()

    @property
    def parameters(self) -> list[Any]:
        return self._parameters

    def _check_limits(self) -> None:
        if self._depth > self._max_depth:
            raise MaxDepthExceededError(
                "maximum recursion depth exceeded",
                f"depth {self._depth} exceeds limit {self._max_depth}",
            )
        self.check_output_length()

    def check_output_length(self) -> None:
        """Raise if the SQL written so far is longer than the configured limit."""
        if self._w.tell() > self._max_output_length:
            raise MaxOutputLengthExceededError(
                "maximum SQL output length exceeded",
                f"output length exceeds limit {self._max_output_length}",
            )

    def _add_param(self, value: Any) -> int:
        """Add a parameter and return its 1-based index."""
        self._param_count += 1
        self._parameters.append(value)
        return self._param_count

    def _write_value(self, value: Any, inline: str) -> None:
        if self._parameterize:
            idx = self._add_param(value)
            self._dialect.write_param_placeholder(self._w, idx)
        else:
            self._w.write(inline)

    def _visit_child(self, tree: Tree | Token) -> None:
        """Visit a child node, incrementing depth."""
        self._depth += 1
        try:
            self._check_limits()
            self.visit(tree)
        finally:
            self._depth -= 1

    def visit(self, tree: Tree | Token) -> Any:
        if isinstance(tree, Token):
            raise UnsupportedExpressionError(
                "unsupported expression structure",
                f"unexpected bare token {tree.type}",
            )
        return super().visit(tree)

    def __default__(self, tree: Tree) -> None:
        raise UnsupportedExpressionError(
            ERR_MSG_UNSUPPORTED_EXPRESSION,
            f"no SQL rendering for CEL rule {tree.data!r}",
        )

    # ---- expr: top-level, potentially ternary ----

    def expr(self, tree: Tree) -> None:
        children = tree.children
        if len(children) == 3:
            self._w.write("CASE WHEN ")
            self._visit_child(children[0])
            self._w.write(" THEN ")
            self._visit_child(children[1])
            self._w.write(" ELSE ")
            self._visit_child(children[2])
            self._w.write(" END")
        elif len(children) == 1:
            self._visit_child(children[0])
        else:
            raise UnsupportedExpressionError(
                "unsupported expression structure",
                f"expr node has {len(children)} children",
            )

    # ---- Logical operators (ternary conditions) ----

    def conditionalor(self, tree: Tree) -> None:
        self._binary_logical(tree, " OR ")

    def conditionaland(self, tree: Tree) -> None:
        self._binary_logical(tree, " AND ")

    def _binary_logical(self, tree: Tree, sql_op: str) -> None:
        children = tree.children
        if len(children) == 1:
            self._visit_child(children[0])
        elif len(children) == 2:
            self._visit_child(children[0])
            self._w.write(sql_op)
            self._visit_child(children[1])
        else:
            raise UnsupportedExpressionError(
                "unsupported logical expression",
                f"{tree.data} has {len(children)} children",
            )

    # ---- Comparison ----

    def relation(self, tree: Tree) -> None:
        children = tree.children
        if len(children) == 1:
            self._visit_child(children[0])
            return

        op_node, rhs = self._split_binary(tree)
        op_name = op_node.data
        lhs = op_node.children[0]

        if op_name in NULL_AWARE_OPS:
            suffix = " IS NULL" if op_name == "relation_eq" else " IS NOT NULL"
            if _is_null_literal(rhs):
                self._visit_child(lhs)
                self._w.write(suffix)
                return
            if _is_null_literal(lhs):
                self._visit_child(rhs)
                self._w.write(suffix)
                return

        sql_op = COMPARISON_OPERATORS.get(op_name)
        if sql_op is None:
            raise UnsupportedExpressionError(
                "unsupported comparison operator",
                f"unknown relation operator: {op_name}",
            )
        self._visit_child(lhs)
        self._w.write(f" {sql_op} ")
        self._visit_child(rhs)

    # ---- Arithmetic ----

    def addition(self, tree: Tree) -> None:
        self._arithmetic(tree)

    def multiplication(self, tree: Tree) -> None:
        self._arithmetic(tree)

    def _arithmetic(self, tree: Tree) -> None:
        if len(tree.children) == 1:
            self._visit_child(tree.children[0])
            return

        op_node, rhs = self._split_binary(tree)
        lhs = op_node.children[0]
        op_name = op_node.data

        if op_name == "multiplication_mod":
            self._dialect.write_modulo(
                self._w,
                lambda: self._visit_child(lhs),
                lambda: self._visit_child(rhs),
            )
            return

        sql_op = ARITHMETIC_OPERATORS.get(op_name)
        if sql_op is None:
            raise UnsupportedExpressionError(
                "unsupported arithmetic operator",
                f"unknown arithmetic operator: {op_name}",
            )
        self._visit_child(lhs)
        self._w.write(f" {sql_op} ")
        self._visit_child(rhs)

    @staticmethod
    def _split_binary(tree: Tree) -> tuple[Tree, Tree]:
        """Return (operator prefix node, right operand); the left operand sits inside the prefix."""
        children = tree.children
        if len(children) != 2 or not isinstance(children[0], Tree):
            raise UnsupportedExpressionError(
                f"unsupported {tree.data} expression",
                f"{tree.data} has {len(children)} children",
            )
        return children[0], children[1]

    # ---- Unary ----

    def unary(self, tree: Tree) -> None:
        children = tree.children
        if len(children) == 1:
            self._visit_child(children[0])
            return

        if len(children) == 2 and isinstance(children[0], Tree):
            op_name = children[0].data
            if op_name == "unary_not":
                self._w.write("NOT ")
                self._visit_child(children[1])
                return
            if op_name == "unary_neg":
                self._w.write("-")
                self._visit_child(children[1])
                return

        raise UnsupportedExpressionError(
            "unsupported unary expression",
            f"unary has {len(children)} children",
        )

    # ---- Member access ----

    def member(self, tree: Tree) -> None:
        if len(tree.children) != 1:
            raise UnsupportedExpressionError(
                "unsupported member expression",
                f"member has {len(tree.children)} children",
            )
        self._visit_child(tree.children[0])

    def member_dot(self, tree: Tree) -> None:
        """Field access: a.b"""
        obj = tree.children[0]
        field_name = str(tree.children[1])
        self._visit_child(obj)
        self._w.write(".")
        self._dialect.validate_field_name(field_name)
        self._w.write(field_name)

    # ---- Primary expressions ----

    def primary(self, tree: Tree) -> None:
        if len(tree.children) != 1:
            raise UnsupportedExpressionError(
                "unsupported primary expression",
                f"primary has {len(tree.children)} children",
            )
        self._visit_child(tree.children[0])

    def ident(self, tree: Tree) -> None:
        """Bare identifier."""
        name = str(tree.children[0])
        self._dialect.validate_field_name(name)
        self._w.write(name)

    def ident_arg(self, tree: Tree) -> None:
        """Function call: func(args)."""
        func_name = str(tree.children[0])
        args_node = tree.children[1] if len(tree.children) > 1 else None
        args = args_node.children if args_node is not None else []

        if func_name in _CAST_FUNCTIONS:
            self._visit_type_cast(func_name, args)
            return

        if func_name in ("min", "max"):
            if len(args) < 2:
                raise InvalidArgumentsError(
                    ERR_MSG_INVALID_ARGUMENTS,
                    f"{func_name}() requires at least 2 arguments, got {len(args)}",
                )
            write_args = [lambda a=arg: self._visit_child(a) for arg in args]
            if func_name == "min":
                self._dialect.write_least(self._w, write_args)
            else:
                self._dialect.write_greatest(self._w, write_args)
            return

        raise UnsupportedExpressionError(
            "unsupported function call",
            f"unknown function: {func_name}",
        )

    def paren_expr(self, tree: Tree) -> None:
        """Parenthesized expression."""
        self._w.write("(")
        self._visit_child(tree.children[0])
        self._w.write(")")

    # ---- Literals ----

    def literal(self, tree: Tree) -> None:
        token = tree.children[0]
        if not isinstance(token, Token):
            raise UnsupportedExpressionError("unexpected literal structure")

        if token.type == "NULL_LIT":
            self._w.write("NULL")
        elif token.type == "BOOL_LIT":
            self._w.write("TRUE" if str(token).lower() == "true" else "FALSE")
        elif token.type == "INT_LIT":
            val = _parse_int(str(token))
            self._write_value(val, str(val))
        elif token.type == "UINT_LIT":
            val = _parse_int(str(token).rstrip("uU"))
            self._write_value(val, str(val))
        elif token.type == "FLOAT_LIT":
            self._write_value(float(str(token)), str(token))
        elif token.type in ("STRING_LIT", "MLSTRING_LIT"):
            raw = _strip_quotes(str(token))
            if not str(token).startswith(("r'", 'r"', "R'", 'R"')):
                raw = process_escapes(raw)
            validate_no_null_bytes(raw)
            if self._parameterize:
                idx = self._add_param(raw)
                self._dialect.write_param_placeholder(self._w, idx)
            else:
                self._dialect.write_string_literal(self._w, raw)
        else:
            raise UnsupportedExpressionError(
                "unsupported literal type",
                f"unknown token type: {token.type}",
            )

    # ---- Type casting ----

    def _visit_type_cast(self, type_name: str, args: list) -> None:
        if len(args) != 1:
            raise InvalidArgumentsError(
                ERR_MSG_INVALID_ARGUMENTS,
                f"{type_name}() requires exactly 1 argument, got {len(args)}",
            )
        self._w.write("CAST(")
        self._visit_child(args[0])
        self._w.write(" AS ")
        self._dialect.write_type_name(self._w, type_name)
        self._w.write(")")
