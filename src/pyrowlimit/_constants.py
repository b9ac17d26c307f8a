"""Resource limits and rendering defaults."""

DEFAULT_MAX_RECURSION_DEPTH = 100
"""Maximum AST visit recursion depth (CWE-674 prevention)."""

DEFAULT_MAX_SQL_OUTPUT_LENGTH = 50000
"""Maximum generated SQL length for a single expression."""

DEFAULT_INDENTATION = 2
"""Spaces per indent level in PrettySqlWriter."""

UNCONSTRAINED_PRECEDENCE = -1
"""Precedence that never forces parentheses around a sub-expression."""
