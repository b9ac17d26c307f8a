"""CEL-to-SQL operator mappings."""

# Lark relation rule name -> SQL operator
COMPARISON_OPERATORS: dict[str, str] = {
    "relation_eq": "=",
    "relation_ne": "!=",
    "relation_lt": "<",
    "relation_le": "<=",
    "relation_gt": ">",
    "relation_ge": ">=",
}

# SQL operators that need special NULL handling
NULL_AWARE_OPS = {"relation_eq", "relation_ne"}

# Lark arithmetic rule name -> SQL operator (modulo goes through the dialect)
ARITHMETIC_OPERATORS: dict[str, str] = {
    "addition_add": "+",
    "addition_sub": "-",
    "multiplication_mul": "*",
    "multiplication_div": "/",
}

# Binding strength of the outermost rendered operator; higher binds tighter.
PRECEDENCE_OR = 2
PRECEDENCE_AND = 3
PRECEDENCE_NOT = 4
PRECEDENCE_COMPARISON = 5
PRECEDENCE_ADDITIVE = 6
PRECEDENCE_MULTIPLICATIVE = 7
PRECEDENCE_UNARY = 8
PRECEDENCE_ATOM = 10

RULE_PRECEDENCE: dict[str, int] = {
    "conditionalor": PRECEDENCE_OR,
    "conditionaland": PRECEDENCE_AND,
    "relation": PRECEDENCE_COMPARISON,
    "addition": PRECEDENCE_ADDITIVE,
    "multiplication": PRECEDENCE_MULTIPLICATIVE,
}
