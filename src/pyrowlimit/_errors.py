"""Exception hierarchy for row-limit clause rendering."""


class ConversionError(Exception):
    """Base exception for pyrowlimit errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging (CWE-209 prevention).
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class UnsupportedExpressionError(ConversionError):
    """Raised when a fetch/offset expression cannot be rendered as SQL."""


class InvalidFieldNameError(ConversionError):
    """Raised when a field name is invalid or empty."""


class MaxDepthExceededError(ConversionError):
    """Raised when recursion depth limit is exceeded."""


class MaxOutputLengthExceededError(ConversionError):
    """Raised when SQL output length limit is exceeded."""


class InvalidArgumentsError(ConversionError):
    """Raised when function or clause arguments are invalid."""


# Sanitized user-facing error message constants
ERR_MSG_UNSUPPORTED_EXPRESSION = "unsupported expression type"
ERR_MSG_INVALID_SYNTAX = "invalid expression syntax"
ERR_MSG_INVALID_ARGUMENTS = "invalid function arguments"
ERR_MSG_MISSING_EXPRESSION = "missing row-limit expression"
