"""Expression parsing errors."""

from typing import Optional


class ExpressionError(Exception):
    """Base class for expression errors."""
    pass


class ParseError(ExpressionError, ValueError):
    """Failed to parse expression.

    ``position`` is 1-based; ``token`` is the offending token text, if any.
    """

    def __init__(self, message: str, position: int, token: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.position = position
        self.token = token


class TokenError(ParseError):
    """Unrecognized token where a leaf or an opening bracket was expected."""

    def __init__(self, position: int, token: Optional[str] = None):
        super().__init__(f"Invalid token '{token}' at pos {position}", position, token)


class OperationError(ParseError):
    """The operation slot of a bracket group does not hold an operation symbol."""

    def __init__(self, position: int, token: Optional[str] = None):
        found = f"'{token}'" if token is not None else "nothing"
        super().__init__(f"Expected operation at pos {position}, found {found}", position, token)


class ArgumentsError(ParseError):
    """An operation symbol or an unknown word in an operand slot."""

    def __init__(self, position: int, token: Optional[str] = None, is_operation: bool = False):
        if is_operation:
            message = f"Unexpected operation token '{token}' at pos {position}"
        else:
            message = f"Invalid argument '{token}' at pos {position}"
        super().__init__(message, position, token)


class ArgumentsCountError(ParseError):
    """Operand count does not match the operation's arity."""

    def __init__(self, position: int, token: str, expected: int, found: int):
        super().__init__(
            f"Invalid argument count for '{token}' at pos {position}: "
            f"expected {expected}, found {found}",
            position, token)
        self.expected = expected
        self.found = found


class EndOfFileError(ParseError):
    """Input ended early, or did not end after the top-level expression."""

    def __init__(self, position: int, token: Optional[str] = None, expected: str = "token"):
        if token is None:
            message = f"Unexpected end of input at pos {position}, expected {expected}"
        else:
            message = f"Expected end of input at pos {position}, found '{token}'"
        super().__init__(message, position, token)
