"""
BL Parser Error Hierarchy
=========================

This module defines the exception hierarchy for the BL parser. Every
grammar violation is raised at the point where it is detected and
propagates to the caller; there is no error recovery and no partial
tree is ever returned.

Exception Hierarchy
-------------------
BLError (base)
└── BLSyntaxError - any grammar violation
    ├── UnexpectedTokenError - wrong keyword/token at an expected position
    │   └── UnexpectedEndOfInputError - input ran out too early
    ├── InvalidConditionError - unrecognized condition keyword
    ├── NameMismatchError - opening and closing names differ
    ├── DuplicateInstructionError - instruction defined twice
    ├── PrimitiveNameError - instruction name shadows a primitive
    ├── TrailingContentError - tokens after the program's final END
    └── NestingTooDeepError - nesting exceeds the configured limit

Error Message Format
--------------------
Tokens carry no line information, so locations are token indices:

    robot.bl:token 12: error: condition is not appropriate
    hint: expected one of next-is-empty, next-is-wall, ..., true
"""

from dataclasses import dataclass
from typing import Iterable, Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class BLError(Exception):
    """
    Base exception for all BL errors.

    Callers can catch every parser failure with a single clause:

        try:
            program = parse_program(text)
        except BLError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Token Position Tracking
# =============================================================================

@dataclass(frozen=True)
class TokenPosition:
    """
    Location of a token in the input stream.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        index: Token index (1-indexed)
    """
    filename: str
    index: int

    def __str__(self) -> str:
        """Format as 'filename:token N' for error messages."""
        return f"{self.filename}:token {self.index}"


# =============================================================================
# Syntax Errors
# =============================================================================

class BLSyntaxError(BLError):
    """
    Grammar violation in a BL token stream.

    Attributes:
        message: The error description
        position: Which token triggered the error (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        position: Optional[TokenPosition] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.position = position
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with position and hint.

        Example output:
            robot.bl:token 7: error: expected 'THEN', found 'DO'
            hint: IF statements read 'IF <condition> THEN ... END IF'
        """
        parts = []

        if self.position:
            parts.append(f"{self.position}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnexpectedTokenError(BLSyntaxError):
    """
    Unexpected token during parsing.

    Raised when the token at the front of the stream does not match the
    grammar rule being applied, e.g. a missing THEN, DO or IS, or a
    statement that starts with neither IF, WHILE nor an identifier.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        position: Optional[TokenPosition] = None,
        message: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        if message is None:
            if expected:
                message = f"expected {expected}, found '{found}'"
            else:
                message = f"unexpected token '{found}'"

        super().__init__(message, position=position, hint=hint)


class UnexpectedEndOfInputError(UnexpectedTokenError):
    """
    The end-of-input marker was reached where another token is required.

    The marker itself is never consumed by a grammar rule.
    """

    def __init__(
        self,
        expected: Optional[str] = None,
        position: Optional[TokenPosition] = None,
    ):
        from bl_lang.tokens import END_OF_INPUT

        what = f", expected {expected}" if expected else ""
        super().__init__(
            END_OF_INPUT,
            expected=expected,
            position=position,
            message=f"unexpected end of input{what}",
        )


class InvalidConditionError(BLSyntaxError):
    """
    Condition token is not one of the recognized condition keywords.

    Example:
        IF next-is-lava THEN move END IF
    """

    def __init__(
        self,
        condition: str,
        position: Optional[TokenPosition] = None,
        valid_conditions: Optional[Iterable[str]] = None,
    ):
        self.condition = condition
        self.valid_conditions = list(valid_conditions or [])

        hint = None
        if self.valid_conditions:
            hint = f"expected one of {', '.join(self.valid_conditions)}"

        super().__init__(
            f"condition is not appropriate: '{condition}'",
            position=position,
            hint=hint,
        )


class NameMismatchError(BLSyntaxError):
    """
    The name after END differs from the name that opened the construct.

    Applies to both PROGRAM ... END <name> and INSTRUCTION ... END <name>.
    """

    def __init__(
        self,
        message: str,
        start_name: str,
        end_name: str,
        position: Optional[TokenPosition] = None,
    ):
        self.start_name = start_name
        self.end_name = end_name
        super().__init__(
            f"{message}: '{start_name}' vs '{end_name}'",
            position=position,
            hint=f"close with 'END {start_name}'",
        )


class DuplicateInstructionError(BLSyntaxError):
    """Two instruction definitions in one program share a name."""

    def __init__(self, name: str, position: Optional[TokenPosition] = None):
        self.name = name
        super().__init__(
            f"instruction already exists: '{name}'",
            position=position,
        )


class PrimitiveNameError(BLSyntaxError):
    """
    Instruction name is one of the reserved primitive instructions.

    Raised as soon as the name is read, before the body is parsed.
    """

    def __init__(
        self,
        name: str,
        position: Optional[TokenPosition] = None,
        primitives: Optional[Iterable[str]] = None,
    ):
        self.name = name
        hint = None
        if primitives:
            hint = f"reserved names: {', '.join(sorted(primitives))}"
        super().__init__(
            f"instruction name cannot be primitive: '{name}'",
            position=position,
            hint=hint,
        )


class TrailingContentError(BLSyntaxError):
    """Tokens remain after the END <name> that closes the program."""

    def __init__(self, found: str, position: Optional[TokenPosition] = None):
        self.found = found
        super().__init__(
            f"cannot have code after END of input, found '{found}'",
            position=position,
        )


class NestingTooDeepError(BLSyntaxError):
    """
    IF/WHILE nesting exceeds the configured (or interpreter) limit.
    """

    def __init__(
        self,
        depth: Optional[int] = None,
        position: Optional[TokenPosition] = None,
    ):
        self.depth = depth
        if depth is None:
            message = "statements nested too deeply"
        else:
            message = f"statements nested too deeply (limit {depth})"
        super().__init__(message, position=position)
