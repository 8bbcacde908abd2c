"""
BL Token Vocabulary and Token Stream
====================================

The parser consumes tokens that an external tokenizer has already
produced: comments and whitespace are gone, and each token is a keyword,
an identifier or a condition keyword. The stream always ends with the
reserved END_OF_INPUT marker.

This module provides:

- The keyword, condition and primitive vocabularies
- Lexical classification helpers (is_keyword, is_identifier, is_condition)
- TokenStream, the cursor threaded through every parse call

Token Classes
-------------
| Class      | Examples                                   |
|------------|--------------------------------------------|
| Keyword    | PROGRAM, IS, BEGIN, END, INSTRUCTION, IF,  |
|            | THEN, ELSE, WHILE, DO                      |
| Condition  | next-is-empty, next-is-not-wall, random,   |
|            | true                                       |
| Identifier | move, FindObstacle, turn-around            |

Example Usage
-------------
>>> from bl_lang.tokens import TokenStream
>>> tokens = TokenStream.from_text("IF true THEN move END IF")
>>> tokens.front()
'IF'
>>> tokens.dequeue()
'IF'
>>> len(tokens)
6
"""

import re
from typing import Iterable, Optional

from bl_lang.errors import (
    TokenPosition,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)


# =============================================================================
# Vocabulary
# =============================================================================

# Reserved for "no more input"; never produced from BL source text
END_OF_INPUT = "### END OF INPUT ###"

KEYWORDS = frozenset({
    "PROGRAM",
    "IS",
    "BEGIN",
    "END",
    "INSTRUCTION",
    "IF",
    "THEN",
    "ELSE",
    "WHILE",
    "DO",
})

# Surface spellings of the condition keywords
CONDITIONS = (
    "next-is-empty",
    "next-is-not-empty",
    "next-is-wall",
    "next-is-not-wall",
    "next-is-friend",
    "next-is-not-friend",
    "next-is-enemy",
    "next-is-not-enemy",
    "random",
    "true",
)

# Built-in atomic actions; user instructions may not reuse these names
PRIMITIVE_INSTRUCTIONS = frozenset({
    "move",
    "turnleft",
    "turnright",
    "infect",
    "skip",
})

_IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*\Z")
_CONDITION_SET = frozenset(CONDITIONS)


# =============================================================================
# Classification
# =============================================================================

def is_keyword(token: str) -> bool:
    """Return True if token is a BL grammar keyword."""
    return token in KEYWORDS


def is_condition(token: str) -> bool:
    """Return True if token is spelled exactly like a condition keyword."""
    return token in _CONDITION_SET


def is_identifier(token: str) -> bool:
    """
    Return True if token is a valid BL identifier.

    Identifiers start with a letter, continue with letters, digits or
    hyphens, and are neither keywords nor condition keywords.
    """
    return (
        _IDENTIFIER_RE.match(token) is not None
        and not is_keyword(token)
        and not is_condition(token)
    )


# =============================================================================
# Token Stream
# =============================================================================

class TokenStream:
    """
    Mutable cursor over a sequence of BL tokens.

    Tokens are consumed strictly from the front. The END_OF_INPUT marker
    at the end is visible through front() but can never be dequeued;
    attempting to do so raises UnexpectedEndOfInputError. A stream is
    owned by the parse in progress and passed by reference through the
    recursive calls, never copied.

    Attributes:
        filename: Source name used in error positions
        position: Number of tokens consumed so far
    """

    def __init__(self, tokens: Iterable[str], filename: str = "<input>"):
        """
        Initialize the stream.

        Args:
            tokens: Token strings; END_OF_INPUT is appended if missing
            filename: Source name for error messages
        """
        self._tokens = list(tokens)
        if not self._tokens or self._tokens[-1] != END_OF_INPUT:
            self._tokens.append(END_OF_INPUT)
        self.filename = filename
        self.position = 0

    @classmethod
    def from_text(cls, text: str, filename: str = "<input>") -> "TokenStream":
        """
        Build a stream from whitespace-delimited BL text.

        No comment stripping or other lexing is performed; the text is
        expected to already be a flat sequence of tokens.
        """
        return cls(text.split(), filename)

    def __len__(self) -> int:
        return len(self._tokens) - self.position

    def __repr__(self) -> str:
        preview = " ".join(self.remaining()[:5])
        return f"TokenStream({self.filename!r}, at {self.position}: {preview!r})"

    def length(self) -> int:
        """Number of tokens left, including END_OF_INPUT."""
        return len(self)

    def remaining(self) -> list[str]:
        """Copy of the unconsumed tokens, END_OF_INPUT excluded."""
        return self._tokens[self.position:-1]

    def front(self) -> str:
        """Return the next token without consuming it."""
        return self._tokens[self.position]

    def at_end(self) -> bool:
        """Return True if only END_OF_INPUT is left."""
        return self.front() == END_OF_INPUT

    def current_position(self) -> TokenPosition:
        """Position of the front token for error reporting."""
        return TokenPosition(self.filename, self.position + 1)

    def dequeue(self, expected: Optional[str] = None) -> str:
        """
        Consume and return the front token.

        Args:
            expected: Description of what the caller needs, used only in
                the error message when the input has run out

        Raises:
            UnexpectedEndOfInputError: If the front token is END_OF_INPUT
        """
        if self.at_end():
            raise UnexpectedEndOfInputError(expected, self.current_position())
        token = self._tokens[self.position]
        self.position += 1
        return token

    def expect(self, keyword: str, hint: Optional[str] = None) -> str:
        """
        Consume the front token, which must equal keyword.

        Raises:
            UnexpectedEndOfInputError: If the input has run out
            UnexpectedTokenError: If the front token is something else
        """
        if self.at_end():
            raise UnexpectedEndOfInputError(f"'{keyword}'", self.current_position())
        if self.front() != keyword:
            raise UnexpectedTokenError(
                self.front(),
                expected=f"'{keyword}'",
                position=self.current_position(),
                hint=hint,
            )
        return self.dequeue()

    def expect_identifier(self, what: str = "identifier") -> str:
        """
        Consume the front token, which must be a valid identifier.

        Raises:
            UnexpectedEndOfInputError: If the input has run out
            UnexpectedTokenError: If the front token is not an identifier
        """
        if self.at_end():
            raise UnexpectedEndOfInputError(what, self.current_position())
        if not is_identifier(self.front()):
            raise UnexpectedTokenError(
                self.front(),
                expected=what,
                position=self.current_position(),
            )
        return self.dequeue()


def as_token_stream(
    source: "TokenStream | Iterable[str] | str",
    filename: str = "<input>",
) -> TokenStream:
    """
    Coerce source into a TokenStream.

    An existing TokenStream is returned as-is (not copied) so that the
    caller keeps seeing what was consumed. Strings are split on
    whitespace; other iterables are taken as ready-made token lists.
    """
    if isinstance(source, TokenStream):
        return source
    if isinstance(source, str):
        return TokenStream.from_text(source, filename)
    return TokenStream(source, filename)
