"""
BL Statement Parser
===================

Recursive descent parser for BL statements and blocks. The grammar is
LL(1): the token at the front of the stream selects the production.

Grammar
-------
block       ::= statement*
statement   ::= if_stmt | while_stmt | call
if_stmt     ::= 'IF' condition 'THEN' block ('ELSE' block)? 'END' 'IF'
while_stmt  ::= 'WHILE' condition 'DO' block 'END' 'WHILE'
call        ::= IDENTIFIER

A block ends at the first token that cannot start a statement, which is
normally END, ELSE or the end-of-input marker. That token is left in the
stream for the enclosing rule.

Example Usage
-------------
>>> from bl_lang.statement_parser import parse_block
>>> block = parse_block("WHILE true DO IF next-is-empty THEN move END IF END WHILE")
>>> block[0].condition
<Condition.TRUE: 'true'>
"""

import logging
from typing import Iterable, Optional

from bl_lang.ast import (
    Block,
    CallStatement,
    Condition,
    IfElseStatement,
    IfStatement,
    Statement,
    WhileStatement,
)
from bl_lang.errors import (
    InvalidConditionError,
    NestingTooDeepError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)
from bl_lang.options import ParserOptions
from bl_lang.tokens import (
    CONDITIONS,
    TokenStream,
    as_token_stream,
    is_condition,
    is_identifier,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Condition Mapping
# =============================================================================

# Canonical form: hyphens become underscores, upper case
CONDITION_TABLE: dict[str, Condition] = {
    "NEXT_IS_EMPTY": Condition.NEXT_IS_EMPTY,
    "NEXT_IS_NOT_EMPTY": Condition.NEXT_IS_NOT_EMPTY,
    "NEXT_IS_WALL": Condition.NEXT_IS_WALL,
    "NEXT_IS_NOT_WALL": Condition.NEXT_IS_NOT_WALL,
    "NEXT_IS_FRIEND": Condition.NEXT_IS_FRIEND,
    "NEXT_IS_NOT_FRIEND": Condition.NEXT_IS_NOT_FRIEND,
    "NEXT_IS_ENEMY": Condition.NEXT_IS_ENEMY,
    "NEXT_IS_NOT_ENEMY": Condition.NEXT_IS_NOT_ENEMY,
    "RANDOM": Condition.RANDOM,
    "TRUE": Condition.TRUE,
}


def canonical_condition(token: str) -> str:
    """Normalize a condition's surface spelling for table lookup."""
    return token.replace("-", "_").upper()


def parse_condition(token: str, position=None) -> Condition:
    """
    Convert a condition token into its Condition.

    Only the exact BL spellings are accepted; normalization is applied
    after that check, to build the table key.

    Args:
        token: Condition as written, e.g. "next-is-not-wall"
        position: Token position for the error message

    Returns:
        The matching Condition

    Raises:
        InvalidConditionError: If token names no known condition
    """
    condition = None
    if is_condition(token):
        condition = CONDITION_TABLE.get(canonical_condition(token))
    if condition is None:
        raise InvalidConditionError(token, position, CONDITIONS)
    return condition


# =============================================================================
# Statement Parser
# =============================================================================

class StatementParser:
    """
    Parses BL statements and blocks from a TokenStream.

    The parser holds configuration only. The token stream is passed to
    every call and consumed in place; nothing keeps a reference to it
    once the call returns.

    Attributes:
        options: Parser configuration (nesting limit, filename)
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or ParserOptions()
        self._depth = 0

    # =========================================================================
    # Public Interface
    # =========================================================================

    def parse_statement(self, tokens: TokenStream) -> Statement:
        """
        Parse one statement from the front of tokens.

        Raises:
            BLSyntaxError: If the tokens do not start with a statement
        """
        try:
            return self._parse_statement(tokens)
        except RecursionError:
            raise NestingTooDeepError(
                self.options.max_depth, tokens.current_position()
            ) from None

    def parse_block(self, tokens: TokenStream) -> Block:
        """
        Parse zero or more statements from the front of tokens.

        Stops without consuming anything at the first token that cannot
        start a statement.

        Raises:
            BLSyntaxError: If a statement in the block is malformed
        """
        try:
            return self._parse_block(tokens)
        except RecursionError:
            raise NestingTooDeepError(
                self.options.max_depth, tokens.current_position()
            ) from None

    # =========================================================================
    # Grammar Rules
    # =========================================================================

    @staticmethod
    def _starts_statement(token: str) -> bool:
        return token == "IF" or token == "WHILE" or is_identifier(token)

    def _parse_block(self, tokens: TokenStream) -> Block:
        statements = []
        while self._starts_statement(tokens.front()):
            statements.append(self._parse_statement(tokens))
        logger.debug(
            f"Parsed block of {len(statements)} statement(s), "
            f"stopped at {tokens.front()!r}"
        )
        return Block(tuple(statements))

    def _parse_statement(self, tokens: TokenStream) -> Statement:
        front = tokens.front()
        if front == "IF":
            return self._parse_if(tokens)
        elif front == "WHILE":
            return self._parse_while(tokens)
        elif is_identifier(front):
            return self._parse_call(tokens)

        if tokens.at_end():
            raise UnexpectedEndOfInputError("statement", tokens.current_position())
        raise UnexpectedTokenError(
            front,
            expected="IF, WHILE or an instruction name",
            position=tokens.current_position(),
            message=f"syntax error at '{front}'",
        )

    def _parse_condition(self, tokens: TokenStream) -> Condition:
        position = tokens.current_position()
        return parse_condition(tokens.dequeue("condition"), position)

    def _parse_nested_block(self, tokens: TokenStream) -> Block:
        """Parse the body of an IF/ELSE/WHILE one level deeper."""
        self._depth += 1
        try:
            max_depth = self.options.max_depth
            if max_depth is not None and self._depth > max_depth:
                raise NestingTooDeepError(max_depth, tokens.current_position())
            return self._parse_block(tokens)
        finally:
            self._depth -= 1

    def _parse_if(self, tokens: TokenStream) -> Statement:
        """
        Parse an IF or IF-ELSE statement.

            IF <condition> THEN <block> [ELSE <block>] END IF
        """
        tokens.expect("IF")
        condition = self._parse_condition(tokens)
        tokens.expect("THEN", hint="IF statements read 'IF <condition> THEN ... END IF'")
        then_body = self._parse_nested_block(tokens)

        if tokens.front() == "ELSE":
            tokens.dequeue()
            else_body = self._parse_nested_block(tokens)
            statement = IfElseStatement(condition, then_body, else_body)
        else:
            statement = IfStatement(condition, then_body)

        tokens.expect("END")
        tokens.expect("IF", hint="close IF statements with 'END IF'")
        return statement

    def _parse_while(self, tokens: TokenStream) -> Statement:
        """
        Parse a WHILE statement.

            WHILE <condition> DO <block> END WHILE
        """
        tokens.expect("WHILE")
        condition = self._parse_condition(tokens)
        tokens.expect("DO", hint="WHILE statements read 'WHILE <condition> DO ... END WHILE'")
        body = self._parse_nested_block(tokens)
        statement = WhileStatement(condition, body)

        tokens.expect("END")
        tokens.expect("WHILE", hint="close WHILE statements with 'END WHILE'")
        return statement

    def _parse_call(self, tokens: TokenStream) -> Statement:
        return CallStatement(tokens.expect_identifier("instruction name"))


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_statement(
    source: "TokenStream | Iterable[str] | str",
    options: Optional[ParserOptions] = None,
) -> Statement:
    """
    Parse a single statement.

    Args:
        source: A TokenStream (consumed in place), a token list, or BL text
        options: Parser configuration

    Returns:
        The parsed statement
    """
    options = options or ParserOptions()
    tokens = as_token_stream(source, options.filename)
    return StatementParser(options).parse_statement(tokens)


def parse_block(
    source: "TokenStream | Iterable[str] | str",
    options: Optional[ParserOptions] = None,
) -> Block:
    """
    Parse a block of statements.

    Args:
        source: A TokenStream (consumed in place), a token list, or BL text
        options: Parser configuration

    Returns:
        The parsed block (possibly empty)
    """
    options = options or ParserOptions()
    tokens = as_token_stream(source, options.filename)
    return StatementParser(options).parse_block(tokens)
