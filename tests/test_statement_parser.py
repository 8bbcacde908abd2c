"""
Statement Parser Test Suite
===========================

Tests for StatementParser: blocks, IF / IF-ELSE / WHILE / call
statements, condition mapping, and error reporting.

Test Organization
-----------------
- TestConditions: condition keyword mapping
- TestBlocks: block scanning and termination
- TestStatements: statement shapes
- TestStatementErrors: malformed input
- TestNesting: nesting depth handling
"""

import pytest
from bl_lang.ast import (
    Block,
    CallStatement,
    Condition,
    IfElseStatement,
    IfStatement,
    StatementKind,
    WhileStatement,
)
from bl_lang.errors import (
    BLSyntaxError,
    InvalidConditionError,
    NestingTooDeepError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)
from bl_lang.options import ParserOptions
from bl_lang.statement_parser import (
    StatementParser,
    parse_block,
    parse_condition,
    parse_statement,
)
from bl_lang.tokens import END_OF_INPUT, TokenStream


# =============================================================================
# Condition Tests
# =============================================================================

class TestConditions:
    """Tests for condition keyword mapping."""

    def test_all_conditions(self):
        """Every Condition is reachable from its surface spelling."""
        for condition in Condition:
            assert parse_condition(condition.value) is condition

    def test_hyphenated_spelling(self):
        """Hyphenated spellings map to the matching Condition."""
        assert parse_condition("next-is-not-wall") is Condition.NEXT_IS_NOT_WALL

    @pytest.mark.parametrize(
        "spelling", ["next_is_wall", "NEXT_IS_WALL", "NEXT-IS-ENEMY", "TRUE", "Random"]
    )
    def test_non_bl_spellings_rejected(self, spelling):
        """Only the exact BL spellings are conditions."""
        with pytest.raises(InvalidConditionError):
            parse_condition(spelling)

    @pytest.mark.parametrize("spelling", ["next_is_wall", "NEXT_IS_WALL", "TRUE", "Random"])
    def test_non_bl_spellings_rejected_in_statements(self, spelling):
        """IF and WHILE reject conditions that are not BL spellings."""
        with pytest.raises(InvalidConditionError):
            parse_statement(f"IF {spelling} THEN move END IF")
        with pytest.raises(InvalidConditionError):
            parse_statement(f"WHILE {spelling} DO move END WHILE")

    def test_unknown_condition(self):
        """Unrecognized conditions are errors, not a default."""
        with pytest.raises(InvalidConditionError) as exc_info:
            parse_condition("next-is-lava")
        assert exc_info.value.condition == "next-is-lava"
        assert "condition is not appropriate" in str(exc_info.value)


# =============================================================================
# Block Tests
# =============================================================================

class TestBlocks:
    """Tests for block parsing."""

    @pytest.mark.parametrize("front", ["END", "ELSE", END_OF_INPUT])
    def test_empty_block_consumes_nothing(self, front):
        """A block stops at END/ELSE/end of input without consuming it."""
        tokens = TokenStream([front, "IF"] if front != END_OF_INPUT else [])
        block = StatementParser().parse_block(tokens)
        assert block == Block()
        assert len(block) == 0
        assert tokens.position == 0
        assert tokens.front() == front

    def test_calls_in_order(self):
        """Statements are kept in read order."""
        block = parse_block("move turnleft infect")
        assert [s.instruction for s in block] == ["move", "turnleft", "infect"]

    def test_block_stops_at_end(self):
        """Scanning stops at END and leaves it at the front."""
        tokens = TokenStream.from_text("move skip END foo")
        block = StatementParser().parse_block(tokens)
        assert len(block) == 2
        assert tokens.front() == "END"

    def test_mixed_block(self):
        """Blocks mix calls and control statements."""
        block = parse_block(
            "move IF random THEN turnleft END IF WHILE true DO skip END WHILE"
        )
        assert [s.kind for s in block] == [
            StatementKind.CALL,
            StatementKind.IF,
            StatementKind.WHILE,
        ]

    def test_stream_is_consumed_in_place(self):
        """Passing a TokenStream consumes it in place."""
        tokens = TokenStream.from_text("move END")
        parse_block(tokens)
        assert tokens.front() == "END"


# =============================================================================
# Statement Tests
# =============================================================================

class TestStatements:
    """Tests for the shapes produced by each statement rule."""

    def test_call(self):
        """An identifier is a call."""
        stmt = parse_statement("move")
        assert stmt == CallStatement("move")
        assert stmt.kind == StatementKind.CALL

    def test_if(self):
        """IF without ELSE yields an IfStatement."""
        block = parse_block("IF true THEN x END IF")
        assert len(block) == 1
        stmt = block[0]
        assert isinstance(stmt, IfStatement)
        assert stmt.condition is Condition.TRUE
        assert stmt.body == Block((CallStatement("x"),))

    def test_if_else(self):
        """IF with ELSE yields an IfElseStatement with both branches."""
        stmt = parse_statement("IF true THEN x ELSE y END IF")
        assert isinstance(stmt, IfElseStatement)
        assert stmt.kind == StatementKind.IF_ELSE
        assert stmt.then_body == Block((CallStatement("x"),))
        assert stmt.else_body == Block((CallStatement("y"),))

    def test_while(self):
        """WHILE yields a WhileStatement around its body."""
        stmt = parse_statement("WHILE true DO x END WHILE")
        assert stmt == WhileStatement(Condition.TRUE, Block((CallStatement("x"),)))

    def test_empty_bodies(self):
        """IF, ELSE and WHILE bodies may be empty."""
        assert parse_statement("IF random THEN END IF") == IfStatement(Condition.RANDOM)
        assert parse_statement("IF random THEN ELSE END IF") == IfElseStatement(
            Condition.RANDOM
        )
        assert parse_statement("WHILE true DO END WHILE") == WhileStatement(
            Condition.TRUE
        )

    def test_nested(self):
        """Blocks nest recursively."""
        stmt = parse_statement(
            "WHILE true DO "
            "  IF next-is-empty THEN move "
            "  ELSE IF next-is-wall THEN turnleft END IF "
            "  END IF "
            "END WHILE"
        )
        inner = stmt.body[0]
        assert isinstance(inner, IfElseStatement)
        assert inner.condition is Condition.NEXT_IS_EMPTY
        assert inner.else_body[0] == IfStatement(
            Condition.NEXT_IS_WALL, Block((CallStatement("turnleft"),))
        )

    def test_statement_leaves_following_tokens(self):
        """parse_statement consumes exactly one statement."""
        tokens = TokenStream.from_text("IF true THEN x END IF move")
        StatementParser().parse_statement(tokens)
        assert tokens.front() == "move"


# =============================================================================
# Error Tests
# =============================================================================

class TestStatementErrors:
    """Tests for malformed statements."""

    def test_statement_cannot_start_with_keyword(self):
        """A statement may not start with END."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_statement("END IF")
        assert "syntax error" in str(exc_info.value)

    def test_statement_at_end_of_input(self):
        """An empty stream holds no statement."""
        with pytest.raises(UnexpectedEndOfInputError):
            parse_statement("")

    def test_bad_condition(self):
        """Unknown conditions in IF are fatal."""
        with pytest.raises(InvalidConditionError):
            parse_statement("IF maybe THEN x END IF")

    def test_bad_while_condition(self):
        """Unknown conditions in WHILE are fatal."""
        with pytest.raises(InvalidConditionError):
            parse_statement("WHILE forever DO x END WHILE")

    def test_missing_then(self):
        """IF requires THEN after the condition."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_statement("IF true DO x END IF")
        assert exc_info.value.found == "DO"

    def test_missing_do(self):
        """WHILE requires DO after the condition."""
        with pytest.raises(UnexpectedTokenError):
            parse_statement("WHILE true THEN x END WHILE")

    def test_wrong_closing_keyword(self):
        """IF must be closed by END IF."""
        with pytest.raises(UnexpectedTokenError):
            parse_statement("IF true THEN x END WHILE")

    def test_unterminated_while(self):
        """Running out of input inside a block is an error."""
        with pytest.raises(UnexpectedEndOfInputError):
            parse_statement("WHILE true DO x")

    def test_error_position(self):
        """Errors report the offending token index."""
        with pytest.raises(BLSyntaxError) as exc_info:
            parse_statement("IF true THEN x END WHILE")
        assert exc_info.value.position.index == 6


# =============================================================================
# Nesting Tests
# =============================================================================

def nested_whiles(depth: int) -> str:
    return "WHILE true DO " * depth + "move " + "END WHILE " * depth


class TestNesting:
    """Tests for the nesting depth limit."""

    def test_within_limit(self):
        """Nesting up to the limit parses."""
        options = ParserOptions(max_depth=3)
        stmt = parse_statement(nested_whiles(3), options)
        assert stmt.body[0].body[0].body[0] == CallStatement("move")

    def test_over_limit(self):
        """Nesting past the limit raises NestingTooDeepError."""
        options = ParserOptions(max_depth=3)
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse_statement(nested_whiles(4), options)
        assert exc_info.value.depth == 3

    def test_parser_reusable_after_error(self):
        """Depth tracking is reset after a failed parse."""
        parser = StatementParser(ParserOptions(max_depth=2))
        with pytest.raises(NestingTooDeepError):
            parser.parse_statement(TokenStream.from_text(nested_whiles(3)))
        stmt = parser.parse_statement(TokenStream.from_text(nested_whiles(2)))
        assert isinstance(stmt, WhileStatement)

    def test_recursion_limit_reported(self):
        """Exhausting the interpreter stack becomes NestingTooDeepError."""
        with pytest.raises(NestingTooDeepError):
            parse_statement(nested_whiles(5000))
