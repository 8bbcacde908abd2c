"""
BL Language Toolkit - Parser for the BL Toy Language
====================================================

This package parses programs written in BL, a small block-structured
language for programming simple grid creatures. A program defines named
instructions and a body built from IF, IF-ELSE, WHILE and instruction
calls over a fixed set of conditions and primitive actions.

Main Components
---------------
- **tokens**: Token vocabulary and the TokenStream cursor
- **statement_parser**: Parser for statements and blocks
- **program_parser**: Parser for complete programs
- **ast**: Syntax tree nodes, visitor and printers
- **cli**: The blparse command-line tool

Pipeline
--------
    Tokens → StatementParser / ProgramParser → AST → BLPrinter / ASTPrinter

Quick Start
-----------
Parse a program:
    >>> from bl_lang import parse_program, BLPrinter
    >>> program = parse_program("PROGRAM P IS BEGIN move END P")
    >>> print(BLPrinter().print(program))
    PROGRAM P IS
    <BLANKLINE>
    BEGIN
      move
    END P
    <BLANKLINE>

Or use the command-line tool:
    $ blparse robot.bl
    $ blparse --statement --ast snippet.bl
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from bl_lang.ast import (
    ASTPrinter,
    ASTVisitor,
    Block,
    BLPrinter,
    CallStatement,
    Condition,
    IfElseStatement,
    IfStatement,
    Program,
    Statement,
    StatementKind,
    WhileStatement,
)
from bl_lang.errors import (
    BLError,
    BLSyntaxError,
    DuplicateInstructionError,
    InvalidConditionError,
    NameMismatchError,
    NestingTooDeepError,
    PrimitiveNameError,
    TokenPosition,
    TrailingContentError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)
from bl_lang.options import ParserOptions
from bl_lang.program_parser import ProgramParser, parse_program
from bl_lang.statement_parser import (
    StatementParser,
    parse_block,
    parse_condition,
    parse_statement,
)
from bl_lang.tokens import (
    CONDITIONS,
    END_OF_INPUT,
    KEYWORDS,
    PRIMITIVE_INSTRUCTIONS,
    TokenStream,
    is_condition,
    is_identifier,
    is_keyword,
)

__all__ = [
    "__version__",
    # Parsers
    "ProgramParser",
    "StatementParser",
    "parse_program",
    "parse_statement",
    "parse_block",
    "parse_condition",
    "ParserOptions",
    # Tokens
    "TokenStream",
    "END_OF_INPUT",
    "KEYWORDS",
    "CONDITIONS",
    "PRIMITIVE_INSTRUCTIONS",
    "is_keyword",
    "is_identifier",
    "is_condition",
    # AST
    "Program",
    "Block",
    "Statement",
    "StatementKind",
    "CallStatement",
    "IfStatement",
    "IfElseStatement",
    "WhileStatement",
    "Condition",
    "ASTVisitor",
    "ASTPrinter",
    "BLPrinter",
    # Errors
    "BLError",
    "BLSyntaxError",
    "TokenPosition",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
    "InvalidConditionError",
    "NameMismatchError",
    "DuplicateInstructionError",
    "PrimitiveNameError",
    "TrailingContentError",
    "NestingTooDeepError",
]
