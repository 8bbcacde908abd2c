"""
BL Program Parser
=================

Parses a complete BL program: its name, the user instruction
definitions, and the top-level body. Every block is delegated to
StatementParser.

Grammar
-------
program     ::= 'PROGRAM' IDENTIFIER 'IS' instruction* 'BEGIN' block 'END' IDENTIFIER
instruction ::= 'INSTRUCTION' IDENTIFIER 'IS' block 'END' IDENTIFIER

Checks
------
- The name after END matches the opening name, for the program and for
  each instruction
- No instruction is named after a primitive (checked before its body)
- No two instructions share a name (checked once the duplicate is read)
- Nothing but the end-of-input marker follows the program

Example Usage
-------------
>>> from bl_lang.program_parser import parse_program
>>> program = parse_program('''
... PROGRAM Demo IS
...   INSTRUCTION turn-around IS
...     turnleft
...     turnleft
...   END turn-around
... BEGIN
...   WHILE true DO
...     turn-around
...   END WHILE
... END Demo
... ''')
>>> program.name
'Demo'
>>> list(program.instructions)
['turn-around']
"""

import logging
from typing import Container, Iterable, Optional

from bl_lang.ast import Block, Program
from bl_lang.errors import (
    DuplicateInstructionError,
    NameMismatchError,
    PrimitiveNameError,
    TrailingContentError,
)
from bl_lang.options import ParserOptions
from bl_lang.statement_parser import StatementParser
from bl_lang.tokens import TokenStream, as_token_stream

logger = logging.getLogger(__name__)


class ProgramParser:
    """
    Parses whole BL programs from a TokenStream.

    Attributes:
        options: Parser configuration; options.primitives is the set of
            reserved instruction names
        statements: The StatementParser used for every block
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or ParserOptions()
        self.statements = StatementParser(self.options)

    @property
    def primitives(self) -> frozenset[str]:
        return self.options.primitives

    def parse_program(self, tokens: TokenStream) -> Program:
        """
        Parse a complete program.

        Args:
            tokens: Stream positioned at PROGRAM; must hold nothing after
                the program but the end-of-input marker

        Returns:
            The parsed Program

        Raises:
            BLSyntaxError: On the first grammar violation
        """
        tokens.expect("PROGRAM", hint="a program starts with 'PROGRAM <name> IS'")
        name = tokens.expect_identifier("program name")
        tokens.expect("IS")
        logger.debug(f"Parsing program '{name}'")

        instructions: dict[str, Block] = {}
        while tokens.front() == "INSTRUCTION":
            instr_name, body = self._parse_instruction(tokens, instructions)
            instructions[instr_name] = body

        tokens.expect(
            "BEGIN",
            hint="instruction definitions are followed by 'BEGIN <statements> END <name>'",
        )
        body = self.statements.parse_block(tokens)

        tokens.expect("END")
        end_position = tokens.current_position()
        end_name = tokens.expect_identifier("program name")
        if end_name != name:
            raise NameMismatchError(
                "finishing name does not match starting name",
                name,
                end_name,
                end_position,
            )

        if not tokens.at_end():
            raise TrailingContentError(tokens.front(), tokens.current_position())

        logger.debug(
            f"Parsed program '{name}': {len(instructions)} instruction(s), "
            f"{len(body)} top-level statement(s)"
        )
        return Program(name, instructions, body)

    def _parse_instruction(
        self,
        tokens: TokenStream,
        defined: Container[str] = (),
    ) -> tuple[str, Block]:
        """
        Parse one instruction definition.

            INSTRUCTION <name> IS <block> END <name>

        Args:
            tokens: Stream positioned at INSTRUCTION
            defined: Names of the instructions already defined

        Returns:
            (name, body) of the instruction
        """
        tokens.expect("INSTRUCTION")
        name_position = tokens.current_position()
        name = tokens.expect_identifier("instruction name")
        tokens.expect("IS")

        if name in self.primitives:
            raise PrimitiveNameError(name, name_position, self.primitives)
        if name in defined:
            raise DuplicateInstructionError(name, name_position)

        body = self.statements.parse_block(tokens)

        tokens.expect("END", hint=f"close the instruction with 'END {name}'")
        end_position = tokens.current_position()
        end_name = tokens.expect_identifier("instruction name")
        if end_name != name:
            raise NameMismatchError(
                "starting and ending instruction name do not match",
                name,
                end_name,
                end_position,
            )

        logger.debug(f"Parsed instruction '{name}' ({len(body)} statement(s))")
        return name, body


def parse_program(
    source: "TokenStream | Iterable[str] | str",
    options: Optional[ParserOptions] = None,
) -> Program:
    """
    Parse a complete BL program.

    Args:
        source: A TokenStream (consumed in place), a token list, or BL text
        options: Parser configuration

    Returns:
        The parsed Program
    """
    options = options or ParserOptions()
    tokens = as_token_stream(source, options.filename)
    return ProgramParser(options).parse_program(tokens)
