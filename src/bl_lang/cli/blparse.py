"""
blparse - BL Parser Command-Line Interface
==========================================

This module implements the command-line interface for the BL parser.
It reads a file of whitespace-delimited BL tokens, parses it, and
pretty-prints the result.

Usage Examples
--------------
Parse a program and print canonical source:
    $ blparse robot.bl

Parse a block of statements instead of a program:
    $ blparse --statement snippet.bl

Dump the syntax tree:
    $ blparse --ast robot.bl

Write the output to a file:
    $ blparse robot.bl -o robot.pretty.bl

Environment
-----------
BL_MAX_DEPTH and BL_EXTRA_PRIMITIVES are read as in
ParserOptions.from_env(); --max-depth overrides BL_MAX_DEPTH.

Exit Codes
----------
0 - Success
1 - Parse error
2 - Invalid arguments or missing files
3 - Internal error
"""

import logging
from pathlib import Path
from typing import Optional

import click

from bl_lang import __version__
from bl_lang.ast import ASTPrinter, BLPrinter
from bl_lang.cli.errors import handle_cli_exception
from bl_lang.options import ParserOptions
from bl_lang.program_parser import ProgramParser
from bl_lang.statement_parser import StatementParser
from bl_lang.tokens import TokenStream

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write output to this file instead of stdout",
)
@click.option(
    "-s", "--statement",
    is_flag=True,
    help="Parse a block of statements instead of a whole program",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the syntax tree instead of BL source",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Reject IF/WHILE nesting deeper than this",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="blparse")
def main(
    input_file: Path,
    output: Optional[Path],
    statement: bool,
    ast: bool,
    max_depth: Optional[int],
    verbose: bool,
) -> None:
    """
    Parse a BL program and pretty-print it.

    INPUT_FILE holds whitespace-delimited BL tokens.

    \b
    Examples:
        blparse robot.bl               # Print canonical source
        blparse --ast robot.bl         # Print the syntax tree
        blparse -s snippet.bl          # Parse statements only
        blparse robot.bl -o out.bl     # Write to a file
    """
    setup_logging(verbose)

    options = ParserOptions.from_env()
    options.filename = str(input_file)
    if max_depth is not None:
        options.max_depth = max_depth

    try:
        if verbose:
            kind = "statements" if statement else "program"
            click.echo(f"Parsing {kind} from {input_file}...", err=True)

        tokens = TokenStream.from_text(
            input_file.read_text(encoding="utf-8"), options.filename
        )
        token_count = len(tokens) - 1

        if statement:
            tree = StatementParser(options).parse_block(tokens)
            if not tokens.at_end():
                # Leftover END/ELSE with no matching opener
                StatementParser(options).parse_statement(tokens)
        else:
            tree = ProgramParser(options).parse_program(tokens)

        printer = ASTPrinter() if ast else BLPrinter()
        text = printer.print(tree)
        if not text.endswith("\n"):
            text += "\n"

        if output is not None:
            output.write_text(text, encoding="utf-8")
            click.echo(f"Wrote {output}", err=True)
        else:
            click.echo(text, nl=False)

        if verbose:
            click.echo(f"Parsed {token_count} tokens", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
