"""
BL Parser Configuration
=======================

Options shared by the statement and program parsers. Configuration can
come from:
- Default values (defined here)
- Keyword arguments
- Environment variables (ParserOptions.from_env)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from bl_lang.tokens import PRIMITIVE_INSTRUCTIONS

logger = logging.getLogger(__name__)


@dataclass
class ParserOptions:
    """
    Parser configuration options.

    Attributes:
        primitives: Reserved primitive instruction names. User-defined
            instructions may not use any of these names.
        max_depth: Maximum IF/WHILE nesting depth. None means no explicit
            limit; the interpreter's recursion limit still applies.
        filename: Source name used in error positions
    """
    primitives: frozenset[str] = field(default=PRIMITIVE_INSTRUCTIONS)
    max_depth: Optional[int] = None
    filename: str = "<input>"

    def __post_init__(self):
        self.primitives = frozenset(self.primitives)
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_env(cls) -> "ParserOptions":
        """
        Create ParserOptions from environment variables.

        Environment variables (all optional):
            BL_MAX_DEPTH: Nesting limit (positive integer)
            BL_EXTRA_PRIMITIVES: Comma-separated names added to the
                primitive set

        Returns:
            ParserOptions with values from environment variables
        """
        options = cls()

        if max_depth := os.environ.get("BL_MAX_DEPTH"):
            try:
                depth = int(max_depth)
            except ValueError:
                depth = 0
            if depth > 0:
                options.max_depth = depth
            else:
                logger.warning(f"Ignoring invalid BL_MAX_DEPTH={max_depth!r}")

        if extra := os.environ.get("BL_EXTRA_PRIMITIVES"):
            names = {name.strip() for name in extra.split(",") if name.strip()}
            options.primitives = options.primitives | names

        return options
