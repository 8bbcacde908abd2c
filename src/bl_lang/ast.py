"""
BL Abstract Syntax Tree (AST) Definitions
=========================================

This module defines the AST produced by the BL parsers. The statement set
is closed: every statement is exactly one of four node types.

Node Hierarchy
--------------
Program - name, instruction definitions, top-level body
Block - ordered sequence of statements
Statement (union)
├── CallStatement - call of a primitive or user instruction
├── IfStatement - IF <cond> THEN ... END IF
├── IfElseStatement - IF <cond> THEN ... ELSE ... END IF
└── WhileStatement - WHILE <cond> DO ... END WHILE

Design Notes
------------
- All nodes are frozen dataclasses, compared structurally
- Each node owns its nested blocks outright (a tree, no sharing)
- No node keeps a reference to the token stream
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Iterator, Mapping, Union


# =============================================================================
# Conditions
# =============================================================================

class Condition(Enum):
    """
    Predicates that may guard an IF or WHILE.

    Each value is the condition's spelling in BL source.
    """
    NEXT_IS_EMPTY = "next-is-empty"
    NEXT_IS_NOT_EMPTY = "next-is-not-empty"
    NEXT_IS_WALL = "next-is-wall"
    NEXT_IS_NOT_WALL = "next-is-not-wall"
    NEXT_IS_FRIEND = "next-is-friend"
    NEXT_IS_NOT_FRIEND = "next-is-not-friend"
    NEXT_IS_ENEMY = "next-is-enemy"
    NEXT_IS_NOT_ENEMY = "next-is-not-enemy"
    RANDOM = "random"
    TRUE = "true"

    def __str__(self) -> str:
        return self.value


class StatementKind(Enum):
    """Tag of a statement node."""
    CALL = auto()
    IF = auto()
    IF_ELSE = auto()
    WHILE = auto()


# =============================================================================
# Blocks and Statements
# =============================================================================

@dataclass(frozen=True)
class Block:
    """
    Ordered sequence of statements.

    Order is execution order. An empty block is legal.

    Attributes:
        statements: The statements, in the order they were read
    """
    statements: tuple["Statement", ...] = ()

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator["Statement"]:
        return iter(self.statements)

    def __getitem__(self, index: int) -> "Statement":
        return self.statements[index]


@dataclass(frozen=True)
class CallStatement:
    """
    Call of an instruction by name.

    Attributes:
        instruction: Name of the primitive or user instruction
    """
    instruction: str

    @property
    def kind(self) -> StatementKind:
        return StatementKind.CALL


@dataclass(frozen=True)
class IfStatement:
    """
    IF statement without an ELSE branch.

    Attributes:
        condition: The guard
        body: Statements run when the guard holds
    """
    condition: Condition
    body: Block = field(default_factory=Block)

    @property
    def kind(self) -> StatementKind:
        return StatementKind.IF


@dataclass(frozen=True)
class IfElseStatement:
    """
    IF statement with an ELSE branch.

    Attributes:
        condition: The guard
        then_body: Statements run when the guard holds
        else_body: Statements run otherwise
    """
    condition: Condition
    then_body: Block = field(default_factory=Block)
    else_body: Block = field(default_factory=Block)

    @property
    def kind(self) -> StatementKind:
        return StatementKind.IF_ELSE


@dataclass(frozen=True)
class WhileStatement:
    """
    WHILE loop.

    Attributes:
        condition: Loop guard, checked before each iteration
        body: Loop body
    """
    condition: Condition
    body: Block = field(default_factory=Block)

    @property
    def kind(self) -> StatementKind:
        return StatementKind.WHILE


Statement = Union[CallStatement, IfStatement, IfElseStatement, WhileStatement]


# =============================================================================
# Program Root Node
# =============================================================================

@dataclass(frozen=True)
class Program:
    """
    A complete BL program.

    Attributes:
        name: Program name (PROGRAM <name> IS ... END <name>)
        instructions: User instruction bodies keyed by instruction name;
            names are unique and never primitives. Held as a read-only
            copy of the mapping passed in, and left out of the hash.
        body: The top-level block between BEGIN and END
    """
    name: str
    instructions: Mapping[str, Block] = field(default_factory=dict, hash=False)
    body: Block = field(default_factory=Block)

    def __post_init__(self):
        object.__setattr__(
            self, "instructions", MappingProxyType(dict(self.instructions))
        )


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches to visit_<ClassName>; node types without a dedicated
    method go to generic_visit, which walks nested blocks.

    Example:
        class CallCounter(ASTVisitor):
            def __init__(self):
                self.calls = 0

            def visit_CallStatement(self, node):
                self.calls += 1
    """

    def visit(self, node) -> any:
        """Visit a node by dispatching to the matching method."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node) -> None:
        """Visit every block reachable from node."""
        if isinstance(node, Program):
            for body in node.instructions.values():
                self.visit(body)
            self.visit(node.body)
        elif isinstance(node, Block):
            for stmt in node:
                self.visit(stmt)
        else:
            for value in node.__dict__.values():
                if isinstance(value, Block):
                    self.visit(value)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Produces an indented outline of the tree:

        Program: Demo
          Instruction: turn-around
            Block
              Call: turnleft
              Call: turnleft
          Body:
            Block
              While (true)
                Block
                  Call: move
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _nested(self, node) -> None:
        self.indent_level += 1
        self.visit(node)
        self.indent_level -= 1

    def visit_Program(self, node: Program):
        self._emit(f"Program: {node.name}")
        self.indent_level += 1
        for name, body in node.instructions.items():
            self._emit(f"Instruction: {name}")
            self._nested(body)
        self._emit("Body:")
        self._nested(node.body)
        self.indent_level -= 1

    def visit_Block(self, node: Block):
        self._emit("Block")
        self.indent_level += 1
        for stmt in node:
            self.visit(stmt)
        self.indent_level -= 1

    def visit_CallStatement(self, node: CallStatement):
        self._emit(f"Call: {node.instruction}")

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"If ({node.condition})")
        self._nested(node.body)

    def visit_IfElseStatement(self, node: IfElseStatement):
        self._emit(f"If ({node.condition})")
        self.indent_level += 1
        self._emit("Then:")
        self._nested(node.then_body)
        self._emit("Else:")
        self._nested(node.else_body)
        self.indent_level -= 1

    def visit_WhileStatement(self, node: WhileStatement):
        self._emit(f"While ({node.condition})")
        self._nested(node.body)


# =============================================================================
# BL Source Printer
# =============================================================================

class BLPrinter(ASTVisitor):
    """
    Renders an AST back to canonical BL source.

    Splitting the output on whitespace gives a token stream that parses
    back into an equal tree.

    Usage:
        printer = BLPrinter()
        print(printer.print(program))
    """

    INDENT = "  "

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node) -> str:
        """Render node (Program, Block or statement) as BL source."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output) + "\n"

    def _emit(self, text: str) -> None:
        if not text:
            self.output.append("")
            return
        self.output.append(f"{self.INDENT * self.indent_level}{text}")

    def _block(self, block: Block) -> None:
        self.indent_level += 1
        self.visit(block)
        self.indent_level -= 1

    def visit_Program(self, node: Program):
        self._emit(f"PROGRAM {node.name} IS")
        self.indent_level += 1
        for name, body in node.instructions.items():
            self._emit("")
            self._emit(f"INSTRUCTION {name} IS")
            self._block(body)
            self._emit(f"END {name}")
        self.indent_level -= 1
        self._emit("")
        self._emit("BEGIN")
        self._block(node.body)
        self._emit(f"END {node.name}")

    def visit_Block(self, node: Block):
        for stmt in node:
            self.visit(stmt)

    def visit_CallStatement(self, node: CallStatement):
        self._emit(node.instruction)

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"IF {node.condition} THEN")
        self._block(node.body)
        self._emit("END IF")

    def visit_IfElseStatement(self, node: IfElseStatement):
        self._emit(f"IF {node.condition} THEN")
        self._block(node.then_body)
        self._emit("ELSE")
        self._block(node.else_body)
        self._emit("END IF")

    def visit_WhileStatement(self, node: WhileStatement):
        self._emit(f"WHILE {node.condition} DO")
        self._block(node.body)
        self._emit("END WHILE")
