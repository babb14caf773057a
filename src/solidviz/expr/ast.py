"""
Expression tree node definitions for parsed formulas.

The tree is a closed variant: every parsed formula is built from exactly
the five node types below and evaluated by walking it with a visitor.
"""

from dataclasses import dataclass
from typing import Any, Optional
from abc import ABC
from .tokens import SourceSpan, TokenType, operator_symbol


# =============================================================================
# Base Classes
# =============================================================================

@dataclass(frozen=True)
class Expression(ABC):
    """Base class for all expression nodes."""
    span: SourceSpan  # Source location for error reporting

    def accept(self, visitor: "ExpressionVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


class ExpressionVisitor(ABC):
    """Base class for expression visitors."""

    def generic_visit(self, node: Expression) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class Constant(Expression):
    """A numeric literal, or a named constant (``e``, ``pi``) when ``name`` is set."""
    value: float
    name: Optional[str] = None


@dataclass(frozen=True)
class Variable(Expression):
    """A reference to the independent variable."""
    name: str  # 'x' or 'y'


@dataclass(frozen=True)
class UnaryOp(Expression):
    """A unary sign operation (``-x``, ``+x``)."""
    operator: TokenType  # MINUS or PLUS
    operand: Expression


@dataclass(frozen=True)
class BinaryOp(Expression):
    """A binary arithmetic operation (e.g., ``a + b``, ``x ^ 2``)."""
    left: Expression
    operator: TokenType
    right: Expression


@dataclass(frozen=True)
class FunctionCall(Expression):
    """A call of one of the built-in functions (e.g., ``arcsin(x)``)."""
    name: str
    argument: Expression


# =============================================================================
# Utilities
# =============================================================================

class SourceVisitor(ExpressionVisitor):
    """Render a tree back to fully parenthesized formula text."""

    def visit_Constant(self, node: Constant) -> str:
        if node.name is not None:
            return node.name
        return repr(node.value)

    def visit_Variable(self, node: Variable) -> str:
        return node.name

    def visit_UnaryOp(self, node: UnaryOp) -> str:
        return f"({operator_symbol(node.operator)}{node.operand.accept(self)})"

    def visit_BinaryOp(self, node: BinaryOp) -> str:
        left = node.left.accept(self)
        right = node.right.accept(self)
        return f"({left} {operator_symbol(node.operator)} {right})"

    def visit_FunctionCall(self, node: FunctionCall) -> str:
        return f"{node.name}({node.argument.accept(self)})"


def to_source(node: Expression) -> str:
    """Return fully parenthesized text for ``node``; shows how a formula was grouped."""
    return node.accept(SourceVisitor())
