"""Base classes and utilities for AST traversal."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(
        self,
        line: int = 0,
        column: int = 0,
        source_file: Optional[str] = None,
        raw_text: Optional[str] = None,
        offset: int = 0,
    ) -> None:
        self.line = line
        self.column = column
        self.source_file = source_file
        self.raw_text = raw_text
        self.offset = offset


class ASTVisitor(ABC):
    """Base class for AST traversal visitors."""

    @abstractmethod
    def visit(self, node: ASTNode) -> Any:
        """Visit a node and return result."""
        method_name = f"visit_{type(node).__name__}"
        if hasattr(self, method_name):
            return getattr(self, method_name)(node)
        return self.generic_visit(node)

    def generic_visit(self, node: ASTNode) -> Any:
        """Default visitor for unhandled node types."""
        raise TypeError(f"{type(self).__name__} cannot visit {type(node).__name__}")


_POSITION_FIELDS = ("line", "column", "offset", "source_file", "raw_text")


def ast_to_dict(node: Any) -> Any:
    """Convert AST node to dictionary representation for debugging and comparison."""
    if isinstance(node, list):
        return [ast_to_dict(item) for item in node]
    if not isinstance(node, ASTNode):
        return node

    result: Dict[str, Any] = {"type": type(node).__name__}
    for field_name, field_value in node.__dict__.items():
        if field_name in _POSITION_FIELDS:
            continue
        result[field_name] = ast_to_dict(field_value)

    return result
