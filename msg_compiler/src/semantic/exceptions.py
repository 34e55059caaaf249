from typing import Optional

from msg_compiler.src.ast.base import ASTNode

"""Semantic analysis exceptions."""


class TypeResolutionError(Exception):
    """A type or constant with no defined mapping onto the C runtime ABI."""

    def __init__(self, message: str, node: Optional[ASTNode] = None) -> None:
        self.message = message
        self.node = node
        location = f" at {node.line}:{node.column}" if node and node.line > 0 else ""
        super().__init__(f"{message}{location}")
