from __future__ import annotations

from typing import List, Optional

from .base import ASTNode
from .literals import Literal
from .types import TypeAnnotation

"""Declaration node definitions for .msg and .srv files."""


class Declaration(ASTNode):
    """One `type name [value] [# comment]` line."""

    def __init__(
        self,
        type_name: TypeAnnotation,
        name: str,
        comment: Optional[str] = None,
        line: int = 0,
        column: int = 0,
        offset: int = 0,
    ) -> None:
        super().__init__(line, column, offset=offset)
        self.type_name = type_name
        self.name = name
        self.comment = comment  # text after '#', verbatim


class FieldDecl(Declaration):
    """int32 a, float64 b 1.5 (with a per-field default)"""

    def __init__(
        self,
        type_name: TypeAnnotation,
        name: str,
        default: Optional[Literal] = None,
        comment: Optional[str] = None,
        line: int = 0,
        column: int = 0,
        offset: int = 0,
    ) -> None:
        super().__init__(type_name, name, comment, line, column, offset)
        self.default = default


class ConstantDecl(Declaration):
    """int8 FOO = -5"""

    def __init__(
        self,
        type_name: TypeAnnotation,
        name: str,
        value: Literal,
        comment: Optional[str] = None,
        line: int = 0,
        column: int = 0,
        offset: int = 0,
    ) -> None:
        super().__init__(type_name, name, comment, line, column, offset)
        self.value = value


class ServiceDecl(ASTNode):
    """Request and response halves of a .srv file."""

    def __init__(
        self,
        request: List[Declaration],
        response: List[Declaration],
        line: int = 0,
        column: int = 0,
    ) -> None:
        super().__init__(line, column)
        self.request = request
        self.response = response

    def __iter__(self):
        # allows `request, response = parser.parse_srv(text)`
        yield self.request
        yield self.response
