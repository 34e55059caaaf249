"""Literal values used for constants and field defaults."""

from __future__ import annotations

from typing import List, Optional

from .base import ASTNode


class Literal(ASTNode):
    """Base class for literal values."""

    def __init__(
        self, line: int = 0, column: int = 0, raw_text: Optional[str] = None
    ) -> None:
        super().__init__(line, column, raw_text=raw_text)


class BoolLiteral(Literal):
    """true, false"""

    def __init__(
        self, value: bool, line: int = 0, column: int = 0, raw_text: Optional[str] = None
    ) -> None:
        super().__init__(line, column, raw_text=raw_text)
        self.value = value


class IntLiteral(Literal):
    """Signed integer literal: -17"""

    def __init__(
        self, value: int, line: int = 0, column: int = 0, raw_text: Optional[str] = None
    ) -> None:
        super().__init__(line, column, raw_text=raw_text)
        self.value = value


class UIntLiteral(Literal):
    """Unsigned integer literal: 42"""

    def __init__(
        self, value: int, line: int = 0, column: int = 0, raw_text: Optional[str] = None
    ) -> None:
        super().__init__(line, column, raw_text=raw_text)
        self.value = value


class FloatLiteral(Literal):
    """Floating-point literal: 20.99, -0.5"""

    def __init__(
        self,
        value: float,
        line: int = 0,
        column: int = 0,
        raw_text: Optional[str] = None,
    ) -> None:
        super().__init__(line, column, raw_text=raw_text)
        self.value = value


class StringLiteral(Literal):
    """Quoted string with its escapes already decoded."""

    def __init__(
        self, value: str, line: int = 0, column: int = 0, raw_text: Optional[str] = None
    ) -> None:
        super().__init__(line, column, raw_text=raw_text)
        self.value = value


class ArrayLiteral(Literal):
    """[1, 2, 3]"""

    def __init__(
        self,
        elements: List[Literal],
        line: int = 0,
        column: int = 0,
        raw_text: Optional[str] = None,
    ) -> None:
        super().__init__(line, column, raw_text=raw_text)
        self.elements = elements

    @property
    def value(self) -> list:
        return [element.value for element in self.elements]
