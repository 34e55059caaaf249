"""Type annotations attached to declarations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .base import ASTNode


class ArrayKind(Enum):
    """How the values of a field are collected."""

    SCALAR = "scalar"  # T
    FIXED = "fixed"  # T[N]
    BOUNDED = "bounded"  # T[<=N]
    UNBOUNDED = "unbounded"  # T[]


@dataclass(frozen=True)
class ArrayShape:
    """Array suffix of a type annotation."""

    kind: ArrayKind = ArrayKind.SCALAR
    size: int = 0

    @classmethod
    def scalar(cls) -> "ArrayShape":
        return cls(ArrayKind.SCALAR)

    @classmethod
    def fixed(cls, size: int) -> "ArrayShape":
        return cls(ArrayKind.FIXED, size)

    @classmethod
    def bounded(cls, size: int) -> "ArrayShape":
        return cls(ArrayKind.BOUNDED, size)

    @classmethod
    def unbounded(cls) -> "ArrayShape":
        return cls(ArrayKind.UNBOUNDED)

    @property
    def is_sequence(self) -> bool:
        """True for growable shapes backed by a native sequence."""
        return self.kind in (ArrayKind.BOUNDED, ArrayKind.UNBOUNDED)

    @property
    def capacity(self) -> int:
        """Sequence capacity; 0 means unbounded, so Bounded(0) == Unbounded."""
        return self.size if self.kind is ArrayKind.BOUNDED else 0


class TypeAnnotation(ASTNode):
    """Base class for the type of a declaration."""

    def __init__(
        self, shape: Optional[ArrayShape] = None, line: int = 0, column: int = 0
    ) -> None:
        super().__init__(line, column)
        self.shape = shape or ArrayShape.scalar()


class PrimitiveType(TypeAnnotation):
    """One of the builtin scalars: int32, float64[3], bool[]"""

    def __init__(
        self,
        name: str,
        shape: Optional[ArrayShape] = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        super().__init__(shape, line, column)
        self.name = name  # canonical IDL name, e.g. "int64" for both int64 and i64


class NamedType(TypeAnnotation):
    """Record type of the same package: Header, Point[]"""

    def __init__(
        self,
        name: str,
        shape: Optional[ArrayShape] = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        super().__init__(shape, line, column)
        self.name = name


class ScopedType(TypeAnnotation):
    """Package-qualified record type: geometry_msgs/Point[<=4]"""

    def __init__(
        self,
        scope: str,
        name: str,
        shape: Optional[ArrayShape] = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        super().__init__(shape, line, column)
        self.scope = scope
        self.name = name


class StringType(TypeAnnotation):
    """string, string<=N and their arrays. A bound of 0 means unbounded."""

    def __init__(
        self,
        bound: int = 0,
        shape: Optional[ArrayShape] = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        super().__init__(shape, line, column)
        self.bound = bound

    @property
    def is_bounded(self) -> bool:
        return self.bound > 0
