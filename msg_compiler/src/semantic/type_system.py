from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from msg_compiler.src.ast.types import ArrayKind, ArrayShape

"""Resolved Rust types produced by the type resolver."""


class TypeCategory(Enum):
    """What the base of a resolved type is."""

    PRIMITIVE = "primitive"  # i32, f64, bool, ...
    STRING = "string"  # RosString<N>
    RECORD = "record"  # another message type, possibly in another package
    STRING_CONSTANT = "string_constant"  # &[u8], borrowed bytes of a constant


@dataclass(frozen=True)
class ResolvedType:
    """A base Rust type together with the array shape wrapped around it.

    ``base`` already has primitive and builtin substitutions applied and is
    qualified with its package path when it lives elsewhere.
    """

    base: str
    shape: ArrayShape
    category: TypeCategory
    # Name of the growable wrapper used for bounded and unbounded arrays
    sequence_base: str = ""
    # Bound of string elements; 0 means unbounded. None for non-strings.
    string_bound: Optional[int] = None

    @property
    def element(self) -> str:
        """The Rust type of a single element."""
        if self.category is TypeCategory.STRING:
            return f"{self.base}<{self.string_bound}>"
        return self.base

    @property
    def is_sequence(self) -> bool:
        return self.shape.is_sequence

    def render(self) -> str:
        """Render the full Rust type expression used in generated code."""
        kind = self.shape.kind
        if kind is ArrayKind.SCALAR:
            return self.element
        if kind is ArrayKind.FIXED:
            return f"[{self.element}; {self.shape.size}]"
        if self.category is TypeCategory.STRING:
            return f"{self.sequence_base}<{self.string_bound}, {self.shape.capacity}>"
        return f"{self.sequence_base}<{self.shape.capacity}>"

    def __str__(self) -> str:
        return self.render()
