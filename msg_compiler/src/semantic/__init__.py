"""Semantic analysis: resolution of IDL types onto Rust types."""

from .exceptions import TypeResolutionError
from .type_resolver import TypeResolver
from .type_system import ResolvedType, TypeCategory

__all__ = [
    "TypeResolutionError",
    "TypeResolver",
    "ResolvedType",
    "TypeCategory",
]
