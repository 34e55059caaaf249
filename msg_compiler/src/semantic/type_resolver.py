"""Resolution of IDL type annotations onto safe_drive Rust types."""

from __future__ import annotations

import logging
from typing import Optional, Set

from msg_compiler.src.ast.types import (
    ArrayKind,
    NamedType,
    PrimitiveType,
    ScopedType,
    StringType,
    TypeAnnotation,
)
from msg_compiler.src.common.constants import (
    BUILTIN_INTERFACES_SCOPE,
    BUILTIN_INTERFACES_TYPES,
    MSG_CATEGORY,
    PRIMITIVE_ALIASES,
    PRIMITIVE_SEQUENCES,
    PRIMITIVE_TYPES,
    SRV_CATEGORY,
    STRING_CONSTANT_TYPE,
    STRING_SEQUENCE_TYPE,
    STRING_TYPE,
    UNSUPPORTED_BUILTINS,
)
from msg_compiler.src.common.diagnostics import ProgramDiagnostics
from .exceptions import TypeResolutionError
from .type_system import ResolvedType, TypeCategory

logger = logging.getLogger(__name__)

# Path from a generated file to the msg module of its own package
_LOCAL_MSG_PATHS = {
    MSG_CATEGORY: "super",
    SRV_CATEGORY: "super::super::msg",
}


class TypeResolver:
    """Maps type annotations of one source file onto Rust types.

    A resolver is created per file. ``dependencies`` collects the external
    packages referenced by the file and is read by the caller once the file
    has been emitted.
    """

    def __init__(
        self,
        package: str,
        category: str = MSG_CATEGORY,
        diagnostics: Optional[ProgramDiagnostics] = None,
    ) -> None:
        if category not in _LOCAL_MSG_PATHS:
            raise ValueError(f"Unknown record category: {category!r}")
        self.package = package
        self.category = category
        self.diagnostics = diagnostics or ProgramDiagnostics()
        self.dependencies: Set[str] = set()

    def resolve(self, annotation: TypeAnnotation) -> ResolvedType:
        """Resolve the type of a field.

        Raises:
            TypeResolutionError: If the annotation has no Rust mapping
        """
        if isinstance(annotation, StringType):
            return ResolvedType(
                base=STRING_TYPE,
                shape=annotation.shape,
                category=TypeCategory.STRING,
                sequence_base=STRING_SEQUENCE_TYPE,
                string_bound=annotation.bound,
            )

        if isinstance(annotation, PrimitiveType):
            return self._primitive(annotation.name, annotation)

        if isinstance(annotation, NamedType):
            if annotation.name in PRIMITIVE_ALIASES:
                return self._primitive(PRIMITIVE_ALIASES[annotation.name], annotation)
            if annotation.name in UNSUPPORTED_BUILTINS:
                raise TypeResolutionError(
                    f"Type '{annotation.name}' is not supported", annotation
                )
            return self._record(self._local_path(annotation.name), annotation)

        if isinstance(annotation, ScopedType):
            return self._record(self._scoped_path(annotation), annotation)

        raise TypeResolutionError(
            f"Cannot resolve type annotation {type(annotation).__name__}", annotation
        )

    def resolve_constant(self, annotation: TypeAnnotation) -> ResolvedType:
        """Resolve the type of a constant.

        String constants become borrowed byte views. Only scalars and fixed
        arrays of primitives or strings can be constants.
        """
        if annotation.shape.is_sequence:
            raise TypeResolutionError(
                "Constants cannot have a sequence type", annotation
            )

        if isinstance(annotation, StringType):
            if annotation.shape.kind is not ArrayKind.SCALAR:
                raise TypeResolutionError(
                    "String constants cannot be arrays", annotation
                )
            return ResolvedType(
                base=STRING_CONSTANT_TYPE,
                shape=annotation.shape,
                category=TypeCategory.STRING_CONSTANT,
            )

        resolved = self.resolve(annotation)
        if resolved.category is not TypeCategory.PRIMITIVE:
            raise TypeResolutionError(
                f"Constants of type '{resolved.base}' are not supported", annotation
            )
        return resolved

    def _primitive(self, name: str, node: TypeAnnotation) -> ResolvedType:
        rust_type = PRIMITIVE_TYPES[name]
        return ResolvedType(
            base=rust_type,
            shape=node.shape,
            category=TypeCategory.PRIMITIVE,
            sequence_base=PRIMITIVE_SEQUENCES[rust_type],
        )

    def _record(self, path: str, node: TypeAnnotation) -> ResolvedType:
        return ResolvedType(
            base=path,
            shape=node.shape,
            category=TypeCategory.RECORD,
            sequence_base=f"{path}Seq",
        )

    def _local_path(self, name: str) -> str:
        return f"{_LOCAL_MSG_PATHS[self.category]}::{name}"

    def _scoped_path(self, annotation: ScopedType) -> str:
        scope, name = annotation.scope, annotation.name

        if scope == BUILTIN_INTERFACES_SCOPE:
            if name not in BUILTIN_INTERFACES_TYPES:
                raise TypeResolutionError(
                    f"'{scope}/{name}' is not supported; only "
                    f"{', '.join(sorted(BUILTIN_INTERFACES_TYPES))} are",
                    annotation,
                )
            path = BUILTIN_INTERFACES_TYPES[name]
            self.diagnostics.warning(
                f"{scope}/{name} is replaced by {path}, "
                f"which cannot represent times after the year 2038",
                stage="semantic",
                node=annotation,
            )
            return path

        if scope == self.package:
            return self._local_path(name)

        if scope not in self.dependencies:
            logger.debug("%s depends on %s", self.package, scope)
        self.dependencies.add(scope)
        return f"{scope}::msg::{name}"
