"""Rendering of constant values as Rust literals."""

from __future__ import annotations

from msg_compiler.src.ast.base import ASTNode
from msg_compiler.src.ast.literals import (
    ArrayLiteral,
    BoolLiteral,
    FloatLiteral,
    IntLiteral,
    Literal,
    StringLiteral,
    UIntLiteral,
)
from msg_compiler.src.ast.types import ArrayKind
from msg_compiler.src.common.constants import FLOAT_TYPES, INTEGER_RANGES
from msg_compiler.src.semantic.exceptions import TypeResolutionError
from msg_compiler.src.semantic.type_system import ResolvedType, TypeCategory

_BYTE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
}


def encode_byte_string(value: str) -> str:
    """Render text as a NUL-terminated Rust byte string literal.

    Only printable ASCII may appear verbatim in ``b"..."``; everything else is
    written as ``\\xNN`` escapes of its UTF-8 encoding.
    """
    parts = []
    for char in value:
        if char in _BYTE_ESCAPES:
            parts.append(_BYTE_ESCAPES[char])
        elif " " <= char <= "~":
            parts.append(char)
        else:
            parts.extend(f"\\x{byte:02x}" for byte in char.encode("utf-8"))
    return f'b"{"".join(parts)}\\0"'


def render_value(value: Literal, resolved: ResolvedType, node: ASTNode) -> str:
    """Render ``value`` as a literal of the constant type ``resolved``.

    Raises:
        TypeResolutionError: If the value does not fit the type
    """
    if resolved.shape.kind is ArrayKind.FIXED:
        if not isinstance(value, ArrayLiteral):
            raise TypeResolutionError(
                f"Constant of type {resolved.render()} needs an array value", node
            )
        if len(value.elements) != resolved.shape.size:
            raise TypeResolutionError(
                f"Constant of type {resolved.render()} needs {resolved.shape.size} "
                f"elements, got {len(value.elements)}",
                node,
            )
        elements = [_render_scalar(element, resolved, node) for element in value.elements]
        return f"[{', '.join(elements)}]"

    return _render_scalar(value, resolved, node)


def _render_scalar(value: Literal, resolved: ResolvedType, node: ASTNode) -> str:
    if resolved.category is TypeCategory.STRING_CONSTANT:
        if not isinstance(value, StringLiteral):
            raise TypeResolutionError("String constant needs a quoted value", node)
        return encode_byte_string(value.value)

    base = resolved.base
    if isinstance(value, (ArrayLiteral, StringLiteral)):
        raise TypeResolutionError(f"Constant of type {base} needs a scalar value", node)

    if base == "bool":
        if not isinstance(value, BoolLiteral):
            raise TypeResolutionError("Constant of type bool needs true or false", node)
        return "true" if value.value else "false"

    if isinstance(value, BoolLiteral):
        raise TypeResolutionError(f"Constant of type {base} cannot be a boolean", node)

    if base in FLOAT_TYPES:
        if isinstance(value, FloatLiteral):
            return value.raw_text or repr(value.value)
        return f"{value.value}.0"

    if base in INTEGER_RANGES:
        if not isinstance(value, (IntLiteral, UIntLiteral)):
            raise TypeResolutionError(
                f"Constant of type {base} needs an integer value", node
            )
        low, high = INTEGER_RANGES[base]
        if not low <= value.value <= high:
            raise TypeResolutionError(
                f"Value {value.value} is out of range for {base} ({low}..={high})",
                node,
            )
        return str(value.value)

    raise TypeResolutionError(f"Constants of type {base} are not supported", node)
