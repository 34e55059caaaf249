"""AST node definitions for ROS 2 interface files."""

from .base import ASTNode, ASTVisitor, ast_to_dict
from .types import (
    ArrayKind,
    ArrayShape,
    TypeAnnotation,
    PrimitiveType,
    NamedType,
    ScopedType,
    StringType,
)
from .literals import (
    Literal,
    BoolLiteral,
    IntLiteral,
    UIntLiteral,
    FloatLiteral,
    StringLiteral,
    ArrayLiteral,
)
from .declarations import Declaration, FieldDecl, ConstantDecl, ServiceDecl

__all__ = [
    # Base classes
    "ASTNode",
    "ASTVisitor",
    "ast_to_dict",
    # Types
    "ArrayKind",
    "ArrayShape",
    "TypeAnnotation",
    "PrimitiveType",
    "NamedType",
    "ScopedType",
    "StringType",
    # Literals
    "Literal",
    "BoolLiteral",
    "IntLiteral",
    "UIntLiteral",
    "FloatLiteral",
    "StringLiteral",
    "ArrayLiteral",
    # Declarations
    "Declaration",
    "FieldDecl",
    "ConstantDecl",
    "ServiceDecl",
]
