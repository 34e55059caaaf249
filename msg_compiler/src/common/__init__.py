"""Common utilities shared across compiler stages."""

from .diagnostics import Diagnostic, DiagnosticSeverity, ProgramDiagnostics
from .source_location import SourceLocation
from .constants import *

__all__ = [
    "ProgramDiagnostics",
    "Diagnostic",
    "DiagnosticSeverity",
    "SourceLocation",
    # Constants
    "CompilerConfig",
    "DEFAULT_CONFIG",
    "MSG_CATEGORY",
    "SRV_CATEGORY",
    "PRIMITIVE_TYPES",
    "PRIMITIVE_SEQUENCES",
    "RESERVED_WORDS",
]
