"""Project generation: discovery, parallel compilation and module indexes."""

from .discovery import SourceFile, discover_sources
from .generator import FileOutcome, ProjectResult, compile_file, generate_project
from .module_index import ModuleIndex

__all__ = [
    "SourceFile",
    "discover_sources",
    "FileOutcome",
    "ProjectResult",
    "compile_file",
    "generate_project",
    "ModuleIndex",
]
