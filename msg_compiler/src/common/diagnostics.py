import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

"""Unified diagnostic collection for the entire compiler pipeline."""

logger = logging.getLogger(__name__)


class DiagnosticSeverity(Enum):
    """Severity levels for compiler diagnostics."""

    DEBUG = "debug"  # Internal compiler information
    INFO = "info"  # Informational messages for users
    WARNING = "warning"  # Issues that don't prevent compilation
    ERROR = "error"  # Issues that prevent successful compilation


SEVERITY_ORDER = [
    DiagnosticSeverity.DEBUG,
    DiagnosticSeverity.INFO,
    DiagnosticSeverity.WARNING,
    DiagnosticSeverity.ERROR,
]

_LOG_LEVELS = {
    DiagnosticSeverity.DEBUG: logging.DEBUG,
    DiagnosticSeverity.INFO: logging.INFO,
    DiagnosticSeverity.WARNING: logging.WARNING,
    DiagnosticSeverity.ERROR: logging.ERROR,
}


@dataclass
class Diagnostic:
    """A single diagnostic message with context."""

    severity: DiagnosticSeverity
    message: str
    stage: str  # parsing, semantic, emission, project
    line: int = 0
    column: int = 0
    source_file: Optional[str] = None


class ProgramDiagnostics:
    """Central diagnostic collection for one compilation.

    Diagnostics are recorded in order and mirrored to the ``logging`` module.
    Warnings never stop compilation; with ``raise_errors`` an error is raised
    as soon as it is recorded.

    Usage:
        diagnostics = ProgramDiagnostics()
        diagnostics.warning("Time is limited to 2038", stage="semantic", line=3)
        if diagnostics.has_errors():
            print(diagnostics.format_for_user())
    """

    def __init__(self, log_level: str = "warning", raise_errors: bool = False):
        self.diagnostics: List[Diagnostic] = []
        self.log_level = log_level.lower()
        self.raise_errors = raise_errors
        self._error_count = 0
        self._warning_count = 0
        self.default_stage = "unknown"

    @property
    def min_severity(self) -> DiagnosticSeverity:
        try:
            return DiagnosticSeverity(self.log_level)
        except ValueError:
            return DiagnosticSeverity.WARNING

    def debug(
        self,
        message: str,
        stage: str | None = None,
        line: int = 0,
        column: int = 0,
        source_file: Optional[str] = None,
        node: Optional[Any] = None,
    ) -> None:
        """Add a debug message (kept only at debug log level)."""
        if self.min_severity is DiagnosticSeverity.DEBUG:
            self._add(
                DiagnosticSeverity.DEBUG, message, stage, line, column, source_file, node
            )

    def info(
        self,
        message: str,
        stage: str | None = None,
        line: int = 0,
        column: int = 0,
        source_file: Optional[str] = None,
        node: Optional[Any] = None,
    ) -> None:
        """Add an informational message (kept at info and debug log levels)."""
        if SEVERITY_ORDER.index(self.min_severity) <= SEVERITY_ORDER.index(
            DiagnosticSeverity.INFO
        ):
            self._add(
                DiagnosticSeverity.INFO, message, stage, line, column, source_file, node
            )

    def warning(
        self,
        message: str,
        stage: str | None = None,
        line: int = 0,
        column: int = 0,
        source_file: Optional[str] = None,
        node: Optional[Any] = None,
    ) -> None:
        """Add a warning (always kept, doesn't stop compilation)."""
        self._add(
            DiagnosticSeverity.WARNING, message, stage, line, column, source_file, node
        )
        self._warning_count += 1

    def error(
        self,
        message: str,
        stage: str | None = None,
        line: int = 0,
        column: int = 0,
        source_file: Optional[str] = None,
        node: Optional[Any] = None,
    ) -> None:
        """Add an error (always kept, stops compilation)."""
        diag = self._add(
            DiagnosticSeverity.ERROR, message, stage, line, column, source_file, node
        )
        self._error_count += 1
        if self.raise_errors:
            raise RuntimeError(self._format_diagnostic(diag))

    def _add(
        self,
        severity: DiagnosticSeverity,
        message: str,
        stage: str | None,
        line: int,
        column: int,
        source_file: Optional[str],
        node: Optional[Any],
    ) -> Diagnostic:
        """Internal method to add a diagnostic."""
        # Extract location from node if provided and location not specified
        if node is not None and line == 0:
            line = getattr(node, "line", 0)
            column = getattr(node, "column", 0)
            if source_file is None:
                source_file = getattr(node, "source_file", None)

        diag = Diagnostic(
            severity=severity,
            message=message,
            stage=stage or self.default_stage,
            line=line,
            column=column,
            source_file=source_file,
        )
        self.diagnostics.append(diag)
        logger.log(_LOG_LEVELS[severity], self._format_diagnostic(diag))
        return diag

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return self._error_count > 0

    def error_count(self) -> int:
        """Get the number of errors."""
        return self._error_count

    def warning_count(self) -> int:
        """Get the number of warnings."""
        return self._warning_count

    def warnings(self) -> List[str]:
        """Get the plain messages of all warnings, in order."""
        return [
            diag.message
            for diag in self.diagnostics
            if diag.severity is DiagnosticSeverity.WARNING
        ]

    def get_messages(
        self, min_severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    ) -> List[str]:
        """Get formatted messages at or above the specified severity level."""
        threshold = SEVERITY_ORDER.index(min_severity)
        return [
            self._format_diagnostic(diag)
            for diag in self.diagnostics
            if SEVERITY_ORDER.index(diag.severity) >= threshold
        ]

    def _format_diagnostic(self, diag: Diagnostic) -> str:
        """Format a single diagnostic for display."""
        # Format: SEVERITY [stage:file:line:col]: message
        location_parts = [diag.stage]
        if diag.source_file:
            location_parts.append(Path(diag.source_file).name)
        if diag.line > 0:
            location_parts.append(str(diag.line))
            if diag.column > 0:
                location_parts.append(str(diag.column))

        location = ":".join(location_parts)
        return f"{diag.severity.value.upper()} [{location}]: {diag.message}"

    def format_for_user(self) -> str:
        """Format all diagnostics for user-friendly output."""
        if not self.diagnostics:
            return "No diagnostics."

        messages = self.get_messages(self.min_severity)
        summary = f"\nCompilation summary: {self._error_count} error(s), {self._warning_count} warning(s)"
        return "\n".join(messages) + summary

    def merge(self, other: "ProgramDiagnostics") -> None:
        """Merge diagnostics from another collector."""
        self.diagnostics.extend(other.diagnostics)
        self._error_count += other._error_count
        self._warning_count += other._warning_count
