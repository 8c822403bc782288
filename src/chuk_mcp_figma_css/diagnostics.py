"""
Diagnostics - issues recorded during a resolution pass.

Data quality problems never abort a pass. They are recorded here with a
stable code and logged, so callers can audit the designer data:
- AMBIGUOUS_DEFAULT_MODE
- UNRESOLVED_TOKEN_ALIAS
- UNSUPPORTED_PROPERTY
- INVALID_AXIS_CONTEXT / EMPTY_MODE_COLLECTION (caller errors, contained
  to one node or collection)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class DiagnosticSeverity(str, Enum):
    """Severity level for diagnostics."""

    ERROR = "error"  # A node or collection could not be resolved
    WARNING = "warning"  # Resolved with a fallback
    INFO = "info"  # Informational only


class DiagnosticCode:
    """Stable diagnostic codes."""

    INVALID_AXIS_CONTEXT = "INVALID_AXIS_CONTEXT"
    EMPTY_MODE_COLLECTION = "EMPTY_MODE_COLLECTION"
    AMBIGUOUS_DEFAULT_MODE = "AMBIGUOUS_DEFAULT_MODE"
    UNRESOLVED_TOKEN_ALIAS = "UNRESOLVED_TOKEN_ALIAS"
    UNSUPPORTED_PROPERTY = "UNSUPPORTED_PROPERTY"
    ROOT_SIZING_IGNORED = "ROOT_SIZING_IGNORED"
    HUG_CONSTRAINT_DROPPED = "HUG_CONSTRAINT_DROPPED"
    MISSING_THRESHOLD = "MISSING_THRESHOLD"
    UNKNOWN_TOKEN_BINDING = "UNKNOWN_TOKEN_BINDING"


_LOG_LEVELS = {
    DiagnosticSeverity.ERROR: logging.ERROR,
    DiagnosticSeverity.WARNING: logging.WARNING,
    DiagnosticSeverity.INFO: logging.DEBUG,
}


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic."""

    severity: DiagnosticSeverity
    code: str
    message: str
    location: str | None = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        location = f" at {self.location}" if self.location else ""
        return f"{prefix} {self.code}: {self.message}{location}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "location": self.location,
        }


class Diagnostics:
    """
    Diagnostics collected during one resolution pass.

    Each pass owns its own instance; nothing here is shared between runs.
    Repeated identical diagnostics are recorded once.
    """

    def __init__(self) -> None:
        self.issues: list[Diagnostic] = []
        self._seen: set[Diagnostic] = set()

    def add(
        self,
        severity: DiagnosticSeverity,
        code: str,
        message: str,
        location: str | None = None,
    ) -> None:
        """Record and log a diagnostic."""
        issue = Diagnostic(severity, code, message, location)
        if issue in self._seen:
            return
        self._seen.add(issue)
        self.issues.append(issue)
        logger.log(_LOG_LEVELS[severity], "%s", issue)

    def add_error(self, code: str, message: str, location: str | None = None) -> None:
        """Add an error issue."""
        self.add(DiagnosticSeverity.ERROR, code, message, location)

    def add_warning(self, code: str, message: str, location: str | None = None) -> None:
        """Add a warning issue."""
        self.add(DiagnosticSeverity.WARNING, code, message, location)

    def add_info(self, code: str, message: str, location: str | None = None) -> None:
        """Add an info issue."""
        self.add(DiagnosticSeverity.INFO, code, message, location)

    def extend(self, other: Diagnostics) -> None:
        for issue in other.issues:
            self.add(issue.severity, issue.code, issue.message, issue.location)

    @property
    def errors(self) -> list[Diagnostic]:
        """Get all error issues."""
        return [i for i in self.issues if i.severity == DiagnosticSeverity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        """Get all warning issues."""
        return [i for i in self.issues if i.severity == DiagnosticSeverity.WARNING]

    def codes(self) -> list[str]:
        return [i.code for i in self.issues]

    def has(self, code: str) -> bool:
        return any(i.code == code for i in self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def __bool__(self) -> bool:
        """True when nothing went wrong (no errors)."""
        return not self.errors

    def __str__(self) -> str:
        if not self.issues:
            return "No diagnostics"
        return "\n".join(str(issue) for issue in self.issues)
