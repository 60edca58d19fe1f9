"""
Load-time error reporting.

Loading authored content never aborts on the first problem. Each problem
is recorded as a LoadDiagnostic and the load fails once, at the end, with
an ArticyLoadError carrying all of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class LoadDiagnostic:
    """One problem found in an export document."""
    message: str
    node_id: Optional[str] = None
    technical_name: Optional[str] = None
    text: Optional[str] = None

    def __str__(self) -> str:
        where = []
        if self.technical_name:
            where.append(f"dialogue {self.technical_name}")
        if self.node_id:
            where.append(f"node {self.node_id}")
        prefix = f"[{', '.join(where)}] " if where else ""
        suffix = f": {self.text!r}" if self.text is not None else ""
        return f"{prefix}{self.message}{suffix}"


class ArticyLoadError(Exception):
    """Raised when an export document cannot be turned into dialogue."""

    def __init__(self, diagnostics: list[LoadDiagnostic]):
        self.diagnostics = list(diagnostics)
        lines = [f"{len(self.diagnostics)} problem(s) in articy export:"]
        lines.extend(f"  {d}" for d in self.diagnostics)
        super().__init__("\n".join(lines))


@dataclass
class DiagnosticCollector:
    """Accumulates diagnostics while a load is in progress."""
    diagnostics: list[LoadDiagnostic] = field(default_factory=list)

    def add(
        self,
        message: str,
        node_id: Optional[str] = None,
        technical_name: Optional[str] = None,
        text: Optional[str] = None,
    ) -> None:
        self.diagnostics.append(LoadDiagnostic(message, node_id, technical_name, text))

    def __bool__(self) -> bool:
        return bool(self.diagnostics)

    def raise_if_any(self) -> None:
        if self.diagnostics:
            raise ArticyLoadError(self.diagnostics)
