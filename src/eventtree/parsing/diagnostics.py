"""
Non-fatal issues found while building a command tree.

Unknown command codes and malformed multi-line payloads do not stop a page
from being parsed; they are collected here so tooling can flag them.
"""

import logging
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    """Kind of recoverable parse issue."""

    UNKNOWN_COMMAND_CODE = "unknown_command_code"
    MALFORMED_MULTI_PAYLOAD = "malformed_multi_payload"


@dataclass
class Diagnostic:
    """A single recoverable issue."""

    kind: DiagnosticKind
    code: int
    position: int
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] command {self.code} at position {self.position}: {self.message}"


@dataclass
class ParseDiagnostics:
    """Collector shared by every call of one page parse (or several, if reused)."""

    entries: list[Diagnostic] = field(default_factory=list)
    unknown_codes: Counter = field(default_factory=Counter)
    log_unknown_codes: bool = True

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def record(self, kind: DiagnosticKind, code: int, position: int, message: str) -> Diagnostic:
        """
        Store a diagnostic and log it.

        Params:
            kind: What went wrong
            code: Code of the command concerned
            position: Index of that command within the page
            message: Human readable detail

        Returns:
            The stored Diagnostic
        """
        diagnostic = Diagnostic(kind=kind, code=code, position=position, message=message)
        self.entries.append(diagnostic)

        if kind is DiagnosticKind.UNKNOWN_COMMAND_CODE:
            self.unknown_codes[code] += 1
            if not self.log_unknown_codes:
                return diagnostic
        logger.warning("%s", diagnostic)
        return diagnostic

    def count(self, kind: DiagnosticKind) -> int:
        return sum(1 for entry in self.entries if entry.kind is kind)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [entry for entry in self.entries if entry.kind is kind]
