"""
Event command tree building.

This package provides the recursive-descent builder that turns a flat event
page into a command tree, and the diagnostics it collects along the way.
"""

from eventtree.parsing.builder import (
    BranchMatching,
    CommandStream,
    EventTreeBuilder,
    parse_command_under,
    parse_page,
    parse_pages,
)
from eventtree.parsing.diagnostics import Diagnostic, DiagnosticKind, ParseDiagnostics

__all__ = [
    "BranchMatching",
    "CommandStream",
    "EventTreeBuilder",
    "parse_command_under",
    "parse_page",
    "parse_pages",
    "Diagnostic",
    "DiagnosticKind",
    "ParseDiagnostics",
]
