"""
eventtree - Rebuild the command tree of RPG Maker event pages

eventtree reads the flat command list of an event page and restores its
branches, loops, multi-line text and move routes using a data-driven command
descriptor database.
"""

from importlib.metadata import version

from eventtree.config import ParserConfig
from eventtree.core import Command, CommandArena, CommandTree
from eventtree.descriptors import CommandDatabase, CommandDescriptor, EngineVersion
from eventtree.parsing import (
    BranchMatching,
    EventTreeBuilder,
    ParseDiagnostics,
    parse_command_under,
    parse_page,
    parse_pages,
)

__version__ = version("eventtree")

__all__ = [
    "__version__",
    "Command",
    "CommandArena",
    "CommandTree",
    "CommandDatabase",
    "CommandDescriptor",
    "EngineVersion",
    "ParserConfig",
    "BranchMatching",
    "EventTreeBuilder",
    "ParseDiagnostics",
    "parse_command_under",
    "parse_page",
    "parse_pages",
]
