"""
Core eventtree components.

This package provides the command value type, the node arena and the tree
wrapper shared by the descriptor database and the tree builder.
"""

from eventtree.core.arena import CommandArena, Node
from eventtree.core.command import Command
from eventtree.core.tree import CommandTree
from eventtree.core.types import MAX_CODE, Code, NodeId, ParameterValue, Shape

__all__ = [
    "Command",
    "CommandArena",
    "CommandTree",
    "Node",
    "Code",
    "NodeId",
    "ParameterValue",
    "Shape",
    "MAX_CODE",
]
