"""
Core type definitions for eventtree.

This module contains the fundamental type aliases shared by the command model,
the descriptor schema and the tree builder.
"""

from typing import Any

# Numeric command code, stored as an unsigned 16 bit value by the engine
Code = int

MAX_CODE = 0xFFFF

# Parameters arrive already deserialized; move commands and other RGSS objects
# are passed through untouched
ParameterValue = str | int | float | bool | list | dict | None | Any

# Opaque handle into a CommandArena
NodeId = int

# Structural outline of a tree: (code, children)
Shape = tuple[int, tuple["Shape", ...]]
