"""
eventtree exception classes.

This package provides all exception types used throughout eventtree for
consistent error handling and reporting.
"""

from eventtree.exceptions.core import (
    ConfigurationError,
    DefaultsUnavailableError,
    DescriptorLoadError,
    EventTreeError,
    NestingTooDeepError,
    NodeNotFoundError,
    UnterminatedBranchError,
)

__all__ = [
    "EventTreeError",
    "UnterminatedBranchError",
    "NestingTooDeepError",
    "NodeNotFoundError",
    "DescriptorLoadError",
    "DefaultsUnavailableError",
    "ConfigurationError",
]
