"""
Command descriptor schema and database.

This package provides the data-driven grammar used by the tree builder: the
descriptor models and the database merging bundled defaults with project
overrides.
"""

from eventtree.descriptors.database import (
    CommandDatabase,
    EngineVersion,
    default_command_set,
)
from eventtree.descriptors.schema import (
    BlankKind,
    BoolKind,
    Branch,
    BranchKind,
    CommandDescriptor,
    CommandKind,
    CommandSet,
    Condition,
    ConditionKind,
    EnumKind,
    IntBoolKind,
    IntKind,
    Label,
    MoveRouteKind,
    MultiKind,
    Parameter,
    ParameterField,
    ParameterKind,
    RegularKind,
    SelectorKind,
    SelfSwitchKind,
    SwitchKind,
    Terminator,
    VariableKind,
    load_command_set,
    load_command_set_yaml,
)

__all__ = [
    "CommandDatabase",
    "EngineVersion",
    "default_command_set",
    "CommandDescriptor",
    "CommandKind",
    "CommandSet",
    "BranchKind",
    "MultiKind",
    "RegularKind",
    "MoveRouteKind",
    "BlankKind",
    "Branch",
    "Condition",
    "ConditionKind",
    "Terminator",
    "Parameter",
    "ParameterField",
    "Label",
    "ParameterKind",
    "SwitchKind",
    "VariableKind",
    "EnumKind",
    "SelectorKind",
    "SelfSwitchKind",
    "IntBoolKind",
    "BoolKind",
    "IntKind",
    "load_command_set",
    "load_command_set_yaml",
]
