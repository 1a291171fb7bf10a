"""
Command descriptor schema.

Descriptors tell the tree builder what a command code means: whether it opens
a branch scope, continues a multi-line payload, drags move route entries
behind it, or is a plain leaf. They are plain data, validated with pydantic so
that bundled assets and user override files go through the same checks.

Example YAML record:

    111:
      name: Conditional Branch
      kind:
        type: Branch
        parameters: []
        branches:
          - name: Else
            code: 411
            condition: {parameter: 0}
        terminator: {code: 412, name: Branch End}
        command_contains_branch: true
"""

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from eventtree.core.command import Command
from eventtree.core.types import MAX_CODE, Code
from eventtree.exceptions import DescriptorLoadError

CodeField = Annotated[int, Field(ge=0, le=MAX_CODE)]


class SchemaModel(BaseModel):
    """Base for descriptor models; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


class ConditionKind(Enum):
    """How a branch condition reads its parameter."""

    IS_TRUE = "IsTrue"


class Condition(SchemaModel):
    """Condition on the opening command under which a branch arm is offered."""

    parameter: Annotated[int, Field(ge=0)]
    kind: ConditionKind = ConditionKind.IS_TRUE

    def evaluate(self, command: Command) -> bool:
        """Evaluate the condition against the command that opened the scope.

        IsTrue is the only kind; a missing parameter counts as false.
        """
        return bool(command.parameter(self.parameter, False))


class Terminator(SchemaModel):
    """Command that closes a branch scope."""

    code: CodeField
    name: str


class Branch(SchemaModel):
    """Delimiter starting a new arm inside a branch scope (e.g. "Else").

    Several arms may share a code and differ by one parameter, such as the
    "When [choice]" arms of Show Choices; `duplicate_parameter` names that
    parameter.
    """

    name: str
    code: CodeField
    condition: Condition
    duplicate_parameter: int | None = Field(default=None, ge=0)

    def matches(self, command: Command, by_parameter: bool = False) -> bool:
        """Check whether `command` is a delimiter for this arm.

        Params:
            command: Candidate command pulled from the stream
            by_parameter: Also require the disambiguating parameter to be present. Its
                value is not compared; see `arm_key` for arm identity.

        Returns:
            True when the command starts a new arm of this kind
        """
        if command.code != self.code:
            return False
        if by_parameter and self.duplicate_parameter is not None:
            return self.duplicate_parameter < len(command.parameters)
        return True

    def arm_key(self, command: Command) -> tuple:
        """Identity of the arm started by `command`."""
        if self.duplicate_parameter is None:
            return (self.code,)
        return (self.code, command.parameter(self.duplicate_parameter))


# Parameter kinds, used by editors to present a command; the tree builder only
# relies on parameter positions.


class SwitchKind(SchemaModel):
    type: Literal["Switch"] = "Switch"


class VariableKind(SchemaModel):
    type: Literal["Variable"] = "Variable"


class EnumKind(SchemaModel):
    """List of names; stored as the index of the selected name."""

    type: Literal["Enum"] = "Enum"
    values: list[str]


class SelectorKind(SchemaModel):
    """Choice between several parameter layouts (Conditional Branch conditions)."""

    type: Literal["Selector"] = "Selector"
    options: list[list["Parameter"]]


class SelfSwitchKind(SchemaModel):
    type: Literal["SelfSwitch"] = "SelfSwitch"


class IntBoolKind(SchemaModel):
    type: Literal["IntBool"] = "IntBool"


class BoolKind(SchemaModel):
    type: Literal["Bool"] = "Bool"


class IntKind(SchemaModel):
    type: Literal["Int"] = "Int"


ParameterKind = Annotated[
    Union[
        SwitchKind,
        VariableKind,
        EnumKind,
        SelectorKind,
        SelfSwitchKind,
        IntBoolKind,
        BoolKind,
        IntKind,
    ],
    Field(discriminator="type"),
]


class ParameterField(SchemaModel):
    """Editable positional parameter."""

    type: Literal["Parameter"] = "Parameter"
    index: Annotated[int, Field(ge=0)]
    name: str
    kind: ParameterKind


class Label(SchemaModel):
    """Display-only text between parameters."""

    type: Literal["Label"] = "Label"
    text: str


Parameter = Annotated[Union[ParameterField, Label], Field(discriminator="type")]

SelectorKind.model_rebuild()
ParameterField.model_rebuild()


class BranchKind(SchemaModel):
    """Opens a nested scope closed by `terminator`."""

    type: Literal["Branch"] = "Branch"
    parameters: list[Parameter] = Field(default_factory=list)
    branches: list[Branch] = Field(default_factory=list)
    terminator: Terminator
    # True for commands like Conditional Branch whose first arm holds commands
    # directly, False for Show Choices where commands only live inside arms
    command_contains_branch: bool = True

    def find_branch(self, command: Command, by_parameter: bool = False) -> Branch | None:
        """Return the arm delimiter matching `command`, if any."""
        for branch in self.branches:
            if branch.matches(command, by_parameter):
                return branch
        return None


class MultiKind(SchemaModel):
    """First string parameter continues over following `continuation` commands."""

    type: Literal["Multi"] = "Multi"
    continuation: CodeField


class RegularKind(SchemaModel):
    type: Literal["Regular"] = "Regular"
    parameters: list[Parameter] = Field(default_factory=list)


class MoveRouteKind(SchemaModel):
    """Followed by one `continuation` command per move route entry, for display."""

    type: Literal["MoveRoute"] = "MoveRoute"
    continuation: CodeField


class BlankKind(SchemaModel):
    """Marker command without parameters."""

    type: Literal["Blank"] = "Blank"


CommandKind = Annotated[
    Union[BranchKind, MultiKind, RegularKind, MoveRouteKind, BlankKind],
    Field(discriminator="type"),
]


class CommandDescriptor(SchemaModel):
    """What a command code means."""

    name: str
    kind: CommandKind


CommandSet = dict[Code, CommandDescriptor]


def load_command_set(data: Mapping[Any, Any] | None, source: str = "<dict>") -> CommandSet:
    """
    Validate a mapping of command code to descriptor data.

    Params:
        data: Mapping as read from YAML; keys are codes (int or numeric str)
        source: Name of the origin, used in error messages

    Returns:
        Mapping of code to validated CommandDescriptor

    Raises:
        DescriptorLoadError: If a key is not a valid code or a descriptor fails validation
    """
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise DescriptorLoadError(source, f"expected a mapping, got {type(data).__name__}")

    commands: CommandSet = {}
    for key, raw in data.items():
        try:
            code = int(key)
        except (TypeError, ValueError):
            raise DescriptorLoadError(source, f"invalid command code {key!r}") from None
        if not 0 <= code <= MAX_CODE:
            raise DescriptorLoadError(source, "command code out of range", code)
        if code in commands:
            raise DescriptorLoadError(source, "command code defined twice", code)

        try:
            commands[code] = CommandDescriptor.model_validate(raw)
        except ValidationError as e:
            raise DescriptorLoadError(source, str(e), code) from e
    return commands


def load_command_set_yaml(yaml_path: str | Path) -> CommandSet:
    """
    Load descriptors from a YAML file mapping codes to descriptor records.

    Params:
        yaml_path: Path to the YAML file

    Returns:
        Mapping of code to validated CommandDescriptor

    Raises:
        DescriptorLoadError: If the file is not valid YAML or fails validation
    """
    path = Path(yaml_path)
    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DescriptorLoadError(str(path), f"invalid YAML: {e}") from e

    return load_command_set(data, str(path))
