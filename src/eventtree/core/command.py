"""
Event command value type.

A command is the unit stored in an event page: a numeric code selecting what
the command does and an ordered list of already deserialized parameters.
"""

from typing import ClassVar

from attrs import evolve, field, frozen

from eventtree.core.types import MAX_CODE, Code, ParameterValue


def _validate_code(instance, attribute, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"Command code must be an int, got {type(value).__name__}")
    if not 0 <= value <= MAX_CODE:
        raise ValueError(f"Command code {value} is outside 0..{MAX_CODE}")


@frozen
class Command:
    """A single event command.

    Code 0 is reserved: it pads the end of every indentation block in a page
    and never carries meaning of its own.

    Params:
        code: Command code looked up in the descriptor database
        parameters: Positional parameters in storage order
        indent: Indentation level recorded by the engine, carried through as-is
    """

    BLANK_CODE: ClassVar[int] = 0

    code: Code = field(default=0, validator=_validate_code)
    parameters: tuple[ParameterValue, ...] = field(default=(), converter=tuple)
    indent: int = 0

    @classmethod
    def sentinel(cls) -> "Command":
        """Default command anchoring the root of every tree."""
        return cls()

    @property
    def is_sentinel(self) -> bool:
        return self.code == self.BLANK_CODE

    def parameter(self, index: int, default: ParameterValue = None) -> ParameterValue:
        """Return the parameter at `index`, or `default` when it is missing."""
        if 0 <= index < len(self.parameters):
            return self.parameters[index]
        return default

    def with_parameters(self, *parameters: ParameterValue) -> "Command":
        """Return a copy of this command with its parameters replaced."""
        return evolve(self, parameters=parameters)

    def with_parameter(self, index: int, value: ParameterValue) -> "Command":
        """Return a copy of this command with one parameter replaced.

        Raises:
            IndexError: If the command has no parameter at `index`
        """
        parameters = list(self.parameters)
        parameters[index] = value
        return evolve(self, parameters=parameters)
