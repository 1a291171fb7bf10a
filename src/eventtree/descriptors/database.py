"""
Command descriptor database.

Resolves command codes to descriptors by checking a project's user-defined
commands first and falling back to the defaults bundled for the target
engine version.
"""

import logging
from collections.abc import Iterator, Mapping
from enum import Enum
from importlib.resources import as_file, files
from itertools import chain
from typing import TYPE_CHECKING, Any

from eventtree.core.types import Code
from eventtree.descriptors.schema import (
    CommandDescriptor,
    CommandSet,
    load_command_set,
    load_command_set_yaml,
)
from eventtree.exceptions import DefaultsUnavailableError

if TYPE_CHECKING:
    from eventtree.config import ParserConfig

logger = logging.getLogger(__name__)


class EngineVersion(Enum):
    """RPG Maker engine generation a project targets."""

    XP = "XP"
    VX = "VX"
    ACE = "Ace"


# Bundled default tables; VX and Ace are not populated yet
_DEFAULT_ASSETS = {
    EngineVersion.XP: "xp.yaml",
}

_default_sets: dict[EngineVersion, CommandSet] = {}


def default_command_set(version: EngineVersion) -> CommandSet:
    """
    Return the bundled default descriptors for an engine version.

    The asset is read once per process; callers get a deep copy so edits
    through one database never show up in another.

    Params:
        version: Target engine version

    Returns:
        Fresh mapping of code to CommandDescriptor

    Raises:
        DefaultsUnavailableError: If no defaults are bundled for `version`
        DescriptorLoadError: If the bundled asset is invalid
    """
    if version not in _DEFAULT_ASSETS:
        raise DefaultsUnavailableError(version.value)

    if version not in _default_sets:
        resource = files("eventtree.descriptors") / "assets" / _DEFAULT_ASSETS[version]
        with as_file(resource) as path:
            _default_sets[version] = load_command_set_yaml(path)
        logger.debug(
            "Loaded %d default command descriptors for %s",
            len(_default_sets[version]),
            version.value,
        )

    return {
        code: descriptor.model_copy(deep=True)
        for code, descriptor in _default_sets[version].items()
    }


class CommandDatabase:
    """Lookup table from command code to descriptor.

    Two sets are kept side by side: `default`, the stock descriptors of the
    engine version, and `user`, project-defined commands that shadow the
    defaults code by code. The default set is never rewritten by overrides.

    `len()` adds the sizes of both sets, so a user command that shadows a
    default one is counted twice; use `distinct_len()` for the number of
    resolvable codes.
    """

    def __init__(
        self,
        version: EngineVersion = EngineVersion.XP,
        user: Mapping[Code, CommandDescriptor] | None = None,
        default: Mapping[Code, CommandDescriptor] | None = None,
    ):
        """
        Params:
            version: Engine version selecting the bundled defaults
            user: Project-defined descriptors checked before the defaults
            default: Explicit default set replacing the bundled one

        Raises:
            DefaultsUnavailableError: If `default` is omitted and `version` has no bundled set
        """
        self.version = version
        self._default: CommandSet = (
            dict(default) if default is not None else default_command_set(version)
        )
        self.user: CommandSet = dict(user) if user else {}

    @classmethod
    def from_config(cls, config: "ParserConfig") -> "CommandDatabase":
        """Build a database for the configured engine version and user command file."""
        database = cls(config.engine_version)
        if config.user_commands is not None:
            database.user.update(load_command_set_yaml(config.user_commands))
            logger.debug(
                "Loaded %d user command descriptors from %s",
                len(database.user),
                config.user_commands,
            )
        return database

    @property
    def default(self) -> CommandSet:
        return self._default

    def add_user_commands(self, data: Mapping[Any, Any], source: str = "<dict>") -> None:
        """
        Validate and register user descriptors, replacing existing user entries.

        Raises:
            DescriptorLoadError: If `data` fails validation
        """
        self.user.update(load_command_set(data, source))

    def get(self, code: Code) -> CommandDescriptor | None:
        """Resolve `code`, preferring the user set."""
        descriptor = self.user.get(code)
        if descriptor is None:
            descriptor = self._default.get(code)
        return descriptor

    def get_mut(self, code: Code) -> CommandDescriptor | None:
        """Resolve `code` to the stored descriptor for in-place editing."""
        if code in self.user:
            return self.user[code]
        return self._default.get(code)

    def iter(self) -> Iterator[tuple[Code, CommandDescriptor]]:
        """Iterate `(code, descriptor)` over the user set, then the default set."""
        return chain(self.user.items(), self._default.items())

    def iter_mut(self) -> Iterator[tuple[Code, CommandDescriptor]]:
        """Same chain as `iter()`; the yielded descriptors are the stored objects."""
        return self.iter()

    def __iter__(self) -> Iterator[tuple[Code, CommandDescriptor]]:
        return self.iter()

    def __contains__(self, code: object) -> bool:
        return code in self.user or code in self._default

    def __len__(self) -> int:
        return len(self._default) + len(self.user)

    def distinct_len(self) -> int:
        return len(self._default.keys() | self.user.keys())

    def is_empty(self) -> bool:
        return len(self) == 0
