"""
Parser configuration for eventtree.

This module provides the settings that select the engine version, the branch
matching mode and an optional file of project-defined command descriptors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from eventtree.descriptors.database import EngineVersion
from eventtree.exceptions import ConfigurationError
from eventtree.parsing.builder import BranchMatching


class ParserConfig(BaseModel):
    """Settings for building command trees.

    Can be created from dict or YAML with partial overrides.
    Only specified values override defaults.

    Examples:
        # All defaults (XP, code-only branch matching)
        config = ParserConfig()

        # From YAML file
        config = ParserConfig.from_yaml("eventtree.yaml")
    """

    engine_version: EngineVersion = EngineVersion.XP
    branch_matching: BranchMatching = BranchMatching.CODE
    # YAML file of user command descriptors shadowing the defaults
    user_commands: Path | None = None
    # Log a warning for every command code missing from the database
    log_unknown_codes: bool = True

    @classmethod
    def from_dict(cls, config: dict[str, Any], source: str = "<dict>") -> ParserConfig:
        """Create from dict, only overriding specified values.

        Args:
            config: Dictionary with partial overrides. Keys that are not
                   configuration fields are ignored.
            source: Name of the origin, used in error messages

        Returns:
            ParserConfig instance with specified overrides

        Raises:
            ConfigurationError: If a value fails validation
        """
        filtered = {k: v for k, v in config.items() if k in cls.model_fields}
        try:
            return cls.model_validate(filtered)
        except ValidationError as e:
            raise ConfigurationError(source, str(e)) from e

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> ParserConfig:
        """Create from YAML file with partial overrides.

        A relative `user_commands` path is resolved against the directory of
        the YAML file.

        Args:
            yaml_path: Path to YAML file containing configuration

        Returns:
            ParserConfig instance with YAML overrides

        Example YAML:
            engine_version: XP
            branch_matching: parameter
            user_commands: commands.yaml
        """
        path = Path(yaml_path)
        with path.open(encoding="utf-8") as f:
            try:
                config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(str(path), f"invalid YAML: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(str(path), "expected a mapping at the top level")

        user_commands = config.get("user_commands")
        if user_commands is not None and not Path(user_commands).is_absolute():
            config["user_commands"] = path.parent / user_commands

        return cls.from_dict(config, str(path))
