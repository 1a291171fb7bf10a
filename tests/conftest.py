"""
Shared test fixtures and utilities for the eventtree test suite.
"""

import pytest

from eventtree.descriptors import CommandDatabase, EngineVersion, load_command_set
from tests.grammar import TEST_COMMANDS


@pytest.fixture
def database():
    """Database holding only the small test grammar.

    Usage:
        def test_something(database):
            tree = parse_page([cmd(LEAF)], database)
    """
    return CommandDatabase(
        EngineVersion.XP, default=load_command_set(TEST_COMMANDS, "<tests>")
    )


@pytest.fixture
def xp_database():
    """Database with the bundled RPG Maker XP defaults."""
    return CommandDatabase(EngineVersion.XP)
