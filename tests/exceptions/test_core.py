"""
Tests for eventtree exception classes and their messages.
"""

from eventtree.exceptions import (
    ConfigurationError,
    DefaultsUnavailableError,
    DescriptorLoadError,
    EventTreeError,
    NestingTooDeepError,
    NodeNotFoundError,
    UnterminatedBranchError,
)


class TestExceptionMessages:
    """Tests for exception context attributes and messages."""

    def test_unterminated_branch(self):
        """The opening code and position are kept and reported."""
        error = UnterminatedBranchError(opened_at=111, position=4, terminator=412)

        assert error.opened_at == 111
        assert error.position == 4
        assert error.terminator == 412
        assert "command 111 at position 4" in str(error)
        assert "412" in str(error)

    def test_nesting_too_deep(self):
        """The position reached when the stack ran out is reported."""
        error = NestingTooDeepError(position=512)

        assert error.position == 512
        assert "position 512" in str(error)

    def test_descriptor_load_without_code(self):
        """Load errors without a code name only the source."""
        error = DescriptorLoadError("user.yaml", "expected a mapping")

        assert str(error) == "Cannot load command descriptors from user.yaml: expected a mapping"
        assert error.code is None

    def test_defaults_unavailable(self):
        """The engine version is named."""
        assert "VX" in str(DefaultsUnavailableError("VX"))

    def test_configuration_error(self):
        """Configuration errors name their source."""
        error = ConfigurationError("eventtree.yaml", "bad value")

        assert error.source == "eventtree.yaml"
        assert "eventtree.yaml" in str(error)


class TestHierarchy:
    """Tests for the exception hierarchy."""

    def test_all_derive_from_base(self):
        """Every error can be caught as EventTreeError."""
        for error in (
            UnterminatedBranchError(1, 0, 2),
            NestingTooDeepError(0),
            NodeNotFoundError(1),
            DescriptorLoadError("x", "y"),
            DefaultsUnavailableError("VX"),
            ConfigurationError("x", "y"),
        ):
            assert isinstance(error, EventTreeError)

    def test_node_not_found_is_key_error(self):
        """Arena lookups fail like mapping lookups."""
        assert isinstance(NodeNotFoundError(1), KeyError)
