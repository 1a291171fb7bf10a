"""
Exception classes for event command tree building.

This module defines specific exception types for the error conditions that can
occur while loading command descriptors, configuring the parser, and turning
a flat event page into a command tree.
"""


class EventTreeError(Exception):
    """Base exception for all eventtree errors."""

    pass


class UnterminatedBranchError(EventTreeError):
    """Raised when a page ends while a branch scope still awaits its terminator."""

    def __init__(self, opened_at: int, position: int, terminator: int):
        """
        Initialize the exception.

        Params:
            opened_at: Code of the command that opened the unterminated scope
            position: Index of that command within the page
            terminator: Code of the terminator that was never found
        """
        self.opened_at = opened_at
        self.position = position
        self.terminator = terminator
        super().__init__(
            f"Branch opened by command {opened_at} at position {position} "
            f"was never terminated (expected terminator {terminator})"
        )


class NestingTooDeepError(EventTreeError):
    """Raised when branch scopes nest deeper than the interpreter stack allows."""

    def __init__(self, position: int):
        """
        Initialize the exception.

        Params:
            position: Index of the command being parsed when the limit was hit
        """
        self.position = position
        super().__init__(
            f"Branch scopes nest too deeply to parse (reached command at position {position})"
        )


class NodeNotFoundError(EventTreeError, KeyError):
    """Raised when a node id does not belong to the arena."""

    def __init__(self, node_id: int):
        """
        Initialize the exception.

        Params:
            node_id: The node id that was looked up
        """
        self.node_id = node_id
        super().__init__(f"Node {node_id} does not exist in this arena")

    def __str__(self) -> str:
        return self.args[0]


class DescriptorLoadError(EventTreeError):
    """Raised when command descriptor data cannot be loaded or validated."""

    def __init__(self, source: str, reason: str, code: int | None = None):
        """
        Initialize the exception.

        Params:
            source: Where the descriptors came from (file path or "<dict>")
            reason: Why loading failed
            code: Command code of the offending descriptor, if known
        """
        self.source = source
        self.reason = reason
        self.code = code
        location = f"{source} (command {code})" if code is not None else source
        super().__init__(f"Cannot load command descriptors from {location}: {reason}")


class DefaultsUnavailableError(EventTreeError):
    """Raised when an engine version has no bundled default descriptors."""

    def __init__(self, version: str):
        """
        Initialize the exception.

        Params:
            version: Name of the engine version
        """
        self.version = version
        super().__init__(f"No default command descriptors are bundled for {version}")


class ConfigurationError(EventTreeError):
    """Raised when parser configuration is invalid."""

    def __init__(self, source: str, reason: str):
        """
        Initialize the exception.

        Params:
            source: Where the configuration came from
            reason: Why the configuration was rejected
        """
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid parser configuration in {source}: {reason}")
