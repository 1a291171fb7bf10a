"""
Tree builder for flat event command lists.

An event page stores its commands as one flat list; branches, loops,
multi-line text and move routes are encoded by command codes alone. This
module rebuilds the nesting with a recursive-descent pass over the page whose
grammar comes from the command descriptor database:

- Branch commands open a scope that lasts until their terminator code; arm
  delimiters (Else, When ...) start a new arm under the opening command.
- Multi commands absorb the continuation lines that follow them.
- MoveRoute commands keep their display-only continuation commands aside.

A single `CommandStream` is threaded through every recursive call so each
command of the page is consumed exactly once, left to right.
"""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import TYPE_CHECKING, Any

from eventtree.core.arena import CommandArena
from eventtree.core.command import Command
from eventtree.core.tree import CommandTree
from eventtree.core.types import NodeId
from eventtree.descriptors.database import CommandDatabase
from eventtree.descriptors.schema import BranchKind, MoveRouteKind, MultiKind
from eventtree.exceptions import NestingTooDeepError, UnterminatedBranchError
from eventtree.parsing.diagnostics import DiagnosticKind, ParseDiagnostics

if TYPE_CHECKING:
    from eventtree.config import ParserConfig

logger = logging.getLogger(__name__)

# Parameter holding the text of a multi-line command
MULTI_TEXT_PARAMETER = 0

_NOTHING = object()


class BranchMatching(Enum):
    """How arm delimiters inside a branch scope are recognised."""

    CODE = "code"  # Any command with a delimiter code starts an arm
    # Delimiters with a duplicate_parameter must also carry it. This is a
    # presence check only: two delimiters with the same value still open two arms.
    PARAMETER = "parameter"


class CommandStream:
    """Peekable, forward-only iterator over the commands of one page.

    `position` is the page index of the command most recently returned by
    `next()`, or -1 before the first one.
    """

    def __init__(self, commands: Iterable[Command]):
        self._iterator = iter(commands)
        self._peeked: Any = _NOTHING
        self.position = -1

    def __iter__(self) -> Iterator[Command]:
        return self

    def __next__(self) -> Command:
        if self._peeked is not _NOTHING:
            command, self._peeked = self._peeked, _NOTHING
        else:
            command = next(self._iterator)
        self.position += 1
        return command

    def peek(self) -> Command | None:
        """Return the next command without consuming it, or None at the end."""
        if self._peeked is _NOTHING:
            try:
                self._peeked = next(self._iterator)
            except StopIteration:
                return None
        return self._peeked

    def next_if_code(self, code: int) -> Command | None:
        """Consume and return the next command only if it has `code`."""
        upcoming = self.peek()
        if upcoming is None or upcoming.code != code:
            return None
        return next(self)


def parse_command_under(
    parent: NodeId,
    command: Command,
    arena: CommandArena,
    stream: CommandStream,
    database: CommandDatabase,
    diagnostics: ParseDiagnostics | None = None,
    matching: BranchMatching = BranchMatching.CODE,
) -> NodeId | None:
    """
    Attach `command` under `parent`, consuming whatever it owns from `stream`.

    `stream` must yield the commands immediately following `command` and is
    shared with every recursive call made for nested commands.

    Params:
        parent: Node receiving the command
        command: Command just pulled from `stream`
        arena: Arena of the page being parsed
        stream: Remaining commands of the page
        database: Descriptor lookup
        diagnostics: Collector for recoverable issues; a throwaway one is used if omitted
        matching: How arm delimiters are recognised

    Returns:
        Id of the node created for `command`, or None for a code 0 command

    Raises:
        UnterminatedBranchError: If the page ends inside a branch scope
        RecursionError: If scopes nest beyond the recursion limit; `parse_page`
            reports this as NestingTooDeepError
    """
    if command.code == Command.BLANK_CODE:
        return None

    if diagnostics is None:
        diagnostics = ParseDiagnostics()
    position = stream.position

    descriptor = database.get(command.code)
    child = arena.append(parent, command)
    if descriptor is None:
        diagnostics.record(
            DiagnosticKind.UNKNOWN_COMMAND_CODE,
            command.code,
            position,
            "no descriptor, kept as a leaf",
        )
        return child

    kind = descriptor.kind
    if isinstance(kind, BranchKind):
        _parse_branch(child, command, kind, arena, stream, database, diagnostics, matching)
    elif isinstance(kind, MultiKind):
        _merge_continuations(child, command, kind.continuation, arena, stream, diagnostics)
    elif isinstance(kind, MoveRouteKind):
        while (companion := stream.next_if_code(kind.continuation)) is not None:
            arena.add_companion(child, companion)
    # Regular and Blank commands are complete as leaves

    return child


def _parse_branch(
    scope: NodeId,
    command: Command,
    kind: BranchKind,
    arena: CommandArena,
    stream: CommandStream,
    database: CommandDatabase,
    diagnostics: ParseDiagnostics,
    matching: BranchMatching,
) -> None:
    """Consume a branch scope up to and including its terminator.

    Commands before the first delimiter nest directly under the opening
    command; each delimiter becomes a new arm under the opening command and
    receives the commands that follow it.
    """
    opened_at = stream.position
    by_parameter = matching is BranchMatching.PARAMETER
    arm = scope

    while True:
        try:
            next_command = next(stream)
        except StopIteration:
            raise UnterminatedBranchError(
                command.code, opened_at, kind.terminator.code
            ) from None

        if next_command.code == kind.terminator.code:
            return

        if kind.find_branch(next_command, by_parameter) is not None:
            arm = arena.append(scope, next_command)
            continue

        parse_command_under(
            arm, next_command, arena, stream, database, diagnostics, matching
        )


def _merge_continuations(
    node: NodeId,
    command: Command,
    continuation: int,
    arena: CommandArena,
    stream: CommandStream,
    diagnostics: ParseDiagnostics,
) -> None:
    """Fold following continuation lines into the node's text parameter.

    A continuation whose text is not a string, or any continuation of a
    command whose own text is not a string, is dropped with a diagnostic.
    """
    text = command.parameter(MULTI_TEXT_PARAMETER)
    lines = [text] if isinstance(text, str) else None

    while (line_command := stream.next_if_code(continuation)) is not None:
        line = line_command.parameter(MULTI_TEXT_PARAMETER)
        if lines is None or not isinstance(line, str):
            diagnostics.record(
                DiagnosticKind.MALFORMED_MULTI_PAYLOAD,
                line_command.code,
                stream.position,
                f"cannot append {type(line).__name__} to "
                f"{type(text).__name__} text of command {command.code}, line dropped",
            )
            continue
        lines.append(line)

    if lines is not None and len(lines) > 1:
        arena.set_command(
            node, command.with_parameter(MULTI_TEXT_PARAMETER, "\n".join(lines))
        )


def parse_page(
    commands: Iterable[Command],
    database: CommandDatabase,
    *,
    diagnostics: ParseDiagnostics | None = None,
    matching: BranchMatching = BranchMatching.CODE,
) -> CommandTree:
    """
    Build the command tree of one event page.

    Params:
        commands: The page's flat command list in storage order
        database: Descriptor lookup
        diagnostics: Collector for recoverable issues
        matching: How arm delimiters are recognised

    Returns:
        A fresh CommandTree owning its own arena

    Raises:
        UnterminatedBranchError: If the page ends inside a branch scope
        NestingTooDeepError: If branch scopes nest beyond the interpreter's recursion limit
    """
    if diagnostics is None:
        diagnostics = ParseDiagnostics()

    tree = CommandTree()
    stream = CommandStream(commands)
    try:
        for command in stream:
            parse_command_under(
                tree.root, command, tree.arena, stream, database, diagnostics, matching
            )
    except RecursionError:
        raise NestingTooDeepError(stream.position) from None

    logger.debug(
        "Parsed %d commands into %d nodes (%d diagnostics)",
        stream.position + 1,
        len(tree),
        len(diagnostics),
    )
    return tree


def parse_pages(
    pages: Iterable[Iterable[Command]],
    database: CommandDatabase,
    *,
    diagnostics: ParseDiagnostics | None = None,
    matching: BranchMatching = BranchMatching.CODE,
) -> list[CommandTree]:
    """Build one independent tree per event page.

    Raises:
        UnterminatedBranchError: If any page ends inside a branch scope
        NestingTooDeepError: If branch scopes nest too deeply on any page
    """
    return [
        parse_page(page, database, diagnostics=diagnostics, matching=matching)
        for page in pages
    ]


class EventTreeBuilder:
    """Parses pages with a fixed database and configuration.

    Each `build()` call gets its own diagnostics collector, so the builder can
    be shared across pages.
    """

    def __init__(
        self, database: CommandDatabase, config: "ParserConfig | None" = None
    ):
        self.database = database
        self.matching = config.branch_matching if config else BranchMatching.CODE
        self.log_unknown_codes = config.log_unknown_codes if config else True

    @classmethod
    def from_config(cls, config: "ParserConfig") -> "EventTreeBuilder":
        """Create a builder together with the database the configuration describes."""
        return cls(CommandDatabase.from_config(config), config)

    def build(self, commands: Iterable[Command]) -> tuple[CommandTree, ParseDiagnostics]:
        """
        Parse one page.

        Returns:
            The page's tree and the diagnostics collected while parsing it

        Raises:
            UnterminatedBranchError: If the page ends inside a branch scope
            NestingTooDeepError: If branch scopes nest too deeply
        """
        diagnostics = ParseDiagnostics(log_unknown_codes=self.log_unknown_codes)
        tree = parse_page(
            commands, self.database, diagnostics=diagnostics, matching=self.matching
        )
        return tree, diagnostics

    def build_pages(
        self, pages: Iterable[Iterable[Command]]
    ) -> list[tuple[CommandTree, ParseDiagnostics]]:
        return [self.build(page) for page in pages]
