"""
Command tree produced for one event page.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING

from eventtree.core.arena import CommandArena
from eventtree.core.command import Command
from eventtree.core.types import NodeId, Shape

if TYPE_CHECKING:
    from eventtree.descriptors.database import CommandDatabase


class CommandTree:
    """Arena plus the synthetic root that anchors a page's top-level commands.

    The root carries `Command.sentinel()` and is never reported by `walk()`
    or counted by `len()`.
    """

    def __init__(self, arena: CommandArena | None = None):
        self.arena = arena if arena is not None else CommandArena()
        self.root = self.arena.new_node(Command.sentinel())

    def __len__(self) -> int:
        return len(self.arena) - 1

    def top_level(self) -> list[NodeId]:
        return self.arena.children(self.root)

    def children(self, node_id: NodeId) -> list[NodeId]:
        return self.arena.children(node_id)

    def command(self, node_id: NodeId) -> Command:
        return self.arena.command(node_id)

    def walk(self) -> Iterator[tuple[NodeId, int]]:
        """Yield `(node_id, depth)` for every node in pre-order, root excluded.

        Top-level commands have depth 0.
        """
        stack = [(child, 0) for child in reversed(self.top_level())]
        while stack:
            node_id, depth = stack.pop()
            yield node_id, depth
            stack.extend(
                (child, depth + 1) for child in reversed(self.arena.children(node_id))
            )

    def shape(self, node_id: NodeId | None = None) -> tuple[Shape, ...]:
        """Nested `(code, children)` outline below `node_id` (the root by default)."""
        start = self.root if node_id is None else node_id
        return tuple(
            (self.arena.command(child).code, self.shape(child))
            for child in self.arena.children(start)
        )

    def render(self, database: "CommandDatabase | None" = None) -> str:
        """Indented text outline of the tree, one command per line."""
        lines = []
        for node_id, depth in self.walk():
            command = self.arena.command(node_id)
            descriptor = database.get(command.code) if database is not None else None
            name = descriptor.name if descriptor is not None else "?"
            parameters = ", ".join(repr(p) for p in command.parameters)
            lines.append(f"{'  ' * depth}{command.code} {name}: {parameters}")
        return "\n".join(lines)
