"""
Index-based arena holding the nodes of one command tree.

Nodes live in a growable list and refer to each other by integer id, so
parent and child links never form reference cycles and a whole page can be
dropped by dropping its arena.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from eventtree.core.command import Command
from eventtree.core.types import NodeId
from eventtree.exceptions import NodeNotFoundError


@dataclass
class Node:
    """A command placed in the tree.

    `companions` keeps engine-generated display commands (move route entries)
    that belong to this node for storage fidelity but are not children.
    """

    node_id: NodeId
    command: Command
    parent: NodeId | None = None
    children: list[NodeId] = field(default_factory=list)
    companions: list[Command] = field(default_factory=list)


class CommandArena:
    """Owner of every node of a single parsed page."""

    def __init__(self):
        self._nodes: list[Node] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self._nodes)

    def __getitem__(self, node_id: NodeId) -> Node:
        return self.get(node_id)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def get(self, node_id: NodeId) -> Node:
        """
        Look up a node by id.

        Raises:
            NodeNotFoundError: If the id was not issued by this arena
        """
        if node_id not in self:
            raise NodeNotFoundError(node_id)
        return self._nodes[node_id]

    def new_node(self, command: Command) -> NodeId:
        """Create a detached node and return its id."""
        node_id = len(self._nodes)
        self._nodes.append(Node(node_id=node_id, command=command))
        return node_id

    def append(self, parent: NodeId, command: Command) -> NodeId:
        """
        Create a node for `command` as the last child of `parent`.

        Params:
            parent: Id of the node receiving the new child
            command: Command stored in the new node

        Returns:
            Id of the new node

        Raises:
            NodeNotFoundError: If `parent` does not exist
        """
        parent_node = self.get(parent)
        node_id = self.new_node(command)
        self._nodes[node_id].parent = parent
        parent_node.children.append(node_id)
        return node_id

    def children(self, node_id: NodeId) -> list[NodeId]:
        return list(self.get(node_id).children)

    def parent(self, node_id: NodeId) -> NodeId | None:
        return self.get(node_id).parent

    def command(self, node_id: NodeId) -> Command:
        return self.get(node_id).command

    def set_command(self, node_id: NodeId, command: Command) -> None:
        self.get(node_id).command = command

    def add_companion(self, node_id: NodeId, command: Command) -> None:
        self.get(node_id).companions.append(command)

    def companions(self, node_id: NodeId) -> list[Command]:
        return list(self.get(node_id).companions)

    def descendants(self, node_id: NodeId) -> Iterator[NodeId]:
        """Yield `node_id` and everything below it in pre-order."""
        stack = [node_id]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self.get(current).children))

    def depth(self, node_id: NodeId) -> int:
        """Number of ancestors between `node_id` and the arena's top node."""
        depth = 0
        parent = self.parent(node_id)
        while parent is not None:
            depth += 1
            parent = self.parent(parent)
        return depth
