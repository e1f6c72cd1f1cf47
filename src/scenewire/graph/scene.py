# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""In-memory scene graph: nodes, attachments, and the SceneGraph host."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

A = TypeVar("A", bound="Attachment")


class Node:
    """A vertex in the scene graph.

    Nodes own their children and attachments. Structural changes go through
    :class:`SceneGraph` so that the graph's root list stays consistent.
    """

    def __init__(self, name: str, *, active: bool = True) -> None:
        self.name = name
        self.active = active
        self._parent: Node | None = None
        self._children: list[Node] = []
        self._attachments: list[Attachment] = []

    @property
    def parent(self) -> Node | None:
        return self._parent

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return tuple(self._attachments)

    @property
    def path(self) -> str:
        """Slash-separated names from the root down to this node."""
        names = [self.name]
        parent = self._parent
        while parent is not None:
            names.append(parent.name)
            parent = parent._parent
        return "/".join(reversed(names))

    def get_attachment(self, cls: type[A]) -> A | None:
        """Return the first attachment that is an instance of *cls*."""
        for attachment in self._attachments:
            if isinstance(attachment, cls):
                return attachment
        return None

    def is_ancestor_of(self, other: Node) -> bool:
        parent = other._parent
        while parent is not None:
            if parent is self:
                return True
            parent = parent._parent
        return False

    def __repr__(self) -> str:
        return f"Node({self.path!r})"


class Attachment:
    """A unit of behaviour bound to exactly one node.

    Subclasses are instantiated by the host with no arguments and bound to a
    node by :meth:`SceneGraph.attach`.
    """

    _node: Node | None = None

    @property
    def node(self) -> Node:
        if self._node is None:
            raise RuntimeError(f"{type(self).__name__} is not attached to a node")
        return self._node

    @property
    def name(self) -> str:
        """The owning node's name."""
        return self.node.name

    def __repr__(self) -> str:
        where = self._node.path if self._node is not None else "<detached>"
        return f"<{type(self).__name__} on {where!r}>"


class SceneGraph:
    """In-memory :class:`~scenewire.graph.port.GraphHost` implementation.

    Usage::

        scene = SceneGraph()
        world = scene.create_node("World")
        player = scene.create_node("Player", parent=world)
        scene.attach(player, PlayerController)
    """

    def __init__(self) -> None:
        self._roots: list[Node] = []

    @property
    def roots(self) -> tuple[Node, ...]:
        return tuple(self._roots)

    # -- GraphHost -------------------------------------------------------

    def all_nodes(self) -> list[Node]:
        """Every node in the graph, depth-first, roots in creation order."""
        return list(self._walk(self._roots))

    def attachments_of(self, node: Node) -> list[Attachment]:
        return list(node._attachments)

    def parent_of(self, node: Node) -> Node | None:
        return node._parent

    def children_of(self, node: Node) -> list[Node]:
        return list(node._children)

    def create_node(self, name: str, parent: Node | None = None, *, active: bool = True) -> Node:
        """Create a node, as a root when *parent* is ``None``."""
        node = Node(name, active=active)
        if parent is None:
            self._roots.append(node)
        else:
            node._parent = parent
            parent._children.append(node)
        return node

    def attach(self, node: Node, cls: type[A]) -> A:
        """Instantiate *cls* and bind it to *node*."""
        if not (isinstance(cls, type) and issubclass(cls, Attachment)):
            raise TypeError(f"{cls!r} is not an Attachment type")
        attachment = cls()
        attachment._node = node
        node._attachments.append(attachment)
        return attachment

    def reparent(self, node: Node, new_parent: Node | None, index: int | None = None) -> None:
        """Move *node* (with its subtree) under *new_parent*.

        ``None`` makes the node a root. *index* positions it among its new
        siblings; by default it is appended.
        """
        if new_parent is node or (new_parent is not None and node.is_ancestor_of(new_parent)):
            raise ValueError(f"Cannot move {node!r} under its own subtree ({new_parent!r})")
        self._detach(node)
        siblings = self._roots if new_parent is None else new_parent._children
        if index is None:
            siblings.append(node)
        else:
            siblings.insert(index, node)
        node._parent = new_parent

    # -- Convenience ----------------------------------------------------

    def remove(self, node: Node) -> None:
        """Remove *node* and its whole subtree from the graph."""
        self._detach(node)
        node._parent = None

    def index_of(self, node: Node) -> int:
        """Position of *node* among its siblings (or among the roots)."""
        siblings = self._roots if node._parent is None else node._parent._children
        return siblings.index(node)

    def find(self, name: str) -> Node | None:
        """First node named *name*, depth-first."""
        for node in self._walk(self._roots):
            if node.name == name:
                return node
        return None

    def _detach(self, node: Node) -> None:
        siblings = self._roots if node._parent is None else node._parent._children
        if node in siblings:
            siblings.remove(node)

    @staticmethod
    def _walk(nodes: list[Node]) -> Iterator[Node]:
        for node in nodes:
            yield node
            yield from SceneGraph._walk(node._children)
