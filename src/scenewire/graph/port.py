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
"""GraphHost: the port through which the resolver reads and extends a scene graph."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from scenewire.graph.scene import Attachment, Node

A = TypeVar("A", bound="Attachment")


@runtime_checkable
class GraphHost(Protocol):
    """Port defining the scene-graph contract consumed by the resolver.

    The read side is used by traversal and matching; ``create_node``,
    ``attach`` and ``reparent`` are only used by force-injection.
    """

    def all_nodes(self) -> Sequence[Node]: ...
    def attachments_of(self, node: Node) -> Sequence[Attachment]: ...
    def parent_of(self, node: Node) -> Node | None: ...
    def children_of(self, node: Node) -> Sequence[Node]: ...
    def create_node(self, name: str) -> Node: ...
    def attach(self, node: Node, cls: type[A]) -> A: ...
    def reparent(self, node: Node, new_parent: Node | None, index: int | None = None) -> None: ...
