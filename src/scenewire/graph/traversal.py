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
"""Hierarchy walks used by the ancestor and descendant searches.

Both helpers return fresh lists on every call; the graph may change between
calls when force-injection inserts nodes.
"""

from __future__ import annotations

from scenewire.graph.port import GraphHost
from scenewire.graph.scene import Node


def ancestors_of(host: GraphHost, node: Node) -> list[Node]:
    """Parent, grandparent and so on up to the root, nearest first."""
    ancestors: list[Node] = []
    parent = host.parent_of(node)
    while parent is not None:
        ancestors.append(parent)
        parent = host.parent_of(parent)
    return ancestors


def descendants_of(host: GraphHost, node: Node) -> list[Node]:
    """Every node below *node*, depth-first with sibling order preserved."""
    descendants: list[Node] = []
    stack = list(reversed(host.children_of(node)))
    while stack:
        current = stack.pop()
        descendants.append(current)
        stack.extend(reversed(host.children_of(current)))
    return descendants


def is_active_in_hierarchy(host: GraphHost, node: Node) -> bool:
    """A node is active in the hierarchy when it and every ancestor are active."""
    if not getattr(node, "active", True):
        return False
    return all(getattr(ancestor, "active", True) for ancestor in ancestors_of(host, node))


def descendant_levels(host: GraphHost, node: Node) -> list[list[Node]]:
    """Descendants grouped by depth below *node*, nearest depth first.

    Within a depth, nodes keep their left-to-right order, which matches their
    relative order in :func:`descendants_of`.
    """
    levels: list[list[Node]] = []
    current = list(host.children_of(node))
    while current:
        levels.append(current)
        current = [child for parent in current for child in host.children_of(parent)]
    return levels
