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
"""Resolution strategies: one per search scope.

Every strategy gathers candidates with the matcher and applies the same
cardinality rules: a single-valued member needs exactly one candidate (more is
an ambiguity error, never a silent pick), an array-valued member receives every
candidate in the searched scope.

Hierarchy strategies search level by level and the nearest level holding any
candidate decides. An ancestor level is one ancestor node; a descendant level
is every node at one depth below the owner. Flat strategies (local, global)
treat the whole searched region as one level.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from scenewire.graph.port import GraphHost
from scenewire.graph.scene import Attachment, Node
from scenewire.graph.traversal import ancestors_of, descendant_levels, descendants_of, is_active_in_hierarchy
from scenewire.injection.descriptor import MemberDescriptor
from scenewire.injection.exceptions import NoUniqueDependencyError, UnsupportedSearchScopeError
from scenewire.injection.matcher import candidates_in
from scenewire.injection.types import SearchScope


@dataclass(frozen=True)
class SearchContext:
    """Graph handle and search switches shared by every strategy in a pass."""

    host: GraphHost
    include_inactive: bool = False

    def visible(self, nodes: Sequence[Node]) -> list[Node]:
        if self.include_inactive:
            return list(nodes)
        return [node for node in nodes if is_active_in_hierarchy(self.host, node)]


class ResolutionStrategy:
    """Base class; subclasses define which nodes are searched and how."""

    scope: SearchScope

    def find_one(self, ctx: SearchContext, owner: Any, descriptor: MemberDescriptor) -> Attachment | None:
        raise NotImplementedError

    def find_all(self, ctx: SearchContext, owner: Any, descriptor: MemberDescriptor) -> list[Attachment]:
        raise NotImplementedError

    def describe(self, owner: Any) -> str:
        """Where this strategy searched, for error messages."""
        raise NotImplementedError


class HierarchyStrategy(ResolutionStrategy):
    def levels(self, ctx: SearchContext, node: Node) -> list[list[Node]]:
        raise NotImplementedError

    def ordered(self, ctx: SearchContext, node: Node) -> list[Node]:
        raise NotImplementedError

    def find_one(self, ctx: SearchContext, owner: Any, descriptor: MemberDescriptor) -> Attachment | None:
        for level in self.levels(ctx, owner.node):
            found = candidates_in(ctx.host, level, descriptor)
            if len(found) == 1:
                return found[0]
            if found:
                raise NoUniqueDependencyError(owner=owner, descriptor=descriptor, candidates=found)
        return None

    def find_all(self, ctx: SearchContext, owner: Any, descriptor: MemberDescriptor) -> list[Attachment]:
        return candidates_in(ctx.host, self.ordered(ctx, owner.node), descriptor)


class AncestorStrategy(HierarchyStrategy):
    scope = SearchScope.ANCESTORS

    def levels(self, ctx: SearchContext, node: Node) -> list[list[Node]]:
        return [[ancestor] for ancestor in ancestors_of(ctx.host, node)]

    def ordered(self, ctx: SearchContext, node: Node) -> list[Node]:
        return ancestors_of(ctx.host, node)

    def describe(self, owner: Any) -> str:
        return f"on any ancestor of node '{owner.node.path}'"


class DescendantStrategy(HierarchyStrategy):
    scope = SearchScope.DESCENDANTS

    def levels(self, ctx: SearchContext, node: Node) -> list[list[Node]]:
        return descendant_levels(ctx.host, node)

    def ordered(self, ctx: SearchContext, node: Node) -> list[Node]:
        return descendants_of(ctx.host, node)

    def describe(self, owner: Any) -> str:
        return f"below node '{owner.node.path}'"


class FlatStrategy(ResolutionStrategy):
    def nodes(self, ctx: SearchContext, node: Node) -> list[Node]:
        raise NotImplementedError

    def find_one(self, ctx: SearchContext, owner: Any, descriptor: MemberDescriptor) -> Attachment | None:
        found = self.find_all(ctx, owner, descriptor)
        if len(found) > 1:
            raise NoUniqueDependencyError(owner=owner, descriptor=descriptor, candidates=found)
        return found[0] if found else None

    def find_all(self, ctx: SearchContext, owner: Any, descriptor: MemberDescriptor) -> list[Attachment]:
        return candidates_in(ctx.host, self.nodes(ctx, owner.node), descriptor)


class LocalStrategy(FlatStrategy):
    """The owner's own node and its whole subtree."""

    scope = SearchScope.LOCAL

    def nodes(self, ctx: SearchContext, node: Node) -> list[Node]:
        return ctx.visible([node, *descendants_of(ctx.host, node)])

    def describe(self, owner: Any) -> str:
        return f"on node '{owner.node.path}' or below it"


class GlobalStrategy(FlatStrategy):
    """Every node in the graph, regardless of position."""

    scope = SearchScope.GLOBAL

    def nodes(self, ctx: SearchContext, node: Node) -> list[Node]:
        return ctx.visible(ctx.host.all_nodes())

    def describe(self, owner: Any) -> str:
        return "anywhere in the scene graph"


_STRATEGIES: dict[SearchScope, ResolutionStrategy] = {
    strategy.scope: strategy
    for strategy in (LocalStrategy(), AncestorStrategy(), DescendantStrategy(), GlobalStrategy())
}


def strategy_for(scope: SearchScope) -> ResolutionStrategy:
    """Return the strategy for *scope*; unknown scopes abort the pass."""
    try:
        return _STRATEGIES[scope]
    except (KeyError, TypeError):
        raise UnsupportedSearchScopeError(scope) from None


def find_dependencies(ctx: SearchContext, owner: Any, descriptor: MemberDescriptor) -> list[Attachment]:
    """Matches for *descriptor* on *owner*, shaped by the member's cardinality.

    Single-valued members yield an empty or one-element list, and raise
    :class:`NoUniqueDependencyError` when the decisive level is ambiguous.
    """
    strategy = strategy_for(descriptor.search_scope)
    if descriptor.is_collection:
        return strategy.find_all(ctx, owner, descriptor)
    found = strategy.find_one(ctx, owner, descriptor)
    return [found] if found is not None else []
