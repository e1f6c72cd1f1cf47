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
"""Force-injection: synthesize a missing dependency for an opted-in owner."""

from __future__ import annotations

import inspect
from typing import Any

import structlog

from scenewire.graph.port import GraphHost
from scenewire.graph.scene import Attachment, Node
from scenewire.injection.descriptor import MemberDescriptor
from scenewire.injection.exceptions import ForceInjectionError
from scenewire.injection.types import SearchScope

logger = structlog.get_logger("scenewire.injection.fallback")

_FALLBACK_SCOPES = frozenset({SearchScope.ANCESTORS, SearchScope.DESCENDANTS, SearchScope.GLOBAL})


def supports_fallback(descriptor: MemberDescriptor) -> bool:
    """Whether a member's scope and cardinality allow force-injection at all.

    Local searches never fall back. Collections only fall back for global
    searches, where they receive a single created attachment.
    """
    if descriptor.search_scope not in _FALLBACK_SCOPES:
        return False
    if descriptor.is_collection:
        return descriptor.search_scope is SearchScope.GLOBAL
    return True


def force_inject(
    host: GraphHost,
    owner: Any,
    descriptor: MemberDescriptor,
    created_nodes: list[Node] | None = None,
) -> Attachment:
    """Create a node carrying a new ``declared_type`` attachment and wire it in.

    DESCENDANTS: the node becomes a child of the owner's node.
    ANCESTORS: the node takes the owner node's place under its old parent and
    the owner node moves below it.
    GLOBAL: the node is left as a free root.

    The created attachment is returned unassigned; its own members are not
    resolved. Every node created is appended to *created_nodes*, also when
    instantiating the attachment fails and the node stays behind empty.
    """
    target = descriptor.declared_type
    if descriptor.is_capability:
        raise ForceInjectionError(
            "no match was found and capability types cannot be instantiated",
            owner=owner,
            descriptor=descriptor,
        )
    if not issubclass(target, Attachment):
        raise ForceInjectionError(f"{target.__name__} is not an Attachment type", owner=owner, descriptor=descriptor)
    if inspect.isabstract(target):
        raise ForceInjectionError(f"{target.__name__} is abstract", owner=owner, descriptor=descriptor)

    name = target.__name__ if descriptor.is_collection else descriptor.name
    node = host.create_node(name)
    if created_nodes is not None:
        created_nodes.append(node)
    try:
        attachment = host.attach(node, target)
    except Exception as exc:
        raise ForceInjectionError(
            f"creating {target.__name__} raised {type(exc).__name__}: {exc}",
            owner=owner,
            descriptor=descriptor,
        ) from exc

    owner_node: Node = owner.node
    if descriptor.search_scope is SearchScope.DESCENDANTS:
        host.reparent(node, owner_node)
    elif descriptor.search_scope is SearchScope.ANCESTORS:
        _insert_above(host, node, owner_node)

    logger.info(
        "dependency_created",
        attachment=target.__name__,
        node=node.path,
        owner=type(owner).__name__,
        member=descriptor.name,
        scope=descriptor.search_scope.name,
    )
    return attachment


def _insert_above(host: GraphHost, node: Node, owner_node: Node) -> None:
    old_parent = host.parent_of(owner_node)
    if old_parent is not None:
        siblings = list(host.children_of(old_parent))
    else:
        siblings = [n for n in host.all_nodes() if host.parent_of(n) is None and n is not node]
    index = siblings.index(owner_node)
    host.reparent(node, old_parent, index)
    host.reparent(owner_node, node)
