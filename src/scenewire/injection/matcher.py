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
"""Matcher: select the attachments on one node that satisfy a member descriptor."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from scenewire.graph.port import GraphHost
from scenewire.graph.scene import Attachment, Node
from scenewire.injection.capability import is_assignable
from scenewire.injection.descriptor import MemberDescriptor
from scenewire.injection.types import Disambiguation


def node_qualifies(node: Node, descriptor: MemberDescriptor) -> bool:
    """Apply the descriptor's disambiguation rule to a node's name."""
    if descriptor.disambiguation is Disambiguation.BY_EXPLICIT_KEY:
        return node.name == descriptor.explicit_key
    if descriptor.disambiguation is Disambiguation.BY_NAME:
        return node.name == descriptor.name
    return True


def candidates_at(host: GraphHost, node: Node, descriptor: MemberDescriptor) -> Iterator[Attachment]:
    """Yield qualifying attachments on *node*, in attachment order."""
    if not node_qualifies(node, descriptor):
        return
    for attachment in host.attachments_of(node):
        if is_assignable(type(attachment), descriptor.declared_type):
            yield attachment


def candidates_in(host: GraphHost, nodes: Iterable[Node], descriptor: MemberDescriptor) -> list[Attachment]:
    """Qualifying attachments across *nodes*, in node then attachment order."""
    return [attachment for node in nodes for attachment in candidates_at(host, node, descriptor)]
