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
"""MemberDescriptor: a uniform view of one member that requests injection."""

from __future__ import annotations

import types
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin

from scenewire.injection.capability import is_capability
from scenewire.injection.exceptions import DescriptorConfigurationError
from scenewire.injection.types import Disambiguation, SearchScope

_COLLECTION_ORIGINS: dict[Any, type] = {
    list: list,
    tuple: tuple,
    Sequence: list,
}


def validate_metadata(
    search_scope: SearchScope,
    disambiguation: Disambiguation,
    explicit_key: str,
    force_create: bool,
    *,
    member: str | None = None,
    owner_type: type | None = None,
) -> None:
    """Reject illegal combinations of injection metadata."""
    if not isinstance(search_scope, SearchScope):
        raise DescriptorConfigurationError(
            f"search scope must be a SearchScope, got {search_scope!r}", member=member, owner_type=owner_type
        )
    if not isinstance(disambiguation, Disambiguation):
        raise DescriptorConfigurationError(
            f"disambiguation must be a Disambiguation, got {disambiguation!r}", member=member, owner_type=owner_type
        )
    if explicit_key and disambiguation is not Disambiguation.BY_EXPLICIT_KEY:
        raise DescriptorConfigurationError(
            f"a key is only used by Disambiguation.BY_EXPLICIT_KEY, not Disambiguation.{disambiguation.name}",
            member=member,
            owner_type=owner_type,
        )
    if disambiguation is Disambiguation.BY_EXPLICIT_KEY:
        if search_scope is SearchScope.GLOBAL:
            raise DescriptorConfigurationError(
                "explicit keys can only be used with hierarchy searches, not SearchScope.GLOBAL",
                member=member,
                owner_type=owner_type,
            )
        if not explicit_key:
            raise DescriptorConfigurationError(
                "Disambiguation.BY_EXPLICIT_KEY requires a non-empty key", member=member, owner_type=owner_type
            )
    if force_create and search_scope is SearchScope.LOCAL:
        raise DescriptorConfigurationError(
            "force-injection is not available for SearchScope.LOCAL", member=member, owner_type=owner_type
        )


@dataclass(frozen=True)
class MemberDescriptor:
    """Resolution policy for one data member of an attachment type.

    ``declared_type`` is the element type when ``is_collection`` is set;
    ``collection_type`` is then the concrete container built on assignment.
    Fields and properties are written the same way, through ``setattr``.
    """

    name: str
    declared_type: type
    search_scope: SearchScope
    disambiguation: Disambiguation = Disambiguation.NONE
    explicit_key: str = ""
    completion_callback: str = ""
    force_create: bool = False
    is_collection: bool = False
    collection_type: type = list
    category: str = "field"

    def __post_init__(self) -> None:
        if not isinstance(self.declared_type, type):
            raise DescriptorConfigurationError(
                f"declared type must be a class, got {self.declared_type!r}", member=self.name
            )
        validate_metadata(
            self.search_scope,
            self.disambiguation,
            self.explicit_key,
            self.force_create,
            member=self.name,
        )
        if self.force_create and is_capability(self.declared_type):
            raise DescriptorConfigurationError(
                f"force-injection cannot create capability type {self.declared_type.__name__}", member=self.name
            )

    @property
    def is_capability(self) -> bool:
        return is_capability(self.declared_type)

    @property
    def type_name(self) -> str:
        element = self.declared_type.__name__
        if not self.is_collection:
            return element
        if self.collection_type is tuple:
            return f"tuple[{element}, ...]"
        return f"{self.collection_type.__name__}[{element}]"

    def describe(self) -> str:
        """Human-readable declaration, e.g. ``camera: Camera = Inject(ANCESTORS)``."""
        marker = "ForceInject" if self.force_create else "Inject"
        parts = [self.search_scope.name]
        if self.disambiguation is Disambiguation.BY_NAME:
            parts.append("disambiguation=BY_NAME")
        elif self.disambiguation is Disambiguation.BY_EXPLICIT_KEY:
            parts.append(f"key={self.explicit_key!r}")
        if self.completion_callback:
            parts.append(f"on_complete={self.completion_callback!r}")
        return f"{self.name}: {self.type_name} = {marker}({', '.join(parts)})"

    def build_value(self, found: Sequence[Any]) -> Any:
        """Shape matched attachments into the value assigned to the member."""
        if self.is_collection:
            return self.collection_type(found)
        return found[0]

    def set_value(self, owner: Any, value: Any) -> None:
        setattr(owner, self.name, value)


def split_annotation(annotation: Any) -> tuple[Any, bool, type]:
    """Split a member annotation into ``(element_type, is_collection, collection_type)``.

    ``Optional[T]`` is unwrapped; ``list[T]``, ``tuple[T, ...]`` and
    ``Sequence[T]`` mark a collection of ``T``.
    """
    origin = get_origin(annotation)
    if origin is Union or isinstance(annotation, types.UnionType):
        non_none = [a for a in get_args(annotation) if a is not type(None)]
        if len(non_none) == 1:
            return split_annotation(non_none[0])
        return annotation, False, list

    if origin in _COLLECTION_ORIGINS:
        args = get_args(annotation)
        if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
            return annotation, False, list
        if args:
            return args[0], True, _COLLECTION_ORIGINS[origin]

    return annotation, False, list
