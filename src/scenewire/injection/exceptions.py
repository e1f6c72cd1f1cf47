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
"""Injection exceptions: fatal metadata errors and per-member resolution failures."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from scenewire.injection.types import Disambiguation, SearchScope
from scenewire.kernel.exceptions import (
    ConfigurationException,
    InternalResolverException,
    ResolutionException,
)

if TYPE_CHECKING:
    from scenewire.injection.descriptor import MemberDescriptor


def _node_path(obj: Any) -> str:
    node = getattr(obj, "_node", None)
    return node.path if node is not None else "<detached>"


def describe_candidate(candidate: Any) -> str:
    return f"{type(candidate).__name__} on '{_node_path(candidate)}'"


class DescriptorConfigurationError(ConfigurationException):
    """Illegal injection metadata, rejected when the member is declared."""

    def __init__(self, reason: str, *, member: str | None = None, owner_type: type | None = None) -> None:
        self.reason = reason
        self.member = member
        self.owner_type = owner_type
        where = ""
        if owner_type is not None and member:
            where = f" ({owner_type.__qualname__}.{member})"
        elif member:
            where = f" ({member})"
        super().__init__(
            message=f"Invalid injection metadata{where}: {reason}",
            code="DESCRIPTOR_CONFIGURATION",
            context={"member": member, "owner_type": getattr(owner_type, "__qualname__", None)},
        )


class UnsupportedSearchScopeError(InternalResolverException):
    """The resolver met a search scope it has no strategy for."""

    def __init__(self, scope: object) -> None:
        self.scope = scope
        super().__init__(
            message=f"Unexpected search scope: {scope!r}",
            code="UNSUPPORTED_SEARCH_SCOPE",
            context={"scope": repr(scope)},
        )


class MemberVisibilityError(ResolutionException):
    """An injection marker sits on a member the resolver is not allowed to set."""

    def __init__(self, *, owner_type: type, member: str, category: str, reason: str) -> None:
        self.owner_type = owner_type
        self.member = member
        self.category = category
        self.reason = reason
        super().__init__(
            message=(
                f"MemberVisibilityError: {category} '{owner_type.__qualname__}.{member}' "
                f"is marked for injection but {reason}; it will not be injected"
            ),
            code="MEMBER_VISIBILITY",
            context={"owner_type": owner_type.__qualname__, "member": member, "category": category},
        )


class InjectionError(ResolutionException):
    """Base class for failures tied to one member of one owner attachment.

    The message follows a fixed layout: headline, the owner and member that
    required the dependency, optional details, then suggestions.
    """

    code_name = "INJECTION"

    def __init__(
        self,
        headline: str,
        *,
        owner: Any,
        descriptor: MemberDescriptor,
        details: Sequence[str] = (),
        suggestions: Sequence[str] = (),
    ) -> None:
        self.headline = headline
        self.owner = owner
        self.descriptor = descriptor

        lines = [f"{type(self).__name__}: {headline}", ""]
        lines.append(f"  Required by: {type(owner).__qualname__} on node '{_node_path(owner)}'")
        lines.append(f"    {descriptor.category.capitalize()}: {descriptor.describe()}")

        if details:
            lines.append("")
            lines.extend(f"  {line}" for line in details)

        if suggestions:
            lines.append("")
            lines.append("  Suggestions:")
            lines.extend(f"    - {line}" for line in suggestions)

        super().__init__(
            message="\n".join(lines),
            code=self.code_name,
            context={
                "owner_type": type(owner).__qualname__,
                "node": _node_path(owner),
                "member": descriptor.name,
                "declared_type": descriptor.type_name,
            },
        )


class NoSuchDependencyError(InjectionError):
    """No attachment matching the member was found in the searched scope."""

    code_name = "NO_SUCH_DEPENDENCY"

    def __init__(self, *, owner: Any, descriptor: MemberDescriptor, searched: str) -> None:
        self.searched = searched
        suggestions = [f"Add a {descriptor.type_name} attachment {searched}"]
        if descriptor.disambiguation is Disambiguation.BY_NAME:
            suggestions.append(f"Check that the providing node is named '{descriptor.name}'")
        elif descriptor.disambiguation is Disambiguation.BY_EXPLICIT_KEY:
            suggestions.append(f"Check that the providing node is named '{descriptor.explicit_key}'")
        if descriptor.search_scope is not SearchScope.LOCAL and not descriptor.is_capability:
            suggestions.append("Declare a ForceInject member on the owner to create missing dependencies")

        super().__init__(
            f"No attachment of type '{descriptor.type_name}' found {searched}",
            owner=owner,
            descriptor=descriptor,
            suggestions=suggestions,
        )


class NoUniqueDependencyError(InjectionError):
    """Several attachments qualify for a single-valued member."""

    code_name = "NO_UNIQUE_DEPENDENCY"

    def __init__(self, *, owner: Any, descriptor: MemberDescriptor, candidates: Sequence[Any]) -> None:
        self.candidates = list(candidates)
        super().__init__(
            f"Found {len(self.candidates)} attachments matching '{descriptor.type_name}' where exactly one is required",
            owner=owner,
            descriptor=descriptor,
            details=[f"Candidates: {[describe_candidate(c) for c in self.candidates]}"],
            suggestions=[
                "Remove the duplicate attachments",
                "Use Disambiguation.BY_NAME or Disambiguation.BY_EXPLICIT_KEY to select one node",
                "Declare the member as a list to receive every match",
            ],
        )


class ForceInjectionError(InjectionError):
    """A missing dependency could not be synthesized."""

    code_name = "FORCE_INJECTION"

    def __init__(self, reason: str, *, owner: Any, descriptor: MemberDescriptor) -> None:
        self.reason = reason
        super().__init__(f"Cannot force-inject '{descriptor.type_name}': {reason}", owner=owner, descriptor=descriptor)


class CompletionCallbackError(InjectionError):
    """The member was assigned but its completion callback could not be run."""

    code_name = "COMPLETION_CALLBACK"

    def __init__(self, reason: str, *, owner: Any, descriptor: MemberDescriptor) -> None:
        self.reason = reason
        super().__init__(
            f"Completion callback '{descriptor.completion_callback}' failed: {reason}",
            owner=owner,
            descriptor=descriptor,
            suggestions=["Completion callbacks take no parameters, or one parameter receiving a list of injected values"],
        )


class InjectionAssignmentError(InjectionError):
    """Writing the resolved value into the member raised."""

    code_name = "INJECTION_ASSIGNMENT"

    def __init__(self, cause: BaseException, *, owner: Any, descriptor: MemberDescriptor) -> None:
        self.cause = cause
        super().__init__(
            f"Assigning '{descriptor.name}' raised {type(cause).__name__}: {cause}",
            owner=owner,
            descriptor=descriptor,
        )
