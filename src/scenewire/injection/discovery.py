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
"""Member discovery: find the members of an attachment type that request injection."""

from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass, field
from typing import Any

from scenewire.injection.descriptor import MemberDescriptor, split_annotation
from scenewire.injection.diagnostics import Diagnostic, DiagnosticSink
from scenewire.injection.exceptions import DescriptorConfigurationError, MemberVisibilityError
from scenewire.injection.inject import ForceInject, Inject, InjectedProperty


@dataclass
class MemberScan:
    """Result of scanning one attachment type.

    ``descriptors`` holds the settable members requesting injection,
    ``force_injectable`` tells whether the type opted into force-injection,
    and ``violations`` lists marked members the resolver may not set.
    """

    owner_type: type
    descriptors: list[MemberDescriptor] = field(default_factory=list)
    force_injectable: bool = False
    violations: list[MemberVisibilityError] = field(default_factory=list)


def _marked_members(cls: type) -> dict[str, Inject | InjectedProperty]:
    """Collect marked class members, base classes first, honouring overrides."""
    members: dict[str, Inject | InjectedProperty] = {}
    for klass in reversed(inspect.getmro(cls)):
        for name, value in vars(klass).items():
            if isinstance(value, (Inject, InjectedProperty)):
                members[name] = value
            elif name in members:
                del members[name]
    return members


def _marker_of(value: Inject | InjectedProperty) -> Inject:
    return value.marker if isinstance(value, InjectedProperty) else value


def has_injectable_members(cls: type) -> bool:
    """Check whether any member of *cls* carries an injection marker."""
    return bool(_marked_members(cls))


def is_force_injectable(cls: type) -> bool:
    """Check whether *cls* declares at least one settable ForceInject member."""
    return any(
        isinstance(_marker_of(value), ForceInject) and _visibility_problem(name, value) is None
        for name, value in _marked_members(cls).items()
    )


def _visibility_problem(name: str, value: Inject | InjectedProperty) -> str | None:
    if name.startswith("_"):
        return "it is private"
    if isinstance(value, InjectedProperty) and value.fset is None:
        return "it has no setter"
    return None


def _field_hints(cls: type) -> dict[str, object]:
    try:
        return typing.get_type_hints(cls)
    except Exception as exc:
        raise DescriptorConfigurationError(
            f"cannot evaluate type annotations: {exc}", owner_type=cls
        ) from exc


def _property_type(cls: type, name: str, prop: InjectedProperty) -> object:
    try:
        hints = typing.get_type_hints(prop.fget)
    except Exception as exc:
        raise DescriptorConfigurationError(
            f"cannot evaluate the getter's return annotation: {exc}", member=name, owner_type=cls
        ) from exc
    if "return" not in hints:
        raise DescriptorConfigurationError(
            "injected properties need a return annotation on the getter", member=name, owner_type=cls
        )
    return hints["return"]


def scan_members(cls: type) -> MemberScan:
    """Build descriptors for every injectable member of *cls*.

    Fields come before properties, each in declaration order. Marked members
    that are not externally settable are reported as violations rather than
    returned. Raises :class:`DescriptorConfigurationError` for malformed
    metadata, such as a marked field without a type annotation.
    """
    scan = MemberScan(owner_type=cls)
    hints: dict[str, object] | None = None
    fields: list[MemberDescriptor] = []
    properties: list[MemberDescriptor] = []

    for name, value in _marked_members(cls).items():
        category = "property" if isinstance(value, InjectedProperty) else "field"
        problem = _visibility_problem(name, value)
        if problem is not None:
            scan.violations.append(
                MemberVisibilityError(owner_type=cls, member=name, category=category, reason=problem)
            )
            continue

        if isinstance(value, InjectedProperty):
            annotation = _property_type(cls, name, value)
        else:
            if hints is None:
                hints = _field_hints(cls)
            if name not in hints:
                raise DescriptorConfigurationError("injected fields need a type annotation", member=name, owner_type=cls)
            annotation = hints[name]

        element_type, is_collection, collection_type = split_annotation(annotation)
        if not isinstance(element_type, type):
            raise DescriptorConfigurationError(
                f"cannot inject into members annotated as {annotation!r}", member=name, owner_type=cls
            )

        marker = _marker_of(value)
        try:
            descriptor = MemberDescriptor(
                name=name,
                declared_type=element_type,
                search_scope=marker.search_scope,
                disambiguation=marker.disambiguation,
                explicit_key=marker.key,
                completion_callback=marker.on_complete,
                force_create=marker.force_create,
                is_collection=is_collection,
                collection_type=collection_type,
                category=category,
            )
        except DescriptorConfigurationError as exc:
            raise DescriptorConfigurationError(exc.reason, member=name, owner_type=cls) from exc
        (properties if category == "property" else fields).append(descriptor)
        if marker.force_create:
            scan.force_injectable = True

    scan.descriptors = fields + properties
    return scan


def find_injectable_members(owner: Any, sink: DiagnosticSink) -> MemberScan:
    """Scan ``type(owner)`` and report its visibility violations to *sink*."""
    scan = scan_members(type(owner))
    for violation in scan.violations:
        sink.emit(Diagnostic.from_exception(violation, node=owner.node, attachment=owner, member=violation.member))
    return scan
