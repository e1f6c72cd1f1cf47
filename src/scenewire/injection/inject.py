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
"""Inject and ForceInject markers for declaring injectable members."""

from __future__ import annotations

from typing import Any

from scenewire.injection.descriptor import validate_metadata
from scenewire.injection.types import Disambiguation, SearchScope


class Inject:
    """Marks a member of an attachment type for injection by the resolver.

    Usage::

        class Turret(Attachment):
            vehicle: Vehicle = Inject(SearchScope.ANCESTORS)
            muzzle: Muzzle = Inject(SearchScope.DESCENDANTS, key="Muzzle")
            targets: list[Damageable] = Inject(SearchScope.GLOBAL, on_complete="on_targets")

            @property
            def radar(self) -> Radar:
                return self._radar

            @radar.setter
            def radar(self, value: Radar) -> None:
                self._radar = value

            radar = Inject(SearchScope.GLOBAL)(radar)

    The member's annotation (or the getter's return annotation) is the type to
    search for. Until the resolver assigns it, reading a field returns ``None``.

    Args:
        search_scope: Where to look for candidates.
        disambiguation: Which candidates qualify. Passing ``key`` alone
            implies ``Disambiguation.BY_EXPLICIT_KEY``.
        key: Node name required by ``BY_EXPLICIT_KEY``.
        on_complete: Name of a method on the owner to call after injection.
    """

    __slots__ = ("search_scope", "disambiguation", "key", "on_complete", "force_create", "name")

    def __init__(
        self,
        search_scope: SearchScope,
        *,
        disambiguation: Disambiguation = Disambiguation.NONE,
        key: str = "",
        on_complete: str = "",
        force_create: bool = False,
    ) -> None:
        if key and disambiguation is Disambiguation.NONE:
            disambiguation = Disambiguation.BY_EXPLICIT_KEY
        validate_metadata(search_scope, disambiguation, key, force_create)
        self.search_scope = search_scope
        self.disambiguation = disambiguation
        self.key = key
        self.on_complete = on_complete
        self.force_create = force_create
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        # Non-data descriptor: an injected value in the instance __dict__ wins.
        return None

    def __call__(self, prop: property) -> InjectedProperty:
        if not isinstance(prop, property):
            raise TypeError(f"{type(self).__name__}(...) can only wrap a property, got {prop!r}")
        return InjectedProperty(prop, self)

    def __repr__(self) -> str:
        parts = [self.search_scope.name]
        if self.disambiguation is not Disambiguation.NONE:
            parts.append(f"disambiguation={self.disambiguation.name}")
        if self.key:
            parts.append(f"key={self.key!r}")
        if self.on_complete:
            parts.append(f"on_complete={self.on_complete!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class ForceInject(Inject):
    """Like :class:`Inject`, but creates the dependency when none is found.

    Declaring any ForceInject member makes the whole owner type eligible for
    force-injection: every unresolved hierarchy or global member of that
    owner gets a freshly created node and attachment.
    """

    __slots__ = ()

    def __init__(
        self,
        search_scope: SearchScope,
        *,
        disambiguation: Disambiguation = Disambiguation.NONE,
        key: str = "",
        on_complete: str = "",
    ) -> None:
        super().__init__(
            search_scope,
            disambiguation=disambiguation,
            key=key,
            on_complete=on_complete,
            force_create=True,
        )


class InjectedProperty(property):
    """A property carrying an injection marker."""

    def __init__(self, prop: property, marker: Inject) -> None:
        super().__init__(prop.fget, prop.fset, prop.fdel, prop.__doc__)
        self.marker = marker
