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
"""Capability typing: explicit interface declarations for attachment types.

A capability is a contract an injected member can be typed against instead of
a concrete attachment class. Attachment classes satisfy a capability only by
subclassing it or by declaring it with ``@implements``; there is no
structural (duck-typed) matching.

Usage::

    @capability
    class Damageable:
        def take_damage(self, amount: int) -> None: ...

    @implements(Damageable)
    class Crate(Attachment):
        def take_damage(self, amount: int) -> None: ...
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Protocol, TypeVar

T = TypeVar("T", bound=type)

_CAPABILITY_ATTR = "__scenewire_capability__"
_IMPLEMENTS_ATTR = "__scenewire_implements__"


def capability(cls: T) -> T:
    """Mark a class as a capability type."""
    setattr(cls, _CAPABILITY_ATTR, True)
    return cls


def implements(*capabilities: type) -> Callable[[T], T]:
    """Declare that an attachment class provides the given capabilities."""
    for cap in capabilities:
        if not is_capability(cap):
            raise TypeError(f"{cap!r} is not a capability; decorate it with @capability or use a Protocol")

    def decorator(cls: T) -> T:
        # Stored per class in __dict__, inherited declarations are collected via the MRO.
        setattr(cls, _IMPLEMENTS_ATTR, tuple(capabilities))
        return cls

    return decorator


def is_capability(tp: object) -> bool:
    """Check whether *tp* is a capability (marked, or a Protocol class)."""
    if not isinstance(tp, type):
        return False
    if _CAPABILITY_ATTR in vars(tp):
        return True
    return bool(getattr(tp, "_is_protocol", False)) and tp is not Protocol  # type: ignore[comparison-overlap]


def capabilities_of(cls: type) -> frozenset[type]:
    """Every capability *cls* provides, through subclassing or ``@implements``."""
    provided: set[type] = set()
    for base in inspect.getmro(cls):
        if base is not cls and is_capability(base):
            provided.add(base)
        for declared in vars(base).get(_IMPLEMENTS_ATTR, ()):
            provided.update(c for c in inspect.getmro(declared) if is_capability(c))
    return frozenset(provided)


def is_assignable(runtime_type: type, target: type) -> bool:
    """Check whether an instance of *runtime_type* may be assigned to *target*."""
    if is_capability(target):
        return target is runtime_type or target in capabilities_of(runtime_type)
    return issubclass(runtime_type, target)
