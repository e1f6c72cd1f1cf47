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
"""Tests for capability declarations and assignability."""

from typing import Protocol

import pytest

from scenewire.graph import Attachment
from scenewire.injection import capability, implements, is_capability
from scenewire.injection.capability import capabilities_of, is_assignable


@capability
class Damageable:
    def take_damage(self, amount: int) -> None: ...


@capability
class Destructible(Damageable):
    pass


class Interactable(Protocol):
    def interact(self) -> None: ...


@implements(Damageable)
class Crate(Attachment):
    def take_damage(self, amount: int) -> None:
        pass


class ReinforcedCrate(Crate):
    pass


class Barrel(Attachment, Damageable):
    pass


@implements(Destructible, Interactable)
class Door(Attachment):
    def take_damage(self, amount: int) -> None:
        pass

    def interact(self) -> None:
        pass


class LooksDamageable(Attachment):
    def take_damage(self, amount: int) -> None:
        pass


class TestIsCapability:
    def test_marked_class(self):
        assert is_capability(Damageable)

    def test_protocol(self):
        assert is_capability(Interactable)

    def test_attachment_class_is_not_a_capability(self):
        assert not is_capability(Crate)
        assert not is_capability(Barrel)

    def test_non_type(self):
        assert not is_capability("Damageable")

    def test_implements_rejects_plain_classes(self):
        with pytest.raises(TypeError):
            implements(Crate)


class TestCapabilitiesOf:
    def test_declared(self):
        assert capabilities_of(Crate) == {Damageable}

    def test_inherited_declaration(self):
        assert capabilities_of(ReinforcedCrate) == {Damageable}

    def test_nominal_subclass(self):
        assert Damageable in capabilities_of(Barrel)

    def test_capability_bases_are_included(self):
        assert capabilities_of(Door) == {Destructible, Damageable, Interactable}


class TestIsAssignable:
    def test_class_subtype(self):
        assert is_assignable(ReinforcedCrate, Crate)
        assert not is_assignable(Crate, ReinforcedCrate)

    def test_capability_via_implements(self):
        assert is_assignable(Crate, Damageable)
        assert is_assignable(Door, Interactable)

    def test_structural_match_is_not_enough(self):
        assert not is_assignable(LooksDamageable, Damageable)
