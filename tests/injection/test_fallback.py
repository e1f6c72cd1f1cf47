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
"""Tests for force-injection of missing dependencies."""

import abc

from scenewire.graph import Attachment, SceneGraph
from scenewire.injection import (
    DependencyResolver,
    DiagnosticCollector,
    ForceInject,
    ForceInjectionError,
    Inject,
    NoSuchDependencyError,
    NoUniqueDependencyError,
    OutcomeKind,
    ResolverProperties,
    SearchScope,
    capability,
)
from scenewire.injection.descriptor import MemberDescriptor
from scenewire.injection.fallback import supports_fallback


@capability
class Steerable:
    pass


class Chassis(Attachment):
    pass


class Engine(Attachment):
    pass


class Wheel(Attachment):
    pass


class NotAnAttachment:
    pass


class AbstractPart(Attachment, abc.ABC):
    @abc.abstractmethod
    def mount(self) -> None: ...


class Fragile(Attachment):
    def __init__(self) -> None:
        raise RuntimeError("boom")


class Car(Attachment):
    chassis: Chassis = ForceInject(SearchScope.ANCESTORS)


class Motorbike(Attachment):
    engine: Engine = ForceInject(SearchScope.DESCENDANTS)
    chassis: Chassis = Inject(SearchScope.ANCESTORS)


class Radio(Attachment):
    engine: Engine = ForceInject(SearchScope.GLOBAL)


class Fleet(Attachment):
    engines: list[Engine] = ForceInject(SearchScope.GLOBAL)


class Truck(Attachment):
    engine: Engine = ForceInject(SearchScope.GLOBAL)
    wheels: list[Wheel] = Inject(SearchScope.DESCENDANTS)
    local_wheel: Wheel = Inject(SearchScope.LOCAL)
    steering: Steerable = Inject(SearchScope.ANCESTORS)


class Tractor(Attachment):
    chassis: Chassis = Inject(SearchScope.ANCESTORS)


class Workshop(Attachment):
    engine: Engine = Inject(SearchScope.GLOBAL)


class Depot(Attachment):
    workshop: Workshop = ForceInject(SearchScope.GLOBAL)


class Garage(Attachment):
    foreign: NotAnAttachment = ForceInject(SearchScope.GLOBAL)
    part: AbstractPart = ForceInject(SearchScope.GLOBAL)
    fragile: Fragile = ForceInject(SearchScope.GLOBAL)


def resolve(scene: SceneGraph, **properties):
    collector = DiagnosticCollector()
    resolver = DependencyResolver(scene, ResolverProperties(**properties), sink=collector)
    return resolver.resolve_graph(), collector


class TestSupportsFallback:
    def test_single_valued_hierarchy_and_global(self):
        for scope in (SearchScope.ANCESTORS, SearchScope.DESCENDANTS, SearchScope.GLOBAL):
            assert supports_fallback(MemberDescriptor(name="engine", declared_type=Engine, search_scope=scope))

    def test_local_never_falls_back(self):
        assert not supports_fallback(MemberDescriptor(name="engine", declared_type=Engine, search_scope=SearchScope.LOCAL))

    def test_collections_only_fall_back_globally(self):
        def collection(scope):
            return MemberDescriptor(name="engines", declared_type=Engine, search_scope=scope, is_collection=True)

        assert supports_fallback(collection(SearchScope.GLOBAL))
        assert not supports_fallback(collection(SearchScope.ANCESTORS))
        assert not supports_fallback(collection(SearchScope.DESCENDANTS))


class TestAncestorFallback:
    def test_created_node_becomes_new_parent(self):
        scene = SceneGraph()
        garage = scene.create_node("Garage")
        scene.create_node("Before", garage)
        car_node = scene.create_node("Car", garage)
        scene.create_node("After", garage)
        owner = scene.attach(car_node, Car)

        report, collector = resolve(scene)

        created = car_node.parent
        assert created is not None and created.name == "chassis"
        assert created.parent is garage
        assert [n.name for n in garage.children] == ["Before", "chassis", "After"]
        assert created.children == (car_node,)
        assert isinstance(owner.chassis, Chassis)
        assert owner.chassis.node is created
        assert report.outcome_for(owner, "chassis").kind is OutcomeKind.ASSIGNED_BY_FALLBACK
        assert report.created_nodes == [created]
        assert len(collector) == 0

    def test_root_owner_keeps_its_root_position(self):
        scene = SceneGraph()
        scene.create_node("First")
        car_node = scene.create_node("Car")
        scene.create_node("Last")
        scene.attach(car_node, Car)

        resolve(scene)

        assert [n.name for n in scene.roots] == ["First", "chassis", "Last"]
        assert car_node.parent.name == "chassis"

    def test_existing_ancestor_is_used_instead(self):
        scene = SceneGraph()
        top = scene.create_node("Top")
        chassis = scene.attach(top, Chassis)
        owner = scene.attach(scene.create_node("Car", top), Car)

        report, _ = resolve(scene)

        assert owner.chassis is chassis
        assert report.created_nodes == []


class TestDescendantFallback:
    def test_created_node_becomes_child(self):
        scene = SceneGraph()
        top = scene.create_node("Top")
        top_chassis = scene.attach(top, Chassis)
        bike_node = scene.create_node("Bike", top)
        owner = scene.attach(bike_node, Motorbike)

        report, _ = resolve(scene)

        assert owner.chassis is top_chassis
        assert [n.name for n in bike_node.children] == ["engine"]
        assert owner.engine.node is bike_node.children[0]
        assert report.outcome_for(owner, "engine").kind is OutcomeKind.ASSIGNED_BY_FALLBACK

    def test_plain_inject_members_of_eligible_owner_also_fall_back(self):
        scene = SceneGraph()
        bike_node = scene.create_node("Bike")
        owner = scene.attach(bike_node, Motorbike)

        report, _ = resolve(scene)

        assert report.outcome_for(owner, "chassis").kind is OutcomeKind.ASSIGNED_BY_FALLBACK
        assert bike_node.parent.name == "chassis"
        assert len(report.created_nodes) == 2


class TestGlobalFallback:
    def test_created_node_is_a_free_root(self):
        scene = SceneGraph()
        radio_node = scene.create_node("Radio", scene.create_node("Dashboard"))
        owner = scene.attach(radio_node, Radio)

        resolve(scene)

        assert owner.engine.node.parent is None
        assert owner.engine.node in scene.roots
        assert owner.engine.node.name == "engine"

    def test_collection_receives_one_created_element(self):
        scene = SceneGraph()
        owner = scene.attach(scene.create_node("HQ"), Fleet)

        report, _ = resolve(scene)

        assert len(owner.engines) == 1
        assert owner.engines[0].node.name == "Engine"
        assert report.outcome_for(owner, "engines").kind is OutcomeKind.ASSIGNED_BY_FALLBACK

    def test_created_nodes_are_not_processed_in_same_pass(self):
        scene = SceneGraph()
        owner = scene.attach(scene.create_node("HQ"), Depot)

        report, _ = resolve(scene)

        created = owner.workshop
        assert isinstance(created, Workshop)
        assert report.outcome_for(created, "engine") is None
        assert [o.owner for o in report.outcomes] == [owner]

        second, _ = resolve(scene)
        assert second.outcome_for(created, "engine").kind is OutcomeKind.FAILED


class TestNoFallback:
    def test_members_that_cannot_fall_back_stay_failed(self):
        scene = SceneGraph()
        scene.attach(scene.create_node("Garage"), Engine)
        owner = scene.attach(scene.create_node("Truck"), Truck)

        report, collector = resolve(scene)

        assert report.outcome_for(owner, "engine").kind is OutcomeKind.ASSIGNED
        assert isinstance(report.outcome_for(owner, "wheels").error, NoSuchDependencyError)
        assert isinstance(report.outcome_for(owner, "local_wheel").error, NoSuchDependencyError)
        steering = report.outcome_for(owner, "steering")
        assert isinstance(steering.error, ForceInjectionError)
        assert steering.error.code == "FORCE_INJECTION"
        assert "capability types cannot be instantiated" in str(steering.error)
        assert report.created_nodes == []
        assert [d.code for d in collector.errors] == ["NO_SUCH_DEPENDENCY", "NO_SUCH_DEPENDENCY", "FORCE_INJECTION"]

    def test_ambiguity_never_falls_back(self):
        scene = SceneGraph()
        top = scene.create_node("Top")
        scene.attach(top, Chassis)
        scene.attach(top, Chassis)
        owner = scene.attach(scene.create_node("Car", top), Car)

        report, _ = resolve(scene)

        assert isinstance(report.outcome_for(owner, "chassis").error, NoUniqueDependencyError)
        assert report.created_nodes == []

    def test_owner_without_force_inject_members_is_not_eligible(self):
        scene = SceneGraph()
        owner = scene.attach(scene.create_node("Tractor"), Tractor)

        report, _ = resolve(scene)

        assert report.outcome_for(owner, "chassis").kind is OutcomeKind.FAILED
        assert report.created_nodes == []
        assert len(scene.all_nodes()) == 1

    def test_disabled_by_properties(self):
        scene = SceneGraph()
        owner = scene.attach(scene.create_node("Car"), Car)

        report, _ = resolve(scene, force_injection_enabled=False)

        assert isinstance(report.outcome_for(owner, "chassis").error, NoSuchDependencyError)
        assert report.created_nodes == []


class TestUninstantiableTypes:
    def test_each_failure_is_reported(self):
        scene = SceneGraph()
        owner = scene.attach(scene.create_node("Garage"), Garage)

        report, _ = resolve(scene)

        reasons = {o.member: o.error.reason for o in report.failed}
        assert reasons["foreign"] == "NotAnAttachment is not an Attachment type"
        assert reasons["part"] == "AbstractPart is abstract"
        assert reasons["fragile"] == "creating Fragile raised RuntimeError: boom"
        assert owner.fragile is None
        (stray,) = report.created_nodes
        assert stray.name == "fragile"
        assert stray.attachments == ()
        assert stray in scene.roots
