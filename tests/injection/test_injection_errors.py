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
"""Tests for developer-friendly injection error messages."""

from scenewire.graph import Attachment, SceneGraph
from scenewire.injection import (
    CompletionCallbackError,
    Disambiguation,
    ForceInjectionError,
    InjectionAssignmentError,
    MemberDescriptor,
    NoSuchDependencyError,
    NoUniqueDependencyError,
    SearchScope,
    UnsupportedSearchScopeError,
)
from scenewire.injection.exceptions import describe_candidate
from scenewire.kernel import InternalResolverException, ResolutionException, SceneWireException


# -- Fixtures --


class Camera(Attachment):
    pass


class Tracker(Attachment):
    pass


def owner_on_path():
    scene = SceneGraph()
    rig = scene.create_node("Rig")
    owner = scene.attach(scene.create_node("Head", rig), Tracker)
    return scene, owner


def camera_descriptor(**kwargs) -> MemberDescriptor:
    kwargs.setdefault("search_scope", SearchScope.ANCESTORS)
    return MemberDescriptor(name="camera", declared_type=Camera, **kwargs)


# -- Tests --


class TestNoSuchDependencyError:
    def test_message_layout(self):
        _, owner = owner_on_path()
        err = NoSuchDependencyError(
            owner=owner, descriptor=camera_descriptor(), searched="on any ancestor of node 'Rig/Head'"
        )
        lines = str(err).splitlines()
        assert lines[0] == "NoSuchDependencyError: No attachment of type 'Camera' found on any ancestor of node 'Rig/Head'"
        assert lines[2] == "  Required by: Tracker on node 'Rig/Head'"
        assert lines[3] == "    Field: camera: Camera = Inject(ANCESTORS)"
        assert "  Suggestions:" in lines
        assert "    - Declare a ForceInject member on the owner to create missing dependencies" in lines

    def test_code_and_context(self):
        _, owner = owner_on_path()
        err = NoSuchDependencyError(owner=owner, descriptor=camera_descriptor(), searched="anywhere")
        assert err.code == "NO_SUCH_DEPENDENCY"
        assert err.context == {
            "owner_type": "Tracker",
            "node": "Rig/Head",
            "member": "camera",
            "declared_type": "Camera",
        }
        assert isinstance(err, ResolutionException)
        assert isinstance(err, SceneWireException)

    def test_name_hint(self):
        _, owner = owner_on_path()
        d = camera_descriptor(search_scope=SearchScope.DESCENDANTS, disambiguation=Disambiguation.BY_NAME)
        err = NoSuchDependencyError(owner=owner, descriptor=d, searched="below node 'Rig/Head'")
        assert "Check that the providing node is named 'camera'" in str(err)
        assert "disambiguation=BY_NAME" in str(err)

    def test_local_scope_has_no_force_inject_hint(self):
        _, owner = owner_on_path()
        err = NoSuchDependencyError(
            owner=owner, descriptor=camera_descriptor(search_scope=SearchScope.LOCAL), searched="here"
        )
        assert "ForceInject" not in str(err)

    def test_collection_type_name(self):
        _, owner = owner_on_path()
        d = camera_descriptor(search_scope=SearchScope.GLOBAL, is_collection=True)
        err = NoSuchDependencyError(owner=owner, descriptor=d, searched="anywhere in the scene graph")
        assert "No attachment of type 'list[Camera]'" in str(err)


class TestNoUniqueDependencyError:
    def test_lists_candidates(self):
        scene, owner = owner_on_path()
        rig = scene.find("Rig")
        first = scene.attach(rig, Camera)
        second = scene.attach(rig, Camera)
        err = NoUniqueDependencyError(owner=owner, descriptor=camera_descriptor(), candidates=[first, second])
        assert err.candidates == [first, second]
        assert err.code == "NO_UNIQUE_DEPENDENCY"
        assert "Found 2 attachments matching 'Camera' where exactly one is required" in str(err)
        assert "Candidates: [\"Camera on 'Rig'\", \"Camera on 'Rig'\"]" in str(err)

    def test_describe_candidate(self):
        scene, _ = owner_on_path()
        camera = scene.attach(scene.find("Head"), Camera)
        assert describe_candidate(camera) == "Camera on 'Rig/Head'"
        assert describe_candidate(Camera()) == "Camera on '<detached>'"


class TestOtherInjectionErrors:
    def test_force_injection_error(self):
        _, owner = owner_on_path()
        err = ForceInjectionError("Camera is abstract", owner=owner, descriptor=camera_descriptor())
        assert err.code == "FORCE_INJECTION"
        assert err.reason == "Camera is abstract"
        assert str(err).startswith("ForceInjectionError: Cannot force-inject 'Camera': Camera is abstract")

    def test_completion_callback_error(self):
        _, owner = owner_on_path()
        d = camera_descriptor(completion_callback="on_camera")
        err = CompletionCallbackError("raised KeyError: 'x'", owner=owner, descriptor=d)
        assert err.code == "COMPLETION_CALLBACK"
        assert "Completion callback 'on_camera' failed: raised KeyError: 'x'" in str(err)
        assert "on_complete='on_camera'" in str(err)

    def test_injection_assignment_error(self):
        _, owner = owner_on_path()
        cause = AttributeError("can't set")
        err = InjectionAssignmentError(cause, owner=owner, descriptor=camera_descriptor())
        assert err.cause is cause
        assert err.code == "INJECTION_ASSIGNMENT"
        assert "Assigning 'camera' raised AttributeError: can't set" in str(err)

    def test_property_category(self):
        _, owner = owner_on_path()
        d = camera_descriptor(category="property")
        err = ForceInjectionError("nope", owner=owner, descriptor=d)
        assert "    Property: camera: Camera = Inject(ANCESTORS)" in str(err).splitlines()


class TestUnsupportedSearchScopeError:
    def test_is_internal(self):
        err = UnsupportedSearchScopeError("SIDEWAYS")
        assert isinstance(err, InternalResolverException)
        assert not isinstance(err, ResolutionException)
        assert err.scope == "SIDEWAYS"
        assert "SIDEWAYS" in str(err)
