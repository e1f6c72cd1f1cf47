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
"""scenewire injection: declarative dependency resolution over a scene graph."""

from scenewire.injection.capability import capability, implements, is_capability
from scenewire.injection.descriptor import MemberDescriptor
from scenewire.injection.diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticSink,
    LoggingDiagnosticSink,
    Severity,
)
from scenewire.injection.exceptions import (
    CompletionCallbackError,
    DescriptorConfigurationError,
    ForceInjectionError,
    InjectionAssignmentError,
    InjectionError,
    MemberVisibilityError,
    NoSuchDependencyError,
    NoUniqueDependencyError,
    UnsupportedSearchScopeError,
)
from scenewire.injection.inject import ForceInject, Inject
from scenewire.injection.outcome import OutcomeKind, ResolutionOutcome, ResolutionReport
from scenewire.injection.properties import ResolverProperties
from scenewire.injection.resolver import DependencyResolver
from scenewire.injection.types import Disambiguation, SearchScope

__all__ = [
    "CompletionCallbackError",
    "DependencyResolver",
    "DescriptorConfigurationError",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticSink",
    "Disambiguation",
    "ForceInject",
    "ForceInjectionError",
    "Inject",
    "InjectionAssignmentError",
    "InjectionError",
    "LoggingDiagnosticSink",
    "MemberDescriptor",
    "MemberVisibilityError",
    "NoSuchDependencyError",
    "NoUniqueDependencyError",
    "OutcomeKind",
    "ResolutionOutcome",
    "ResolutionReport",
    "ResolverProperties",
    "SearchScope",
    "Severity",
    "UnsupportedSearchScopeError",
    "capability",
    "implements",
    "is_capability",
]
