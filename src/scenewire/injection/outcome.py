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
"""Per-member resolution outcomes and the report returned by every pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from scenewire.injection.descriptor import MemberDescriptor
from scenewire.injection.diagnostics import Diagnostic, Severity
from scenewire.kernel.exceptions import ResolutionException


class OutcomeKind(Enum):
    ASSIGNED = auto()
    ASSIGNED_BY_FALLBACK = auto()
    FAILED = auto()


@dataclass
class ResolutionOutcome:
    """What happened to one member of one owner.

    ``error`` is set for failures. ``callback_error`` is set when the value
    was assigned but the completion callback could not be run.
    """

    owner: Any
    descriptor: MemberDescriptor
    kind: OutcomeKind
    value: Any = None
    error: ResolutionException | None = None
    callback_error: ResolutionException | None = None

    @property
    def succeeded(self) -> bool:
        return self.kind is not OutcomeKind.FAILED

    @property
    def member(self) -> str:
        return self.descriptor.name


@dataclass
class ResolutionReport:
    """Everything a resolution pass did: outcomes, diagnostics, created nodes."""

    outcomes: list[ResolutionOutcome] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    created_nodes: list[Any] = field(default_factory=list)

    @property
    def succeeded(self) -> list[ResolutionOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[ResolutionOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    def outcome_for(self, owner: Any, member: str) -> ResolutionOutcome | None:
        for outcome in self.outcomes:
            if outcome.owner is owner and outcome.member == member:
                return outcome
        return None
