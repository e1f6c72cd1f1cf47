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
"""DependencyResolver: runs resolution passes over a scene graph."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from scenewire.core.config import Config
from scenewire.graph.port import GraphHost
from scenewire.graph.scene import Attachment, Node
from scenewire.graph.traversal import descendants_of, is_active_in_hierarchy
from scenewire.injection.completion import dispatch_completion
from scenewire.injection.descriptor import MemberDescriptor
from scenewire.injection.diagnostics import Diagnostic, DiagnosticSink, LoggingDiagnosticSink, Severity
from scenewire.injection.discovery import find_injectable_members, has_injectable_members
from scenewire.injection.exceptions import (
    CompletionCallbackError,
    InjectionAssignmentError,
    NoSuchDependencyError,
    NoUniqueDependencyError,
    describe_candidate,
)
from scenewire.injection.fallback import force_inject, supports_fallback
from scenewire.injection.outcome import OutcomeKind, ResolutionOutcome, ResolutionReport
from scenewire.injection.properties import ResolverProperties
from scenewire.injection.strategies import SearchContext, find_dependencies, strategy_for
from scenewire.kernel.exceptions import ResolutionException
from scenewire.logging.port import LoggingPort

logger = structlog.get_logger("scenewire.injection")


class DependencyResolver:
    """Resolves every injectable member found in a graph or subtree.

    A pass first snapshots the owners to process, then resolves their members
    one by one. Per-member failures are reported through the diagnostic sink
    and recorded in the returned :class:`ResolutionReport`; the pass always
    continues. Nodes created by force-injection are never processed in the
    pass that created them.

    Not thread-safe: the graph must not be mutated elsewhere during a pass.
    """

    def __init__(
        self,
        host: GraphHost,
        properties: ResolverProperties | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._host = host
        self._properties = properties or ResolverProperties()
        self._sink = sink if sink is not None else LoggingDiagnosticSink()
        self._context = SearchContext(host=host, include_inactive=self._properties.include_inactive)

    @classmethod
    def from_config(
        cls,
        host: GraphHost,
        config: Config,
        sink: DiagnosticSink | None = None,
        logging_port: LoggingPort | None = None,
    ) -> DependencyResolver:
        """Create a resolver with properties bound from the ``scenewire.resolver`` section.

        When *logging_port* is given it is configured from the same config, and
        diagnostics go to its ``scenewire.diagnostics`` logger unless *sink* is
        passed.
        """
        if logging_port is not None:
            logging_port.configure(config)
            if sink is None:
                sink = LoggingDiagnosticSink(logging_port.get_logger("scenewire.diagnostics"))
        return cls(host, properties=config.bind(ResolverProperties), sink=sink)

    @property
    def properties(self) -> ResolverProperties:
        return self._properties

    def resolve_graph(self) -> ResolutionReport:
        """Resolve every owner in the whole graph."""
        return self._resolve(self._host.all_nodes())

    def resolve_subtree(self, root: Node) -> ResolutionReport:
        """Resolve the owners on *root* and every node below it."""
        return self._resolve([root, *descendants_of(self._host, root)])

    # ------------------------------------------------------------------
    # Pass
    # ------------------------------------------------------------------

    def _resolve(self, nodes: Sequence[Node]) -> ResolutionReport:
        report = ResolutionReport()
        owners = self._find_owners(nodes)
        discovery_sink = _PassSink(report, self._sink)

        for owner in owners:
            scan = find_injectable_members(owner, discovery_sink)
            for descriptor in scan.descriptors:
                outcome = self._resolve_member(report, owner, descriptor, scan.force_injectable)
                report.outcomes.append(outcome)

        logger.info(
            "resolution_pass_complete",
            owners=len(owners),
            assigned=len(report.succeeded),
            failed=len(report.failed),
            created=len(report.created_nodes),
        )
        return report

    def _find_owners(self, nodes: Sequence[Node]) -> list[Attachment]:
        owners: list[Attachment] = []
        for node in nodes:
            if not self._properties.include_inactive and not is_active_in_hierarchy(self._host, node):
                continue
            owners.extend(a for a in self._host.attachments_of(node) if has_injectable_members(type(a)))
        return owners

    def _resolve_member(
        self,
        report: ResolutionReport,
        owner: Attachment,
        descriptor: MemberDescriptor,
        force_injectable: bool,
    ) -> ResolutionOutcome:
        try:
            found = find_dependencies(self._context, owner, descriptor)
            if found:
                return self._inject(report, owner, descriptor, found, OutcomeKind.ASSIGNED)

            if force_injectable and self._properties.force_injection_enabled and supports_fallback(descriptor):
                created = force_inject(self._host, owner, descriptor, report.created_nodes)
                return self._inject(report, owner, descriptor, [created], OutcomeKind.ASSIGNED_BY_FALLBACK)

            raise NoSuchDependencyError(
                owner=owner,
                descriptor=descriptor,
                searched=strategy_for(descriptor.search_scope).describe(owner),
            )
        except ResolutionException as exc:
            self._report(
                report,
                Diagnostic.from_exception(exc, node=owner.node, attachment=owner, member=descriptor.name),
            )
            if isinstance(exc, NoUniqueDependencyError):
                for candidate in exc.candidates:
                    self._report(
                        report,
                        Diagnostic(
                            severity=Severity.WARNING,
                            code="DUPLICATE_DEPENDENCY",
                            message=f"Duplicate dependency: {describe_candidate(candidate)}",
                            node=candidate.node,
                            attachment=candidate,
                            member=descriptor.name,
                        ),
                    )
            return ResolutionOutcome(owner=owner, descriptor=descriptor, kind=OutcomeKind.FAILED, error=exc)

    def _inject(
        self,
        report: ResolutionReport,
        owner: Attachment,
        descriptor: MemberDescriptor,
        found: list[Any],
        kind: OutcomeKind,
    ) -> ResolutionOutcome:
        value = descriptor.build_value(found)
        try:
            descriptor.set_value(owner, value)
        except Exception as exc:
            raise InjectionAssignmentError(exc, owner=owner, descriptor=descriptor) from exc

        if self._properties.log_injections:
            logger.debug(
                "dependency_injected",
                owner=type(owner).__name__,
                node=owner.node.path,
                member=descriptor.name,
                injected=[describe_candidate(a) for a in found],
                fallback=kind is OutcomeKind.ASSIGNED_BY_FALLBACK,
            )

        outcome = ResolutionOutcome(owner=owner, descriptor=descriptor, kind=kind, value=value)
        try:
            dispatch_completion(owner, descriptor, found)
        except CompletionCallbackError as exc:
            outcome.callback_error = exc
            self._report(
                report,
                Diagnostic.from_exception(exc, node=owner.node, attachment=owner, member=descriptor.name),
            )
        return outcome

    def _report(self, report: ResolutionReport, diagnostic: Diagnostic) -> None:
        report.diagnostics.append(diagnostic)
        self._sink.emit(diagnostic)


class _PassSink:
    """Records diagnostics on the pass report before forwarding them."""

    def __init__(self, report: ResolutionReport, sink: DiagnosticSink) -> None:
        self._report = report
        self._sink = sink

    def emit(self, diagnostic: Diagnostic) -> None:
        self._report.diagnostics.append(diagnostic)
        self._sink.emit(diagnostic)
