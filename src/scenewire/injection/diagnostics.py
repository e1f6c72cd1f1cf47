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
"""Structured diagnostic channel for resolution failures and warnings."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

import structlog

from scenewire.kernel.exceptions import SceneWireException

logger = structlog.get_logger("scenewire.diagnostics")


class Severity(Enum):
    """Diagnostic severity, mapped onto logger methods."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """One reported condition, with the node/attachment/member it concerns."""

    severity: Severity
    code: str
    message: str
    node: Any = None
    attachment: Any = None
    member: str | None = None

    @classmethod
    def from_exception(
        cls,
        exc: SceneWireException,
        *,
        severity: Severity = Severity.ERROR,
        node: Any = None,
        attachment: Any = None,
        member: str | None = None,
    ) -> Diagnostic:
        return cls(
            severity=severity,
            code=exc.code or type(exc).__name__,
            message=str(exc),
            node=node,
            attachment=attachment,
            member=member,
        )


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives every diagnostic emitted during a resolution pass."""

    def emit(self, diagnostic: Diagnostic) -> None: ...


class LoggingDiagnosticSink:
    """Default sink: forwards diagnostics to structlog."""

    def __init__(self, log: Any = None) -> None:
        self._log = log if log is not None else logger

    def emit(self, diagnostic: Diagnostic) -> None:
        log_method = getattr(self._log, diagnostic.severity.value)
        log_method(
            diagnostic.message,
            code=diagnostic.code,
            node=getattr(diagnostic.node, "path", diagnostic.node),
            attachment=type(diagnostic.attachment).__name__ if diagnostic.attachment is not None else None,
            member=diagnostic.member,
        )


class DiagnosticCollector:
    """In-memory sink, handy for tests and tooling."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    def with_code(self, code: str) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def clear(self) -> None:
        self.diagnostics.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)
