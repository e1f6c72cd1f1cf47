"""Unified exception hierarchy for scenewire.

All library exceptions inherit from SceneWireException, enabling unified
error handling across modules.

Categories:
- ConfigurationException: Malformed injection metadata, rejected at definition time
- InternalResolverException: Engine invariant violations that abort a pass
- ResolutionException: Per-member failures, reported and never fatal to a pass
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class SceneWireException(Exception):
    """Base exception for all scenewire errors.

    Carries an optional error code and context dict for structured error data.
    Catch SceneWireException to handle every library error, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "NO_SUCH_DEPENDENCY").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(SceneWireException):
    """Invalid metadata or configuration detected before any pass runs."""


# =============================================================================
# Internal Exceptions
# =============================================================================


class InternalResolverException(SceneWireException):
    """An engine invariant was violated; the current pass cannot continue."""


# =============================================================================
# Resolution Exceptions
# =============================================================================


class ResolutionException(SceneWireException):
    """A single member could not be resolved or injected.

    Raised inside a resolution pass and converted to a diagnostic by the
    resolver; the pass always continues with the next member.
    """
