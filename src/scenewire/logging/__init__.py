"""Logging backends for the resolver: the LoggingPort contract and its structlog implementation."""

from scenewire.logging.port import LoggingPort
from scenewire.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
