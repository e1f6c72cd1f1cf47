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
"""StructlogAdapter: default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from scenewire.core.config import Config
from scenewire.kernel.exceptions import ConfigurationException

_FORMATS = ("console", "plain", "json")


class StructlogAdapter:
    """Logging adapter backed by structlog over stdlib logging.

    Reads ``scenewire.logging.format`` and ``scenewire.logging.level.*``.
    ``root`` sets the root level; any other key names a logger such as
    ``scenewire.injection`` or ``scenewire.diagnostics``.

    Formats: ``console`` (coloured), ``plain`` (no colours, for CI logs) and
    ``json`` (one object per line).
    """

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section("scenewire.logging.level"))
        fmt = str(config.get("scenewire.logging.format", "console")).lower()
        if fmt not in _FORMATS:
            raise ConfigurationException(
                f"Unknown log format '{fmt}', expected one of {', '.join(_FORMATS)}",
                code="LOGGING_FORMAT",
                context={"format": fmt},
            )

        self._format = fmt
        self._root_level = str(levels.pop("root", "INFO")).upper()
        self._module_levels = {name: str(level).upper() for name, level in levels.items()}

        structlog.configure(
            processors=[*self._shared_processors(), self._renderer()],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_level(self._root_level), force=True)
        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))

    @staticmethod
    def _shared_processors() -> list[structlog.types.Processor]:
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]

    def _renderer(self) -> structlog.types.Processor:
        if self._format == "json":
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer(colors=self._format == "console")


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
