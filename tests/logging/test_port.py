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
"""Tests for the LoggingPort protocol."""

from typing import Any

from scenewire.core.config import Config
from scenewire.graph import SceneGraph
from scenewire.injection import DependencyResolver, DiagnosticCollector, LoggingDiagnosticSink
from scenewire.logging import LoggingPort


class RecordingLogging:
    def __init__(self) -> None:
        self.configured_with = None
        self.requested = []

    def configure(self, config: Config) -> None:
        self.configured_with = config

    def get_logger(self, name: str) -> Any:
        self.requested.append(name)
        return object()


class TestLoggingPortProtocol:
    def test_conforming_class_is_instance(self):
        assert isinstance(RecordingLogging(), LoggingPort)

    def test_non_conforming_class_is_not_instance(self):
        class Incomplete:
            def get_logger(self, name: str) -> Any:
                pass

        assert not isinstance(Incomplete(), LoggingPort)

    def test_level_control_is_not_required(self):
        assert not hasattr(RecordingLogging, "set_level")
        assert isinstance(RecordingLogging(), LoggingPort)


class TestResolverLoggingWiring:
    def test_from_config_configures_port_and_sink(self):
        port = RecordingLogging()
        config = Config({})
        resolver = DependencyResolver.from_config(SceneGraph(), config, logging_port=port)
        assert port.configured_with is config
        assert port.requested == ["scenewire.diagnostics"]
        assert isinstance(resolver._sink, LoggingDiagnosticSink)

    def test_explicit_sink_wins(self):
        port = RecordingLogging()
        collector = DiagnosticCollector()
        resolver = DependencyResolver.from_config(SceneGraph(), Config({}), sink=collector, logging_port=port)
        assert resolver._sink is collector
        assert port.requested == []
