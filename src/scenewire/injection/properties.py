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
"""Resolver configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from scenewire.core.config import config_properties


@config_properties(prefix="scenewire.resolver")
@dataclass
class ResolverProperties:
    """Switches read from the ``scenewire.resolver`` section.

    ``include_inactive`` also lets local and global searches, and owner
    discovery, see nodes that are inactive in the hierarchy.
    ``force_injection_enabled`` turns force-injection off globally.
    ``log_injections`` logs every successful assignment at DEBUG.
    """

    include_inactive: bool = False
    force_injection_enabled: bool = True
    log_injections: bool = True
