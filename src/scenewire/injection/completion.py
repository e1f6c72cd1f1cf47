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
"""Completion dispatch: call the owner's callback after a successful injection."""

from __future__ import annotations

import inspect
from collections.abc import Sequence
from typing import Any

from scenewire.injection.descriptor import MemberDescriptor
from scenewire.injection.exceptions import CompletionCallbackError

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def dispatch_completion(owner: Any, descriptor: MemberDescriptor, injected: Sequence[Any]) -> bool:
    """Invoke ``descriptor.completion_callback`` on *owner*, if one is declared.

    A callback taking no parameters is called without arguments. A callback
    taking one parameter receives a new list of the injected attachments,
    also when the member is single-valued.

    Returns True when a callback ran. Raises :class:`CompletionCallbackError`
    for a missing or incompatible callback and for exceptions it raises.
    """
    name = descriptor.completion_callback
    if not name:
        return False

    method = getattr(owner, name, None)
    if method is None or not callable(method):
        raise CompletionCallbackError(
            f"{type(owner).__qualname__} has no method named '{name}'", owner=owner, descriptor=descriptor
        )

    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError) as exc:
        raise CompletionCallbackError(f"cannot inspect signature: {exc}", owner=owner, descriptor=descriptor) from exc

    params = list(signature.parameters.values())
    positional = [p for p in params if p.kind in _POSITIONAL]
    required = [p for p in positional if p.default is inspect.Parameter.empty]
    required_kw = [p for p in params if p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty]
    if len(required) > 1 or required_kw:
        raise CompletionCallbackError(
            f"expected no parameters or one parameter, got signature {signature}", owner=owner, descriptor=descriptor
        )

    takes_argument = bool(positional) or any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
    args = (list(injected),) if takes_argument else ()
    try:
        method(*args)
    except Exception as exc:
        raise CompletionCallbackError(
            f"raised {type(exc).__name__}: {exc}", owner=owner, descriptor=descriptor
        ) from exc
    return True
