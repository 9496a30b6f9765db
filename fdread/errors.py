'''
Copyright (c) 2024 Beijing Volcano Engine Technology Ltd.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
'''

from typing import Any


def _describe_received(value: Any) -> str:
    if value is None:
        return "Received None"
    if callable(value) and hasattr(value, "__name__"):
        return f"Received function {value.__name__}"
    inspected = repr(value)
    if len(inspected) > 28:
        inspected = inspected[:25] + "..."
    return f"Received type {type(value).__name__} ({inspected})"


class InvalidArgTypeError(TypeError):
    code = "ERR_INVALID_ARG_TYPE"

    def __init__(self, name: str, expected: str, actual: Any) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f'The "{name}" argument must be of type {expected}. {_describe_received(actual)}')


class InvalidArgValueError(ValueError):
    code = "ERR_INVALID_ARG_VALUE"

    def __init__(self, name: str, value: Any, reason: str = "is invalid") -> None:
        self.name = name
        self.value = value
        self.reason = reason
        inspected = repr(value)
        if len(inspected) > 128:
            inspected = inspected[:128] + "..."
        super().__init__(f"The argument '{name}' {reason}. Received {inspected}")


class PreconditionViolation(AssertionError):
    """Raised when the caller breaks a contract of the read primitive.

    This is a caller bug, not a runtime condition: it is raised before any I/O
    and is never routed to a read callback.
    """


class ReadFailure(RuntimeError):
    """Wraps a non-OSError fault raised by a descriptor backend."""


def ensure_precondition(condition: bool, message: str) -> None:
    if not condition:
        raise PreconditionViolation(message)
