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

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from fdread.config import get_config
from fdread.errors import InvalidArgTypeError, InvalidArgValueError, ensure_precondition
from fdread.ops.buffer_utils import BUFFER_TYPE_NAME, alloc_buffer, as_byte_view, buffer_capacity, is_buffer
from fdread.types import BUFFER, ReadCallback


OPTION_FIELDS = ("buffer", "offset", "length", "position")
# read_sync fills the buffer it is given
SYNC_OPTION_FIELDS = ("offset", "length", "position")


class CallShape(Enum):
    CALLBACK_ONLY = "callback_only"  # read(fd, callback)
    OPTIONS = "options"  # read(fd, options, callback) / read_sync(fd, buffer, options)
    EXPLICIT = "explicit"  # read(fd, buffer, offset, length, position, callback)


@dataclass
class ReadOptions:
    buffer: Optional[BUFFER] = None
    offset: Optional[int] = None
    length: Optional[int] = None
    position: Optional[int] = None

    @classmethod
    def from_value(cls, value: Any, allowed: Tuple[str, ...] = OPTION_FIELDS) -> "ReadOptions":
        if value is None:
            return cls()
        if isinstance(value, cls):
            options = value
            present = {name for name in OPTION_FIELDS if getattr(value, name) is not None}
        else:
            options = cls(
                buffer=value.get("buffer"),
                offset=value.get("offset"),
                length=value.get("length"),
                position=value.get("position"),
            )
            present = set(value)
        unknown = present - set(allowed)
        if unknown:
            raise InvalidArgValueError("options", value, f"has unknown fields {sorted(unknown)}")
        return options


@dataclass
class ReadRequest:
    fd: int
    buffer: BUFFER
    view: memoryview
    offset: int
    length: int
    position: Optional[int]
    callback: Optional[ReadCallback] = None

    @property
    def capacity(self) -> int:
        return buffer_capacity(self.view)

    @property
    def target(self) -> memoryview:
        return self.view[self.offset : self.offset + self.length]


def _is_options(value: Any) -> bool:
    return value is None or isinstance(value, (ReadOptions, Mapping))


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def check_fd(fd: Any) -> int:
    if not _is_integer(fd):
        raise InvalidArgTypeError("fd", "number", fd)
    return int(fd)


def _integer_arg(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    if not _is_integer(value):
        raise InvalidArgTypeError(name, "number", value)
    return int(value)


def _position_arg(value: Any) -> Optional[int]:
    if value is None:
        return None
    if not _is_integer(value):
        raise InvalidArgTypeError("position", "integer", value)
    # a negative position reads at the cursor, like None
    return int(value) if value >= 0 else None


def resolve_callback(buffer_or_options: Any, offset: Any, callback: Any) -> ReadCallback:
    for candidate in (offset, buffer_or_options, callback):
        if callable(candidate) and not is_buffer(candidate):
            return candidate
    raise InvalidArgTypeError("cb", "Callback", callback)


def classify_read_args(buffer_or_options: Any, offset: Any) -> CallShape:
    if callable(buffer_or_options) and not is_buffer(buffer_or_options):
        return CallShape.CALLBACK_ONLY
    if _is_options(buffer_or_options):
        return CallShape.OPTIONS
    if is_buffer(buffer_or_options):
        return CallShape.EXPLICIT
    raise InvalidArgTypeError("buffer", BUFFER_TYPE_NAME, buffer_or_options)


def classify_read_sync_args(offset_or_options: Any) -> CallShape:
    if _is_integer(offset_or_options):
        return CallShape.EXPLICIT
    if _is_options(offset_or_options):
        return CallShape.OPTIONS
    raise InvalidArgTypeError("offset", "number", offset_or_options)


def validate_request(request: ReadRequest) -> ReadRequest:
    capacity = request.capacity
    if capacity == 0:
        raise InvalidArgValueError("buffer", request.buffer, "is empty and cannot be written")
    ensure_precondition(request.offset >= 0, "offset should be greater or equal to 0")
    ensure_precondition(request.length >= 0, "length should be greater or equal to 0")
    ensure_precondition(
        request.offset + request.length <= capacity,
        f"buffer doesn't have enough data: byteLength = {capacity}, "
        f"offset = {request.offset}, length = {request.length}, "
        f"offset + length = {request.offset + request.length}",
    )
    return request


def normalize_read_args(
    fd: Any,
    buffer_or_options: Any = None,
    offset: Any = None,
    length: Any = None,
    position: Any = None,
    callback: Any = None,
) -> ReadRequest:
    """Resolve the call shapes of the callback entry point into one request.

    The callback is looked up in the offset slot first, then in the
    buffer/options slot, then in the trailing slot.
    """
    fd = check_fd(fd)
    cb = resolve_callback(buffer_or_options, offset, callback)
    shape = classify_read_args(buffer_or_options, offset)

    if shape is CallShape.CALLBACK_ONLY:
        buffer = alloc_buffer(get_config().default_buffer_size)
        view = as_byte_view(buffer)
        request = ReadRequest(fd, buffer, view, 0, buffer_capacity(view), None, cb)
    elif shape is CallShape.OPTIONS:
        opts = ReadOptions.from_value(buffer_or_options)
        buffer = opts.buffer if opts.buffer is not None else alloc_buffer(get_config().default_buffer_size)
        view = as_byte_view(buffer)
        request = ReadRequest(
            fd,
            buffer,
            view,
            _integer_arg("offset", opts.offset, 0),
            _integer_arg("length", opts.length, buffer_capacity(view)),
            _position_arg(opts.position),
            cb,
        )
    else:
        buffer = buffer_or_options
        view = as_byte_view(buffer)
        request = ReadRequest(
            fd,
            buffer,
            view,
            0 if callable(offset) else _integer_arg("offset", offset, 0),
            _integer_arg("length", length, 0),
            _position_arg(position),
            cb,
        )

    return validate_request(request)


def normalize_read_sync_args(
    fd: Any,
    buffer: Any,
    offset_or_options: Any = None,
    length: Any = None,
    position: Any = None,
) -> ReadRequest:
    fd = check_fd(fd)
    view = as_byte_view(buffer)
    shape = classify_read_sync_args(offset_or_options)

    if shape is CallShape.EXPLICIT:
        request = ReadRequest(
            fd,
            buffer,
            view,
            int(offset_or_options),
            _integer_arg("length", length, 0),
            _position_arg(position),
        )
    else:
        opts = ReadOptions.from_value(offset_or_options, allowed=SYNC_OPTION_FIELDS)
        request = ReadRequest(
            fd,
            buffer,
            view,
            _integer_arg("offset", opts.offset, 0),
            _integer_arg("length", opts.length, buffer_capacity(view)),
            _position_arg(opts.position),
        )

    return validate_request(request)
