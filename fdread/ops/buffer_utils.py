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

import numpy as np

from fdread.errors import InvalidArgTypeError

BUFFER_TYPE_NAME = "an instance of numpy.ndarray, bytearray or memoryview"


def alloc_buffer(size: int) -> np.ndarray:
    return np.zeros(size, dtype=np.uint8)


def is_buffer(obj: Any) -> bool:
    if isinstance(obj, (np.ndarray, bytearray, memoryview)):
        return True
    try:
        memoryview(obj).release()
    except TypeError:
        return False
    return True


def as_byte_view(buffer: Any) -> memoryview:
    """Return a writable, flat ``uint8`` memoryview over ``buffer``.

    numpy arrays of any dtype are accepted as long as they are C-contiguous
    and writeable; their capacity is ``nbytes``.
    """
    if isinstance(buffer, np.ndarray):
        if not buffer.flags.c_contiguous or not buffer.flags.writeable:
            raise InvalidArgTypeError("buffer", "a writeable C-contiguous numpy.ndarray", buffer)
        return memoryview(buffer.reshape(-1).view(np.uint8))

    try:
        view = memoryview(buffer)
    except TypeError:
        raise InvalidArgTypeError("buffer", BUFFER_TYPE_NAME, buffer)
    if view.readonly:
        raise InvalidArgTypeError("buffer", BUFFER_TYPE_NAME, buffer)
    if not view.c_contiguous:
        raise InvalidArgTypeError("buffer", "a C-contiguous buffer", buffer)
    return view.cast("B")


def buffer_capacity(view: memoryview) -> int:
    return view.nbytes


def sub_view(view: memoryview, offset: int, length: int) -> np.ndarray:
    # shares memory with the caller's buffer, extent is not bounded by bytes read
    return np.frombuffer(view, dtype=np.uint8)[offset : offset + length]
