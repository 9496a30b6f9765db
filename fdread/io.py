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

from typing import Any, Optional

from fdread.ops.buffer_utils import sub_view
from fdread.ops.posix_utils import PosixFile
from fdread.ops.read_utils import read_to_view
from fdread.request import normalize_read_args, normalize_read_sync_args
from fdread.types import FD


def read(
    fd: FD,
    buffer_or_options: Any = None,
    offset: Any = None,
    length: Optional[int] = None,
    position: Optional[int] = None,
    callback: Any = None,
    posix_file: Optional[PosixFile] = None,
) -> None:
    """Read from a file descriptor and report the result to a callback.

    Accepted call shapes are ``read(fd, callback)``, ``read(fd, options, callback)``
    and ``read(fd, buffer, offset, length, position, callback)``. The read is
    performed inline and the callback is invoked before this function returns.

    Args:
        fd (int): open file descriptor, it is neither opened nor closed here
        buffer_or_options: destination buffer, a ReadOptions / mapping, or the callback
        offset (int, optional): first byte of the buffer to fill. Defaults to 0.
        length (int, optional): number of bytes to read. Defaults to 0 for an explicit
            buffer and to the buffer capacity otherwise.
            Note that ``read(fd, buffer, callback)`` therefore reads nothing and reports a
            0-length view; pass ``length`` or use an options record to fill the buffer.
        position (int, optional): file offset to read from; None or negative reads at
            the cursor. When given, the cursor is restored after a successful read.
        callback (Callable): called as ``callback(None, bytes_read, view)`` on success
            and as ``callback(err)`` on an I/O failure.
        posix_file (PosixFile, optional): descriptor operations. Defaults to the OS.

    Raises:
        InvalidArgTypeError: fd is not an integer or no callback is given
        InvalidArgValueError: the buffer is empty
        PreconditionViolation: offset is negative or offset + length exceeds the buffer

    Examples:
        ```
        import os
        import fdread

        fd = os.open("data.bin", os.O_RDONLY)
        fdread.read(fd, lambda err, n=None, data=None: print(err, n, bytes(data[:n])))
        ```
    """
    request = normalize_read_args(fd, buffer_or_options, offset, length, position, callback)

    try:
        bytes_read = read_to_view(request.fd, request.target, request.position, posix_file=posix_file)
    except Exception as e:
        request.callback(e)
        return

    request.callback(None, bytes_read, sub_view(request.view, request.offset, request.length))


def read_sync(
    fd: FD,
    buffer: Any,
    offset_or_options: Any = None,
    length: Optional[int] = None,
    position: Optional[int] = None,
    posix_file: Optional[PosixFile] = None,
) -> int:
    """Read from a file descriptor into ``buffer`` and return the byte count.

    Accepted call shapes are ``read_sync(fd, buffer, offset, length, position)``
    and ``read_sync(fd, buffer, options)``.

    Args:
        fd (int): open file descriptor
        buffer: numpy array, bytearray or writable memoryview to fill
        offset_or_options: first byte of the buffer to fill, or a ReadOptions / mapping
            with ``offset`` (default 0), ``length`` (default capacity) and ``position``
        length (int, optional): number of bytes to read. Defaults to 0.
        position (int, optional): file offset to read from; None or negative reads at
            the cursor.
        posix_file (PosixFile, optional): descriptor operations. Defaults to the OS.

    Returns:
        bytes_read (int): number of bytes read, may be short, 0 at end of data

    Examples:
        ```
        import numpy as np
        import fdread

        buf = np.zeros(10, dtype=np.uint8)
        n = fdread.read_sync(fd, buf, 0, 10, None)
        ```
    """
    request = normalize_read_sync_args(fd, buffer, offset_or_options, length, position)
    return read_to_view(request.fd, request.target, request.position, posix_file=posix_file)
