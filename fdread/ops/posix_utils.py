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

import os
import threading
from typing import Dict

from loguru import logger


def _readinto(fd: int, view: memoryview) -> int:
    if hasattr(os, "readv"):
        return os.readv(fd, [view])
    data = os.read(fd, len(view))
    view[: len(data)] = data
    return len(data)


def _preadinto(fd: int, view: memoryview, position: int) -> int:
    if hasattr(os, "preadv"):
        return os.preadv(fd, [view], position)
    if not hasattr(os, "pread"):
        raise NotImplementedError("positioned read is not available on this platform")
    data = os.pread(fd, len(view), position)
    view[: len(data)] = data
    return len(data)


class PosixFile:
    """Descriptor operations used by the read executor.

    The default implementation goes straight to the OS; tests and callers with
    their own descriptor model can pass a subclass instead.
    """

    def seek(self, fd: int, offset: int, whence: int) -> int:
        return os.lseek(fd, offset, whence)

    def read(self, fd: int, view: memoryview) -> int:
        return _readinto(fd, view)

    def pread(self, fd: int, view: memoryview, position: int) -> int:
        return _preadinto(fd, view, position)


class DescriptorLocks:
    """Per-descriptor locks used when reads on one fd are serialized.

    Entries are keyed by fd number and are not removed automatically; callers
    that enable serialization should call :meth:`discard` after closing an fd.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.locks: Dict[int, threading.Lock] = {}

    def get(self, fd: int) -> threading.Lock:
        with self.lock:
            fd_lock = self.locks.get(fd)
            if fd_lock is None:
                fd_lock = threading.Lock()
                self.locks[fd] = fd_lock
                logger.debug(f"create serialization lock for fd {fd}")
            return fd_lock

    def discard(self, fd: int) -> None:
        with self.lock:
            self.locks.pop(fd, None)


descriptor_locks = DescriptorLocks()
default_posix_file = PosixFile()
