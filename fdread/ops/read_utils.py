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
from contextlib import nullcontext
from typing import Optional

from loguru import logger

from fdread.config import Config, get_config
from fdread.errors import ReadFailure
from fdread.ops.posix_utils import PosixFile, default_posix_file, descriptor_locks


def seek_read(posix_file: PosixFile, fd: int, view: memoryview, position: Optional[int]) -> Optional[int]:
    if position is None:
        return posix_file.read(fd, view)

    saved = posix_file.seek(fd, 0, os.SEEK_CUR)
    logger.debug(f"positioned read on fd {fd}: position={position}, saved cursor={saved}, size={len(view)}")
    try:
        posix_file.seek(fd, position, os.SEEK_SET)
        bytes_read = posix_file.read(fd, view)
    except Exception:
        # the cursor is only restored on success
        logger.warning(f"read on fd {fd} at position {position} failed, cursor not restored to {saved}")
        raise
    posix_file.seek(fd, saved, os.SEEK_SET)
    return bytes_read


def pread(posix_file: PosixFile, fd: int, view: memoryview, position: Optional[int]) -> Optional[int]:
    if position is None:
        return posix_file.read(fd, view)
    logger.debug(f"pread on fd {fd}: position={position}, size={len(view)}")
    return posix_file.pread(fd, view, position)


def read_to_view(
    fd: int,
    view: memoryview,
    position: Optional[int],
    posix_file: Optional[PosixFile] = None,
    config: Optional[Config] = None,
) -> int:
    """Read into ``view`` from ``fd``, at ``position`` when it is given.

    Args:
        fd (int): open descriptor, owned by the caller
        view (memoryview): writable byte window to fill
        position (int, optional): absolute file offset, None reads at the cursor
        posix_file (PosixFile, optional): descriptor operations. Defaults to the OS.
        config (Config, optional): executor strategy. Defaults to get_config().

    Returns:
        bytes_read (int): number of bytes read, 0 at end of data
    """
    if posix_file is None:
        posix_file = default_posix_file
    if config is None:
        config = get_config()

    executor = pread if config.use_pread else seek_read
    guard = descriptor_locks.get(fd) if config.serialize_fd else nullcontext()

    with guard:
        try:
            bytes_read = executor(posix_file, fd, view, position)
        except OSError:
            raise
        except Exception as e:
            raise ReadFailure(f"read on fd {fd} failed: {e}") from e

    return bytes_read if bytes_read is not None else 0
