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

from fdread.config import Config, configure, get_config, reset_config
from fdread.errors import InvalidArgTypeError, InvalidArgValueError, PreconditionViolation, ReadFailure
from fdread.io import read, read_sync
from fdread.ops.posix_utils import PosixFile
from fdread.request import ReadOptions
from fdread.version import __version__

__all__ = [
    "Config",
    "InvalidArgTypeError",
    "InvalidArgValueError",
    "PosixFile",
    "PreconditionViolation",
    "ReadFailure",
    "ReadOptions",
    "configure",
    "get_config",
    "read",
    "read_sync",
    "reset_config",
]
