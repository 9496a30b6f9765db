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
from dataclasses import dataclass, fields, replace
from typing import Any, Dict

from loguru import logger

DEFAULT_BUFFER_SIZE = 16384

ENV_DEFAULT_BUFFER_SIZE = "FDREAD_DEFAULT_BUFFER_SIZE"
ENV_USE_PREAD = "FDREAD_USE_PREAD"
ENV_SERIALIZE_FD = "FDREAD_SERIALIZE_FD"


@dataclass(frozen=True)
class Config:
    default_buffer_size: int = DEFAULT_BUFFER_SIZE
    use_pread: bool = False
    serialize_fd: bool = False


_OVERRIDES: Dict[str, Any] = {}
# last rejected raw value per env var, so a bad value is reported once
_WARNED: Dict[str, str] = {}


def _warn_once(name: str, raw: str, message: str) -> None:
    if _WARNED.get(name) == raw:
        return
    _WARNED[name] = raw
    logger.warning(message)


def _env_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        _warn_once(name, raw, f"environ {name}={raw!r} is not an integer, use default {default}")
        return default
    if value <= 0:
        _warn_once(name, raw, f"environ {name}={raw!r} must be positive, use default {default}")
        return default
    return value


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0") == "1"


def get_config() -> Config:
    """Build the effective configuration.

    Environment variables are read on every call so that a change of
    ``FDREAD_*`` takes effect without re-importing the package; values set
    through :func:`configure` take precedence over the environment.
    """
    config = Config(
        default_buffer_size=_env_positive_int(ENV_DEFAULT_BUFFER_SIZE, DEFAULT_BUFFER_SIZE),
        use_pread=_env_flag(ENV_USE_PREAD),
        serialize_fd=_env_flag(ENV_SERIALIZE_FD),
    )
    return replace(config, **_OVERRIDES)


def configure(**kwargs: Any) -> Config:
    known = {f.name for f in fields(Config)}
    for key in kwargs:
        if key not in known:
            raise TypeError(f"unknown config field {key!r}")
    if "default_buffer_size" in kwargs and kwargs["default_buffer_size"] <= 0:
        raise ValueError("default_buffer_size must be positive")
    _OVERRIDES.update(kwargs)
    return get_config()


def reset_config() -> Config:
    _OVERRIDES.clear()
    return get_config()
