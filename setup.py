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

from setuptools import find_packages, setup


def get_version():
    import importlib.util

    spec = importlib.util.spec_from_file_location("version", os.path.join("fdread", "version.py"))
    m = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(m)

    return m.__version__


setup(
    name="fdread",
    version=get_version(),
    description="Positioned and cursor reads on raw file descriptors into numpy buffers",
    author="AML Team",
    packages=find_packages(exclude=("tests", "tests.*", "bench")),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
)
