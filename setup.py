#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import os
import re

from setuptools import find_packages, setup

# utf8codec/__init__.py imports the runtime dependencies, read the version without importing the package
with open(os.path.join(os.path.dirname(__file__), 'utf8codec', 'version.py')) as fp:
    __version__ = re.search(r"^__version__ = '([^']+)'$", fp.read(), re.MULTILINE).group(1)  # type: ignore[union-attr]

setup(
    name='utf8codec',
    version=__version__,
    description='UTF-8 encoder, decoder and streaming reader over abstract byte sources and sinks',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache License 2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.10',
    packages=find_packages(exclude=('tests', 'tests.*')),
    install_requires=[
        'pydantic>=2.0',
        'structlog>=22.1',
        'typing_extensions>=4.4',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
)
