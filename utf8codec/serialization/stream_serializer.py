# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
A Serializer that writes straight into a binary file object.

Any object with a `write(bytes)` method works: open files, `io.BytesIO`, `socket.makefile('wb')`. The file object is
owned by the caller, it is never closed or flushed here.

>>> from io import BytesIO
>>> fp = BytesIO()
>>> se = Serializer.build_stream_serializer(fp)
>>> se.write_byte(0x41)
>>> se.write_bytes(b'BC')
>>> se.cur_pos()
3
>>> fp.getvalue()
b'ABC'
"""

from typing import BinaryIO

from typing_extensions import override

from .serializer import Serializer
from .types import Buffer


class StreamSerializer(Serializer):
    def __init__(self, fp: BinaryIO) -> None:
        self._fp = fp
        self._pos = 0

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        # bytes() checks for correct range
        self._fp.write(bytes((data,)))
        self._pos += 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        part = bytes(memoryview(data))
        self._fp.write(part)
        self._pos += len(part)
