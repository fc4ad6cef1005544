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
A Deserializer that pulls bytes from a binary file object, one at a time.

Any object with a `read(n)` method that returns `b''` at the end of the data works: open files, `io.BytesIO`,
`socket.makefile('rb')`. Bytes are requested from the file object only when needed, a small lookahead buffer holds
what was peeked but not consumed yet.

>>> from io import BytesIO
>>> fp = BytesIO(b'\x41\xc3\xa9')
>>> de = Deserializer.build_stream_deserializer(fp)
>>> de.peek_byte()
65
>>> fp.tell()
1
>>> de.read_byte()
65
>>> bytes(de.read_bytes(2))
b'\xc3\xa9'
>>> de.is_empty()
True
>>> try:
...     de.read_byte()
... except OutOfDataError as e:
...     print(*e.args)
not enough bytes to read
"""

from typing import BinaryIO

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import OutOfDataError

_READ_ALL_CHUNK_SIZE = 4096


class StreamDeserializer(Deserializer):
    def __init__(self, fp: BinaryIO) -> None:
        self._fp = fp
        self._lookahead = bytearray()
        self._eof = False
        self._pos = 0

    def _fill(self, n: int) -> int:
        """Try to have at least `n` bytes in the lookahead, return how many there are."""
        while len(self._lookahead) < n and not self._eof:
            chunk = self._fp.read(n - len(self._lookahead))
            if not chunk:
                self._eof = True
            else:
                self._lookahead += chunk
        return len(self._lookahead)

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise ValueError('trailing data')
        del self._fp

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def is_empty(self) -> bool:
        return self._fill(1) == 0

    @override
    def peek_byte(self) -> int:
        if self._fill(1) == 0:
            raise OutOfDataError('not enough bytes to read')
        return self._lookahead[0]

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        if self._fill(n) < n and exact:
            raise OutOfDataError('not enough bytes to read')
        return bytes(self._lookahead[:n])

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        del self._lookahead[0]
        self._pos += 1
        return b

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> bytes:
        b = self.peek_bytes(n, exact=exact)
        del self._lookahead[:len(b)]
        self._pos += len(b)
        return b

    @override
    def read_all(self) -> bytes:
        while not self._eof:
            self._fill(len(self._lookahead) + _READ_ALL_CHUNK_SIZE)
        b = bytes(self._lookahead)
        self._lookahead.clear()
        self._pos += len(b)
        return b
