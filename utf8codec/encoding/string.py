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
This module implements UTF-8 for whole strings.

Encoding either materializes a `bytes` object of the exact size or writes to a sink one byte at a time; both can add a
trailing null byte:

>>> encode_to_bytes('façade').hex()
'6661c3a7616465'
>>> encode_to_bytes('A', null_terminate=True)
b'A\x00'

>>> from io import BytesIO
>>> fp = BytesIO()
>>> encode_to_sink('€', fp, null_terminate=True)
>>> fp.getvalue().hex()
'e282ac00'

Decoding takes a byte buffer and an optional `[start, end)` range:

>>> decode_bytes(bytes.fromhex('6661c3a7616465'))
'façade'
>>> decode_bytes(b'--\xe2\x82\xac--', 2, 5)
'€'
>>> try:
...     decode_bytes(b'\xe2\x82')
... except UnfinishedCharacterError as e:
...     print(e)
Unfinished character at end of byte array.
"""

from typing import Any, Optional

from utf8codec.exceptions import UnfinishedCharacterError
from utf8codec.serialization import Buffer, Deserializer, as_serializer

from .utf8 import MAX_GROUP_SIZE, byte_length, classify_lead_byte, decode_code_point, encode_code_point


def encode_to_bytes(value: str, null_terminate: bool = False) -> bytes:
    """ Encode `value` into a buffer allocated once with the exact size of the result.
    """
    size = byte_length(value)
    buffer = bytearray(size + 1 if null_terminate else size)
    offset = 0
    for char in value:
        offset = encode_code_point(ord(char), buffer, offset)
    if null_terminate:
        buffer[offset] = 0
        offset += 1
    assert offset == len(buffer)
    return bytes(buffer)


def encode_to_sink(value: str, sink: Any, null_terminate: bool = False) -> None:
    """ Encode `value` writing one byte at a time to `sink`.

    The sink can be a Serializer or a binary file object, see `as_serializer`.
    """
    serializer = as_serializer(sink)
    scratch = bytearray(MAX_GROUP_SIZE)
    for char in value:
        size = encode_code_point(ord(char), scratch, 0)
        for i in range(size):
            serializer.write_byte(scratch[i])
    if null_terminate:
        serializer.write_byte(0)


def _check_range(data: memoryview, start: int, end: Optional[int]) -> int:
    if end is None:
        end = len(data)
    if not 0 <= start <= end <= len(data):
        raise ValueError(f'invalid range [{start}, {end}) for {len(data)} bytes')
    return end


def count_chars(data: Buffer, start: int = 0, end: Optional[int] = None) -> int:
    """ Count the characters in `data[start:end]` by looking only at lead bytes.

    Continuation bytes are skipped, not checked. A group that does not fit the range still counts as one character.

    >>> count_chars('façade'.encode('utf-8'))
    6
    """
    view = memoryview(data).cast('B')
    end = _check_range(view, start, end)
    count = 0
    pos = start
    while pos < end:
        pos += classify_lead_byte(view[pos], position=pos)
        count += 1
    return count


def decode_bytes(data: Buffer, start: int = 0, end: Optional[int] = None) -> str:
    """ Decode `data[start:end]`, raises a DecodeError at the first malformed byte.
    """
    view = memoryview(data).cast('B')
    end = _check_range(view, start, end)
    chars = [''] * count_chars(view, start, end)
    deserializer = Deserializer.build_bytes_deserializer(view[:end])
    deserializer.read_bytes(start)
    for i in range(len(chars)):
        pos = deserializer.cur_pos()
        lead_byte = deserializer.read_byte()
        size = classify_lead_byte(lead_byte, position=pos)
        if pos + size > end:
            raise UnfinishedCharacterError(lead_byte, position=pos)
        chars[i] = chr(decode_code_point(deserializer, lead_byte, size))
    return ''.join(chars)
