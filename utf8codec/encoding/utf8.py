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
This module implements UTF-8 for a single character.

A code point is packed into a group of 1 to 4 bytes, the size of the group depends only on the magnitude of the code
point and is declared by the high bits of the first (lead) byte:

    code point            group  lead byte   continuation bytes
    [0x0000, 0x007f]      1      0xxxxxxx
    [0x0080, 0x07ff]      2      110xxxxx    10xxxxxx
    [0x0800, 0xffff]      3      1110xxxx    10xxxxxx 10xxxxxx
    [0x10000, 0x1fffff]   4      11110xxx    10xxxxxx 10xxxxxx 10xxxxxx

Surrogates and values above 0x10ffff are not special-cased, they are packed like any other value that fits the layout.

>>> buf = bytearray(10)
>>> encode_code_point(ord('A'), buf, 0)
1
>>> encode_code_point(ord('é'), buf, 1)
3
>>> encode_code_point(ord('€'), buf, 3)
6
>>> encode_code_point(0x1f60e, buf, 6)
10
>>> bytes(buf).hex()
'41c3a9e282acf09f988e'

>>> [classify_lead_byte(b) for b in buf]
Traceback (most recent call last):
    ...
utf8codec.exceptions.InvalidLeadByteError: Invalid byte at start of character: 0xa9

>>> de = Deserializer.build_bytes_deserializer(buf)
>>> lead = de.read_byte()
>>> chr(decode_code_point(de, lead, classify_lead_byte(lead)))
'A'
>>> lead = de.read_byte()
>>> chr(decode_code_point(de, lead, classify_lead_byte(lead)))
'é'
>>> lead = de.read_byte()
>>> hex(decode_code_point(de, lead, classify_lead_byte(lead)))
'0x20ac'
>>> lead = de.read_byte()
>>> hex(decode_code_point(de, lead, classify_lead_byte(lead)))
'0x1f60e'
>>> de.finalize()
"""

from typing import Optional

from utf8codec.exceptions import CodePointOutOfRangeError, InvalidContinuationByteError, InvalidLeadByteError
from utf8codec.serialization import Deserializer

MAX_CODE_POINT = 0x10ffff

# largest value the 4-byte layout can carry (3 + 6 + 6 + 6 bits)
MAX_ENCODABLE_CODE_POINT = 0x1fffff

# scratch space needed to encode any single code point
MAX_GROUP_SIZE = 4


def code_point_size(code_point: int) -> int:
    """ Number of bytes used to encode `code_point`.

    >>> [code_point_size(c) for c in (0x41, 0x7f, 0x80, 0x7ff, 0x800, 0xffff, 0x10000, 0x10ffff)]
    [1, 1, 2, 2, 3, 3, 4, 4]
    """
    if code_point < 0x80:
        return 1
    elif code_point < 0x800:
        return 2
    elif code_point < 0x10000:
        return 3
    else:
        return 4


def byte_length(value: str) -> int:
    """ Number of bytes the UTF-8 encoding of `value` takes, without encoding it.

    >>> byte_length('A'), byte_length('é'), byte_length('€'), byte_length('😎'), byte_length('')
    (1, 2, 3, 4, 0)
    >>> byte_length('façade')
    7
    """
    length = len(value)
    for char in value:
        code_point = ord(char)
        if code_point > 0x7f:
            length += code_point_size(code_point) - 1
    return length


def encode_code_point(code_point: int, buffer: bytearray, offset: int) -> int:
    """ Encode one code point into `buffer` starting at `offset` and return the offset right after it.

    The buffer must have room for the whole group, see `code_point_size`.
    """
    if not 0 <= code_point <= MAX_ENCODABLE_CODE_POINT:
        raise ValueError(f'code point out of encodable range: {code_point:#x}')
    if code_point < 0x80:
        buffer[offset] = code_point
        return offset + 1
    elif code_point < 0x800:
        buffer[offset] = 0b1100_0000 | (code_point >> 6)
        buffer[offset + 1] = 0b1000_0000 | (code_point & 0b0011_1111)
        return offset + 2
    elif code_point < 0x10000:
        buffer[offset] = 0b1110_0000 | (code_point >> 12)
        buffer[offset + 1] = 0b1000_0000 | ((code_point >> 6) & 0b0011_1111)
        buffer[offset + 2] = 0b1000_0000 | (code_point & 0b0011_1111)
        return offset + 3
    else:
        buffer[offset] = 0b1111_0000 | (code_point >> 18)
        buffer[offset + 1] = 0b1000_0000 | ((code_point >> 12) & 0b0011_1111)
        buffer[offset + 2] = 0b1000_0000 | ((code_point >> 6) & 0b0011_1111)
        buffer[offset + 3] = 0b1000_0000 | (code_point & 0b0011_1111)
        return offset + 4


def classify_lead_byte(byte: int, *, position: Optional[int] = None) -> int:
    """ Size of the group started by `byte`, raises InvalidLeadByteError if it cannot start one.

    >>> classify_lead_byte(0x41), classify_lead_byte(0xc3), classify_lead_byte(0xe2), classify_lead_byte(0xf0)
    (1, 2, 3, 4)
    >>> try:
    ...     classify_lead_byte(0xff)
    ... except InvalidLeadByteError as e:
    ...     print(e)
    Invalid byte at start of character: 0xff
    """
    if byte & 0b1000_0000 == 0:
        return 1
    elif byte & 0b1110_0000 == 0b1100_0000:
        return 2
    elif byte & 0b1111_0000 == 0b1110_0000:
        return 3
    elif byte & 0b1111_1000 == 0b1111_0000:
        return 4
    else:
        raise InvalidLeadByteError(byte, position=position)


def decode_code_point(deserializer: Deserializer, lead_byte: int, size: int) -> int:
    """ Decode the rest of a group whose lead byte was already read from `deserializer`.

    Reads exactly `size - 1` continuation bytes, raises InvalidContinuationByteError at the first one that does not
    look like 0b10xxxxxx. A group that decodes above 0x10ffff raises CodePointOutOfRangeError.
    """
    if size == 1:
        return lead_byte
    # the lead byte keeps its low (8 - size - 1) bits
    code_point = lead_byte & (0b0111_1111 >> size)
    for _ in range(size - 1):
        position = deserializer.cur_pos()
        byte = deserializer.read_byte()
        if byte & 0b1100_0000 != 0b1000_0000:
            raise InvalidContinuationByteError(byte, position=position)
        code_point = (code_point << 6) | (byte & 0b0011_1111)
    if code_point > MAX_CODE_POINT:
        raise CodePointOutOfRangeError(code_point, lead_byte, position=deserializer.cur_pos() - size)
    return code_point
