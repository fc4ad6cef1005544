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
This module implements the streaming UTF-8 reader.

The reader pulls one byte at a time from a source (anything `as_deserializer` accepts) and decodes characters as it
goes, until one of the configured stop conditions is met:

- `null_terminated`: a 0 byte ends the string, it is consumed from the source but not added to the result;
- `stop_at_eof`: running out of bytes ends the string, otherwise it is an error (`OutOfDataError`);
- `char_length`: maximum number of characters;
- `byte_length`: maximum number of bytes, checked before each character. A character is always read to its end, so
  the bytes consumed can exceed the limit by up to 3.

>>> from io import BytesIO
>>> fp = BytesIO(b'A\x00B')
>>> read_string(fp, null_terminated=True)
'A'
>>> fp.read()
b'B'

>>> read_string(b'\xc2\xa9 and more', byte_length=1)
'©'
>>> read_string(b'caf\xc3\xa9', stop_at_eof=True)
'café'
>>> read_string(b'caf\xc3\xa9', char_length=3)
'caf'

>>> try:
...     read_string(b'caf\xc3', stop_at_eof=True)
... except UnfinishedInputCharacterError as e:
...     print(e)
Unfinished character at end of input.
"""

from collections.abc import Iterator
from enum import Enum, auto
from typing import Annotated, Any, Optional

import pydantic
from structlog import get_logger

from utf8codec.exceptions import UnfinishedInputCharacterError
from utf8codec.serialization import OutOfDataError, as_deserializer
from utf8codec.utils.pydantic import BaseModel

from .utf8 import classify_lead_byte, decode_code_point

logger = get_logger()

NonNegativeInt = Annotated[int, pydantic.Field(ge=0, strict=True)]


class ReadOptions(BaseModel):
    """Stop conditions of a streaming read, by default only the source running dry (as an error) stops it."""
    model_config = pydantic.ConfigDict(strict=True)

    null_terminated: bool = False
    stop_at_eof: bool = False
    char_length: Optional[NonNegativeInt] = None
    byte_length: Optional[NonNegativeInt] = None


class ReaderState(Enum):
    READING = auto()
    DONE = auto()
    FAILED = auto()


class Utf8Reader:
    """Iterate over the characters of a UTF-8 source, one character per iteration.

    `bytes_read` counts whole groups: it is increased by the size of a group as soon as its lead byte is classified.
    A terminating null byte is not counted.
    """

    def __init__(self, source: Any, options: Optional[ReadOptions] = None) -> None:
        self.options = options if options is not None else ReadOptions()
        self.state = ReaderState.READING
        self.bytes_read = 0
        self.chars_read = 0
        self._deserializer = as_deserializer(source)
        self.log = logger.new()

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self.state is not ReaderState.READING:
            raise StopIteration
        try:
            char = self._read_char()
        except Exception as e:
            self.state = ReaderState.FAILED
            self.log.debug('read failed', error=repr(e), bytes_read=self.bytes_read, chars_read=self.chars_read)
            raise
        if char is None:
            raise StopIteration
        self.chars_read += 1
        return char

    def read(self) -> str:
        """Read until a stop condition, nothing is returned if it fails halfway."""
        return ''.join(self)

    def _stop(self, reason: str) -> None:
        self.state = ReaderState.DONE
        self.log.debug('stop reading', reason=reason, bytes_read=self.bytes_read, chars_read=self.chars_read)

    def _read_char(self) -> Optional[str]:
        options = self.options
        if options.byte_length is not None and self.bytes_read >= options.byte_length:
            self._stop('byte_length')
            return None
        if options.char_length is not None and self.chars_read >= options.char_length:
            self._stop('char_length')
            return None

        position = self._deserializer.cur_pos()
        try:
            lead_byte = self._deserializer.read_byte()
        except OutOfDataError:
            if options.stop_at_eof:
                self._stop('eof')
                return None
            raise
        if lead_byte == 0 and options.null_terminated:
            self._stop('null')
            return None

        size = classify_lead_byte(lead_byte, position=position)
        # commit to the whole group before reading it, even if it goes over byte_length
        self.bytes_read += size
        if size == 1:
            return chr(lead_byte)
        try:
            code_point = decode_code_point(self._deserializer, lead_byte, size)
        except OutOfDataError as e:
            raise UnfinishedInputCharacterError(lead_byte, position=position) from e
        return chr(code_point)


def read_string(
    source: Any,
    null_terminated: bool = False,
    stop_at_eof: bool = False,
    char_length: Optional[int] = None,
    byte_length: Optional[int] = None,
    *,
    options: Optional[ReadOptions] = None,
) -> str:
    """ Read a string from `source`, see this module's docstring for the stop conditions.

    A prebuilt `options` takes the place of the individual keyword arguments, giving both raises TypeError.
    """
    if options is not None:
        if null_terminated or stop_at_eof or char_length is not None or byte_length is not None:
            raise TypeError('read_string() takes either options or individual stop conditions, not both')
    else:
        options = ReadOptions(
            null_terminated=null_terminated,
            stop_at_eof=stop_at_eof,
            char_length=char_length,
            byte_length=byte_length,
        )
    return Utf8Reader(source, options).read()
