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

from typing import ClassVar, Optional

from utf8codec.serialization.exceptions import SerializationError


class DecodeError(SerializationError):
    """Base class for malformed UTF-8 input.

    The message is only rendered from `message_template` when the error is printed, the offending byte and the offset
    where it was found are kept as plain attributes.
    """

    message_template: ClassVar[str] = 'Invalid UTF-8 sequence.'

    def __init__(self, byte: Optional[int] = None, *, position: Optional[int] = None) -> None:
        super().__init__(byte)
        self.byte = byte
        self.position = position

    def __str__(self) -> str:
        return self.message_template.format(byte=self.byte)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(byte={self.byte!r}, position={self.position!r})'


class InvalidLeadByteError(DecodeError):
    """The byte cannot start any UTF-8 sequence: a lone continuation byte or 0b11111xxx."""

    message_template = 'Invalid byte at start of character: 0x{byte:x}'


class InvalidContinuationByteError(DecodeError):
    """A byte inside a multi-byte character does not have the 0b10xxxxxx shape."""

    message_template = 'Invalid byte 0x{byte:x} inside a character.'


class UnfinishedCharacterError(DecodeError):
    """A multi-byte character was cut short by the end of the data."""

    message_template = 'Unfinished character at end of byte array.'


class UnfinishedInputCharacterError(UnfinishedCharacterError):
    """A multi-byte character was cut short because the source was exhausted."""

    message_template = 'Unfinished character at end of input.'


class CodePointOutOfRangeError(DecodeError):
    """A well-formed 4-byte group decoded to a value above 0x10ffff, which a `str` cannot hold.

    `byte` is the lead byte of the group, the decoded value is kept in `code_point`.
    """

    message_template = 'Code point 0x{code_point:x} is out of the Unicode range.'

    def __init__(self, code_point: int, byte: Optional[int] = None, *, position: Optional[int] = None) -> None:
        super().__init__(byte, position=position)
        self.code_point = code_point

    def __str__(self) -> str:
        return self.message_template.format(code_point=self.code_point)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(code_point={self.code_point!r}, byte={self.byte!r}, position={self.position!r})'
