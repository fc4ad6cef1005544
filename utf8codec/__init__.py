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

from utf8codec.encoding.reader import ReaderState, ReadOptions, Utf8Reader, read_string
from utf8codec.encoding.string import count_chars, decode_bytes, encode_to_bytes, encode_to_sink
from utf8codec.encoding.utf8 import (
    byte_length,
    classify_lead_byte,
    code_point_size,
    decode_code_point,
    encode_code_point,
)
from utf8codec.exceptions import (
    CodePointOutOfRangeError,
    DecodeError,
    InvalidContinuationByteError,
    InvalidLeadByteError,
    UnfinishedCharacterError,
    UnfinishedInputCharacterError,
)
from utf8codec.serialization import Deserializer, OutOfDataError, SerializationError, Serializer
from utf8codec.version import __version__

__all__ = [
    'byte_length',
    'code_point_size',
    'encode_code_point',
    'encode_to_bytes',
    'encode_to_sink',
    'classify_lead_byte',
    'decode_code_point',
    'count_chars',
    'decode_bytes',
    'read_string',
    'ReadOptions',
    'ReaderState',
    'Utf8Reader',
    'DecodeError',
    'InvalidLeadByteError',
    'InvalidContinuationByteError',
    'UnfinishedCharacterError',
    'UnfinishedInputCharacterError',
    'CodePointOutOfRangeError',
    'OutOfDataError',
    'SerializationError',
    'Serializer',
    'Deserializer',
    '__version__',
]
