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

import socket
from io import BytesIO

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from utf8codec.encoding.reader import ReaderState, ReadOptions, Utf8Reader, read_string
from utf8codec.encoding.string import encode_to_bytes, encode_to_sink
from utf8codec.exceptions import (
    InvalidContinuationByteError,
    InvalidLeadByteError,
    UnfinishedCharacterError,
    UnfinishedInputCharacterError,
)
from utf8codec.serialization import Deserializer, OutOfDataError


def test_null_terminated_stops_before_next_byte() -> None:
    fp = BytesIO(bytes([0x41, 0x00, 0x42]))
    assert read_string(fp, null_terminated=True) == 'A'
    # the null byte is consumed, nothing after it is
    assert fp.tell() == 2
    assert fp.read() == b'B'


def test_null_byte_is_a_character_when_not_null_terminated() -> None:
    assert read_string(b'A\x00B', stop_at_eof=True) == 'A\x00B'


def test_byte_length_commits_to_whole_character() -> None:
    de = Deserializer.build_bytes_deserializer(bytes([0xc2, 0xa9, 0x41]))
    reader = Utf8Reader(de, ReadOptions(byte_length=1))
    assert reader.read() == '©'
    assert reader.bytes_read == 2
    assert de.cur_pos() == 2
    assert bytes(de.read_all()) == b'A'


@pytest.mark.parametrize(
    ['limit', 'expected', 'consumed'],
    [
        (0, '', 0),
        (1, 'a', 1),
        (2, 'a€', 4),
        (3, 'a€', 4),
        (4, 'a€', 4),
        (5, 'a€😎', 8),
        (100, 'a€😎b', 9),
    ],
)
def test_byte_length_limit(limit: int, expected: str, consumed: int) -> None:
    fp = BytesIO(encode_to_bytes('a€😎b'))
    reader = Utf8Reader(fp, ReadOptions(byte_length=limit, stop_at_eof=True))
    assert reader.read() == expected
    assert reader.bytes_read == consumed
    assert fp.tell() == consumed


@pytest.mark.parametrize(['limit', 'expected'], [(0, ''), (1, 'a'), (2, 'a€'), (4, 'a€😎b'), (10, 'a€😎b')])
def test_char_length_limit(limit: int, expected: str) -> None:
    assert read_string(encode_to_bytes('a€😎b'), stop_at_eof=True, char_length=limit) == expected


def test_char_length_does_not_read_ahead() -> None:
    fp = BytesIO(encode_to_bytes('€€'))
    assert read_string(fp, char_length=1) == '€'
    assert fp.tell() == 3


def test_first_limit_reached_wins() -> None:
    data = encode_to_bytes('€€€€')
    assert read_string(data, char_length=3, byte_length=4) == '€€'
    assert read_string(data, char_length=1, byte_length=12) == '€'


def test_stop_at_eof() -> None:
    assert read_string(b'', stop_at_eof=True) == ''
    assert read_string(encode_to_bytes('façade'), stop_at_eof=True) == 'façade'


def test_eof_without_stop_at_eof_is_an_error() -> None:
    reader = Utf8Reader(b'abc')
    with pytest.raises(OutOfDataError):
        reader.read()
    assert reader.state is ReaderState.FAILED
    assert reader.chars_read == 3


def test_eof_inside_character() -> None:
    with pytest.raises(UnfinishedInputCharacterError) as exc_info:
        read_string(b'ab\xe2\x82', stop_at_eof=True)
    assert str(exc_info.value) == 'Unfinished character at end of input.'
    assert exc_info.value.position == 2
    assert exc_info.value.byte == 0xe2
    assert isinstance(exc_info.value, UnfinishedCharacterError)
    assert isinstance(exc_info.value.__cause__, OutOfDataError)


def test_invalid_lead_byte() -> None:
    with pytest.raises(InvalidLeadByteError) as exc_info:
        read_string(BytesIO(bytes([0x41, 0xff])), stop_at_eof=True)
    assert exc_info.value.byte == 0xff
    assert exc_info.value.position == 1


def test_invalid_continuation_byte() -> None:
    reader = Utf8Reader(b'\xc3\x28', ReadOptions(stop_at_eof=True))
    with pytest.raises(InvalidContinuationByteError) as exc_info:
        reader.read()
    assert exc_info.value.byte == 0x28
    assert exc_info.value.position == 1
    assert reader.state is ReaderState.FAILED


def test_null_byte_inside_character_is_invalid() -> None:
    with pytest.raises(InvalidContinuationByteError):
        read_string(b'\xe2\x00\xac', null_terminated=True)


def test_iteration_yields_characters() -> None:
    reader = Utf8Reader(encode_to_bytes('a€😎') + b'\x00tail', ReadOptions(null_terminated=True))
    assert reader.state is ReaderState.READING
    assert next(reader) == 'a'
    assert reader.chars_read == 1
    assert list(reader) == ['€', '😎']
    assert reader.state is ReaderState.DONE
    assert reader.bytes_read == 8
    assert reader.chars_read == 3
    # a finished reader stays finished
    assert list(reader) == []
    assert reader.read() == ''


def test_failed_reader_stays_failed() -> None:
    reader = Utf8Reader(b'a\xff', ReadOptions(stop_at_eof=True))
    assert next(reader) == 'a'
    with pytest.raises(InvalidLeadByteError):
        next(reader)
    assert reader.state is ReaderState.FAILED
    with pytest.raises(StopIteration):
        next(reader)


def test_consecutive_null_terminated_strings() -> None:
    fp = BytesIO()
    for value in ('first', 'sécond', '', 'третий'):
        encode_to_sink(value, fp, null_terminate=True)
    fp.seek(0)
    de = Deserializer.build_stream_deserializer(fp)
    options = ReadOptions(null_terminated=True)
    assert [read_string(de, options=options) for _ in range(4)] == ['first', 'sécond', '', 'третий']
    assert de.is_empty()


def test_read_from_socket() -> None:
    left, right = socket.socketpair()
    with left, right:
        left.sendall(encode_to_bytes('héllo wörld', null_terminate=True) + b'ignored')
        with right.makefile('rb') as fp:
            assert read_string(fp, null_terminated=True) == 'héllo wörld'


def test_read_options_defaults() -> None:
    options = ReadOptions()
    assert options.null_terminated is False
    assert options.stop_at_eof is False
    assert options.char_length is None
    assert options.byte_length is None


@pytest.mark.parametrize(
    'kwargs',
    [
        {'char_length': -1},
        {'byte_length': -5},
        {'byte_length': 'many'},
        {'char_length': True},
        {'byte_length': '2'},
        {'byte_length': 2.0},
        {'null_terminated': 'yes'},
        {'stop_at_eof': 1},
        {'max_length': 3},
    ],
)
def test_read_options_validation(kwargs) -> None:
    with pytest.raises(ValidationError):
        ReadOptions(**kwargs)
    with pytest.raises((ValidationError, TypeError)):
        read_string(b'', stop_at_eof=True, **kwargs)


def test_read_options_keep_exact_types() -> None:
    options = ReadOptions(null_terminated=True, char_length=0, byte_length=2)
    assert options.null_terminated is True
    assert options.char_length == 0
    assert read_string(b'abc', stop_at_eof=True, byte_length=2) == 'ab'


@pytest.mark.parametrize(
    'kwargs',
    [
        {'null_terminated': True},
        {'stop_at_eof': True},
        {'char_length': 1},
        {'byte_length': 0},
    ],
)
def test_options_and_stop_conditions_are_exclusive(kwargs) -> None:
    fp = BytesIO(b'abc')
    with pytest.raises(TypeError):
        read_string(fp, options=ReadOptions(stop_at_eof=True), **kwargs)
    # nothing was consumed
    assert fp.read() == b'abc'


def test_read_options_are_frozen() -> None:
    options = ReadOptions(char_length=3)
    with pytest.raises(ValidationError):
        options.char_length = 4  # type: ignore[misc]


def test_stop_is_logged() -> None:
    with capture_logs() as logs:
        read_string(b'ab\x00', null_terminated=True)
    assert {
        'event': 'stop reading',
        'log_level': 'debug',
        'reason': 'null',
        'bytes_read': 2,
        'chars_read': 2,
    } in logs


def test_failure_is_logged() -> None:
    with capture_logs() as logs:
        with pytest.raises(InvalidLeadByteError):
            read_string(b'\x80')
    assert [log['event'] for log in logs] == ['read failed']
