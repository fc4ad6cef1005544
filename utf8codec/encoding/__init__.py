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

"""
This module was made to hold the UTF-8 codec.

The codec is split in three layers:

- `utf8`: single character operations, encoding one code point into a buffer, classifying a lead byte and decoding
  one character out of a Deserializer.
- `string`: whole-string operations over in-memory buffers or sinks, built on top of `utf8`.
- `reader`: the streaming reader, pulls bytes from a source one at a time and stops on configurable conditions.

Encoders write to a `bytearray` or a `Serializer`, decoders read from a `Deserializer`. Neither layer cares about the
concrete transport behind them.
"""
