"""
Seeded 64-bit hashing of arbitrary values.

Values are first turned into a stable, type-tagged byte encoding of their
logical identity (encode_value), then hashed with keyed BLAKE2b. The key is
the sketch's seed pair, so two sketches hash the same stream differently.

Encoding rules:
- Equal values encode identically, including across numeric types that
  compare equal in Python (True == 1 == 1.0, -0.0 == 0.0, Decimal("0.5") == 0.5).
- IntEnum and StrEnum members encode as their values; other Enum members
  are tagged with their class.
- Aware datetimes encode as their UTC instant; naive datetimes as written.
- Tuples and lists share one encoding, so (1, 2) and [1, 2] hash the same
  even though they compare unequal. Lists are accepted for convenience.
- Every variable-length piece is length-prefixed so that nested
  containers cannot collide by concatenation.
- Sets are order-independent: element encodings are sorted.
"""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import hashlib
import math
import struct
import uuid
from typing import Any, Tuple

from distinctsketch.sketches.errors import UnhashableValue

HASH_BITS = 64
_U64_MASK = (1 << 64) - 1

# One-byte type tags
_TAG_NONE = b'N'
_TAG_INT = b'I'
_TAG_FLOAT = b'F'
_TAG_COMPLEX = b'C'
_TAG_STR = b'S'
_TAG_BYTES = b'B'
_TAG_SEQ = b'T'
_TAG_SET = b'U'
_TAG_ENUM = b'E'
_TAG_DATETIME = b'D'
_TAG_DATE = b'd'
_TAG_TIME = b't'
_TAG_UUID = b'G'
_TAG_DECIMAL = b'M'
_TAG_RECORD = b'R'


def _sized(tag: bytes, payload: bytes) -> bytes:
    return tag + struct.pack('<Q', len(payload)) + payload


def _encode_int(value: int) -> bytes:
    length = (value.bit_length() + 8) // 8
    return _sized(_TAG_INT, value.to_bytes(length, 'little', signed=True))


def _encode_float(value: float) -> bytes:
    if math.isfinite(value) and value == int(value):
        # Integral floats compare equal to ints; -0.0 lands here as 0
        return _encode_int(int(value))
    if math.isnan(value):
        value = math.nan
    return _sized(_TAG_FLOAT, struct.pack('<d', value))


def _qualified_name(cls: type) -> bytes:
    return f"{cls.__module__}.{cls.__qualname__}".encode('utf-8')


def encode_value(value: Any) -> bytes:
    """
    Encode a value into bytes that identify it.

    Args:
        value: None, bool, int, float, complex, str, bytes-like, tuple, list,
            set, frozenset, Enum member, datetime/date/time, UUID, Decimal,
            a dataclass instance, or any object with a __sketch_key__()
            method returning one of those.

    Returns:
        Stable byte encoding

    Raises:
        UnhashableValue: If the value's type has no encoding
    """
    if value is None:
        return _TAG_NONE

    # IntEnum and StrEnum members equal their values and fall through below
    if isinstance(value, enum.Enum) and not isinstance(value, (int, str)):
        return _sized(
            _TAG_ENUM,
            _sized(_TAG_STR, _qualified_name(type(value))) + encode_value(value.value),
        )

    if isinstance(value, int):
        return _encode_int(int(value))

    if isinstance(value, float):
        return _encode_float(value)

    if isinstance(value, complex):
        if value.imag == 0:
            return _encode_float(value.real)
        return _sized(_TAG_COMPLEX, _encode_float(value.real) + _encode_float(value.imag))

    if isinstance(value, str):
        return _sized(_TAG_STR, value.encode('utf-8', 'surrogatepass'))

    if isinstance(value, (bytes, bytearray, memoryview)):
        return _sized(_TAG_BYTES, bytes(value))

    if isinstance(value, (tuple, list)):
        return _sized(_TAG_SEQ, b''.join(encode_value(item) for item in value))

    if isinstance(value, (set, frozenset)):
        parts = sorted(encode_value(item) for item in value)
        return _sized(_TAG_SET, b''.join(parts))

    # datetime is a subclass of date, check it first
    if isinstance(value, datetime.datetime):
        if value.utcoffset() is not None:
            # Aware datetimes compare by instant
            value = value.astimezone(datetime.timezone.utc)
        return _sized(_TAG_DATETIME, value.isoformat().encode('ascii'))

    if isinstance(value, datetime.date):
        return _sized(_TAG_DATE, value.isoformat().encode('ascii'))

    if isinstance(value, datetime.time):
        return _sized(_TAG_TIME, value.isoformat().encode('ascii'))

    if isinstance(value, uuid.UUID):
        return _sized(_TAG_UUID, value.bytes)

    if isinstance(value, decimal.Decimal):
        if value.is_nan():
            return _sized(_TAG_DECIMAL, str(value).encode('ascii'))
        if value.is_infinite():
            return _encode_float(float(value))
        if value == value.to_integral_value():
            return _encode_int(int(value))
        if decimal.Decimal(float(value)) == value:
            # Exactly representable, so equal to that float
            return _encode_float(float(value))
        return _sized(_TAG_DECIMAL, str(value.normalize()).encode('ascii'))

    sketch_key = getattr(value, '__sketch_key__', None)
    if callable(sketch_key):
        return encode_value(sketch_key())

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = tuple(getattr(value, f.name) for f in dataclasses.fields(value))
        return _sized(
            _TAG_RECORD,
            _sized(_TAG_STR, _qualified_name(type(value))) + encode_value(fields),
        )

    raise UnhashableValue(value)


class SeededHasher:
    """
    Keyed 64-bit hash function.

    Uses BLAKE2b with a 16-byte key built from two 64-bit seeds and an
    8-byte digest. The digest is read as an unsigned little-endian int.
    """

    __slots__ = ('_key',)

    def __init__(self, key0: int, key1: int):
        self._key = struct.pack('<QQ', key0 & _U64_MASK, key1 & _U64_MASK)

    @property
    def seeds(self) -> Tuple[int, int]:
        return struct.unpack('<QQ', self._key)

    def hash_bytes(self, data: bytes) -> int:
        digest = hashlib.blake2b(data, digest_size=8, key=self._key).digest()
        return struct.unpack('<Q', digest)[0]

    def __call__(self, value: Any) -> int:
        return self.hash_bytes(encode_value(value))

    def __repr__(self) -> str:
        return "SeededHasher(<keyed>)"
