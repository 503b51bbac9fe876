"""Cursor-based reading and writing of MQTT v5 wire values."""

from __future__ import annotations

from typing import Iterable, Protocol

from .types import (
    BinaryData,
    CodecError,
    EncodedString,
    ErrorKind,
    StringPair,
    TopicFilter,
)

VARIABLE_BYTE_INT_MAX = 268_435_455
_MAX_VBI_BYTES = 4


def encode_variable_byte_int(value: int) -> bytes:
    """Encode a value as an MQTT variable byte integer (1 to 4 bytes)."""
    if value < 0 or value > VARIABLE_BYTE_INT_MAX:
        raise CodecError(ErrorKind.ENCODING_ERROR)
    out = bytearray()
    while True:
        byte = value % 128
        value //= 128
        if value:
            byte |= 0x80
        out.append(byte)
        if not value:
            return bytes(out)


def decode_variable_byte_int(data: bytes) -> int:
    """Decode a variable byte integer from the start of `data`."""
    result = 0
    multiplier = 1
    for byte in data[:_MAX_VBI_BYTES]:
        result += (byte & 0x7F) * multiplier
        if not byte & 0x80:
            return result
        multiplier *= 128
    raise CodecError(ErrorKind.VARIABLE_BYTE_INTEGER_ERROR)


class BufferReader:
    """Reads wire values from a byte buffer, advancing `position`."""

    def __init__(self, buffer: bytes, length: int | None = None) -> None:
        self._data = bytes(buffer)
        self._end = len(self._data) if length is None else min(length, len(self._data))
        self.position = 0

    def skip(self, count: int) -> None:
        self.position += count

    def _peek(self, count: int) -> bytes:
        if self.position + count > self._end:
            raise CodecError(ErrorKind.INSUFFICIENT_BUFFER_SIZE)
        return self._data[self.position : self.position + count]

    def _take(self, count: int) -> bytes:
        chunk = self._peek(count)
        self.position += count
        return chunk

    def read_variable_byte_int(self) -> int:
        raw = bytearray()
        for offset in range(_MAX_VBI_BYTES):
            index = self.position + offset
            if index >= self._end:
                raise CodecError(ErrorKind.INSUFFICIENT_BUFFER_SIZE)
            byte = self._data[index]
            raw.append(byte)
            if not byte & 0x80:
                break
        value = decode_variable_byte_int(bytes(raw))
        self.position += len(raw)
        return value

    def read_u32(self) -> int:
        return int.from_bytes(self._take(4), "big")

    def read_u16(self) -> int:
        return int.from_bytes(self._take(2), "big")

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_string(self) -> EncodedString:
        length = self.read_u16()
        raw = self._peek(length)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise CodecError(ErrorKind.UTF8_ERROR) from None
        self.position += length
        return EncodedString(text)

    def read_binary(self) -> BinaryData:
        length = self.read_u16()
        return BinaryData(self._take(length))

    def read_string_pair(self) -> StringPair:
        name = self.read_string()
        value = self.read_string()
        return StringPair(name, value)

    def read_message(self, total_len: int) -> bytes:
        """Return the bytes from the cursor up to `total_len`, without advancing."""
        end = self._end if total_len > self._end else total_len
        return self._data[self.position : end]

    def peek_u8(self) -> int:
        return self._peek(1)[0]


class WritableProperty(Protocol):
    identifier: int

    def encode(self, writer: "BufferWriter") -> None: ...


class BufferWriter:
    """Writes wire values into a buffer of fixed capacity."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._buffer = bytearray()

    @property
    def position(self) -> int:
        return len(self._buffer)

    @property
    def capacity(self) -> int:
        return self._capacity

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def byte_at(self, n: int) -> int:
        """Return the n-th written byte, or 0 if nothing is written there yet."""
        return self._buffer[n] if 0 <= n < self.position else 0

    def remaining_length(self) -> bytes:
        """Return the encoded remaining length that follows the fixed header byte."""
        if self.position == 0:
            raise CodecError(ErrorKind.INSUFFICIENT_BUFFER_SIZE)
        limit = min(self.position - 1, _MAX_VBI_BYTES)
        out = bytearray()
        for index in range(1, _MAX_VBI_BYTES + 1):
            byte = self.byte_at(index)
            out.append(byte)
            if not byte & 0x80:
                break
            if index >= limit:
                if index != _MAX_VBI_BYTES:
                    raise CodecError(ErrorKind.VARIABLE_BYTE_INTEGER_ERROR)
                break
        return bytes(out)

    def insert(self, data: bytes) -> None:
        if self.position + len(data) > self._capacity:
            raise CodecError(ErrorKind.INSUFFICIENT_BUFFER_SIZE)
        self._buffer += data

    def _write_uint(self, value: int, size: int) -> None:
        if not 0 <= value < 1 << (8 * size):
            raise CodecError(ErrorKind.ENCODING_ERROR)
        self.insert(value.to_bytes(size, "big"))

    def write_u8(self, value: int) -> None:
        self._write_uint(value, 1)

    def write_u16(self, value: int) -> None:
        self._write_uint(value, 2)

    def write_u32(self, value: int) -> None:
        self._write_uint(value, 4)

    def write_string(self, string: EncodedString) -> None:
        raw = string.raw
        self.write_u16(len(raw))
        if raw:
            self.insert(raw)

    def write_binary(self, data: BinaryData) -> None:
        self.write_u16(data.length)
        self.insert(data.data)

    def write_string_pair(self, pair: StringPair) -> None:
        self.write_string(pair.name)
        self.write_string(pair.value)

    def write_variable_byte_int(self, value: int) -> None:
        self.insert(encode_variable_byte_int(value))

    def write_properties(self, properties: Iterable[WritableProperty]) -> None:
        """Write each property as its identifier byte followed by its value."""
        for prop in properties:
            self.write_u8(int(prop.identifier))
            prop.encode(self)

    def write_topic_filters(self, sub: bool, filters: Iterable[TopicFilter]) -> None:
        """Write topic filters; options bytes are written only when `sub` is true."""
        for topic_filter in filters:
            self.write_string(topic_filter.filter)
            if sub:
                self.write_u8(topic_filter.sub_options)