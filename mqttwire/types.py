"""Value types and errors shared by the MQTT v5 wire codec."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(Enum):
    """The kinds of failure the codec reports; each value is its message."""

    UTF8_ERROR = "Error encountered during UTF8 decoding!"
    INSUFFICIENT_BUFFER_SIZE = "Buffer size is not sufficient for packet!"
    VARIABLE_BYTE_INTEGER_ERROR = (
        "Error encountered during variable byte integer decoding / encoding!"
    )
    ID_NOT_FOUND = "Packet identifier not found!"
    ENCODING_ERROR = "Error encountered during packet encoding!"
    DECODING_ERROR = "Error encountered during packet decoding!"
    PACKET_TYPE_MISMATCH = (
        "Packet type not matched during decoding "
        "(Received different packet type than encode type)!"
    )
    WRONG_PACKET_TO_DECODE = (
        "Not able to decode packet, this packet is used just for sending "
        "to broker, not receiving by client!"
    )
    WRONG_PACKET_TO_ENCODE = (
        "Not able to encode packet, this packet is used only from server "
        "to client not the opposite way!"
    )
    PROPERTY_NOT_FOUND = "Property with ID not found!"

    def __str__(self) -> str:
        return self.value


class CodecError(Exception):
    """Raised when a value cannot be read from or written to a buffer."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


@dataclass(frozen=True)
class EncodedString:
    """A UTF-8 string as carried in MQTT v5 packets."""

    string: str = ""

    @property
    def raw(self) -> bytes:
        return self.string.encode("utf-8")

    @property
    def length(self) -> int:
        """Length of the string in bytes, without the length prefix."""
        return len(self.raw)

    def encoded_len(self) -> int:
        """Length on the wire, including the two-byte length prefix."""
        return self.length + 2


@dataclass(frozen=True)
class BinaryData:
    """Binary data as carried in MQTT v5 packets."""

    data: bytes = b""

    @property
    def length(self) -> int:
        return len(self.data)

    def encoded_len(self) -> int:
        """Length on the wire, including the two-byte length prefix."""
        return self.length + 2


@dataclass(frozen=True)
class StringPair:
    """A name-value pair of UTF-8 strings."""

    name: EncodedString = field(default_factory=EncodedString)
    value: EncodedString = field(default_factory=EncodedString)

    def encoded_len(self) -> int:
        return self.name.encoded_len() + self.value.encoded_len()


@dataclass
class TopicFilter:
    """A topic filter with its subscription options byte."""

    filter: EncodedString = field(default_factory=EncodedString)
    sub_options: int = 0

    def encoded_len(self) -> int:
        """Length on the wire: prefixed filter plus one options byte."""
        return self.filter.length + 3