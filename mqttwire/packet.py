"""Common packet behaviour and the PUBLISH packet."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Iterable

from .buffer import BufferReader, BufferWriter, encode_variable_byte_int
from .property import PacketKind, Property, decode_property
from .types import CodecError, EncodedString, ErrorKind


class PacketType(IntEnum):
    """Control packet types, as the high nibble of the fixed header."""

    RESERVED = 0x00
    CONNECT = 0x10
    CONNACK = 0x20
    PUBLISH = 0x30
    PUBACK = 0x40
    PUBREC = 0x50
    PUBREL = 0x60
    PUBCOMP = 0x70
    SUBSCRIBE = 0x80
    SUBACK = 0x90
    UNSUBSCRIBE = 0xA0
    UNSUBACK = 0xB0
    PINGREQ = 0xC0
    PINGRESP = 0xD0
    DISCONNECT = 0xE0
    AUTH = 0xF0

    @classmethod
    def from_header(cls, header: int) -> "PacketType":
        return cls(header & 0xF0)


class QualityOfService(IntEnum):
    """QoS level, valued as its bits in the PUBLISH fixed header."""

    QOS0 = 0
    QOS1 = 2
    QOS2 = 4
    INVALID = 3

    @classmethod
    def _missing_(cls, value: object) -> "QualityOfService":
        return cls.INVALID


@dataclass
class Packet:
    """Fields and coding steps shared by all MQTT v5 packets."""

    packet_type: ClassVar[PacketType]
    property_kind: ClassVar[PacketKind]

    fixed_header: int = 0
    remain_len: int = 0
    property_len: int = 0
    properties: list[Property] = field(default_factory=list)

    def add_properties(self, properties: Iterable[Property]) -> int:
        """Add the properties allowed in this packet; return the property length."""
        self.properties.extend(
            prop for prop in properties if prop.allowed_in(self.property_kind)
        )
        self.property_len = sum(prop.encoded_len() + 1 for prop in self.properties)
        return self.property_len

    def decode_fixed_header(self, reader: BufferReader) -> PacketType:
        """Read the header byte and remaining length; return the packet type."""
        self.fixed_header = reader.read_u8()
        self.remain_len = reader.read_variable_byte_int()
        return PacketType.from_header(self.fixed_header)

    def decode_properties(self, reader: BufferReader) -> None:
        """Read the property length and then properties until it is used up."""
        self.property_len = reader.read_variable_byte_int()
        consumed = 0
        while consumed < self.property_len:
            prop = decode_property(reader)
            consumed += prop.encoded_len() + 1
            if not prop.allowed_in(self.property_kind):
                raise CodecError(ErrorKind.PROPERTY_NOT_FOUND)
            self.properties.append(prop)
        if consumed != self.property_len:
            raise CodecError(ErrorKind.DECODING_ERROR)

    def _expect_type(self, reader: BufferReader) -> None:
        if self.decode_fixed_header(reader) != self.packet_type:
            raise CodecError(ErrorKind.PACKET_TYPE_MISMATCH)

    def encode(self, buffer_len: int) -> bytes:
        """Encode the packet into at most `buffer_len` bytes."""
        raise CodecError(ErrorKind.WRONG_PACKET_TO_ENCODE)

    def decode(self, reader: BufferReader) -> None:
        """Fill the packet's fields from the reader."""
        raise CodecError(ErrorKind.WRONG_PACKET_TO_DECODE)


@dataclass
class PublishPacket(Packet):
    """PUBLISH: an application message sent to a topic."""

    packet_type: ClassVar[PacketType] = PacketType.PUBLISH
    property_kind: ClassVar[PacketKind] = PacketKind.PUBLISH

    fixed_header: int = int(PacketType.PUBLISH)
    topic_name: EncodedString = field(default_factory=EncodedString)
    packet_identifier: int = 1
    message: bytes | None = None

    @property
    def qos(self) -> QualityOfService:
        return QualityOfService(self.fixed_header & 0x06)

    def add_topic_name(self, topic_name: str) -> None:
        self.topic_name = EncodedString(topic_name)

    def add_message(self, message: bytes) -> None:
        self.message = bytes(message)

    def add_qos(self, qos: QualityOfService) -> None:
        self.fixed_header |= int(qos)

    def add_retain(self, retain: bool) -> None:
        self.fixed_header |= int(bool(retain))

    def add_identifier(self, identifier: int) -> None:
        self.packet_identifier = identifier

    def encode(self, buffer_len: int) -> bytes:
        if self.message is None:
            raise CodecError(ErrorKind.ENCODING_ERROR)
        writer = BufferWriter(buffer_len)
        has_identifier = self.fixed_header & 0x06 != 0
        remaining = (
            self.property_len
            + len(encode_variable_byte_int(self.property_len))
            + len(self.message)
            + self.topic_name.encoded_len()
        )
        if has_identifier:
            remaining += 2

        writer.write_u8(self.fixed_header)
        writer.write_variable_byte_int(remaining)
        writer.write_string(self.topic_name)
        if has_identifier:
            writer.write_u16(self.packet_identifier)
        writer.write_variable_byte_int(self.property_len)
        writer.write_properties(self.properties)
        writer.insert(self.message)
        return writer.getvalue()

    def decode(self, reader: BufferReader) -> None:
        self._expect_type(reader)
        self.topic_name = reader.read_string()
        if self.fixed_header & 0x06 != 0:
            self.packet_identifier = reader.read_u16()
        self.decode_properties(reader)
        total_len = len(encode_variable_byte_int(self.remain_len)) + 1 + self.remain_len
        self.message = reader.read_message(total_len)