"""Acknowledgement packets of the QoS 1 and QoS 2 publish flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .buffer import BufferReader, BufferWriter, encode_variable_byte_int
from .packet import Packet, PacketType
from .property import PacketKind


@dataclass
class _AckPacket(Packet):
    """Packet identifier, reason code and properties, as every ack carries them."""

    packet_identifier: int = 0
    reason_code: int = 0

    def encode(self, buffer_len: int) -> bytes:
        writer = BufferWriter(buffer_len)
        remaining = (
            self.property_len + len(encode_variable_byte_int(self.property_len)) + 3
        )
        writer.write_u8(self.fixed_header)
        writer.write_variable_byte_int(remaining)
        writer.write_u16(self.packet_identifier)
        writer.write_u8(int(self.reason_code))
        writer.write_variable_byte_int(self.property_len)
        writer.write_properties(self.properties)
        return writer.getvalue()

    def decode(self, reader: BufferReader) -> None:
        self._expect_type(reader)
        self.packet_identifier = reader.read_u16()
        self.reason_code = reader.read_u8()
        self.decode_properties(reader)


@dataclass
class PubackPacket(_AckPacket):
    """PUBACK: acknowledges a QoS 1 PUBLISH."""

    packet_type: ClassVar[PacketType] = PacketType.PUBACK
    property_kind: ClassVar[PacketKind] = PacketKind.PUBACK

    fixed_header: int = int(PacketType.PUBACK)

    def encode(self, buffer_len: int) -> bytes:
        """Encode the full form: identifier, reason code and properties."""
        return super().encode(buffer_len)

    def decode(self, reader: BufferReader) -> None:
        """Decode, allowing the short forms without reason code or properties."""
        self._expect_type(reader)
        self.packet_identifier = reader.read_u16()
        if self.remain_len != 2:
            self.reason_code = reader.read_u8()
        if self.remain_len < 4:
            self.property_len = 0
        else:
            self.decode_properties(reader)


@dataclass
class PubcompPacket(_AckPacket):
    """PUBCOMP: completes a QoS 2 exchange."""

    packet_type: ClassVar[PacketType] = PacketType.PUBCOMP
    property_kind: ClassVar[PacketKind] = PacketKind.PUBCOMP

    fixed_header: int = int(PacketType.PUBCOMP)


@dataclass
class PubrecPacket(_AckPacket):
    """PUBREC: first acknowledgement of a QoS 2 PUBLISH."""

    packet_type: ClassVar[PacketType] = PacketType.PUBREC
    property_kind: ClassVar[PacketKind] = PacketKind.PUBREC

    fixed_header: int = int(PacketType.PUBREC)


@dataclass
class PubrelPacket(_AckPacket):
    """PUBREL: releases a QoS 2 message; its header carries the 0x02 flag bits."""

    packet_type: ClassVar[PacketType] = PacketType.PUBREL
    property_kind: ClassVar[PacketKind] = PacketKind.PUBREL

    fixed_header: int = int(PacketType.PUBREL) | 0x02