"""SUBSCRIBE, UNSUBSCRIBE and their acknowledgements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .buffer import BufferReader, BufferWriter, encode_variable_byte_int
from .packet import Packet, PacketType, QualityOfService
from .property import PacketKind
from .types import CodecError, EncodedString, ErrorKind, TopicFilter


@dataclass
class _FilterPacket(Packet):
    """A client packet carrying a list of topic filters."""

    _with_options: ClassVar[bool] = True

    packet_identifier: int = 0
    topic_filters: list[TopicFilter] = field(default_factory=list)

    def _filters_len(self) -> int:
        per_filter = 3 if self._with_options else 2
        return sum(f.filter.length + per_filter for f in self.topic_filters)

    def encode(self, buffer_len: int) -> bytes:
        if not self.topic_filters:
            raise CodecError(ErrorKind.ENCODING_ERROR)
        writer = BufferWriter(buffer_len)
        remaining = (
            self.property_len
            + len(encode_variable_byte_int(self.property_len))
            + 2
            + self._filters_len()
        )
        writer.write_u8(self.fixed_header)
        writer.write_variable_byte_int(remaining)
        writer.write_u16(self.packet_identifier)
        writer.write_variable_byte_int(self.property_len)
        writer.write_properties(self.properties)
        writer.write_topic_filters(self._with_options, self.topic_filters)
        return writer.getvalue()

    def decode(self, reader: BufferReader) -> None:
        """Clients never receive this packet, so decoding is refused."""
        raise CodecError(ErrorKind.WRONG_PACKET_TO_DECODE)


@dataclass
class SubscriptionPacket(_FilterPacket):
    """SUBSCRIBE: asks the broker for messages matching topic filters."""

    packet_type: ClassVar[PacketType] = PacketType.SUBSCRIBE
    property_kind: ClassVar[PacketKind] = PacketKind.SUBSCRIBE
    _with_options: ClassVar[bool] = True

    fixed_header: int = int(PacketType.SUBSCRIBE) | 0x02
    packet_identifier: int = 1

    def add_new_filter(self, topic_name: str, qos: QualityOfService) -> None:
        """Append a filter whose options byte holds the requested QoS level."""
        self.topic_filters.append(
            TopicFilter(EncodedString(topic_name), int(qos) >> 1)
        )

    def encode(self, buffer_len: int) -> bytes:
        return super().encode(buffer_len)

    def decode(self, reader: BufferReader) -> None:
        super().decode(reader)


@dataclass
class UnsubscriptionPacket(_FilterPacket):
    """UNSUBSCRIBE: removes subscriptions for topic filters."""

    packet_type: ClassVar[PacketType] = PacketType.UNSUBSCRIBE
    property_kind: ClassVar[PacketKind] = PacketKind.UNSUBSCRIBE
    _with_options: ClassVar[bool] = False

    fixed_header: int = int(PacketType.UNSUBSCRIBE) | 0x02

    def add_new_filter(self, topic_name: str) -> None:
        self.topic_filters.append(TopicFilter(EncodedString(topic_name), 0x01))

    def encode(self, buffer_len: int) -> bytes:
        return super().encode(buffer_len)

    def decode(self, reader: BufferReader) -> None:
        super().decode(reader)


@dataclass
class _ReasonListPacket(Packet):
    """A broker reply carrying one reason code per requested filter."""

    packet_identifier: int = 0
    reason_codes: list[int] = field(default_factory=list)
    max_reasons: int | None = None

    def _keep(self, code: int) -> None:
        if self.max_reasons is None or len(self.reason_codes) < self.max_reasons:
            self.reason_codes.append(code)

    def _packet_end(self) -> int:
        return self.remain_len + len(encode_variable_byte_int(self.remain_len)) + 1

    def encode(self, buffer_len: int) -> bytes:
        """Clients never send this packet, so encoding is refused."""
        raise CodecError(ErrorKind.WRONG_PACKET_TO_ENCODE)

    def decode(self, reader: BufferReader) -> None:
        self._expect_type(reader)
        self.packet_identifier = reader.read_u16()
        self.decode_properties(reader)
        self.read_reason_codes(reader)

    def read_reason_codes(self, reader: BufferReader) -> None:
        raise NotImplementedError


@dataclass
class SubackPacket(_ReasonListPacket):
    """SUBACK: the broker's answer to SUBSCRIBE.

    All reason codes up to the end of the packet are consumed; when
    `max_reasons` is set, only that many are kept.
    """

    packet_type: ClassVar[PacketType] = PacketType.SUBACK
    property_kind: ClassVar[PacketKind] = PacketKind.SUBACK

    fixed_header: int = int(PacketType.SUBACK)

    def read_reason_codes(self, reader: BufferReader) -> None:
        end = self._packet_end()
        while reader.position < end:
            self._keep(reader.read_u8())

    def encode(self, buffer_len: int) -> bytes:
        return super().encode(buffer_len)

    def decode(self, reader: BufferReader) -> None:
        super().decode(reader)


@dataclass
class UnsubackPacket(_ReasonListPacket):
    """UNSUBACK: the broker's answer to UNSUBSCRIBE.

    When `max_reasons` is set exactly that many reason codes are read;
    otherwise codes are read up to the end of the packet.
    """

    packet_type: ClassVar[PacketType] = PacketType.UNSUBACK
    property_kind: ClassVar[PacketKind] = PacketKind.UNSUBACK

    fixed_header: int = int(PacketType.UNSUBACK)

    def read_reason_codes(self, reader: BufferReader) -> None:
        if self.max_reasons is None:
            end = self._packet_end()
            while reader.position < end:
                self.reason_codes.append(reader.read_u8())
            return
        for _ in range(max(self.max_reasons, 1)):
            self.reason_codes.append(reader.read_u8())

    def encode(self, buffer_len: int) -> bytes:
        return super().encode(buffer_len)

    def decode(self, reader: BufferReader) -> None:
        super().decode(reader)