"""MQTT v5 properties: identifiers, per-packet rules and wire coding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from .buffer import BufferReader, BufferWriter, encode_variable_byte_int
from .types import BinaryData, CodecError, EncodedString, ErrorKind, StringPair

PropertyValue = Union[int, EncodedString, BinaryData, StringPair]


class PropertyId(IntEnum):
    """Identifier byte of each MQTT v5 property."""

    RESERVED = 0x00
    PAYLOAD_FORMAT = 0x01
    MESSAGE_EXPIRY_INTERVAL = 0x02
    CONTENT_TYPE = 0x03
    RESPONSE_TOPIC = 0x08
    CORRELATION_DATA = 0x09
    SUBSCRIPTION_IDENTIFIER = 0x0B
    SESSION_EXPIRY_INTERVAL = 0x11
    ASSIGNED_CLIENT_IDENTIFIER = 0x12
    SERVER_KEEP_ALIVE = 0x13
    AUTHENTICATION_METHOD = 0x15
    AUTHENTICATION_DATA = 0x16
    REQUEST_PROBLEM_INFORMATION = 0x17
    WILL_DELAY_INTERVAL = 0x18
    REQUEST_RESPONSE_INFORMATION = 0x19
    RESPONSE_INFORMATION = 0x1A
    SERVER_REFERENCE = 0x1C
    REASON_STRING = 0x1F
    RECEIVE_MAXIMUM = 0x21
    TOPIC_ALIAS_MAXIMUM = 0x22
    TOPIC_ALIAS = 0x23
    MAXIMUM_QOS = 0x24
    RETAIN_AVAILABLE = 0x25
    USER_PROPERTY = 0x26
    MAXIMUM_PACKET_SIZE = 0x27
    WILDCARD_SUBSCRIPTION_AVAILABLE = 0x28
    SUBSCRIPTION_IDENTIFIER_AVAILABLE = 0x29
    SHARED_SUBSCRIPTION_AVAILABLE = 0x2A


class PacketKind(Enum):
    """Packet types that carry a property list."""

    CONNECT = "connect"
    CONNACK = "connack"
    PUBLISH = "publish"
    PUBACK = "puback"
    PUBREC = "pubrec"
    PUBREL = "pubrel"
    PUBCOMP = "pubcomp"
    SUBSCRIBE = "subscribe"
    SUBACK = "suback"
    UNSUBSCRIBE = "unsubscribe"
    UNSUBACK = "unsuback"
    PINGREQ = "pingreq"
    PINGRESP = "pingresp"
    DISCONNECT = "disconnect"
    AUTH = "auth"


class _Kind(Enum):
    U8 = 1
    U16 = 2
    U32 = 4
    VARIABLE = "vbi"
    STRING = "string"
    BINARY = "binary"
    PAIR = "pair"


_P = PropertyId

_VALUE_KIND: dict[PropertyId, _Kind] = {
    _P.PAYLOAD_FORMAT: _Kind.U8,
    _P.MESSAGE_EXPIRY_INTERVAL: _Kind.U32,
    _P.CONTENT_TYPE: _Kind.STRING,
    _P.RESPONSE_TOPIC: _Kind.STRING,
    _P.CORRELATION_DATA: _Kind.BINARY,
    _P.SUBSCRIPTION_IDENTIFIER: _Kind.VARIABLE,
    _P.SESSION_EXPIRY_INTERVAL: _Kind.U32,
    _P.ASSIGNED_CLIENT_IDENTIFIER: _Kind.STRING,
    _P.SERVER_KEEP_ALIVE: _Kind.U16,
    _P.AUTHENTICATION_METHOD: _Kind.STRING,
    _P.AUTHENTICATION_DATA: _Kind.BINARY,
    _P.REQUEST_PROBLEM_INFORMATION: _Kind.U8,
    _P.WILL_DELAY_INTERVAL: _Kind.U32,
    _P.REQUEST_RESPONSE_INFORMATION: _Kind.U8,
    _P.RESPONSE_INFORMATION: _Kind.STRING,
    _P.SERVER_REFERENCE: _Kind.STRING,
    _P.REASON_STRING: _Kind.STRING,
    _P.RECEIVE_MAXIMUM: _Kind.U16,
    _P.TOPIC_ALIAS_MAXIMUM: _Kind.U16,
    _P.TOPIC_ALIAS: _Kind.U16,
    _P.MAXIMUM_QOS: _Kind.U8,
    _P.RETAIN_AVAILABLE: _Kind.U8,
    _P.USER_PROPERTY: _Kind.PAIR,
    _P.MAXIMUM_PACKET_SIZE: _Kind.U32,
    _P.WILDCARD_SUBSCRIPTION_AVAILABLE: _Kind.U8,
    _P.SUBSCRIPTION_IDENTIFIER_AVAILABLE: _Kind.U8,
    _P.SHARED_SUBSCRIPTION_AVAILABLE: _Kind.U8,
}

_REASON_AND_USER = frozenset({_P.REASON_STRING, _P.USER_PROPERTY})

_ALLOWED: dict[PacketKind, frozenset[PropertyId]] = {
    PacketKind.CONNECT: frozenset(
        {
            _P.SESSION_EXPIRY_INTERVAL,
            _P.RECEIVE_MAXIMUM,
            _P.MAXIMUM_PACKET_SIZE,
            _P.TOPIC_ALIAS_MAXIMUM,
            _P.REQUEST_RESPONSE_INFORMATION,
            _P.REQUEST_PROBLEM_INFORMATION,
            _P.USER_PROPERTY,
            _P.AUTHENTICATION_METHOD,
            _P.AUTHENTICATION_DATA,
        }
    ),
    PacketKind.CONNACK: frozenset(
        {
            _P.SESSION_EXPIRY_INTERVAL,
            _P.RECEIVE_MAXIMUM,
            _P.MAXIMUM_QOS,
            _P.MAXIMUM_PACKET_SIZE,
            _P.ASSIGNED_CLIENT_IDENTIFIER,
            _P.TOPIC_ALIAS_MAXIMUM,
            _P.REASON_STRING,
            _P.USER_PROPERTY,
            _P.WILDCARD_SUBSCRIPTION_AVAILABLE,
            _P.SUBSCRIPTION_IDENTIFIER_AVAILABLE,
            _P.SHARED_SUBSCRIPTION_AVAILABLE,
            _P.SERVER_KEEP_ALIVE,
            _P.RESPONSE_INFORMATION,
            _P.SERVER_REFERENCE,
            _P.AUTHENTICATION_METHOD,
            _P.AUTHENTICATION_DATA,
        }
    ),
    PacketKind.PUBLISH: frozenset(
        {
            _P.PAYLOAD_FORMAT,
            _P.MESSAGE_EXPIRY_INTERVAL,
            _P.TOPIC_ALIAS,
            _P.RESPONSE_TOPIC,
            _P.CORRELATION_DATA,
            _P.USER_PROPERTY,
            _P.SUBSCRIPTION_IDENTIFIER,
            _P.CONTENT_TYPE,
        }
    ),
    PacketKind.PUBACK: _REASON_AND_USER,
    PacketKind.PUBREC: _REASON_AND_USER,
    PacketKind.PUBREL: _REASON_AND_USER,
    PacketKind.PUBCOMP: _REASON_AND_USER,
    PacketKind.SUBSCRIBE: frozenset({_P.SUBSCRIPTION_IDENTIFIER, _P.USER_PROPERTY}),
    PacketKind.SUBACK: _REASON_AND_USER,
    PacketKind.UNSUBSCRIBE: frozenset({_P.USER_PROPERTY}),
    PacketKind.UNSUBACK: _REASON_AND_USER,
    PacketKind.PINGREQ: frozenset(),
    PacketKind.PINGRESP: frozenset(),
    PacketKind.DISCONNECT: frozenset(
        {
            _P.SESSION_EXPIRY_INTERVAL,
            _P.REASON_STRING,
            _P.USER_PROPERTY,
            _P.SERVER_REFERENCE,
        }
    ),
    PacketKind.AUTH: frozenset(
        {
            _P.AUTHENTICATION_METHOD,
            _P.AUTHENTICATION_DATA,
            _P.REASON_STRING,
            _P.USER_PROPERTY,
        }
    ),
}

_VALUE_TYPE = {
    _Kind.U8: int,
    _Kind.U16: int,
    _Kind.U32: int,
    _Kind.VARIABLE: int,
    _Kind.STRING: EncodedString,
    _Kind.BINARY: BinaryData,
    _Kind.PAIR: StringPair,
}


@dataclass(frozen=True)
class Property:
    """A single property: its identifier and the value it carries."""

    identifier: PropertyId
    value: PropertyValue = 0

    def __post_init__(self) -> None:
        identifier = PropertyId(self.identifier)
        object.__setattr__(self, "identifier", identifier)
        kind = _VALUE_KIND.get(identifier)
        if kind is None:
            return
        expected = _VALUE_TYPE[kind]
        if not isinstance(self.value, expected) or isinstance(self.value, bool):
            raise TypeError(
                f"{identifier.name} takes a {expected.__name__} value, "
                f"not {type(self.value).__name__}"
            )

    def allowed_in(self, kind: PacketKind) -> bool:
        """Whether this property may appear in a packet of the given kind."""
        return self.identifier in _ALLOWED[kind]

    def encoded_len(self) -> int:
        """Length of the value on the wire, without the identifier byte."""
        kind = _VALUE_KIND.get(self.identifier)
        if kind is None:
            return 0
        if kind is _Kind.VARIABLE:
            return len(encode_variable_byte_int(self.value))
        if kind in (_Kind.STRING, _Kind.BINARY, _Kind.PAIR):
            return self.value.encoded_len()
        return kind.value

    def encode(self, writer: BufferWriter) -> None:
        """Write the value (not the identifier) to the writer."""
        kind = _VALUE_KIND.get(self.identifier)
        if kind is None:
            raise CodecError(ErrorKind.PROPERTY_NOT_FOUND)
        if kind is _Kind.U8:
            writer.write_u8(self.value)
        elif kind is _Kind.U16:
            writer.write_u16(self.value)
        elif kind is _Kind.U32:
            writer.write_u32(self.value)
        elif kind is _Kind.VARIABLE:
            writer.write_variable_byte_int(self.value)
        elif kind is _Kind.STRING:
            writer.write_string(self.value)
        elif kind is _Kind.BINARY:
            writer.write_binary(self.value)
        else:
            writer.write_string_pair(self.value)


def decode_property(reader: BufferReader) -> Property:
    """Read one property (identifier byte and value) from the reader."""
    raw_id = reader.read_u8()
    try:
        identifier = PropertyId(raw_id)
    except ValueError:
        raise CodecError(ErrorKind.ID_NOT_FOUND) from None
    kind = _VALUE_KIND.get(identifier)
    if kind is None:
        raise CodecError(ErrorKind.ID_NOT_FOUND)
    readers = {
        _Kind.U8: reader.read_u8,
        _Kind.U16: reader.read_u16,
        _Kind.U32: reader.read_u32,
        _Kind.VARIABLE: reader.read_variable_byte_int,
        _Kind.STRING: reader.read_string,
        _Kind.BINARY: reader.read_binary,
        _Kind.PAIR: reader.read_string_pair,
    }
    return Property(identifier, readers[kind]())