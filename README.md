# mqttwire

`mqttwire` encodes and decodes MQTT v5 packets. It contains:

- the wire primitives: big-endian integers, variable byte integers,
  length-prefixed UTF-8 strings, binary data and string pairs
- the v5 property set
- the reason codes
- the publish, acknowledgement and subscription packets that a client sends
  and receives

It uses only the standard library and needs Python 3.10 or later.

## Installing

```
pip install .
```

## Modules

| Module | Contents |
| --- | --- |
| `mqttwire.types` | `EncodedString`, `BinaryData`, `StringPair` and `TopicFilter` values; the `CodecError` exception and its `ErrorKind` enum |
| `mqttwire.buffer` | `BufferReader` and `BufferWriter`; `encode_variable_byte_int` and `decode_variable_byte_int` |
| `mqttwire.property` | `Property`, `PropertyId`, `PacketKind` and `decode_property` |
| `mqttwire.reason_codes` | `ReasonCode` |
| `mqttwire.packet` | the `Packet` base class, `PacketType`, `QualityOfService` and `PublishPacket` |
| `mqttwire.acks` | `PubackPacket`, `PubrecPacket`, `PubrelPacket` and `PubcompPacket` |
| `mqttwire.subscriptions` | `SubscriptionPacket`, `UnsubscriptionPacket`, `SubackPacket` and `UnsubackPacket` |
| `mqttwire.rng` | `CountingRng`, a deterministic counter that can supply packet identifiers |

## Primitives

```python
from mqttwire.buffer import BufferReader, BufferWriter

writer = BufferWriter(16)           # capacity in bytes
writer.write_u16(0xFAED)
writer.write_variable_byte_int(512)
print(writer.getvalue())            # b'\xfa\xed\x80\x04'

reader = BufferReader(b"\x00\x04test")
print(reader.read_string().string)  # 'test'
print(reader.position)              # 6
```

Failures raise `CodecError` from `mqttwire.types`. Its `kind` attribute is an
`ErrorKind` member. These are the cases:

| Case | `kind` |
| --- | --- |
| A write goes past the writer's capacity | `INSUFFICIENT_BUFFER_SIZE` |
| A read goes past the end of the data | `INSUFFICIENT_BUFFER_SIZE` |
| A string is not valid UTF-8 | `UTF8_ERROR` |
| A value is above 268,435,455, the largest variable byte integer | `ENCODING_ERROR` |

## Properties

A `Property` is a `PropertyId` and a value of the matching type:

- an `int` for numeric properties
- `EncodedString`, `BinaryData` or `StringPair` for the others

A value of the wrong type raises `TypeError`. The method
`Property.allowed_in(PacketKind.PUBLISH)`, or any other `PacketKind`, tells
whether the property may appear in that kind of packet.

## Packets

```python
from mqttwire.packet import PublishPacket, QualityOfService
from mqttwire.property import Property, PropertyId

packet = PublishPacket()
packet.add_qos(QualityOfService.QOS1)
packet.add_topic_name("test")
packet.add_identifier(23432)
packet.add_properties([Property(PropertyId.PAYLOAD_FORMAT, 1)])
packet.add_message(b"Hello world")
data = packet.encode(100)  # at most 100 bytes, returned as bytes
```

`add_properties` keeps only the properties allowed in the packet. It returns
the resulting property length, which is also stored in `property_len`.

To decode, pass a `BufferReader` to the `decode` method of a new packet:

```python
from mqttwire.buffer import BufferReader
from mqttwire.acks import PubackPacket

ack = PubackPacket()
ack.decode(BufferReader(b"\x40\x0c\x8a\x5e\x15\x08\x1f\x00\x05Hello"))
print(ack.packet_identifier, ack.reason_code)  # 35422 21
print(ack.properties[0].value.string)          # 'Hello'
```

`decode` raises `CodecError` in these cases:

| Case | `kind` |
| --- | --- |
| The bytes hold a different packet type | `PACKET_TYPE_MISMATCH` |
| A property identifier is unknown | `ID_NOT_FOUND` |
| A property is not allowed in this packet | `PROPERTY_NOT_FOUND` |

Direction matters for the subscription packets:

- `SubscriptionPacket` and `UnsubscriptionPacket` can only be encoded. Their
  `decode` raises `WRONG_PACKET_TO_DECODE`. Encoding with no topic filters
  raises `ENCODING_ERROR`.
- `SubackPacket` and `UnsubackPacket` can only be decoded. Their `encode`
  raises `WRONG_PACKET_TO_ENCODE`. `max_reasons` limits how many reason codes
  are kept.

`ReasonCode.from_byte` turns a reason-code byte into its member. Unknown bytes
become `NETWORK_ERROR`. `str()` on a member gives a readable message.

## What it does not do

`mqttwire` only turns packets into bytes and back. It has no client and opens
no network connections. It keeps no session state.

Only the packets listed above are implemented. There are no CONNECT, CONNACK,
DISCONNECT, PINGREQ, PINGRESP or AUTH packets. `PacketType` and `PacketKind`
still name those types, so their headers and allowed properties can be checked.

## Running the tests

```
pip install ".[test]"
pytest
```