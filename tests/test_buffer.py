from dataclasses import dataclass

import pytest

from mqttwire.buffer import (
    BufferReader,
    BufferWriter,
    decode_variable_byte_int,
    encode_variable_byte_int,
)
from mqttwire.types import (
    BinaryData,
    CodecError,
    EncodedString,
    ErrorKind,
    StringPair,
    TopicFilter,
)


def _kind(info):
    return info.value.kind


# --- variable byte integer -------------------------------------------------


def test_decode():
    assert decode_variable_byte_int(bytes([0x81, 0x81, 0x81, 0x01])) == 2113665


def test_decode_small():
    assert decode_variable_byte_int(bytes([0x81, 0x81, 0x01, 0x85])) == 16_513


def test_decode_unterminated():
    with pytest.raises(CodecError) as info:
        decode_variable_byte_int(bytes([0x81, 0x81, 0x81, 0x81]))
    assert _kind(info) is ErrorKind.VARIABLE_BYTE_INTEGER_ERROR


def test_encode():
    res = encode_variable_byte_int(2_113_665)
    assert res == bytes([0x81, 0x81, 0x81, 0x01])
    assert len(res) == 4


def test_encode_small():
    res = encode_variable_byte_int(16_513)
    assert res == bytes([0x81, 0x81, 0x01])
    assert len(res) == 3


def test_encode_extra_small():
    res = encode_variable_byte_int(5)
    assert res == bytes([0x05])
    assert len(res) == 1


def test_encode_max():
    with pytest.raises(CodecError) as info:
        encode_variable_byte_int(288_435_455)
    assert _kind(info) is ErrorKind.ENCODING_ERROR


@pytest.mark.parametrize("value", [0, 127, 128, 16_383, 16_384, 2_097_151, 268_435_455])
def test_variable_byte_int_round_trip(value):
    assert decode_variable_byte_int(encode_variable_byte_int(value)) == value


# --- reader ----------------------------------------------------------------


def test_buffer_read_variable_byte():
    reader = BufferReader(bytes([0x82, 0x82, 0x03, 0x85, 0x84]), 5)
    assert reader.read_variable_byte_int() == 49410
    assert reader.position == 3


def test_buffer_read_invalid_size():
    reader = BufferReader(bytes([0x82, 0x82]), 2)
    with pytest.raises(CodecError) as info:
        reader.read_variable_byte_int()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_smaller_var_int():
    reader = BufferReader(bytes([0x82, 0x02]), 2)
    assert reader.read_variable_byte_int() == 258
    assert reader.position == 2


def test_complete_var_int():
    reader = BufferReader(bytes([0x81, 0x81, 0x81, 0x01]), 4)
    assert reader.read_variable_byte_int() == 2113665
    assert reader.position == 4


def test_var_empty_buffer():
    reader = BufferReader(b"", 0)
    with pytest.raises(CodecError) as info:
        reader.read_variable_byte_int()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_read_u32():
    reader = BufferReader(bytes([0x00, 0x02, 0x5E, 0xC1]), 4)
    assert reader.read_u32() == 155329


def test_read_u32_oob():
    reader = BufferReader(bytes([0x00, 0x02, 0x5E]), 3)
    with pytest.raises(CodecError) as info:
        reader.read_u32()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_read_u16():
    reader = BufferReader(bytes([0x48, 0x5F]), 2)
    assert reader.read_u16() == 18527


def test_read_u16_oob():
    reader = BufferReader(bytes([0x5E]), 1)
    with pytest.raises(CodecError) as info:
        reader.read_u16()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_read_u8():
    reader = BufferReader(bytes([0xFD]), 1)
    assert reader.read_u8() == 253


def test_read_u8_oob():
    reader = BufferReader(b"", 0)
    with pytest.raises(CodecError) as info:
        reader.read_u8()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_peek_does_not_advance():
    reader = BufferReader(bytes([0xFD, 0x01]))
    assert reader.peek_u8() == 0xFD
    assert reader.position == 0
    assert reader.read_u8() == 0xFD


def test_length_limits_reading():
    reader = BufferReader(bytes([0x01, 0x02]), 1)
    assert reader.read_u8() == 0x01
    with pytest.raises(CodecError):
        reader.peek_u8()


def test_read_string():
    reader = BufferReader(bytes([0x00, 0x04, 0xF0, 0x9F, 0x92, 0x96]), 6)
    s = reader.read_string()
    assert s.string == "💖"
    assert s.length == 4
    assert reader.position == 6


def test_read_string_utf8_wrong():
    reader = BufferReader(bytes([0x00, 0x03, 0xF0, 0x9F, 0x92]), 5)
    with pytest.raises(CodecError) as info:
        reader.read_string()
    assert _kind(info) is ErrorKind.UTF8_ERROR


def test_read_string_oob():
    reader = BufferReader(bytes([0x00, 0x04, 0xF0, 0x9F, 0x92]), 5)
    with pytest.raises(CodecError) as info:
        reader.read_string()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_read_binary():
    reader = BufferReader(bytes([0x00, 0x04, 0xFF, 0xEE, 0xDD, 0xCC]), 6)
    b = reader.read_binary()
    assert b.data == bytes([0xFF, 0xEE, 0xDD, 0xCC])
    assert b.length == 4


def test_read_binary_oob():
    reader = BufferReader(bytes([0x00, 0x04, 0xFF, 0xEE, 0xDD]), 5)
    with pytest.raises(CodecError) as info:
        reader.read_binary()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_read_string_pair():
    buf = bytes([0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E, 0x00, 0x03, 0xE2, 0x93, 0x87])
    pair = BufferReader(buf, 11).read_string_pair()
    assert pair.name.string == "😎"
    assert pair.name.length == 4
    assert pair.value.string == "Ⓡ"
    assert pair.value.length == 3


def test_read_string_pair_wrong_utf8():
    buf = bytes([0x00, 0x03, 0xF0, 0x9F, 0x92, 0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E])
    with pytest.raises(CodecError) as info:
        BufferReader(buf, 11).read_string_pair()
    assert _kind(info) is ErrorKind.UTF8_ERROR


def test_read_string_pair_oob():
    buf = bytes([0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E, 0x00, 0x04, 0xE2, 0x93, 0x87])
    with pytest.raises(CodecError) as info:
        BufferReader(buf, 11).read_string_pair()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_read_message_bounds():
    reader = BufferReader(b"\x01\x02hello", 7)
    reader.skip(2)
    assert reader.read_message(7) == b"hello"
    assert reader.read_message(100) == b"hello"
    assert reader.read_message(4) == b"he"
    assert reader.position == 2


# --- writer ----------------------------------------------------------------


def test_buffer_write_ref():
    data = bytes([0x82, 0x82, 0x03, 0x85, 0x84])
    writer = BufferWriter(5)
    writer.insert(data)
    assert writer.position == 5
    assert writer.getvalue() == data


def test_buffer_write_ref_oob():
    writer = BufferWriter(4)
    with pytest.raises(CodecError) as info:
        writer.insert(bytes([0x82, 0x82, 0x03, 0x85, 0x84]))
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE
    assert writer.getvalue() == b""


def test_buffer_write_u8():
    writer = BufferWriter(1)
    writer.write_u8(0xFA)
    assert writer.position == 1
    assert writer.getvalue() == bytes([0xFA])


def test_buffer_write_u8_oob():
    writer = BufferWriter(0)
    with pytest.raises(CodecError) as info:
        writer.write_u8(0xFA)
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_buffer_write_u16():
    writer = BufferWriter(2)
    writer.write_u16(0xFAED)
    assert writer.position == 2
    assert writer.getvalue() == bytes([0xFA, 0xED])


def test_buffer_write_u16_oob():
    writer = BufferWriter(1)
    with pytest.raises(CodecError) as info:
        writer.write_u16(0xFAED)
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_buffer_write_u32():
    writer = BufferWriter(4)
    writer.write_u32(0xFAEDCC09)
    assert writer.position == 4
    assert writer.getvalue() == bytes([0xFA, 0xED, 0xCC, 0x09])


def test_buffer_write_u32_oob():
    writer = BufferWriter(3)
    with pytest.raises(CodecError) as info:
        writer.write_u32(0xFAEDCC08)
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_write_out_of_range_value():
    with pytest.raises(CodecError) as info:
        BufferWriter(4).write_u8(256)
    assert _kind(info) is ErrorKind.ENCODING_ERROR


def test_buffer_write_string():
    writer = BufferWriter(6)
    writer.write_string(EncodedString("😎"))
    assert writer.position == 6
    assert writer.getvalue() == bytes([0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E])


def test_buffer_write_string_oob():
    writer = BufferWriter(5)
    with pytest.raises(CodecError) as info:
        writer.write_string(EncodedString("😎"))
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_buffer_write_bin():
    writer = BufferWriter(6)
    writer.write_binary(BinaryData(bytes([0xAB, 0xEF, 0x88, 0x43])))
    assert writer.position == 6
    assert writer.getvalue() == bytes([0x00, 0x04, 0xAB, 0xEF, 0x88, 0x43])


def test_buffer_write_bin_oob():
    writer = BufferWriter(5)
    with pytest.raises(CodecError) as info:
        writer.write_binary(BinaryData(bytes([0xAB, 0xEF, 0x88, 0x43])))
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_buffer_write_string_pair():
    pair = StringPair(EncodedString("Name"), EncodedString("😎"))
    writer = BufferWriter(12)
    writer.write_string_pair(pair)
    assert writer.position == 12
    assert writer.getvalue() == bytes(
        [0x00, 0x04, 0x4E, 0x61, 0x6D, 0x65, 0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E]
    )


def test_buffer_write_string_pair_oob():
    pair = StringPair(EncodedString("Name"), EncodedString("😎"))
    writer = BufferWriter(10)
    with pytest.raises(CodecError) as info:
        writer.write_string_pair(pair)
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_buffer_write_var_byte():
    writer = BufferWriter(2)
    writer.write_variable_byte_int(512)
    assert writer.position == 2
    assert writer.getvalue() == bytes([0x80, 0x04])


def test_buffer_write_var_byte_oob():
    writer = BufferWriter(2)
    with pytest.raises(CodecError) as info:
        writer.write_variable_byte_int(453123)
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


@dataclass
class _StubProperty:
    identifier: int
    value: object

    def encode(self, writer):
        if isinstance(self.value, EncodedString):
            writer.write_string(self.value)
        else:
            writer.write_binary(self.value)


def _props():
    return [
        _StubProperty(0x08, EncodedString("Name")),
        _StubProperty(0x09, BinaryData(bytes([0x12, 0x34, 0x56]))),
    ]


def test_buffer_write_properties():
    writer = BufferWriter(13)
    writer.write_properties(_props())
    assert writer.position == 13
    assert writer.getvalue() == bytes(
        [0x08, 0x00, 0x04, 0x4E, 0x61, 0x6D, 0x65, 0x09, 0x00, 0x03, 0x12, 0x34, 0x56]
    )


def test_buffer_write_properties_oob():
    writer = BufferWriter(10)
    with pytest.raises(CodecError) as info:
        writer.write_properties(_props())
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def _filters():
    return [
        TopicFilter(EncodedString("test"), 0xAE),
        TopicFilter(EncodedString("topic"), 0x22),
    ]


def test_buffer_write_filters():
    writer = BufferWriter(15)
    writer.write_topic_filters(True, _filters())
    assert writer.position == 15
    assert writer.getvalue() == bytes(
        [0x00, 0x04, 0x74, 0x65, 0x73, 0x74, 0xAE,
         0x00, 0x05, 0x74, 0x6F, 0x70, 0x69, 0x63, 0x22]
    )


def test_buffer_write_filters_without_options():
    writer = BufferWriter(15)
    writer.write_topic_filters(False, _filters())
    assert writer.getvalue() == bytes(
        [0x00, 0x04, 0x74, 0x65, 0x73, 0x74,
         0x00, 0x05, 0x74, 0x6F, 0x70, 0x69, 0x63]
    )


def test_buffer_write_filters_oob():
    writer = BufferWriter(5)
    with pytest.raises(CodecError) as info:
        writer.write_topic_filters(True, _filters())
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_byte_at():
    writer = BufferWriter(4)
    writer.insert(bytes([0x10, 0x20]))
    assert writer.byte_at(1) == 0x20
    assert writer.byte_at(3) == 0


def _rem_len(data):
    writer = BufferWriter(len(data))
    writer.insert(bytes(data))
    return writer.remaining_length()


def test_buffer_get_rem_len_one():
    assert _rem_len([0x82, 0x02, 0x03, 0x85, 0x84]) == bytes([0x02])


def test_buffer_get_rem_len_two():
    assert _rem_len([0x82, 0x82, 0x03, 0x85, 0x84]) == bytes([0x82, 0x03])


def test_buffer_get_rem_len_three():
    assert _rem_len([0x82, 0x82, 0x83, 0x05, 0x84]) == bytes([0x82, 0x83, 0x05])


def test_buffer_get_rem_len_all():
    assert _rem_len([0x82, 0x82, 0x83, 0x85, 0x04]) == bytes([0x82, 0x83, 0x85, 0x04])


def test_buffer_get_rem_len_over():
    assert _rem_len([0x82, 0x82, 0x83, 0x85, 0x84, 0x34]) == bytes([0x82, 0x83, 0x85, 0x84])


def test_buffer_get_rem_len_zero_end():
    assert _rem_len([0x82, 0x82, 0x83, 0x85, 0x04, 0x34]) == bytes([0x82, 0x83, 0x85, 0x04])


def test_buffer_get_rem_len_zero():
    assert _rem_len([0x82, 0x00, 0x83, 0x85, 0x04, 0x34]) == bytes([0x00])


def test_buffer_get_rem_len_cont():
    writer = BufferWriter(6)
    writer.insert(bytes([0x82, 0x81]))
    with pytest.raises(CodecError) as info:
        writer.remaining_length()
    assert _kind(info) is ErrorKind.VARIABLE_BYTE_INTEGER_ERROR
    writer.insert(bytes([0x82, 0x01]))
    assert writer.remaining_length() == bytes([0x81, 0x82, 0x01])


def test_rem_len_empty_writer():
    with pytest.raises(CodecError) as info:
        BufferWriter(4).remaining_length()
    assert _kind(info) is ErrorKind.INSUFFICIENT_BUFFER_SIZE


def test_writer_reader_round_trip():
    writer = BufferWriter(64)
    writer.write_u8(0x7F)
    writer.write_u16(0xBEEF)
    writer.write_u32(0xDEADBEEF)
    writer.write_variable_byte_int(321)
    writer.write_string(EncodedString("héllo"))
    writer.write_binary(BinaryData(b"\x00\x01"))
    writer.write_string_pair(StringPair(EncodedString("k"), EncodedString("v")))
    reader = BufferReader(writer.getvalue())
    assert reader.read_u8() == 0x7F
    assert reader.read_u16() == 0xBEEF
    assert reader.read_u32() == 0xDEADBEEF
    assert reader.read_variable_byte_int() == 321
    assert reader.read_string() == EncodedString("héllo")
    assert reader.read_binary() == BinaryData(b"\x00\x01")
    assert reader.read_string_pair() == StringPair(EncodedString("k"), EncodedString("v"))
    assert reader.position == writer.position