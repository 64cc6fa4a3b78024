import pytest

from selfcord_core.wire import (
    ProtoDecodeError,
    TruncatedError,
    UnknownWireTypeError,
    VarintOverflowError,
    WireReader,
    encode_fixed64,
    encode_length_delimited,
    encode_varint,
)

STALE_STATUS_EXPIRES_AT_MS = 1_756_917_100_015


def test_status_expires_at_varint_value():
    assert encode_varint(STALE_STATUS_EXPIRES_AT_MS) == bytes(
        [0xEF, 0xDB, 0xAD, 0x83, 0x91, 0x33]
    )


def test_varint_small_values():
    assert encode_varint(0) == b"\x00"
    assert encode_varint(1) == b"\x01"
    assert encode_varint(127) == b"\x7f"
    assert encode_varint(128) == b"\x80\x01"
    assert encode_varint(300) == b"\xac\x02"


@pytest.mark.parametrize("value", [0, 1, 150, 2**32, STALE_STATUS_EXPIRES_AT_MS, 2**64 - 1])
def test_varint_round_trip(value):
    reader = WireReader(encode_varint(value))
    assert reader.read_varint() == value
    assert reader.at_end()


def test_encode_varint_rejects_out_of_range():
    with pytest.raises(ValueError):
        encode_varint(-1)
    with pytest.raises(ValueError):
        encode_varint(2**64)


def test_varint_truncated():
    with pytest.raises(TruncatedError):
        WireReader(b"\x80\x80").read_varint()


def test_varint_overflow():
    with pytest.raises(VarintOverflowError):
        WireReader(b"\xff" * 10 + b"\x01").read_varint()


def test_encode_length_delimited_layout():
    assert encode_length_delimited(1, b"online") == b"\x0a\x06online"
    assert encode_length_delimited(11, b"") == b"\x5a\x00"


def test_encode_fixed64_layout():
    encoded = encode_fixed64(4, 0x0000_019D_D8A3_194F)
    assert encoded == bytes([0x21, 0x4F, 0x19, 0xA3, 0xD8, 0x9D, 0x01, 0x00, 0x00])


def test_read_fixed64_round_trip():
    reader = WireReader(encode_fixed64(5, 0x0000_019D_D7C7_5F4F))
    assert reader.read_tag() == (5, 1)
    assert reader.read_fixed64() == 0x0000_019D_D7C7_5F4F
    assert reader.at_end()


def test_read_fixed64_truncated():
    with pytest.raises(TruncatedError):
        WireReader(b"\x01\x02\x03").read_fixed64()


def test_read_length_delimited():
    reader = WireReader(encode_length_delimited(3, b"sparkles") + b"\x08\x01")
    assert reader.read_tag() == (3, 2)
    assert reader.read_length_delimited() == b"sparkles"
    assert reader.read_tag() == (1, 0)
    assert reader.read_varint() == 1
    assert reader.at_end()


def test_read_length_delimited_truncated():
    with pytest.raises(TruncatedError):
        WireReader(b"\x05abc").read_length_delimited()


def test_skip_fields_of_each_type():
    data = (
        encode_varint((1 << 3) | 0) + encode_varint(300)
        + encode_fixed64(2, 7)
        + encode_length_delimited(3, b"xyz")
        + encode_varint((4 << 3) | 5) + b"\x00\x00\x00\x00"
        + encode_varint((9 << 3) | 0) + b"\x2a"
    )
    reader = WireReader(data)
    for _ in range(4):
        _, wire = reader.read_tag()
        reader.skip_field(wire)
    assert reader.read_tag() == (9, 0)
    assert reader.read_varint() == 42
    assert reader.at_end()


def test_skip_fixed32_truncated():
    with pytest.raises(TruncatedError):
        WireReader(b"\x00\x00").skip_field(5)


def test_skip_unknown_wire_type():
    with pytest.raises(UnknownWireTypeError) as info:
        WireReader(b"\x00").skip_field(3)
    assert info.value.wire_type == 3
    assert isinstance(info.value, ProtoDecodeError)


def test_empty_reader_is_at_end():
    assert WireReader(b"").at_end() is True