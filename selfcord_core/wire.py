"""Low-level protobuf wire-format reading and writing."""

from __future__ import annotations

import struct

_U64_MASK = (1 << 64) - 1

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LENGTH_DELIMITED = 2
WIRE_FIXED32 = 5


class ProtoDecodeError(ValueError):
    """Base class for errors raised while decoding protobuf data."""


class InvalidBase64Error(ProtoDecodeError):
    """The settings field did not hold valid base64."""

    def __init__(self) -> None:
        super().__init__("invalid base64 in settings field")


class TruncatedError(ProtoDecodeError):
    """The buffer ended in the middle of a field."""

    def __init__(self) -> None:
        super().__init__("buffer ended mid-field")


class VarintOverflowError(ProtoDecodeError):
    """A varint ran past 64 bits."""

    def __init__(self) -> None:
        super().__init__("varint overflowed 64 bits")


class UnknownWireTypeError(ProtoDecodeError):
    """A field used a wire type this decoder does not handle."""

    def __init__(self, wire_type: int) -> None:
        super().__init__(f"unsupported wire type: {wire_type}")
        self.wire_type = wire_type


class InvalidUtf8Error(ProtoDecodeError):
    """A string field did not hold valid UTF-8."""

    def __init__(self) -> None:
        super().__init__("invalid utf-8 in string field")


class WireReader:
    """Sequential reader over a protobuf-encoded byte buffer."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.pos = 0

    def at_end(self) -> bool:
        """Return True once every byte has been consumed."""
        return self.pos >= len(self.data)

    def read_varint(self) -> int:
        """Read an unsigned base-128 varint (at most 64 bits)."""
        value = 0
        shift = 0
        while True:
            if self.pos >= len(self.data):
                raise TruncatedError()
            byte = self.data[self.pos]
            self.pos += 1
            value = (value | ((byte & 0x7F) << shift)) & _U64_MASK
            if not byte & 0x80:
                return value
            shift += 7
            if shift >= 64:
                raise VarintOverflowError()

    def read_fixed64(self) -> int:
        """Read a little-endian unsigned 64-bit value."""
        end = self.pos + 8
        if end > len(self.data):
            raise TruncatedError()
        (value,) = struct.unpack_from("<Q", self.data, self.pos)
        self.pos = end
        return value

    def read_length_delimited(self) -> bytes:
        """Read a length prefix and return that many following bytes."""
        length = self.read_varint()
        end = self.pos + length
        if end > len(self.data):
            raise TruncatedError()
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

    def read_tag(self) -> tuple[int, int]:
        """Read a field key and return ``(field_number, wire_type)``."""
        tag = self.read_varint()
        return (tag >> 3) & 0xFFFFFFFF, tag & 0x7

    def skip_field(self, wire_type: int) -> None:
        """Skip over the value of a field with the given wire type."""
        if wire_type == WIRE_VARINT:
            self.read_varint()
        elif wire_type == WIRE_FIXED64:
            self._advance(8)
        elif wire_type == WIRE_LENGTH_DELIMITED:
            self.read_length_delimited()
        elif wire_type == WIRE_FIXED32:
            self._advance(4)
        else:
            raise UnknownWireTypeError(wire_type)

    def _advance(self, count: int) -> None:
        if self.pos + count > len(self.data):
            raise TruncatedError()
        self.pos += count


def _check_u64(value: int) -> None:
    if not 0 <= value <= _U64_MASK:
        raise ValueError(f"value {value} does not fit in an unsigned 64-bit integer")


def encode_varint(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as a base-128 varint."""
    _check_u64(value)
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def encode_length_delimited(field_number: int, data: bytes) -> bytes:
    """Encode a wire-type-2 field: key, length, then the payload."""
    payload = bytes(data)
    return (
        encode_varint((field_number << 3) | WIRE_LENGTH_DELIMITED)
        + encode_varint(len(payload))
        + payload
    )


def encode_fixed64(field_number: int, value: int) -> bytes:
    """Encode a wire-type-1 field holding a little-endian 64-bit value."""
    _check_u64(value)
    return encode_varint((field_number << 3) | WIRE_FIXED64) + struct.pack("<Q", value)