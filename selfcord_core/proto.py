"""User-settings protobuf messages: status and custom status."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, replace

from .wire import (
    WIRE_FIXED64,
    WIRE_LENGTH_DELIMITED,
    WIRE_VARINT,
    InvalidBase64Error,
    InvalidUtf8Error,
    WireReader,
    encode_fixed64,
    encode_length_delimited,
    encode_varint,
)

_STATUS_SETTINGS_FIELD = 11


def _decode_utf8(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Error() from exc


def _decode_string_value(data: bytes) -> str:
    """Decode a StringValue wrapper (field 1 holds the string)."""
    reader = WireReader(data)
    out = ""
    while not reader.at_end():
        field, wire = reader.read_tag()
        if field == 1 and wire == WIRE_LENGTH_DELIMITED:
            out = _decode_utf8(reader.read_length_delimited())
        else:
            reader.skip_field(wire)
    return out


def _decode_bool_value(data: bytes) -> bool:
    """Decode a BoolValue wrapper; an empty body means False."""
    reader = WireReader(data)
    out = False
    while not reader.at_end():
        field, wire = reader.read_tag()
        if field == 1 and wire == WIRE_VARINT:
            out = reader.read_varint() != 0
        else:
            reader.skip_field(wire)
    return out


def _decode_int64_value(data: bytes) -> int:
    """Decode an Int64Value wrapper (field 1 varint)."""
    reader = WireReader(data)
    out = 0
    while not reader.at_end():
        field, wire = reader.read_tag()
        if field == 1 and wire == WIRE_VARINT:
            out = reader.read_varint()
        else:
            reader.skip_field(wire)
    return out


def _key(field_number: int, wire_type: int) -> bytes:
    return encode_varint((field_number << 3) | wire_type)


@dataclass
class CustomStatus:
    """A custom status: text, optional emoji and optional timestamps (ms)."""

    text: str = ""
    emoji_id: int | None = None
    emoji_name: str | None = None
    expires_at_ms: int | None = None
    created_at_ms: int | None = None

    def with_expiry(self, expires_at_ms: int) -> CustomStatus:
        """Return a copy that expires at the given Unix time in milliseconds."""
        return replace(self, expires_at_ms=expires_at_ms)

    def with_created_at(self, created_at_ms: int) -> CustomStatus:
        """Return a copy created at the given Unix time in milliseconds."""
        return replace(self, created_at_ms=created_at_ms)

    def encode(self) -> bytes:
        """Encode the message body."""
        parts = []
        if self.text:
            parts.append(encode_length_delimited(1, self.text.encode("utf-8")))
        if self.emoji_id:
            parts.append(_key(2, WIRE_VARINT) + encode_varint(self.emoji_id))
        if self.emoji_name:
            parts.append(encode_length_delimited(3, self.emoji_name.encode("utf-8")))
        # Timestamps are fixed64, not varint.
        if self.expires_at_ms is not None:
            parts.append(encode_fixed64(4, self.expires_at_ms))
        if self.created_at_ms is not None:
            parts.append(encode_fixed64(5, self.created_at_ms))
        return b"".join(parts)

    @classmethod
    def decode(cls, data: bytes) -> CustomStatus:
        """Decode a CustomStatus message body."""
        out = cls()
        reader = WireReader(data)
        while not reader.at_end():
            field, wire = reader.read_tag()
            if (field, wire) == (1, WIRE_LENGTH_DELIMITED):
                out.text = _decode_utf8(reader.read_length_delimited())
            elif (field, wire) == (2, WIRE_VARINT):
                out.emoji_id = reader.read_varint()
            elif (field, wire) == (3, WIRE_LENGTH_DELIMITED):
                out.emoji_name = _decode_utf8(reader.read_length_delimited())
            elif (field, wire) == (4, WIRE_FIXED64):
                out.expires_at_ms = reader.read_fixed64()
            elif (field, wire) == (5, WIRE_FIXED64):
                out.created_at_ms = reader.read_fixed64()
            else:
                reader.skip_field(wire)
        return out


@dataclass
class StatusSettings:
    """Presence status (online, idle, dnd, invisible) and related settings."""

    status: str = ""
    custom_status: CustomStatus | None = None
    show_current_game: bool | None = None
    status_expires_at_ms: int | None = None

    def with_custom_status(self, custom: CustomStatus) -> StatusSettings:
        """Return a copy carrying the given custom status."""
        return replace(self, custom_status=custom)

    def with_show_current_game(self, value: bool) -> StatusSettings:
        """Return a copy with ``show_current_game`` set."""
        return replace(self, show_current_game=value)

    def with_status_expires_at(self, ms: int) -> StatusSettings:
        """Return a copy whose status clears at the given time in milliseconds."""
        return replace(self, status_expires_at_ms=ms)

    def encode(self) -> bytes:
        """Encode the message body."""
        parts = []
        if self.status:
            wrapper = encode_length_delimited(1, self.status.encode("utf-8"))
            parts.append(encode_length_delimited(1, wrapper))
        if self.custom_status is not None:
            custom_bytes = self.custom_status.encode()
            if custom_bytes:
                parts.append(encode_length_delimited(2, custom_bytes))
        if self.show_current_game is not None:
            # False is sent as an empty BoolValue wrapper.
            wrapper = _key(1, WIRE_VARINT) + encode_varint(1) if self.show_current_game else b""
            parts.append(encode_length_delimited(3, wrapper))
        if self.status_expires_at_ms is not None:
            wrapper = _key(1, WIRE_VARINT) + encode_varint(self.status_expires_at_ms)
            parts.append(encode_length_delimited(5, wrapper))
        return b"".join(parts)

    @classmethod
    def decode(cls, data: bytes) -> StatusSettings:
        """Decode a StatusSettings message body."""
        out = cls()
        reader = WireReader(data)
        while not reader.at_end():
            field, wire = reader.read_tag()
            if wire != WIRE_LENGTH_DELIMITED or field not in (1, 2, 3, 5):
                reader.skip_field(wire)
                continue
            inner = reader.read_length_delimited()
            if field == 1:
                out.status = _decode_string_value(inner)
            elif field == 2:
                out.custom_status = CustomStatus.decode(inner)
            elif field == 3:
                out.show_current_game = _decode_bool_value(inner)
            else:
                out.status_expires_at_ms = _decode_int64_value(inner)
        return out


@dataclass
class PreloadedUserSettings:
    """The preloaded user-settings message; only the status field is modelled."""

    status: StatusSettings | None = None

    @classmethod
    def with_status(cls, status: StatusSettings) -> PreloadedUserSettings:
        """Build settings holding the given status."""
        return cls(status=status)

    def encode(self) -> bytes:
        """Encode the message."""
        if self.status is None:
            return b""
        status_bytes = self.status.encode()
        if not status_bytes:
            return b""
        return encode_length_delimited(_STATUS_SETTINGS_FIELD, status_bytes)

    def to_base64(self) -> str:
        """Encode the message as standard padded base64."""
        return base64.b64encode(self.encode()).decode("ascii")

    @classmethod
    def decode(cls, data: bytes) -> PreloadedUserSettings:
        """Decode the message, skipping every field except the status."""
        out = cls()
        reader = WireReader(data)
        while not reader.at_end():
            field, wire = reader.read_tag()
            if (field, wire) == (_STATUS_SETTINGS_FIELD, WIRE_LENGTH_DELIMITED):
                out.status = StatusSettings.decode(reader.read_length_delimited())
            else:
                reader.skip_field(wire)
        return out

    @classmethod
    def from_base64(cls, b64: str) -> PreloadedUserSettings:
        """Base64-decode ``b64`` and decode the resulting message."""
        try:
            data = base64.b64decode(b64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidBase64Error() from exc
        return cls.decode(data)