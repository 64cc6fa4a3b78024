# selfcord-core

Small building blocks for a chat client. They need nothing outside the
standard library.

- **`selfcord_core.proto`** builds and reads the binary user-settings message
  (`PreloadedUserSettings`). That message holds the presence status
  (`StatusSettings`) and the custom status (`CustomStatus`). It also produces
  and reads the base64 form of the message.
- **`selfcord_core.wire`** holds the low-level protobuf wire helpers:
  `WireReader`, `encode_varint`, `encode_length_delimited` and
  `encode_fixed64`. It also defines the `ProtoDecodeError` family of
  exceptions.
- **`selfcord_core.typemap`** provides `TypeMap`, a map for state that event
  handlers share. Its keys are `TypeMapKey` subclasses.

## Installation

```
pip install selfcord-core
```

## Settings messages

```python
from selfcord_core.proto import CustomStatus, StatusSettings, PreloadedUserSettings

custom = CustomStatus("studying").with_expiry(1_777_445_453_628)
status = StatusSettings("online").with_custom_status(custom).with_show_current_game(False)
payload = PreloadedUserSettings.with_status(status).to_base64()

decoded = PreloadedUserSettings.from_base64(payload)
assert decoded.status.custom_status.text == "studying"
assert decoded.status.show_current_game is False
```

The `with_*` methods return changed copies and leave the original as it was.
Encoding writes only the fields that are set. The two custom-status
timestamps are written as fixed64 values. `show_current_game=False` is written
as an empty wrapper. When `PreloadedUserSettings.decode` reads a message, it
keeps the status field and skips every other field.

Malformed input raises a subclass of `ProtoDecodeError`, which is itself a
`ValueError`:

- `InvalidBase64Error`: `from_base64` was given text that is not valid base64.
- `TruncatedError`: the data ends partway through a field.
- `VarintOverflowError`: a varint runs past 64 bits.
- `UnknownWireTypeError`: a field uses a wire type other than varint, fixed64,
  length-delimited or fixed32. The offending type is in its `wire_type`
  attribute.
- `InvalidUtf8Error`: a string field is not valid UTF-8.

## Wire helpers

```python
from selfcord_core.wire import WireReader, encode_varint, encode_length_delimited

data = encode_length_delimited(1, b"hi") + encode_varint(8) + encode_varint(300)
reader = WireReader(data)
assert reader.read_tag() == (1, 2)
assert reader.read_length_delimited() == b"hi"
assert reader.read_tag() == (1, 0)
assert reader.read_varint() == 300
assert reader.at_end()
```

The encoders raise `ValueError` for values that do not fit in an unsigned
64-bit integer.

## Shared state

```python
from selfcord_core.typemap import TypeMap, TypeMapKey

class Prefix(TypeMapKey):
    value_type = str   # optional: insert() type-checks values

state = TypeMap()
state.insert(Prefix, "!")
assert state.get(Prefix) == "!"
assert Prefix in state and len(state) == 1
assert state.remove(Prefix) == "!"
```

`get`, `get_mut` and `remove` return `None` for a key that has not been set.
`get` can take a different default. A key that is not a `TypeMapKey` subclass
raises `TypeError`, and so does a value that does not match the key's
`value_type`.

## What this package does not do

The package does not connect to a chat server. It has no gateway connection,
no HTTP client and no REST endpoint paths, and it never sends the settings
message anywhere. It only encodes and decodes that message and keeps
in-process shared state. The transport is left to the caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```