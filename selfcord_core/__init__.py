"""User-settings protobuf encoding, wire helpers and typed shared state for a chat client."""

__version__ = "0.2.0"

__all__ = ["proto", "typemap", "wire"]