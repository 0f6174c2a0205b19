"""Cache services - key and value codecs."""

from .key_codec import (
    KEY_PREVIEW_MAX_LENGTH,
    KEY_SEPARATOR,
    KeyCodec,
    deserialize_value,
    serialize_key,
    serialize_value,
    to_key_text,
)

__all__ = [
    "KEY_PREVIEW_MAX_LENGTH",
    "KEY_SEPARATOR",
    "KeyCodec",
    "deserialize_value",
    "serialize_key",
    "serialize_value",
    "to_key_text",
]
