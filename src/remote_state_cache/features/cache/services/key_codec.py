"""Key and value codecs for query caching.

A cache key is derived from the exact JSON text of a query input: a short,
sanitized preview so keys stay readable in the backend, joined to the sha256
of the full text so truncating the preview never costs uniqueness.

Values are stored as JSON text with tagged encodings for the common Python
types JSON lacks, so they round-trip losslessly.
"""

import hashlib
import json
import re
from dataclasses import asdict, dataclass, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel

from ....core.exceptions import CacheSerializationError
from ..entities.protocols import KeySerializer, ValueDeserializer, ValueSerializer

KEY_PREVIEW_MAX_LENGTH = 50
KEY_SEPARATOR = "."

_STRUCTURAL_CHARS = re.compile(r"[{}\[\]:]")
_NON_KEY_CHARS = re.compile(r"[^0-9a-zA-Z_]")
_REPEATED_UNDERSCORES = re.compile(r"__+")


class CacheJSONEncoder(json.JSONEncoder):
    """JSON encoder with tagged support for non-JSON builtin types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return {"__datetime__": obj.isoformat()}
        elif isinstance(obj, date):
            return {"__date__": obj.isoformat()}
        elif isinstance(obj, Decimal):
            return {"__decimal__": str(obj)}
        elif isinstance(obj, UUID):
            return {"__uuid__": str(obj)}
        elif isinstance(obj, frozenset):
            return {"__frozenset__": sorted(obj, key=repr)}
        elif isinstance(obj, set):
            # sorted so equal sets always encode to the same text
            return {"__set__": sorted(obj, key=repr)}
        elif isinstance(obj, bytes):
            return {"__bytes__": obj.hex()}

        return super().default(obj)


class KeyJSONEncoder(CacheJSONEncoder):
    """Encoder for query inputs; also flattens models and dataclasses.

    Flattening is one-way, which is fine for keys since they are never decoded.
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")
        if is_dataclass(obj) and not isinstance(obj, type):
            return asdict(obj)
        return super().default(obj)


_DECODERS = {
    "__datetime__": datetime.fromisoformat,
    "__date__": date.fromisoformat,
    "__decimal__": Decimal,
    "__uuid__": UUID,
    "__set__": set,
    "__frozenset__": frozenset,
    "__bytes__": bytes.fromhex,
    # escaped user dict, see escape_tag_like_dicts
    "__dict__": dict,
}

_ESCAPE_TAG = "__dict__"


def escape_tag_like_dicts(obj: Any) -> Any:
    """Wrap user dicts shaped like a tagged object so they decode as dicts.

    The payload is a list of pairs: lists never reach the object hook, so the
    wrapped dict is not decoded as a tag before it is rebuilt.
    """
    if isinstance(obj, dict):
        escaped = {key: escape_tag_like_dicts(value) for key, value in obj.items()}
        if len(escaped) == 1 and next(iter(escaped)) in _DECODERS:
            return {_ESCAPE_TAG: [[key, value] for key, value in escaped.items()]}
        return escaped
    if isinstance(obj, (list, tuple)):
        return [escape_tag_like_dicts(item) for item in obj]
    return obj


def decode_json_object(obj: Dict[str, Any]) -> Any:
    """Decode tagged JSON objects back to Python types."""
    if len(obj) == 1:
        (tag, payload), = obj.items()
        decoder = _DECODERS.get(tag)
        if decoder is not None:
            return decoder(payload)
    return obj


def to_key_text(query_input: Any) -> str:
    """Canonical textual representation of a query input.

    Dict insertion order is kept as-is: two equal dicts built in a different
    order produce different text and therefore different keys.
    """
    try:
        return json.dumps(
            query_input,
            cls=KeyJSONEncoder,
            ensure_ascii=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError) as e:
        raise CacheSerializationError(
            f"Query input cannot be serialized into a cache key: {e}",
            details={"input_type": type(query_input).__name__},
        ) from e


def serialize_key(query_input: Any) -> str:
    """Derive the deterministic cache key for a query input."""
    text = to_key_text(query_input)

    preview = _STRUCTURAL_CHARS.sub("_", text)
    preview = _NON_KEY_CHARS.sub("", preview)
    preview = _REPEATED_UNDERSCORES.sub("_", preview)
    preview = preview[:KEY_PREVIEW_MAX_LENGTH]
    preview = preview.removeprefix("_").removesuffix("_")

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return KEY_SEPARATOR.join([preview, digest])


def serialize_value(output: Any) -> str:
    """Serialize a query output to JSON text."""
    try:
        return json.dumps(escape_tag_like_dicts(output), cls=CacheJSONEncoder, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise CacheSerializationError(
            f"Query output cannot be serialized: {e}",
            details={"output_type": type(output).__name__},
        ) from e


def deserialize_value(text: str) -> Any:
    """Deserialize JSON text produced by serialize_value."""
    try:
        return json.loads(text, object_hook=decode_json_object)
    except (TypeError, ValueError) as e:
        raise CacheSerializationError(f"Cached value cannot be deserialized: {e}") from e


@dataclass(frozen=True)
class KeyCodec:
    """Key and value serialization used by one query cache."""

    serialize_key: KeySerializer = serialize_key
    serialize_value: ValueSerializer = serialize_value
    deserialize_value: ValueDeserializer = deserialize_value

    @classmethod
    def with_overrides(
        cls,
        key: Optional[KeySerializer] = None,
        value: Optional[ValueSerializer] = None,
        deserialize: Optional[ValueDeserializer] = None,
    ) -> "KeyCodec":
        """Build a codec, falling back to the defaults for anything not given."""
        return cls(
            serialize_key=key or serialize_key,
            serialize_value=value or serialize_value,
            deserialize_value=deserialize or deserialize_value,
        )
