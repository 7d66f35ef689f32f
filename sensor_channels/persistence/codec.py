"""
codec.py

Encode a ChannelRegistry to a JSON blob and decode it back. The encoding
keeps every field, including bus entry ids and the id counter, so a
save/load round trip is lossless.

Document layout (version 1):

    {
      "version": 1,
      "next_id": 3,
      "fixed": [{"channel": 1, "pin": 17, "mode": "DIGITAL", "active": true}],
      "bus": [{"channel": 10, "id": 2, "kind": "I2C", "address": 60, "active": true}]
    }
"""

import json
from typing import Optional

from sensor_channels.channels.registry import DEFAULT_MAX_FIXED_CHANNEL, ChannelRegistry
from sensor_channels.exceptions import RegistryError, StoreCorruptError

FORMAT_VERSION = 1


def encode_registry(registry: ChannelRegistry) -> bytes:
    document = {"version": FORMAT_VERSION, **registry.as_dict()}
    return json.dumps(document, indent=2).encode("utf-8")


def decode_registry(
    blob: bytes,
    *,
    max_fixed_channel: Optional[int] = DEFAULT_MAX_FIXED_CHANNEL,
) -> ChannelRegistry:
    """
    Rebuild a registry from encode_registry() output.

    Raises:
        StoreCorruptError: If the blob is not a valid version 1 document.
    """
    try:
        document = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StoreCorruptError(f"Stored registry is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise StoreCorruptError("Stored registry must be a JSON object")

    version = document.get("version")
    if version != FORMAT_VERSION:
        raise StoreCorruptError(f"Unsupported registry format version: {version!r}")

    for key in ("fixed", "bus"):
        if not isinstance(document.get(key, []), list):
            raise StoreCorruptError(f"'{key}' must be a list")

    try:
        return ChannelRegistry.from_dict(document, max_fixed_channel=max_fixed_channel)
    except RegistryError as e:
        raise StoreCorruptError(f"Stored registry is invalid: {e}") from e
    except (KeyError, TypeError, AttributeError) as e:
        raise StoreCorruptError(f"Stored registry is malformed: {e!r}") from e
