"""
An abstraction layer for JSON serialization/deserialization.
Makes swapping between JSON implementations easier.
"""

from typing import Any, Union

import orjson
import pydantic

# The actual type of serialized JSON as returned by the JSON serializer.
SerializedJson = bytes

# All the possible types for serialized JSON.
SerializedJsonInput = Union[bytes, str]

# Note: JSONDecodeError is a subclass of ValueError.
DecodeError = orjson.JSONDecodeError


def loads(s: SerializedJsonInput) -> Any:
    return orjson.loads(s)


def extended_json_encoder(obj: Any) -> Any:
    """
    Extended JSON encoder for dumping objects that contain pydantic models.
    Models are serialized with their field aliases, as exposed by the API.
    """
    if isinstance(obj, pydantic.BaseModel):
        return obj.model_dump(mode="json", by_alias=True)

    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def dumps(obj: Any, sort_keys: bool = False) -> SerializedJson:
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS if sort_keys else 0
    return orjson.dumps(obj, default=extended_json_encoder, option=opts)
