# app/db/serialize.py
from __future__ import annotations

import base64
import json
from datetime import datetime, timezone
from typing import Any

from bson import Decimal128, ObjectId, json_util
from bson.json_util import RELAXED_JSON_OPTIONS


def to_jsonable(value: Any) -> Any:
    """
    Turn a BSON document into plain JSON values, recursively.

    ObjectId -> hex string, datetime -> ISO-8601 (naive means UTC),
    Decimal128 -> decimal string, Binary/bytes -> base64 string.
    Any other BSON type goes through bson.json_util relaxed mode.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, Decimal128):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        # bson.Binary is a bytes subclass
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if hasattr(value, "_type_marker"):
        return json.loads(json_util.dumps(value, json_options=RELAXED_JSON_OPTIONS))
    return value
