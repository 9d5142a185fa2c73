import json
from typing import Any


def serialize_body(payload: Any) -> bytes | None:
    """Encode a request body once; the same bytes are digested, signed and sent."""
    if payload is None:
        return None
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
