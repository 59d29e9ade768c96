import json
from typing import Any, Mapping
from uuid import UUID

SESSION_CACHE_PREFIX = "auth"


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


def generate_cache_key(prefix: str, params: Mapping[str, Any]) -> str:
    """
    Build a deterministic cache key: ``prefix:key1=val1&key2=val2``.

    Keys are sorted and None values dropped, so the same logical request
    always maps to the same key regardless of argument order.
    """
    parts = [
        f"{key}={_format_value(value)}"
        for key, value in sorted(params.items())
        if value is not None
    ]
    return f"{prefix}:{'&'.join(parts)}" if parts else prefix


def session_cache_key(user_id: UUID | str, user_agent: str, device: str) -> str:
    return generate_cache_key(
        SESSION_CACHE_PREFIX,
        {"userId": str(user_id), "userAgent": user_agent, "device": device},
    )
