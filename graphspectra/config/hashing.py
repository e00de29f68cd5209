"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

# Labels that annotate a run without changing its numerical result.
METADATA_FIELDS = ("description", "tags")


def config_hash(config: Any, include_metadata: bool = False) -> str:
    """Deterministic SHA-256 hash of a config object.

    Two configs that produce the same clusters and solutions hash equally:
    top-level metadata fields are left out unless include_metadata is set.

    Args:
        config: Any dataclass instance (EngineConfig or a sub-config).
        include_metadata: Keep description and tags in the hashed payload.

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    payload = asdict(config)
    if not include_metadata:
        for name in METADATA_FIELDS:
            payload.pop(name, None)

    serialized = json.dumps(
        payload, sort_keys=True, ensure_ascii=True, separators=(",", ":")
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]
