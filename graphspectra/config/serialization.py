"""JSON serialization and deserialization for engine configs."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dacite import Config as DaciteConfig
from dacite import from_dict

from graphspectra.config.engine import EngineConfig

# JSON numbers like 1 are accepted for float fields.
_DACITE_CONFIG = DaciteConfig(
    cast=[tuple],
    type_hooks={float: float},
    check_types=True,
    strict=True,
)


def config_to_json(config: EngineConfig) -> str:
    """Serialize an EngineConfig to a JSON string with sorted keys."""
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_dict(d: dict[str, Any]) -> EngineConfig:
    """Reconstruct an EngineConfig from a plain dictionary.

    Uses dacite with strict=True to reject unknown keys and cast=[tuple] to
    turn JSON arrays back into tuples. Missing keys take their defaults.
    """
    return from_dict(data_class=EngineConfig, data=d, config=_DACITE_CONFIG)


def config_from_json(json_str: str) -> EngineConfig:
    """Deserialize a JSON string to an EngineConfig."""
    return config_from_dict(json.loads(json_str))


def load_config(path: str | Path) -> EngineConfig:
    """Read an EngineConfig from a JSON file."""
    return config_from_json(Path(path).read_text())
