"""Engine configuration: frozen, hashable, serializable dataclasses."""

from graphspectra.config.defaults import DEFAULT_CONFIG
from graphspectra.config.engine import (
    SOLVER_METHODS,
    ClusterConfig,
    EngineConfig,
    SolverConfig,
)
from graphspectra.config.hashing import config_hash
from graphspectra.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_json,
    load_config,
)

__all__ = [
    "ClusterConfig",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "SOLVER_METHODS",
    "SolverConfig",
    "config_from_dict",
    "config_from_json",
    "config_hash",
    "config_to_json",
    "load_config",
]
