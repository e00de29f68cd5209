"""Default configuration, the single source of truth for engine parameters."""

from graphspectra.config.engine import EngineConfig

# locality=0.01, error=0.001, solver method=auto, eps=1e-6,
# max_iterations=1000.
DEFAULT_CONFIG = EngineConfig()
