"""Engine configuration dataclasses, all frozen and slotted for immutability."""

from dataclasses import dataclass, field

from graphspectra.solve.laplacian import METHODS as SOLVER_METHODS


@dataclass(frozen=True, slots=True)
class ClusterConfig:
    """Local clustering parameters.

    When target_volume is set it overrides locality and error, which are
    then derived as 1 / target_volume and 1 / (10 * target_volume).
    """

    locality: float = 0.01  # ACL teleport parameter alpha
    error: float = 0.001  # push approximation parameter epsilon
    target_volume: float | None = None

    def __post_init__(self) -> None:
        if not 0 < self.locality <= 1:
            raise ValueError(f"locality must be in (0, 1], got {self.locality}")
        if self.error <= 0:
            raise ValueError(f"error must be positive, got {self.error}")
        if self.target_volume is not None and self.target_volume <= 0:
            raise ValueError(
                f"target_volume must be positive, got {self.target_volume}"
            )


@dataclass(frozen=True, slots=True)
class SolverConfig:
    """Linear solver parameters."""

    method: str = "auto"  # auto, jacobi, gauss-seidel or exact
    eps: float = 1e-6  # bound on ||Ax - b||_2
    max_iterations: int = 1000

    def __post_init__(self) -> None:
        if self.method not in SOLVER_METHODS:
            raise ValueError(
                f"method must be one of {SOLVER_METHODS}, got {self.method!r}"
            )
        if self.eps <= 0:
            raise ValueError(f"eps must be positive, got {self.eps}")
        if self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Top-level configuration composing the clustering and solver configs."""

    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    description: str = ""
    tags: tuple[str, ...] = ()
