# framecheck/config.py
"""
Engine configuration and defaults.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


LOAD_MODELS = ('consistent', 'lumped')


@dataclass(frozen=True)
class AnalysisConfig:
    """Global analysis configuration."""

    # Solver limits
    max_dofs: int = 6000
    pivot_tolerance: float = 1e-12  # relative to max |K|
    min_element_length: float = 1e-6  # m

    # Result sampling
    n_stations: int = 21

    # Element load conversion: 'consistent' = fixed-end forces and moments,
    # 'lumped' = half of the load to each end node, no moments
    distributed_load_model: str = 'consistent'

    # Eurocode partial factors
    gamma_m0: float = 1.0
    gamma_m1: float = 1.0

    # Axial capacity in kN = A[cm²]·fy[MPa] / divisor. 100 reproduces the
    # reference tension check (φ·Fy·A/100); 10 is dimensionally exact.
    axial_capacity_divisor: float = 100.0

    # Section optimisation
    target_utilization: float = 0.85

    log_level: str = 'INFO'

    def __post_init__(self):
        if self.distributed_load_model not in LOAD_MODELS:
            raise ValueError(
                f"distributed_load_model must be one of {LOAD_MODELS}, "
                f"got {self.distributed_load_model!r}"
            )
        if self.n_stations < 2:
            raise ValueError("n_stations must be at least 2")
        if self.max_dofs <= 0:
            raise ValueError("max_dofs must be positive")
        if self.axial_capacity_divisor <= 0:
            raise ValueError("axial_capacity_divisor must be positive")

    def replace(self, **changes) -> 'AnalysisConfig':
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls) -> 'AnalysisConfig':
        """
        Defaults overridden by FRAMECHECK_* environment variables.

        FRAMECHECK_MAX_DOFS=20000 sets max_dofs, and so on.
        """
        return cls(**EnvSettings().model_dump(exclude_none=True))


class EnvSettings(BaseSettings):
    """Environment overrides for AnalysisConfig; unset values keep the defaults."""

    model_config = SettingsConfigDict(
        env_prefix='FRAMECHECK_',
        case_sensitive=False,
    )

    max_dofs: Optional[int] = None
    pivot_tolerance: Optional[float] = None
    min_element_length: Optional[float] = None
    n_stations: Optional[int] = None
    distributed_load_model: Optional[str] = None
    gamma_m0: Optional[float] = None
    gamma_m1: Optional[float] = None
    axial_capacity_divisor: Optional[float] = None
    target_utilization: Optional[float] = None
    log_level: Optional[str] = None


# Global config instance
CONFIG = AnalysisConfig.from_env()
