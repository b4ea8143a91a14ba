# framecheck/checks/optimize.py
"""Discrete section selection: pick the catalog section closest to a target utilization."""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Union

from ..catalog import STEEL_SECTIONS
from ..config import CONFIG, AnalysisConfig
from ..model import Material, Section
from .base import (
    CheckStatus,
    DesignCode,
    DesignForces,
    DesignParameters,
    ElementDesignResult,
    get_code,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionCandidate:
    """
    A section that passes every check.

    weight is in kg/m; efficiency = target / utilization, so 1.0 means the
    section is used exactly at the target.
    """
    section: Section
    utilization: float
    weight: float
    efficiency: float
    result: ElementDesignResult


def resolve_code(code: Union[str, DesignCode]) -> DesignCode:
    return get_code(code) if isinstance(code, str) else code


def optimize_section(
    element_id: str,
    code: Union[str, DesignCode],
    material: Material,
    forces: DesignForces,
    parameters: DesignParameters = None,
    candidates: Sequence[Section] = None,
    target_utilization: float = None,
    config: AnalysisConfig = None,
) -> List[SectionCandidate]:
    """
    Check every candidate section and rank the ones that pass.

    Args:
        element_id: Element the forces belong to (carried into the results)
        code: Design code name ('AISC360', 'EC3') or instance
        material: Member material
        forces: Governing design forces
        parameters: Design parameters (defaults if None)
        candidates: Sections ordered by size (catalog IPE series if None)
        target_utilization: Desired overall ratio (config value if None)

    Returns:
        Passing candidates sorted by |target/ratio - 1|, closest first.
        Ties keep catalog order, so the smaller section wins.
    """
    config = config or CONFIG
    design_code = resolve_code(code)
    candidates = STEEL_SECTIONS if candidates is None else candidates
    target = config.target_utilization if target_utilization is None else target_utilization

    suitable = []
    for section in candidates:
        result = design_code.evaluate(element_id, material, section, forces, parameters)
        if result.overall_status is not CheckStatus.PASS or result.overall_ratio > 1.0:
            continue
        ratio = result.overall_ratio
        suitable.append(SectionCandidate(
            section=section,
            utilization=ratio,
            weight=material.density * section.area * 1e-4,
            efficiency=target / ratio if ratio > 0 else float('inf'),
            result=result,
        ))

    suitable.sort(key=lambda c: abs(c.efficiency - 1.0))
    logger.info(
        "Element %s: %d of %d sections pass %s",
        element_id, len(suitable), len(candidates), design_code.code,
    )
    return suitable
