# framecheck/checks/base.py
"""
Common contract for steel design codes.

Every code consumes the same (element_id, material, section, DesignForces,
DesignParameters) tuple and returns an ElementDesignResult, so new codes can
be added by subclassing DesignCode and registering the subclass:

    @register_code
    class MyCode(DesignCode):
        code = 'MY1'
        def checks(self, material, section, forces, parameters): ...

Failing a capacity check is a result (status FAIL), never an exception.
"""

import abc
import enum
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ..config import CONFIG, AnalysisConfig
from ..errors import UnknownDesignCodeError
from ..model import Material, Section

# Ratios within this distance above 1.0 still count as exactly at capacity
RATIO_TOLERANCE = 1e-9

# Demands below this (kN or kNm) are treated as absent
NEGLIGIBLE = 0.01


class CheckStatus(str, enum.Enum):
    PASS = 'PASS'
    FAIL = 'FAIL'
    WARNING = 'WARNING'


@dataclass(frozen=True)
class DesignForces:
    """Governing member forces in kN / kNm. Axial: + tension, - compression."""
    axial: float = 0.0
    shear_y: float = 0.0
    shear_z: float = 0.0
    moment_y: float = 0.0   # major axis
    moment_z: float = 0.0   # minor axis
    torsion: float = 0.0


@dataclass(frozen=True)
class DesignParameters:
    """
    Member design parameters.

    Args:
        unbraced_length_y: Unbraced length for buckling about the major axis (m)
        unbraced_length_z: Unbraced length for buckling about the minor axis (m)
        effective_length_factor_y: K factor, major axis
        effective_length_factor_z: K factor, minor axis
        bending_factor_y: Multiplier on the major-axis moment in interaction checks
        bending_factor_z: Multiplier on the minor-axis moment in interaction checks
        lateral_torsional_bracing_length: Distance between lateral restraints (m)
        slenderness_limit: KL/r above which a slenderness note is added
        moment_modification_factor: Cb (AISC) / C1 (Eurocode)
        buckling_curve: Eurocode flexural buckling curve a0/a/b/c/d
    """
    unbraced_length_y: float = 3.0
    unbraced_length_z: float = 3.0
    effective_length_factor_y: float = 1.0
    effective_length_factor_z: float = 1.0
    bending_factor_y: float = 1.0
    bending_factor_z: float = 1.0
    lateral_torsional_bracing_length: float = 3.0
    slenderness_limit: float = 200.0
    moment_modification_factor: float = 1.0
    buckling_curve: str = 'b'

    @classmethod
    def for_length(cls, length: float, **overrides) -> 'DesignParameters':
        """Parameters for a member braced only at its ends."""
        values = dict(
            unbraced_length_y=length,
            unbraced_length_z=length,
            lateral_torsional_bracing_length=length,
        )
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class DesignCheck:
    """One capacity check: demand / capacity with its governing equation."""
    check_type: str
    ratio: float
    capacity: float
    demand: float
    status: CheckStatus
    controlling_case: str
    equation: str
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ElementDesignResult:
    element_id: str
    design_code: str
    overall_ratio: float
    overall_status: CheckStatus
    checks: Tuple[DesignCheck, ...] = ()
    recommendations: Tuple[str, ...] = ()

    @property
    def controlling_check(self):
        """The check with the highest ratio, or None without checks."""
        if not self.checks:
            return None
        return max(self.checks, key=lambda c: c.ratio)


def status_for(ratio: float) -> CheckStatus:
    return CheckStatus.PASS if ratio <= 1.0 + RATIO_TOLERANCE else CheckStatus.FAIL


def make_check(
    check_type: str,
    demand: float,
    capacity: float,
    controlling_case: str,
    equation: str,
    notes: Sequence[str] = (),
) -> DesignCheck:
    """Build a DesignCheck from a demand and a (design) capacity."""
    ratio = demand / capacity if capacity > 0 else float('inf')
    return DesignCheck(
        check_type=check_type,
        ratio=ratio,
        capacity=capacity,
        demand=demand,
        status=status_for(ratio),
        controlling_case=controlling_case,
        equation=equation,
        notes=tuple(notes),
    )


def interaction_check(
    check_type: str,
    ratio: float,
    controlling_case: str,
    equation: str,
    notes: Sequence[str] = (),
) -> DesignCheck:
    """Interaction checks are dimensionless: capacity 1.0, demand = ratio."""
    return DesignCheck(
        check_type=check_type,
        ratio=ratio,
        capacity=1.0,
        demand=ratio,
        status=status_for(ratio),
        controlling_case=controlling_case,
        equation=equation,
        notes=tuple(notes),
    )


def recommendations(checks: Sequence[DesignCheck]) -> List[str]:
    """Advisory text derived from the check ratios. Not part of pass/fail."""
    if not checks:
        return []
    advice = []
    max_ratio = max(c.ratio for c in checks)
    if max_ratio > 1.0 + RATIO_TOLERANCE:
        advice.append('Section is overstressed - increase size or change grade')
    elif max_ratio < 0.5:
        advice.append('Section is underutilized - consider smaller section for economy')

    if any('compress' in c.check_type.lower() and c.ratio > 0.8 for c in checks):
        advice.append('Consider reducing unbraced length or increasing section size')
    if any('lateral-torsional' in c.check_type.lower() and c.ratio > 0.8 for c in checks):
        advice.append('Consider adding lateral bracing to reduce LTB effects')
    return advice


class DesignCode(abc.ABC):
    """A steel design code: a named set of capacity checks."""

    code: str = ''
    name: str = ''
    version: str = ''
    country: str = ''

    def __init__(self, config: AnalysisConfig = None):
        self._config = config

    @property
    def config(self) -> AnalysisConfig:
        return self._config or CONFIG

    @abc.abstractmethod
    def checks(
        self,
        material: Material,
        section: Section,
        forces: DesignForces,
        parameters: DesignParameters,
    ) -> List[DesignCheck]:
        """All checks that apply to the given forces."""

    def evaluate(
        self,
        element_id: str,
        material: Material,
        section: Section,
        forces: DesignForces,
        parameters: DesignParameters = None,
    ) -> ElementDesignResult:
        parameters = parameters or DesignParameters()
        return self.aggregate(element_id, self.checks(material, section, forces, parameters))

    def aggregate(self, element_id: str, checks: Sequence[DesignCheck]) -> ElementDesignResult:
        """
        Overall ratio = max over checks; FAIL if any check failed,
        WARNING if any warned, PASS otherwise (also when there are no checks).
        """
        checks = tuple(checks)
        overall_ratio = max((c.ratio for c in checks), default=0.0)
        statuses = {c.status for c in checks}
        if CheckStatus.FAIL in statuses:
            overall = CheckStatus.FAIL
        elif CheckStatus.WARNING in statuses:
            overall = CheckStatus.WARNING
        else:
            overall = CheckStatus.PASS
        return ElementDesignResult(
            element_id=element_id,
            design_code=self.code,
            overall_ratio=overall_ratio,
            overall_status=overall,
            checks=checks,
            recommendations=tuple(recommendations(checks)),
        )


_REGISTRY: Dict[str, DesignCode] = {}


def register_code(cls):
    """Class decorator: register one instance of a DesignCode under cls.code."""
    _REGISTRY[cls.code] = cls()
    return cls


def get_code(code: str) -> DesignCode:
    try:
        return _REGISTRY[code]
    except KeyError:
        raise UnknownDesignCodeError(code, available_codes()) from None


def available_codes() -> List[str]:
    return sorted(_REGISTRY)
