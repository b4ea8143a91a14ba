# framecheck/checks/aisc.py
"""Steel design checks per AISC 360 (LRFD)."""

import dataclasses
import logging
import math
from typing import List, Optional, Tuple

from ..model import Material, Section
from .base import (
    NEGLIGIBLE,
    DesignCheck,
    DesignCode,
    DesignForces,
    DesignParameters,
    interaction_check,
    make_check,
    register_code,
)

logger = logging.getLogger(__name__)

# Resistance factors
PHI_T = 0.9     # tensile yielding
PHI_TR = 0.75   # tensile rupture
PHI_C = 0.9     # compression
PHI_B = 0.9     # flexure

# Net-to-gross area ratio used for rupture
AE_RATIO = 0.85


def critical_buckling_stress(E: float, Fy: float, slenderness: float) -> float:
    """
    AISC 360 E3: flexural buckling stress Fcr (MPa).

    Fe = π²E / (KL/r)²
    KL/r ≤ 4.71·sqrt(E/Fy):  Fcr = 0.658^(Fy/Fe) · Fy   (inelastic)
    otherwise:               Fcr = 0.877 · Fe            (elastic)

    Args:
        E: Elastic modulus (MPa)
        Fy: Yield stress (MPa)
        slenderness: KL/r

    Returns:
        Fcr (MPa)
    """
    if slenderness < 1e-6:
        return Fy
    Fe = math.pi**2 * E / slenderness**2
    if slenderness <= 4.71 * math.sqrt(E / Fy):
        return (0.658 ** (Fy / Fe)) * Fy
    return 0.877 * Fe


def limiting_lengths(
    E: float, Fy: float, section: Section
) -> Tuple[float, float, float, float]:
    """
    AISC 360 F2: limiting unbraced lengths for a doubly symmetric I-section.

    Lp = 1.76 · ry · sqrt(E/Fy)
    Lr = 1.95 · rts · E/(0.7Fy) · sqrt(Jc/(Sx·ho) + sqrt((Jc/(Sx·ho))² + 6.76(0.7Fy/E)²))

    rts = sqrt(sqrt(Iy·Cw)/Sx) when the warping constant is known, ry otherwise.

    Returns:
        Lp, Lr, rts (mm) and the ratio Jc/(Sx·ho)
    """
    ry = section.radius_of_gyration_z * 10.0  # cm → mm
    if section.warping_constant:
        rts = math.sqrt(math.sqrt(section.moment_of_inertia_z * section.warping_constant)
                        / section.section_modulus_y) * 10.0
    else:
        rts = ry

    ho = _flange_centroid_distance(section) / 10.0  # cm
    j_ratio = section.torsional_constant / (section.section_modulus_y * ho)

    Lp = 1.76 * ry * math.sqrt(E / Fy)
    Lr = 1.95 * rts * E / (0.7 * Fy) * math.sqrt(
        j_ratio + math.sqrt(j_ratio**2 + 6.76 * (0.7 * Fy / E) ** 2)
    )
    return Lp, Lr, rts, j_ratio


def _flange_centroid_distance(section: Section) -> float:
    """ho in mm: depth minus one flange thickness (0.95·depth if unknown)."""
    if section.flange_thickness:
        return section.depth - section.flange_thickness
    return 0.95 * section.depth


def web_shear_coefficient(h_tw: float, E: float, Fy: float) -> Tuple[float, float]:
    """
    AISC 360 G2.1: web shear coefficient Cv and resistance factor φv.

    Rolled I-shapes with h/tw ≤ 2.24·sqrt(E/Fy) get Cv = 1.0 and φv = 1.0.
    Otherwise (kv = 5.34, unstiffened webs) φv = 0.9 and
        h/tw ≤ 1.10·sqrt(kv·E/Fy):   Cv = 1.0
        h/tw ≤ 1.37·sqrt(kv·E/Fy):   Cv = 1.10·sqrt(kv·E/Fy) / (h/tw)
        otherwise:                   Cv = 1.51·kv·E / ((h/tw)²·Fy)
    """
    if h_tw <= 2.24 * math.sqrt(E / Fy):
        return 1.0, 1.0
    kv = 5.34
    limit = math.sqrt(kv * E / Fy)
    if h_tw <= 1.10 * limit:
        return 1.0, 0.9
    if h_tw <= 1.37 * limit:
        return 1.10 * limit / h_tw, 0.9
    return 1.51 * kv * E / (h_tw**2 * Fy), 0.9


def web_area(section: Section) -> Tuple[Optional[float], Optional[float]]:
    """(Aw in cm², h/tw) from depth and web thickness, or the major shear area."""
    h = section.depth
    if section.thickness:
        return h * section.thickness / 100.0, h / section.thickness
    if section.shear_area_z:
        tw = section.shear_area_z * 100.0 / h
        return section.shear_area_z, h / tw
    return None, None


@register_code
class AISC360(DesignCode):
    """AISC 360: tension (D2), compression (E3), flexure (F2/F6), shear (G2), interaction (H1)."""

    code = 'AISC360'
    name = 'AISC 360 - Specification for Structural Steel Buildings'
    version = '2022'
    country = 'USA'

    def checks(
        self,
        material: Material,
        section: Section,
        forces: DesignForces,
        parameters: DesignParameters,
    ) -> List[DesignCheck]:
        Fy = material.yield_strength
        Fu = material.ultimate_strength
        E = material.elastic_modulus * 1000.0  # GPa → MPa
        A = section.area
        divisor = self.config.axial_capacity_divisor

        checks = []
        axial_check = None

        # D2: tension
        if forces.axial > 0:
            capacity = PHI_T * Fy * A / divisor
            axial_check = make_check(
                'Tensile Yielding', forces.axial, capacity, 'Tension',
                'AISC 360 D2.1: φPn = φFyAg',
            )
            if axial_check.ratio > 0.95:
                axial_check = dataclasses.replace(
                    axial_check, notes=axial_check.notes + ('High utilization - consider larger section',)
                )
            checks.append(axial_check)

            Ae = AE_RATIO * A
            checks.append(make_check(
                'Tensile Rupture', forces.axial, PHI_TR * Fu * Ae / divisor, 'Tension',
                'AISC 360 D2.2: φPn = φFuAe',
            ))

        # E3: compression, governing axis
        if forces.axial < 0:
            slenderness = max(
                parameters.effective_length_factor_y * parameters.unbraced_length_y * 1000.0
                / (section.radius_of_gyration_y * 10.0),
                parameters.effective_length_factor_z * parameters.unbraced_length_z * 1000.0
                / (section.radius_of_gyration_z * 10.0),
            )
            Fcr = critical_buckling_stress(E, Fy, slenderness)
            notes = []
            if slenderness > parameters.slenderness_limit:
                notes.append(
                    f'Slenderness KL/r = {slenderness:.0f} exceeds {parameters.slenderness_limit:.0f}'
                    ' - check buckling'
                )
            axial_check = make_check(
                'Compressive Strength', abs(forces.axial), PHI_C * Fcr * A / divisor,
                'Compression', 'AISC 360 E3: φPn = φFcrAg', notes,
            )
            checks.append(axial_check)

        # F2: major-axis flexure with lateral-torsional buckling
        Mp_x = Fy * section.section_modulus_y / 1000.0  # kNm
        Mp_y = Fy * section.section_modulus_z / 1000.0
        major_check = None
        if abs(forces.moment_y) > NEGLIGIBLE:
            Mn, notes = self._major_axis_strength(E, Fy, section, parameters, Mp_x)
            major_check = make_check(
                'Flexural Strength (Major Axis)', abs(forces.moment_y), PHI_B * Mn,
                'Bending', 'AISC 360 F2: φMn', notes,
            )
            checks.append(major_check)

        # F6: minor-axis flexure
        minor_check = None
        if abs(forces.moment_z) > NEGLIGIBLE:
            minor_check = make_check(
                'Flexural Strength (Minor Axis)', abs(forces.moment_z), PHI_B * Mp_y,
                'Bending', 'AISC 360 F6: φMn = φMp',
            )
            checks.append(minor_check)

        # G2: shear on the web, resultant of both shear components
        shear_demand = math.hypot(forces.shear_y, forces.shear_z)
        if shear_demand > NEGLIGIBLE:
            Aw, h_tw = web_area(section)
            if Aw is None:
                logger.debug("Section %s has no web data, shear check skipped", section.id)
            else:
                Cv, phi_v = web_shear_coefficient(h_tw, E, Fy)
                checks.append(make_check(
                    'Shear Strength', shear_demand, phi_v * 0.6 * Fy * Aw * Cv / 10.0,
                    'Shear', 'AISC 360 G2: φVn = φ0.6FyAwCv',
                ))

        # H1: combined axial and flexure
        Pr = abs(forces.axial)
        Mrx = parameters.bending_factor_y * abs(forces.moment_y)
        Mry = parameters.bending_factor_z * abs(forces.moment_z)
        if Pr > 0 and axial_check is not None and (Mrx > NEGLIGIBLE or Mry > NEGLIGIBLE):
            Pc = axial_check.capacity
            Mcx = major_check.capacity if major_check else PHI_B * Mp_x
            Mcy = minor_check.capacity if minor_check else PHI_B * Mp_y
            flexure = Mrx / Mcx + Mry / Mcy
            if Pr / Pc >= 0.2:
                ratio = Pr / Pc + (8.0 / 9.0) * flexure
                equation = 'AISC 360 H1-1a: Pr/Pc + 8/9(Mrx/Mcx + Mry/Mcy)'
            else:
                ratio = Pr / (2.0 * Pc) + flexure
                equation = 'AISC 360 H1-1b: Pr/2Pc + (Mrx/Mcx + Mry/Mcy)'
            notes = ['High interaction ratio - consider optimization'] if ratio > 0.95 else []
            checks.append(interaction_check(
                'Combined Axial and Flexural', ratio, 'Combined', equation, notes,
            ))

        return checks

    def _major_axis_strength(
        self,
        E: float,
        Fy: float,
        section: Section,
        parameters: DesignParameters,
        Mp: float,
    ) -> Tuple[float, List[str]]:
        """Nominal major-axis moment Mn (kNm): yielding, inelastic or elastic LTB."""
        Lb = parameters.lateral_torsional_bracing_length * 1000.0  # mm
        Cb = parameters.moment_modification_factor
        Sx = section.section_modulus_y
        Lp, Lr, rts, j_ratio = limiting_lengths(E, Fy, section)

        if Lb <= Lp:
            return Mp, []
        if Lb <= Lr:
            Mn = Cb * (Mp - (Mp - 0.7 * Fy * Sx / 1000.0) * (Lb - Lp) / (Lr - Lp))
            return min(Mn, Mp), []

        slenderness = Lb / rts
        Fcr = Cb * math.pi**2 * E / slenderness**2 * math.sqrt(1 + 0.078 * j_ratio * slenderness**2)
        return min(Fcr * Sx / 1000.0, Mp), ['Elastic LTB controls - consider lateral bracing']

