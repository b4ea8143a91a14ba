# framecheck/checks/eurocode.py
"""Steel design checks per Eurocode 3 (EN 1993-1-1)."""

import math
from typing import List, Tuple

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

# Imperfection factors, Table 6.1
ALPHA = {'a0': 0.13, 'a': 0.21, 'b': 0.34, 'c': 0.49, 'd': 0.76}

# Simplified interaction factors for 6.3.3
K_YY = 1.0
K_YZ = 0.6
K_ZY = 0.6
K_ZZ = 1.0

LAMBDA_LT_0 = 0.4


def reduction_factor(lambda_bar: float, alpha: float, plateau: float = 0.2) -> float:
    """
    Buckling reduction factor χ (6.3.1.2 and 6.3.2.2).

    Φ = 0.5·[1 + α(λ̄ - 0.2) + λ̄²]
    χ = 1 / (Φ + sqrt(Φ² - λ̄²)) ≤ 1.0,   χ = 1.0 for λ̄ ≤ plateau
    """
    if lambda_bar <= plateau:
        return 1.0
    phi = 0.5 * (1 + alpha * (lambda_bar - 0.2) + lambda_bar**2)
    disc = phi**2 - lambda_bar**2
    if disc <= 0:
        return 1.0
    return min(1.0, 1.0 / (phi + math.sqrt(disc)))


def relative_slenderness(Lcr: float, i_cm: float, E: float, fy: float) -> float:
    """λ̄ = (Lcr/i) / λ1 with λ1 = π·sqrt(E/fy). Lcr in m, i in cm."""
    return (Lcr / (i_cm / 100.0)) / (math.pi * math.sqrt(E / fy))


def critical_moment(
    material: Material, section: Section, L: float, C1: float = 1.0
) -> float:
    """
    Elastic critical moment for LTB (kNm), doubly symmetric section:

        Mcr = C1 · π²EIz/L² · sqrt(Iw/Iz + L²GIt/(π²EIz))
    """
    E = material.elastic_modulus * 1e9            # Pa
    G = material.G * 1e9
    Iz = section.moment_of_inertia_z * 1e-8       # m⁴
    It = section.torsional_constant * 1e-8
    Iw = (section.warping_constant or 0.0) * 1e-12  # cm⁶ → m⁶

    euler = math.pi**2 * E * Iz / L**2
    return C1 * euler * math.sqrt(Iw / Iz + L**2 * G * It / (math.pi**2 * E * Iz)) / 1000.0


def ltb_imperfection(section: Section) -> Tuple[str, float]:
    """Table 6.4, rolled I-sections: curve a for h/b ≤ 2, curve b above."""
    if section.width and section.depth / section.width <= 2.0:
        return 'a', ALPHA['a']
    return 'b', ALPHA['b']


@register_code
class Eurocode3(DesignCode):
    """EN 1993-1-1: tension, flexural buckling, bending, shear, LTB and interaction."""

    code = 'EC3'
    name = 'Eurocode 3: Design of steel structures'
    version = '2005+A1:2014'
    country = 'EU'

    def checks(
        self,
        material: Material,
        section: Section,
        forces: DesignForces,
        parameters: DesignParameters,
    ) -> List[DesignCheck]:
        fy = material.yield_strength
        E = material.elastic_modulus * 1000.0  # MPa
        gamma_m0 = self.config.gamma_m0
        gamma_m1 = self.config.gamma_m1
        N_Rk = section.area * fy / self.config.axial_capacity_divisor   # kN
        My_Rk = section.section_modulus_y * fy / 1000.0                 # kNm
        Mz_Rk = section.section_modulus_z * fy / 1000.0

        alpha = ALPHA.get(parameters.buckling_curve, ALPHA['b'])
        lambda_y = relative_slenderness(
            parameters.effective_length_factor_y * parameters.unbraced_length_y,
            section.radius_of_gyration_y, E, fy,
        )
        lambda_z = relative_slenderness(
            parameters.effective_length_factor_z * parameters.unbraced_length_z,
            section.radius_of_gyration_z, E, fy,
        )
        chi_y = reduction_factor(lambda_y, alpha)
        chi_z = reduction_factor(lambda_z, alpha)

        checks = []

        # 6.2.3 tension
        if forces.axial > 0:
            checks.append(make_check(
                'Tension Resistance', forces.axial, N_Rk / gamma_m0, 'Tension',
                'EN 1993-1-1 6.2.3: Nt,Rd = A·fy/γM0',
            ))

        # 6.3.1 flexural buckling, weaker axis governs
        if forces.axial < 0:
            lambda_bar = max(lambda_y, lambda_z)
            chi = min(chi_y, chi_z)
            notes = ['High slenderness - check buckling'] if lambda_bar > 1.5 else []
            checks.append(make_check(
                'Compression Resistance', abs(forces.axial), chi * N_Rk / gamma_m1,
                'Compression', 'EN 1993-1-1 6.3.1: Nb,Rd = χ·A·fy/γM1', notes,
            ))

        # 6.2.5 bending
        if abs(forces.moment_y) > NEGLIGIBLE:
            checks.append(make_check(
                'Bending Resistance (Major Axis)', abs(forces.moment_y), My_Rk / gamma_m0,
                'Bending', 'EN 1993-1-1 6.2.5: Mc,Rd = W·fy/γM0',
            ))
        if abs(forces.moment_z) > NEGLIGIBLE:
            checks.append(make_check(
                'Bending Resistance (Minor Axis)', abs(forces.moment_z), Mz_Rk / gamma_m0,
                'Bending', 'EN 1993-1-1 6.2.5: Mc,Rd = W·fy/γM0',
            ))

        # 6.2.6 shear, each direction against its own shear area
        for label, demand, area in (
            ('z', forces.shear_z, section.shear_area_z),
            ('y', forces.shear_y, section.shear_area_y),
        ):
            if abs(demand) > NEGLIGIBLE and area:
                V_pl_Rd = area * fy / (math.sqrt(3.0) * gamma_m0) / 10.0  # kN
                checks.append(make_check(
                    f'Shear Resistance ({label})', abs(demand), V_pl_Rd, 'Shear',
                    'EN 1993-1-1 6.2.6: Vpl,Rd = Av·fy/(√3·γM0)',
                ))

        # 6.3.2 lateral-torsional buckling
        chi_lt = 1.0
        if abs(forces.moment_y) > NEGLIGIBLE and parameters.lateral_torsional_bracing_length > 0:
            Mcr = critical_moment(
                material, section, parameters.lateral_torsional_bracing_length,
                parameters.moment_modification_factor,
            )
            lambda_lt = math.sqrt(My_Rk / Mcr)
            curve, alpha_lt = ltb_imperfection(section)
            chi_lt = reduction_factor(lambda_lt, alpha_lt, plateau=LAMBDA_LT_0)
            notes = [f'Mcr = {Mcr:.1f} kNm, λ̄LT = {lambda_lt:.3f}, curve {curve}']
            if lambda_lt > 1.2:
                notes.append('High LTB slenderness - add bracing')
            checks.append(make_check(
                'Lateral-Torsional Buckling', abs(forces.moment_y), chi_lt * My_Rk / gamma_m1,
                'LTB', 'EN 1993-1-1 6.3.2: Mb,Rd = χLT·W·fy/γM1', notes,
            ))

        # 6.3.3 interaction with fixed k factors
        N_Ed = abs(forces.axial)
        My_Ed = parameters.bending_factor_y * abs(forces.moment_y)
        Mz_Ed = parameters.bending_factor_z * abs(forces.moment_z)
        if N_Ed > NEGLIGIBLE and (My_Ed > NEGLIGIBLE or Mz_Ed > NEGLIGIBLE):
            if forces.axial > 0:
                chi_y = chi_z = 1.0
            bending_y = My_Ed / (chi_lt * My_Rk / gamma_m1)
            bending_z = Mz_Ed / (Mz_Rk / gamma_m1)
            ratio_y = N_Ed / (chi_y * N_Rk / gamma_m1) + K_YY * bending_y + K_YZ * bending_z
            ratio_z = N_Ed / (chi_z * N_Rk / gamma_m1) + K_ZY * bending_y + K_ZZ * bending_z
            checks.append(interaction_check(
                'Combined Bending and Axial', max(ratio_y, ratio_z), 'Combined',
                'EN 1993-1-1 6.3.3: (6.61) and (6.62)',
            ))

        return checks
