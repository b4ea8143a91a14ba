import math

import numpy as np
import pytest

from framecheck.catalog import get_material, get_section
from framecheck.checks import CheckStatus, DesignForces, DesignParameters, available_codes, get_code
from framecheck.checks.aisc import AISC360, limiting_lengths, web_shear_coefficient
from framecheck.errors import UnknownDesignCodeError

STEEL = get_material('S355')
IPE300 = get_section('IPE300')
E = 210000.0   # MPa


def _check(result, check_type):
    (check,) = [c for c in result.checks if c.check_type == check_type]
    return check


def test_tension_round_trip_is_exactly_at_capacity():
    Fy, A = STEEL.yield_strength, IPE300.area
    axial = 0.9 * Fy * A / 100

    result = get_code('AISC360').evaluate('T1', STEEL, IPE300, DesignForces(axial=axial))

    check = _check(result, 'Tensile Yielding')
    assert check.ratio == pytest.approx(1.0, abs=1e-12)
    assert check.status is CheckStatus.PASS
    assert check.equation.startswith('AISC 360 D2')
    assert 'High utilization - consider larger section' in check.notes


def test_tensile_rupture_uses_net_area():
    result = AISC360().evaluate('T1', STEEL, IPE300, DesignForces(axial=50.0))

    check = _check(result, 'Tensile Rupture')
    assert np.isclose(check.capacity, 0.75 * 490.0 * 0.85 * IPE300.area / 100)
    assert np.isclose(check.ratio, 50.0 / check.capacity)


def test_compression_uses_governing_slenderness():
    params = DesignParameters.for_length(3.0)
    result = AISC360().evaluate('C1', STEEL, IPE300, DesignForces(axial=-40.0), params)

    KL_r = 3000.0 / (IPE300.radius_of_gyration_z * 10.0)
    Fe = math.pi**2 * E / KL_r**2
    Fcr = 0.658 ** (355.0 / Fe) * 355.0          # inelastic branch
    check = _check(result, 'Compressive Strength')
    assert np.isclose(check.capacity, 0.9 * Fcr * IPE300.area / 100)
    assert check.controlling_case == 'Compression'
    assert check.notes == ()


def test_slender_column_gets_note():
    params = DesignParameters.for_length(8.0)
    result = AISC360().evaluate('C1', STEEL, IPE300, DesignForces(axial=-5.0), params)

    check = _check(result, 'Compressive Strength')
    assert any('Slenderness' in note for note in check.notes)
    # Elastic branch: 0.877 Fe
    KL_r = 8000.0 / (IPE300.radius_of_gyration_z * 10.0)
    assert np.isclose(check.capacity, 0.9 * 0.877 * math.pi**2 * E / KL_r**2 * IPE300.area / 100)


def test_major_axis_flexure_branches():
    Lp, Lr, _, _ = limiting_lengths(E, 355.0, IPE300)
    assert Lp < Lr

    Mp = 355.0 * IPE300.section_modulus_y / 1000.0
    capacities = []
    for Lb in (1.0, 3.0, 10.0):
        params = DesignParameters(lateral_torsional_bracing_length=Lb)
        result = AISC360().evaluate('B1', STEEL, IPE300, DesignForces(moment_y=20.0), params)
        capacities.append(_check(result, 'Flexural Strength (Major Axis)'))

    assert np.isclose(capacities[0].capacity, 0.9 * Mp)            # Lb <= Lp
    assert capacities[0].capacity > capacities[1].capacity > capacities[2].capacity
    assert 'Elastic LTB controls - consider lateral bracing' in capacities[2].notes


def test_moment_gradient_factor_is_capped_at_plastic_moment():
    Mp = 355.0 * IPE300.section_modulus_y / 1000.0
    params = DesignParameters(lateral_torsional_bracing_length=3.0, moment_modification_factor=3.0)

    result = AISC360().evaluate('B1', STEEL, IPE300, DesignForces(moment_y=20.0), params)

    assert np.isclose(_check(result, 'Flexural Strength (Major Axis)').capacity, 0.9 * Mp)


def test_shear_strength_of_compact_web():
    result = AISC360().evaluate('B1', STEEL, IPE300, DesignForces(shear_z=100.0))

    Aw = 300.0 * 7.1 / 100.0
    check = _check(result, 'Shear Strength')
    assert np.isclose(check.capacity, 0.6 * 355.0 * Aw / 10.0)
    assert web_shear_coefficient(300.0 / 7.1, E, 355.0) == (1.0, 1.0)
    assert web_shear_coefficient(200.0, E, 355.0)[1] == 0.9


def test_interaction_branches():
    params = DesignParameters(lateral_torsional_bracing_length=1.0)
    code = AISC360()

    high = code.evaluate('BC1', STEEL, IPE300, DesignForces(axial=-50.0, moment_y=50.0), params)
    combined = _check(high, 'Combined Axial and Flexural')
    Pc = _check(high, 'Compressive Strength').capacity
    Mc = _check(high, 'Flexural Strength (Major Axis)').capacity
    assert 50.0 / Pc >= 0.2
    assert 'H1-1a' in combined.equation
    assert np.isclose(combined.ratio, 50.0 / Pc + 8.0 / 9.0 * 50.0 / Mc)
    assert combined.capacity == 1.0

    low = code.evaluate('BC1', STEEL, IPE300, DesignForces(axial=-5.0, moment_y=50.0), params)
    assert 'H1-1b' in _check(low, 'Combined Axial and Flexural').equation


def test_overall_result_and_recommendations():
    params = DesignParameters(lateral_torsional_bracing_length=1.0)

    failing = AISC360().evaluate('B9', STEEL, IPE300, DesignForces(moment_y=500.0), params)
    assert failing.overall_status is CheckStatus.FAIL
    assert failing.overall_ratio == max(c.ratio for c in failing.checks)
    assert failing.controlling_check.check_type == 'Flexural Strength (Major Axis)'
    assert 'Section is overstressed - increase size or change grade' in failing.recommendations

    light = AISC360().evaluate('B9', STEEL, IPE300, DesignForces(moment_y=10.0), params)
    assert light.overall_status is CheckStatus.PASS
    assert 'Section is underutilized - consider smaller section for economy' in light.recommendations


def test_no_forces_means_no_checks():
    result = AISC360().evaluate('Z', STEEL, IPE300, DesignForces())

    assert result.checks == ()
    assert result.overall_ratio == 0.0
    assert result.overall_status is CheckStatus.PASS
    assert result.recommendations == ()
    assert result.controlling_check is None


def test_registry():
    assert available_codes() == ['AISC360', 'EC3']
    assert isinstance(get_code('AISC360'), AISC360)

    with pytest.raises(KeyError):
        get_code('BS5950')
    with pytest.raises(UnknownDesignCodeError) as info:
        get_code('BS5950')
    assert 'AISC360' in str(info.value)
