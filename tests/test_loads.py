import logging

import numpy as np

from framecheck.analysis import analyze_static
from framecheck.config import CONFIG
from framecheck.kernel import DOFMap
from framecheck.loads import (
    MemberLoad,
    build_load_vectors,
    effective_factor,
    equivalent_nodal_loads,
    fixed_end_forces,
    lumped_nodal_loads,
)
from framecheck.model import Load, LoadCase, LoadCombination
from framecheck.elements import element_geometry, rotation_matrix


def test_uniform_load_fixed_end_forces():
    L, w = 6.0, -10e3
    f = fixed_end_forces(L, MemberLoad('q', 'distributed', q_start=(0.0, w, 0.0), q_end=(0.0, w, 0.0)))

    assert np.isclose(f[1], w * L / 2)
    assert np.isclose(f[7], w * L / 2)
    assert np.isclose(f[5], w * L**2 / 12)
    assert np.isclose(f[11], -w * L**2 / 12)
    assert np.allclose(f[[0, 2, 3, 4, 6, 8, 9, 10]], 0.0)


def test_uniform_load_about_local_y_flips_moment_sign():
    L, w = 5.0, 4e3
    f = fixed_end_forces(L, MemberLoad('q', 'distributed', q_start=(0.0, 0.0, w), q_end=(0.0, 0.0, w)))

    assert np.isclose(f[2], w * L / 2)
    assert np.isclose(f[4], -w * L**2 / 12)
    assert np.isclose(f[10], w * L**2 / 12)


def test_midspan_point_load_fixed_end_forces():
    L, P = 4.0, -8e3
    f = fixed_end_forces(L, MemberLoad('p', 'point', force=(0.0, P, 0.0), a=L / 2))

    assert np.isclose(f[1], P / 2)
    assert np.isclose(f[7], P / 2)
    assert np.isclose(f[5], P * L / 8)
    assert np.isclose(f[11], -P * L / 8)


def test_trapezoid_forces_sum_to_resultant():
    L = 3.0
    load = MemberLoad('t', 'distributed', q_start=(1e3, 2e3, 0.0), q_end=(3e3, 5e3, 0.0))
    f = fixed_end_forces(L, load)

    total = load.total(L)
    assert np.isclose(f[0] + f[6], total[0])
    assert np.isclose(f[1] + f[7], total[1])
    # Heavier end takes more
    assert f[7] > f[1]


def test_lumped_loads_have_no_end_moments():
    L = 6.0
    f = lumped_nodal_loads(L, MemberLoad('q', 'distributed', q_start=(0.0, -10e3, 0.0), q_end=(0.0, -10e3, 0.0)))

    assert np.isclose(f[1], -30e3)
    assert np.isclose(f[7], -30e3)
    assert np.allclose(f[[3, 4, 5, 9, 10, 11]], 0.0)

    f = lumped_nodal_loads(L, MemberLoad('p', 'point', force=(0.0, -9e3, 0.0), a=2.0))
    assert np.isclose(f[1], -6e3)
    assert np.isclose(f[7], -3e3)


def test_equivalent_loads_rotate_global_direction_into_local_axes():
    # Horizontal member: global -Y load becomes local -z
    L, direction = 6.0, np.array([1.0, 0.0, 0.0])
    R = rotation_matrix(direction)
    load = Load('W', 'distributed', 'DL', -10.0, 'y', element='E1')

    f_global, f_local, member_load = equivalent_nodal_loads(load, L, R, 1.5, CONFIG)

    np.testing.assert_allclose(member_load.q_start, (0.0, 0.0, -15e3), atol=1e-9)
    assert np.isclose(f_local[2], -45e3)
    assert np.isclose(f_global[1], -45e3)
    assert np.isclose(f_global[7], -45e3)


def test_effective_factor_is_the_combination_factor(cantilever):
    model = cantilever()
    model.add_load_case(LoadCase('LL', 'Live', 'live', factor=2.0))
    combination = LoadCombination('C', {'DL': 1.35, 'LL': 1.5})

    assert np.isclose(effective_factor(combination, model.loads['P1']), 1.35)
    live = Load('P2', 'point', 'LL', 1.0, 'y', node='B')
    # The case factor (2.0) is not applied on top of the combination factor
    assert np.isclose(effective_factor(combination, live), 1.5)
    assert effective_factor(LoadCombination('D', {'LL': 1.0}), model.loads['P1']) == 0.0


def test_case_factor_does_not_scale_loads_twice(cantilever):
    model = cantilever(4.0, 10.0)
    model.add_load_case(LoadCase('DL', 'Dead load', 'dead', factor=1.35))
    model.add_load_combination(LoadCombination('ULS', {'DL': 1.35}))

    static = analyze_static(model, 'ULS')

    assert np.isclose(static.reactions['A'][1], 1.35 * 10e3)


def test_build_load_vectors_nodal_and_skipped_loads(cantilever, caplog):
    model = cantilever()
    model.add_load(Load('M1', 'moment', 'DL', 5.0, 'mz', element='E1', position=0.5))
    dof_map = DOFMap.from_nodes(model.nodes.values())
    ni, nj = model.nodes['A'], model.nodes['B']
    L, direction = element_geometry(ni, nj)
    geometry = {'E1': (L, rotation_matrix(direction))}

    with caplog.at_level(logging.WARNING, logger='framecheck.loads'):
        load_set = build_load_vectors(model, model.load_combinations['ULS1'], dof_map, geometry)

    assert 'M1' in caplog.text
    assert load_set.member == {}
    assert np.isclose(load_set.F[dof_map.idx('B', 1)], -10e3)
    assert np.isclose(load_set.nodal[dof_map.full_idx('B', 1)], -10e3)
    assert np.isclose(np.abs(load_set.F).sum(), 10e3)
