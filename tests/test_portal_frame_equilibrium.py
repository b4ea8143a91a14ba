# tests/test_portal_frame_equilibrium.py
"""
Global equilibrium and repeatability on a fixed-base portal frame.

Applied (ULS2 = 1.35 DL + 1.5 WL):
    H = 1.5 × 20 kN      at B (0, h), +X
    w = 1.35 × 15 kN/m   on the beam B-C, -Y

Σ reactions + Σ applied = 0 for forces and for the moment about the origin.
"""

import numpy as np

from framecheck.analysis import analyze, analyze_static
from framecheck.post import node_results

B_SPAN, HEIGHT = 6.0, 4.0
H = 1.5 * 20.0e3
W = 1.35 * 15.0e3


def test_force_and_moment_equilibrium(portal):
    static = analyze_static(portal(B_SPAN, HEIGHT), 'ULS2')

    RA = static.reactions['A']
    RD = static.reactions['D']

    assert np.isclose(RA[0] + RD[0] + H, 0.0, atol=1e-6)
    assert np.isclose(RA[1] + RD[1] - W * B_SPAN, 0.0, atol=1e-6)
    assert np.isclose(RA[2] + RD[2], 0.0, atol=1e-6)

    # Moment about the origin (z component): x·Fy - y·Fx
    applied = -HEIGHT * H + (B_SPAN / 2) * (-W * B_SPAN)
    reactions = RA[5] + RD[5] + B_SPAN * RD[1]
    assert np.isclose(applied + reactions, 0.0, atol=1e-5)


def test_nodal_equilibrium_at_free_joints(portal):
    model = portal(B_SPAN, HEIGHT)
    static = analyze_static(model, 'ULS2')

    # Joint C carries no direct load: element end forces cancel
    total = static.end_forces_global['B1'][6:12] + static.end_forces_global['C2'][6:12]
    np.testing.assert_allclose(total, 0.0, atol=1e-6)

    # Joint B carries H
    total = static.end_forces_global['C1'][6:12] + static.end_forces_global['B1'][0:6]
    np.testing.assert_allclose(total, [H, 0, 0, 0, 0, 0], atol=1e-6)


def test_node_results_units(portal):
    static = analyze_static(portal(B_SPAN, HEIGHT), 'ULS2')
    nodes = {n.node_id: n for n in node_results(static)}

    assert np.isclose(nodes['B'].displacement[0], static.displacements['B'][0] * 1e3)
    assert np.isclose(nodes['A'].reaction[1], static.reactions['A'][1] / 1e3)
    assert nodes['C'].reaction == (0.0,) * 6
    # Sway towards +X
    assert nodes['B'].displacement[0] > 0.0


def test_repeated_runs_are_identical(portal):
    model = portal(B_SPAN, HEIGHT)

    first = analyze(model, 'ULS2')
    second = analyze(model, 'ULS2')

    assert first == second
    assert [r.element_id for r in first] == ['C1', 'B1', 'C2']


def test_combination_factors_scale_results(portal):
    model = portal(B_SPAN, HEIGHT)

    uls1 = analyze_static(model, 'ULS1')     # 1.0 DL only
    beam_moment = abs(uls1.end_forces_local['B1'][5])
    assert beam_moment > 0.0
    assert np.isclose(uls1.reactions['A'][1] + uls1.reactions['D'][1], 15.0e3 * B_SPAN)
