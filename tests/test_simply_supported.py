import numpy as np

from framecheck.analysis import analyze, analyze_static
from framecheck.model import Load, Node


L = 4.0
P = 10.0                 # kN
E = 210e9
IY = 3892e-8             # IPE240 major axis, m⁴
IZ = 284e-8              # IPE240 minor axis, m⁴


def _midspan_point_model(simply_supported, as_element_load):
    """
    Simply supported beam with a point load P at midspan.

    Either one element carrying an element point load at position 0.5, or two
    elements with the load on the middle node.
    """
    if as_element_load:
        model = simply_supported(L, 0.0, n_elements=1)
        model.loads.clear()
        model.add_load(Load('P1', 'point', 'DL', -P, 'y', element='E1', position=0.5))
    else:
        model = simply_supported(L, 0.0, n_elements=2)
        model.loads.clear()
        model.add_load(Load('P1', 'point', 'DL', -P, 'y', node='N1'))
    return model


def test_simply_supported_midspan_pointload(simply_supported):
    """
    Textbook answers for a simply supported beam with a central load:
        reactions  R = P/2
        moment     M = PL/4 at midspan
        deflection δ = PL³/(48EI) at midspan
    """
    delta_mm = P * 1e3 * L**3 / (48 * E * IY) * 1e3

    for as_element_load, far_end in ((True, 'N1'), (False, 'N2')):
        model = _midspan_point_model(simply_supported, as_element_load)
        static = analyze_static(model, 'ULS1')
        results = analyze(model, 'ULS1')

        assert np.isclose(static.reactions['N0'][1], P * 1e3 / 2)
        assert np.isclose(static.reactions[far_end][1], P * 1e3 / 2)
        assert np.isclose(max(r.max_moment for r in results), P * L / 4, rtol=1e-6)
        assert np.isclose(max(r.max_displacement for r in results), delta_mm, rtol=1e-6)


def test_element_point_load_off_centre(simply_supported):
    """Load at a = L/4: reactions split by the lever rule, M = P·a·b/L under the load."""
    model = simply_supported(L, 0.0, n_elements=1)
    model.loads.clear()
    model.add_load(Load('P1', 'point', 'DL', -P, 'y', element='E1', position=0.25))

    static = analyze_static(model, 'ULS1')
    (result,) = analyze(model, 'ULS1')

    a, b = 0.25 * L, 0.75 * L
    assert np.isclose(static.reactions['N0'][1], P * 1e3 * b / L)
    assert np.isclose(static.reactions['N1'][1], P * 1e3 * a / L)
    assert np.isclose(result.max_moment, P * a * b / L, rtol=1e-6)


def test_vertical_cantilever_axes(cantilever):
    """
    A vertical member has local y along global Z, local z along global X.
    Pushed along X it bends about local y (Iy); along Z about local z (Iz).
    """
    model = cantilever(L, 0.0)
    model.add_node(Node('B', 0.0, L, 0.0))
    model.loads.clear()
    model.add_load(Load('HX', 'point', 'DL', P, 'x', node='B'))
    model.add_load(Load('HZ', 'point', 'DL', P, 'z', node='B'))

    static = analyze_static(model, 'ULS1')

    tip = static.displacements['B']
    assert np.isclose(tip[0], P * 1e3 * L**3 / (3 * E * IY), rtol=1e-6)
    assert np.isclose(tip[2], P * 1e3 * L**3 / (3 * E * IZ), rtol=1e-6)
    assert np.isclose(tip[1], 0.0, atol=1e-12)
