"""Small reference models shared by the tests."""

import pytest

from framecheck.catalog import get_material, get_section
from framecheck.model import (
    FIXED,
    Element,
    Load,
    LoadCase,
    LoadCombination,
    Node,
    StructuralModel,
)


def _base_model(section='IPE240'):
    model = StructuralModel()
    model.add_material(get_material('S355'))
    model.add_section(get_section(section))
    model.add_load_case(LoadCase('DL', 'Dead load', 'dead'))
    model.add_load_combination(LoadCombination('ULS1', {'DL': 1.0}, 'Ultimate'))
    return model


def build_cantilever(L=4.0, P=10.0):
    """Fixed at A, tip load P (kN, downward) at B. Member along +X."""
    model = _base_model()
    model.add_node(Node('A', 0.0, 0.0, 0.0, FIXED))
    model.add_node(Node('B', L, 0.0, 0.0))
    model.add_element(Element('E1', 'A', 'B', 'S355', 'IPE240', 'beam'))
    model.add_load(Load('P1', 'point', 'DL', -P, 'y', node='B'))
    return model


def build_simply_supported(L=6.0, w=10.0, n_elements=1):
    """
    Pinned at A (torsion restrained), roller at the far end, UDL w (kN/m, downward).
    Nodes N0..Nn, elements E1..En.
    """
    model = _base_model()
    h = L / n_elements
    for i in range(n_elements + 1):
        if i == 0:
            restraints = (True, True, True, True, False, False)
        elif i == n_elements:
            restraints = (False, True, True, False, False, False)
        else:
            restraints = (False,) * 6
        model.add_node(Node(f'N{i}', i * h, 0.0, 0.0, restraints))
    for i in range(n_elements):
        eid = f'E{i + 1}'
        model.add_element(Element(eid, f'N{i}', f'N{i + 1}', 'S355', 'IPE240', 'beam'))
        model.add_load(Load(f'W{i + 1}', 'distributed', 'DL', -w, 'y', element=eid))
    return model


def build_portal(b=6.0, h=4.0, H=20.0, w=15.0):
    """Fixed-base portal frame: lateral load H at top-left, UDL w on the beam."""
    model = _base_model('IPE300')
    model.add_load_case(LoadCase('WL', 'Wind', 'wind'))
    model.add_load_combination(LoadCombination('ULS2', {'DL': 1.35, 'WL': 1.5}, 'Ultimate'))
    model.add_node(Node('A', 0.0, 0.0, 0.0, FIXED))
    model.add_node(Node('B', 0.0, h, 0.0))
    model.add_node(Node('C', b, h, 0.0))
    model.add_node(Node('D', b, 0.0, 0.0, FIXED))
    model.add_element(Element('C1', 'A', 'B', 'S355', 'IPE300', 'column'))
    model.add_element(Element('B1', 'B', 'C', 'S355', 'IPE300', 'beam'))
    model.add_element(Element('C2', 'D', 'C', 'S355', 'IPE300', 'column'))
    model.add_load(Load('H1', 'point', 'WL', H, 'x', node='B'))
    model.add_load(Load('Q1', 'distributed', 'DL', -w, 'y', element='B1'))
    return model


@pytest.fixture
def cantilever():
    return build_cantilever


@pytest.fixture
def simply_supported():
    return build_simply_supported


@pytest.fixture
def portal():
    return build_portal
