import numpy as np
import pytest

from framecheck.catalog import get_material, get_section
from framecheck.elements import (
    SectionProperties,
    element_geometry,
    frame3d_global_stiffness,
    frame3d_local_stiffness,
    frame3d_transform,
    rotation_matrix,
)
from framecheck.errors import DegenerateElementError
from framecheck.model import Node


PROPS = SectionProperties.from_records(get_material('S355'), get_section('IPE240'))


def _rigid_body_modes(ni, nj):
    """Six rigid-body displacement vectors (3 translations, 3 rotations about node i)."""
    modes = []
    for axis in range(3):
        u = np.zeros(12)
        u[axis] = u[6 + axis] = 1.0
        modes.append(u)
    arm = np.array([nj.x - ni.x, nj.y - ni.y, nj.z - ni.z])
    for axis in range(3):
        omega = np.zeros(3)
        omega[axis] = 1.0
        u = np.zeros(12)
        u[3:6] = omega
        u[6:9] = np.cross(omega, arm)
        u[9:12] = omega
        modes.append(u)
    return modes


def test_section_properties_in_si_units():
    assert np.isclose(PROPS.E, 210e9)
    assert np.isclose(PROPS.G, 81e9)
    assert np.isclose(PROPS.A, 39.1e-4)
    assert np.isclose(PROPS.Iy, 3892e-8)
    assert np.isclose(PROPS.Iz, 284e-8)


def test_local_stiffness_coefficients():
    L = 3.0
    k = frame3d_local_stiffness(PROPS.E, PROPS.G, PROPS.A, PROPS.Iy, PROPS.Iz, PROPS.J, L)

    np.testing.assert_allclose(k, k.T)
    assert np.isclose(k[0, 0], PROPS.E * PROPS.A / L)
    assert np.isclose(k[3, 3], PROPS.G * PROPS.J / L)
    assert np.isclose(k[1, 1], 12 * PROPS.E * PROPS.Iz / L**3)
    assert np.isclose(k[2, 2], 12 * PROPS.E * PROPS.Iy / L**3)
    assert np.isclose(k[1, 5], 6 * PROPS.E * PROPS.Iz / L**2)
    assert np.isclose(k[2, 4], -6 * PROPS.E * PROPS.Iy / L**2)
    assert np.isclose(k[4, 10], 2 * PROPS.E * PROPS.Iy / L)


@pytest.mark.parametrize('end', [(4.0, 0.0, 0.0), (0.0, 3.5, 0.0), (2.0, 1.5, -1.0)])
def test_global_stiffness_is_symmetric_with_rigid_body_nullspace(end):
    ni = Node('i', 0.5, 0.0, 1.0)
    nj = Node('j', 0.5 + end[0], end[1], 1.0 + end[2])

    ke = frame3d_global_stiffness(ni, nj, PROPS)

    np.testing.assert_allclose(ke, ke.T, rtol=1e-10, atol=1e-6)
    scale = np.max(np.abs(ke))
    for mode in _rigid_body_modes(ni, nj):
        assert np.max(np.abs(ke @ mode)) < 1e-8 * scale


def test_rotation_matrix_horizontal_member_has_local_z_up():
    R = rotation_matrix(np.array([1.0, 0.0, 0.0]))

    np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
    np.testing.assert_allclose(R[0], [1.0, 0.0, 0.0])
    np.testing.assert_allclose(R[1], [0.0, 0.0, -1.0])
    np.testing.assert_allclose(R[2], [0.0, 1.0, 0.0])


def test_rotation_matrix_vertical_member_uses_fallback():
    R = rotation_matrix(np.array([0.0, 2.0, 0.0]))

    np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
    np.testing.assert_allclose(R[0], [0.0, 1.0, 0.0])
    np.testing.assert_allclose(R[1], [0.0, 0.0, 1.0])
    assert np.isclose(np.linalg.det(R), 1.0)


def test_transform_is_block_diagonal():
    R = rotation_matrix(np.array([1.0, 1.0, 1.0]))
    T = frame3d_transform(R)

    np.testing.assert_allclose(T @ T.T, np.eye(12), atol=1e-12)
    np.testing.assert_allclose(T[9:12, 9:12], R)
    assert np.all(T[0:3, 3:12] == 0.0)


def test_element_geometry():
    L, direction = element_geometry(Node('a', 1.0, 2.0, 3.0), Node('b', 4.0, 6.0, 3.0))

    assert np.isclose(L, 5.0)
    np.testing.assert_allclose(direction, [0.6, 0.8, 0.0])


def test_coincident_nodes_raise():
    with pytest.raises(DegenerateElementError) as info:
        element_geometry(Node('a', 1.0, 1.0, 1.0), Node('b', 1.0, 1.0, 1.0 + 1e-9), 'E7')

    assert info.value.element_id == 'E7'
    assert info.value.length < 1e-6
