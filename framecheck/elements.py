# framecheck/elements.py
"""
3D FRAME ELEMENT: Euler-Bernoulli Stiffness and Coordinate Transformation
=========================================================================

PURPOSE:
--------
This module computes the 12×12 global stiffness matrix of a 3D beam element
(2 nodes × 6 DOFs: ux, uy, uz, rx, ry, rz).

LOCAL STIFFNESS:
----------------
In local coordinates (x' along the member) the Euler-Bernoulli beam
decouples into four independent actions:

    axial      EA/L                          DOFs 0, 6
    torsion    GJ/L                          DOFs 3, 9
    bending about local z (uses Iz)          DOFs 1, 5, 7, 11
    bending about local y (uses Iy, major)   DOFs 2, 4, 8, 10

Each bending block carries the familiar 12EI/L³, 6EI/L², 4EI/L, 2EI/L
coefficients. Shear deformation is ignored (no Timoshenko correction).

TRANSFORMATION:
---------------
The 3×3 rotation R has the local x, y, z axes as its rows. Global Y is
vertical:

    non-vertical member:  y' = normalize(Y × x'),  z' = x' × y'
                          (a horizontal member gets z' pointing up)
    vertical member:      y' = Z,                  z' = x' × y'

The vertical fallback avoids dividing by the zero horizontal projection.
T is block-diagonal with four copies of R, and

    ke_global = Tᵀ × k_local × T
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .config import CONFIG
from .errors import DegenerateElementError
from .kernel.solve import matmul
from .model import Material, Node, Section

# Tolerance on |x'·Y| for treating a member as vertical
VERTICAL_TOL = 1e-9


@dataclass(frozen=True)
class SectionProperties:
    """Material and section data converted to SI base units."""
    E: float    # Pa
    G: float    # Pa
    A: float    # m²
    Iy: float   # m⁴ (major axis)
    Iz: float   # m⁴
    J: float    # m⁴

    @classmethod
    def from_records(cls, material: Material, section: Section) -> 'SectionProperties':
        return cls(
            E=material.elastic_modulus * 1e9,      # GPa → Pa
            G=material.G * 1e9,                    # GPa → Pa
            A=section.area * 1e-4,                 # cm² → m²
            Iy=section.moment_of_inertia_y * 1e-8,  # cm⁴ → m⁴
            Iz=section.moment_of_inertia_z * 1e-8,
            J=section.torsional_constant * 1e-8,
        )


def element_geometry(
    ni: Node,
    nj: Node,
    element_id: str = '?',
    min_length: float = None,
) -> Tuple[float, np.ndarray]:
    """
    Length and unit direction vector of a member from node i to node j.

    Raises:
        DegenerateElementError: If L is at or below min_length
    """
    if min_length is None:
        min_length = CONFIG.min_element_length

    delta = np.array([nj.x - ni.x, nj.y - ni.y, nj.z - ni.z], dtype=float)
    L = float(np.sqrt(delta @ delta))
    if L <= min_length:
        raise DegenerateElementError(element_id, L)
    return L, delta / L


def rotation_matrix(direction: np.ndarray) -> np.ndarray:
    """
    3×3 direction-cosine matrix for a member along `direction`.

    Rows are the local x, y, z axes expressed in global coordinates, so
    R @ v_global gives v_local.
    """
    x_axis = np.asarray(direction, dtype=float)
    x_axis = x_axis / np.linalg.norm(x_axis)

    if abs(x_axis[1]) >= 1.0 - VERTICAL_TOL:
        # Member parallel to global Y
        y_axis = np.array([0.0, 0.0, 1.0])
    else:
        # Y × x' = (x'z, 0, -x'x)
        y_axis = np.array([x_axis[2], 0.0, -x_axis[0]])
        y_axis /= np.linalg.norm(y_axis)

    z_axis = np.cross(x_axis, y_axis)
    return np.vstack([x_axis, y_axis, z_axis])


def frame3d_local_stiffness(
    E: float, G: float, A: float, Iy: float, Iz: float, J: float, L: float
) -> np.ndarray:
    """
    Local 12×12 stiffness of a 3D Euler-Bernoulli beam.

    DOF order: [ux_i, uy_i, uz_i, rx_i, ry_i, rz_i, ux_j, uy_j, uz_j, rx_j, ry_j, rz_j]
    """
    k = np.zeros((12, 12), dtype=float)
    L2 = L * L
    L3 = L2 * L

    # Axial
    EA_L = E * A / L
    k[0, 0] = k[6, 6] = EA_L
    k[0, 6] = k[6, 0] = -EA_L

    # Torsion
    GJ_L = G * J / L
    k[3, 3] = k[9, 9] = GJ_L
    k[3, 9] = k[9, 3] = -GJ_L

    # Bending about local z: [uy_i, rz_i, uy_j, rz_j]
    k[np.ix_([1, 5, 7, 11], [1, 5, 7, 11])] = _bending_block(E * Iz, L, L2, L3, sign=1.0)

    # Bending about local y: [uz_i, ry_i, uz_j, ry_j]. A positive ry turns
    # z' towards x', so the rotation couplings change sign.
    k[np.ix_([2, 4, 8, 10], [2, 4, 8, 10])] = _bending_block(E * Iy, L, L2, L3, sign=-1.0)

    return k


def _bending_block(EI: float, L: float, L2: float, L3: float, sign: float) -> np.ndarray:
    a = 12 * EI / L3
    b = sign * 6 * EI / L2
    c = 4 * EI / L
    d = 2 * EI / L
    return np.array([
        [ a,  b, -a,  b],
        [ b,  c, -b,  d],
        [-a, -b,  a, -b],
        [ b,  d, -b,  c],
    ], dtype=float)


def frame3d_transform(R: np.ndarray) -> np.ndarray:
    """12×12 transform from global to local DOFs: four copies of R on the diagonal."""
    T = np.zeros((12, 12), dtype=float)
    for block in range(4):
        s = slice(3 * block, 3 * block + 3)
        T[s, s] = R
    return T


def frame3d_global_stiffness(
    ni: Node,
    nj: Node,
    props: SectionProperties,
    element_id: str = '?',
    min_length: float = None,
) -> np.ndarray:
    """
    12×12 element stiffness in global coordinates.

    Parameters:
    -----------
    ni, nj : Node
        Start and end nodes (positions in m)
    props : SectionProperties
        SI material/section data
    element_id : str
        Used in error messages only

    Returns:
    --------
    np.ndarray
        Tᵀ k_local T, symmetric, units N/m, N, N·m/rad

    Raises:
    -------
    DegenerateElementError
        If the nodes coincide
    """
    L, direction = element_geometry(ni, nj, element_id, min_length)
    k_local = frame3d_local_stiffness(props.E, props.G, props.A, props.Iy, props.Iz, props.J, L)
    T = frame3d_transform(rotation_matrix(direction))
    return matmul(T.T, k_local, T)
