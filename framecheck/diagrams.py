# framecheck/diagrams.py
"""
FORCE DIAGRAM COMPUTATIONS
==========================

This module samples internal forces and the deflected shape at equally
spaced stations along a 3D frame element (21 by default, x = 0..L).

INTERNAL FORCES (statics of the free body [0, x]):
--------------------------------------------------
Starting from the local end forces at node i (forces the node exerts on
the element) and the member loads acting on [0, x]:

    N(x)  = -(Fx_i + ∫qx)                   tension positive
    Vy(x) =   Fy_i + ∫qy
    Vz(x) =   Fz_i + ∫qz
    T(x)  = -Mx_i
    Mz(x) = -Mz_i + Fy_i·x + ∫qy·(x - s) ds
    My(x) = -My_i - Fz_i·x - ∫qz·(x - s) ds

For a simply supported beam with UDL w this gives |M| = wL²/8 at midspan.

DEFLECTED SHAPE:
----------------
Homogeneous part from the end displacements:
    axial       linear interpolation of u
    transverse  Hermite cubics, v uses θz, w uses -θy (dw/dx = -θy)

Particular part (consistent load model only): the deflection of the loaded
span with both ends fixed, e.g. q·x²(L-x)²/(24EI) for a uniform load. The
sum is exact for Euler-Bernoulli beams under the supported member loads.
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple

from .elements import SectionProperties
from .loads import MemberLoad


@dataclass
class ElementDiagram:
    """Sampled diagrams of one element, SI units, local axes."""
    positions: np.ndarray      # m
    axial: np.ndarray          # N, tension positive
    shear_y: np.ndarray        # N
    shear_z: np.ndarray        # N
    torsion: np.ndarray        # N·m
    moment_y: np.ndarray       # N·m (major axis)
    moment_z: np.ndarray       # N·m
    u: np.ndarray              # m, local x
    v: np.ndarray              # m, local y
    w: np.ndarray              # m, local z

    @property
    def deflection(self) -> np.ndarray:
        """Magnitude of the translational displacement at each station (m)."""
        return np.sqrt(self.u**2 + self.v**2 + self.w**2)


def hermite_shape_functions(xi):
    """
    Hermite cubic shape functions on 0 ≤ xi ≤ 1.

    v(xi) = N1*v_i + N2*theta_i*L + N3*v_j + N4*theta_j*L
    """
    N1 = 1 - 3*xi**2 + 2*xi**3
    N2 = xi - 2*xi**2 + xi**3
    N3 = 3*xi**2 - 2*xi**3
    N4 = -xi**2 + xi**3
    return N1, N2, N3, N4


def stations(L: float, n_stations: int = 21) -> np.ndarray:
    """Equally spaced sampling positions 0..L."""
    return np.linspace(0.0, L, n_stations)


def _load_integrals(x: np.ndarray, L: float, load: MemberLoad) -> Tuple[np.ndarray, np.ndarray]:
    """
    ∫q ds and ∫q·(x - s) ds over [0, x] for each local component.

    Returns two arrays of shape (3, n): resultant and first moment.
    """
    if load.kind == 'point':
        P = np.array(load.force)[:, None]
        past = (x >= load.a).astype(float)
        return P * past, P * past * (x - load.a)

    q1 = np.array(load.q_start)[:, None]
    dq = (np.array(load.q_end) - np.array(load.q_start))[:, None]
    force = q1 * x + dq * x**2 / (2 * L)
    moment = q1 * x**2 / 2 + dq * x**3 / (6 * L)
    return force, moment


def _fixed_fixed_deflection(x: np.ndarray, L: float, load: MemberLoad,
                            EA: float, EIz: float, EIy: float) -> np.ndarray:
    """Deflection (3, n) of a span with both ends fully fixed under one member load."""
    out = np.zeros((3, len(x)))
    stiffness = (EA, EIz, EIy)

    if load.kind == 'point':
        a = load.a
        b = L - a
        left = x <= a
        xr = L - x
        for comp in range(3):
            P = load.force[comp]
            if P == 0.0:
                continue
            if comp == 0:
                out[0] = np.where(left, P * b * x / (EA * L), P * a * xr / (EA * L))
            else:
                EI = stiffness[comp]
                out[comp] = np.where(
                    left,
                    P * b**2 * x**2 * (3 * a * L - x * (3 * a + b)) / (6 * EI * L**3),
                    P * a**2 * xr**2 * (3 * b * L - xr * (3 * b + a)) / (6 * EI * L**3),
                )
        return out

    q1 = np.array(load.q_start)
    dq = np.array(load.q_end) - q1

    # Axial bar: EA·u'' = -q
    out[0] = q1[0] * x * (L - x) / (2 * EA) + dq[0] * x * (L**2 - x**2) / (6 * EA * L)

    # Bending: EI·w'''' = q
    for comp in (1, 2):
        EI = stiffness[comp]
        out[comp] = (
            q1[comp] * x**2 * (L - x)**2 / (24 * EI)
            + dq[comp] * x**2 * (L - x)**2 * (x + 2 * L) / (120 * EI * L)
        )
    return out


def sample_element(
    L: float,
    f_local: np.ndarray,
    d_local: np.ndarray,
    member_loads: Sequence[MemberLoad],
    props: SectionProperties,
    n_stations: int = 21,
    include_particular: bool = True,
) -> ElementDiagram:
    """
    Internal forces and displacements at n_stations points along an element.

    Parameters:
    -----------
    L : float
        Element length (m)
    f_local : np.ndarray
        Local end forces (12,), N and N·m, already net of equivalent loads
    d_local : np.ndarray
        Local end displacements (12,), m and rad
    member_loads : Sequence[MemberLoad]
        Loads acting along the element
    props : SectionProperties
        SI section data (for the particular deflections)
    include_particular : bool
        Add the fixed-fixed span deflection of each member load

    Returns:
    --------
    ElementDiagram
    """
    x = stations(L, n_stations)

    q_force = np.zeros((3, n_stations))
    q_moment = np.zeros((3, n_stations))
    for load in member_loads:
        force, moment = _load_integrals(x, L, load)
        q_force += force
        q_moment += moment

    axial = -(f_local[0] + q_force[0])
    shear_y = f_local[1] + q_force[1]
    shear_z = f_local[2] + q_force[2]
    torsion = np.full(n_stations, -f_local[3])
    moment_z = -f_local[5] + f_local[1] * x + q_moment[1]
    moment_y = -f_local[4] - f_local[2] * x - q_moment[2]

    # Homogeneous deflection from the end displacements
    xi = x / L
    N1, N2, N3, N4 = hermite_shape_functions(xi)
    u = d_local[0] + xi * (d_local[6] - d_local[0])
    v = N1 * d_local[1] + N2 * d_local[5] * L + N3 * d_local[7] + N4 * d_local[11] * L
    w = N1 * d_local[2] - N2 * d_local[4] * L + N3 * d_local[8] - N4 * d_local[10] * L

    if include_particular:
        EA = props.E * props.A
        EIz = props.E * props.Iz
        EIy = props.E * props.Iy
        for load in member_loads:
            extra = _fixed_fixed_deflection(x, L, load, EA, EIz, EIy)
            u = u + extra[0]
            v = v + extra[1]
            w = w + extra[2]

    return ElementDiagram(
        positions=x,
        axial=axial,
        shear_y=shear_y,
        shear_z=shear_z,
        torsion=torsion,
        moment_y=moment_y,
        moment_z=moment_z,
        u=u,
        v=v,
        w=w,
    )

