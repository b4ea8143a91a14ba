# framecheck/loads.py - Load vector for one load combination
"""
LOADS: Nodal Loads, Member Loads and Equivalent Nodal Loads
===========================================================

This module turns the Load records of a model into the load vector of
K·U = F for one load combination.

NODAL LOADS:
------------
Added directly to the DOF of their direction, scaled by the load's
effective factor (combination factor × load-case scale factor). A nodal
load on a restrained DOF never reaches the solved system; it is kept in
the unreduced vector so the reactions can account for it.

ELEMENT LOADS:
--------------
Distributed (uniform or trapezoidal, over the full length) and point loads
on elements are first resolved into LOCAL components (the global direction
rotated by R), then converted into equivalent nodal loads:

    'consistent'  fixed-end forces AND moments of a fully fixed beam
                  e.g. uniform q: [qL/2, qL²/12, qL/2, -qL²/12]
    'lumped'      half of the total load to each end node, no moments
                  (point loads split by the lever rule)

The local equivalent vector is kept per element: force recovery subtracts
it from k·u to get the true member end forces.

Element loads of type moment/pressure/thermal are not handled by the line
element and are skipped with a warning.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

from .config import CONFIG, AnalysisConfig
from .kernel.assemble import assemble_global_F
from .kernel.dof import DOFMap
from .model import Load, LoadCombination, StructuralModel

logger = logging.getLogger(__name__)

KN = 1000.0  # kN → N (kNm → N·m, kN/m → N/m)

# Element load types the line element can convert
MEMBER_LOAD_TYPES = ('point', 'distributed')


@dataclass(frozen=True)
class MemberLoad:
    """
    An element load resolved into local components, in SI units and already
    scaled by its combination factor.

    For kind='distributed' the intensity varies linearly from q_start to q_end
    (N/m, local x/y/z). For kind='point', force (N, local x/y/z) acts at
    distance a (m) from the start node.
    """
    load_id: str
    kind: str
    q_start: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    q_end: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    force: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    a: float = 0.0

    def total(self, L: float) -> np.ndarray:
        """Resultant force vector in local coordinates (N)."""
        if self.kind == 'point':
            return np.array(self.force)
        return (np.array(self.q_start) + np.array(self.q_end)) * L / 2.0


@dataclass
class LoadSet:
    """
    All loads of one combination, ready for the solver.

    F          reduced load vector (free DOFs only)
    nodal      unreduced 6·N vector of the direct nodal loads
    member     element_id → MemberLoads on that element
    f_eq_local element_id → local 12-vector of equivalent nodal loads
    """
    F: np.ndarray
    nodal: np.ndarray
    member: Dict[str, List[MemberLoad]] = field(default_factory=dict)
    f_eq_local: Dict[str, np.ndarray] = field(default_factory=dict)


def fixed_end_forces(L: float, load: MemberLoad) -> np.ndarray:
    """
    Equivalent nodal loads of a member load on a fully fixed beam (local 12-vector).

    Uses the standard fixed-end results, per local component:

    Transverse, trapezoid q1 → q2 (split into uniform q1 + triangle Δ = q2 - q1):
        F_i = q1·L/2 + 3ΔL/20      M_i =   q1·L²/12 + ΔL²/30
        F_j = q1·L/2 + 7ΔL/20      M_j = -(q1·L²/12 + ΔL²/20)

    Transverse, point P at a (b = L - a):
        F_i = P·b²(3a + b)/L³      M_i =  P·a·b²/L²
        F_j = P·a²(a + 3b)/L³      M_j = -P·a²·b/L²

    Axial components are shared between the ends in the same way as a bar
    fixed at both ends. The moment signs above apply to bending about local z;
    bending about local y uses the opposite sign.
    """
    f = np.zeros(12, dtype=float)

    if load.kind == 'point':
        P = np.array(load.force)
        a = load.a
        b = L - a
        # Axial (lever rule)
        f[0] += P[0] * b / L
        f[6] += P[0] * a / L
        # Transverse y and z
        for comp, rot, sign in ((1, 5, 1.0), (2, 4, -1.0)):
            Pc = P[comp]
            f[comp] += Pc * b * b * (3 * a + b) / L**3
            f[comp + 6] += Pc * a * a * (a + 3 * b) / L**3
            f[rot] += sign * Pc * a * b * b / L**2
            f[rot + 6] -= sign * Pc * a * a * b / L**2
        return f

    q1 = np.array(load.q_start)
    dq = np.array(load.q_end) - q1

    # Axial: uniform q·L/2 each end, triangle ΔL/6 and ΔL/3
    f[0] += q1[0] * L / 2 + dq[0] * L / 6
    f[6] += q1[0] * L / 2 + dq[0] * L / 3

    for comp, rot, sign in ((1, 5, 1.0), (2, 4, -1.0)):
        f[comp] += q1[comp] * L / 2 + 3 * dq[comp] * L / 20
        f[comp + 6] += q1[comp] * L / 2 + 7 * dq[comp] * L / 20
        f[rot] += sign * (q1[comp] * L**2 / 12 + dq[comp] * L**2 / 30)
        f[rot + 6] -= sign * (q1[comp] * L**2 / 12 + dq[comp] * L**2 / 20)

    return f


def lumped_nodal_loads(L: float, load: MemberLoad) -> np.ndarray:
    """
    Simplified equivalent loads: forces only, no end moments (local 12-vector).

    A distributed load puts half of its total on each end node. A point load
    is split by the lever rule so the pair stays statically equivalent.
    """
    f = np.zeros(12, dtype=float)
    if load.kind == 'point':
        share_i = (L - load.a) / L
    else:
        share_i = 0.5
    total = load.total(L)
    f[0:3] = share_i * total
    f[6:9] = (1.0 - share_i) * total
    return f


def resolve_member_load(load: Load, L: float, R: np.ndarray, factor: float) -> MemberLoad:
    """Rotate an element Load (global direction, kN units) into a local MemberLoad."""
    unit = np.zeros(3)
    unit[load.direction_index] = 1.0
    local_dir = R @ unit

    if load.type == 'point':
        force = local_dir * load.magnitude * KN * factor
        return MemberLoad(
            load_id=load.id,
            kind='point',
            force=tuple(force),
            a=load.position * L,
        )

    end = load.magnitude if load.distribution_end is None else load.distribution_end
    q_start = local_dir * load.magnitude * KN * factor
    q_end = local_dir * end * KN * factor
    return MemberLoad(
        load_id=load.id,
        kind='distributed',
        q_start=tuple(q_start),
        q_end=tuple(q_end),
    )


def equivalent_nodal_loads(
    load: Load,
    L: float,
    R: np.ndarray,
    factor: float,
    config: AnalysisConfig = None,
) -> Tuple[np.ndarray, np.ndarray, MemberLoad]:
    """
    Equivalent nodal loads of one element load.

    Returns:
    --------
    f_global : np.ndarray
        12-vector to scatter into the global load vector
    f_local : np.ndarray
        Same loads in local coordinates, subtracted again during force recovery
    member_load : MemberLoad
        The load resolved into local components, used for the diagrams
    """
    config = config or CONFIG
    member_load = resolve_member_load(load, L, R, factor)
    if config.distributed_load_model == 'consistent':
        f_local = fixed_end_forces(L, member_load)
    else:
        f_local = lumped_nodal_loads(L, member_load)
    return _to_global(R, f_local), f_local, member_load


def effective_factor(combination: LoadCombination, load: Load) -> float:
    """
    Factor applied to a load in a combination (0 when its case is absent).

    Only the combination factor scales the load; LoadCase.factor is carried
    as metadata and is not applied on top of it.
    """
    return combination.factor_for(load.load_case)


def build_load_vectors(
    model: StructuralModel,
    combination: LoadCombination,
    dof_map: DOFMap,
    geometry: Dict[str, Tuple[float, np.ndarray]],
    config: AnalysisConfig = None,
) -> LoadSet:
    """
    Build the load vectors of one combination.

    Parameters:
    -----------
    model : StructuralModel
        Validated model
    combination : LoadCombination
        Active combination
    dof_map : DOFMap
        Equation numbering of this run
    geometry : Dict[str, Tuple[float, np.ndarray]]
        element_id → (L, R) from the stiffness step
    config : AnalysisConfig
        Selects the consistent or lumped element load model

    Returns:
    --------
    LoadSet
    """
    config = config or CONFIG

    nodal = np.zeros(dof_map.n_total, dtype=float)
    load_set = LoadSet(F=np.zeros(dof_map.n_free), nodal=nodal)
    contributions = []

    for load in model.loads.values():
        factor = effective_factor(combination, load)
        if factor == 0.0:
            continue

        if load.is_nodal:
            nodal[dof_map.full_idx(load.node, load.direction_index)] += load.magnitude * KN * factor
            continue

        if load.type not in MEMBER_LOAD_TYPES or load.direction_index > 2:
            logger.warning(
                "Skipping %s load %s on element %s (direction %s): not supported on line elements",
                load.type, load.id, load.element, load.direction,
            )
            continue

        element = model.elements[load.element]
        if element.id not in geometry:
            logger.warning("Skipping load %s: element %s is not a line element", load.id, element.id)
            continue
        L, R = geometry[element.id]
        _, f_local, member_load = equivalent_nodal_loads(load, L, R, factor, config)
        load_set.member.setdefault(element.id, []).append(member_load)
        load_set.f_eq_local[element.id] = load_set.f_eq_local.get(element.id, 0.0) + f_local

    # Equivalent element loads, rotated to global and scattered
    for element_id, f_local in load_set.f_eq_local.items():
        element = model.elements[element_id]
        _, R = geometry[element_id]
        f_global = _to_global(R, f_local)
        node_ids = [element.start_node, element.end_node]
        contributions.append((dof_map.element_dof_map(node_ids), f_global))

    # Direct nodal loads on free DOFs
    for node_id in model.nodes:
        full = dof_map.full_element_dof_map([node_id])
        contributions.append((dof_map.node_dofs(node_id), nodal[full]))

    load_set.F = assemble_global_F(dof_map.n_free, contributions)
    logger.debug(
        "Combination %s: %d member loads on %d elements, |F| = %.3e N",
        combination.id, sum(len(v) for v in load_set.member.values()),
        len(load_set.member), float(np.linalg.norm(load_set.F)),
    )
    return load_set


def _to_global(R: np.ndarray, f_local: np.ndarray) -> np.ndarray:
    f_global = np.empty(12, dtype=float)
    for block in range(4):
        s = slice(3 * block, 3 * block + 3)
        f_global[s] = R.T @ f_local[s]
    return f_global
