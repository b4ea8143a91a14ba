# framecheck/analysis.py
"""
STATIC ANALYSIS: K·U = F for One Load Combination
=================================================

PURPOSE:
--------
This module drives a linear-static run end to end:

    UNBUILT ──assemble──► ASSEMBLED ──solve──► SOLVED ──extract──► RESULTS_EXTRACTED

Every call to StaticAnalysis.run() builds a fresh Workspace (DOF map,
stiffness matrix, load vector, solution). Nothing is reused between calls,
so two runs never see each other's matrices and a topology change between
runs cannot leave stale state behind.

WHAT GETS RECOVERED:
--------------------
- Nodal displacements: 6 components per node, zero at restrained DOFs
- Element end forces:  f = k·u - f_eq   (global and local)
  using the SAME element stiffness that went into K, minus the equivalent
  nodal loads of any member loads on the element
- Stresses:            [axial, shear_y, shear_z, torsion, bending_y, bending_z]
  axial = |N|/A, bending = |M|/W, shear and torsion are not computed (0)
- Reactions:           Σ element end forces - applied nodal loads,
  reported at restrained DOFs only
- Diagrams:            internal forces and deflections at n_stations points

USAGE:
------
    analysis = StaticAnalysis(model)
    results = analysis.run('ULS1')
    results.displacements['B']       # → array of 6 (m, rad)
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .config import CONFIG, AnalysisConfig
from .diagrams import ElementDiagram, sample_element
from .elements import (
    SectionProperties,
    element_geometry,
    frame3d_local_stiffness,
    frame3d_transform,
    rotation_matrix,
)
from .errors import (
    ModelTooLargeError,
    SingularSystemError,
    UnknownLoadCombinationError,
)
from .kernel import DOFMap, assemble_global_K, matmul, solve_linear
from .loads import LoadSet, build_load_vectors
from .model import LINE_ELEMENT_TYPES, StructuralModel
from .post import ElementAnalysisResult, element_results

logger = logging.getLogger(__name__)


class AnalysisState(enum.Enum):
    UNBUILT = "unbuilt"
    ASSEMBLED = "assembled"
    SOLVED = "solved"
    RESULTS_EXTRACTED = "results_extracted"


@dataclass
class ElementData:
    """Per-element quantities computed once during assembly."""
    L: float
    R: np.ndarray
    T: np.ndarray
    k_local: np.ndarray
    props: SectionProperties
    node_ids: Tuple[str, str]


@dataclass
class Workspace:
    """Mutable working state of exactly one analysis run."""
    combination_id: str
    state: AnalysisState = AnalysisState.UNBUILT
    dof_map: Optional[DOFMap] = None
    K: Optional[np.ndarray] = None
    loads: Optional[LoadSet] = None
    U: Optional[np.ndarray] = None
    elements: Dict[str, ElementData] = field(default_factory=dict)

    def expect(self, expected: AnalysisState) -> None:
        if self.state is not expected:
            raise RuntimeError(
                f"Workspace for {self.combination_id} is {self.state.value}, "
                f"expected {expected.value}"
            )


@dataclass
class StaticResults:
    """
    Raw output of one run, SI units (m, rad, N, N·m) except stresses (MPa).

    Attributes:
    -----------
    displacements : Dict[str, np.ndarray]
        node_id → 6 displacement components
    reactions : Dict[str, np.ndarray]
        supported node_id → 6 reaction components (0 where the DOF is free)
    end_forces_global / end_forces_local : Dict[str, np.ndarray]
        element_id → 12 end forces acting on the element
    stresses : Dict[str, np.ndarray]
        element_id → [axial, shear_y, shear_z, torsion, bending_y, bending_z]
    diagrams : Dict[str, ElementDiagram]
        element_id → sampled internal forces and deflections
    """
    combination_id: str
    n_free: int
    displacements: Dict[str, np.ndarray] = field(default_factory=dict)
    reactions: Dict[str, np.ndarray] = field(default_factory=dict)
    end_forces_global: Dict[str, np.ndarray] = field(default_factory=dict)
    end_forces_local: Dict[str, np.ndarray] = field(default_factory=dict)
    stresses: Dict[str, np.ndarray] = field(default_factory=dict)
    diagrams: Dict[str, ElementDiagram] = field(default_factory=dict)


class StaticAnalysis:
    """Linear-static solver for one StructuralModel."""

    def __init__(self, model: StructuralModel, config: AnalysisConfig = None):
        self.model = model
        self.config = config or CONFIG

    def run(self, combination_id: str) -> StaticResults:
        """
        Assemble, solve and extract results for one load combination.

        Raises:
            UnknownLoadCombinationError: combination_id is not registered
            UnknownReferenceError: a record points at a missing record
            ModelTooLargeError: free DOFs exceed config.max_dofs
            DegenerateElementError: an element has (near) zero length
            SingularSystemError: the structure has a rigid-body mode
        """
        if combination_id not in self.model.load_combinations:
            raise UnknownLoadCombinationError(combination_id)
        self.model.validate()

        workspace = Workspace(combination_id)
        self.assemble(workspace)
        self.solve(workspace)
        results = self.extract(workspace)

        logger.info(
            "Combination %s solved: %d free DOFs, %d elements",
            combination_id, workspace.dof_map.n_free, len(workspace.elements),
        )
        return results

    def assemble(self, workspace: Workspace) -> None:
        """Build the DOF map, the reduced K and the load vector."""
        workspace.expect(AnalysisState.UNBUILT)
        model = self.model
        combination = model.load_combinations[workspace.combination_id]

        dof_map = DOFMap.from_nodes(model.nodes.values())
        if dof_map.n_free > self.config.max_dofs:
            raise ModelTooLargeError(dof_map.n_free, self.config.max_dofs)

        logger.info(
            "Analyzing combination %s: %d nodes, %d elements, %d free DOFs",
            combination.id, len(model.nodes), len(model.elements), dof_map.n_free,
        )

        contributions = []
        geometry = {}
        for element in model.elements.values():
            if element.type not in LINE_ELEMENT_TYPES:
                logger.warning(
                    "Element %s of type %s is not a line element and is not analyzed",
                    element.id, element.type,
                )
                continue

            ni = model.nodes[element.start_node]
            nj = model.nodes[element.end_node]
            L, direction = element_geometry(ni, nj, element.id, self.config.min_element_length)
            R = rotation_matrix(direction)
            T = frame3d_transform(R)
            props = SectionProperties.from_records(
                model.materials[element.material], model.sections[element.section]
            )
            k_local = frame3d_local_stiffness(props.E, props.G, props.A, props.Iy, props.Iz, props.J, L)

            node_ids = (element.start_node, element.end_node)
            workspace.elements[element.id] = ElementData(L, R, T, k_local, props, node_ids)
            geometry[element.id] = (L, R)
            contributions.append((dof_map.element_dof_map(list(node_ids)), matmul(T.T, k_local, T)))

        workspace.dof_map = dof_map
        workspace.K = assemble_global_K(dof_map.n_free, contributions)
        workspace.loads = build_load_vectors(model, combination, dof_map, geometry, self.config)
        logger.debug("Assembled K %s for combination %s", workspace.K.shape, combination.id)
        workspace.state = AnalysisState.ASSEMBLED

    def solve(self, workspace: Workspace) -> None:
        """Solve the reduced system, naming the offending DOF when it is singular."""
        workspace.expect(AnalysisState.ASSEMBLED)
        try:
            workspace.U = solve_linear(workspace.K, workspace.loads.F, self.config.pivot_tolerance)
        except SingularSystemError as exc:
            node_id, component = workspace.dof_map.locate(exc.equation)
            raise SingularSystemError(exc.equation, exc.pivot, node_id, component) from exc
        workspace.state = AnalysisState.SOLVED

    def extract(self, workspace: Workspace) -> StaticResults:
        """Displacements, end forces, stresses, reactions and diagrams."""
        workspace.expect(AnalysisState.SOLVED)
        dof_map = workspace.dof_map
        load_set = workspace.loads
        results = StaticResults(combination_id=workspace.combination_id, n_free=dof_map.n_free)

        # Unreduced displacement vector, zero at restrained DOFs
        U_full = np.zeros(dof_map.n_total, dtype=float)
        for node_id in self.model.nodes:
            for local_dof, eq in enumerate(dof_map.node_dofs(node_id)):
                if eq >= 0:
                    U_full[dof_map.full_idx(node_id, local_dof)] = workspace.U[eq]
            full = dof_map.full_element_dof_map([node_id])
            results.displacements[node_id] = U_full[full].copy()

        nodal_forces = np.zeros(dof_map.n_total, dtype=float)
        include_particular = self.config.distributed_load_model == 'consistent'

        for element_id, data in workspace.elements.items():
            full = dof_map.full_element_dof_map(list(data.node_ids))
            d_local = data.T @ U_full[full]

            f_local = data.k_local @ d_local
            f_eq = load_set.f_eq_local.get(element_id)
            if f_eq is not None:
                f_local = f_local - f_eq
            f_global = data.T.T @ f_local

            nodal_forces[full] += f_global
            results.end_forces_local[element_id] = f_local
            results.end_forces_global[element_id] = f_global
            results.stresses[element_id] = end_stresses(f_local, self.model, element_id)
            results.diagrams[element_id] = sample_element(
                data.L, f_local, d_local,
                load_set.member.get(element_id, []),
                data.props,
                n_stations=self.config.n_stations,
                include_particular=include_particular,
            )

        # Reactions: what the supports must supply to balance the node
        reaction_full = nodal_forces - load_set.nodal
        for node_id, node in self.model.nodes.items():
            if not node.is_supported:
                continue
            full = dof_map.full_element_dof_map([node_id])
            mask = np.array(node.restraints, dtype=float)
            results.reactions[node_id] = reaction_full[full] * mask

        workspace.state = AnalysisState.RESULTS_EXTRACTED
        return results


def end_stresses(f_local: np.ndarray, model: StructuralModel, element_id: str) -> np.ndarray:
    """
    Stresses (MPa) from local end forces, worst of the two ends.

    With A in cm² and W in cm³: N[N]/(100·A) and M[N·m]/W are both MPa.
    """
    section = model.sections[model.elements[element_id].section]
    axial = max(abs(f_local[0]), abs(f_local[6])) / (100.0 * section.area)
    bending_y = max(abs(f_local[4]), abs(f_local[10])) / section.section_modulus_y
    bending_z = max(abs(f_local[5]), abs(f_local[11])) / section.section_modulus_z
    return np.array([axial, 0.0, 0.0, 0.0, bending_y, bending_z])


def analyze_static(
    model: StructuralModel,
    combination_id: str,
    config: AnalysisConfig = None,
) -> StaticResults:
    """Run one combination and return the raw SI results."""
    return StaticAnalysis(model, config).run(combination_id)


def analyze(
    model: StructuralModel,
    combination_id: str,
    config: AnalysisConfig = None,
) -> List[ElementAnalysisResult]:
    """
    Run one combination and return one ElementAnalysisResult per element.

    This is the main entry point: results are in engineering units (kN, kNm,
    mm, MPa) and sampled at config.n_stations points along each element.
    """
    static = analyze_static(model, combination_id, config)
    return element_results(model, static)
