# framecheck/post.py
# element results in engineering units, node results, summary tables

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from .checks.base import DesignForces
from .diagrams import ElementDiagram
from .model import StructuralModel

# SI → reporting units
TO_KN = 1e-3
TO_MM = 1e3


@dataclass(frozen=True)
class ElementAnalysisResult:
    """
    Analysis result of one element for one load combination.

    Series are sampled at equally spaced positions 0..L and are stored as
    tuples so a result is immutable and compares by value.

    Units: positions m, forces kN, moments kNm, displacements mm, stresses MPa.
    end_forces are the 12 local end forces [N, Vy, Vz, T, My, Mz] at i then j.
    stresses are [axial, shear_y, shear_z, torsion, bending_y, bending_z].
    """
    element_id: str
    combination_id: str
    positions: Tuple[float, ...]
    axial: Tuple[float, ...]
    shear_y: Tuple[float, ...]
    shear_z: Tuple[float, ...]
    torsion: Tuple[float, ...]
    moment_y: Tuple[float, ...]
    moment_z: Tuple[float, ...]
    displacements: Tuple[float, ...]
    max_moment: float
    max_shear: float
    max_displacement: float
    max_stress: float
    utilization_ratio: float
    safety_factor: float
    end_forces: Tuple[float, ...]
    stresses: Tuple[float, ...]


@dataclass(frozen=True)
class NodeResult:
    """Displacements (mm, rad) and support reactions (kN, kNm) of one node."""
    node_id: str
    combination_id: str
    displacement: Tuple[float, ...]
    reaction: Tuple[float, ...]


def _series(values: np.ndarray, scale: float = 1.0) -> Tuple[float, ...]:
    return tuple(float(v) * scale for v in values)


def _end_forces_to_kn(f_local: np.ndarray) -> Tuple[float, ...]:
    # Forces N → kN and moments N·m → kNm share the same factor
    return tuple(float(v) * TO_KN for v in f_local)


def normal_stress(diagram: ElementDiagram, area: float, wy: float, wz: float) -> np.ndarray:
    """
    |N|/A + |My|/Wy + |Mz|/Wz at each station (MPa).

    A in cm², W in cm³; N in N and M in N·m as stored in the diagram.
    """
    return (
        np.abs(diagram.axial) / (100.0 * area)
        + np.abs(diagram.moment_y) / wy
        + np.abs(diagram.moment_z) / wz
    )


def element_result(
    model: StructuralModel,
    element_id: str,
    combination_id: str,
    diagram: ElementDiagram,
    f_local: np.ndarray,
    stresses: np.ndarray,
) -> ElementAnalysisResult:
    """Convert one element's SI diagrams into an ElementAnalysisResult."""
    element = model.elements[element_id]
    section = model.sections[element.section]
    material = model.materials[element.material]

    moment = np.sqrt(diagram.moment_y**2 + diagram.moment_z**2)
    shear = np.sqrt(diagram.shear_y**2 + diagram.shear_z**2)
    sigma = normal_stress(diagram, section.area, section.section_modulus_y, section.section_modulus_z)

    max_stress = float(np.max(sigma))
    utilization = max_stress / material.yield_strength
    safety_factor = 1.0 / utilization if utilization > 0 else math.inf

    return ElementAnalysisResult(
        element_id=element_id,
        combination_id=combination_id,
        positions=_series(diagram.positions),
        axial=_series(diagram.axial, TO_KN),
        shear_y=_series(diagram.shear_y, TO_KN),
        shear_z=_series(diagram.shear_z, TO_KN),
        torsion=_series(diagram.torsion, TO_KN),
        moment_y=_series(diagram.moment_y, TO_KN),
        moment_z=_series(diagram.moment_z, TO_KN),
        displacements=_series(diagram.deflection, TO_MM),
        max_moment=float(np.max(moment)) * TO_KN,
        max_shear=float(np.max(shear)) * TO_KN,
        max_displacement=float(np.max(diagram.deflection)) * TO_MM,
        max_stress=max_stress,
        utilization_ratio=utilization,
        safety_factor=safety_factor,
        end_forces=_end_forces_to_kn(f_local),
        stresses=tuple(float(s) for s in stresses),
    )


def element_results(model: StructuralModel, static) -> List[ElementAnalysisResult]:
    """One ElementAnalysisResult per analyzed element, in model order."""
    return [
        element_result(
            model,
            element_id,
            static.combination_id,
            diagram,
            static.end_forces_local[element_id],
            static.stresses[element_id],
        )
        for element_id, diagram in static.diagrams.items()
    ]


def node_results(static) -> List[NodeResult]:
    """Displacements and reactions per node, translations in mm."""
    results = []
    for node_id, d in static.displacements.items():
        displacement = tuple(float(v) * TO_MM for v in d[:3]) + tuple(float(v) for v in d[3:])
        reaction = static.reactions.get(node_id)
        if reaction is None:
            reaction = np.zeros(6)
        results.append(NodeResult(
            node_id=node_id,
            combination_id=static.combination_id,
            displacement=displacement,
            reaction=tuple(float(v) * TO_KN for v in reaction),
        ))
    return results


def results_to_frame(results: Sequence[ElementAnalysisResult]) -> pd.DataFrame:
    """
    Summary table, one row per element result.

    Columns: element_id, combination_id, max_moment, max_shear,
    max_displacement, max_stress, utilization_ratio, safety_factor.
    """
    columns = [
        'element_id', 'combination_id', 'max_moment', 'max_shear',
        'max_displacement', 'max_stress', 'utilization_ratio', 'safety_factor',
    ]
    rows = [{name: getattr(r, name) for name in columns} for r in results]
    return pd.DataFrame(rows, columns=columns)


def stations_to_frame(result: ElementAnalysisResult) -> pd.DataFrame:
    """Per-station diagram table of one element result."""
    return pd.DataFrame({
        'position': result.positions,
        'axial': result.axial,
        'shear_y': result.shear_y,
        'shear_z': result.shear_z,
        'torsion': result.torsion,
        'moment_y': result.moment_y,
        'moment_z': result.moment_z,
        'displacement': result.displacements,
    })


def design_forces(result: ElementAnalysisResult) -> DesignForces:
    """
    Design forces of an element: the governing value of each action.

    Axial keeps its sign (+tension / -compression) at the station with the
    largest magnitude; the other actions are maximum magnitudes.
    """
    axial = max(result.axial, key=abs) if result.axial else 0.0
    return DesignForces(
        axial=axial,
        shear_y=max((abs(v) for v in result.shear_y), default=0.0),
        shear_z=max((abs(v) for v in result.shear_z), default=0.0),
        moment_y=max((abs(v) for v in result.moment_y), default=0.0),
        moment_z=max((abs(v) for v in result.moment_z), default=0.0),
        torsion=max((abs(v) for v in result.torsion), default=0.0),
    )
