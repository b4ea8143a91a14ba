# framecheck/model.py
"""
MODEL RECORDS: Node, Element, Material, Section, Load, LoadCase, LoadCombination
================================================================================

These are the plain records the engine consumes. They arrive from whatever
store the application uses and are never mutated by an analysis run.

UNITS (engineering, as entered by the user):
--------------------------------------------
    Node coordinates ....... m
    Elastic/shear modulus .. GPa
    Strengths .............. MPa
    Density ................ kg/m³
    Area, shear areas ...... cm²
    Inertias, torsion ...... cm⁴
    Warping constant ....... cm⁶
    Section moduli ......... cm³
    Radii of gyration ...... cm
    Height/width/thickness . mm
    Point loads ............ kN (moments kNm)
    Distributed loads ...... kN/m

Conversion to SI happens in elements.SectionProperties; results are
converted back to engineering units in post.py.

AXIS CONVENTION:
----------------
Global Y is vertical. Section properties suffixed ``_y`` belong to the
MAJOR axis: bending about the member's local y axis, which for a horizontal
beam deflects the member vertically.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Tuple

from .errors import UnknownReferenceError


DOF_NAMES = ('ux', 'uy', 'uz', 'rx', 'ry', 'rz')
LOAD_DIRECTIONS = ('x', 'y', 'z', 'mx', 'my', 'mz')

ElementType = Literal['beam', 'column', 'brace', 'truss', 'plate', 'shell']
LoadType = Literal['point', 'distributed', 'moment', 'pressure', 'thermal']
LoadCaseType = Literal['dead', 'live', 'wind', 'earthquake', 'snow', 'thermal']
CombinationType = Literal['ultimate', 'serviceability']
LoadDirection = Literal['x', 'y', 'z', 'mx', 'my', 'mz']

# Element types handled by the line-element formulation
LINE_ELEMENT_TYPES = ('beam', 'column', 'brace', 'truss')

# Common restraint patterns
FIXED = (True, True, True, True, True, True)
PINNED = (True, True, True, False, False, False)
FREE = (False, False, False, False, False, False)


@dataclass(frozen=True)
class Node:
    """
    A joint in 3D space.

    restraints follows DOF_NAMES order: (ux, uy, uz, rx, ry, rz),
    True meaning the component is fixed.
    """
    id: str
    x: float
    y: float
    z: float = 0.0
    restraints: Tuple[bool, ...] = FREE

    def __post_init__(self):
        if len(self.restraints) != 6:
            raise ValueError(f"Node {self.id}: restraints must have 6 entries")
        object.__setattr__(self, 'restraints', tuple(bool(r) for r in self.restraints))

    @property
    def is_supported(self) -> bool:
        return any(self.restraints)


@dataclass(frozen=True)
class Element:
    """
    A line element between two nodes.

    Length is never stored: it is always computed from the node positions
    (see StructuralModel.element_length). releases and mesh_size are carried
    for the application but not used by the linear solver.
    """
    id: str
    start_node: str
    end_node: str
    material: str
    section: str
    type: ElementType = 'beam'
    releases: Tuple[str, str] = ('FFFFFF', 'FFFFFF')
    mesh_size: Optional[float] = None

    def __post_init__(self):
        if self.start_node == self.end_node:
            raise ValueError(f"Element {self.id} connects node {self.start_node} to itself")
        for code in self.releases:
            if len(code) != 6:
                raise ValueError(f"Element {self.id}: release codes must be 6 characters")


@dataclass(frozen=True)
class Material:
    """
    Material properties.

    shear_modulus may be omitted; it is then derived from E and ν.
    """
    id: str
    name: str
    elastic_modulus: float        # GPa
    yield_strength: float         # MPa
    ultimate_strength: float      # MPa
    poisson_ratio: float = 0.3
    shear_modulus: Optional[float] = None  # GPa
    density: float = 7850.0       # kg/m³
    thermal_expansion: float = 1.2e-5  # 1/°C

    def __post_init__(self):
        if self.elastic_modulus <= 0:
            raise ValueError(f"Material {self.id}: elastic modulus must be positive")
        if self.shear_modulus is not None and self.shear_modulus <= 0:
            raise ValueError(f"Material {self.id}: shear modulus must be positive")

    @property
    def G(self) -> float:
        """Shear modulus in GPa, derived as E / (2(1+ν)) when not given."""
        if self.shear_modulus is not None:
            return self.shear_modulus
        return self.elastic_modulus / (2.0 * (1.0 + self.poisson_ratio))


@dataclass(frozen=True)
class Section:
    """
    Cross-section properties (see module docstring for units).

    Radii of gyration default to sqrt(I/A). Every property that is given must
    be strictly positive.
    """
    id: str
    name: str
    area: float
    moment_of_inertia_y: float
    moment_of_inertia_z: float
    torsional_constant: float
    section_modulus_y: float
    section_modulus_z: float
    radius_of_gyration_y: Optional[float] = None
    radius_of_gyration_z: Optional[float] = None
    shear_area_y: Optional[float] = None
    shear_area_z: Optional[float] = None
    warping_constant: Optional[float] = None
    height: Optional[float] = None
    width: Optional[float] = None
    thickness: Optional[float] = None          # web
    flange_thickness: Optional[float] = None
    type: str = 'I-beam'

    def __post_init__(self):
        for name in _SECTION_GEOMETRY:
            value = getattr(self, name)
            if value is not None and not value > 0:
                raise ValueError(f"Section {self.id}: {name} must be strictly positive, got {value}")
        if self.radius_of_gyration_y is None:
            object.__setattr__(self, 'radius_of_gyration_y',
                               math.sqrt(self.moment_of_inertia_y / self.area))
        if self.radius_of_gyration_z is None:
            object.__setattr__(self, 'radius_of_gyration_z',
                               math.sqrt(self.moment_of_inertia_z / self.area))

    @property
    def depth(self) -> float:
        """Section height in mm, estimated as 2·Iy/Wy when not given."""
        if self.height is not None:
            return self.height
        return 2.0 * self.moment_of_inertia_y / self.section_modulus_y * 10.0


_SECTION_GEOMETRY = (
    'area', 'moment_of_inertia_y', 'moment_of_inertia_z', 'torsional_constant',
    'section_modulus_y', 'section_modulus_z', 'radius_of_gyration_y',
    'radius_of_gyration_z', 'shear_area_y', 'shear_area_z', 'warping_constant',
    'height', 'width', 'thickness', 'flange_thickness',
)


@dataclass(frozen=True)
class Load:
    """
    A load in one load case.

    Exactly one of node / element is set. Element loads use position (0-1
    along the element) for point loads; distributed loads act over the full
    length, varying linearly from magnitude to distribution_end when the
    latter is given (trapezoidal).
    """
    id: str
    type: LoadType
    load_case: str
    magnitude: float
    direction: LoadDirection
    node: Optional[str] = None
    element: Optional[str] = None
    position: float = 0.0
    distribution_end: Optional[float] = None

    def __post_init__(self):
        if (self.node is None) == (self.element is None):
            raise ValueError(f"Load {self.id}: exactly one of node or element must be set")
        if self.direction not in LOAD_DIRECTIONS:
            raise ValueError(f"Load {self.id}: unknown direction {self.direction!r}")
        if not 0.0 <= self.position <= 1.0:
            raise ValueError(f"Load {self.id}: position must lie in [0, 1]")

    @property
    def is_nodal(self) -> bool:
        return self.node is not None

    @property
    def direction_index(self) -> int:
        return LOAD_DIRECTIONS.index(self.direction)


@dataclass(frozen=True)
class LoadCase:
    id: str
    name: str = ''
    type: LoadCaseType = 'dead'
    factor: float = 1.0  # informational; combinations carry the applied factors


@dataclass(frozen=True)
class LoadCombination:
    """Weighted sum of load cases. Cases absent from factors weigh 0."""
    id: str
    factors: Mapping[str, float]
    name: str = ''
    type: CombinationType = 'ultimate'

    def factor_for(self, load_case_id: str) -> float:
        return float(self.factors.get(load_case_id, 0.0))


@dataclass
class StructuralModel:
    """
    Container for one project's model.

    Dictionaries keep insertion order, which fixes the DOF numbering
    (node-then-component).
    """
    nodes: Dict[str, Node] = field(default_factory=dict)
    elements: Dict[str, Element] = field(default_factory=dict)
    materials: Dict[str, Material] = field(default_factory=dict)
    sections: Dict[str, Section] = field(default_factory=dict)
    loads: Dict[str, Load] = field(default_factory=dict)
    load_cases: Dict[str, LoadCase] = field(default_factory=dict)
    load_combinations: Dict[str, LoadCombination] = field(default_factory=dict)

    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        return node

    def add_element(self, element: Element) -> Element:
        self.elements[element.id] = element
        return element

    def add_material(self, material: Material) -> Material:
        self.materials[material.id] = material
        return material

    def add_section(self, section: Section) -> Section:
        self.sections[section.id] = section
        return section

    def add_load(self, load: Load) -> Load:
        self.loads[load.id] = load
        return load

    def add_load_case(self, load_case: LoadCase) -> LoadCase:
        self.load_cases[load_case.id] = load_case
        return load_case

    def add_load_combination(self, combination: LoadCombination) -> LoadCombination:
        self.load_combinations[combination.id] = combination
        return combination

    def element_length(self, element_id: str) -> float:
        """Euclidean distance between the element's end nodes (m)."""
        element = self.elements[element_id]
        ni = self.nodes[element.start_node]
        nj = self.nodes[element.end_node]
        return math.sqrt((nj.x - ni.x) ** 2 + (nj.y - ni.y) ** 2 + (nj.z - ni.z) ** 2)

    def validate(self) -> None:
        """
        Check every cross-reference before any matrix work starts.

        Raises UnknownReferenceError for the first dangling reference found.
        """
        for element in self.elements.values():
            owner = f"Element {element.id}"
            for node_id in (element.start_node, element.end_node):
                if node_id not in self.nodes:
                    raise UnknownReferenceError(owner, 'node', node_id)
            if element.material not in self.materials:
                raise UnknownReferenceError(owner, 'material', element.material)
            if element.section not in self.sections:
                raise UnknownReferenceError(owner, 'section', element.section)

        for load in self.loads.values():
            owner = f"Load {load.id}"
            if load.node is not None and load.node not in self.nodes:
                raise UnknownReferenceError(owner, 'node', load.node)
            if load.element is not None and load.element not in self.elements:
                raise UnknownReferenceError(owner, 'element', load.element)
            if load.load_case not in self.load_cases:
                raise UnknownReferenceError(owner, 'load case', load.load_case)

        for combination in self.load_combinations.values():
            for case_id in combination.factors:
                if case_id not in self.load_cases:
                    raise UnknownReferenceError(
                        f"Load combination {combination.id}", 'load case', case_id
                    )
