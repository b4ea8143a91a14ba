# framecheck/kernel/dof.py
"""
DOF MAP: Free-DOF Numbering with Restrained DOFs Eliminated
===========================================================

PURPOSE:
--------
This module maps (node_id, local_dof) to an equation number in the reduced
system K·U = F. Restrained DOFs never get an equation: they map to the
RESTRAINED sentinel and are skipped during assembly, which enforces zero
displacement there without a separate boundary-condition step.

    3D Frame:  6 DOF/node (ux, uy, uz, rx, ry, rz)

Free DOFs are numbered contiguously in node-then-component order:

    node A (fixed)       [-1, -1, -1, -1, -1, -1]
    node B (free)        [ 0,  1,  2,  3,  4,  5]
    node C (pinned)      [-1, -1, -1,  6,  7,  8]

USAGE:
------
    dof = DOFMap.from_nodes(model.nodes.values())
    dof.idx('B', 1)                 # → 1
    dof.element_dof_map(['A', 'B']) # → 12 entries, -1 where restrained
    dof.locate(7)                   # → ('C', 'ry')
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from ..model import DOF_NAMES, Node

DOF_PER_NODE = 6
RESTRAINED = -1


@dataclass
class DOFMap:
    """
    Equation numbering for one analysis run.

    Built once from the node restraints and never mutated afterwards.

    Attributes:
    -----------
    dofs : Dict[str, List[int]]
        node_id → 6 equation numbers (RESTRAINED where fixed)
    n_free : int
        Size of the reduced system
    """
    dofs: Dict[str, List[int]] = field(default_factory=dict)
    n_free: int = 0
    _owners: List[Tuple[str, int]] = field(default_factory=list, repr=False)
    _positions: Dict[str, int] = field(default_factory=dict, repr=False)

    @classmethod
    def from_nodes(cls, nodes: Iterable[Node]) -> 'DOFMap':
        dof_map = cls()
        for node in nodes:
            numbers = []
            for local_dof, fixed in enumerate(node.restraints):
                if fixed:
                    numbers.append(RESTRAINED)
                else:
                    numbers.append(dof_map.n_free)
                    dof_map._owners.append((node.id, local_dof))
                    dof_map.n_free += 1
            dof_map._positions[node.id] = len(dof_map.dofs)
            dof_map.dofs[node.id] = numbers
        return dof_map

    @property
    def n_nodes(self) -> int:
        return len(self.dofs)

    def idx(self, node_id: str, local_dof: int) -> int:
        """Equation number of a node's local DOF, or RESTRAINED."""
        return self.dofs[node_id][local_dof]

    def is_free(self, node_id: str, local_dof: int) -> bool:
        return self.dofs[node_id][local_dof] != RESTRAINED

    def node_dofs(self, node_id: str) -> List[int]:
        """All 6 equation numbers of a node (RESTRAINED where fixed)."""
        return list(self.dofs[node_id])

    def element_dof_map(self, node_ids: List[str]) -> List[int]:
        """
        Flattened equation numbers for an element's nodes.

        Examples:
        ---------
        >>> dof.element_dof_map(['A', 'B'])
        [-1, -1, -1, -1, -1, -1, 0, 1, 2, 3, 4, 5]
        """
        result = []
        for node_id in node_ids:
            result.extend(self.dofs[node_id])
        return result

    def full_idx(self, node_id: str, local_dof: int) -> int:
        """Index into an unreduced 6·N vector (every DOF, restrained or not)."""
        return DOF_PER_NODE * self._positions[node_id] + local_dof

    def full_element_dof_map(self, node_ids: List[str]) -> List[int]:
        """Like element_dof_map, but indexing the unreduced 6·N vector."""
        result = []
        for node_id in node_ids:
            base = DOF_PER_NODE * self._positions[node_id]
            result.extend(range(base, base + DOF_PER_NODE))
        return result

    @property
    def n_total(self) -> int:
        return DOF_PER_NODE * len(self.dofs)

    def locate(self, equation: int) -> Tuple[str, str]:
        """Inverse lookup: equation number → (node_id, DOF name)."""
        node_id, local_dof = self._owners[equation]
        return node_id, DOF_NAMES[local_dof]

