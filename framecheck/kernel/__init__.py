# framecheck/kernel - Numerical core
"""
KERNEL: DOF NUMBERING, ASSEMBLY AND THE LINEAR SOLVE
====================================================

This package contains the pieces of the direct stiffness method that know
nothing about beams, sections or design codes:

- DOFMap: (node_id, local_dof) → equation number, restrained DOFs eliminated
- assemble_global_K / assemble_global_F: scatter-add into the reduced system
- solve_linear: Gaussian elimination with partial pivoting

The element formulation (elements.py) and the load conversion (loads.py)
feed this kernel; analysis.py drives it.
"""

from .dof import DOFMap, DOF_PER_NODE, RESTRAINED
from .assemble import assemble_global_K, assemble_global_F
from .solve import solve_linear, matmul, transpose

__all__ = [
    'DOFMap', 'DOF_PER_NODE', 'RESTRAINED',
    'assemble_global_K', 'assemble_global_F',
    'solve_linear', 'matmul', 'transpose',
]
