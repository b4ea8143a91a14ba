# framecheck/kernel/assemble.py
"""
ASSEMBLY: Scatter-Add into the Reduced Global System
====================================================

PURPOSE:
--------
This module adds element contributions into the global stiffness matrix
and load vector. The system is assembled directly in reduced form: every
row/column whose DOF map entry is RESTRAINED is skipped, so fixed DOFs
never enter K·U = F.

The assembly doesn't care about element TYPE. It just needs:
- The number of free DOFs
- For each element: its DOF map (12 entries for a 3D frame) and its
  stiffness matrix / load vector in global coordinates

ALGORITHM:
----------
    K = zeros(n_free × n_free)
    for each element:
        for each (a, b) in element ke:
            i = dof_map[a]; j = dof_map[b]
            if i and j are free:
                K[i, j] += ke[a, b]
"""

import numpy as np
from typing import List, Tuple

from .dof import RESTRAINED


def assemble_global_K(
    n_free: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the reduced global stiffness matrix.

    Parameters:
    -----------
    n_free : int
        Number of free DOFs (size of the reduced system)

    contributions : List[Tuple[List[int], np.ndarray]]
        One (dof_map, ke) pair per element:
        - dof_map: equation numbers, RESTRAINED for fixed DOFs
        - ke: element stiffness in global coordinates,
          shape (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        Reduced global stiffness matrix, shape (n_free, n_free)
    """
    K = np.zeros((n_free, n_free), dtype=float)

    for dof_map, ke in contributions:
        n_element_dofs = len(dof_map)

        if ke.shape != (n_element_dofs, n_element_dofs):
            raise ValueError(
                f"Element ke shape {ke.shape} doesn't match dof_map length {n_element_dofs}"
            )

        # Only the free DOFs of this element take part
        local = [a for a in range(n_element_dofs) if dof_map[a] != RESTRAINED]
        if not local:
            continue
        glob = [dof_map[a] for a in local]
        K[np.ix_(glob, glob)] += ke[np.ix_(local, local)]

    return K


def assemble_global_F(
    n_free: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the reduced global load vector.

    Same scatter-add as assemble_global_K. Entries that land on a restrained
    DOF are dropped here; they are carried to the reactions instead.

    Parameters:
    -----------
    n_free : int
        Number of free DOFs

    contributions : List[Tuple[List[int], np.ndarray]]
        One (dof_map, fe) pair per load contribution, fe in global
        coordinates with shape (len(dof_map),)

    Returns:
    --------
    np.ndarray
        Reduced global load vector, shape (n_free,)
    """
    F = np.zeros(n_free, dtype=float)

    for dof_map, fe in contributions:
        if fe.shape != (len(dof_map),):
            raise ValueError(
                f"Element fe shape {fe.shape} doesn't match dof_map length {len(dof_map)}"
            )
        for a, ia in enumerate(dof_map):
            if ia != RESTRAINED:
                F[ia] += fe[a]

    return F
