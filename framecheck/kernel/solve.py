# framecheck/kernel/solve.py
"""Dense linear algebra: matrix products and Gaussian elimination with partial pivoting."""

import numpy as np

from ..config import CONFIG
from ..errors import SingularSystemError


def transpose(a: np.ndarray) -> np.ndarray:
    """Return a transposed float64 copy of a 2D array."""
    a = np.asarray(a, dtype=float)
    if a.ndim != 2:
        raise ValueError(f"transpose expects a 2D array, got shape {a.shape}")
    return a.T.copy()


def matmul(*matrices: np.ndarray) -> np.ndarray:
    """
    Chained dense product: matmul(A, B, C) == A @ B @ C.

    Raises:
        ValueError: If fewer than two operands are given or inner dimensions disagree.
    """
    if len(matrices) < 2:
        raise ValueError("matmul needs at least two operands")

    result = np.asarray(matrices[0], dtype=float)
    for m in matrices[1:]:
        m = np.asarray(m, dtype=float)
        if result.shape[-1] != m.shape[0]:
            raise ValueError(
                f"Cannot multiply shapes {result.shape} and {m.shape}"
            )
        result = result @ m
    return result


def solve_linear(
    A: np.ndarray,
    b: np.ndarray,
    pivot_tolerance: float = None,
) -> np.ndarray:
    """
    Solve A·x = b by Gaussian elimination with partial pivoting.

    At each step the row with the largest |entry| in the current column
    (among rows not yet eliminated) is swapped into the pivot position.
    A pivot whose magnitude is at or below pivot_tolerance × max|A| means
    the matrix is singular (for a stiffness matrix: a rigid-body mode).

    Args:
        A: Square matrix (n x n). Not modified.
        b: Right-hand side (n,). Not modified.
        pivot_tolerance: Relative singularity threshold
            (default CONFIG.pivot_tolerance)

    Returns:
        x: Solution vector (n,)

    Raises:
        SingularSystemError: With the index of the equation whose pivot vanished
        ValueError: If A is not square or b has the wrong length
    """
    if pivot_tolerance is None:
        pivot_tolerance = CONFIG.pivot_tolerance

    A = np.array(A, dtype=float)
    b = np.array(b, dtype=float)

    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"A must be square, got shape {A.shape}")
    n = A.shape[0]
    if b.shape != (n,):
        raise ValueError(f"b must have shape ({n},), got {b.shape}")
    if n == 0:
        return np.zeros(0, dtype=float)

    scale = float(np.max(np.abs(A)))
    threshold = pivot_tolerance * scale

    # Forward elimination. Columns are never permuted, so a vanishing pivot
    # in column k points at unknown k.
    for k in range(n):
        p = k + int(np.argmax(np.abs(A[k:, k])))
        pivot = A[p, k]
        if abs(pivot) <= threshold:
            raise SingularSystemError(equation=k, pivot=float(pivot))

        if p != k:
            A[[k, p]] = A[[p, k]]
            b[[k, p]] = b[[p, k]]

        factors = A[k + 1:, k] / A[k, k]
        A[k + 1:, k:] -= np.outer(factors, A[k, k:])
        b[k + 1:] -= factors * b[k]

    # Back substitution
    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        x[i] = (b[i] - A[i, i + 1:] @ x[i + 1:]) / A[i, i]

    return x
