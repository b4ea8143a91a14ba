# framecheck/errors.py
"""Structural and input errors raised by the analysis engine.

All of these are deterministic: the same model always raises the same error,
so callers should report them rather than retry.
"""

from typing import Optional


class FrameCheckError(RuntimeError):
    """Base class for every error raised by the engine."""
    pass


class DegenerateElementError(FrameCheckError):
    """Raised when an element has zero (or near-zero) length."""

    def __init__(self, element_id: str, length: float):
        self.element_id = element_id
        self.length = length
        super().__init__(
            f"Element {element_id} is degenerate (length={length:.3e} m). "
            f"Check that its end nodes are not coincident."
        )


class SingularSystemError(FrameCheckError):
    """Raised when the reduced stiffness matrix has a rigid-body mode."""

    def __init__(
        self,
        equation: int,
        pivot: float,
        node_id: Optional[str] = None,
        component: Optional[str] = None,
    ):
        self.equation = equation
        self.pivot = pivot
        self.node_id = node_id
        self.component = component
        where = f"equation {equation}"
        if node_id is not None:
            where += f" (node {node_id}, {component})"
        super().__init__(
            f"Singular stiffness matrix at {where}, pivot={pivot:.3e}. "
            f"The model is unstable: check supports and connectivity."
        )


class UnknownLoadCombinationError(FrameCheckError):
    """Raised when an analysis is requested for an unregistered combination."""

    def __init__(self, combination_id: str):
        self.combination_id = combination_id
        super().__init__(f"Load combination {combination_id!r} not found")


class UnknownReferenceError(FrameCheckError):
    """Raised when a record refers to a node/material/section/etc. that does not exist."""

    def __init__(self, owner: str, kind: str, reference):
        self.owner = owner
        self.kind = kind
        self.reference = reference
        super().__init__(f"{owner} refers to unknown {kind} {reference!r}")


class ModelTooLargeError(FrameCheckError):
    """Raised before assembly when the free DOF count exceeds the configured ceiling."""

    def __init__(self, n_dofs: int, limit: int):
        self.n_dofs = n_dofs
        self.limit = limit
        super().__init__(
            f"Model has {n_dofs} free DOFs, above the limit of {limit}"
        )


class UnknownDesignCodeError(FrameCheckError, KeyError):
    """Raised when a design code name is not registered."""

    def __init__(self, code: str, available=()):
        self.code = code
        self.available = tuple(available)
        super().__init__(
            f"Design code {code!r} not found (available: {', '.join(self.available) or 'none'})"
        )

    def __str__(self):
        return self.args[0]


class UnknownProjectError(FrameCheckError, KeyError):
    """Raised when a service call names a project with no registered model."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project {project_id!r} not found")

    def __str__(self):
        return self.args[0]
