# framecheck - Frame Analysis and Steel Design Checking
"""
FRAMECHECK: Linear-Static Frame Analysis + Steel Design Checks
==============================================================

This package provides:
- 3D beam/column frame analysis (direct stiffness method)
- Member diagrams (N, V, T, M, deflection) sampled along each element
- Steel design checks per AISC 360 and Eurocode 3
- Discrete section optimization over a catalog

ARCHITECTURE:
-------------
    kernel/         DOF numbering, assembly, dense linear solve
    model.py        Input records (Node, Element, Material, Section, Load, ...)
    elements.py     12x12 frame element stiffness and transformation
    loads.py        Nodal loads and member-load equivalents
    analysis.py     Static solver: assemble, solve, recover forces/reactions
    diagrams.py     Internal force and deflection diagrams
    post.py         Result records in engineering units, summary tables
    checks/         Design codes, section optimization, text report
    catalog.py      Default materials and IPE sections
    service.py      Async invocation boundary and result store

TYPICAL USE:
------------
    from framecheck import analyze
    from framecheck.checks.design import check_design

    results = analyze(model, 'ULS1')
    design = check_design(model, 'B1', 'AISC360', results[0])
"""

import logging

from .analysis import StaticAnalysis, analyze, analyze_static
from .config import CONFIG, AnalysisConfig
from .errors import (
    DegenerateElementError,
    FrameCheckError,
    ModelTooLargeError,
    SingularSystemError,
    UnknownDesignCodeError,
    UnknownLoadCombinationError,
    UnknownProjectError,
    UnknownReferenceError,
)
from .model import (
    Element,
    Load,
    LoadCase,
    LoadCombination,
    Material,
    Node,
    Section,
    StructuralModel,
)
from .post import ElementAnalysisResult, NodeResult

__version__ = "0.1.0"

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def configure_logging(level=None) -> logging.Logger:
    """
    Send framecheck log records to stderr.

    Installs one stream handler on the package logger; calling it again only
    updates the level. level defaults to CONFIG.log_level.
    """
    logger = logging.getLogger(__name__)
    logger.setLevel(level or CONFIG.log_level)
    if not any(getattr(h, '_framecheck', False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._framecheck = True
        logger.addHandler(handler)
    return logger
