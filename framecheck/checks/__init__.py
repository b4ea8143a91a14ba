# framecheck/checks/__init__.py
"""
Steel design checks (AISC 360, Eurocode 3) and section optimization.

Importing this package registers the built-in design codes. The glue between
analysis results and codes lives in framecheck.checks.design.
"""

from .base import (
    CheckStatus,
    DesignCheck,
    DesignCode,
    DesignForces,
    DesignParameters,
    ElementDesignResult,
    available_codes,
    get_code,
    register_code,
)
from .aisc import AISC360
from .eurocode import Eurocode3
from .optimize import SectionCandidate, optimize_section
from .report import design_report

__all__ = [
    'CheckStatus',
    'DesignCheck',
    'DesignCode',
    'DesignForces',
    'DesignParameters',
    'ElementDesignResult',
    'available_codes',
    'get_code',
    'register_code',
    'AISC360',
    'Eurocode3',
    'SectionCandidate',
    'optimize_section',
    'design_report',
]
