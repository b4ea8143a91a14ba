# framecheck/checks/design.py
"""Glue between analysis results and the design codes."""

import logging
from typing import List, Sequence, Union

from ..errors import UnknownReferenceError
from ..model import StructuralModel
from ..post import ElementAnalysisResult, design_forces
from .base import DesignCode, DesignParameters, ElementDesignResult
from .optimize import resolve_code

logger = logging.getLogger(__name__)


def check_design(
    model: StructuralModel,
    element_id: str,
    code: Union[str, DesignCode],
    analysis_result: ElementAnalysisResult,
    parameters: DesignParameters = None,
) -> ElementDesignResult:
    """
    Check one element against a design code.

    Design forces come from the analysis result (governing value over all
    stations). Without explicit parameters the member is taken as braced at
    its ends only: unbraced and LTB lengths equal the element length.

    Raises:
        UnknownReferenceError: element_id is not in the model
        UnknownDesignCodeError: code is not registered
        ValueError: analysis_result belongs to another element
    """
    if element_id not in model.elements:
        raise UnknownReferenceError('Design request', 'element', element_id)
    if analysis_result.element_id != element_id:
        raise ValueError(
            f"Analysis result is for element {analysis_result.element_id}, not {element_id}"
        )

    design_code = resolve_code(code)
    element = model.elements[element_id]
    if parameters is None:
        parameters = DesignParameters.for_length(model.element_length(element_id))

    result = design_code.evaluate(
        element_id,
        model.materials[element.material],
        model.sections[element.section],
        design_forces(analysis_result),
        parameters,
    )
    logger.debug(
        "Element %s (%s, %s): ratio %.3f %s",
        element_id, design_code.code, analysis_result.combination_id,
        result.overall_ratio, result.overall_status.value,
    )
    return result


def check_all(
    model: StructuralModel,
    code: Union[str, DesignCode],
    analysis_results: Sequence[ElementAnalysisResult],
    parameters: DesignParameters = None,
) -> List[ElementDesignResult]:
    """
    Check every element that has an analysis result.

    When several combinations were analyzed, the element keeps the result of
    its worst combination (highest overall ratio).
    """
    worst = {}
    for analysis_result in analysis_results:
        result = check_design(model, analysis_result.element_id, code, analysis_result, parameters)
        current = worst.get(result.element_id)
        if current is None or result.overall_ratio > current.overall_ratio:
            worst[result.element_id] = result
    return list(worst.values())
