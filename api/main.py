# api/main.py
"""
FastAPI backend for FrameCheck - exposes the analysis and design engine as REST API.
"""

import dataclasses
import math
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from framecheck import __version__
from framecheck.checks import DesignParameters, available_codes
from framecheck.errors import (
    FrameCheckError,
    UnknownDesignCodeError,
    UnknownLoadCombinationError,
    UnknownProjectError,
)
from framecheck.model import (
    CombinationType,
    Element,
    ElementType,
    Load,
    LoadCase,
    LoadCaseType,
    LoadCombination,
    LoadDirection,
    LoadType,
    Material,
    Node,
    Section,
    StructuralModel,
)
from framecheck.service import AnalysisService


app = FastAPI(
    title="FrameCheck API",
    description="Linear-static frame analysis and steel design checks",
    version=__version__,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

service = AnalysisService()


# =============================================================================
# Request Models
# =============================================================================

class NodeData(BaseModel):
    """Node position (m) and restraints (ux, uy, uz, rx, ry, rz)."""
    id: str
    x: float
    y: float
    z: float = 0.0
    restraints: List[bool] = Field(default_factory=lambda: [False] * 6, min_length=6, max_length=6)


class ElementData(BaseModel):
    id: str
    start_node: str
    end_node: str
    material: str
    section: str
    type: ElementType = "beam"
    releases: Tuple[str, str] = ("FFFFFF", "FFFFFF")
    mesh_size: Optional[float] = None


class MaterialData(BaseModel):
    """Material properties: moduli in GPa, strengths in MPa."""
    id: str
    name: str
    elastic_modulus: float
    yield_strength: float
    ultimate_strength: float
    poisson_ratio: float = 0.3
    shear_modulus: Optional[float] = None
    density: float = 7850.0
    thermal_expansion: float = 1.2e-5


class SectionData(BaseModel):
    """Section properties in cm², cm⁴, cm³, cm, cm⁶; dimensions in mm."""
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
    thickness: Optional[float] = None
    flange_thickness: Optional[float] = None
    type: str = "I-beam"


class LoadData(BaseModel):
    """Nodal load (node set) or element load (element set), kN / kNm / kN/m."""
    id: str
    type: LoadType
    load_case: str
    magnitude: float
    direction: LoadDirection
    node: Optional[str] = None
    element: Optional[str] = None
    position: float = 0.0
    distribution_end: Optional[float] = None


class LoadCaseData(BaseModel):
    id: str
    name: str = ""
    type: LoadCaseType = "dead"
    factor: float = 1.0


class LoadCombinationData(BaseModel):
    id: str
    factors: Dict[str, float]
    name: str = ""
    type: CombinationType = "ultimate"


class ModelData(BaseModel):
    """Complete structural model of one project."""
    nodes: List[NodeData] = Field(default_factory=list)
    elements: List[ElementData] = Field(default_factory=list)
    materials: List[MaterialData] = Field(default_factory=list)
    sections: List[SectionData] = Field(default_factory=list)
    loads: List[LoadData] = Field(default_factory=list)
    load_cases: List[LoadCaseData] = Field(default_factory=list)
    load_combinations: List[LoadCombinationData] = Field(default_factory=list)

    def to_model(self) -> StructuralModel:
        """Build the engine model. Record validation errors raise ValueError."""
        model = StructuralModel()
        for m in self.materials:
            model.add_material(Material(**m.model_dump()))
        for s in self.sections:
            model.add_section(Section(**s.model_dump()))
        for n in self.nodes:
            model.add_node(Node(**n.model_dump()))
        for e in self.elements:
            model.add_element(Element(**e.model_dump()))
        for c in self.load_cases:
            model.add_load_case(LoadCase(**c.model_dump()))
        for c in self.load_combinations:
            model.add_load_combination(LoadCombination(**c.model_dump()))
        for load in self.loads:
            model.add_load(Load(**load.model_dump()))
        model.validate()
        return model


class DesignParametersData(BaseModel):
    """Member design parameters; lengths in m. Omitted lengths default to the element length."""
    unbraced_length_y: Optional[float] = Field(None, gt=0)
    unbraced_length_z: Optional[float] = Field(None, gt=0)
    effective_length_factor_y: float = Field(1.0, gt=0)
    effective_length_factor_z: float = Field(1.0, gt=0)
    bending_factor_y: float = 1.0
    bending_factor_z: float = 1.0
    lateral_torsional_bracing_length: Optional[float] = Field(None, ge=0)
    slenderness_limit: float = 200.0
    moment_modification_factor: float = Field(1.0, gt=0)
    buckling_curve: str = "b"


class DesignRequest(BaseModel):
    code: str = "AISC360"
    parameters: Optional[DesignParametersData] = None


# =============================================================================
# Helpers
# =============================================================================

def _http_error(exc: Exception) -> HTTPException:
    """Map engine errors to HTTP status codes."""
    if isinstance(exc, (UnknownProjectError, UnknownLoadCombinationError, UnknownDesignCodeError)):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))


def _finite(value):
    """JSON has no infinity: report unbounded values as null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _to_json(record) -> Dict:
    return {k: _finite(v) for k, v in dataclasses.asdict(record).items()}


def _design_parameters(data: Optional[DesignParametersData], length: float) -> DesignParameters:
    if data is None:
        return DesignParameters.for_length(length)
    values = {k: v for k, v in data.model_dump().items() if v is not None}
    return DesignParameters.for_length(length, **values)


def _design_to_json(result) -> Dict:
    return {
        "element_id": result.element_id,
        "design_code": result.design_code,
        "overall_ratio": _finite(result.overall_ratio),
        "overall_status": result.overall_status.value,
        "checks": [
            {
                "check_type": c.check_type,
                "ratio": _finite(c.ratio),
                "capacity": c.capacity,
                "demand": c.demand,
                "status": c.status.value,
                "controlling_case": c.controlling_case,
                "equation": c.equation,
                "notes": list(c.notes),
            }
            for c in result.checks
        ],
        "recommendations": list(result.recommendations),
    }


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "FrameCheck API", "design_codes": available_codes()}


@app.post("/projects/{project_id}/model")
async def put_model(project_id: str, data: ModelData):
    """Register a project's model (replaces any previous model and results)."""
    try:
        model = data.to_model()
    except (FrameCheckError, ValueError) as exc:
        raise _http_error(exc) from exc
    service.set_model(project_id, model)
    return {
        "project_id": project_id,
        "n_nodes": len(model.nodes),
        "n_elements": len(model.elements),
        "load_combinations": list(model.load_combinations),
    }


@app.post("/projects/{project_id}/analyze/{combination_id}")
async def run_analysis(project_id: str, combination_id: str):
    """Run a linear-static analysis for one load combination."""
    try:
        results = await service.analyze(project_id, combination_id)
    except FrameCheckError as exc:
        raise _http_error(exc) from exc
    return {
        "project_id": project_id,
        "combination_id": combination_id,
        "results": [_to_json(r) for r in results],
    }


@app.get("/projects/{project_id}/results")
async def get_results(project_id: str):
    """Stored analysis results of the last run."""
    try:
        results = service.results(project_id)
    except FrameCheckError as exc:
        raise _http_error(exc) from exc
    return {"project_id": project_id, "results": [_to_json(r) for r in results]}


@app.delete("/projects/{project_id}")
async def delete_project(project_id: str):
    """Forget a project's model and results."""
    try:
        service.forget(project_id)
    except FrameCheckError as exc:
        raise _http_error(exc) from exc
    return {"project_id": project_id, "deleted": True}


@app.post("/projects/{project_id}/design/{element_id}")
async def run_design(project_id: str, element_id: str, request: DesignRequest):
    """Check one analyzed element against a design code."""
    try:
        model = service.model(project_id)
        if element_id not in model.elements:
            raise HTTPException(status_code=404, detail=f"Element {element_id!r} not found")
        parameters = _design_parameters(request.parameters, model.element_length(element_id))
        result = await service.check_design(project_id, element_id, request.code, parameters)
    except (FrameCheckError, ValueError) as exc:
        raise _http_error(exc) from exc
    return _design_to_json(result)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
