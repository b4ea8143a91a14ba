# framecheck/service.py
"""
Asynchronous invocation boundary around the (synchronous) engine.

Each analysis runs in a worker thread with its own workspace, so analyses of
different projects proceed side by side without sharing state. Requests for
the same project are serialized by a per-project lock so the stored results
always come from one complete run.
"""

import asyncio
import logging
from typing import Dict, List, Union

from .analysis import analyze
from .checks.base import DesignCode, DesignParameters, ElementDesignResult
from .checks.design import check_design
from .config import CONFIG, AnalysisConfig
from .errors import UnknownProjectError, UnknownReferenceError
from .model import StructuralModel
from .post import ElementAnalysisResult
from .store import ResultStore

logger = logging.getLogger(__name__)


class AnalysisService:
    """Project models, the result store, and async analysis/design calls."""

    def __init__(self, store: ResultStore = None, config: AnalysisConfig = None):
        self.store = store or ResultStore()
        self.config = config or CONFIG
        self._models: Dict[str, StructuralModel] = {}
        self._generations: Dict[str, int] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def set_model(self, project_id: str, model: StructuralModel) -> None:
        """
        Register (or replace) a project's model; its old results are dropped.

        A run still in flight on the replaced model finishes, but its results
        are not stored.
        """
        self._models[project_id] = model
        self._generations[project_id] = self._generations.get(project_id, 0) + 1
        self.store.clear(project_id)

    def forget(self, project_id: str) -> None:
        """Drop a project's model, results and lock."""
        self.model(project_id)
        del self._models[project_id]
        self._generations.pop(project_id, None)
        self._locks.pop(project_id, None)
        self.store.clear(project_id)

    def model(self, project_id: str) -> StructuralModel:
        try:
            return self._models[project_id]
        except KeyError:
            raise UnknownProjectError(project_id) from None

    def results(self, project_id: str) -> List[ElementAnalysisResult]:
        self.model(project_id)
        return self.store.get(project_id)

    def _lock(self, project_id: str) -> asyncio.Lock:
        lock = self._locks.get(project_id)
        if lock is None:
            lock = self._locks[project_id] = asyncio.Lock()
        return lock

    def _is_current(self, project_id: str, generation: int) -> bool:
        if self._generations.get(project_id) == generation:
            return True
        logger.info("Project %s: model replaced during the run, results discarded", project_id)
        return False

    async def analyze(self, project_id: str, combination_id: str) -> List[ElementAnalysisResult]:
        """Run one combination and replace the project's stored results."""
        model = self.model(project_id)
        generation = self._generations[project_id]
        async with self._lock(project_id):
            logger.info("Project %s: analyzing combination %s", project_id, combination_id)
            results = await asyncio.to_thread(analyze, model, combination_id, self.config)
            if self._is_current(project_id, generation):
                self.store.replace(project_id, results)
        return results

    async def check_design(
        self,
        project_id: str,
        element_id: str,
        code: Union[str, DesignCode],
        parameters: DesignParameters = None,
    ) -> ElementDesignResult:
        """
        Design-check one element against the project's stored analysis.

        Raises UnknownReferenceError when the element has no analysis result
        (not analyzed yet, or not a line element).
        """
        model = self.model(project_id)
        generation = self._generations[project_id]
        async with self._lock(project_id):
            stored = [r for r in self.store.get(project_id) if r.element_id == element_id]
            if not stored:
                raise UnknownReferenceError(
                    f"Project {project_id}", 'analysis result for element', element_id
                )
            result = await asyncio.to_thread(
                check_design, model, element_id, code, stored[0], parameters
            )
            if self._is_current(project_id, generation):
                self.store.put_design(project_id, result)
        return result
