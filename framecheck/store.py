# framecheck/store.py
"""In-memory result store: analysis and design results keyed by project."""

import threading
from typing import Dict, List, Sequence

from .checks.base import ElementDesignResult
from .post import ElementAnalysisResult


class ResultStore:
    """
    Thread-safe keyed store.

    Re-running an analysis replaces every stored result of the project
    (never appends), so two identical runs leave the same contents.
    Stored results are frozen dataclasses and are returned as new lists.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._analysis: Dict[str, List[ElementAnalysisResult]] = {}
        self._design: Dict[str, Dict[str, ElementDesignResult]] = {}

    def replace(self, project_id: str, results: Sequence[ElementAnalysisResult]) -> None:
        """Store a fresh analysis; earlier design results are stale and dropped."""
        with self._lock:
            self._analysis[project_id] = list(results)
            self._design.pop(project_id, None)

    def get(self, project_id: str) -> List[ElementAnalysisResult]:
        with self._lock:
            return list(self._analysis.get(project_id, ()))

    def put_design(self, project_id: str, result: ElementDesignResult) -> None:
        with self._lock:
            self._design.setdefault(project_id, {})[result.element_id] = result

    def get_design(self, project_id: str) -> List[ElementDesignResult]:
        with self._lock:
            return list(self._design.get(project_id, {}).values())

    def clear(self, project_id: str = None) -> None:
        """Forget one project, or everything when project_id is None."""
        with self._lock:
            if project_id is None:
                self._analysis.clear()
                self._design.clear()
            else:
                self._analysis.pop(project_id, None)
                self._design.pop(project_id, None)
