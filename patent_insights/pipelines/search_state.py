"""
Patent Search State
patent_insights/pipelines/search_state.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from patent_insights.models.patent_insights import SearchQuery, SearchResult


class SearchStage(str, Enum):
    classifying = "classifying"
    fetching = "fetching"
    normalizing = "normalizing"
    falling_back = "falling_back"
    done = "done"


# Allowed stage transitions; done is terminal and nothing loops back
STAGE_TRANSITIONS: Dict[SearchStage, tuple] = {
    SearchStage.classifying: (SearchStage.fetching, SearchStage.falling_back),
    SearchStage.fetching: (SearchStage.normalizing, SearchStage.falling_back),
    SearchStage.normalizing: (SearchStage.done, SearchStage.falling_back),
    SearchStage.falling_back: (SearchStage.done,),
    SearchStage.done: (),
}


@dataclass(frozen=True)
class LiveSuccess:
    """Remote payload fetched and normalized."""
    result: SearchResult


@dataclass(frozen=True)
class LiveFailure:
    """Remote fetch or normalization failed; result is synthetic with a notice."""
    result: SearchResult
    reason: str


@dataclass(frozen=True)
class Fallback:
    """No live backend configured; result is synthetic without a notice."""
    result: SearchResult
    reason: str = "no live backend configured"


SearchOutcome = Union[LiveSuccess, LiveFailure, Fallback]


@dataclass
class SearchState:
    """State container for one search invocation."""

    raw_query: str
    theme: Optional[str] = None

    stage: SearchStage = SearchStage.classifying
    stage_history: List[SearchStage] = field(default_factory=lambda: [SearchStage.classifying])

    query: Optional[SearchQuery] = None
    payload: Any = None
    outcome: Optional[SearchOutcome] = None

    errors: List[Dict[str, Any]] = field(default_factory=list)
    started_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    completed_at: Optional[str] = None

    def advance(self, stage: SearchStage) -> None:
        """Move to `stage`, rejecting transitions the pipeline does not define."""
        if stage not in STAGE_TRANSITIONS[self.stage]:
            raise RuntimeError(f"Invalid search stage transition: {self.stage.value} -> {stage.value}")
        self.stage = stage
        self.stage_history.append(stage)
        if stage is SearchStage.done:
            self.completed_at = datetime.now(timezone.utc).isoformat()

    def add_error(self, step: str, error: str) -> None:
        """Add an error to the state."""
        self.errors.append({
            "step": step,
            "error": error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
