"""LangGraph orchestrator package for the build pipeline."""

from hybrid_architect.orchestrator.exceptions import GraphBuildError, OrchestratorError
from hybrid_architect.orchestrator.graph import build_graph
from hybrid_architect.orchestrator.state import BuildState, make_initial_state, to_project

__all__ = [
    "BuildState",
    "GraphBuildError",
    "OrchestratorError",
    "build_graph",
    "make_initial_state",
    "to_project",
]
