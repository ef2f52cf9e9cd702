"""State definition for the LangGraph build pipeline."""

import operator
from typing import Annotated, TypedDict

from hybrid_architect.models import AgentStep, FileNode, ProjectState


class BuildState(TypedDict):
    """State for the prompt-to-project pipeline.

    Fields with Annotated[list, operator.add] reducers accumulate across nodes.
    All other fields use default overwrite semantics.
    """

    # Input
    prompt: str
    context: str

    # Progress
    step: AgentStep
    plan: list[str]
    current_file_index: int

    # Generated files (accumulating reducer)
    files: Annotated[list[FileNode], operator.add]

    # Verification
    verified: bool

    # Error accumulation
    errors: Annotated[list[str], operator.add]


def make_initial_state(prompt: str, context: str = "") -> BuildState:
    """Create the initial state for the build pipeline."""
    return {
        "prompt": prompt,
        "context": context,
        "step": AgentStep.IDLE,
        "plan": [],
        "current_file_index": 0,
        "files": [],
        "verified": False,
        "errors": [],
    }


def to_project(state: dict, name: str = "Project Alpha") -> ProjectState:
    """Collect the pipeline output into a ProjectState."""
    return ProjectState(
        name=name,
        files=list(state.get("files", [])),
        plan=list(state.get("plan", [])),
    )
