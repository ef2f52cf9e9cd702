"""Data models for the hybrid architect."""

from hybrid_architect.models.project_models import (
    AgentStep,
    FileNode,
    GitHubState,
    ProjectState,
    ProviderSettings,
)
from hybrid_architect.models.synthesis_models import (
    DiffLine,
    DiffOrigin,
    MergePolicyState,
    SegmentSet,
    SynthesisResult,
)

__all__ = [
    "AgentStep",
    "DiffLine",
    "DiffOrigin",
    "FileNode",
    "GitHubState",
    "MergePolicyState",
    "ProjectState",
    "ProviderSettings",
    "SegmentSet",
    "SynthesisResult",
]
