"""Planning and code generation agents."""

from hybrid_architect.agents.cloud_generator import CloudGenerator
from hybrid_architect.agents.exceptions import (
    AgentError,
    DeploymentError,
    GenerationError,
    PlanningError,
)
from hybrid_architect.agents.hybrid_generator import HybridFileGenerator
from hybrid_architect.agents.llm_client import LLMClient
from hybrid_architect.agents.local_generator import LocalGenerator
from hybrid_architect.agents.planner import Planner

__all__ = [
    "AgentError",
    "CloudGenerator",
    "DeploymentError",
    "GenerationError",
    "HybridFileGenerator",
    "LLMClient",
    "LocalGenerator",
    "Planner",
]
