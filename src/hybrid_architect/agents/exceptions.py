"""Exceptions for agent operations."""


class AgentError(Exception):
    """Base exception for all agent operations."""


class PlanningError(AgentError):
    """Raised when the file plan cannot be produced."""


class GenerationError(AgentError):
    """Raised when a code generator call fails."""


class DeploymentError(AgentError):
    """Raised when a GitHub API request fails."""
