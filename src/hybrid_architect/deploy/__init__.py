"""GitHub deployment of generated projects."""

from hybrid_architect.deploy.deployment import deploy_project
from hybrid_architect.deploy.github_service import GitHubService

__all__ = [
    "GitHubService",
    "deploy_project",
]
