"""Project, file and provider models for the build pipeline."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hybrid_architect.models.synthesis_models import DiffLine


class AgentStep(str, Enum):
    """Phase of the build pipeline."""

    IDLE = "IDLE"
    PLAN = "PLAN"
    EXECUTE = "EXECUTE"
    VERIFY = "VERIFY"
    ITERATE = "ITERATE"
    DEPLOY = "DEPLOY"


class FileNode(BaseModel):
    """A generated project file."""

    model_config = ConfigDict(frozen=False)

    name: str
    path: str  # relative path inside the generated project
    content: str
    language: str = "typescript"
    diff: Optional[list[DiffLine]] = None


class GitHubState(BaseModel):
    """Repository a project has been deployed to."""

    model_config = ConfigDict(frozen=False)

    repo_name: str
    owner: str
    url: str
    last_commit_sha: Optional[str] = None
    workflow_active: bool = False


class ProjectState(BaseModel):
    """A generated project and its deployment target."""

    model_config = ConfigDict(frozen=False)

    name: str = "Project Alpha"
    files: list[FileNode] = Field(default_factory=list)
    plan: list[str] = Field(default_factory=list)
    github: Optional[GitHubState] = None


class ProviderSettings(BaseModel):
    """Endpoints, models and tokens for the code generators."""

    model_config = ConfigDict(frozen=False)

    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "codestral"
    hf_url: str = "http://localhost:8000"  # local Hugging Face bridge
    hf_token: Optional[str] = None
    hf_model: str = "microsoft/Phi-3-mini-4k-instruct"
    use_cloud: bool = True
    cloud_model: str = "claude-sonnet-4-5-20250929"
    github_token: Optional[str] = None
    request_timeout: int = 60  # seconds, per HTTP request
