"""Minimal GitHub REST client for publishing generated projects."""

import base64
from typing import Any, Optional

import requests

from hybrid_architect.agents.exceptions import DeploymentError
from hybrid_architect.models import FileNode

GITHUB_API_URL = "https://api.github.com"
DEFAULT_BRANCH = "main"
DEFAULT_COMMIT_MESSAGE = "Agentic Architecture Sync"
WORKFLOW_PATH = ".github/workflows/main.yml"
REQUEST_TIMEOUT = 30  # seconds

CI_WORKFLOW = """name: Agent Architect CI/CD
on:
  push:
    branches: [ main ]
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - name: Install dependencies
        run: npm install
      - name: Run build
        run: npm run build
"""


class GitHubService:
    """Creates repositories and commits file sets through the Git data API."""

    def __init__(self, token: str, session: Optional[requests.Session] = None) -> None:
        if not token:
            raise DeploymentError("A GitHub token is required")
        self.token = token
        self.session = session or requests.Session()

    def request(self, endpoint: str, method: str = "GET", body: Any = None) -> Any:
        """Call the GitHub API and return the decoded JSON response.

        Raises:
            DeploymentError: On transport failure or a non-2xx response.
        """
        try:
            response = self.session.request(
                method,
                f"{GITHUB_API_URL}{endpoint}",
                headers={
                    "Authorization": f"token {self.token}",
                    "Accept": "application/vnd.github.v3+json",
                },
                json=body,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise DeploymentError(f"GitHub request failed: {exc}") from exc

        if not response.ok:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            raise DeploymentError(message or "GitHub API Error")
        return response.json()

    def create_repo(self, name: str) -> dict[str, Any]:
        return self.request(
            "/user/repos",
            "POST",
            {
                "name": name,
                "auto_init": True,
                "description": "Built with Hybrid Architect",
            },
        )

    def commit_files(
        self,
        owner: str,
        repo: str,
        files: list[FileNode],
        message: str = DEFAULT_COMMIT_MESSAGE,
    ) -> dict[str, Any]:
        """Commit ``files`` on top of the branch head and move the branch.

        Flow: read ref -> create one base64 blob per file -> create tree on
        the head commit's tree -> create commit -> update ref.

        Returns:
            The updated ref object from the API.
        """
        ref_endpoint = f"/repos/{owner}/{repo}/git/refs/heads/{DEFAULT_BRANCH}"
        ref = self.request(ref_endpoint)
        latest_commit_sha = ref["object"]["sha"]

        tree_items = []
        for file in files:
            blob = self.request(
                f"/repos/{owner}/{repo}/git/blobs",
                "POST",
                {
                    "content": base64.b64encode(file.content.encode("utf-8")).decode("ascii"),
                    "encoding": "base64",
                },
            )
            tree_items.append({
                "path": file.path,
                "mode": "100644",
                "type": "blob",
                "sha": blob["sha"],
            })

        tree = self.request(
            f"/repos/{owner}/{repo}/git/trees",
            "POST",
            {"base_tree": latest_commit_sha, "tree": tree_items},
        )
        commit = self.request(
            f"/repos/{owner}/{repo}/git/commits",
            "POST",
            {"message": message, "tree": tree["sha"], "parents": [latest_commit_sha]},
        )
        return self.request(ref_endpoint, "PATCH", {"sha": commit["sha"]})

    def setup_cicd(self, owner: str, repo: str) -> dict[str, Any]:
        workflow = FileNode(
            name="main.yml",
            path=WORKFLOW_PATH,
            content=CI_WORKFLOW,
            language="yaml",
        )
        return self.commit_files(owner, repo, [workflow], "Setup CI/CD Pipeline")
