"""Deploy sequence: provision a repository, commit the project, add CI."""

import time

from loguru import logger

from hybrid_architect.agents.exceptions import DeploymentError
from hybrid_architect.deploy.github_service import GitHubService
from hybrid_architect.models import GitHubState, ProjectState


def make_repo_name() -> str:
    return f"architect-{int(time.time() * 1000)}"


def deploy_project(project: ProjectState, service: GitHubService) -> GitHubState:
    """Push ``project`` to GitHub and return its repository state.

    A new repository is created only when the project has none yet. The
    project's ``github`` field is updated in place.

    Raises:
        DeploymentError: If there is nothing to deploy or an API call fails.
    """
    if not project.files:
        raise DeploymentError("No project code to deploy")

    github = project.github
    if github is None:
        logger.info("[GITHUB] Provisioning new repository...")
        repo = service.create_repo(make_repo_name())
        github = GitHubState(
            repo_name=repo["name"],
            owner=repo["owner"]["login"],
            url=repo["html_url"],
            workflow_active=True,
        )
        logger.info(f"[GITHUB] Repository created: {github.url}")

    logger.info("[GITHUB] Committing file set to main branch...")
    service.commit_files(github.owner, github.repo_name, project.files)

    logger.info("[CI/CD] Injecting GitHub Actions workflow...")
    ref = service.setup_cicd(github.owner, github.repo_name)
    github.last_commit_sha = ref.get("object", {}).get("sha")
    github.workflow_active = True

    project.github = github
    logger.info("[CI/CD] Deployment complete. Pipeline is now RUNNING.")
    return github
