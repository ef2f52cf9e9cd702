"""LangGraph pipeline: plan the project, synthesize each file, verify.

Edge topology:
  START -> plan_node -> conditional(has_plan) -> {synthesize_node, END}
  synthesize_node -> conditional(next_file_or_verify) -> {synthesize_node, verify_node}
  verify_node -> END
"""

from pathlib import PurePosixPath
from typing import Callable

from langgraph.graph import END, START, StateGraph
from loguru import logger

from hybrid_architect.agents.hybrid_generator import HybridFileGenerator
from hybrid_architect.agents.planner import Planner
from hybrid_architect.models import AgentStep, FileNode
from hybrid_architect.orchestrator.exceptions import GraphBuildError
from hybrid_architect.orchestrator.state import BuildState
from hybrid_architect.synthesis import find_sensitive

_LANGUAGES = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".css": "css",
    ".json": "json",
    ".html": "html",
    ".md": "markdown",
    ".yml": "yaml",
    ".yaml": "yaml",
}


def detect_language(path: str) -> str:
    return _LANGUAGES.get(PurePosixPath(path).suffix.lower(), "plaintext")


def make_plan_node(planner: Planner) -> Callable[[BuildState], dict]:
    """Factory: returns a node closure that plans the project's file list.

    On error: returns {"errors": [str], "plan": []}
    """

    def plan_node(state: BuildState) -> dict:
        logger.info("Deep Thinking Planner engaged...")
        try:
            plan = planner.generate_plan(state["prompt"])
        except Exception as exc:
            return {
                "errors": [f"plan_node error: {exc}"],
                "plan": [],
                "step": AgentStep.IDLE,
            }
        return {
            "plan": plan,
            "current_file_index": 0,
            "step": AgentStep.EXECUTE,
        }

    return plan_node


def make_synthesize_node(generator: HybridFileGenerator) -> Callable[[BuildState], dict]:
    """Factory: returns a node closure that synthesizes the next planned file.

    Always advances current_file_index so a failing file cannot stall the loop.
    On error: returns {"errors": [str], "files": []}

    IMPORTANT: always returns files as list (never None) for Annotated reducer.
    """

    def synthesize_node(state: BuildState) -> dict:
        index = state["current_file_index"]
        plan = state["plan"]
        if not 0 <= index < len(plan):
            return {
                "errors": [f"synthesize_node: no planned file at index {index}"],
                "files": [],
                "current_file_index": len(plan),
            }

        path = plan[index]
        logger.info(f"Synthesizing {path}...")
        try:
            result = generator.generate(path, state["prompt"], state["context"])
        except Exception as exc:
            return {
                "errors": [f"synthesize_node error ({path}): {exc}"],
                "files": [],
                "current_file_index": index + 1,
            }

        file = FileNode(
            name=PurePosixPath(path).name or path,
            path=path,
            content=result.code,
            language=detect_language(path),
            diff=list(result.diff),
        )
        return {"files": [file], "current_file_index": index + 1}

    return synthesize_node


def verify_node(state: BuildState) -> dict:
    """Check every planned file was produced and no sensitive strings survived."""
    problems: list[str] = []
    produced = {file.path for file in state["files"]}
    for path in state["plan"]:
        if path not in produced:
            problems.append(f"verify_node: {path} was not generated")
    for file in state["files"]:
        leaked = find_sensitive(file.content)
        if leaked:
            problems.append(
                f"verify_node: {file.path} still matches {', '.join(leaked)}"
            )

    if not problems:
        logger.info("System stable. Virtual runtime active.")
    return {
        "step": AgentStep.IDLE,
        "verified": not problems,
        "errors": problems,
    }


def has_plan(state: BuildState) -> str:
    return "synthesize" if state["plan"] else "done"


def next_file_or_verify(state: BuildState) -> str:
    if state["current_file_index"] < len(state["plan"]):
        return "continue"
    return "verify"


def build_graph(planner: Planner, generator: HybridFileGenerator):
    """Build and compile the build-pipeline StateGraph.

    No checkpointer: state lives in memory for a single invocation.

    Raises:
        GraphBuildError: If graph construction fails.
    """
    try:
        graph = StateGraph(BuildState)

        graph.add_node("plan_node", make_plan_node(planner))
        graph.add_node("synthesize_node", make_synthesize_node(generator))
        graph.add_node("verify_node", verify_node)

        graph.add_edge(START, "plan_node")
        graph.add_conditional_edges(
            "plan_node",
            has_plan,
            {"synthesize": "synthesize_node", "done": END},
        )
        graph.add_conditional_edges(
            "synthesize_node",
            next_file_or_verify,
            {"continue": "synthesize_node", "verify": "verify_node"},
        )
        graph.add_edge("verify_node", END)

        return graph.compile()

    except Exception as exc:
        raise GraphBuildError(f"Failed to build build-pipeline graph: {exc}") from exc
