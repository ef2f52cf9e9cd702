"""CLI entry point for the Hybrid Architect."""
import argparse
from dotenv import load_dotenv
import json
import sys
import traceback
from pathlib import Path

from hybrid_architect.agents.exceptions import AgentError
from hybrid_architect.config import ConfigError, load_settings, safe_settings_view
from hybrid_architect.logging_config import setup_logging
from hybrid_architect.models import DiffOrigin, FileNode, ProjectState, SynthesisResult
from hybrid_architect.orchestrator.exceptions import OrchestratorError
from hybrid_architect.synthesis import apply_overrides, synthesize

load_dotenv()

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_AGENT_ERROR = 2
EXIT_ORCHESTRATOR_ERROR = 3
EXIT_PIPELINE_ERRORS = 4
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130

# Defaults
DEFAULT_OUTPUT_DIR = "./generated"
RECURSION_HEADROOM = 10  # graph steps beyond one per planned file

_DIFF_PREFIX = {
    DiffOrigin.LOCAL: "+ ",
    DiffOrigin.CLOUD: "- ",
    DiffOrigin.MERGED: "  ",
}


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hybrid-architect",
        description="Prompt-to-project assistant with cloud/local code synthesis",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    # Subcommand copy of --verbose; SUPPRESS leaves the top-level value alone when omitted
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", action="store_true", default=argparse.SUPPRESS, help="Enable verbose output"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    synth = subparsers.add_parser(
        "synthesize", help="Merge a cloud and a local candidate file", parents=[common]
    )
    synth.add_argument("cloud_file", type=str, help="Path to the cloud candidate")
    synth.add_argument("local_file", type=str, help="Path to the local candidate")
    synth.add_argument(
        "--output-json", action="store_true", help="Output code and diff as JSON"
    )
    synth.add_argument(
        "--show-diff", action="store_true", help="Print the tagged diff after the code"
    )
    synth.add_argument(
        "--pin",
        type=int,
        action="append",
        default=[],
        metavar="N",
        help="Flip diff block N (restore a cloud block or reject a local one); repeatable",
    )

    build = subparsers.add_parser(
        "build", help="Generate a project from a prompt", parents=[common]
    )
    build.add_argument("prompt", type=str, help="Natural-language project description")
    build.add_argument(
        "--context", type=str, default="", help="Extra context passed to the cloud generator"
    )
    build.add_argument(
        "--output-dir",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory to write generated files to (default: {DEFAULT_OUTPUT_DIR})",
    )
    build.add_argument(
        "--deploy", action="store_true", help="Commit the generated project to GitHub"
    )
    build.add_argument(
        "--dry-run", action="store_true", help="Print config and exit without running"
    )
    build.add_argument(
        "--output-json", action="store_true", help="Output results as JSON"
    )

    deploy = subparsers.add_parser(
        "deploy", help="Commit an existing directory to GitHub", parents=[common]
    )
    deploy.add_argument("project_dir", type=str, help="Directory with generated files")
    return parser


def read_candidate(raw_path: str) -> str:
    """Read a candidate file.

    Raises:
        SystemExit: If the path is not a readable file.
    """
    path = Path(raw_path)
    if not path.is_file():
        print(f"Error: '{raw_path}' is not a file.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    return path.read_text(encoding="utf-8")


def format_diff(result: SynthesisResult) -> str:
    """Render the tagged diff with +/- prefixes, one output line per source line.

    Each block starts with an ``@@ N origin @@`` header; N is the index ``--pin`` takes.
    """
    lines: list[str] = []
    for index, block in enumerate(result.diff):
        prefix = _DIFF_PREFIX[block.origin]
        lines.append(f"@@ {index} {block.origin.value} @@")
        for line in block.value.splitlines():
            lines.append(f"{prefix}{line}")
    return "\n".join(lines)


def write_project(files: list[FileNode], output_dir: str) -> list[str]:
    """Write generated files below ``output_dir``.

    Paths that would escape the directory are skipped.

    Returns:
        Relative paths that were written.
    """
    root = Path(output_dir).expanduser().resolve()
    written: list[str] = []
    for file in files:
        if ".." in Path(file.path).parts:
            continue
        target = (root / file.path).resolve()
        if not target.is_relative_to(root):
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(file.content, encoding="utf-8")
        written.append(file.path)
    return written


def load_project(project_dir: str) -> ProjectState:
    """Build a ProjectState from files on disk, skipping hidden paths."""
    root = Path(project_dir).resolve()
    if not root.is_dir():
        print(f"Error: '{project_dir}' is not a valid directory.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)

    files: list[FileNode] = []
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if not path.is_file() or any(part.startswith(".") for part in relative.parts):
            continue
        files.append(FileNode(
            name=path.name,
            path=relative.as_posix(),
            content=path.read_text(encoding="utf-8"),
        ))
    return ProjectState(name=root.name, files=files, plan=[f.path for f in files])


def create_components(settings) -> dict:
    """Create the planner and hybrid generator from provider settings.

    Agent imports are deferred to avoid loading anthropic/openai/langgraph
    for the synthesize and --dry-run paths.

    Returns:
        Dict with keys: planner, generator.
    """
    from hybrid_architect.agents.cloud_generator import CloudGenerator
    from hybrid_architect.agents.hybrid_generator import HybridFileGenerator
    from hybrid_architect.agents.llm_client import LLMClient
    from hybrid_architect.agents.local_generator import LocalGenerator
    from hybrid_architect.agents.planner import Planner

    client = LLMClient.from_env(model=settings.cloud_model) if settings.use_cloud else None
    return {
        "planner": Planner(client),
        "generator": HybridFileGenerator(
            cloud=CloudGenerator(client, enabled=settings.use_cloud),
            local=LocalGenerator(settings),
        ),
    }


def format_result_json(result: dict) -> str:
    """Serialize a pipeline result dict to JSON.

    Pydantic values are dumped with mode="json"; anything else falls back to str().
    """

    def _serialize(obj):
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        if isinstance(obj, list):
            return [_serialize(item) for item in obj]
        return obj

    prepared = {k: _serialize(v) for k, v in result.items()}
    return json.dumps(prepared, indent=2, default=str)


def print_result_human(result: dict) -> None:
    """Print pipeline results in human-readable format."""
    print(f"\n{'='*60}")
    print("Hybrid Architect Results")
    print(f"{'='*60}")
    print(f"\nPrompt: {result.get('prompt', '')}")

    plan = result.get("plan", [])
    print(f"\nPlanned files ({len(plan)}):")
    for path in plan:
        print(f"  - {path}")

    files = result.get("files", [])
    print(f"\nFiles synthesized: {len(files)}")
    for file in files:
        local_blocks = sum(1 for d in file.diff or [] if d.origin == DiffOrigin.LOCAL)
        print(f"  {file.path}: {len(file.content)} chars, {local_blocks} local block(s)")

    github = result.get("github")
    if github is not None:
        print(f"\nRepository: {github.url}")

    errors = result.get("errors", [])
    if errors:
        print(f"\nErrors ({len(errors)}):")
        for err in errors:
            print(f"  - {err}")

    print(f"\n{'='*60}")


def determine_exit_code(result: dict) -> int:
    return EXIT_PIPELINE_ERRORS if result.get("errors") else EXIT_SUCCESS


def _handle_error(label: str, exc: BaseException, verbose: bool, exit_code: int) -> int:
    """Print error message to stderr and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    if verbose:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def _deploy(project: ProjectState, settings):
    from hybrid_architect.deploy import GitHubService, deploy_project

    if not settings.github_token:
        raise AgentError("No GitHub token found. Set GITHUB_TOKEN or HYBRID_ARCHITECT_GITHUB_TOKEN.")
    return deploy_project(project, GitHubService(settings.github_token))


def run_synthesize(args: argparse.Namespace) -> int:
    cloud_text = read_candidate(args.cloud_file)
    local_text = read_candidate(args.local_file)
    result = synthesize(cloud_text, local_text)

    code = result.code
    if args.pin:
        try:
            code = apply_overrides(result.diff, args.pin)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_INVALID_INPUT

    if args.output_json:
        data = result.model_dump(mode="json")
        data["code"] = code
        data["pinned"] = sorted(set(args.pin))
        print(json.dumps(data, indent=2))
        return EXIT_SUCCESS

    print(code)
    if args.show_diff:
        print(f"\n{'='*60}")
        print(format_diff(result))
    return EXIT_SUCCESS


def run_build(args: argparse.Namespace) -> int:
    settings = load_settings()
    config = {
        "prompt": args.prompt,
        "output_dir": args.output_dir,
        "deploy": args.deploy,
        **safe_settings_view(settings),
    }

    if args.dry_run:
        if args.output_json:
            print(json.dumps(config, indent=2))
        else:
            print("\nConfiguration:")
            print(f"{'='*40}")
            for key, value in config.items():
                print(f"  {key}: {value}")
            print(f"{'='*40}")
        return EXIT_SUCCESS

    from hybrid_architect.agents.planner import MAX_PLANNED_FILES
    from hybrid_architect.orchestrator import build_graph, make_initial_state, to_project

    components = create_components(settings)
    graph = build_graph(**components)
    state = make_initial_state(prompt=args.prompt, context=args.context)
    result = graph.invoke(
        state,
        config={"recursion_limit": MAX_PLANNED_FILES + RECURSION_HEADROOM},
    )
    result = dict(result)

    written = write_project(result.get("files", []), args.output_dir)
    if args.verbose:
        print(f"Wrote {len(written)} file(s) to {args.output_dir}", file=sys.stderr)

    if args.deploy:
        project = to_project(result)
        result["github"] = _deploy(project, settings)

    if args.output_json:
        print(format_result_json(result))
    else:
        print_result_human(result)
    return determine_exit_code(result)


def run_deploy(args: argparse.Namespace) -> int:
    settings = load_settings()
    project = load_project(args.project_dir)
    github = _deploy(project, settings)
    print(f"Deployed {len(project.files)} file(s) to {github.url}")
    return EXIT_SUCCESS


_COMMANDS = {
    "synthesize": run_synthesize,
    "build": run_build,
    "deploy": run_deploy,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        return _COMMANDS[args.command](args)

    except SystemExit as exc:
        return exc.code

    except ConfigError as exc:
        return _handle_error("Configuration error", exc, args.verbose, EXIT_INVALID_INPUT)

    except AgentError as exc:
        return _handle_error("Agent error", exc, args.verbose, EXIT_AGENT_ERROR)

    except OrchestratorError as exc:
        return _handle_error("Orchestrator error", exc, args.verbose, EXIT_ORCHESTRATOR_ERROR)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.verbose, EXIT_UNEXPECTED)


def run() -> None:
    sys.exit(main())
