"""GitHub Actions workflow parser and coverage-workflow checks.

Reads ``.github/workflows/*.yml`` into typed models so the repository's
coverage job can be verified: it must trigger on pushes to ``main`` and on
every pull request, and run checkout, toolchain install, coverage run and
report upload, in that order.

Usage::

    from arbor.ci.workflow import load_workflow, check_coverage_workflow

    problems = check_coverage_workflow(load_workflow(".github/workflows/coverage.yml"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from arbor.errors import WorkflowError

logger = logging.getLogger(__name__)

# Action prefixes expected for each coverage job step, in order
COVERAGE_STEP_ACTIONS: list[tuple[str, str]] = [
    ("checkout", "actions/checkout@"),
    ("toolchain", "actions/setup-python@"),
    ("coverage", ""),  # a `run:` step invoking pytest --cov
    ("upload", "codecov/codecov-action@"),
]


class Step(BaseModel):
    """A single job step."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
    uses: str | None = None
    run: str | None = None
    with_: dict[str, Any] = Field(default_factory=dict, alias="with")

    @property
    def label(self) -> str:
        return self.name or self.uses or (self.run or "").split("\n", 1)[0]


class Job(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str | None = None
    runs_on: Any = Field(default="unknown", alias="runs-on")
    steps: list[Step] = Field(default_factory=list)


class Workflow(BaseModel):
    """A parsed workflow file."""

    name: str
    file: str
    triggers: dict[str, dict[str, Any]]
    jobs: list[Job]

    def triggers_on(self, event: str, branch: str | None = None) -> bool:
        """Whether *event* (optionally on *branch*) starts this workflow.

        Only ``branches`` filters are evaluated, as exact names or ``*``.
        """
        if event not in self.triggers:
            return False
        branches = self.triggers[event].get("branches")
        if not branches or branch is None:
            return True
        return any(b == "*" or b == "**" or b == branch for b in branches)

    def job(self, job_id: str) -> Job | None:
        return next((j for j in self.jobs if j.id == job_id), None)


def load_workflow(path: str | Path) -> Workflow:
    """Parse a single workflow file.

    Raises:
        WorkflowError: if the file is unreadable, not YAML, or not a mapping.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise WorkflowError(f"Cannot read workflow {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise WorkflowError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkflowError(f"Workflow {path} must be a mapping at the top level")

    # PyYAML reads the bare key `on` as boolean True
    on_value = data.get("on", data.get(True, {}))

    if on_value is not None and not isinstance(on_value, (str, list, dict)):
        raise WorkflowError(f"Workflow {path} has a malformed 'on' section")

    jobs_value = data.get("jobs") or {}
    if not isinstance(jobs_value, dict):
        raise WorkflowError(f"Workflow {path} must map job ids to jobs under 'jobs'")

    jobs: list[Job] = []
    for job_id, job_def in jobs_value.items():
        if not isinstance(job_def, dict):
            logger.warning("Skipping malformed job %s in %s", job_id, path)
            continue
        try:
            jobs.append(Job.model_validate({**job_def, "id": str(job_id)}))
        except ValidationError as exc:
            raise WorkflowError(f"Invalid job {job_id!r} in {path}: {exc}") from exc

    return Workflow(
        name=str(data.get("name", path.stem)),
        file=path.name,
        triggers=_normalise_triggers(on_value),
        jobs=jobs,
    )


def parse_workflows(repo_dir: str | Path) -> list[Workflow]:
    """Parse every workflow in ``<repo_dir>/.github/workflows``.

    Files that fail to parse are logged and skipped.
    """
    workflows_dir = Path(repo_dir) / ".github" / "workflows"
    if not workflows_dir.is_dir():
        logger.debug("No .github/workflows directory in %s", repo_dir)
        return []

    results: list[Workflow] = []
    for yml_path in sorted([*workflows_dir.glob("*.yml"), *workflows_dir.glob("*.yaml")]):
        try:
            results.append(load_workflow(yml_path))
        except WorkflowError:
            logger.warning("Failed to parse workflow %s", yml_path, exc_info=True)
    return results


def check_coverage_workflow(workflow: Workflow, job_id: str = "coverage") -> list[str]:
    """Check *workflow* against the coverage job's required shape.

    Returns a list of human-readable problems; empty means it conforms.
    """
    problems: list[str] = []

    if set(workflow.triggers) != {"push", "pull_request"}:
        problems.append(
            f"triggers must be exactly push and pull_request, got {sorted(workflow.triggers)}"
        )
    if workflow.triggers.get("push", {}).get("branches") != ["main"]:
        problems.append("push trigger must be limited to branch 'main'")
    if workflow.triggers.get("pull_request", {}).get("branches"):
        problems.append("pull_request trigger must not filter branches")

    job = workflow.job(job_id)
    if job is None:
        problems.append(f"missing job {job_id!r}")
        return problems

    if len(job.steps) != len(COVERAGE_STEP_ACTIONS):
        problems.append(
            f"job {job_id!r} must have {len(COVERAGE_STEP_ACTIONS)} steps, got {len(job.steps)}"
        )

    for index, ((role, prefix), step) in enumerate(zip(COVERAGE_STEP_ACTIONS, job.steps), 1):
        if role == "coverage":
            if not step.run or "--cov" not in step.run:
                problems.append(f"step {index} ({step.label}) must run the coverage tool")
            continue
        if not step.uses or not step.uses.startswith(prefix):
            problems.append(f"step {index} ({step.label}) must use {prefix}<version>")
        elif step.uses == prefix:
            problems.append(f"step {index} ({step.label}) must pin an action version")

    return problems


# ── Internals ─────────────────────────────────────────────────────────


def _normalise_triggers(on_value: Any) -> dict[str, dict[str, Any]]:
    """Normalise the ``on:`` field into ``{event: filters}``."""
    if isinstance(on_value, str):
        return {on_value: {}}
    if isinstance(on_value, list):
        return {str(t): {} for t in on_value}
    if isinstance(on_value, dict):
        return {
            str(event): (cfg if isinstance(cfg, dict) else {})
            for event, cfg in on_value.items()
        }
    return {}
