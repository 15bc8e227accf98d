"""Tests for the CI workflow parser and coverage-workflow checks."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from arbor.ci.workflow import check_coverage_workflow, load_workflow, parse_workflows
from arbor.errors import WorkflowError

REPO_WORKFLOW = Path(__file__).resolve().parents[2] / ".github" / "workflows" / "coverage.yml"

GOOD_WORKFLOW = textwrap.dedent(
    """
    on:
      push:
        branches: [main]
      pull_request:

    name: Code Coverage

    jobs:
      coverage:
        name: coverage
        runs-on: ubuntu-latest
        steps:
          - name: checkout source
            uses: actions/checkout@v4
          - name: Install Python toolchain
            uses: actions/setup-python@v5
            with:
              python-version: "3.12"
          - name: Run pytest-cov
            run: pytest --cov=arbor --cov-report=xml
          - name: Upload to codecov.io
            uses: codecov/codecov-action@v4.5.0
    """
)


@pytest.fixture
def write_workflow(tmp_path):
    def write(text: str, name: str = "coverage.yml") -> Path:
        workflows = tmp_path / ".github" / "workflows"
        workflows.mkdir(parents=True, exist_ok=True)
        path = workflows / name
        path.write_text(text, encoding="utf-8")
        return path

    return write


class TestRepositoryWorkflow:
    """The repository's own coverage workflow must conform."""

    def test_conforms(self):
        workflow = load_workflow(REPO_WORKFLOW)
        assert check_coverage_workflow(workflow) == []

    def test_triggers(self):
        workflow = load_workflow(REPO_WORKFLOW)
        assert workflow.triggers_on("push", "main")
        assert not workflow.triggers_on("push", "feature/x")
        assert workflow.triggers_on("pull_request", "feature/x")
        assert not workflow.triggers_on("schedule")


class TestLoadWorkflow:
    def test_parses_jobs_and_steps(self, write_workflow):
        workflow = load_workflow(write_workflow(GOOD_WORKFLOW))

        assert workflow.name == "Code Coverage"
        assert workflow.file == "coverage.yml"
        assert set(workflow.triggers) == {"push", "pull_request"}

        job = workflow.job("coverage")
        assert job is not None
        assert job.runs_on == "ubuntu-latest"
        assert [s.label for s in job.steps][0] == "checkout source"
        assert job.steps[1].with_ == {"python-version": "3.12"}

    def test_name_defaults_to_file_stem(self, write_workflow):
        workflow = load_workflow(write_workflow("on: push\njobs: {}\n", name="ci.yml"))
        assert workflow.name == "ci"
        assert workflow.triggers_on("push", "anything")

    def test_list_triggers(self, write_workflow):
        workflow = load_workflow(write_workflow("on: [push, pull_request]\n"))
        assert set(workflow.triggers) == {"push", "pull_request"}

    def test_non_mapping_raises(self, write_workflow):
        with pytest.raises(WorkflowError, match="mapping"):
            load_workflow(write_workflow("- just\n- a list\n"))

    def test_invalid_yaml_raises(self, write_workflow):
        with pytest.raises(WorkflowError, match="Invalid YAML"):
            load_workflow(write_workflow("on: [push\n"))

    @pytest.mark.parametrize("jobs", ["jobs:\n  - build\n", "jobs: 3\n"])
    def test_jobs_not_a_mapping_raises(self, write_workflow, jobs):
        with pytest.raises(WorkflowError, match="must map job ids"):
            load_workflow(write_workflow("on: push\n" + jobs))

    def test_malformed_on_raises(self, write_workflow):
        with pytest.raises(WorkflowError, match="malformed 'on'"):
            load_workflow(write_workflow("on: 3\njobs: {}\n"))

    def test_empty_on_has_no_triggers(self, write_workflow):
        assert load_workflow(write_workflow("on:\njobs: {}\n")).triggers == {}

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(WorkflowError, match="Cannot read"):
            load_workflow(tmp_path / "missing.yml")


class TestCheckCoverageWorkflow:
    def test_good_workflow(self, write_workflow):
        assert check_coverage_workflow(load_workflow(write_workflow(GOOD_WORKFLOW))) == []

    def test_wrong_push_branch(self, write_workflow):
        text = GOOD_WORKFLOW.replace("branches: [main]", "branches: [develop]")
        problems = check_coverage_workflow(load_workflow(write_workflow(text)))
        assert any("branch 'main'" in p for p in problems)

    def test_extra_trigger(self, write_workflow):
        text = GOOD_WORKFLOW.replace("  pull_request:\n", "  pull_request:\n  schedule:\n")
        problems = check_coverage_workflow(load_workflow(write_workflow(text)))
        assert any("triggers must be exactly" in p for p in problems)

    def test_steps_out_of_order(self, write_workflow):
        text = GOOD_WORKFLOW.replace("actions/checkout@v4", "TMP").replace(
            "codecov/codecov-action@v4.5.0", "actions/checkout@v4"
        ).replace("TMP", "codecov/codecov-action@v4.5.0")
        problems = check_coverage_workflow(load_workflow(write_workflow(text)))
        assert any(p.startswith("step 1") for p in problems)
        assert any(p.startswith("step 4") for p in problems)

    def test_unpinned_action(self, write_workflow):
        text = GOOD_WORKFLOW.replace("codecov/codecov-action@v4.5.0", "codecov/codecov-action@")
        problems = check_coverage_workflow(load_workflow(write_workflow(text)))
        assert any("pin an action version" in p for p in problems)

    def test_missing_coverage_flag(self, write_workflow):
        text = GOOD_WORKFLOW.replace("pytest --cov=arbor --cov-report=xml", "pytest")
        problems = check_coverage_workflow(load_workflow(write_workflow(text)))
        assert any("coverage tool" in p for p in problems)

    def test_missing_job(self, write_workflow):
        problems = check_coverage_workflow(load_workflow(write_workflow(GOOD_WORKFLOW)), job_id="lint")
        assert problems == ["missing job 'lint'"]


class TestParseWorkflows:
    def test_collects_yml_and_yaml(self, tmp_path, write_workflow):
        write_workflow(GOOD_WORKFLOW, name="coverage.yml")
        write_workflow("name: Lint\non: push\n", name="lint.yaml")
        write_workflow("- broken\n", name="bad.yml")

        names = sorted(w.name for w in parse_workflows(tmp_path))
        assert names == ["Code Coverage", "Lint"]

    def test_skips_file_with_list_jobs(self, tmp_path, write_workflow):
        write_workflow(GOOD_WORKFLOW, name="coverage.yml")
        write_workflow("name: Broken\non: push\njobs:\n  - build\n", name="broken.yml")

        assert [w.name for w in parse_workflows(tmp_path)] == ["Code Coverage"]

    def test_no_workflows_dir(self, tmp_path):
        assert parse_workflows(tmp_path) == []
