"""CI workflow introspection."""

from arbor.ci.workflow import (
    Job,
    Step,
    Workflow,
    check_coverage_workflow,
    load_workflow,
    parse_workflows,
)

__all__ = [
    "Job",
    "Step",
    "Workflow",
    "check_coverage_workflow",
    "load_workflow",
    "parse_workflows",
]
