"""Arbor command line: run the demo tree, inspect tree definitions, check CI config.

Usage::

    # Tick the add/subtract example at 4 Hz, printing the tree each tick
    arbor demo --hz 4

    # Print the structure of a YAML tree definition
    arbor show tree.yaml

    # Verify the coverage workflow's triggers and step order
    arbor check-workflow .github/workflows/coverage.yml
"""

from __future__ import annotations

import logging
import sys

import click

from arbor.config import settings
from arbor.errors import ArborError


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    )


@click.group()
def cli():
    """Arbor: behavior trees for Python."""
    _configure_logging()


# ── demo ──────────────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--hz",
    type=float,
    default=None,
    help="Tick frequency (default: ARBOR_DEFAULT_TICK_HZ; <= 0 for full speed).",
)
@click.option(
    "--work-seconds",
    type=float,
    default=1.0,
    show_default=True,
    help="How long the simulated slow action takes.",
)
def demo(hz: float | None, work_seconds: float):
    """Run the add/subtract example tree."""
    from arbor.examples import INPUT_A, INPUT_B, ArithmeticWorld, arithmetic_tree
    from arbor.tree import BehaviorTree

    freq = settings.arbor_default_tick_hz if hz is None else hz
    world = ArithmeticWorld(work_seconds=work_seconds)
    tree = BehaviorTree(arithmetic_tree())
    click.echo(str(tree))

    try:
        result = tree.run(freq, world, hook=lambda t: click.echo(str(t)))
    except ArborError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Tree finished: {str(result)}")
    click.echo(f"INPUT_A: {INPUT_A}\nINPUT_B: {INPUT_B}")
    click.echo(f"add_res={world.add_res} sub_res={world.sub_res}")


# ── show ──────────────────────────────────────────────────────────────


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit a NodeMessage JSON snapshot.")
def show(path: str, as_json: bool):
    """Print the structure of a YAML tree definition."""
    from arbor.loader import load_tree

    try:
        tree = load_tree(path, {}, stub_missing=True)
    except ArborError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(tree.root.to_message().model_dump_json(indent=2))
    else:
        _echo_outline(tree.root)


def _echo_outline(node, depth: int = 0) -> None:
    label = node.name if node.name == node.type_name else f"{node.name} [{node.type_name}]"
    click.echo(f"{'  ' * depth}- {label}")
    for child in node.children():
        _echo_outline(child, depth + 1)


# ── check-workflow ────────────────────────────────────────────────────


@cli.command("check-workflow")
@click.argument("path", type=click.Path(dir_okay=False), default=".github/workflows/coverage.yml")
@click.option("--job", "job_id", default="coverage", show_default=True, help="Job id to check.")
def check_workflow(path: str, job_id: str):
    """Verify a coverage workflow's triggers and step order."""
    from arbor.ci.workflow import check_coverage_workflow, load_workflow

    try:
        workflow = load_workflow(path)
    except ArborError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)

    problems = check_coverage_workflow(workflow, job_id=job_id)
    if problems:
        click.secho(f"{workflow.name} ({workflow.file}): {len(problems)} problem(s)", fg="red", err=True)
        for problem in problems:
            click.echo(f"  - {problem}", err=True)
        sys.exit(1)

    click.secho(f"{workflow.name} ({workflow.file}): OK", fg="green")


if __name__ == "__main__":
    cli()
