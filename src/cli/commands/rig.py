"""Grab rig CLI commands."""

import sys
import click
from typing import Optional, Any

from cli.utils.config import get_config
from cli.utils.output import (
    format_output,
    handle_grab_rig_errors,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from grab_rig import Report, build_template, fix_template
from grab_rig.graph import describe_hierarchy
from grab_rig.template_store import close_template, open_template


@click.group()
def rig():
    """Grab rig operations - fix templates, build ragdoll rigs, inspect hierarchies."""
    pass


def _emit_report(report: Report, success_message: str) -> None:
    config = get_config()
    click.echo(format_output(report.model_dump(mode="json"), config.format))
    for warning in report.warnings:
        print_warning(warning)
    if report.errors:
        for error in report.errors:
            print_error(error.message)
        sys.exit(1)
    if report.processed:
        print_success(success_message)


@rig.command("fix")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--proxy-parent", "-p",
    default=None,
    help="Node that anchors the temporary grab joints. Defaults to the template root."
)
@handle_grab_rig_errors
def fix(path: str, proxy_parent: Optional[str]):
    """Fix grab rigs on every Grabbable node of a template and save it.

    \b
    Examples:
        grab-rig rig fix "Templates/TeddyBear.json"
        grab-rig rig fix "Templates/TeddyBear.json" --proxy-parent "Interaction Root"
    """
    report = fix_template(path, proxy_parent)
    _emit_report(report, f"Fixed {report.processed} node(s) in {path}")


@rig.command("build")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--proxy-parent", "-p",
    default=None,
    help="Node that anchors the temporary grab joints. Defaults to the template root."
)
@click.option(
    "--save", "-s",
    is_flag=True,
    help="Write the rigged hierarchy back to the template."
)
@handle_grab_rig_errors
def build(path: str, proxy_parent: Optional[str], save: bool):
    """Build a ragdoll grab rig on every node with a PhysicalBody.

    \b
    Examples:
        grab-rig rig build "Templates/Character.json"
        grab-rig rig build "Templates/Character.json" --proxy-parent "Interaction Root" --save
    """
    report = build_template(path, proxy_parent, save=save)
    _emit_report(report, f"Configured {report.processed} limb(s) in {path}")
    if report.processed and not save:
        print_info("Dry run: pass --save to write the changes.")


@rig.command("hierarchy")
@click.argument("path", type=click.Path(dir_okay=False))
@handle_grab_rig_errors
def hierarchy(path: str):
    """Show a template's node hierarchy and capabilities.

    \b
    Examples:
        grab-rig rig hierarchy "Templates/TeddyBear.json"
        grab-rig --format json rig hierarchy "Templates/TeddyBear.json"
    """
    config = get_config()
    context = open_template(path)
    try:
        lines = describe_hierarchy(context.root)
    finally:
        close_template(context)

    if config.format == "json":
        result: dict[str, Any] = {"path": path, "hierarchy": lines}
        click.echo(format_output(result, config.format))
    else:
        click.echo("\n".join(lines))
