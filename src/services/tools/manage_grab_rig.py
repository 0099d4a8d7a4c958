"""
Defines the manage_grab_rig tool for reconciling grab interaction rigs on templates.

Actions:
- fix: repair every Grabbable node of a template and save it
- build: derive a ragdoll grab rig from PhysicalBody nodes (saved only with save=true)
- get_hierarchy: list a template's nodes and their capabilities
"""
from typing import Annotated, Any, Literal

from fastmcp import Context
from mcp.types import ToolAnnotations

from grab_rig import GrabRigError, Report, build_template, fix_template
from grab_rig.graph import describe_hierarchy
from grab_rig.models import MCPResponse
from grab_rig.template_store import close_template, open_template
from services.registry import grab_rig_tool
from services.tools.utils import coerce_bool

# Required parameters for each action
REQUIRED_PARAMS = {
    "fix": ["template_path"],
    "build": ["template_path"],
    "get_hierarchy": ["template_path"],
}


@grab_rig_tool(
    description=(
        "Reconciles grab interaction rigs on template hierarchies. "
        "Actions: fix, build, get_hierarchy. "
        "fix repairs every Grabbable node (cleans misplaced interactables, swaps TouchInteractable "
        "for StandardInteractable, wires a PhysicsJointTransformer) and saves the template. "
        "build turns every PhysicalBody node into a non-kinematic grab target; pass save=true to persist."
    ),
    annotations=ToolAnnotations(
        title="Manage Grab Rig",
        destructiveHint=True,
    ),
)
async def manage_grab_rig(
    ctx: Context,
    action: Annotated[
        Literal["fix", "build", "get_hierarchy"],
        "Grab rig operation to perform.",
    ],
    template_path: Annotated[str, "Template file path (e.g., Templates/TeddyBear.json)."] | None = None,
    proxy_parent: Annotated[str, "Name of the node that anchors temporary grab joints. Defaults to the template root."] | None = None,
    save: Annotated[bool | str, "For build: write the rigged hierarchy back to the template."] | None = None,
) -> dict[str, Any]:
    required = REQUIRED_PARAMS.get(action, [])
    for param_name in required:
        param_value = locals().get(param_name)
        if param_value is None or (isinstance(param_value, str) and not param_value.strip()):
            return {
                "success": False,
                "message": f"Action '{action}' requires parameter '{param_name}'."
            }

    await ctx.info(f"Processing manage_grab_rig: {action}")

    if action == "fix":
        return _handle_fix(template_path, proxy_parent)
    if action == "build":
        return _handle_build(template_path, proxy_parent, coerce_bool(save, default=False))
    if action == "get_hierarchy":
        return _handle_get_hierarchy(template_path)
    return {"success": False, "message": f"Unknown action: {action}"}


def _report_response(report: Report) -> dict[str, Any]:
    return MCPResponse(
        success=report.success,
        message=report.summary(),
        error="schema_mismatch" if report.errors else None,
        data=report.model_dump(mode="json"),
    ).model_dump()


def _handle_fix(template_path: str, proxy_parent: str | None) -> dict[str, Any]:
    try:
        report = fix_template(template_path, proxy_parent)
    except GrabRigError as exc:
        return {"success": False, "message": str(exc)}
    return _report_response(report)


def _handle_build(template_path: str, proxy_parent: str | None, save: bool) -> dict[str, Any]:
    try:
        report = build_template(template_path, proxy_parent, save=save)
    except GrabRigError as exc:
        return {"success": False, "message": str(exc)}
    return _report_response(report)


def _handle_get_hierarchy(template_path: str) -> dict[str, Any]:
    try:
        context = open_template(template_path)
    except GrabRigError as exc:
        return {"success": False, "message": str(exc)}
    try:
        lines = describe_hierarchy(context.root)
        node_count = sum(1 for _ in context.root.walk())
    finally:
        close_template(context)
    return {
        "success": True,
        "message": f"Template '{template_path}' has {node_count} node(s)",
        "data": {"hierarchy": lines, "node_count": node_count},
    }
