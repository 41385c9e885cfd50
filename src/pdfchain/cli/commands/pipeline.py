"""Pipeline validation and planning commands."""

from typing import Tuple

import click


@click.command("validate")
@click.argument("tool_ids", nargs=-1, required=True)
@click.option("--strict", is_flag=True, help="Treat warnings and suggestions as errors")
@click.pass_context
def validate(ctx: click.Context, tool_ids: Tuple[str, ...], strict: bool) -> None:
    """Check the ordering of a tool sequence.

    Exits with status 1 when the pipeline is invalid.

    Examples:
        pdfchain validate unlock rotate encrypt
        pdfchain validate --strict encrypt rotate
    """
    from pdfchain.cli.helpers import emit_json, get_controller, wants_json
    from pdfchain.cli.progress import print_error, print_success, print_validation_warnings, print_warning
    from pdfchain.core.pipeline.registry import get_tool

    controller = get_controller(ctx)
    result = controller.validate_tools(list(tool_ids), strict=strict)

    if wants_json(ctx):
        emit_json(result.to_dict())
        raise SystemExit(0 if result.success else 1)

    for tool_id in tool_ids:
        if get_tool(tool_id) is None:
            print_warning(f"Unknown tool id: {tool_id}")

    if result.success:
        print_success(result.message)
        print_validation_warnings(result.data.warnings)
        return

    print_error("Pipeline is invalid")
    print_validation_warnings(result.data.warnings)
    raise SystemExit(1)


@click.command("plan")
@click.argument("tool_ids", nargs=-1)
@click.option("--preset", "preset_id", help="Plan a preset instead of explicit tools")
@click.option("--pages", "-p", default=1, type=click.IntRange(min=1), show_default=True,
              help="Page count of the input document")
@click.option("--size", "-s", "file_size", default=0, type=click.IntRange(min=0),
              help="Input size in bytes")
@click.pass_context
def plan(ctx: click.Context, tool_ids: Tuple[str, ...], preset_id: str, pages: int, file_size: int) -> None:
    """Show the steps of a pipeline with time estimates.

    Examples:
        pdfchain plan rotate add-page-numbers encrypt --pages 120
        pdfchain plan --preset scan-cleanup
    """
    from pdfchain.cli.helpers import emit_json, exit_with_error, get_controller, handle_result, wants_json
    from pdfchain.cli.progress import print_summary, print_table, print_validation_warnings
    from pdfchain.core.pipeline.registry import format_time

    controller = get_controller(ctx)

    if preset_id and tool_ids:
        exit_with_error("Give either tool ids or --preset, not both")
    if preset_id:
        if preset_id not in {p.id for p in controller.presets}:
            exit_with_error(f"Unknown preset: {preset_id}")
        controller.load_preset(preset_id)
        tools_to_plan = controller.selected_tools
    else:
        tools_to_plan = list(tool_ids)

    result = controller.plan(tools_to_plan, page_count=pages, file_size=file_size)

    if wants_json(ctx):
        emit_json(result.to_dict())
        if not result.success:
            raise SystemExit(1)
        return

    pipeline_plan = handle_result(result)

    rows = [
        [s.step, s.tool_id, s.name, format_time(s.estimated_seconds)]
        for s in pipeline_plan.steps
    ]
    print_table("Pipeline Plan", ["Step", "Tool", "Name", "Estimate"], rows)

    findings = controller.validate_tools(tools_to_plan).data.warnings
    if findings:
        print_validation_warnings(findings)

    print_summary(
        "Summary",
        {
            "Steps": len(pipeline_plan.steps),
            "Estimated time": format_time(pipeline_plan.estimated_seconds),
            "Valid": "yes" if pipeline_plan.valid else "no",
            "Ready to start": "yes" if pipeline_plan.can_start else "no",
        },
        style="green" if pipeline_plan.can_start else "yellow",
    )
