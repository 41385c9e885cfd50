"""Pipeline preset commands."""

import click


@click.command("presets")
@click.argument("preset_id", required=False)
@click.pass_context
def presets(ctx: click.Context, preset_id: str) -> None:
    """List presets, or show one preset with its validation.

    Presets from the configured presets file are included.
    """
    from pdfchain.cli.helpers import emit_json, exit_with_error, get_controller, wants_json
    from pdfchain.cli.progress import console, print_table, print_validation_warnings
    from pdfchain.core.pipeline.registry import tool_label

    controller = get_controller(ctx)
    available = controller.presets

    if preset_id is None:
        if wants_json(ctx):
            emit_json([p.to_dict() for p in available])
            return
        rows = [[p.id, p.name, " → ".join(p.tools), p.description] for p in available]
        print_table("Pipeline Presets", ["ID", "Name", "Tools", "Description"], rows)
        return

    matches = [p for p in available if p.id == preset_id]
    if not matches:
        exit_with_error(f"Unknown preset: {preset_id}")
    preset = matches[0]

    controller.load_preset(preset)
    validation = controller.validation

    if wants_json(ctx):
        emit_json({**preset.to_dict(), "validation": validation.to_dict()})
        return

    console.print(f"\n[bold]{preset.name}[/bold] [dim]({preset.id})[/dim]")
    if preset.description:
        console.print(f"{preset.description}\n")
    for i, tool_id in enumerate(controller.selected_tools, 1):
        console.print(f"  {i}. {tool_label(tool_id)} [dim]{tool_id}[/dim]")
    if validation.warnings:
        console.print()
        print_validation_warnings(validation.warnings)
    console.print()
