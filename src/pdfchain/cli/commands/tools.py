"""Tool catalog command."""

import click


@click.command("tools")
@click.option("--all", "show_all", is_flag=True, help="Include tools that cannot be chained")
@click.option("--pages", "-p", default=10, type=click.IntRange(min=1), show_default=True,
              help="Page count used for time estimates")
@click.pass_context
def tools(ctx: click.Context, show_all: bool, pages: int) -> None:
    """List the document tools a pipeline can use."""
    from pdfchain.cli.helpers import emit_json, wants_json
    from pdfchain.cli.progress import print_table
    from pdfchain.core.pipeline.registry import TOOL_REGISTRY, estimate_time, format_time

    catalog = [t for t in TOOL_REGISTRY.values() if show_all or t.pipeline_compatible]

    if wants_json(ctx):
        emit_json([
            {
                "id": t.id,
                "name": t.name,
                "description": t.description,
                "category": t.category,
                "pipeline_compatible": t.pipeline_compatible,
                "estimated_seconds": estimate_time(t.id, pages),
            }
            for t in catalog
        ])
        return

    rows = [
        [
            t.id,
            t.name,
            t.category_label,
            t.description,
            format_time(estimate_time(t.id, pages)),
        ]
        for t in catalog
    ]
    print_table(
        f"Tools ({pages} pages)",
        ["ID", "Name", "Category", "Description", "Estimate"],
        rows,
    )
