"""Configuration management commands."""

import click


@click.group()
def config() -> None:
    """Configuration commands."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    from pdfchain.cli.helpers import emit_json, get_context_config, wants_json
    from pdfchain.cli.progress import console

    config_obj = get_context_config(ctx)

    if wants_json(ctx):
        emit_json({"source": config_obj._source, **config_obj.to_dict()})
        return

    console.print("\n[bold]Current Configuration[/bold]")
    console.print(f"[dim]Source: {config_obj._source or 'defaults'}[/dim]\n")

    for section_name, section in config_obj.to_dict().items():
        if section:
            console.print(f"[bold blue]\\[{section_name}][/bold blue]")
            for key, value in section.items():
                console.print(f"  {key} = {value!r}")
            console.print()


@config.command("init")
@click.option("--output", "-o", default="pdfchain.toml", help="Output file path")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing file")
def config_init(output: str, force: bool) -> None:
    """Create a default configuration file."""
    from pathlib import Path

    from pdfchain.cli.progress import print_error, print_success
    from pdfchain.core.config import create_default_config_file

    if Path(output).exists() and not force:
        print_error(f"File already exists: {output}")
        click.echo("Use --force to overwrite.")
        raise SystemExit(1)

    path = create_default_config_file(output)
    print_success(f"Created configuration file: {path}")


@config.command("path")
def config_path() -> None:
    """Show configuration file search paths."""
    from pdfchain.cli.progress import console
    from pdfchain.core.config import find_config_file, get_config_locations

    console.print("\n[bold]Configuration File Search Paths[/bold]\n")
    console.print("Files are merged lowest priority first; --config overrides all:\n")

    active_config = find_config_file()
    for i, location in enumerate(get_config_locations(), 1):
        status = (
            "[green]✓ ACTIVE[/green]"
            if location == active_config
            else ("[dim]exists[/dim]" if location.exists() else "[dim]not found[/dim]")
        )
        console.print(f"  {i}. {location} {status}")

    console.print()
