"""
pdfchain CLI - plan and check document tool pipelines
"""

import click

from pdfchain import __version__
from pdfchain.core.config import load_config_cascade, set_config
from pdfchain.core.logger import set_level

from .commands import config, plan, presets, tools, validate


@click.group()
@click.version_option(version=__version__, prog_name="pdfchain")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Explicit config file (highest priority)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def cli(ctx: click.Context, config_path: str, verbose: bool, as_json: bool) -> None:
    """pdfchain - Linear pipelines of document tools

    Use 'pdfchain COMMAND --help' for more information on a command.
    """
    config_obj = load_config_cascade(config_path)
    set_config(config_obj)
    set_level("DEBUG" if verbose else config_obj.get("logging", "level", "INFO"))

    ctx.ensure_object(dict)
    ctx.obj["config"] = config_obj
    ctx.obj["json"] = as_json


# Register commands
cli.add_command(config)
cli.add_command(plan)
cli.add_command(presets)
cli.add_command(tools)
cli.add_command(validate)


if __name__ == "__main__":
    cli()
