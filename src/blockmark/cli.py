"""CLI entry point for Blockmark."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from blockmark import __version__
from blockmark.builder import RendererBuilder
from blockmark.config import load_config
from blockmark.errors import BlockmarkError
from blockmark.models.document import Document
from blockmark.render.registry import FLAVORS, block_registry, style_registry
from blockmark.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)
err_console = Console(stderr=True)


@click.group()
@click.version_option(__version__, prog_name="blockmark")
def cli():
    """Blockmark - Render block-structured documents as HTML or Markdown."""
    pass


@cli.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (default: ~/.config/blockmark/config.yaml)",
)
@click.option("--flavor", type=click.Choice(FLAVORS), help="Output flavor (overrides config)")
@click.option(
    "--front-matter",
    type=click.Choice(["json", "yaml", "none"]),
    help="Front matter format (overrides config)",
)
@click.option("--skip-unsupported", is_flag=True, default=None, help="Omit blocks that have no renderer")
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write output to this file instead of stdout",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def render(
    document: Path,
    config_path: Optional[Path],
    flavor: Optional[str],
    front_matter: Optional[str],
    skip_unsupported: Optional[bool],
    output: Optional[Path],
    verbose: bool,
):
    """
    Render a document tree (JSON or YAML) to markup.

    The document holds a list of blocks, optionally with page properties:

    \b
        {"properties": {"Title": "Notes"},
         "blocks": [{"type": "paragraph",
                     "text_runs": [{"text": "Hi", "styles": {"bold": true}}]}]}
    """
    configure_logging(level="DEBUG" if verbose else None)

    try:
        config = load_config(config_path)
        builder = RendererBuilder.from_config(config)
        if flavor:
            builder.set_flavor(flavor)
        if front_matter:
            builder.set_data_formatter(front_matter)
        if skip_unsupported:
            builder.skip_unsupported(True)
        renderer = builder.build()

        doc = Document.load(document)
        result = renderer.render_document(doc)

    except (BlockmarkError, ValueError, FileNotFoundError) as e:
        logger.error("render_failed", document=str(document), error=str(e))
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise SystemExit(1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result, encoding="utf-8")
        logger.info("output_written", path=str(output))
    else:
        click.echo(result, nl=False)


@cli.command()
@click.option("--flavor", type=click.Choice(FLAVORS), default="html", show_default=True)
def types(flavor: str):
    """List the block types and style kinds a flavor renders by default."""
    click.echo(f"Block types ({flavor}):")
    for block_type in block_registry(flavor):
        click.echo(f"  {block_type}")
    click.echo(f"Style kinds ({flavor}):")
    for kind in style_registry(flavor):
        click.echo(f"  {kind}")


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
