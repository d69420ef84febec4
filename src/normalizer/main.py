"""Main CLI entry point for the OpenAPI normalizer."""

import logging
import sys
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from normalizer.config import NormalizerConfig, get_config_path, load_config
from normalizer.core.loader import load_spec, parse_spec
from normalizer.core.writer import dump_spec, write_spec
from normalizer.errors import TransformError
from normalizer.transformers.manager import (
    RULES,
    apply_pipeline,
    build_pipeline,
    default_rule_names,
)

app = typer.Typer(
    name="openapi-normalizer",
    help="Normalize OpenAPI documents for code generators",
)
# stdout may carry the transformed document, progress goes to stderr
console = Console(stderr=True)
stdout_console = Console()


def _configure_logging(verbose: bool) -> None:
    """Send normalizer log records to the console through Rich."""
    package_logger = logging.getLogger("normalizer")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=console, show_path=False))


def resolve_config(config_path: Path | None) -> NormalizerConfig:
    """
    Load the pipeline configuration.

    Args:
        config_path: Explicit config file, or None to look for
                     .openapi-normalizer.yaml in the current directory

    Returns:
        The loaded configuration (defaults if no file exists)

    Raises:
        FileNotFoundError: If an explicit config file does not exist
    """
    if config_path is None:
        return load_config(get_config_path(Path.cwd()))
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return load_config(config_path)


@app.command()
def normalize(
    input_file: str = typer.Argument(
        ...,
        help="OpenAPI document to normalize (.json, .yaml or .yml), or - for stdin",
    ),
    output_file: str = typer.Argument(
        "-",
        help="Where to write the result, or - for stdout",
    ),
    rules: list[str] = typer.Option(
        None,
        "--rule",
        "-r",
        help="Rule to apply (repeatable, in order). Overrides the config file.",
    ),
    config_file: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Pipeline config file (default: .openapi-normalizer.yaml if present)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each rule and decision"),
) -> None:
    """Normalize an OpenAPI 2.0 or 3.x document.

    This command will:
    1. Read the document (from a file or stdin)
    2. Apply the selected rules in order
    3. Write the result (to a file or stdout) in the same format
    """
    _configure_logging(verbose)

    try:
        config = resolve_config(config_file)

        if input_file == "-":
            spec, file_format = parse_spec(sys.stdin.read())
        else:
            spec, file_format = load_spec(Path(input_file))

        rule_names = rules or config.rules or default_rule_names(spec)
        transformers = build_pipeline(rule_names, config.options)

        with console.status("[bold yellow]Applying rules..."):
            spec = apply_pipeline(spec, transformers, console)

        if output_file == "-":
            sys.stdout.write(dump_spec(spec, file_format))
        else:
            write_spec(spec, Path(output_file), file_format)
    except (TransformError, ValueError, OSError, yaml.YAMLError) as e:
        console.print(f"[bold red]✗[/bold red] Failed to normalize spec: {e}")
        raise typer.Exit(1)

    console.print(f"[bold green]✓[/bold green] Applied {len(transformers)} rule(s)")


@app.command("rules")
def list_rules() -> None:
    """List the available rules."""
    for name, rule in RULES.items():
        summary = (rule.__doc__ or "").strip().splitlines()
        stdout_console.print(f"[bold]{name}[/bold]  [dim]{summary[0] if summary else ''}[/dim]")


if __name__ == "__main__":
    app()
