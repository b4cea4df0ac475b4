"""
Command-line host for the source generators.

Imports a domain package, collects text resources, runs the generator
passes and writes the artifacts they produce.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import run_generators
from .codegen.core.config import ConfigError, GeneratorConfig, load_config
from .codegen.core.generator import GenerationResult
from .codegen.core.metadata import AdditionalText
from .codegen.core.reflection import compilation_from_package
from .codegen.registry import RegistryError, get_registry
from .logging_config import get_logger, setup_logging
from .utils import ResourceLoaderError, load_text_from_url, load_texts_from_directory

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="builderkit",
        description="Generate fluent builders and translation constants",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  builderkit generate domain --output generated/
  builderkit generate shop.models --namespace shop --resources i18n/
  builderkit generate domain -g builder -g translations --show
  builderkit list-generators
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", help="Run generator passes")
    generate.add_argument("package", help="Importable domain package to describe")
    generate.add_argument("--namespace", help="Namespace prefix of builder targets")
    generate.add_argument(
        "--assembly", help="Assembly name reported for the package (default: top-level name)"
    )
    generate.add_argument(
        "--generator",
        "-g",
        action="append",
        metavar="NAME",
        help="Generator to run; repeatable (default: all)",
    )
    generate.add_argument("--resources", metavar="DIR", help="Directory of text resources")
    generate.add_argument(
        "--resource-url",
        action="append",
        default=[],
        metavar="URL",
        help="Remote text resource; repeatable",
    )
    generate.add_argument("--output", "-o", metavar="DIR", help="Directory for artifacts")
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate.add_argument(
        "--show", action="store_true", help="Print artifacts instead of only writing them"
    )
    generate.add_argument(
        "--verbose", action="store_true", help="Show pass metadata"
    )
    generate.set_defaults(func=_handle_generate)

    list_parser = subparsers.add_parser("list-generators", help="List generators")
    list_parser.set_defaults(func=_handle_list_generators)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides = {}
    if args.namespace:
        overrides["target_namespace"] = args.namespace

    try:
        config = load_config(custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    # Default builder targets to the imported package.
    if not args.namespace and not args.config:
        config.target_namespace = args.package

    return config


def _collect_resources(args: argparse.Namespace) -> List[AdditionalText]:
    texts: List[AdditionalText] = []
    try:
        if args.resources:
            texts.extend(load_texts_from_directory(args.resources))
        for url in args.resource_url:
            texts.append(load_text_from_url(url))
    except (FileNotFoundError, ResourceLoaderError) as e:
        raise CLIError(f"Failed to load resources: {e}") from e
    return texts


def _handle_generate(args: argparse.Namespace) -> int:
    config = _build_config(args)

    try:
        compilation = compilation_from_package(args.package, args.assembly)
    except Exception as e:
        # Any error raised while importing the domain package or its submodules.
        raise CLIError(f"Cannot import {args.package}: {e}") from e

    # The imported package is the assembly being compiled.
    if not args.assembly:
        config.target_assembly = compilation.assembly_name

    texts = _collect_resources(args)
    logger.info(
        "Generating for %s (namespace %r, %d resources)",
        args.package,
        config.target_namespace,
        len(texts),
    )

    try:
        results = run_generators(compilation, texts, args.generator, config)
    except RegistryError as e:
        raise CLIError(str(e)) from e

    output_dir = Path(args.output) if args.output else None
    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

    for result in results.values():
        for artifact in result.artifacts:
            if output_dir:
                path = output_dir / artifact.file_name
                path.write_text(artifact.text, encoding="utf-8")
                console.print(f"[green]✓[/green] Wrote {path}")
            if args.show or not output_dir:
                console.print(
                    Panel(
                        Syntax(artifact.text, "python", line_numbers=False),
                        title=artifact.file_name,
                        border_style="green",
                    )
                )

    _print_summary(results, args.verbose)
    return 0 if all(result.success for result in results.values()) else 1


def _print_summary(results: Dict[str, GenerationResult], verbose: bool):
    table = Table(title="Generation Passes", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Generator", style="bold")
    table.add_column("Artifact", style="cyan")
    table.add_column("Status")
    if verbose:
        table.add_column("Metadata", style="dim")

    for name, result in results.items():
        artifact = result.artifact.file_name if result.artifact else "[dim]none[/dim]"
        status = "[green]ok[/green]" if result.success else "[red]failed[/red]"
        row = [name, artifact, status]
        if verbose:
            row.append(", ".join(f"{k}={v}" for k, v in result.metadata.items()))
        table.add_row(*row)

    console.print(table)

    diagnostics = [
        (name, d) for name, result in results.items() for d in result.diagnostics
    ]
    if not diagnostics:
        return

    diag_table = Table(title="Diagnostics", box=box.SIMPLE, header_style="bold red")
    diag_table.add_column("Generator")
    diag_table.add_column("Id", style="bold")
    diag_table.add_column("Severity")
    diag_table.add_column("Message")
    for name, diagnostic in diagnostics:
        diag_table.add_row(
            name, diagnostic.id, diagnostic.severity.value, diagnostic.message
        )
    console.print(diag_table)


def _handle_list_generators(args: argparse.Namespace) -> int:
    registry = get_registry()

    table = Table(title="📋 Generators", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Generator", style="bold green", no_wrap=True)
    table.add_column("Artifact", style="cyan")
    table.add_column("Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name in registry.list_generators():
        info = registry.get_generator_info(name)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, info["artifact"], info["class"], aliases)

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
