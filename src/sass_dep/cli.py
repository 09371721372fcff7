"""CLI entry point for sass-dep."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import click
from pydantic import ValidationError

from sass_dep import __version__
from sass_dep.analyzer import Constraints, check_constraints
from sass_dep.config import ProjectConfig, find_config, load_config
from sass_dep.errors import SassDepError
from sass_dep.pipeline import AnalysisResult, run_analysis


@dataclass
class _Settings:
    root: Path
    config: ProjectConfig
    load_paths: list[Path]


@click.group()
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
    help="Project root. Node ids and entry paths are relative to it (default: .).",
)
@click.option(
    "-I", "--load-path", "load_paths",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    multiple=True,
    help="Extra directory to search for modules. May be repeated.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    default=None,
    help="Config file. Defaults to sass-dep.yaml in the root, if present.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Only log errors.")
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    root: str,
    load_paths: tuple[str, ...],
    config_path: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Analyze the @use / @forward / @import graph of a Sass project."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")

    root_path = Path(root)
    path = Path(config_path) if config_path else find_config(root_path)
    try:
        config = load_config(path) if path else ProjectConfig()
    except SassDepError as exc:
        raise click.ClickException(str(exc)) from exc

    ctx.obj = _Settings(
        root=root_path,
        config=config,
        load_paths=[Path(p) for p in load_paths],
    )


def _run(settings: _Settings, entries: tuple[str, ...], include_orphans: bool) -> AnalysisResult:
    entry_points = [Path(e) for e in entries] or [Path(e) for e in settings.config.entry_points]
    if not entry_points:
        raise click.UsageError("No entry points given and none configured.")

    config = settings.config
    try:
        return run_analysis(
            settings.root,
            entry_points,
            resolver_config=config.resolver_config(settings.root, settings.load_paths),
            analyzer_config=config.analyzer_config(),
            include_orphans=include_orphans or config.include_orphans,
        )
    except SassDepError as exc:
        raise click.ClickException(str(exc)) from exc


def _emit(text: str, output: str | None, what: str) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        click.echo(f"{what} written to {output}")
    else:
        click.echo(text)


# ── analyze ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("entries", nargs=-1)
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["json", "md"], case_sensitive=False),
    default="json",
    help="Output format (default: json).",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option(
    "--include-orphans", is_flag=True, default=False,
    help="Also list stylesheets under the root that no entry point reaches.",
)
@click.pass_obj
def analyze(
    settings: _Settings,
    entries: tuple[str, ...],
    fmt: str,
    output: str | None,
    include_orphans: bool,
) -> None:
    """Build and analyze the dependency graph of ENTRIES."""
    result = _run(settings, entries, include_orphans)

    if fmt.lower() == "md":
        from sass_dep.render.markdown import render_markdown
        _emit(render_markdown(result), output, "Report")
    else:
        from sass_dep.render.schema import OutputSchema, to_json
        _emit(to_json(OutputSchema.from_graph(result.graph, result.root)), output, "Analysis")


# ── check ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("entries", nargs=-1)
@click.option("--no-cycles", is_flag=True, default=False, help="Fail on any dependency cycle.")
@click.option("--max-depth", type=click.IntRange(min=0), default=None, help="Maximum depth from an entry point.")
@click.option("--max-fan-out", type=click.IntRange(min=0), default=None, help="Maximum dependencies per file.")
@click.option("--max-fan-in", type=click.IntRange(min=0), default=None, help="Maximum dependents per file.")
@click.pass_context
def check(
    ctx: click.Context,
    entries: tuple[str, ...],
    no_cycles: bool,
    max_depth: int | None,
    max_fan_out: int | None,
    max_fan_in: int | None,
) -> None:
    """Check ENTRIES against architecture constraints. Exits 1 on violations."""
    result = _run(ctx.obj, entries, include_orphans=False)
    violations = check_constraints(
        result.graph,
        Constraints(
            no_cycles=no_cycles,
            max_depth=max_depth,
            max_fan_out=max_fan_out,
            max_fan_in=max_fan_in,
        ),
    )

    if not violations:
        click.echo("All checks passed.")
        return

    for v in violations:
        click.echo(str(v))
    click.echo(f"\n{len(violations)} violation(s) found.", err=True)
    ctx.exit(1)


# ── export ──────────────────────────────────────────────────────────────────

@main.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["dot", "mermaid", "d2"], case_sensitive=False),
    required=True,
    help="Diagram format.",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout.",
)
def export(input_file: str, fmt: str, output: str | None) -> None:
    """Convert a saved JSON analysis (INPUT) to a diagram."""
    from sass_dep.render.diagrams import to_d2, to_dot, to_mermaid
    from sass_dep.render.schema import load_schema

    try:
        schema = load_schema(Path(input_file).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        raise click.ClickException(f"Cannot load analysis {input_file}: {exc}") from exc

    renderers = {"dot": to_dot, "mermaid": to_mermaid, "d2": to_d2}
    _emit(renderers[fmt.lower()](schema), output, "Diagram")


if __name__ == "__main__":
    main()
