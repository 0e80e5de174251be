"""CLI for building lookup.

Commands:
- resolve: Free-text lookup by building name, alias or unit number
- unit: Unit-number lookup only
- districts / sub-districts / buildings: Guided drill-down listings
- show: Open one building from the drill-down path
- collisions: List name/alias keys silently overwritten by later rows
- chat: Interactive free-text session
"""

from __future__ import annotations

import locale
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.markup import escape

from . import __version__
from .application.directory import BuildingDirectory, LoadFailed
from .config import LookupConfig
from .config_file import load_lookup_config_file
from .domain.group_index import SortMode
from .domain.records import BuildingRecord
from .domain.resolution import Candidates, Hit, NoMatch, NotReady, Outcome
from .domain.unit_ranges import parse_unit_number
from .exceptions import BuildingLookupError
from .observability.logging import get_logger, set_verbosity

_REFRESH_COMMANDS = {":refresh", ":r"}
_QUIT_COMMANDS = {":quit", ":q"}

logger = get_logger("building_lookup.cli")


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: LookupConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    directory: BuildingDirectory


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: LookupConfig
    deps_builder: DependenciesBuilder

    def loaded_directory(self) -> BuildingDirectory:
        """Build the directory and load it, exiting with code 1 on failure."""
        try:
            deps = self.deps_builder(config=self.config)
        except BuildingLookupError as exc:
            rprint(f"[red]✗ {escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from exc
        result = deps.directory.load_once()
        if isinstance(result, LoadFailed):
            rprint(f"[red]✗ Could not load building data:[/red] {escape(str(result.error))}")
            raise typer.Exit(code=1)
        return deps.directory


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the building-lookup entry point.")


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"building-lookup {__version__}")
        raise typer.Exit()


def _use_environment_collation() -> None:
    """Collate with the locale named by LC_ALL, LC_COLLATE or LANG."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        logger.warning("Locale sort falls back to code point order: %s", exc)


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _print_record(record: BuildingRecord, *, note: str = "") -> None:
    suffix = f" [dim]({note})[/dim]" if note else ""
    rprint(f"[bold]\\[{escape(record.building_name)}][/bold]{suffix}")
    location = " / ".join(part for part in (record.district, record.sub_district) if part)
    if location:
        rprint(f"  {escape(location)}")
    rprint("")
    rprint(escape(record.info) if record.info else "[dim](no info registered)[/dim]")


def _print_not_ready() -> None:
    rprint("[yellow]Building data is not loaded yet. Try again shortly.[/yellow]")


def _print_outcome(outcome: Outcome) -> None:
    match outcome:
        case Hit(record=record, unit=int() as unit):
            _print_record(record, note=f"unit {unit}")
        case Hit(record=record, fuzzy=True):
            _print_record(record, note="similar match")
        case Hit(record=record):
            _print_record(record)
        case Candidates(names=names):
            rprint("Several buildings look similar. Re-run with one of:")
            for name in names:
                rprint(f"  • {escape(name)}")
        case NoMatch():
            rprint("[yellow]No matching building. Check spelling, spacing or aliases.[/yellow]")
        case NotReady():
            _print_not_ready()


def _print_names(names: tuple[str, ...] | NotReady, *, empty_message: str) -> None:
    if isinstance(names, NotReady):
        _print_not_ready()
        return
    if not names:
        rprint(f"[yellow]{escape(empty_message)}[/yellow]")
        return
    for name in names:
        rprint(escape(name))


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Residential building lookup: name, alias or unit number → building info",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        source_file: Annotated[
            Path | None,
            typer.Option(
                "--source-file",
                "-f",
                help="Local JSON file with building rows (overrides LOOKUP_SOURCE_URL)",
            ),
        ] = None,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file with a lookup section",
            ),
        ] = None,
        sort_mode: Annotated[
            SortMode | None,
            typer.Option(
                "--sort",
                help="Ordering of drill-down listings",
            ),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Show load and retry logging"),
        ] = False,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        set_verbosity(logging.INFO if verbose else logging.WARNING)
        config = LookupConfig.from_env()
        if config_path is not None:
            try:
                config = config.with_file_overrides(load_lookup_config_file(config_path))
            except BuildingLookupError as exc:
                raise typer.BadParameter(str(exc), param_hint="--config") from exc
        config = config.with_overrides(
            source_file=str(source_file) if source_file is not None else None,
            sort_mode=sort_mode,
        )
        if config.sort_mode is SortMode.LOCALE:
            _use_environment_collation()
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command(name="resolve")
    def resolve_command(
        ctx: typer.Context,
        query: Annotated[str, typer.Argument(help="Building name, alias or unit number")],
    ) -> None:
        """Look up a building by name, alias or unit number."""
        directory = _get_context(ctx).loaded_directory()
        _print_outcome(directory.resolve(query))

    @app.command()
    def unit(
        ctx: typer.Context,
        number: Annotated[str, typer.Argument(help="Unit number, e.g. 120 or 120호")],
    ) -> None:
        """Find the building owning a unit number."""
        directory = _get_context(ctx).loaded_directory()
        parsed = parse_unit_number(number)
        if parsed is None:
            raise typer.BadParameter(
                "Enter a unit number such as 120 or 120호.", param_hint="NUMBER"
            )
        record = directory.resolve_unit(parsed)
        if isinstance(record, NotReady):
            _print_not_ready()
        elif record is None:
            rprint(f"[yellow]No building covers unit {parsed}.[/yellow]")
        else:
            _print_record(record, note=f"unit {parsed}")

    @app.command()
    def districts(ctx: typer.Context) -> None:
        """List districts."""
        directory = _get_context(ctx).loaded_directory()
        _print_names(directory.districts(), empty_message="No districts found.")

    @app.command(name="sub-districts")
    def sub_districts(
        ctx: typer.Context,
        district: Annotated[str, typer.Argument(help="District name")],
    ) -> None:
        """List sub-districts of a district."""
        directory = _get_context(ctx).loaded_directory()
        _print_names(
            directory.sub_districts(district),
            empty_message=f"No sub-districts found for {district}.",
        )

    @app.command()
    def buildings(
        ctx: typer.Context,
        district: Annotated[str, typer.Argument(help="District name")],
        sub_district: Annotated[str, typer.Argument(help="Sub-district name")],
    ) -> None:
        """List buildings of a sub-district."""
        directory = _get_context(ctx).loaded_directory()
        _print_names(
            directory.buildings(district, sub_district),
            empty_message=f"No buildings found for {district} / {sub_district}.",
        )

    @app.command()
    def show(
        ctx: typer.Context,
        district: Annotated[str, typer.Argument(help="District name")],
        sub_district: Annotated[str, typer.Argument(help="Sub-district name")],
        building: Annotated[str, typer.Argument(help="Building name")],
    ) -> None:
        """Show one building picked through the drill-down."""
        directory = _get_context(ctx).loaded_directory()
        record = directory.open_building(district, sub_district, building)
        if isinstance(record, NotReady):
            _print_not_ready()
        elif record is None:
            rprint("[yellow]Building not found. Try again.[/yellow]")
        else:
            _print_record(record)

    @app.command()
    def collisions(ctx: typer.Context) -> None:
        """List name/alias keys claimed by more than one building."""
        directory = _get_context(ctx).loaded_directory()
        found = directory.collisions()
        if isinstance(found, NotReady):
            _print_not_ready()
            return
        if not found:
            rprint("[green]✓ No colliding names or aliases.[/green]")
            return
        for collision in found:
            rprint(
                f"{escape(collision.key)}: {escape(collision.replaced.building_name)} "
                f"→ {escape(collision.winner.building_name)}"
            )
        rprint(f"[yellow]{len(found)} key(s) resolve to a later row only.[/yellow]")

    @app.command()
    def chat(ctx: typer.Context) -> None:
        """Interactive lookup. Type :refresh to reload data, :quit or an empty line to exit."""
        directory = _get_context(ctx).loaded_directory()
        while True:
            line = typer.prompt("building", default="", show_default=False)
            text = line.strip()
            if not text or text in _QUIT_COMMANDS:
                return
            if text in _REFRESH_COMMANDS:
                result = directory.refresh()
                if isinstance(result, LoadFailed):
                    rprint(f"[red]✗ Refresh failed:[/red] {escape(str(result.error))}")
                else:
                    rprint(f"[green]✓ Reloaded {result.record_count:,} rows[/green]")
                continue
            _print_outcome(directory.resolve(text))

    _ = (
        main,
        resolve_command,
        unit,
        districts,
        sub_districts,
        buildings,
        show,
        collisions,
        chat,
    )

    return app
