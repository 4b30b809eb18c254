"""Command-line interface for rodaje."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from . import context
from .classify import ProjectTab, filter_projects
from .config import RodajeConfig, discover_config
from .dates import parse_day, today_iso, to_iso
from .exceptions import RodajeError
from .grid import build_grid
from .logger import setup_logger
from .models import DateRange, PhaseSet, Project, TouchedFlags
from .overlap import check_against_store, find_overlaps
from .phases import apply_phases, derive_phases, validate_project
from .render import render_conflicts, render_legend, render_month, render_project_line
from .store import YamlProjectStore

app = typer.Typer(
    name="rodaje",
    help="Production phase planning: derive prep/fitting dates, spot clashes, show the month",
    add_completion=False,
)

FileArgument = Annotated[Path, typer.Argument(help="Path to the projects YAML file")]


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn library and config errors into an error line and exit code 1."""
    try:
        yield
    except (RodajeError, FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _load_config(file: Path | None = None) -> RodajeConfig:
    with _reported_errors():
        return discover_config(file)


def _parse_date_option(date_str: str | None) -> str | None:
    """Validate a YYYY-MM-DD option value, returning it in canonical form."""
    if date_str is None:
        return None
    with _reported_errors():
        return to_iso(parse_day(date_str))


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: rodaje_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for rodaje commands."""
    setup_logger(verbose)
    context.set_config_path(config)


@app.command()
def derive(  # noqa: PLR0913 - one option per editable phase bound
    primary_start: Annotated[str, typer.Argument(help="First shooting day (YYYY-MM-DD)")],
    primary_end: Annotated[str, typer.Argument(help="Last shooting day (YYYY-MM-DD)")],
    *,
    fitting_start: Annotated[
        str | None, typer.Option("--fitting-start", help="Keep this fitting start")
    ] = None,
    fitting_end: Annotated[
        str | None, typer.Option("--fitting-end", help="Keep this fitting end")
    ] = None,
    prep_start: Annotated[
        str | None, typer.Option("--prep-start", help="Keep this preparation start")
    ] = None,
    prep_end: Annotated[
        str | None, typer.Option("--prep-end", help="Keep this preparation end")
    ] = None,
) -> None:
    """Show the fitting and preparation dates for a shooting range.

    Giving a fitting or preparation date marks that phase as edited by hand.
    """
    start = _parse_date_option(primary_start)
    end = _parse_date_option(primary_end)
    current = PhaseSet(
        fitting=DateRange(_parse_date_option(fitting_start), _parse_date_option(fitting_end)),
        prep=DateRange(_parse_date_option(prep_start), _parse_date_option(prep_end)),
    )
    touched = TouchedFlags(fitting=not current.fitting.is_empty, prep=not current.prep.is_empty)
    config = _load_config()

    phases = derive_phases(start, end, current, touched, config.phases)

    typer.echo(f"Preparation: {phases.prep}")
    typer.echo(f"Fitting:     {phases.fitting}")
    typer.echo(f"Shooting:    {DateRange(start, end)}")


@app.command()
def validate(file: FileArgument = Path("projects.yaml")) -> None:
    """Check every project has a valid, correctly ordered set of dates."""
    store = YamlProjectStore(file)
    with _reported_errors():
        projects = store.list()

    problems = 0
    for project in projects:
        try:
            validate_project(project)
        except RodajeError as e:
            typer.echo(f"{project.id}: {e}", err=True)
            problems += 1

    if problems:
        typer.echo(f"{problems} of {len(projects)} project(s) invalid", err=True)
        raise typer.Exit(1)
    typer.echo(f"All {len(projects)} project(s) valid")


@app.command()
def check(
    file: FileArgument = Path("projects.yaml"),
    *,
    project_id: Annotated[
        str | None, typer.Option("--id", help="Only check this project (default: all)")
    ] = None,
) -> None:
    """Report same-phase overlaps between confirmed projects.

    Overlaps are warnings: the exit code stays 0 when some are found.
    """
    store = YamlProjectStore(file)
    with _reported_errors():
        projects = store.list()
        candidates = [store.get(project_id)] if project_id else projects
        for project in candidates:
            validate_project(project)

    for project in candidates:
        typer.echo(render_conflicts(project, find_overlaps(project, projects)), nl=False)


@app.command()
def month(
    file: FileArgument = Path("projects.yaml"),
    *,
    month: Annotated[
        str | None,
        typer.Option("--month", "-m", help="Month to show (YYYY-MM, default: this month)"),
    ] = None,
) -> None:
    """Print the month calendar with each day's projects and phases."""
    anchor = today_iso() if month is None else _parse_date_option(f"{month}-01")
    assert anchor is not None
    config = _load_config(file)
    store = YamlProjectStore(file)
    with _reported_errors():
        projects = store.list()

    grid = build_grid(anchor, projects, config.calendar)
    typer.echo(render_month(grid))
    typer.echo(render_legend(grid, projects), nl=False)


@app.command(name="list")
def list_projects(
    file: FileArgument = Path("projects.yaml"),
    *,
    tab: Annotated[ProjectTab, typer.Option("--tab", help="Which list to show")] = (
        ProjectTab.CURRENT
    ),
    today: Annotated[
        str | None, typer.Option("--today", help="Reference day (YYYY-MM-DD, default: today)")
    ] = None,
) -> None:
    """List projects that are current, upcoming, past, or pending confirmation."""
    reference = _parse_date_option(today) or today_iso()
    store = YamlProjectStore(file)
    with _reported_errors():
        projects = store.list()

    shown = filter_projects(projects, tab, reference)
    if not shown:
        typer.echo(f"No {tab.value} projects.")
        return
    for project in shown:
        typer.echo(render_project_line(project))


@app.command()
def add(  # noqa: PLR0913 - mirrors the project edit form
    file: FileArgument = Path("projects.yaml"),
    *,
    name: Annotated[str, typer.Option("--name", "-n", help="Project name")],
    start: Annotated[str, typer.Option("--start", help="First shooting day (YYYY-MM-DD)")],
    end: Annotated[str, typer.Option("--end", help="Last shooting day (YYYY-MM-DD)")],
    pending: Annotated[
        bool, typer.Option("--pending", help="Not confirmed yet (skips conflict checks)")
    ] = False,
    city: Annotated[str, typer.Option("--city", help="Shooting city")] = "",
    producer: Annotated[str, typer.Option("--producer", help="Production company")] = "",
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Save without asking when conflicts are found")
    ] = False,
) -> None:
    """Add a project, deriving its phases and warning about overlaps."""
    config = _load_config(file)
    store = YamlProjectStore(file)
    project = Project(
        id="",
        name=name.strip(),
        confirmed=not pending,
        primary_start=_parse_date_option(start),
        primary_end=_parse_date_option(end),
        city=city.strip(),
        producer=producer.strip(),
    )

    with _reported_errors():
        project = apply_phases(project, policy=config.phases)
        validate_project(project)
        conflicts = check_against_store(project, store)

    if conflicts:
        typer.echo(render_conflicts(project, conflicts), nl=False)
        if not yes and not typer.confirm("Save anyway?", default=False):
            typer.echo("Not saved.")
            raise typer.Exit(1)

    with _reported_errors():
        saved = store.create(project)
    typer.echo(f"Saved {saved.id}: {render_project_line(saved)}")


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
