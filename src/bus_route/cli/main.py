"""
Bus Route Simulator command line.

``bus-route shell`` runs the interactive menu; the other commands answer a
single question about a route stored in a CSV file.
"""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import ConfigurationError, Environment, get_settings
from ..data import (
    RouteSession,
    distance_between,
    load_route,
    save_route,
    total_distance_time,
)
from .shell import RouteShell, route_table

console = Console()


def _load_or_exit(ctx, path: str) -> RouteSession:
    """Load ``path`` into a fresh session, exiting with status 1 on failure."""
    session = RouteSession()
    result = load_route(session, path)
    if not result.success:
        console.print(f"[red]Load failed:[/red] {escape(str(result.error))}", highlight=False)
        ctx.exit(1)
    if result.rows_skipped:
        console.print(f"[yellow]Skipped {result.rows_skipped} malformed rows[/yellow]")
    return session


@click.group()
@click.option('--env', type=click.Choice([e.value for e in Environment]),
              default=None, help='Configuration environment (development/testing/production)')
@click.pass_context
def cli(ctx, env):
    """Bus Route Simulator"""
    ctx.ensure_object(dict)
    try:
        ctx.obj['settings'] = get_settings(Environment(env) if env else None)
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        ctx.exit(2)


@cli.command()
@click.option('--file', 'route_file', type=click.Path(dir_okay=False),
              default=None, help='Load this route before showing the menu')
@click.option('--demo', is_flag=True, help='Start with the sample route')
@click.pass_context
def shell(ctx, route_file, demo):
    """Run the interactive route menu"""
    settings = ctx.obj['settings']
    session = RouteSession()

    if demo or settings.sample_on_start:
        session.populate_sample()
    if route_file:
        result = load_route(session, route_file)
        console.print(result.summary, highlight=False)

    console.print(Panel(
        f"{settings.app_name}\nType 12 in the menu to populate the sample route.",
        border_style="cyan",
    ))
    RouteShell(session=session, console=console, settings=settings).run()


@cli.command()
@click.argument('route_file', type=click.Path(dir_okay=False))
@click.pass_context
def view(ctx, route_file):
    """Show every stop of a saved route"""
    session = _load_or_exit(ctx, route_file)
    if session.route.is_empty:
        console.print("Route is empty.")
        return
    console.print(route_table(session.route, ctx.obj['settings'].display_precision))


@cli.command()
@click.argument('route_file', type=click.Path(dir_okay=False))
@click.pass_context
def totals(ctx, route_file):
    """Total distance and time of a saved route"""
    session = _load_or_exit(ctx, route_file)
    p = ctx.obj['settings'].display_precision
    result = total_distance_time(session.route)

    table = Table(title="Route totals", show_header=True, header_style="bold magenta")
    table.add_column("Stops", justify="right")
    table.add_column("Distance (km)", justify="right")
    table.add_column("Time (min)", justify="right")
    table.add_row(str(len(session.route)), f"{result.distance:.{p}f}", f"{result.time:.{p}f}")
    console.print(table)


@cli.command()
@click.argument('route_file', type=click.Path(dir_okay=False))
@click.argument('start')
@click.argument('end')
@click.pass_context
def between(ctx, route_file, start, end):
    """Forward distance and time from START to END"""
    session = _load_or_exit(ctx, route_file)
    p = ctx.obj['settings'].display_precision
    result = distance_between(session.route, start, end)
    if result is None:
        console.print("One or both stops not found or unreachable.")
        ctx.exit(1)
    console.print(
        f'Distance from "{start}" to "{end}": {result.distance:.{p}f} km\n'
        f"Time: {result.time:.{p}f} minutes",
        markup=False, highlight=False,
    )


@cli.command()
@click.argument('output', type=click.Path(dir_okay=False))
@click.pass_context
def demo(ctx, output):
    """Write the sample route to OUTPUT"""
    session = RouteSession()
    session.populate_sample()
    result = save_route(session.route, output)
    if not result.success:
        console.print(f"[red]Save failed:[/red] {escape(str(result.error))}", highlight=False)
        ctx.exit(1)
    console.print(f"[green]{escape(result.summary)}[/green]", highlight=False)


@cli.command()
@click.pass_context
def config(ctx):
    """View current configuration"""
    settings = ctx.obj['settings']
    table = Table(title="Current Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in sorted(settings.model_dump(mode="json").items()):
        table.add_row(key, str(value))
    console.print(table)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
