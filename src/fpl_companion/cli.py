"""
FPL Companion Command Line Interface.

Built with Typer; output rendered with Rich.
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .api import FPLAPIError, FPLClient
from .config import get_settings
from .data import (
    BootstrapSnapshot,
    Fixture,
    Player,
    Position,
    format_price,
    next_fixture_for_team,
    process_bootstrap_static,
    process_entry_picks,
    process_fixtures,
    process_manager,
    status_label,
    team_short_name,
)
from .predictions import (
    build_transfer_plan,
    differential_captains,
    predict_player_points,
    suggest_transfers,
    team_predicted_points,
    top_captain_picks,
)
from .squad import MutationResult, SquadRepository, SquadState, parse_formation

app = typer.Typer(
    name="fpl-companion",
    help="Fantasy Premier League Companion - predictions, transfers and AI advice",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()


def get_repository() -> SquadRepository:
    return SquadRepository(get_settings().squad.db_path)


def load_squad() -> SquadState:
    """The persisted squad, or an empty one."""
    return get_repository().load() or SquadState()


async def _fetch_game_data() -> tuple[BootstrapSnapshot, list[Fixture]]:
    async with FPLClient.from_settings(get_settings().fpl) as client:
        bootstrap = await client.get_bootstrap_static()
        fixtures = await client.get_fixtures()
    return process_bootstrap_static(bootstrap), process_fixtures(fixtures)


def fetch_game_data() -> tuple[BootstrapSnapshot, list[Fixture]]:
    """Fetch players, teams and fixtures with a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Fetching FPL data...", total=None)
        try:
            return asyncio.run(_fetch_game_data())
        except FPLAPIError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)


def upcoming_gameweek(snapshot: BootstrapSnapshot) -> int:
    """Next gameweek if flagged, else the current one, else 1."""
    gw = snapshot.next_gameweek or snapshot.current_gameweek
    return gw.id if gw else 1


def require_players(squad: SquadState) -> None:
    if not squad.players:
        console.print(
            "[yellow]No squad saved. Run 'fpl-companion load <manager_id>' "
            "or add players first.[/yellow]"
        )
        raise typer.Exit(1)


def report(result: MutationResult, success: str) -> None:
    """Print the outcome of a squad mutation; exit non-zero when rejected."""
    if result.ok:
        console.print(f"[green]{success}[/green]")
    else:
        console.print(f"[red]{result.reason}[/red]")
        raise typer.Exit(1)


def find_player(snapshot: BootstrapSnapshot, player_id: int) -> Player:
    player = snapshot.player_by_id().get(player_id)
    if player is None:
        console.print(f"[red]Unknown player ID: {player_id}[/red]")
        raise typer.Exit(1)
    return player


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    FPL Companion - your Fantasy Premier League squad companion.

    Load your team, see predictions, and get transfer ideas.
    """
    level = "DEBUG" if verbose else get_settings().app.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from .server import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.app.host,
        port=port or settings.app.port,
        log_level=settings.app.log_level.lower(),
    )


@app.command()
def load(
    manager_id: int | None = typer.Argument(None, help="FPL manager/team ID"),
) -> None:
    """
    Load a manager's current squad from FPL and save it.

    Falls back to FPL_MANAGER_ID when no ID is given.
    """
    settings = get_settings()
    manager_id = manager_id or settings.fpl.manager_id
    if not manager_id:
        console.print("[red]No manager ID given and FPL_MANAGER_ID is not set[/red]")
        raise typer.Exit(1)

    async def fetch():
        async with FPLClient.from_settings(settings.fpl) as client:
            return (
                await client.get_bootstrap_static(),
                await client.get_manager_team(manager_id),
            )

    try:
        bootstrap, team = asyncio.run(fetch())
    except FPLAPIError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    snapshot = process_bootstrap_static(bootstrap)
    squad = SquadState()
    squad.load_from_picks(
        process_manager(team["manager"]),
        process_entry_picks(team["picks"]),
        snapshot.players,
    )
    get_repository().save(squad)

    console.print(
        Panel(
            f"[bold]{squad.team_name}[/bold] ({squad.manager_name})\n"
            f"{len(squad.players)} players | Value {format_price(squad.team_value)} | "
            f"Bank {format_price(squad.bank)}",
            title=f"Loaded GW{team['currentEvent']}",
            style="green",
        )
    )


@app.command()
def squad() -> None:
    """Show the saved squad laid out by formation line."""
    state = load_squad()
    require_players(state)
    snapshot, _ = fetch_game_data()

    starters = parse_formation(state.formation)
    pitch = Table(title=f"{state.team_name or 'My Squad'} ({state.formation})", show_header=False)
    pitch.add_column("Line", style="cyan")
    pitch.add_column("Players", justify="center")

    bench: list[Player] = []
    for position in Position:
        line = [p for p in state.players if p.position == position]
        count = starters[position]
        pitch.add_row(position.name, "   ".join(_pitch_label(p, state, snapshot) for p in line[:count]))
        bench.extend(line[count:])

    pitch.add_section()
    pitch.add_row("BENCH", "   ".join(_pitch_label(p, state, snapshot) for p in bench))
    console.print(pitch)

    console.print(f"\n[cyan]Team value:[/cyan] {format_price(state.team_value)}")
    console.print(f"[cyan]Bank:[/cyan] {format_price(state.bank)}")
    console.print(
        f"[cyan]Remaining budget:[/cyan] "
        f"{format_price(state.remaining_budget(get_settings().squad.budget_ceiling))}"
    )
    if not state.is_complete:
        console.print(f"[yellow]Squad incomplete: {len(state.players)}/15 players[/yellow]")


def _pitch_label(player: Player, state: SquadState, snapshot: BootstrapSnapshot) -> str:
    tag = " (C)" if player.id == state.captain else " (V)" if player.id == state.vice_captain else ""
    team = team_short_name(snapshot.teams, player.team_id)
    style = "" if player.is_available else "[red]"
    close = "[/red]" if style else ""
    return f"{style}{player.web_name}{tag} [dim]{team}[/dim]{close}"


@app.command()
def predict() -> None:
    """Predicted points for each squad player's next fixture."""
    state = load_squad()
    require_players(state)
    snapshot, fixtures = fetch_game_data()
    gameweek = upcoming_gameweek(snapshot)

    def lookup(player: Player) -> Fixture | None:
        return next_fixture_for_team(fixtures, player.team_id, gameweek)

    table = Table(title=f"GW{gameweek} Predictions")
    table.add_column("Player", style="white")
    table.add_column("Pos", style="cyan")
    table.add_column("Fixture")
    table.add_column("Pts", justify="right", style="green")
    table.add_column("Confidence")
    table.add_column("Form", justify="right")
    table.add_column("FDR", justify="right")
    table.add_column("Mins", justify="right")

    for player in state.players:
        fixture = lookup(player)
        prediction = predict_player_points(player, fixture, snapshot.teams)
        if fixture:
            opponent = team_short_name(snapshot.teams, fixture.opponent_of(player.team_id))
            venue = "H" if fixture.is_home(player.team_id) else "A"
            fixture_label = f"{opponent} ({venue})"
        else:
            fixture_label = "-"
        table.add_row(
            player.web_name,
            player.position.name,
            fixture_label,
            str(prediction.predicted_points),
            prediction.confidence.value,
            f"{prediction.form:.1f}",
            f"{prediction.fixture_difficulty:.1f}",
            f"{prediction.minutes_certainty:.1f}",
        )

    console.print(table)
    total = team_predicted_points(state.players, lookup, snapshot.teams, state.captain)
    console.print(f"\n[bold]Predicted total:[/bold] {total} pts (captain doubled)")


@app.command()
def captains(
    limit: int = typer.Option(5, "--limit", "-n", help="Picks to show"),
) -> None:
    """Top captain picks from the squad and low-ownership differentials."""
    state = load_squad()
    require_players(state)
    snapshot, fixtures = fetch_game_data()
    gameweek = upcoming_gameweek(snapshot)

    def lookup(player: Player) -> Fixture | None:
        return next_fixture_for_team(fixtures, player.team_id, gameweek)

    names = snapshot.player_by_id()
    stored = {p.id: p for p in state.players}

    table = Table(title=f"GW{gameweek} Captain Picks")
    table.add_column("#", style="dim")
    table.add_column("Player")
    table.add_column("Pts", justify="right", style="green")
    table.add_column("Confidence")
    for rank, pick in enumerate(top_captain_picks(state.players, lookup, snapshot.teams, limit), 1):
        # Saved players may have left the game since the squad was stored
        player = names.get(pick.player_id, stored[pick.player_id])
        table.add_row(str(rank), player.web_name, str(pick.predicted_points), pick.confidence.value)
    console.print(table)

    available = [p for p in snapshot.players if p.is_available]
    diff_table = Table(title="Differential Captains (<=10% owned)")
    diff_table.add_column("Player")
    diff_table.add_column("Team", style="cyan")
    diff_table.add_column("Owned", justify="right")
    diff_table.add_column("Pts", justify="right", style="green")
    for pick in differential_captains(available, lookup, snapshot.teams, limit=limit):
        player = names[pick.prediction.player_id]
        diff_table.add_row(
            player.web_name,
            team_short_name(snapshot.teams, player.team_id),
            f"{pick.ownership:.1f}%",
            str(pick.prediction.predicted_points),
        )
    console.print(diff_table)


@app.command()
def transfers() -> None:
    """Suggested out/in transfers for the saved squad."""
    state = load_squad()
    require_players(state)
    snapshot, _ = fetch_game_data()

    suggestions = suggest_transfers(state.players, snapshot.players, state.bank)
    if not suggestions:
        console.print("[yellow]No transfers worth making right now.[/yellow]")
        return

    table = Table(title=f"Transfer Suggestions (bank {format_price(state.bank)})")
    table.add_column("Out", style="red")
    table.add_column("In", style="green")
    table.add_column("Pos", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Status")
    table.add_column("Gain", justify="right", style="bold")

    for s in suggestions:
        table.add_row(
            s.player_out.web_name,
            f"{s.player_in.web_name} ({team_short_name(snapshot.teams, s.player_in.team_id)})",
            s.player_in.position.name,
            format_price(s.player_in.price),
            status_label(s.player_in.status),
            f"{s.expected_gain:.1f}",
        )
    console.print(table)


@app.command()
def plan(
    horizon: int = typer.Option(3, "--horizon", min=1, max=10, help="Gameweeks to plan"),
    free_transfers: int = typer.Option(1, "--ft", min=0, help="Free transfers available"),
    risk: int = typer.Option(50, "--risk", min=0, max=100, help="Risk appetite 0-100"),
    allow_hits: bool = typer.Option(False, "--hits/--no-hits", help="Allow -4 hits"),
) -> None:
    """Fixture-driven transfer plan."""
    state = load_squad()
    snapshot, fixtures = fetch_game_data()
    current = snapshot.current_gameweek

    result = build_transfer_plan(
        snapshot.players,
        snapshot.teams,
        fixtures,
        current.id if current else 1,
        horizon=horizon,
        free_transfers=free_transfers,
        risk_appetite=risk,
        allow_hits=allow_hits,
        team_player_ids=[p.id for p in state.players],
    )

    console.print(
        Panel(
            result.strategy.strip(),
            title=f"Plan GW{result.current_gameweek}-GW{result.horizon_end}",
            style="blue",
        )
    )

    if result.transfers:
        names = snapshot.player_by_id()
        table = Table(title="Planned Transfers")
        table.add_column("GW", style="dim")
        table.add_column("Out", style="red")
        table.add_column("In", style="green")
        for move in result.transfers:
            out_player = names.get(move.player_out_id)
            table.add_row(
                str(move.gameweek),
                out_player.web_name if out_player else "-",
                names[move.player_in_id].web_name,
            )
        console.print(table)


@app.command()
def add(player_id: int = typer.Argument(..., help="FPL element ID")) -> None:
    """Add a player to the saved squad."""
    state = load_squad()
    snapshot, _ = fetch_game_data()
    player = find_player(snapshot, player_id)
    result = state.add_player(player)
    if result.ok:
        get_repository().save(state)
    report(result, f"Added {player.web_name} ({format_price(player.price)})")


@app.command()
def remove(player_id: int = typer.Argument(..., help="FPL element ID")) -> None:
    """Remove a player from the saved squad."""
    state = load_squad()
    result = state.remove_player(player_id)
    if result.ok:
        get_repository().save(state)
    report(result, f"Removed player {player_id}")


@app.command()
def captain(player_id: int = typer.Argument(..., help="FPL element ID")) -> None:
    """Set the captain."""
    state = load_squad()
    result = state.set_captain(player_id)
    if result.ok:
        get_repository().save(state)
    report(result, f"Captain set to {player_id}")


@app.command()
def vice(player_id: int = typer.Argument(..., help="FPL element ID")) -> None:
    """Set the vice-captain."""
    state = load_squad()
    result = state.set_vice_captain(player_id)
    if result.ok:
        get_repository().save(state)
    report(result, f"Vice-captain set to {player_id}")


@app.command()
def formation(value: str = typer.Argument(..., help="e.g. 4-4-2")) -> None:
    """Set the formation."""
    state = load_squad()
    result = state.set_formation(value)
    if result.ok:
        get_repository().save(state)
    report(result, f"Formation set to {value}")


@app.command()
def budget(amount: float = typer.Argument(..., help="Money in the bank, in millions")) -> None:
    """Set money in the bank."""
    state = load_squad()
    result = state.update_budget(round(amount * 10))
    if result.ok:
        get_repository().save(state)
    report(result, f"Bank set to {format_price(state.bank)}")


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Clear the saved squad."""
    if not yes and not typer.confirm("Delete the saved squad?"):
        raise typer.Exit()
    get_repository().clear()
    console.print("[green]Squad cleared[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]FPL Companion[/bold] v{__version__}")
    console.print("Fantasy Premier League predictions, transfers and AI advice")


if __name__ == "__main__":
    app()
