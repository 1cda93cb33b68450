"""Command-line advisor: feed a spot in, get one recommended action out."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from .action import ActionCapabilities, ActionKind, Decision
from .collaborators import EquityFunction, constant_equity
from .config import Config
from .engine import DecisionEngine, EngineConfig
from .log import setup_logging
from .snapshot import ActingContext, GameSnapshot, Street, parse_card_strings

app = typer.Typer(help="Poker action advisor for Texas Hold'em")
console = Console()


def _load_config(path: Path | None, verbose: bool) -> Config:
    config = Config.load(path)
    setup_logging("DEBUG" if verbose else config.logging.level)
    return config


def _engine(config: Config, seed: int | None = None) -> DecisionEngine:
    cfg = config.engine
    if seed is not None:
        cfg = EngineConfig(aggression=cfg.aggression, vpip=cfg.vpip, pfr=cfg.pfr, seed=seed)
    return DecisionEngine(cfg)


def _equity_fn(equity: float | None) -> EquityFunction | None:
    return constant_equity(equity) if equity is not None else None


def _display_snapshot(snapshot: GameSnapshot) -> None:
    street = snapshot.street or Street.PREFLOP
    console.print(f"\n[bold]Hand:[/bold]     {' '.join(snapshot.hole_cards) or '-'}")
    console.print(f"[bold]Street:[/bold]   {street.value.capitalize()}")
    if snapshot.board_cards:
        console.print(f"[bold]Board:[/bold]    {' '.join(snapshot.board_cards)}")
    line = f"[bold]Pot:[/bold]      {snapshot.total_pot:g}"
    if snapshot.acting is not None:
        act = snapshot.acting
        line += f"  |  To call: {act.call_amount:g}  |  Stack: {act.stack:g}"
        console.print(line)
        console.print(f"[bold]Legal:[/bold]    {act.capabilities}")
    else:
        console.print(line)
    console.print()


def _display_decision(decision: Decision) -> None:
    """Display a recommendation with Rich formatting."""
    color = {
        ActionKind.FOLD: "red",
        ActionKind.CHECK: "yellow",
        ActionKind.CALL: "yellow",
        ActionKind.BET: "green",
        ActionKind.RAISE: "green",
        ActionKind.ALL_IN: "bold green",
    }.get(decision.action, "white")

    # Confidence bar
    filled = int(decision.confidence * 10)
    bar = "[green]" + "█" * filled + "[/green][dim]" + "░" * (10 - filled) + "[/dim]"

    body = f"[{color}]{decision}[/{color}]\n[dim]{decision.reason}[/dim]\n"
    if decision.hand_label:
        body += f"Hand: {decision.hand_label}\n"
    body += f"Equity: {decision.equity:.0%}  Confidence: {bar}"

    console.print(
        Panel(body, title="[bold magenta]Advice[/bold magenta]", expand=False)
    )


def _emit(snapshot: GameSnapshot, decision: Decision, as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(decision.to_dict()))
        return
    _display_snapshot(snapshot)
    _display_decision(decision)


@app.command()
def decide(
    hero: str = typer.Argument(..., help="Your hole cards (e.g., 'As Kh')"),
    board: str | None = typer.Option(None, "--board", "-b", help="Community cards"),
    equity: float | None = typer.Option(None, "--equity", "-e", help="Your equity (0-1)"),
    pot: float = typer.Option(0.0, "--pot", help="Total pot in chips"),
    to_call: float = typer.Option(0.0, "--to-call", help="Chips needed to call"),
    min_bet: float = typer.Option(0.0, "--min-bet", help="Minimum bet/raise size"),
    max_bet: float = typer.Option(0.0, "--max-bet", help="Maximum bet/raise size"),
    stack: float = typer.Option(100.0, "--stack", "-s", help="Chips you can still commit"),
    seats: int = typer.Option(2, "--seats", "-p", help="Players still in the hand"),
    big_blind: float = typer.Option(0.0, "--big-blind", help="Big blind (informational)"),
    legal: str = typer.Option(
        "check,bet,fold", "--legal", "-l", help="Legal actions (e.g. 'call,raise,fold')"
    ),
    not_my_turn: bool = typer.Option(False, "--not-my-turn", help="It is not your turn"),
    seed: int | None = typer.Option(None, "--seed", help="RNG seed for the raise draw"),
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    config_path: Path | None = typer.Option(None, "--config", help="Config file"),
):
    """Get a recommendation for a spot described on the command line."""
    try:
        config = _load_config(config_path, verbose)
        community = parse_card_strings(board)
        if len(community) not in (0, 3, 4, 5):
            raise ValueError(f"Invalid board: expected 0, 3, 4, or 5 cards, got {len(community)}")
        if seats < 1:
            raise ValueError(f"Seats must be at least 1, got {seats}")

        snapshot = GameSnapshot(
            is_hero_turn=not not_my_turn,
            acting=ActingContext(
                capabilities=ActionCapabilities.parse(legal),
                call_amount=to_call,
                min_bet=min_bet,
                max_bet=max_bet,
                stack=stack,
            ),
            hole_cards=parse_card_strings(hero),
            board_cards=community,
            total_pot=pot,
            big_blind=big_blind,
            active_seat_count=seats,
        )
        decision = _engine(config, seed).decide(snapshot, _equity_fn(equity))
        _emit(snapshot, decision, as_json)

    except (ValueError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def replay(
    path: Path = typer.Argument(..., help="JSON file holding a game snapshot"),
    equity: float | None = typer.Option(
        None, "--equity", "-e", help="Your equity (0-1), overrides the file"
    ),
    seed: int | None = typer.Option(None, "--seed", help="RNG seed for the raise draw"),
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    config_path: Path | None = typer.Option(None, "--config", help="Config file"),
):
    """Get a recommendation for a snapshot saved as JSON.

    Accepts snake_case keys or the camelCase names table readers emit
    (isHeroTurn, currentAct.optAction, ...). An optional top-level
    "equity" supplies the equity estimate.
    """
    try:
        config = _load_config(config_path, verbose)
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ValueError(f"Not valid JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {path}")

        snapshot = GameSnapshot.from_dict(data)
        if equity is None and data.get("equity") is not None:
            equity = float(data["equity"])
        decision = _engine(config, seed).decide(snapshot, _equity_fn(equity))
        _emit(snapshot, decision, as_json)

    except (ValueError, TypeError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
