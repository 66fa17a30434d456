"""CLI utilities for Eth RPG Arena."""
from pathlib import Path
from typing import Optional

import typer

from ethrpg.api.schemas import BattleResultOut, FighterSchema
from ethrpg.core.logging import setup_logging
from ethrpg.game.battle import simulate_battle
from ethrpg.game.constants import CLASS_NAMES, CharacterClass
from ethrpg.game.matchups import get_matchup_info
from ethrpg.game.models import CharacterSnapshot

app = typer.Typer(help="Eth RPG Arena CLI")


def _load_fighter(path: Path) -> CharacterSnapshot:
    try:
        return FighterSchema.model_validate_json(path.read_text(encoding="utf-8")).to_snapshot()
    except (OSError, ValueError) as e:
        raise typer.BadParameter(f"{path}: {e}") from e


@app.callback()
def main(log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL")):
    setup_logging(log_level)


@app.command()
def simulate(
    fighter1: Path = typer.Argument(..., help="JSON snapshot of fighter 1"),
    fighter2: Path = typer.Argument(..., help="JSON snapshot of fighter 2"),
    nonce: str = typer.Option("cli", help="Battle nonce; same nonce replays the same battle"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
):
    """Run one battle and print its log."""
    snapshots = (_load_fighter(fighter1), _load_fighter(fighter2))
    result = simulate_battle(snapshots[0], snapshots[1], nonce)

    if as_json:
        typer.echo(BattleResultOut.from_result(result).model_dump_json(indent=2, by_alias=True))
        return

    typer.echo(f"seed={result.battle_seed} nonce={result.nonce}")
    for action in result.turns:
        typer.echo(
            f"[{action.turn:02d}] {snapshots[action.actor_index].display_name}: {action.narrative} "
            f"(hp {action.actor_hp_after}/{action.target_hp_after})"
        )
    winner = snapshots[result.winner]
    typer.echo(
        f"Winner: {winner.display_name} with {result.winner_hp_remaining} HP "
        f"({result.winner_hp_percent}%) after {result.total_turns} turns"
    )


@app.command()
def sweep(
    fighter1: Path = typer.Argument(..., help="JSON snapshot of fighter 1"),
    fighter2: Path = typer.Argument(..., help="JSON snapshot of fighter 2"),
    count: int = typer.Option(100, min=1, help="Number of nonces to try"),
    prefix: str = typer.Option("sweep", help="Nonce prefix"),
):
    """Win counts over many nonces, for balance checks."""
    snapshots = (_load_fighter(fighter1), _load_fighter(fighter2))
    wins = [0, 0]
    total_turns = 0
    for i in range(count):
        result = simulate_battle(snapshots[0], snapshots[1], f"{prefix}-{i}")
        wins[result.winner] += 1
        total_turns += result.total_turns

    for index, snapshot in enumerate(snapshots):
        typer.echo(f"{snapshot.display_name} ({snapshot.class_id.value}): {wins[index]}/{count}")
    typer.echo(f"avg turns: {total_turns / count:.1f}")


@app.command()
def matchups():
    """Print strong/weak lists for every class."""
    for class_id in CharacterClass:
        info = get_matchup_info(class_id)
        strong = ", ".join(CLASS_NAMES[c] for c in info.strong_vs) or "-"
        weak = ", ".join(CLASS_NAMES[c] for c in info.weak_vs) or "-"
        typer.echo(f"{CLASS_NAMES[class_id]:<13} strong vs: {strong:<13} weak vs: {weak}")


if __name__ == "__main__":
    app()
