"""Typer CLI application."""
from __future__ import annotations

from typing import List, Optional

import typer

app = typer.Typer(
    name="recall-rpg",
    help="Card-driven combat for a flashcard memory-training RPG",
    no_args_is_help=True,
)


def _parse_answers(raw: str):
    """Parse ``perfect,correct:guess,wrong`` into (quality, confidence) pairs."""
    from recall_rpg.models.card import AnswerQuality, ConfidenceLevel

    answers = []
    for token in raw.split(","):
        token = token.strip().lower()
        if not token:
            continue
        quality, _, confidence = token.partition(":")
        try:
            answers.append((
                AnswerQuality(quality),
                ConfidenceLevel(confidence) if confidence else None,
            ))
        except ValueError:
            raise typer.BadParameter(f"Unknown answer '{token}'", param_hint="--answers")
    if not answers:
        raise typer.BadParameter("At least one answer is required", param_hint="--answers")
    return answers


def _parse_abilities(raw: list[str], param_hint: str = "--ability") -> dict[int, str]:
    """Parse ``TURN:KEY`` entries (1-based turn numbers)."""
    abilities: dict[int, str] = {}
    for entry in raw:
        turn, _, key = entry.partition(":")
        if not turn.isdigit() or not key or int(turn) < 1:
            raise typer.BadParameter(f"Expected TURN:KEY, got '{entry}'", param_hint=param_hint)
        abilities[int(turn) - 1] = key.strip()
    return abilities


def _parse_wagers(raw: list[str]):
    """Parse ``TURN:LEVEL`` entries (1-based turns; low, high or all_in)."""
    from recall_rpg.models.wager import WagerLevel

    wagers = {}
    for turn, key in _parse_abilities(raw, "--wager").items():
        try:
            wagers[turn] = WagerLevel(key.lower())
        except ValueError:
            raise typer.BadParameter(f"Unknown wager level '{key}'", param_hint="--wager")
    return wagers


@app.command()
def simulate(
    answers: str = typer.Option(..., "--answers", "-a", help="Comma-separated answers, e.g. perfect,correct:guess,timeout"),
    enemy_name: str = typer.Option("Forgetful Wraith", "--enemy", "-e", help="Enemy name"),
    tier: str = typer.Option("common", "--tier", "-t", help="Enemy tier: minion, common, elite, boss"),
    hp: int = typer.Option(60, "--hp", help="Enemy HP"),
    attack: int = typer.Option(12, "--attack", help="Enemy attack"),
    xp: int = typer.Option(50, "--xp", help="Enemy base XP reward"),
    gold: int = typer.Option(20, "--gold", help="Enemy base gold reward"),
    player_class: Optional[str] = typer.Option(None, "--class", "-c", help="scholar, warrior or rogue"),
    level: Optional[int] = typer.Option(None, "--level", "-l", help="Player level"),
    ascension: Optional[int] = typer.Option(None, "--ascension", help="Ascension level 0-10"),
    ability: Optional[List[str]] = typer.Option(None, "--ability", help="Use an ability before a turn, as TURN:KEY"),
    wager: Optional[List[str]] = typer.Option(None, "--wager", "-w", help="Stake gold before a turn, as TURN:LEVEL"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for crit rolls"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Play a scripted encounter and show the result."""
    from recall_rpg.app import CombatApp, configure_logging
    from recall_rpg.models.ability import PlayerClass
    from recall_rpg.models.card import Card
    from recall_rpg.models.combat import Enemy, EnemyTier

    combat_app = CombatApp()
    configure_logging("DEBUG" if verbose else combat_app.log_level)

    script = _parse_answers(answers)
    scheduled = _parse_abilities(ability or [])
    stakes = _parse_wagers(wager or [])
    try:
        enemy_tier = EnemyTier(tier.lower())
        cls = PlayerClass(player_class.lower()) if player_class else None
    except ValueError as e:
        raise typer.BadParameter(str(e))

    enemy = Enemy(
        name=enemy_name, tier=enemy_tier, hp=hp, max_hp=hp,
        attack=attack, xp_reward=xp, gold_reward=gold,
    )
    cards = [Card(id=f"card-{i + 1}", front=f"Card {i + 1}") for i in range(len(script))]
    session = combat_app.build_session(
        enemy, cards, player_class=cls, level=level, ascension=ascension, seed=seed,
    )
    result = combat_app.run_scripted(session, script, scheduled, stakes)
    raise typer.Exit(code=0 if result.victory else 1)


@app.command("parse-effect")
def parse_effect(
    text: str = typer.Argument(..., help="Equipment special effect text"),
    item: str = typer.Option("Item", "--item", "-i", help="Item name"),
) -> None:
    """Show how an equipment effect string is understood."""
    from recall_rpg.cli.combat_display import console
    from recall_rpg.mechanics.special_effects import parse_special_effect

    parsed = parse_special_effect(text, item)
    console.print(f"[bold]{parsed.type.value}[/bold] value={parsed.value} item={parsed.item_name}")


@app.command()
def phases(
    enemy_name: str = typer.Argument(..., help="Boss name"),
) -> None:
    """List the phases a boss fights through."""
    from recall_rpg.cli.combat_display import CombatDisplay
    from recall_rpg.mechanics.boss_phases import get_boss_phases

    CombatDisplay().show_phase_table(enemy_name, get_boss_phases(enemy_name))


@app.command()
def ascension(
    level: Optional[int] = typer.Option(None, "--level", "-l", help="Highlight modifiers active at this level"),
) -> None:
    """List the ascension difficulty modifiers."""
    from recall_rpg.app import CombatApp
    from recall_rpg.cli.combat_display import CombatDisplay

    if level is None:
        level = CombatApp().combat_cfg.get("ascension_level", 0)
    CombatDisplay().show_ascension_table(level)


if __name__ == "__main__":
    app()
