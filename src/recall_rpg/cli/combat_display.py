"""Combat-specific display helpers — card-driven combat UI."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from recall_rpg.mechanics.ascension import ASCENSION_MODIFIERS
from recall_rpg.mechanics.wager import WAGER_LABELS
from recall_rpg.models.boss import BossPhase
from recall_rpg.models.combat import CombatAction, CombatEvent, CombatResult

if TYPE_CHECKING:
    from recall_rpg.engine.combat_session import CombatSession, TurnOutcome

console = Console()

_ACTION_STYLES = {
    CombatAction.PLAYER_CRITICAL: "bold yellow",
    CombatAction.PLAYER_ATTACK: "green",
    CombatAction.PLAYER_GLANCING: "dim green",
    CombatAction.ENEMY_ATTACK: "red",
    CombatAction.ENEMY_POISON: "magenta",
}


def hp_bar(current: int, maximum: int, width: int = 12) -> str:
    """Coloured block bar. Negative HP renders as empty."""
    pct = max(0.0, current / maximum) if maximum > 0 else 0.0
    filled = min(width, int(pct * width))
    if pct > 0.5:
        color = "green"
    elif pct > 0.25:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


class CombatDisplay:
    def __init__(self, console_: Console | None = None) -> None:
        self.console = console_ or console

    def show_combat_start(self, session: CombatSession) -> None:
        enemy = session.enemy
        is_boss = session.current_phase is not None
        label = "[bold magenta]BOSS FIGHT[/bold magenta]" if is_boss else "[bold red]COMBAT![/bold red]"
        body = f"{label}\n\n{enemy.name} ({enemy.tier.value}) blocks your path."
        if session.current_phase:
            body += f"\n[dim]{session.current_phase.description}[/dim]"
        self.console.print(Panel(body, border_style="magenta" if is_boss else "red", box=box.HEAVY))
        self.show_status(session)

    def show_status(self, session: CombatSession) -> None:
        """HP bars for both sides plus queue progress."""
        state = session.state
        content = Text.from_markup(
            f"  {state.enemy.name:<18} {hp_bar(state.enemy.hp, state.enemy.max_hp)} "
            f"{max(0, state.enemy.hp)}/{state.enemy.max_hp}\n"
            f"  [bold]You[/bold]{'':15} {hp_bar(state.player_hp, state.player_max_hp)} "
            f"{state.player_hp}/{state.player_max_hp}\n\n"
            f"  Card {min(state.current_card_index + 1, state.total_cards)}/{state.total_cards}"
            f"   SP {session.skill_points}   Timer {session.time_limit_seconds}s"
        )
        if state.poison_damage:
            content.append_text(Text.from_markup(f"   [magenta]Poisoned ({state.poison_damage})[/magenta]"))
        self.console.print(Panel(content, border_style="red", box=box.ROUNDED, width=48))

    def show_events(self, events: Iterable[CombatEvent]) -> None:
        for event in events:
            style = _ACTION_STYLES.get(event.action, "")
            self.console.print(f"  [{style}]{event.description}[/{style}]" if style else f"  {event.description}")

    def show_turn(self, session: CombatSession, outcome: TurnOutcome, events: Iterable[CombatEvent]) -> None:
        self.console.print(f"\n[bold]Answer:[/bold] {outcome.quality.value}")
        self.show_events(events)
        if outcome.absorbed:
            self.console.print("  [cyan]Your guard absorbs the blow.[/cyan]")
        if outcome.wager_result:
            wager = outcome.wager_result
            color = "yellow" if wager.gold_delta >= 0 else "red"
            self.console.print(
                f"  [{color}]Wager {WAGER_LABELS[wager.wager]}: {wager.gold_delta:+d} gold[/{color}]"
            )
        if outcome.requeued:
            self.console.print("  [dim]The card returns to the queue.[/dim]")
        if outcome.phase_transition and outcome.phase_transition.new_phase:
            self.show_phase(outcome.phase_transition.new_phase)
        self.show_status(session)

    def show_phase(self, phase: BossPhase) -> None:
        self.console.print(Panel(
            f"[bold magenta]{phase.name}[/bold magenta]\n{phase.description}",
            border_style="magenta", box=box.HEAVY,
        ))

    def show_message(self, message: str, ok: bool = True) -> None:
        self.console.print(f"  [cyan]{message}[/cyan]" if ok else f"  [dim]{message}[/dim]")

    def show_phase_table(self, enemy_name: str, phases: list[BossPhase]) -> None:
        table = Table(title=f"{enemy_name} — Boss Phases", box=box.SIMPLE)
        table.add_column("Phase", style="bold")
        table.add_column("HP below", justify="right")
        table.add_column("Damage", justify="right")
        table.add_column("XP", justify="right")
        table.add_column("Hints")
        table.add_column("Timer", justify="right")
        for phase in phases:
            table.add_row(
                phase.name,
                f"{phase.hp_threshold:.0%}",
                f"x{phase.damage_multiplier:g}",
                f"x{phase.xp_multiplier:g}",
                "off" if phase.hints_disabled else "on",
                f"-{phase.timer_reduction}s" if phase.timer_reduction else "",
            )
        self.console.print(table)

    def show_ascension_table(self, active_level: int = 0) -> None:
        """Every ascension modifier, with the ones active at ``active_level`` highlighted."""
        table = Table(title="Ascension Modifiers", box=box.SIMPLE)
        table.add_column("Level", justify="right")
        table.add_column("Modifier", style="bold")
        table.add_column("Effect")
        for level, (name, description) in sorted(ASCENSION_MODIFIERS.items()):
            style = "red" if level <= active_level else "dim"
            table.add_row(str(level), name, description, style=style)
        self.console.print(table)

    def show_combat_end(self, result: CombatResult) -> None:
        if result.victory:
            content = "[bold green]Victory![/bold green]\n"
            content += f"\nXP Gained: {result.xp_earned}"
            content += f"\nGold: {result.gold_earned:+d}"
            if result.loot:
                content += f"\nLoot: {result.loot.name}"
        else:
            content = "[bold red]Defeat...[/bold red]\n\nThe cards were too much for you."
            if result.wager_net:
                content += f"\n\n[dim]Wagers: {result.wager_net:+d} gold[/dim]"
        content += (
            f"\n\n[dim]{result.cards_reviewed} cards reviewed, {result.perfect_count} perfect, "
            f"{result.correct_count} correct, {result.player_hp_remaining} HP left[/dim]"
        )
        self.console.print(Panel(
            content, border_style="green" if result.victory else "red", box=box.HEAVY,
        ))
