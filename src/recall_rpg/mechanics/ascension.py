"""Ascension difficulty — cumulative combat modifiers per level, no I/O."""
from __future__ import annotations

import math

from recall_rpg.models.player import CombatSettings

MAX_ASCENSION = 10
MIN_TIMER_SECONDS = 10

ASCENSION_MODIFIERS: dict[int, tuple[str, str]] = {
    1: ("Hardened Foes", "Enemies have +15% HP"),
    2: ("Time Pressure", "Timer reduced by 5 seconds"),
    3: ("No Mercy", "Partial answers count as Wrong"),
    4: ("Brutal Strikes", "Enemies deal +20% damage"),
    5: ("Weakened Start", "Start combat at 80% HP"),
    6: ("Scarce Loot", "Loot drop rates halved"),
    7: ("No Hints", "Card hints are disabled"),
    8: ("Venomous", "Enemies apply 2 poison damage per turn"),
    9: ("Precision Required", "Must answer 2 consecutive correct to deal damage"),
    10: ("Nightmare", "All modifiers active, enemies have +50% HP"),
}


def default_combat_settings() -> CombatSettings:
    return CombatSettings()


def settings_for_ascension(level: int, base: CombatSettings | None = None) -> CombatSettings:
    """Apply every modifier up to ``level`` that touches a combat setting.

    Enemy HP/damage scaling and loot rates belong to enemy and loot
    generation, so only the settings the encounter itself reads change here.
    """
    settings = (base or default_combat_settings()).model_copy()
    level = min(max(level, 0), MAX_ASCENSION)
    if level >= 2:
        settings.timer_seconds = max(MIN_TIMER_SECONDS, settings.timer_seconds - 5)
    if level >= 3:
        settings.partial_credit_enabled = False
    if level >= 5:
        settings.starting_hp_percent = 80
    if level >= 7:
        settings.hints_enabled = False
    if level >= 8:
        settings.enemy_poison_damage = 2
    return settings


def starting_hp(base_hp: int, settings: CombatSettings) -> int:
    """Player HP at encounter start. A reduced start never drops below 1."""
    if settings.starting_hp_percent >= 100:
        return base_hp
    return max(1, math.floor(base_hp * (settings.starting_hp_percent / 100)))
