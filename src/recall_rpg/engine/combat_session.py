"""Combat session — the stateful controller for one encounter.

The session owns everything that changes between turns: the live combat
state, the card queue, per-card re-queue counts, active ability buffs and
cooldowns, skill points, wager bookkeeping, the current boss phase and a
single undo snapshot. Each public method handles one discrete player event;
there are no timers and no background work.
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from recall_rpg.engine import snapshots
from recall_rpg.engine.validators import validate_ability, validate_answer, validate_wager
from recall_rpg.mechanics.ascension import MIN_TIMER_SECONDS, starting_hp
from recall_rpg.mechanics.boss_phases import get_boss_phases, get_current_phase, has_phase_changed, is_boss_enemy
from recall_rpg.mechanics.class_abilities import (
    absorbs_damage,
    apply_ability_modifiers,
    can_use_ability,
    find_ability,
    heal_amount,
    tick_cooldowns,
    tick_effects,
)
from recall_rpg.mechanics.combat_math import coerce_tier, is_correct, is_failed
from recall_rpg.mechanics.rewards import get_combat_rewards
from recall_rpg.mechanics.special_effects import parse_equipment_effects
from recall_rpg.mechanics.turn_resolver import Rng, create_combat_state, is_combat_over, resolve_turn
from recall_rpg.mechanics.wager import calculate_wager_result, summarize_wagers
from recall_rpg.models.ability import AbilityEffectType, ActiveAbility, ActiveAbilityEffect, PlayerClass
from recall_rpg.models.boss import BossPhase, PhaseTransition
from recall_rpg.models.card import AnswerQuality, Card, ConfidenceLevel, EvolutionTier, RetrievalMode
from recall_rpg.models.combat import (
    CombatCardResult,
    CombatEvent,
    CombatOutcome,
    CombatResult,
    CombatRewards,
    CombatState,
    Enemy,
    EnemyTier,
)
from recall_rpg.models.item import Equipment
from recall_rpg.models.player import CombatSettings, EffectiveStats
from recall_rpg.models.wager import WagerLevel, WagerResult

logger = logging.getLogger(__name__)

TierLookup = Callable[[str], int]
LootSource = Callable[[EnemyTier], Optional[Equipment]]
PhaseLookup = Callable[[str], list[BossPhase]]
AnswerClassifier = Callable[[Card, str, float, int], AnswerQuality]

MAX_REQUEUES = 2


@dataclass
class TurnOutcome:
    """What one answer did, for the presentation layer."""
    quality: AnswerQuality
    event: CombatEvent
    state: CombatState
    outcome: CombatOutcome
    wager_result: Optional[WagerResult] = None
    requeued: bool = False
    absorbed: bool = False
    phase_transition: Optional[PhaseTransition] = None


class CombatSession:
    """Drives one player-vs-enemy encounter, one answered card at a time.

    ``stats`` are the player's effective stats with equipment bonuses already
    folded in; ``equipment`` is only read for its special-effect text.
    """

    def __init__(
        self,
        enemy: Enemy,
        cards: Iterable[Card],
        stats: EffectiveStats,
        *,
        equipment: Iterable[Equipment] = (),
        settings: CombatSettings | None = None,
        player_hp: int | None = None,
        player_class: PlayerClass = PlayerClass.WARRIOR,
        player_level: int = 1,
        skill_points: int = 0,
        player_gold: int = 0,
        streak_bonus_pct: float = 0,
        retrieval_mode: RetrievalMode = RetrievalMode.STANDARD,
        tier_lookup: TierLookup | None = None,
        phase_lookup: PhaseLookup = get_boss_phases,
        loot_source: LootSource | None = None,
        rng: Rng = random.random,
    ) -> None:
        self.enemy = enemy.model_copy()
        self.stats = stats
        self.settings = settings or CombatSettings()
        self.equipment_effects = parse_equipment_effects(equipment)
        self.player_class = player_class
        self.player_level = player_level
        self.player_gold = player_gold
        self.streak_bonus_pct = streak_bonus_pct
        self.retrieval_mode = retrieval_mode
        self.rng = rng
        self._tier_lookup = tier_lookup
        self._loot_source = loot_source

        self.queue: list[Card] = list(cards)
        self.requeue_counts: dict[str, int] = {}
        self.active_effects: list[ActiveAbilityEffect] = []
        self.active_abilities: list[ActiveAbility] = []
        self.skill_points = skill_points
        self.current_wager = WagerLevel.NONE
        self.wager_results: list[WagerResult] = []
        self.card_results: list[CombatCardResult] = []

        base_hp = player_hp if player_hp is not None else stats.max_hp
        self.state = create_combat_state(
            self.enemy, stats.max_hp, starting_hp(base_hp, self.settings), len(self.queue),
        )
        if self.settings.enemy_poison_damage > 0:
            self.state.poison_damage = self.settings.enemy_poison_damage

        self.boss_phases = self._load_phases(phase_lookup)
        self.current_phase: BossPhase | None = (
            get_current_phase(self.boss_phases, 1.0) if self.boss_phases else None
        )

        self._snapshot: snapshots.SessionSnapshot | None = None
        self._result: CombatResult | None = None
        logger.info(f"Encounter started: {self.enemy.name} ({self.enemy.tier.value}), {len(self.queue)} cards")

    # -- Queries --

    @property
    def finished(self) -> bool:
        return self._result is not None

    @property
    def current_card(self) -> Card | None:
        idx = self.state.current_card_index
        if idx < len(self.queue):
            return self.queue[idx]
        return None

    @property
    def is_over(self) -> bool:
        if self.finished or is_combat_over(self.state).over:
            return True
        return self.state.current_card_index >= len(self.queue)

    @property
    def can_undo(self) -> bool:
        return self._snapshot is not None and not self.finished

    @property
    def hints_available(self) -> bool:
        if not self.settings.hints_enabled:
            return False
        return not (self.current_phase and self.current_phase.hints_disabled)

    @property
    def time_limit_seconds(self) -> int:
        reduction = self.current_phase.timer_reduction if self.current_phase else 0
        if reduction == 0:
            return self.settings.timer_seconds
        return max(MIN_TIMER_SECONDS, self.settings.timer_seconds - reduction)

    @property
    def available_gold(self) -> int:
        return self.player_gold + sum(r.gold_delta for r in self.wager_results)

    # -- Pre-answer actions --

    def place_wager(self, level: WagerLevel) -> tuple[bool, str]:
        """Commit a stake for the next answer. ``none`` clears it."""
        ok, reason = validate_wager(self, level)
        if not ok:
            return False, reason
        self.current_wager = level
        return True, ""

    def use_ability(self, key: str) -> tuple[bool, str]:
        """Spend skill points on a class ability before the next answer."""
        ok, reason = validate_ability(self)
        if not ok:
            return False, reason
        ability = find_ability(self.player_class, key)
        if ability is None:
            return False, f"Unknown ability: {key}"
        ok, reason = can_use_ability(ability, self.player_level, self.skill_points, self.active_abilities)
        if not ok:
            return False, reason

        self.skill_points -= ability.sp_cost
        if ability.effect.type == AbilityEffectType.HEAL:
            amount = heal_amount(ability.effect, self.state.player_max_hp)
            healed = min(self.state.player_max_hp, self.state.player_hp + amount)
            self.state = self.state.model_copy(update={"player_hp": healed})
            message = f"{ability.name}! Healed {amount} HP"
        else:
            self.active_effects.append(ability.effect.model_copy())
            message = f"{ability.name} activated!"

        self.active_abilities = [a for a in self.active_abilities if a.ability.key != ability.key]
        self.active_abilities.append(ActiveAbility(ability=ability, remaining_cooldown=ability.cooldown_turns))
        logger.info(message)
        return True, message

    def add_effect(self, effect: ActiveAbilityEffect) -> None:
        """Accept a buff granted by an outside ability system."""
        self.active_effects.append(effect.model_copy())

    # -- Answers --

    def submit_response(
        self,
        response: str,
        elapsed_seconds: float,
        classifier: AnswerClassifier,
        confidence: ConfidenceLevel | None = None,
    ) -> TurnOutcome:
        """Grade a raw response with the supplied classifier, then resolve it."""
        card = self.current_card
        if card is None:
            raise ValueError("There are no cards left to answer.")
        quality = classifier(card, response, elapsed_seconds, self.time_limit_seconds)
        return self.submit_answer(quality, confidence)

    def submit_answer(self, quality: AnswerQuality, confidence: ConfidenceLevel | None = None) -> TurnOutcome:
        """Resolve one answered card and apply the session's bookkeeping."""
        ok, reason = validate_answer(self)
        if not ok:
            raise ValueError(reason)
        card = self.current_card
        previous = self.state
        self._snapshot = snapshots.capture(self)

        if quality == AnswerQuality.PARTIAL and not self.settings.partial_credit_enabled:
            quality = AnswerQuality.WRONG

        wager_result = self._resolve_wager(quality)
        self.card_results.append(CombatCardResult(card_id=card.id, quality=quality.value))

        attack, crit = apply_ability_modifiers(
            self.active_effects, quality, self.stats.attack, self.stats.crit_chance_pct,
        )
        absorbed = absorbs_damage(self.active_effects, quality)
        self.active_effects = tick_effects(self.active_effects)

        turn = resolve_turn(
            self._phase_scaled(previous),
            quality,
            attack,
            self.stats.defense,
            crit,
            self.rng,
            confidence,
            self._tier_for(card),
            self.retrieval_mode,
            self.equipment_effects,
        )
        new_state = turn.new_state
        new_state.enemy.attack = previous.enemy.attack

        if absorbed:
            new_state.player_hp = previous.player_hp
        if self.settings.enemy_poison_damage > 0:
            new_state.poison_damage = self.settings.enemy_poison_damage

        requeued = False
        if is_failed(quality):
            count = self.requeue_counts.get(card.id, 0)
            if count < MAX_REQUEUES:
                self.queue.append(card)
                self.requeue_counts[card.id] = count + 1
                new_state.total_cards = len(self.queue)
                requeued = True

        transition = self._check_phase(previous, new_state)
        self.active_abilities = tick_cooldowns(self.active_abilities)
        self.state = new_state

        logger.debug(
            f"Card {card.id}: {quality.value}, enemy {new_state.enemy.hp}/{new_state.enemy.max_hp}, "
            f"player {new_state.player_hp}/{new_state.player_max_hp}"
        )
        return TurnOutcome(
            quality=quality,
            event=turn.event,
            state=new_state,
            outcome=is_combat_over(new_state),
            wager_result=wager_result,
            requeued=requeued,
            absorbed=absorbed,
            phase_transition=transition,
        )

    def undo(self) -> tuple[bool, str]:
        """Roll back the last answer. Allowed once per answer."""
        if self.finished:
            return False, "The encounter has already ended."
        if self._snapshot is None:
            return False, "Nothing to undo."
        snapshots.restore(self, self._snapshot)
        self._snapshot = None
        logger.info("Answer undone")
        return True, "Answer undone"

    # -- Completion --

    def finish(self) -> CombatResult:
        """Close the encounter and compute its result. Safe to call twice."""
        if self._result is not None:
            return self._result

        victory = is_combat_over(self.state).victory
        loot: Equipment | None = None
        if victory:
            rewards = get_combat_rewards(
                self.state,
                self.enemy,
                self.streak_bonus_pct,
                self.stats.xp_bonus_pct,
                self.stats.gold_bonus_pct,
                self.equipment_effects,
            )
            if self.current_phase and self.current_phase.xp_multiplier != 1.0:
                rewards.xp = math.floor(rewards.xp * self.current_phase.xp_multiplier)
            loot = self._roll_loot()
        else:
            rewards = CombatRewards()

        wager_net = summarize_wagers(self.wager_results).net_gold
        self._result = CombatResult(
            victory=victory,
            xp_earned=rewards.xp,
            gold_earned=rewards.gold + wager_net,
            loot=loot,
            events=list(self.state.events),
            cards_reviewed=self.state.current_card_index,
            perfect_count=self.state.stats.perfect_count,
            correct_count=self.state.stats.correct_count,
            player_hp_remaining=self.state.player_hp,
            card_results=list(self.card_results),
            wager_net=wager_net,
        )
        self._snapshot = None
        logger.info(
            f"Encounter ended: {'victory' if victory else 'defeat'} vs {self.enemy.name}, "
            f"{rewards.xp} XP, {self._result.gold_earned} gold"
        )
        return self._result

    # -- Helpers --

    def _resolve_wager(self, quality: AnswerQuality) -> WagerResult | None:
        if self.current_wager == WagerLevel.NONE:
            return None
        result = calculate_wager_result(self.current_wager, is_correct(quality), self.available_gold)
        self.wager_results.append(result)
        self.current_wager = WagerLevel.NONE
        return result

    def _tier_for(self, card: Card) -> EvolutionTier:
        if self._tier_lookup is None:
            return EvolutionTier.BASE
        try:
            return coerce_tier(self._tier_lookup(card.id))
        except Exception as e:
            logger.warning(f"Evolution tier lookup failed for {card.id}: {e}")
            return EvolutionTier.BASE

    def _load_phases(self, phase_lookup: PhaseLookup) -> list[BossPhase] | None:
        if not is_boss_enemy(self.enemy.tier):
            return None
        try:
            return phase_lookup(self.enemy.name) or None
        except Exception as e:
            logger.warning(f"Boss phase lookup failed for {self.enemy.name}: {e}")
            return None

    def _phase_scaled(self, state: CombatState) -> CombatState:
        """The state the resolver sees: enemy attack scaled by the boss phase."""
        if not self.current_phase or self.current_phase.damage_multiplier == 1.0:
            return state
        scaled = math.floor(state.enemy.attack * self.current_phase.damage_multiplier)
        return state.model_copy(update={"enemy": state.enemy.model_copy(update={"attack": scaled})})

    def _check_phase(self, previous: CombatState, current: CombatState) -> PhaseTransition | None:
        if not self.boss_phases or self.enemy.max_hp <= 0:
            return None
        transition = has_phase_changed(
            self.boss_phases,
            previous.enemy.hp / self.enemy.max_hp,
            current.enemy.hp / self.enemy.max_hp,
        )
        if transition.changed and transition.new_phase:
            self.current_phase = transition.new_phase
            logger.info(f"{self.enemy.name} enters {transition.new_phase.name}")
        return transition

    def _roll_loot(self) -> Equipment | None:
        if self._loot_source is None:
            return None
        try:
            return self._loot_source(self.enemy.tier)
        except Exception as e:
            logger.warning(f"Loot roll failed for {self.enemy.name}: {e}")
            return None
