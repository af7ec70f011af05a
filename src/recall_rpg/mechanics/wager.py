"""Confidence wagers — stake gold before answering, pure calculations, no I/O.

A correct answer doubles the stake (the player gains the stake amount); a
wrong one forfeits it.
"""
from __future__ import annotations

from typing import Iterable

from recall_rpg.models.wager import WagerLevel, WagerResult, WagerSummary

WAGER_AMOUNTS: dict[WagerLevel, int] = {
    WagerLevel.NONE: 0,
    WagerLevel.LOW: 10,
    WagerLevel.HIGH: 25,
    WagerLevel.ALL_IN: 50,
}

WAGER_LABELS: dict[WagerLevel, str] = {
    WagerLevel.NONE: "None",
    WagerLevel.LOW: "Low (10g)",
    WagerLevel.HIGH: "High (25g)",
    WagerLevel.ALL_IN: "All-In (50g)",
}


def calculate_wager_result(wager: WagerLevel, is_correct: bool, player_gold: int | None = None) -> WagerResult:
    """Gold delta for one resolved wager.

    Args:
        wager: Stake level chosen before answering.
        is_correct: Whether the answer was Perfect or Correct.
        player_gold: Gold available to stake; the stake is capped at this.
            None means uncapped. Negative gold counts as zero.

    Returns:
        The wager result; ``gold_delta`` is +stake on a win, -stake on a loss.
    """
    amount = WAGER_AMOUNTS[wager]
    if player_gold is not None:
        amount = min(amount, max(0, player_gold))
    if amount == 0:
        return WagerResult(wager=wager, amount=0, is_correct=is_correct, gold_delta=0)
    delta = amount if is_correct else -amount
    return WagerResult(wager=wager, amount=amount, is_correct=is_correct, gold_delta=delta)


def summarize_wagers(results: Iterable[WagerResult]) -> WagerSummary:
    """Totals across an encounter. Zero-amount entries are ignored."""
    summary = WagerSummary()
    for r in results:
        if r.amount == 0:
            continue
        summary.wager_count += 1
        summary.total_wagered += r.amount
        if r.gold_delta > 0:
            summary.total_won += r.gold_delta
        else:
            summary.total_lost += abs(r.gold_delta)
    summary.net_gold = summary.total_won - summary.total_lost
    return summary
