"""Budgeting mode: exactly one of target payout or maximum budget is active.

The calculator can recommend stakes in two ways:

* **Target payout** - size each stake so that, if that side wins, the
  payout reaches a fixed amount (``stake = target / odds``).
* **Maximum budget** - size the stakes so that both sides together fit a
  fixed spend, optionally equalising payouts across the two outcomes.

Settings forms carry both numbers side by side with "zero means inactive".
Inside the engine they are collapsed into a tagged variant so that the
ambiguous "both non-zero" state cannot be represented::

    mode = budget_mode_from_values(target_payout=2100, max_budget=0)
    isinstance(mode, TargetPayout)   # True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Union

#: Default target payout used when no settings have been saved.
DEFAULT_TARGET_PAYOUT: Final[float] = 2100.0


@dataclass(frozen=True)
class TargetPayout:
    """Recommend the stake that returns ``amount`` if that side wins."""

    amount: float = DEFAULT_TARGET_PAYOUT


@dataclass(frozen=True)
class MaxBudget:
    """Recommend stakes that spend at most ``amount`` across both sides."""

    amount: float


BudgetMode = Union[TargetPayout, MaxBudget]


def budget_mode_from_values(target_payout: float | None, max_budget: float | None) -> BudgetMode:
    """Collapse the two-field settings form into a :data:`BudgetMode`.

    A positive ``max_budget`` always wins; the target payout is then treated
    as inactive.  Otherwise the target payout is used, with ``None`` read as
    zero.

    Examples::

        budget_mode_from_values(2100, 0)    → TargetPayout(2100.0)
        budget_mode_from_values(2100, 500)  → MaxBudget(500.0)
        budget_mode_from_values(None, None) → TargetPayout(0.0)
    """
    if max_budget is not None and max_budget > 0:
        return MaxBudget(float(max_budget))
    return TargetPayout(float(target_payout or 0.0))


def budget_mode_values(mode: BudgetMode) -> tuple[float, float]:
    """Inverse of :func:`budget_mode_from_values`: ``(target_payout, max_budget)``."""
    if isinstance(mode, MaxBudget):
        return 0.0, mode.amount
    return mode.amount, 0.0
